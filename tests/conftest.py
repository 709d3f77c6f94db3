"""Pytest configuration and shared fixtures for DebtPlan tests.

Provides debt factories and helpers for comparing currency amounts computed
with floats.
"""

from __future__ import annotations

from datetime import date

import pytest

from debtplan.services.debts import DebtInput


@pytest.fixture
def today() -> date:
    """Fixed reference date so payoff dates are deterministic."""
    return date(2024, 1, 31)


@pytest.fixture
def debt_factory():
    """Factory for DebtInput values with sensible defaults."""

    def _factory(name: str = "Card", principal: float = 1000.0, annual_rate: float = 0.18, **kwargs):
        return DebtInput(name=name, principal=principal, annual_rate=annual_rate, **kwargs)

    return _factory


@pytest.fixture
def sample_debts(debt_factory):
    """Three debts whose snowball and avalanche orders differ."""
    return [
        debt_factory(name="A", principal=5000.0, annual_rate=0.10),
        debt_factory(name="B", principal=1000.0, annual_rate=0.20),
        debt_factory(name="C", principal=3000.0, annual_rate=0.05),
    ]


@pytest.fixture
def app_env(tmp_path, monkeypatch):
    """Point configuration at a temporary data directory."""
    monkeypatch.setenv("DEBTPLAN_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DEBTPLAN_DEV_MODE", "false")
    monkeypatch.delenv("DEBTPLAN_MAX_PERIODS", raising=False)
    monkeypatch.delenv("DEBTPLAN_DEFAULT_STRATEGY", raising=False)
    return tmp_path


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
