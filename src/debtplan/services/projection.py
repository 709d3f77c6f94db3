"""Month-by-month balance trajectories for charting a single debt."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_MAX_PERIODS = 600
DEFAULT_PAYMENT_FRACTION = 0.03


@dataclass(slots=True)
class BalanceSeries:
    """Parallel period labels and balances ("M0", "M1", ...)."""

    labels: list[str] = field(default_factory=list)
    balances: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.balances)

    def points(self) -> list[tuple[str, float]]:
        return list(zip(self.labels, self.balances))


def _normalize_currency(amount: float) -> float:
    """Round to cents using half-up friendly rounding."""

    return round(amount + 1e-9, 2)


def default_chart_payment(principal: float, minimum_payment: float = 0.0) -> float:
    """Payment to pre-fill a balance chart with.

    Uses the debt's minimum payment when it has one, otherwise 3% of the
    principal.
    """

    if minimum_payment and minimum_payment > 0:
        return minimum_payment
    return principal * DEFAULT_PAYMENT_FRACTION


def project_balances(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    max_periods: int = DEFAULT_MAX_PERIODS,
) -> BalanceSeries:
    """Simulate the running balance under a fixed monthly payment.

    Each point is recorded before that month's interest and payment are
    applied, and a terminal point is appended once the balance reaches zero
    or ``max_periods`` is hit. Payments that never cover interest are
    therefore truncated at the horizon rather than rejected.
    """

    if not all(math.isfinite(v) for v in (principal, annual_rate, monthly_payment)):
        return BalanceSeries()
    if principal <= 0 or monthly_payment <= 0:
        return BalanceSeries()

    rate = annual_rate / 12
    series = BalanceSeries()
    month = 0
    balance = principal

    while balance > 0 and month < max_periods:
        series.labels.append(f"M{month}")
        series.balances.append(_normalize_currency(balance))

        interest = balance * rate
        balance = max(balance + interest - monthly_payment, 0.0)
        month += 1

    series.labels.append(f"M{month}")
    series.balances.append(_normalize_currency(balance))
    return series


__all__ = [
    "BalanceSeries",
    "DEFAULT_MAX_PERIODS",
    "default_chart_payment",
    "project_balances",
]
