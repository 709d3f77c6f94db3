"""DebtPlan debt payoff and amortization package."""

from __future__ import annotations

from .services.amortization import PayoffOk, PayoffRejected, RejectionReason, solve_payoff
from .services.debts import DebtInput, PayoffStrategy, StrategyRow, simulate_strategy
from .services.projection import BalanceSeries, project_balances

__all__ = [
    "BalanceSeries",
    "DebtInput",
    "PayoffOk",
    "PayoffRejected",
    "PayoffStrategy",
    "RejectionReason",
    "StrategyRow",
    "project_balances",
    "simulate_strategy",
    "solve_payoff",
]
