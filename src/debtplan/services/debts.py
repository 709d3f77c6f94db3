"""Debt payoff strategies (snowball and avalanche).

The simulator assumes the whole monthly budget goes to one debt at a time,
in strategy order, until that debt is retired. Minimum payments on the
debts waiting their turn are not modelled.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Union

from ..logging_config import get_logger
from .amortization import REJECTION_MESSAGES, PayoffRejected, RejectionReason, solve_payoff
from .dates import add_months

logger = get_logger(__name__)

PLAN_NOTE = (
    "This assumes you focus this monthly debt budget on one debt at a time in the chosen order."
)


class PayoffStrategy(str, Enum):
    """Supported debt ordering strategies."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"


@dataclass(slots=True)
class DebtInput:
    """Represents a debt fed into payoff projections."""

    name: str
    principal: float
    annual_rate: float  # decimal fraction, 0.18 for 18% APR
    minimum_payment: float = 0.0


@dataclass(frozen=True, slots=True)
class StrategyRow:
    """One debt's slot in the payoff waterfall."""

    debt: DebtInput
    months_to_payoff: int
    cumulative_months_at_payoff: int
    payment_used: float
    payoff_date: date
    total_paid: float
    total_interest: float


@dataclass(frozen=True, slots=True)
class StrategyPlan:
    rows: list[StrategyRow]
    message: str = PLAN_NOTE

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class StrategyRejected:
    reason: RejectionReason
    message: str

    @property
    def ok(self) -> bool:
        return False


StrategyOutcome = Union[StrategyPlan, StrategyRejected]


def order_debts(debts: Iterable[DebtInput], strategy: PayoffStrategy | str) -> list[DebtInput]:
    """Return debts in attack order; ties keep their input order."""

    strategy = PayoffStrategy(strategy)
    if strategy is PayoffStrategy.SNOWBALL:
        # Sort debts by balance, ascending.
        return sorted(debts, key=lambda d: d.principal)
    # Sort debts by APR, descending.
    return sorted(debts, key=lambda d: d.annual_rate, reverse=True)


def _rejected(reason: RejectionReason, message: str | None = None) -> StrategyRejected:
    logger.debug("Strategy rejected: %s", reason.value)
    return StrategyRejected(reason=reason, message=message or REJECTION_MESSAGES[reason])


def simulate_strategy(
    debts: Iterable[DebtInput],
    strategy: PayoffStrategy | str,
    monthly_budget: float,
    *,
    today: date | None = None,
) -> StrategyOutcome:
    """Retire ``debts`` one after another with the full ``monthly_budget``.

    The first debt the budget cannot amortize rejects the whole plan.
    """

    if not monthly_budget > 0:
        return _rejected(RejectionReason.INVALID_BUDGET)

    try:
        strategy = PayoffStrategy(strategy)
    except ValueError:
        return _rejected(RejectionReason.INVALID_STRATEGY)

    debts = list(debts)
    if not debts:
        return _rejected(RejectionReason.NO_DEBTS)

    start = today or date.today()
    rows: list[StrategyRow] = []
    cumulative_months = 0

    for debt in order_debts(debts, strategy):
        if debt.principal <= 0:
            continue

        result = solve_payoff(debt.principal, debt.annual_rate, monthly_budget)
        if isinstance(result, PayoffRejected):
            return _rejected(
                RejectionReason.DEBT_UNPAYABLE,
                f'For debt "{debt.name}", {result.message}',
            )

        cumulative_months += result.months
        rows.append(
            StrategyRow(
                debt=debt,
                months_to_payoff=result.months,
                cumulative_months_at_payoff=cumulative_months,
                payment_used=monthly_budget,
                payoff_date=add_months(start, cumulative_months),
                total_paid=result.total_paid,
                total_interest=result.total_interest,
            )
        )

    return StrategyPlan(rows=rows)


def snowball_plan(
    *, debts: Iterable[DebtInput], monthly_budget: float, today: date | None = None
) -> StrategyOutcome:
    """Return payoff plan prioritizing smallest balances first."""
    return simulate_strategy(debts, PayoffStrategy.SNOWBALL, monthly_budget, today=today)


def avalanche_plan(
    *, debts: Iterable[DebtInput], monthly_budget: float, today: date | None = None
) -> StrategyOutcome:
    """Return payoff plan prioritizing highest APR first."""
    return simulate_strategy(debts, PayoffStrategy.AVALANCHE, monthly_budget, today=today)


def plan_summary(plan: StrategyPlan) -> tuple[date | None, float, int]:
    """Return (payoff_date, total_interest, months) for a whole plan."""

    if not plan.rows:
        return None, 0.0, 0
    last = plan.rows[-1]
    total_interest = sum(row.total_interest for row in plan.rows)
    return last.payoff_date, total_interest, last.cumulative_months_at_payoff


__all__ = [
    "DebtInput",
    "PLAN_NOTE",
    "PayoffStrategy",
    "StrategyOutcome",
    "StrategyPlan",
    "StrategyRejected",
    "StrategyRow",
    "avalanche_plan",
    "order_debts",
    "plan_summary",
    "simulate_strategy",
    "snowball_plan",
]
