"""Closed-form payoff calculator for a single debt."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union

from ..logging_config import get_logger
from .dates import add_months

logger = get_logger(__name__)


class RejectionReason(str, Enum):
    """Why a payoff calculation or strategy could not produce a result."""

    NON_POSITIVE_INPUT = "non_positive_input"
    PAYMENT_BELOW_INTEREST = "payment_below_interest"
    PAYMENT_TOO_LOW = "payment_too_low"
    COMPUTATION_FAILED = "computation_failed"
    INVALID_BUDGET = "invalid_budget"
    INVALID_STRATEGY = "invalid_strategy"
    NO_DEBTS = "no_debts"
    DEBT_UNPAYABLE = "debt_unpayable"


REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.NON_POSITIVE_INPUT: "Principal and monthly payment must be greater than zero.",
    RejectionReason.PAYMENT_BELOW_INTEREST: (
        "Monthly payment is too low. It does not even cover the interest. "
        "Increase the payment to pay this off."
    ),
    RejectionReason.PAYMENT_TOO_LOW: (
        "Payment is too low to ever pay off this debt. Increase your monthly payment."
    ),
    RejectionReason.COMPUTATION_FAILED: (
        "Could not compute a valid payoff. Try adjusting the payment or interest rate."
    ),
    RejectionReason.INVALID_BUDGET: "Enter a monthly budget greater than zero.",
    RejectionReason.INVALID_STRATEGY: "Choose a payoff strategy: snowball or avalanche.",
    RejectionReason.NO_DEBTS: "Add at least one debt first.",
    RejectionReason.DEBT_UNPAYABLE: "The monthly budget cannot pay off every debt.",
}

ESTIMATE_NOTE = (
    "This is an approximate payoff timeline assuming a fixed payment and interest rate."
)


@dataclass(frozen=True, slots=True)
class PayoffOk:
    """Successful payoff: whole months needed and money paid over that span."""

    months: int
    total_paid: float
    total_interest: float

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class PayoffRejected:
    """Payoff that cannot be computed for the given inputs."""

    reason: RejectionReason
    message: str

    @property
    def ok(self) -> bool:
        return False


PayoffResult = Union[PayoffOk, PayoffRejected]


@dataclass(frozen=True, slots=True)
class PayoffEstimate:
    """Payoff result paired with a calendar date for display."""

    result: PayoffResult
    payoff_date: date | None
    message: str


def _reject(reason: RejectionReason, message: str | None = None) -> PayoffRejected:
    text = message or REJECTION_MESSAGES[reason]
    logger.debug("Payoff rejected: %s", reason.value)
    return PayoffRejected(reason=reason, message=text)


def solve_payoff(principal: float, annual_rate: float, monthly_payment: float) -> PayoffResult:
    """Return how many months a fixed payment needs to retire ``principal``.

    ``annual_rate`` is a decimal fraction (0.18 for 18% APR) compounded
    monthly. Inputs that can never amortize are returned as
    :class:`PayoffRejected`; this function does not raise for numeric input.
    """

    if not all(math.isfinite(v) for v in (principal, annual_rate, monthly_payment)):
        return _reject(
            RejectionReason.NON_POSITIVE_INPUT,
            "Principal, interest rate and monthly payment must be finite numbers.",
        )
    if principal <= 0 or monthly_payment <= 0:
        return _reject(RejectionReason.NON_POSITIVE_INPUT)
    if annual_rate < 0:
        return _reject(RejectionReason.NON_POSITIVE_INPUT, "Interest rate cannot be negative.")

    if annual_rate == 0:
        months_exact = principal / monthly_payment
        if not math.isfinite(months_exact):
            return _reject(RejectionReason.COMPUTATION_FAILED)
        months = math.ceil(months_exact)
        if months < 1:
            return _reject(RejectionReason.COMPUTATION_FAILED)
        # Last installment only covers what is left of the balance.
        total_paid = monthly_payment * (months - 1) + (principal - monthly_payment * (months - 1))
        total_interest = total_paid - principal
        return PayoffOk(months=months, total_paid=total_paid, total_interest=total_interest)

    r = annual_rate / 12
    interest_portion = r * principal
    if monthly_payment <= interest_portion:
        return _reject(RejectionReason.PAYMENT_BELOW_INTEREST)

    # Kept separate from the interest check: guards the logarithm argument.
    denominator = monthly_payment - r * principal
    if denominator <= 0:
        return _reject(RejectionReason.PAYMENT_TOO_LOW)

    growth = math.log(1 + r)
    if growth <= 0:
        return _reject(RejectionReason.COMPUTATION_FAILED)

    n = math.log(monthly_payment / denominator) / growth
    if not math.isfinite(n) or n <= 0:
        return _reject(RejectionReason.COMPUTATION_FAILED)

    months = math.ceil(n)
    total_paid = monthly_payment * months
    total_interest = total_paid - principal
    if not (math.isfinite(total_paid) and math.isfinite(total_interest)):
        return _reject(RejectionReason.COMPUTATION_FAILED)
    return PayoffOk(months=months, total_paid=total_paid, total_interest=total_interest)


def estimate_payoff(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    *,
    today: date | None = None,
) -> PayoffEstimate:
    """Solve a payoff and project the calendar date the balance reaches zero."""

    result = solve_payoff(principal, annual_rate, monthly_payment)
    if isinstance(result, PayoffRejected):
        return PayoffEstimate(result=result, payoff_date=None, message=result.message)

    start = today or date.today()
    return PayoffEstimate(
        result=result,
        payoff_date=add_months(start, result.months),
        message=ESTIMATE_NOTE,
    )


__all__ = [
    "ESTIMATE_NOTE",
    "PayoffEstimate",
    "PayoffOk",
    "PayoffRejected",
    "PayoffResult",
    "REJECTION_MESSAGES",
    "RejectionReason",
    "estimate_payoff",
    "solve_payoff",
]
