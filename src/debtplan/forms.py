"""Debt form definitions and validation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List

from .services.debts import DebtInput, PayoffStrategy

StrategyChoices = Dict[str, str]


DEFAULT_STRATEGIES: StrategyChoices = {
    PayoffStrategy.AVALANCHE.value: "Avalanche · prioritize highest APR first",
    PayoffStrategy.SNOWBALL.value: "Snowball · knock out the smallest balance",
}


@dataclass(slots=True)
class DebtForm:
    """Represents debt inputs as typed by a user and their validation errors.

    ``apr`` is entered in percent (18 for 18%) and converted to a decimal
    fraction by :meth:`to_debt`.
    """

    name: str = ""
    principal: Decimal | str | None = None
    apr: Decimal | str | None = None
    minimum_payment: Decimal | str | None = "0"
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)
    format_error: str | None = field(default=None, init=False)

    @classmethod
    def from_text(cls, text: str) -> "DebtForm":
        """Build a form from ``name:principal:apr[:minimum]`` shorthand."""

        parts = [part.strip() for part in text.split(":")]
        form = cls(name=parts[0] if parts else "")
        if len(parts) > 1:
            form.principal = parts[1]
        if len(parts) > 2:
            form.apr = parts[2]
        if len(parts) > 3:
            form.minimum_payment = parts[3]
        if len(parts) > 4:
            form.format_error = "Use name:principal:apr or name:principal:apr:minimum."
        return form

    def validate(self) -> bool:
        """Validate debt inputs returning True when all values are acceptable."""

        self.errors.clear()
        if self.format_error:
            self.errors.setdefault("name", []).append(self.format_error)

        if not self.name or not self.name.strip():
            self.errors.setdefault("name", []).append("Enter the creditor or account name.")
        else:
            self.name = self.name.strip()

        self.principal = self._parse_amount("principal", self.principal, minimum=Decimal("0"))
        self.apr = self._parse_amount("apr", self.apr, minimum=Decimal("0"))
        self.minimum_payment = self._parse_amount(
            "minimum_payment", self.minimum_payment, minimum=Decimal("0")
        )

        if isinstance(self.apr, Decimal) and self.apr > Decimal("100"):
            self.errors.setdefault("apr", []).append("APR must be between 0 and 100 percent.")

        return not self.errors

    def to_debt(self) -> DebtInput:
        """Return the validated inputs as a :class:`DebtInput`."""

        if self.errors or not isinstance(self.principal, Decimal) or not isinstance(self.apr, Decimal):
            raise ValueError("Form must validate before conversion.")
        minimum = self.minimum_payment if isinstance(self.minimum_payment, Decimal) else Decimal("0")
        return DebtInput(
            name=self.name,
            principal=float(self.principal),
            annual_rate=float(self.apr / Decimal("100")),
            minimum_payment=float(minimum),
        )

    def _parse_amount(
        self,
        field: str,
        value: Decimal | str | None,
        *,
        minimum: Decimal,
    ) -> Decimal | None:
        """Parse and validate numeric input, storing errors when parsing fails."""

        if value is None or value == "":
            self.errors.setdefault(field, []).append("This field is required.")
            return None

        if not isinstance(value, Decimal):
            try:
                value = Decimal(str(value))
            except (InvalidOperation, TypeError, ValueError):
                self.errors.setdefault(field, []).append("Enter a valid number.")
                return None

        if not value.is_finite():
            self.errors.setdefault(field, []).append("Enter a valid number.")
            return None

        if value < minimum:
            message = (
                "Amount must be greater than zero."
                if minimum > 0
                else "Amount must be at least zero."
            )
            self.errors.setdefault(field, []).append(message)
        return value

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages
