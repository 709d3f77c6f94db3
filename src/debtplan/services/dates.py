"""Calendar helpers shared by the payoff services."""

from __future__ import annotations

import calendar
from datetime import date


def add_months(start: date, months: int) -> date:
    """Return ``start`` advanced by ``months`` calendar months.

    The day of month is kept when the target month has it, otherwise it is
    clamped to the target month's last day (Jan 31 + 1 month -> Feb 28/29).
    """

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


__all__ = ["add_months"]
