"""CSV export helpers for payoff plans and balance projections."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

from .debts import StrategyPlan
from .projection import BalanceSeries


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_strategy_csv(*, plan: StrategyPlan, output_path: Path) -> Path:
    """Write a payoff plan to CSV at `output_path`, one row per debt in attack order.

    Returns the path written.
    """

    headers = [
        "order",
        "name",
        "principal",
        "annual_rate",
        "payment_used",
        "months_to_payoff",
        "cumulative_months",
        "payoff_date",
        "total_interest",
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for index, row in enumerate(plan.rows, start=1):
            writer.writerow(
                {
                    "order": index,
                    "name": _serialize_value(row.debt.name),
                    "principal": _serialize_value(row.debt.principal),
                    "annual_rate": _serialize_value(row.debt.annual_rate),
                    "payment_used": _serialize_value(row.payment_used),
                    "months_to_payoff": row.months_to_payoff,
                    "cumulative_months": row.cumulative_months_at_payoff,
                    "payoff_date": _serialize_value(row.payoff_date),
                    "total_interest": _serialize_value(round(row.total_interest, 2)),
                }
            )

    return output_path


def export_balance_series_csv(*, series: BalanceSeries, output_path: Path) -> Path:
    """Write a balance projection as (period, balance) rows."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["period", "balance"])
        for label, balance in series.points():
            writer.writerow([label, _serialize_value(balance)])
    return output_path


__all__ = ["export_balance_series_csv", "export_strategy_csv"]
