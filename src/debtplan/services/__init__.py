"""Service module exports."""

from . import amortization, dates, debts, export_csv, projection

__all__ = [
    "amortization",
    "dates",
    "debts",
    "export_csv",
    "projection",
]
