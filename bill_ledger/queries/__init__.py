"""Ledger totals package."""

from bill_ledger.queries.totals import (
    bills_for_user,
    format_amount,
    grand_total,
    sum_amounts,
    total_for_user,
)

__all__ = [
    "bills_for_user",
    "format_amount",
    "grand_total",
    "sum_amounts",
    "total_for_user",
]
