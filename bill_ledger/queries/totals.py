"""
Ledger Totals

Pure functions over a list of bills. Nothing here is cached: totals
are recomputed from the current ledger every time they are asked for.

Amounts are summed as floats in ledger order and only rounded when
formatted, so a total always matches what adding up the stored
numbers gives.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from bill_ledger.models.bill import Bill


_CENTS = Decimal("0.01")


def format_amount(value: float) -> str:
    """
    Format an amount with exactly two decimal digits.

    Rounds half away from zero on the exact binary value of the float,
    so 1.005 (stored as 1.00499999...) gives "1.00" and 0.125 gives "0.13".
    """
    return format(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def sum_amounts(bills: Iterable[Bill]) -> float:
    """Sum of bill amounts, 0.0 for no bills."""
    total = 0.0
    for bill in bills:
        total += bill.amount
    return total


def total_for_user(bills: Iterable[Bill], user_id: int) -> str:
    """Formatted total of all bills recorded for `user_id`."""
    return format_amount(sum_amounts(bills_for_user(bills, user_id)))


def grand_total(bills: Iterable[Bill]) -> str:
    """Formatted total of every bill in the ledger."""
    return format_amount(sum_amounts(bills))


def bills_for_user(bills: Iterable[Bill], user_id: int) -> list[Bill]:
    """Bills recorded for `user_id`, in ledger order."""
    return [b for b in bills if b.user_id == user_id]
