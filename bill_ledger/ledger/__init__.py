"""Bill ledger view-model package."""

from bill_ledger.ledger.view_model import (
    INVALID_AMOUNT_MESSAGE,
    SELECT_USER_MESSAGE,
    BillLedgerViewModel,
    ValidationError,
    create_view_model,
    parse_amount,
)

__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "SELECT_USER_MESSAGE",
    "BillLedgerViewModel",
    "ValidationError",
    "create_view_model",
    "parse_amount",
]
