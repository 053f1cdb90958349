"""Configuration package."""

from bill_ledger.config.settings import (
    DEFAULT_USERS,
    LedgerSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_USERS",
    "LedgerSettings",
    "get_settings",
]
