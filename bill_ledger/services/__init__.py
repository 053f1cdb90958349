"""Services package."""

from bill_ledger.services.storage import (
    DEFAULT_STORAGE_KEY,
    CorruptRecordError,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    LedgerRepository,
    StorageError,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "CorruptRecordError",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "LedgerRepository",
    "StorageError",
]
