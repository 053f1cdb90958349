"""
Storage Services Package

Provides the key-value storage interface, local backends, and the
repository that keeps the ledger snapshot under one key.
"""

from bill_ledger.services.storage.interface import (
    CorruptRecordError,
    KeyValueStorageInterface,
    StorageError,
)
from bill_ledger.services.storage.local_storage import (
    InMemoryStorage,
    JsonFileStorage,
)
from bill_ledger.services.storage.repository import (
    DEFAULT_STORAGE_KEY,
    LedgerRepository,
    deserialize_bills,
    serialize_bills,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptRecordError",
    "StorageError",
    # Local backends
    "InMemoryStorage",
    "JsonFileStorage",
    # Ledger snapshot
    "DEFAULT_STORAGE_KEY",
    "LedgerRepository",
    "deserialize_bills",
    "serialize_bills",
]
