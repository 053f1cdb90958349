"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted through a plain key-value
interface with string values, the same contract as browser local storage.
This allows us to:
1. Use a JSON file on disk for the running app
2. Use in-memory storage for testing
3. Swap in another backend without touching the view-model

The interface is intentionally tiny. Everything ledger-specific
(serialization, snapshot key) lives in LedgerRepository.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for string key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever was there.

        Args:
            key: Storage key
            value: String value to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing a missing key is not an error.

        Args:
            key: Storage key
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptRecordError(StorageError):
    """Stored data exists but cannot be decoded."""
    pass
