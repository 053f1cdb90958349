"""
Ledger Snapshot Repository

Reads and writes the whole ledger under a single storage key.

DESIGN DECISION: Every save writes the full snapshot, never an
incremental append. The stored value is a JSON array of bill objects:

    [{"id": 1734255000125, "userId": 2, "userName": "Babar",
      "amount": 250.5, "date": "2024-12-15T09:30:00.125Z"}, ...]

Keeping this exact shape means snapshots written by earlier versions
of the widget load unchanged.
"""

import json
from typing import Sequence

from pydantic import ValidationError as PydanticValidationError

from bill_ledger.models.bill import Bill
from bill_ledger.services.storage.interface import (
    CorruptRecordError,
    KeyValueStorageInterface,
)


DEFAULT_STORAGE_KEY = "billRecords"


def serialize_bills(bills: Sequence[Bill]) -> str:
    """Encode bills as the compact JSON array stored under the ledger key."""
    return json.dumps(
        [bill.to_record() for bill in bills],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def deserialize_bills(raw: str) -> tuple[list[Bill], list[tuple[int, str]]]:
    """
    Decode a stored snapshot.

    Returns:
        (bills, skipped) where skipped lists (index, reason) for every
        record that is not a valid bill. Valid records keep their order.

    Raises:
        CorruptRecordError: If the value is not a JSON array
    """
    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptRecordError(f"Ledger snapshot is not valid JSON: {e}")

    if not isinstance(records, list):
        raise CorruptRecordError(
            f"Ledger snapshot must be a JSON array, got {type(records).__name__}"
        )

    bills: list[Bill] = []
    skipped: list[tuple[int, str]] = []
    for index, record in enumerate(records):
        try:
            bills.append(Bill.model_validate(record))
        except PydanticValidationError as e:
            skipped.append((index, str(e)))
    return bills, skipped


class LedgerRepository:
    """
    Persists the ledger as one snapshot in a key-value store.

    The repository holds no ledger state of its own. The caller passes
    the complete list on every save.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
    ):
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> tuple[list[Bill], list[tuple[int, str]]]:
        """
        Load the stored ledger.

        An absent or empty value is an empty ledger.

        Returns:
            (bills, skipped) as for deserialize_bills

        Raises:
            CorruptRecordError: If the stored value cannot be decoded
            StorageError: If the backend cannot be read
        """
        raw = self._storage.get_item(self._key)
        if not raw:
            return [], []
        return deserialize_bills(raw)

    def save(self, bills: Sequence[Bill]) -> None:
        """
        Overwrite the stored ledger with `bills`.

        Raises:
            StorageError: If the write fails
        """
        self._storage.set_item(self._key, serialize_bills(bills))
