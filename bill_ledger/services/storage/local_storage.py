"""
Local Key-Value Storage Implementations

DESIGN DECISION: The persisted ledger lives on the user's machine,
never on a server. Two backends are provided:

- JsonFileStorage: a single JSON object file mapping keys to string
  values. Used by the running app.
- InMemoryStorage: a dict. Used by tests and when no file is wanted.

TRADEOFFS:
- The whole file is rewritten on every write (fine for a handful of keys)
- No locking (the app is single-user and single-threaded)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from bill_ledger.services.storage.interface import (
    CorruptRecordError,
    KeyValueStorageInterface,
    StorageError,
)


class InMemoryStorage(KeyValueStorageInterface):
    """Dict-backed storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStorage(KeyValueStorageInterface):
    """
    File-backed storage.

    The file holds one JSON object whose values are all strings.
    A missing file reads as an empty store. Writes go to a temporary
    file in the same directory which then replaces the original, so a
    crash mid-write never leaves a half-written file behind.

    Reads of a corrupt file raise CorruptRecordError. Writes replace it.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corrupt_path(self) -> Path:
        """Where an unreadable file is moved before the next write."""
        return self._path.with_name(self._path.name + ".corrupt")

    def _read_all(self) -> dict[str, str]:
        """Load the whole file."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            raise CorruptRecordError(f"Storage file {self._path} is not valid JSON: {e}")
        except OSError as e:
            raise StorageError(f"Could not read storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise CorruptRecordError(
                f"Storage file {self._path} must hold a JSON object, "
                f"got {type(data).__name__}"
            )
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        """Replace the whole file with `items`."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Could not write storage file {self._path}: {e}")

    def _read_for_write(self) -> dict[str, str]:
        """
        Load the file before changing it.

        A corrupt file is moved aside to `<name>.corrupt` and writing
        starts from an empty store, the way local storage overwrites a
        bad value.
        """
        try:
            return self._read_all()
        except CorruptRecordError:
            try:
                os.replace(self._path, self.corrupt_path)
            except OSError as e:
                raise StorageError(f"Could not move aside corrupt file {self._path}: {e}")
            return {}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_write()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_for_write()
        if key in items:
            del items[key]
            self._write_all(items)
