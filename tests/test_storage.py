"""
Tests for storage backends and the ledger snapshot repository.
"""

import json

import pytest

from bill_ledger.models.bill import Bill
from bill_ledger.services.storage import (
    DEFAULT_STORAGE_KEY,
    CorruptRecordError,
    InMemoryStorage,
    JsonFileStorage,
    LedgerRepository,
    StorageError,
    deserialize_bills,
    serialize_bills,
)


def make_bill(bill_id: int, user_id: int = 1, user_name: str = "Zohaib",
              amount: float = 100.0) -> Bill:
    return Bill(
        id=bill_id,
        user_id=user_id,
        user_name=user_name,
        amount=amount,
        date="2024-12-15T09:30:00.000Z",
    )


class TestInMemoryStorage:
    """Tests for the dict-backed store."""

    def test_missing_key_is_none(self):
        """Test reading a key that was never set."""
        assert InMemoryStorage().get_item("billRecords") is None

    def test_set_and_get(self):
        """Test that a value can be read back."""
        storage = InMemoryStorage()
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

    def test_set_overwrites(self):
        """Test that set_item replaces the previous value."""
        storage = InMemoryStorage({"k": "old"})
        storage.set_item("k", "new")
        assert storage.get_item("k") == "new"
        assert len(storage) == 1

    def test_remove_missing_key_is_noop(self):
        """Test removing a key that does not exist."""
        storage = InMemoryStorage()
        storage.remove_item("nothing")
        assert len(storage) == 0


class TestJsonFileStorage:
    """Tests for the file-backed store."""

    def test_missing_file_reads_empty(self, tmp_path):
        """Test that a missing file is an empty store."""
        storage = JsonFileStorage(tmp_path / "store.json")
        assert storage.get_item("billRecords") is None

    def test_set_creates_file_and_parent(self, tmp_path):
        """Test that the first write creates the directory and file."""
        path = tmp_path / "nested" / "store.json"
        storage = JsonFileStorage(path)
        storage.set_item("billRecords", "[]")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"billRecords": "[]"}

    def test_values_survive_new_instance(self, tmp_path):
        """Test that data persists across storage objects."""
        path = tmp_path / "store.json"
        JsonFileStorage(path).set_item("a", "1")
        JsonFileStorage(path).set_item("b", "2")

        storage = JsonFileStorage(path)
        assert storage.get_item("a") == "1"
        assert storage.get_item("b") == "2"

    def test_remove_item(self, tmp_path):
        """Test that a removed key is gone."""
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        storage.remove_item("a")
        assert storage.get_item("a") is None

    def test_no_temp_files_left_behind(self, tmp_path):
        """Test that writes replace the file atomically."""
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        storage.set_item("a", "2")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file_raises(self, tmp_path):
        """Test that an unreadable file is reported."""
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptRecordError):
            JsonFileStorage(path).get_item("a")

    def test_non_object_file_raises(self, tmp_path):
        """Test that the file must hold a JSON object."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CorruptRecordError):
            JsonFileStorage(path).get_item("a")

    def test_write_replaces_corrupt_file(self, tmp_path):
        """Test that a write recovers from an unreadable file."""
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        storage = JsonFileStorage(path)

        storage.set_item("billRecords", "[]")

        assert storage.get_item("billRecords") == "[]"
        assert storage.corrupt_path.read_text(encoding="utf-8") == "{broken"

    def test_remove_on_corrupt_file(self, tmp_path):
        """Test that remove_item also recovers from an unreadable file."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        storage = JsonFileStorage(path)

        storage.remove_item("a")

        assert storage.get_item("a") is None
        assert storage.corrupt_path.exists()

    def test_corrupt_record_is_storage_error(self):
        """Test the exception hierarchy."""
        assert issubclass(CorruptRecordError, StorageError)


class TestSnapshotFormat:
    """Tests for the persisted JSON array."""

    def test_serialize_uses_stored_field_names(self):
        """Test the exact stored shape."""
        raw = serialize_bills([make_bill(1, user_id=2, user_name="Babar", amount=250.5)])
        assert json.loads(raw) == [{
            "id": 1,
            "userId": 2,
            "userName": "Babar",
            "amount": 250.5,
            "date": "2024-12-15T09:30:00.000Z",
        }]

    def test_round_trip_preserves_order_and_fields(self):
        """Test that save then load gives an equal ledger."""
        bills = [
            make_bill(3, user_id=3, user_name="Mustafa", amount=12.34),
            make_bill(1, user_id=1, amount=100.0),
            make_bill(2, user_id=2, user_name="Babar", amount=0.1),
        ]
        loaded, skipped = deserialize_bills(serialize_bills(bills))
        assert loaded == bills
        assert skipped == []

    def test_reads_snapshot_written_by_browser(self):
        """Test that integer amounts and camelCase names load."""
        raw = (
            '[{"id":1734255000125,"userId":1,"userName":"Zohaib",'
            '"amount":100,"date":"2024-12-15T09:30:00.125Z"}]'
        )
        loaded, _ = deserialize_bills(raw)
        assert loaded[0].id == 1734255000125
        assert loaded[0].amount == 100.0

    def test_invalid_records_are_skipped(self):
        """Test that bad records are dropped and reported by index."""
        raw = json.dumps([
            make_bill(1).to_record(),
            {"id": 2, "userName": "no user id", "amount": 1, "date": "2024-12-15T09:30:00.000Z"},
            make_bill(3).to_record(),
        ])
        loaded, skipped = deserialize_bills(raw)
        assert [b.id for b in loaded] == [1, 3]
        assert [index for index, _ in skipped] == [1]

    def test_non_array_is_corrupt(self):
        """Test that the snapshot must be a JSON array."""
        with pytest.raises(CorruptRecordError):
            deserialize_bills('{"id": 1}')

    def test_invalid_json_is_corrupt(self):
        """Test that garbage is reported."""
        with pytest.raises(CorruptRecordError):
            deserialize_bills("not json")


class TestLedgerRepository:
    """Tests for LedgerRepository."""

    def test_default_key(self):
        """Test the storage key used by the widget."""
        assert LedgerRepository(InMemoryStorage()).key == DEFAULT_STORAGE_KEY == "billRecords"

    def test_absent_value_is_empty(self):
        """Test loading when nothing was ever saved."""
        assert LedgerRepository(InMemoryStorage()).load() == ([], [])

    def test_empty_string_is_empty(self):
        """Test that an empty stored value is treated as absent."""
        storage = InMemoryStorage({"billRecords": ""})
        assert LedgerRepository(storage).load() == ([], [])

    def test_save_overwrites_whole_snapshot(self):
        """Test that every save replaces the stored value."""
        storage = InMemoryStorage()
        repo = LedgerRepository(storage)

        repo.save([make_bill(1), make_bill(2)])
        repo.save([make_bill(2)])

        assert [r["id"] for r in json.loads(storage.get_item("billRecords"))] == [2]

    def test_custom_key(self):
        """Test that the repository only touches its own key."""
        storage = InMemoryStorage({"other": "keep"})
        LedgerRepository(storage, key="mine").save([make_bill(1)])
        assert storage.get_item("other") == "keep"
        assert storage.get_item("billRecords") is None
        assert storage.get_item("mine") is not None

    def test_round_trip_through_file(self, tmp_path):
        """Test a full save and load through the file backend."""
        bills = [make_bill(1), make_bill(2, user_id=2, user_name="Babar", amount=50.0)]
        LedgerRepository(JsonFileStorage(tmp_path / "s.json")).save(bills)

        loaded, skipped = LedgerRepository(JsonFileStorage(tmp_path / "s.json")).load()
        assert loaded == bills
        assert skipped == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
