"""Tests for the file-backed todo store."""

import json

import pytest

from todoview.adapters.file_store import FileTodoStore
from todoview.errors import StorageError


@pytest.fixture
def store(tmp_path):
    return FileTodoStore(tmp_path / "data", "user_added_todos")


class TestFileTodoStore:
    def test_path_uses_slot_name(self, store, tmp_path):
        assert store.path == tmp_path / "data" / "user_added_todos.json"

    def test_missing_file_reads_empty(self, store):
        assert store.load() == []

    def test_save_then_load(self, store):
        records = [{"id": 1, "todo": "Buy milk", "completed": False, "createdAt": "2025-06-15"}]
        store.save(records)

        assert store.load() == records
        assert json.loads(store.path.read_text()) == records

    def test_save_overwrites(self, store):
        store.save([{"id": 1}])
        store.save([{"id": 2}])
        assert store.load() == [{"id": 2}]

    def test_corrupt_json_reads_empty(self, store, caplog):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[{broken")

        assert store.load() == []
        assert "Error loading todos" in caplog.text

    def test_invalid_utf8_reads_empty(self, store, caplog):
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b'[{"id": 1, "todo": "caf\xe9"}]')

        assert store.load() == []
        assert "Error loading todos" in caplog.text

    def test_accented_text_round_trips(self, store):
        records = [{"id": 1, "todo": "Café crème", "completed": False, "createdAt": "2025-06-15"}]
        store.save(records)

        assert store.load() == records

    def test_non_array_reads_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{"id": 1}')

        assert store.load() == []

    def test_non_object_entries_dropped(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text('[{"id": 1}, 42, "x"]')

        assert store.load() == [{"id": 1}]

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        store = FileTodoStore(blocker / "data")

        with pytest.raises(StorageError):
            store.save([])

    def test_expands_user_path(self):
        store = FileTodoStore("~/todos")
        assert "~" not in str(store.data_dir)
