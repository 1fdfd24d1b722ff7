"""Tests for the JSON file and SQL document stores."""
import json

import pytest

from surveydesk.core.errors import StorageError
from surveydesk.core.storage import JsonFileStore, SqlDocumentStore, empty_document


SAMPLE = {
    "users": [],
    "surveys": [{"id": "s1", "title": "T", "active": True, "questions": []}],
    "responses": [],
}


class TestJsonFileStore:
    def test_creates_empty_document(self, tmp_path):
        path = tmp_path / "nested" / "data.json"

        store = JsonFileStore(str(path))

        assert path.exists()
        assert store.load() == empty_document()

    def test_save_then_load(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "data.json"))

        store.save(SAMPLE)

        assert store.load() == SAMPLE
        assert json.loads((tmp_path / "data.json").read_text())["surveys"][0]["id"] == "s1"

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "data.json"))
        store.save(SAMPLE)
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_load_returns_private_copy(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "data.json"))
        document = store.load()
        document["surveys"].append({"id": "x"})
        assert store.load()["surveys"] == []

    def test_missing_collections_are_filled_in(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"surveys": []}))

        assert JsonFileStore(str(path)).load() == empty_document()

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json")

        with pytest.raises(StorageError):
            JsonFileStore(str(path)).load()

    @pytest.mark.parametrize("content", ["[]", "\"text\"", "42"])
    def test_non_object_json_raises_storage_error(self, tmp_path, content):
        path = tmp_path / "data.json"
        path.write_text(content)

        with pytest.raises(StorageError, match="expected a JSON object"):
            JsonFileStore(str(path)).load()

    def test_failed_save_keeps_previous_document(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "data.json"))
        store.save(SAMPLE)

        with pytest.raises(StorageError):
            store.save({"users": [object()], "surveys": [], "responses": []})

        assert store.load() == SAMPLE
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestSqlDocumentStore:
    @pytest.fixture
    def store(self, tmp_path):
        return SqlDocumentStore(f"sqlite:///{tmp_path / 'db' / 'surveydesk.db'}")

    def test_empty_until_saved(self, store):
        assert store.load() == empty_document()

    def test_save_then_load(self, store):
        store.save(SAMPLE)
        assert store.load() == SAMPLE

    def test_save_replaces_document(self, store):
        store.save(SAMPLE)
        store.save(empty_document())
        assert store.load() == empty_document()

    def test_load_returns_private_copy(self, store):
        store.save(SAMPLE)
        document = store.load()
        document["surveys"].clear()
        assert store.load() == SAMPLE
