"""
Unit tests for the history store.

Tests:
- Put/get/remove/clear
- Key uniqueness and insertion order
- File persistence and recovery from a bad file
"""

import json
import pytest

from services.history_store import HistoryStore


class TestInMemory:
    """Tests for a store without a backing file."""

    def test_put_get(self):
        store = HistoryStore()
        store.put("a", "[]")
        assert store.get("a") == "[]"
        assert "a" in store
        assert len(store) == 1

    def test_missing_key(self):
        with pytest.raises(KeyError):
            HistoryStore().get("nope")

    def test_remove(self):
        store = HistoryStore()
        store.put("a", "[]")
        assert store.remove("a") is True
        assert store.remove("a") is False
        assert len(store) == 0

    def test_clear(self):
        store = HistoryStore()
        store.put("a", "1")
        store.put("b", "2")
        store.clear()
        assert store.keys() == []

    def test_keys_in_insertion_order(self):
        store = HistoryStore()
        for key in ["z", "a", "m"]:
            store.put(key, key)
        assert store.keys() == ["z", "a", "m"]

    def test_overwrite_keeps_position(self):
        store = HistoryStore()
        store.put("a", "1")
        store.put("b", "2")
        store.put("a", "3")
        assert store.keys() == ["a", "b"]
        assert store.get("a") == "3"

    def test_make_key_unique(self):
        store = HistoryStore()
        keys = []
        for _ in range(5):
            key = store.make_key()
            store.put(key, "[]")
            keys.append(key)
        assert len(set(keys)) == 5

    def test_no_path(self):
        assert HistoryStore().path is None


class TestFilePersistence:
    """Tests for a store backed by a JSON file."""

    def test_survives_reload(self, history_path):
        store = HistoryStore(history_path)
        store.put("first", "[1]")
        store.put("second", "[2]")

        reloaded = HistoryStore(history_path)
        assert reloaded.keys() == ["first", "second"]
        assert reloaded.get("second") == "[2]"

    def test_file_format(self, history_path):
        store = HistoryStore(history_path)
        store.put("k", "[]")
        data = json.loads(history_path.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert data["entries"] == [{"key": "k", "data": "[]"}]

    def test_remove_persists(self, history_path):
        store = HistoryStore(history_path)
        store.put("k", "[]")
        store.remove("k")
        assert HistoryStore(history_path).keys() == []

    def test_missing_file_is_empty(self, temp_dir):
        store = HistoryStore(temp_dir / "sub" / "history.json")
        assert len(store) == 0

    def test_creates_parent_dirs(self, temp_dir):
        path = temp_dir / "a" / "b" / "history.json"
        HistoryStore(path).put("k", "[]")
        assert path.exists()

    @pytest.mark.parametrize("content", [
        "not json",
        "[1, 2]",
        "{\"entries\": [{\"data\": 1}]}",
        pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
    ])
    def test_bad_file_is_empty(self, history_path, content, caplog):
        history_path.write_text(content, encoding="utf-8")
        store = HistoryStore(history_path)
        assert len(store) == 0
        assert "Error loading history" in caplog.text
