"""
Tests for the daily JSON cache.
"""

import json
from datetime import date

import pytest

from emoji_leaderboard.errors import CacheCorrupt, CacheMiss
from emoji_leaderboard.ingestion.cache import CacheStore

DAY = date(2024, 3, 15)


@pytest.fixture
def store(tmp_path):
    return CacheStore(tmp_path / "cache", day=DAY)


class TestCachePaths:
    """Tests for cache file layout."""

    def test_users_path(self, store, tmp_path):
        assert store.path_for("users") == tmp_path / "cache" / "2024-03-15" / "user_id_map.json"

    def test_emojis_path(self, store, tmp_path):
        assert store.path_for("emojis") == tmp_path / "cache" / "2024-03-15" / "emojis.json"

    def test_explicit_day_overrides_default(self, store, tmp_path):
        path = store.path_for("emojis", date(2023, 1, 2))
        assert path.parent.name == "2023-01-02"

    def test_unknown_dataset_rejected(self, store):
        with pytest.raises(ValueError):
            store.path_for("channels")

    def test_default_root_under_working_directory(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        store = CacheStore(day=DAY)
        assert store.path_for("users") == tmp_path / "cache" / "2024-03-15" / "user_id_map.json"


class TestCacheReadWrite:
    """Tests for read-through and write-through."""

    def test_missing_file_is_a_miss(self, store):
        with pytest.raises(CacheMiss):
            store.read("emojis")

    def test_write_creates_directories(self, store):
        path = store.write("users", {"U1": "alice"})
        assert path.exists()

    def test_write_then_read(self, store):
        store.write("emojis", [{"name": "wave"}])
        assert store.read("emojis") == [{"name": "wave"}]

    def test_write_is_pretty_printed(self, store):
        path = store.write("users", {"U1": "alice"})
        assert path.read_text(encoding="utf-8") == '{\n  "U1": "alice"\n}'

    def test_write_overwrites(self, store):
        store.write("users", {"U1": "alice"})
        store.write("users", {"U2": "bob"})
        assert store.read("users") == {"U2": "bob"}

    def test_non_ascii_preserved(self, store):
        path = store.write("users", {"U1": "Zoë"})
        assert "Zoë" in path.read_text(encoding="utf-8")
        assert store.read("users") == {"U1": "Zoë"}

    def test_no_temp_files_left(self, store):
        path = store.write("emojis", [])
        assert [p.name for p in path.parent.iterdir()] == ["emojis.json"]

    def test_other_days_not_visible(self, store):
        store.write("emojis", [{"name": "wave"}], day=date(2024, 3, 14))
        with pytest.raises(CacheMiss):
            store.read("emojis")


class TestCacheCorruption:
    """Tests for unreadable cache files."""

    def test_invalid_json(self, store):
        path = store.path_for("emojis")
        path.parent.mkdir(parents=True)
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(CacheCorrupt):
            store.read("emojis")

    def test_wrong_shape(self, store):
        path = store.path_for("users")
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps(["U1", "U2"]), encoding="utf-8")

        with pytest.raises(CacheCorrupt) as exc_info:
            store.read("users")

        assert exc_info.value.path == path

    def test_corrupt_is_a_miss(self, store):
        path = store.path_for("emojis")
        path.parent.mkdir(parents=True)
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(CacheMiss):
            store.read("emojis")
