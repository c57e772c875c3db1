"""Tests for the JSON-snapshot record repository.

Fixtures ``snapshot_dir``, ``cache`` and ``clock`` are provided by
conftest.py.
"""

import json
import logging

import pytest

from src.directory.record_repository import RecordRepository, RecordSourceError
from src.directory.response_cache import ResponseCache


# ── Loading ──────────────────────────────────────────────────────────

class TestLoadRecords:
    def test_envelope_shape(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        records = repo.load_records("players")
        assert [r["id"] for r in records] == ["p1", "p2", "p3"]

    def test_bare_list_shape(self, tmp_path, cache):
        with open(tmp_path / "districts.json", "w", encoding="utf-8") as f:
            json.dump([{"name": "Warangal"}, {"name": "Nalgonda"}], f)
        records = RecordRepository(tmp_path, cache).load_records("districts")
        assert [r["name"] for r in records] == ["Warangal", "Nalgonda"]

    def test_params_applied_as_exact_match(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        records = repo.load_records("players", {"districtName": "Warangal"})
        assert [r["id"] for r in records] == ["p1", "p3"]

    def test_params_compare_as_text(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        assert [r["id"] for r in repo.load_records("players", {"totalAchievements": "4"})] == ["p1"]

    def test_missing_snapshot(self, tmp_path, cache):
        with pytest.raises(FileNotFoundError, match="tournaments"):
            RecordRepository(tmp_path, cache).load_records("tournaments")

    def test_corrupt_snapshot(self, tmp_path, cache):
        (tmp_path / "news.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(RecordSourceError, match="Corrupt"):
            RecordRepository(tmp_path, cache).load_records("news")

    @pytest.mark.parametrize("payload", [
        {"items": []},
        {"data": {"id": 1}},
        ["not", "records"],
        42,
    ])
    def test_malformed_shape(self, tmp_path, cache, payload):
        with open(tmp_path / "media.json", "w", encoding="utf-8") as f:
            json.dump(payload, f)
        with pytest.raises(RecordSourceError, match="Malformed"):
            RecordRepository(tmp_path, cache).load_records("media")

    def test_non_uniform_collection_warns(self, tmp_path, cache, caplog):
        with open(tmp_path / "members.json", "w", encoding="utf-8") as f:
            json.dump([{"id": 1, "name": "A"}, {"id": 2}], f)
        with caplog.at_level(logging.WARNING):
            RecordRepository(tmp_path, cache).load_records("members")
        assert "do not share" in caplog.text

    def test_returns_copies(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        first = repo.load_records("players")
        first[0]["name"] = "Changed"
        first[0]["statistics"]["winPercentage"] = 0.0
        first.append({"id": "extra"})
        second = repo.load_records("players")
        assert second[0]["name"] == "Ravi Kumar"
        assert second[0]["statistics"]["winPercentage"] == 71.25
        assert len(second) == 3


# ── Caching ──────────────────────────────────────────────────────────

class TestCaching:
    def test_second_load_served_from_cache(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        repo.load_records("players")
        (snapshot_dir / "players.json").unlink()
        assert len(repo.load_records("players")) == 3

    def test_use_cache_false_reads_file(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        repo.load_records("players")
        (snapshot_dir / "players.json").unlink()
        with pytest.raises(FileNotFoundError):
            repo.load_records("players", use_cache=False)

    def test_entry_expires(self, snapshot_dir, cache, clock):
        repo = RecordRepository(snapshot_dir, cache)
        repo.load_records("players", ttl=5)
        (snapshot_dir / "players.json").unlink()
        clock.advance(5)
        with pytest.raises(FileNotFoundError):
            repo.load_records("players")

    def test_params_cached_separately(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        repo.load_records("players")
        repo.load_records("players", {"districtName": "Warangal"})
        assert len(cache) == 2


# ── Saving ───────────────────────────────────────────────────────────

class TestSaveRecords:
    def test_writes_envelope(self, tmp_path, cache):
        repo = RecordRepository(tmp_path / "out", cache)
        path = repo.save_records("news", [{"id": "n1", "title": "State finals"}])
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["data"] == [{"id": "n1", "title": "State finals"}]
        assert data["pagination"]["total"] == 1

    def test_save_then_load(self, tmp_path, cache):
        repo = RecordRepository(tmp_path, cache)
        repo.save_records("media", [{"id": "g1"}, {"id": "g2"}])
        assert [r["id"] for r in repo.load_records("media")] == ["g1", "g2"]

    def test_save_invalidates_only_that_listing(self, snapshot_dir, cache):
        repo = RecordRepository(snapshot_dir, cache)
        repo.save_records("news", [{"id": "n1"}])
        repo.load_records("players")
        repo.load_records("players", {"category": "MEN"})
        repo.load_records("news")

        repo.save_records("players", [{"id": "p9", "name": "New Player"}])

        assert ResponseCache.make_key("news") in cache
        assert ResponseCache.make_key("players") not in cache
        assert [r["id"] for r in repo.load_records("players")] == ["p9"]
