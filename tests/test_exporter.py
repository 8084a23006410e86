"""Unit tests for exporter utilities - uses JSON fixtures, no internet."""

import json

from talenthub.core.exporter import to_json, to_dict, save_json, load_json
from talenthub.models.result import SearchResult

from conftest import FIXTURES_DIR


def load_fixture() -> SearchResult:
    """Load SearchResult from JSON fixture."""
    return load_json(FIXTURES_DIR / "github_stars_result.json")


class TestToJson:
    """Test JSON string conversion."""

    def test_to_json_is_valid_json(self):
        parsed = json.loads(to_json(load_fixture()))
        assert "profiles" in parsed
        assert "credential" in parsed

    def test_to_json_preserves_data(self):
        result = load_fixture()
        parsed = json.loads(to_json(result))
        assert parsed["profiles"][0]["full_name"] == result.profiles[0].full_name
        assert parsed["credential"]["slug"] == "github-stars"


class TestToDict:
    """Test dictionary conversion."""

    def test_to_dict_has_expected_keys(self):
        d = to_dict(load_fixture())
        assert {"credential", "profiles", "fallback", "fetched_at"} <= set(d)

    def test_datetime_serialized(self):
        d = to_dict(load_fixture())
        assert d["fetched_at"] == "2026-10-18T09:30:00"


class TestSaveLoadJson:
    """Test file I/O operations."""

    def test_save_and_load_roundtrip(self, tmp_path):
        original = load_fixture()
        filepath = tmp_path / "out.json"

        save_json(original, filepath)
        loaded = load_json(filepath)

        assert [p.id for p in loaded.profiles] == [p.id for p in original.profiles]
        assert loaded.sorted_by_credential is True

    def test_save_creates_parent_dirs(self, tmp_path):
        filepath = tmp_path / "nested" / "dir" / "out.json"
        path = save_json(load_fixture(), filepath)
        assert path.exists()
