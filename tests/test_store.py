"""
Tests for the settings store: loading, normalization on load and atomic
writes. Uses real JSON files on disk.
"""

import json

import pytest

from opengate.gates.model import DEFAULT_PROFILE_KEY, GateFrameOption
from opengate.services.store import SettingsStore


class TestLoad:
    """Test loading settings from disk."""

    def test_missing_file_gives_defaults(self, tmp_path):
        store = SettingsStore(tmp_path / "missing.json")
        assert store.load_data() is None
        settings = store.load()
        assert settings.uuid == ""
        assert settings.gates == {}

    def test_loads_and_normalizes_gates(self, tmp_data):
        settings = SettingsStore(tmp_data).load()
        assert settings.uuid == "abc123"
        assert settings.gates["g1"].title == "Docs"
        assert settings.gates["legacy"].zoom_factor == 1.0
        assert settings.gates["legacy"].profile_key == DEFAULT_PROFILE_KEY

    def test_load_is_idempotent(self, tmp_data):
        store = SettingsStore(tmp_data)
        first = store.load()
        store.save()
        assert store.load() == first

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("not valid json!!!")
        with pytest.raises(json.JSONDecodeError):
            SettingsStore(path).load()

    def test_malformed_structure_loads(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(["unexpected"]))
        settings = SettingsStore(path).load()
        assert settings.gates == {}


class TestSave:
    """Test persisting settings."""

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        store = SettingsStore(path)
        store.save()
        assert path.exists()

    def test_save_uses_camel_case_keys(self, data_path):
        store = SettingsStore(data_path)
        store.settings.gates["a"] = GateFrameOption(id="a", title="A", zoom_factor=1.5, profile_key="p")
        store.save()
        saved = json.loads(data_path.read_text())["gates"]["a"]
        assert saved["zoomFactor"] == 1.5
        assert saved["profileKey"] == "p"
        assert saved["hasRibbon"] is True

    def test_atomic_write_no_partial(self, data_path):
        store = SettingsStore(data_path)
        store.save()
        assert not data_path.with_suffix(".tmp").exists()
