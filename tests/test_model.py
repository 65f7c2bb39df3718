"""
Tests for the gate option model: empty template, normalization and
settings normalization.
"""

import pytest

from opengate.gates.model import (
    DEFAULT_PROFILE_KEY,
    GateFrameOption,
    create_empty_gate_option,
    normalize_gate_option,
    normalize_plugin_setting,
)


class TestCreateEmptyGateOption:
    """Test the blank gate template."""

    def test_defaults(self):
        gate = create_empty_gate_option()
        assert gate.id == ""
        assert gate.title == ""
        assert gate.url == ""
        assert gate.icon == ""
        assert gate.has_ribbon is True
        assert gate.position == "right"
        assert gate.zoom_factor == 1.0

    def test_returns_fresh_instance(self):
        assert create_empty_gate_option() is not create_empty_gate_option()


class TestNormalizeGateOption:
    """Test field-level defaulting."""

    @pytest.mark.parametrize("zoom", [0, None])
    def test_unset_zoom_becomes_default(self, zoom):
        gate = normalize_gate_option({"id": "a", "zoomFactor": zoom})
        assert gate.zoom_factor == 1.0

    def test_missing_zoom_becomes_default(self):
        assert normalize_gate_option({"id": "a"}).zoom_factor == 1.0

    @pytest.mark.parametrize("zoom", [-1, "abc", float("nan"), True])
    def test_invalid_zoom_becomes_default(self, zoom):
        assert normalize_gate_option({"zoomFactor": zoom}).zoom_factor == 1.0

    @pytest.mark.parametrize("profile", ["", None])
    def test_unset_profile_key_becomes_default(self, profile):
        gate = normalize_gate_option({"id": "a", "profileKey": profile})
        assert gate.profile_key == DEFAULT_PROFILE_KEY

    def test_explicit_values_pass_through(self):
        raw = {
            "id": "wiki",
            "title": "Wiki",
            "icon": "globe",
            "hasRibbon": False,
            "position": "center",
            "url": "https://wiki.example.com",
            "zoomFactor": 1.25,
            "profileKey": "work",
        }
        gate = normalize_gate_option(raw)
        assert gate.to_dict() == raw

    def test_accepts_snake_case_keys(self):
        gate = normalize_gate_option({"id": "a", "zoom_factor": 2, "profile_key": "p", "has_ribbon": False})
        assert gate.zoom_factor == 2
        assert gate.profile_key == "p"
        assert gate.has_ribbon is False

    def test_accepts_gate_instance_without_mutating_it(self):
        original = GateFrameOption(id="a", zoom_factor=0, profile_key="")
        gate = normalize_gate_option(original)
        assert gate.zoom_factor == 1.0
        assert original.zoom_factor == 0
        assert original.profile_key == ""

    @pytest.mark.parametrize("raw", [None, 42, "gate", ["a"], {"id": 5, "title": None}])
    def test_never_fails_on_malformed_input(self, raw):
        gate = normalize_gate_option(raw)
        assert isinstance(gate, GateFrameOption)
        assert gate.zoom_factor > 0
        assert gate.profile_key

    def test_unknown_position_falls_back_to_right(self):
        assert normalize_gate_option({"position": "top"}).position == "right"

    @pytest.mark.parametrize("raw", [
        {},
        {"id": "a", "zoomFactor": 0, "profileKey": ""},
        {"id": "b", "zoomFactor": 3, "profileKey": "x", "position": "left"},
        None,
    ])
    def test_idempotent(self, raw):
        once = normalize_gate_option(raw)
        assert normalize_gate_option(once) == once


class TestNormalizePluginSetting:
    """Test settings-level defaulting."""

    def test_none_gives_fresh_settings(self):
        settings = normalize_plugin_setting(None)
        assert settings.uuid == ""
        assert settings.gates == {}

    def test_non_mapping_gates_replaced(self):
        settings = normalize_plugin_setting({"uuid": "u", "gates": ["oops"]})
        assert settings.uuid == "u"
        assert settings.gates == {}

    def test_gates_are_normalized(self):
        settings = normalize_plugin_setting({"gates": {"a": {"id": "a", "zoomFactor": 0}}})
        assert settings.gates["a"].zoom_factor == 1.0
        assert settings.gates["a"].profile_key == DEFAULT_PROFILE_KEY

    def test_missing_id_taken_from_key(self):
        settings = normalize_plugin_setting({"gates": {"a": {"title": "A"}}})
        assert settings.gates["a"].id == "a"

    def test_keys_match_gate_ids(self):
        settings = normalize_plugin_setting({"gates": {"old-key": {"id": "new-id"}}})
        assert list(settings.gates) == ["new-id"]

    def test_to_dict_round_trips(self):
        settings = normalize_plugin_setting({"uuid": "u", "gates": {"a": {"id": "a", "url": "https://a"}}})
        assert normalize_plugin_setting(settings.to_dict()) == settings
