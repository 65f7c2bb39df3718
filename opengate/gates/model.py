"""
Gate option model - configuration record for a single gate.

Persisted gates use camelCase keys (hasRibbon, zoomFactor, profileKey) so
existing data files keep loading. Normalization is total: any input, even
malformed or legacy-shaped, yields a fully populated GateFrameOption.
"""

import math
from dataclasses import dataclass, field
from typing import Any

DEFAULT_PROFILE_KEY = "open-gate"
DEFAULT_ZOOM_FACTOR = 1.0
DEFAULT_POSITION = "right"
POSITIONS = ("left", "center", "right")

# Persisted key → attribute name
_FIELD_KEYS = {
    "id": "id",
    "title": "title",
    "icon": "icon",
    "hasRibbon": "has_ribbon",
    "position": "position",
    "url": "url",
    "zoomFactor": "zoom_factor",
    "profileKey": "profile_key",
}


@dataclass
class GateFrameOption:
    """Configuration of one gate. `id` doubles as the host panel type."""
    id: str = ""
    title: str = ""
    icon: str = ""
    has_ribbon: bool = True
    position: str = DEFAULT_POSITION
    url: str = ""
    zoom_factor: float = DEFAULT_ZOOM_FACTOR
    profile_key: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase keys."""
        return {key: getattr(self, attr) for key, attr in _FIELD_KEYS.items()}


@dataclass
class PluginSetting:
    """Persisted root state: installation uuid and gates keyed by id."""
    uuid: str = ""
    gates: dict[str, GateFrameOption] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "gates": {gate_id: gate.to_dict() for gate_id, gate in self.gates.items()},
        }


def create_empty_gate_option() -> GateFrameOption:
    """Blank template used to seed the gate editor and onboarding."""
    return GateFrameOption()


def normalize_gate_option(raw: Any) -> GateFrameOption:
    """
    Build a fully populated gate from a possibly incomplete record.

    Args:
        raw: GateFrameOption, dict (camelCase or snake_case keys) or anything else

    Returns:
        New GateFrameOption. Missing/empty profile_key becomes
        DEFAULT_PROFILE_KEY, missing/zero/invalid zoom_factor becomes
        DEFAULT_ZOOM_FACTOR. Valid values pass through unchanged.
    """
    if isinstance(raw, GateFrameOption):
        data = raw.to_dict()
    elif isinstance(raw, dict):
        data = raw
    else:
        data = {}

    return GateFrameOption(
        id=_as_str(_pick(data, "id")),
        title=_as_str(_pick(data, "title")),
        icon=_as_str(_pick(data, "icon")),
        has_ribbon=_as_bool(_pick(data, "hasRibbon", "has_ribbon"), default=True),
        position=_as_position(_pick(data, "position")),
        url=_as_str(_pick(data, "url")),
        zoom_factor=_as_zoom(_pick(data, "zoomFactor", "zoom_factor")),
        profile_key=_as_str(_pick(data, "profileKey", "profile_key")) or DEFAULT_PROFILE_KEY,
    )


def normalize_plugin_setting(raw: Any) -> PluginSetting:
    """
    Merge defaults into loaded settings and normalize every gate.

    Entries are re-keyed by gate id; a gate without an id takes its key.
    """
    data = raw if isinstance(raw, dict) else {}

    raw_gates = data.get("gates")
    if not isinstance(raw_gates, dict):
        raw_gates = {}

    gates = {}
    for key, value in raw_gates.items():
        gate = normalize_gate_option(value)
        if not gate.id:
            gate.id = _as_str(key)
        if gate.id:
            gates[gate.id] = gate

    return PluginSetting(uuid=_as_str(data.get("uuid")), gates=gates)


def _pick(data: dict, *keys: str) -> Any:
    """Return the first present value among keys, else None."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _as_position(value: Any) -> str:
    if isinstance(value, str) and value in POSITIONS:
        return value
    return DEFAULT_POSITION


def _as_zoom(value: Any) -> float:
    if isinstance(value, bool):
        return DEFAULT_ZOOM_FACTOR
    try:
        zoom = float(value)
    except (TypeError, ValueError):
        return DEFAULT_ZOOM_FACTOR
    if not math.isfinite(zoom) or zoom <= 0:
        return DEFAULT_ZOOM_FACTOR
    return zoom
