# Open Gate Core Package
"""
Gate lifecycle: option model, view resolution, registry and protocol dispatch.
"""

from .errors import (
    GateError,
    GateNotFoundError,
    GateValidationError,
    PanelAllocationError,
    StaleRegistrationError,
)
from .host import ContentHost, Panel, ReadySignal, Workspace
from .model import GateFrameOption, PluginSetting, create_empty_gate_option, normalize_gate_option
from .protocol import Dispatch, DispatchState, ProtocolDispatcher, parse_protocol_uri
from .registry import GateRegistry
from .views import is_view_exist, open_view

__all__ = [
    "ContentHost",
    "Dispatch",
    "DispatchState",
    "GateError",
    "GateFrameOption",
    "GateNotFoundError",
    "GateRegistry",
    "GateValidationError",
    "Panel",
    "PanelAllocationError",
    "PluginSetting",
    "ProtocolDispatcher",
    "ReadySignal",
    "StaleRegistrationError",
    "Workspace",
    "create_empty_gate_option",
    "is_view_exist",
    "normalize_gate_option",
    "open_view",
    "parse_protocol_uri",
]
