# Open Gate Utilities Package
"""
Shared utility functions and helpers for Open Gate.
"""

from .helpers import configure_logging, load_settings, make_gate_id, notify

__all__ = ["configure_logging", "load_settings", "make_gate_id", "notify"]
