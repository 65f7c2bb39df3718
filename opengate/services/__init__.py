# Open Gate Services Package
"""
Backend services for Open Gate.

Services handle data persistence.
"""

from .store import SettingsStore

__all__ = ["SettingsStore"]
