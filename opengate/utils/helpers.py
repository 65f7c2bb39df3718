"""
Helper utilities for Open Gate.

Provides common functions used across the package:
- Settings loading (TOML, merged over defaults)
- Logging setup
- Desktop notices
- Installation uuid and gate id generation
- Data file locations
"""

import json
import re
import subprocess
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import toml
from loguru import logger

APP_NAME = "Open Gate"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "file": "",
    },
    "notifications": {
        "enabled": True,
        "app_name": APP_NAME,
        "timeout_ms": 4000,
    },
    "panels": {
        "side_width": 480,
        "center_width": 1000,
        "center_height": 700,
        "margin": 8,
    },
    "profiles": {
        "data_dir": "",
    },
}


def _config_dir() -> Path:
    return Path.home() / ".config" / "opengate"


def _data_dir() -> Path:
    return Path.home() / ".local" / "share" / "opengate"


def _settings_path() -> Path:
    return _config_dir() / "settings.toml"


def data_file_path() -> Path:
    """Location of the persisted gates file."""
    return _data_dir() / "data.json"


def profiles_dir(settings: Optional[Dict[str, Any]] = None) -> Path:
    """Root directory for per-profile web storage."""
    configured = (settings or {}).get("profiles", {}).get("data_dir", "")
    if configured:
        return Path(configured).expanduser()
    return _data_dir() / "profiles"


def load_settings() -> Dict[str, Any]:
    """
    Load Open Gate settings from TOML file.

    Returns:
        Dictionary containing settings with defaults applied

    Example settings.toml:
        [logging]
        level = "DEBUG"

        [panels]
        side_width = 520
    """
    settings_path = _settings_path()

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError):
        logger.exception(f"Could not load settings from {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = {}
    for key, value in base.items():
        result[key] = _deep_merge(value, {}) if isinstance(value, dict) else value

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def configure_logging(settings: Dict[str, Any]) -> None:
    """Install loguru sinks from the [logging] section."""
    level = settings["logging"]["level"]
    log_file = settings["logging"]["file"]

    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(Path(log_file).expanduser(), level=level, rotation="1 MB", retention=3)


def notify(message: str, settings: Optional[Dict[str, Any]] = None) -> None:
    """
    Show a desktop notice. Fire-and-forget.

    Uses notify-send; the message is always logged so it is never lost
    when no notification daemon is available.
    """
    config = (settings or DEFAULT_SETTINGS)["notifications"]
    logger.info(f"Notice: {message}")

    if not config["enabled"]:
        return

    try:
        subprocess.Popen(
            [
                "notify-send",
                "--app-name", config["app_name"],
                "--expire-time", str(config["timeout_ms"]),
                config["app_name"],
                message,
            ],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        logger.warning("notify-send not found, cannot show notice")


def generate_uuid() -> str:
    """Identifier for this installation."""
    return uuid.uuid4().hex


def make_gate_id(title: str, existing: Iterable[str] = ()) -> str:
    """
    Derive a gate id from its title.

    Args:
        title: Human readable gate title
        existing: Ids already in use

    Returns:
        Lowercase slug, suffixed with -2, -3, ... when taken.
        Falls back to "gate" for titles without letters or digits.
    """
    base = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "gate"
    taken = set(existing)

    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def get_focused_monitor() -> int:
    """
    Get the ID of the currently focused monitor in Hyprland.

    Returns:
        Monitor ID (int), defaults to 0 if detection fails
    """
    try:
        result = subprocess.run(
            ["hyprctl", "monitors", "-j"],
            capture_output=True,
            text=True,
            timeout=1,
        )
    except (OSError, subprocess.TimeoutExpired):
        logger.debug("hyprctl unavailable, using monitor 0")
        return 0

    if result.returncode == 0:
        try:
            monitors = json.loads(result.stdout)
        except json.JSONDecodeError:
            logger.warning("Could not parse hyprctl monitor list")
            return 0
        for monitor in monitors:
            if monitor.get("focused", False):
                return monitor["id"]

    return 0
