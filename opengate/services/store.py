"""
Settings Store - Load, normalize and persist gate configuration.

Single owner of the PluginSetting for a running instance. Every load
re-applies defaults (idempotent), every mutation is followed by save().

File format (data.json):
    {
      "uuid": "4f1c...",
      "gates": {
        "docs": {"id": "docs", "title": "Docs", "position": "right", ...}
      }
    }
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from opengate.gates.model import PluginSetting, normalize_plugin_setting
from opengate.utils.helpers import data_file_path


class SettingsStore:
    """
    Owns the persisted PluginSetting.

    Methods:
        load(): Read and normalize settings from disk
        save(): Persist the current settings
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else data_file_path()
        self.settings = PluginSetting()

    def load_data(self) -> Optional[Any]:
        """
        Read raw JSON from disk.

        Returns:
            Decoded JSON, or None if the file does not exist yet

        Raises:
            OSError, json.JSONDecodeError: the file exists but is unreadable
        """
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, starting fresh")
            return None

        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def save_data(self, data: Any) -> None:
        """Write JSON atomically (temp file, then replace)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")

        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def load(self) -> PluginSetting:
        """Load settings and apply defaults to every gate."""
        self.settings = normalize_plugin_setting(self.load_data())
        logger.debug(f"Loaded {len(self.settings.gates)} gate(s) from {self.path}")
        return self.settings

    def save(self) -> None:
        self.save_data(self.settings.to_dict())
        logger.debug(f"Saved {len(self.settings.gates)} gate(s) to {self.path}")
