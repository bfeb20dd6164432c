# host/core/mod_config.py
"""
Per-mod JSON settings files kept in the mod-config directory.
"""
import json
import os
from typing import Any, Dict, Optional

from host.config import MOD_CONFIG_DIR
from host.utils.logger import Logger


class ModConfigError(Exception):
    """Raised when a mod config file exists but cannot be read as a JSON object."""
    pass


class ModConfigStore:
    def __init__(self, config_dir: str = MOD_CONFIG_DIR):
        self.config_dir = config_dir

    def get_path(self, filename: str) -> str:
        return os.path.join(self.config_dir, os.path.basename(filename))

    def load_mod_config(self, filename: str) -> Optional[Dict[str, Any]]:
        """
        Reads a mod config file.

        Returns:
            The parsed settings, or None if the file does not exist.

        Raises:
            ModConfigError: If the file is unreadable or not a JSON object.
        """
        path = self.get_path(filename)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ModConfigError(f"Could not read mod config '{filename}': {e}") from e
        if not isinstance(data, dict):
            raise ModConfigError(f"Mod config '{filename}' must contain a JSON object")
        return data

    def store_mod_config(self, data: Dict[str, Any], filename: str) -> None:
        path = self.get_path(filename)
        os.makedirs(self.config_dir, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        Logger.debug("ModConfigStore", f"Wrote mod config {path}")
