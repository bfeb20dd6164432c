# host/world/save_manager.py
"""
Handles saving and loading of the world state to and from files.
"""
import json
import os
import time
from typing import TYPE_CHECKING, Optional

from host.config import DEFAULT_SAVE_FILE, SAVE_FORMAT_VERSION, SAVE_GAME_DIR
from host.core.random_source import RandomSource
from host.utils.logger import Logger
from host.world.game_calendar import GameCalendar
from host.world.save_game import SaveGame

if TYPE_CHECKING:
    from host.world.world import World


class SaveManager:
    def __init__(self, world: 'World', save_dir: str = SAVE_GAME_DIR):
        self.world = world
        self.save_dir = save_dir

    def save(self, filename: str = DEFAULT_SAVE_FILE) -> bool:
        """Saves the current world state to a JSON file."""
        save_path = self._resolve_save_path(filename)
        if not save_path: return False
        Logger.info("SaveManager", f"Saving game to {save_path}...")
        try:
            if not self.world.calendar: return False

            save_data = {
                "save_format_version": SAVE_FORMAT_VERSION,
                "save_name": self._save_name(filename),
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
                "seed": self.world.seed,
                "calendar": self.world.calendar.to_dict(),
                "mod_data": self.world.save_game.to_dict(),
            }

            os.makedirs(os.path.dirname(save_path), exist_ok=True)
            with open(save_path, 'w') as f: json.dump(save_data, f, indent=2, default=str)
            Logger.info("SaveManager", f"Game saved successfully to {save_path}.")
            return True
        except Exception as e:
            Logger.exception("SaveManager", "Error saving game", e)
            return False

    def load(self, filename: str = DEFAULT_SAVE_FILE) -> bool:
        """
        Loads a world state from a file.
        A missing or unreadable file starts a new world instead.
        """
        save_name = self._save_name(filename)
        save_path = self._resolve_save_path(filename)
        if not save_path or not os.path.exists(save_path):
            Logger.warning("SaveManager", f"Save file not found: {filename}. Starting new world.")
            self.world.initialize_new_world(save_name)
            return True

        Logger.info("SaveManager", f"Loading save game from {save_path}...")
        try:
            with open(save_path, 'r') as f: save_data = json.load(f)
            if not isinstance(save_data, dict):
                raise ValueError("save file does not contain a JSON object")

            version = save_data.get("save_format_version", SAVE_FORMAT_VERSION)
            if version > SAVE_FORMAT_VERSION:
                Logger.warning("SaveManager", f"Save format {version} is newer than supported ({SAVE_FORMAT_VERSION}).")

            seed = save_data.get("seed")
            if seed is not None:
                self.world.rand = RandomSource(int(seed))
            self.world.calendar = GameCalendar.from_dict(save_data.get("calendar"))
            self.world.save_game = SaveGame.from_dict(save_name, save_data.get("mod_data"))
            self.world.is_new_world = False

            Logger.info("SaveManager", f"Loaded '{save_name}' at {self.world.calendar.date_str}.")
            return True
        except Exception as e:
            Logger.exception("SaveManager", f"Critical Error loading save game '{filename}'", e)
            Logger.warning("SaveManager", "Starting new world instead.")
            self.world.initialize_new_world(save_name)
            return False

    def _save_name(self, filename: str) -> str:
        return os.path.splitext(os.path.basename(filename))[0]

    def _resolve_save_path(self, filename: str) -> Optional[str]:
        try:
            if not filename: return None
            if not filename.endswith(".json"): filename += ".json"
            return os.path.join(self.save_dir, os.path.basename(filename))
        except Exception as e:
            Logger.error("SaveManager", f"Error resolving save path '{filename}': {e}")
            return None
