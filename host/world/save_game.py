# host/world/save_game.py
"""
Save-scoped key/value storage for mods. Values must be JSON-serializable;
they are written into the save file alongside the world state.
"""
from typing import Any, Dict, Optional


class SaveGame:
    def __init__(self, save_name: str = "", mod_data: Optional[Dict[str, Any]] = None):
        self.save_name = save_name
        self.mod_data: Dict[str, Any] = dict(mod_data) if mod_data else {}

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.mod_data.get(key, default)

    def store_data(self, key: str, value: Any) -> None:
        self.mod_data[key] = value

    def get_bool(self, key: str) -> bool:
        """Reads a flag. Absent keys read as False."""
        value = self.mod_data.get(key)
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)

    def set_bool(self, key: str, value: bool) -> None:
        self.mod_data[key] = bool(value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.mod_data)

    @classmethod
    def from_dict(cls, save_name: str, data: Optional[Dict[str, Any]]) -> 'SaveGame':
        if not isinstance(data, dict):
            data = {}
        return cls(save_name, data)
