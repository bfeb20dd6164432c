"""
plugins/random_start_date/start_config.py
The persisted start-date settings and their sanitizing.
"""
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from plugins.random_start_date.config import DEFAULT_CONFIG


def clamp(value: int, low: int, high: int) -> int:
    return low if value < low else (high if value > high else value)


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1"): return True
        if lowered in ("false", "no", "0"): return False
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass
class StartConfig:
    randomize_month: bool = DEFAULT_CONFIG["randomize_month"]
    fixed_month: int = DEFAULT_CONFIG["fixed_month"]
    randomize_day: bool = DEFAULT_CONFIG["randomize_day"]
    fixed_day: int = DEFAULT_CONFIG["fixed_day"]
    randomize_hour: bool = DEFAULT_CONFIG["randomize_hour"]
    fixed_hour: int = DEFAULT_CONFIG["fixed_hour"]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'StartConfig':
        """
        Builds a config from user-edited JSON. Values of the wrong type fall
        back to the default for that field; unknown keys are ignored.
        """
        data = data if isinstance(data, dict) else {}
        defaults = cls()
        return cls(
            randomize_month=_as_bool(data.get("randomize_month"), defaults.randomize_month),
            fixed_month=_as_int(data.get("fixed_month"), defaults.fixed_month),
            randomize_day=_as_bool(data.get("randomize_day"), defaults.randomize_day),
            fixed_day=_as_int(data.get("fixed_day"), defaults.fixed_day),
            randomize_hour=_as_bool(data.get("randomize_hour"), defaults.randomize_hour),
            fixed_hour=_as_int(data.get("fixed_hour"), defaults.fixed_hour),
        )

    def clamped(self) -> 'StartConfig':
        """Month to 1..12, day to at least 1, hour to 0..23."""
        return replace(
            self,
            fixed_month=clamp(self.fixed_month, 1, 12),
            fixed_day=max(1, self.fixed_day),
            fixed_hour=clamp(self.fixed_hour, 0, 23),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
