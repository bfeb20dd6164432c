# host/world/game_calendar.py
"""
The world calendar: a monotonically advancing counter of in-world hours,
with uniform months and a fixed number of months per year.
"""
import math
from typing import Any, Dict, Optional

from host.config import (CALENDAR_DAYS_PER_MONTH, CALENDAR_HOURS_PER_DAY,
                         CALENDAR_MONTH_NAMES, CALENDAR_MONTHS_PER_YEAR,
                         CALENDAR_NEW_WORLD_DAY_INDEX, CALENDAR_NEW_WORLD_HOUR,
                         CALENDAR_NEW_WORLD_MONTH_INDEX)


class GameCalendar:
    def __init__(self, hours_per_day: float = CALENDAR_HOURS_PER_DAY,
                 days_per_month: int = CALENDAR_DAYS_PER_MONTH,
                 total_hours: float = 0.0):
        self.hours_per_day: float = float(hours_per_day)
        self.days_per_month: int = int(days_per_month)
        self.total_hours: float = float(total_hours)

    @classmethod
    def for_new_world(cls, hours_per_day: float = CALENDAR_HOURS_PER_DAY,
                      days_per_month: int = CALENDAR_DAYS_PER_MONTH) -> 'GameCalendar':
        """Creates a calendar sitting at the default start of a freshly generated world."""
        calendar = cls(hours_per_day, days_per_month)
        calendar.total_hours = (CALENDAR_NEW_WORLD_MONTH_INDEX * calendar.month_hours
                                + CALENDAR_NEW_WORLD_DAY_INDEX * calendar.safe_hours_per_day
                                + CALENDAR_NEW_WORLD_HOUR)
        return calendar

    @property
    def months_per_year(self) -> int:
        return CALENDAR_MONTHS_PER_YEAR

    @property
    def safe_hours_per_day(self) -> float:
        return max(1.0, self.hours_per_day)

    @property
    def safe_days_per_month(self) -> int:
        return max(1, self.days_per_month)

    @property
    def month_hours(self) -> float:
        return self.safe_days_per_month * self.safe_hours_per_day

    @property
    def year_hours(self) -> float:
        return self.months_per_year * self.month_hours

    def add(self, hours: float):
        """Advances the calendar. The calendar never runs backward."""
        if hours < 0:
            raise ValueError(f"Cannot move the calendar backward ({hours:.3f}h)")
        self.total_hours += hours

    # --- Date breakdown (year/month/day are 1-based, hour is 0-based) ---
    @property
    def year(self) -> int:
        return 1 + int(math.floor(self.total_hours / self.year_hours))

    @property
    def month(self) -> int:
        return 1 + int(math.floor((self.total_hours % self.year_hours) / self.month_hours))

    @property
    def day(self) -> int:
        hours_into_month = self.total_hours % self.month_hours
        return 1 + int(math.floor(hours_into_month / self.safe_hours_per_day))

    @property
    def hour_of_day(self) -> float:
        return self.total_hours % self.safe_hours_per_day

    @property
    def hour(self) -> int:
        return int(math.floor(self.hour_of_day))

    @property
    def minute(self) -> int:
        return int((self.hour_of_day - self.hour) * 60)

    @property
    def month_name(self) -> str:
        return CALENDAR_MONTH_NAMES[(self.month - 1) % len(CALENDAR_MONTH_NAMES)]

    @property
    def date_str(self) -> str:
        return f"{self.day} {self.month_name}, Year {self.year}, {self.hour:02d}:{self.minute:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hours_per_day": self.hours_per_day,
            "days_per_month": self.days_per_month,
            "total_hours": self.total_hours,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GameCalendar':
        if not data or not isinstance(data, dict):
            return cls.for_new_world()
        return cls(
            hours_per_day=data.get("hours_per_day", CALENDAR_HOURS_PER_DAY),
            days_per_month=data.get("days_per_month", CALENDAR_DAYS_PER_MONTH),
            total_hours=data.get("total_hours", 0.0),
        )
