"""
plugins/random_start_date/date_resolver.py
Works out whether a calendar is still at the default new-world start and how
far forward it has to move to reach the configured start date.

All positions are in in-world hours. Months are uniform and a year always has
twelve of them. Nothing here touches the calendar; callers apply the delta.
"""
import math
from dataclasses import dataclass
from typing import Protocol

from plugins.random_start_date.config import (EPSILON_HOURS,
                                              FRESH_START_DAY_INDEX,
                                              FRESH_START_MAX_HOURS_INTO_DAY,
                                              FRESH_START_MONTH_INDEX)
from plugins.random_start_date.start_config import StartConfig, clamp

MONTHS_PER_YEAR = 12


class RandomSource(Protocol):
    def next_int(self, low: int, high: int) -> int: ...


@dataclass(frozen=True)
class CalendarParams:
    hours_per_day: float
    days_per_month: int
    total_hours: float

    @classmethod
    def from_calendar(cls, calendar) -> 'CalendarParams':
        """Snapshots a calendar, clamping both divisors to at least 1."""
        return cls(
            hours_per_day=max(1.0, float(calendar.hours_per_day)),
            days_per_month=max(1, int(calendar.days_per_month)),
            total_hours=float(calendar.total_hours),
        )

    @property
    def month_hours(self) -> float:
        return self.days_per_month * self.hours_per_day

    @property
    def year_hours(self) -> float:
        return MONTHS_PER_YEAR * self.month_hours


@dataclass(frozen=True)
class StartTarget:
    month_index: int  # 0 = January
    day_index: int    # 0 = first day of the month
    hour: int


@dataclass(frozen=True)
class Resolution:
    target: StartTarget
    delta: float


class DateResolver:
    def __init__(self, fresh_month_index: int = FRESH_START_MONTH_INDEX,
                 fresh_day_index: int = FRESH_START_DAY_INDEX,
                 fresh_max_hours_into_day: float = FRESH_START_MAX_HOURS_INTO_DAY,
                 epsilon: float = EPSILON_HOURS):
        self.fresh_month_index = fresh_month_index
        self.fresh_day_index = fresh_day_index
        self.fresh_max_hours_into_day = fresh_max_hours_into_day
        self.epsilon = epsilon

    def is_fresh_start(self, params: CalendarParams) -> bool:
        """
        True while the calendar still sits early on the engine's default start
        day, i.e. the world was just created and nobody has played on it yet.
        Both divisors in `params` must already be at least 1.
        """
        month_hours = params.month_hours
        now = params.total_hours

        cur_month = int(math.floor((now % params.year_hours) / month_hours))  # 0..11
        hours_into_month = now - math.floor(now / month_hours) * month_hours
        cur_day = int(math.floor(hours_into_month / params.hours_per_day))
        hours_into_day = hours_into_month - cur_day * params.hours_per_day

        return (cur_month == self.fresh_month_index
                and cur_day == self.fresh_day_index
                and hours_into_day < self.fresh_max_hours_into_day)

    def resolve_target(self, params: CalendarParams, cfg: StartConfig, rng: RandomSource) -> StartTarget:
        """Picks month, day and hour, in that order, drawing only for randomized parts."""
        days = params.days_per_month

        if cfg.randomize_month:
            month_index = rng.next_int(0, MONTHS_PER_YEAR)
        else:
            month_index = clamp(cfg.fixed_month - 1, 0, MONTHS_PER_YEAR - 1)

        if cfg.randomize_day:
            day_index = rng.next_int(0, days)
        else:
            day_index = clamp(cfg.fixed_day - 1, 0, days - 1)

        max_hour = max(1, int(math.floor(params.hours_per_day)))
        if cfg.randomize_hour:
            hour = rng.next_int(0, max_hour)
        else:
            hour = clamp(cfg.fixed_hour, 0, max_hour - 1)

        return StartTarget(month_index, day_index, hour)

    def delta_to(self, params: CalendarParams, target: StartTarget) -> float:
        """
        Hours from now until the next occurrence of `target`. If that moment has
        already passed this year, the same moment next year is used instead.
        """
        year_hours = params.year_hours
        target_this_year = (target.month_index * params.month_hours
                            + target.day_index * params.hours_per_day
                            + target.hour)

        now = params.total_hours
        years_passed = math.floor(now / year_hours)
        cur_year_start = years_passed * year_hours

        if now - cur_year_start > target_this_year - self.epsilon:
            target_abs = (years_passed + 1) * year_hours + target_this_year
        else:
            target_abs = cur_year_start + target_this_year

        return target_abs - now

    def resolve_delta(self, params: CalendarParams, cfg: StartConfig, rng: RandomSource) -> float:
        return self.delta_to(params, self.resolve_target(params, cfg, rng))

    def resolve(self, params: CalendarParams, cfg: StartConfig, rng: RandomSource) -> Resolution:
        target = self.resolve_target(params, cfg, rng)
        return Resolution(target, self.delta_to(params, target))
