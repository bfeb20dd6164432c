# plugins/random_start_date/__init__.py
from typing import Any

from host.config import EVENT_SAVE_GAME_LOADED, RUN_PHASE_RUN_GAME
from host.utils.logger import Logger
from plugins.plugin_system import PluginBase
from plugins.random_start_date.config import (CONFIG_FILE, EPSILON_HOURS,
                                              SAVE_KEY_APPLIED)
from plugins.random_start_date.date_resolver import CalendarParams, DateResolver
from plugins.random_start_date.start_config import StartConfig

LOG_SOURCE = "RandomStartDate"


class RandomStartDatePlugin(PluginBase):
    """
    Moves the calendar of a freshly created world to a configured or random
    start date, once per save, before any player can join.
    """
    plugin_id = "random_start_date"
    plugin_name = "Random Start Date"
    config_file = CONFIG_FILE

    def __init__(self, world=None, event_system=None, server=None, config_store=None):
        super().__init__(world, event_system, config_store)
        self.server = server
        self.resolver = DateResolver()
        self.start_config = StartConfig.from_dict(self.config).clamped()

    def initialize(self):
        if self.event_system:
            self.event_system.subscribe(EVENT_SAVE_GAME_LOADED, self._on_save_game_loaded)
        else:
            Logger.warning(LOG_SOURCE, "Event system not available; start date will not be applied.")

    def cleanup(self):
        if self.event_system:
            self.event_system.unsubscribe(EVENT_SAVE_GAME_LOADED, self._on_save_game_loaded)

    def _on_save_game_loaded(self, event_type: str, data: Any):
        if self.is_applied():
            Logger.debug(LOG_SOURCE, "Already applied to this save; skipping.")
            return

        if self.server is None:
            Logger.warning(LOG_SOURCE, "Server not available; cannot schedule start date.")
            return
        self.server.register_run_phase(RUN_PHASE_RUN_GAME, self.apply_start_date)

    def apply_start_date(self):
        """Run-phase callback: after the save is loaded, before players are admitted."""
        try:
            calendar = self.world.calendar if self.world else None
            if calendar is None:
                return

            if self.resolver.is_fresh_start(CalendarParams.from_calendar(calendar)):
                self._apply_configured_start(calendar)
                self.world.save_game.set_bool(SAVE_KEY_APPLIED, True)
                Logger.info(LOG_SOURCE, f"Applied during {RUN_PHASE_RUN_GAME} (pre-join).")
            else:
                Logger.info(LOG_SOURCE, "Skipped: world not at vanilla fresh start.")
        except Exception as e:
            Logger.exception(LOG_SOURCE, f"{RUN_PHASE_RUN_GAME} apply failed", e)

    def is_applied(self) -> bool:
        if not self.world:
            return False
        return self.world.save_game.get_bool(SAVE_KEY_APPLIED)

    def _apply_configured_start(self, calendar):
        params = CalendarParams.from_calendar(calendar)
        resolution = self.resolver.resolve(params, self.start_config, self.world.rand)
        target = resolution.target

        if resolution.delta > EPSILON_HOURS:
            calendar.add(resolution.delta)
            Logger.info(LOG_SOURCE,
                        f"month={target.month_index} (0=Jan), day={target.day_index + 1}, hour={target.hour}; "
                        f"advanced +{resolution.delta:.1f}h. (DPM={params.days_per_month}, HPD={params.hours_per_day:g})")
        else:
            Logger.info(LOG_SOURCE, "No-op: target not ahead.")

