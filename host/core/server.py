# host/core/server.py
"""
The headless server: loads plugins and the save game, walks the run phases,
and only then opens for players.
"""
from typing import Callable, Dict, List, Optional

from host.config import (DEFAULT_SAVE_FILE, EVENT_PLAYER_JOINED,
                         EVENT_SAVE_GAME_LOADED, MOD_CONFIG_DIR, RUN_PHASES,
                         SAVE_GAME_DIR)
from host.core.mod_config import ModConfigStore
from host.utils.logger import Logger
from host.world.save_manager import SaveManager
from host.world.world import World
from plugins.plugin_system import PluginManager
from plugins.service_locator import ServiceLocator


class Server:
    def __init__(self, save_file: str = DEFAULT_SAVE_FILE,
                 save_dir: str = SAVE_GAME_DIR,
                 config_dir: str = MOD_CONFIG_DIR,
                 seed: Optional[int] = None,
                 plugin_names: Optional[List[str]] = None):
        # Each server owns a fresh service registry
        ServiceLocator.reset_instance()

        self.world = World(seed)
        self.save_manager = SaveManager(self.world, save_dir)
        self.config_store = ModConfigStore(config_dir)
        self.plugin_manager = PluginManager(world=self.world, server=self, config_store=self.config_store)
        self.event_system = self.plugin_manager.event_system

        self.current_save_file = save_file
        self.plugin_names = plugin_names  # None loads every discovered plugin

        self.run_phase: Optional[str] = None
        self._run_phase_callbacks: Dict[str, List[Callable[[], None]]] = {phase: [] for phase in RUN_PHASES}
        self.accepting_players = False
        self.players: List[str] = []

    def start(self) -> bool:
        """Boots the server. Returns False if the save could not be read (a new world was used)."""
        Logger.info("Server", f"Starting server for save '{self.current_save_file}'...")
        self.plugin_manager.load_all_plugins(self.plugin_names)

        load_ok = self.save_manager.load(self.current_save_file)
        self.event_system.publish(EVENT_SAVE_GAME_LOADED, {
            "save_name": self.world.save_game.save_name,
            "is_new_world": self.world.is_new_world,
        })

        for phase in RUN_PHASES:
            self._enter_run_phase(phase)

        self.accepting_players = True
        calendar = self.world.calendar
        Logger.info("Server", f"Server ready. World date: {calendar.date_str if calendar else 'unknown'}")
        return load_ok

    def register_run_phase(self, phase: str, callback: Callable[[], None]) -> None:
        """
        Runs `callback` when the server enters `phase`.
        If that phase has already been entered the callback runs immediately.
        """
        if phase not in self._run_phase_callbacks:
            raise ValueError(f"Unknown run phase '{phase}'")
        if self._phase_reached(phase):
            self._run_callback(phase, callback)
        else:
            self._run_phase_callbacks[phase].append(callback)

    def connect_player(self, player_name: str) -> None:
        if not self.accepting_players:
            raise RuntimeError("Server is not accepting players yet")
        self.players.append(player_name)
        Logger.info("Server", f"Player '{player_name}' joined.")
        self.event_system.publish(EVENT_PLAYER_JOINED, {"player_name": player_name})

    def shutdown(self) -> None:
        Logger.info("Server", "Shutting down...")
        self.accepting_players = False
        if self.world.calendar:
            self.save_manager.save(self.current_save_file)
        self.plugin_manager.unload_all_plugins()

    def _phase_reached(self, phase: str) -> bool:
        if self.run_phase is None:
            return False
        return RUN_PHASES.index(self.run_phase) >= RUN_PHASES.index(phase)

    def _enter_run_phase(self, phase: str) -> None:
        self.run_phase = phase
        Logger.debug("Server", f"Entering run phase '{phase}'.")
        callbacks = self._run_phase_callbacks[phase]
        self._run_phase_callbacks[phase] = []
        for callback in callbacks:
            self._run_callback(phase, callback)

    def _run_callback(self, phase: str, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as e:
            Logger.exception("Server", f"Error in run phase '{phase}' callback", e)
