# host/world/world.py
"""
The loaded world: its calendar, its random source and its save-game storage.
"""
from typing import Optional

from host.core.random_source import RandomSource
from host.world.game_calendar import GameCalendar
from host.world.save_game import SaveGame


class World:
    def __init__(self, seed: Optional[int] = None):
        self.calendar: Optional[GameCalendar] = None
        self.rand = RandomSource(seed)
        self.save_game = SaveGame()
        self.is_new_world = False

    @property
    def seed(self) -> int:
        return self.rand.seed

    def initialize_new_world(self, save_name: str = "", seed: Optional[int] = None):
        """Resets to a freshly generated world sitting at the default start date."""
        if seed is not None:
            self.rand = RandomSource(seed)
        self.calendar = GameCalendar.for_new_world()
        self.save_game = SaveGame(save_name)
        self.is_new_world = True
