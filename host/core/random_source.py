# host/core/random_source.py
import random
from typing import Optional


class RandomSource:
    """The world's random number generator. Seeded per world so runs can be replayed."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed if seed is not None else random.randrange(2**31)
        self._rand = random.Random(self.seed)

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high)."""
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return self._rand.randrange(low, high)
