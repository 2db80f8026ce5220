# stickman/random_source.py
"""
Seeded pseudo-random source used by the scene synthesizer.

The generator is seeded from the textual form of the seed so that every
distinct seed (including negative ones) yields its own sequence. Not meant
for anything security related.
"""
import math
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRandom:
    def __init__(self, seed: int = 0):
        self.seed = seed
        self._rng = random.Random(f"stickman:{seed}")

    def next(self) -> float:
        """Next value in [0, 1)."""
        return self._rng.random()

    def range(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends inclusive."""
        return min(hi, int(math.floor(self.range(lo, hi + 1))))

    def choice(self, items: Sequence[T]) -> Optional[T]:
        if len(items) == 0:
            return None
        return items[self.int(0, len(items) - 1)]
