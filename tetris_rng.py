"""Random sources for piece generation"""
import random
from typing import Iterable, Optional


class UniformRandom:
    """Default source: uniform integers in [0, n) from a seedable generator."""
    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def uniform_random_int(self, n: int) -> int:
        return self._random.randrange(n)


class ScriptedRandom:
    """Replays a fixed sequence of indices, cycling when exhausted."""
    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        if not self.values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._pos = 0

    def uniform_random_int(self, n: int) -> int:
        v = self.values[self._pos % len(self.values)]
        self._pos += 1
        return v
