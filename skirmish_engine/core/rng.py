"""Roll source built on top of random.Random."""

from __future__ import annotations

from random import Random
from typing import Optional


class RollSource:
    """
    Supplies normalized rolls in [0.0, 1.0).

    Each instance owns its generator, so two sources seeded alike
    produce the same sequence and nothing is shared between battles.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._random = Random(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed this source was created with (None for OS entropy)."""
        return self._seed

    def roll(self) -> float:
        """Return the next roll in the range [0.0, 1.0)."""
        return self._random.random()

    def rolls(self, count: int) -> list[float]:
        """Return ``count`` consecutive rolls."""
        if count < 0:
            raise ValueError("Cannot draw a negative number of rolls.")
        return [self._random.random() for _ in range(count)]

    def pick(self, value: Optional[float]) -> float:
        """Return ``value`` when supplied, otherwise draw a fresh roll."""
        if value is not None:
            return value
        return self._random.random()
