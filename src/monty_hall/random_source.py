"""random_source.py

The only source of non-determinism in the game: drawing the winning door at
the start of a round and the coin flip Monty uses when both unpicked doors
hide goats. Production code uses :class:`NumpyRandomSource`; tests inject a
scripted source.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .state import Door


class RandomSource(ABC):
    """Provider of the two random draws the game needs."""

    @abstractmethod
    def draw_door(self) -> Door:
        """A door chosen uniformly among the three."""

    @abstractmethod
    def draw_bit(self) -> int:
        """A uniform bit, ``0`` or ``1``."""


class NumpyRandomSource(RandomSource):
    """:class:`RandomSource` backed by a NumPy ``Generator`` (PCG64 by default).

    Args:
        rng (np.random.Generator | None): generator to draw from. Defaults to a
          fresh ``np.random.default_rng(seed)``.
        seed (int | None): seed for the default generator, ignored when *rng* is
          given. Defaults to None (OS entropy, seeded once here).
    """

    def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def draw_door(self) -> Door:
        return Door(int(self.rng.integers(1, len(Door) + 1)))

    def draw_bit(self) -> int:
        return int(self.rng.integers(2))
