"""Random selection primitives over a pool of face identifiers."""

from __future__ import annotations

import random
from collections.abc import Hashable, Sequence
from typing import TypeVar

from .errors import InsufficientPoolError

__all__ = ["Sampler"]

T = TypeVar("T", bound=Hashable)


class Sampler:
    """Sampling without replacement and shuffling driven by ``rng``.

    The sampler keeps no state besides its random source, so a seeded
    ``random.Random`` makes every draw reproducible.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def sample_unique(self, pool: Sequence[T], count: int) -> list[T]:
        """Draw ``count`` distinct items from ``pool`` uniformly at random."""

        if count < 0:
            raise ValueError("count must be >= 0")
        available = list(pool)
        if count > len(available):
            raise InsufficientPoolError(count, len(available))

        picked: list[T] = []
        for _ in range(count):
            index = self.rng.randrange(len(available))
            picked.append(available.pop(index))
        return picked

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a uniformly random permutation of ``items`` (Fisher-Yates)."""

        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled
