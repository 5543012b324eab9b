"""Round sizing and memorize/choice set construction."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from .sampler import Sampler

__all__ = [
    "DEFAULT_CHOICE_COUNT",
    "RoundPlan",
    "RoundPlanner",
    "required_memorize_count",
]

DEFAULT_CHOICE_COUNT = 9


def required_memorize_count(correct_answers: int) -> int:
    """Faces to memorize after ``correct_answers`` cleared rounds.

    One more face every two correct answers: 0,1 -> 1; 2,3 -> 2; 4,5 -> 3.
    """

    if correct_answers < 0:
        raise ValueError("correct_answers must be >= 0")
    return 1 + correct_answers // 2


@dataclass(frozen=True)
class RoundPlan:
    """Faces for a single round; ``choice_set`` is already shuffled."""

    memorize_set: tuple[Hashable, ...]
    choice_set: tuple[Hashable, ...]

    @property
    def decoys(self) -> tuple[Hashable, ...]:
        memorize = set(self.memorize_set)
        return tuple(item for item in self.choice_set if item not in memorize)


class RoundPlanner:
    def __init__(
        self,
        sampler: Sampler,
        *,
        choice_count: int = DEFAULT_CHOICE_COUNT,
    ) -> None:
        if choice_count < 1:
            raise ValueError("choice_count must be >= 1")
        self.sampler = sampler
        self.choice_count = choice_count

    def build_memorize_set(
        self, pool: Sequence[Hashable], count: int
    ) -> list[Hashable]:
        return self.sampler.sample_unique(pool, count)

    def build_choice_set(
        self,
        pool: Sequence[Hashable],
        memorize_set: Sequence[Hashable],
        target_size: int,
    ) -> list[Hashable]:
        """Memorize items plus decoys up to ``target_size``, shuffled.

        When the pool runs out of decoys the set is simply smaller; used
        decoys are never repeated.
        """

        memorize = set(memorize_set)
        decoy_pool = [item for item in pool if item not in memorize]
        wanted = max(0, target_size - len(memorize_set))
        decoys = self.sampler.sample_unique(
            decoy_pool, min(wanted, len(decoy_pool))
        )
        return self.sampler.shuffle([*memorize_set, *decoys])

    def plan_round(
        self, pool: Sequence[Hashable], correct_answers: int
    ) -> RoundPlan:
        count = required_memorize_count(correct_answers)
        memorize_set = self.build_memorize_set(pool, count)
        choice_set = self.build_choice_set(
            pool, memorize_set, self.choice_count
        )
        return RoundPlan(
            memorize_set=tuple(memorize_set),
            choice_set=tuple(choice_set),
        )
