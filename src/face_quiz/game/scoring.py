"""Time and mistake based scoring for a finished session."""

from __future__ import annotations

import math

__all__ = [
    "MAX_SCORE",
    "MIN_SCORE",
    "INCORRECT_PENALTY",
    "MAX_TIME_FOR_FULL_SCORE",
    "SCORE_REDUCTION_PER_SECOND",
    "ScoreEngine",
    "time_score",
]

MAX_SCORE = 1000.0
MIN_SCORE = 0.0
INCORRECT_PENALTY = 100.0  # per wrong pick
MAX_TIME_FOR_FULL_SCORE = 3.0  # seconds, average per question
SCORE_REDUCTION_PER_SECOND = 80


def time_score(average_time_per_question: float) -> float:
    """Base score before mistakes are deducted."""

    if average_time_per_question <= MAX_TIME_FOR_FULL_SCORE:
        return MAX_SCORE
    overtime = average_time_per_question - MAX_TIME_FOR_FULL_SCORE
    base = MAX_SCORE - math.floor(overtime * SCORE_REDUCTION_PER_SECOND)
    return max(MIN_SCORE, base)


class ScoreEngine:
    """Counts wrong picks and turns them plus pace into the final score."""

    def __init__(self) -> None:
        self.incorrect_count = 0

    def record_incorrect(self) -> None:
        self.incorrect_count += 1

    def reset(self) -> None:
        self.incorrect_count = 0

    def finalize(self, average_time_per_question: float) -> float:
        base = time_score(average_time_per_question)
        penalty = self.incorrect_count * INCORRECT_PENALTY
        return float(round(max(MIN_SCORE, base - penalty)))
