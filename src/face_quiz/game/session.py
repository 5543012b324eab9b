"""Quiz session state machine.

A session walks through rounds of *memorize* then *choose*::

    IDLE -> MEMORIZING -> CHOOSING -> ROUND_COMPLETE -> MEMORIZING ... -> FINISHED

``stop()`` leaves any active phase for ``STOPPED``, which callers can tell
apart from a normal finish. The session never blocks or schedules anything
itself: the host delivers ``on_tick`` updates and calls ``complete_round``
once its post-round pause is over. Calls must be serialized by the host.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import Enum

from .errors import InsufficientPoolError, InvalidStateError
from .events import EventDispatcher, SessionListener
from .planner import (
    DEFAULT_CHOICE_COUNT,
    RoundPlan,
    RoundPlanner,
    required_memorize_count,
)
from .sampler import Sampler
from .scoring import ScoreEngine

__all__ = [
    "ACTIVE_PHASES",
    "Clock",
    "Phase",
    "QuizSession",
    "SessionSnapshot",
    "SessionState",
]

Clock = Callable[[], float]


class Phase(Enum):
    IDLE = "idle"
    MEMORIZING = "memorizing"
    CHOOSING = "choosing"
    ROUND_COMPLETE = "round_complete"
    FINISHED = "finished"
    STOPPED = "stopped"


ACTIVE_PHASES = frozenset(
    {Phase.MEMORIZING, Phase.CHOOSING, Phase.ROUND_COMPLETE}
)


@dataclass
class SessionState:
    """Mutable counters owned by :class:`QuizSession`."""

    phase: Phase = Phase.IDLE
    round_index: int = 0
    correct_answers: int = 0
    current_score: int = 0
    total_questions: int = 0
    elapsed_start: float = 0.0
    elapsed_now: float = 0.0
    final_score: float | None = None

    @property
    def elapsed(self) -> float:
        return max(0.0, self.elapsed_now - self.elapsed_start)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session handed to presentation code."""

    phase: Phase
    round_index: int
    correct_answers: int
    incorrect_count: int
    current_score: int
    total_questions: int
    elapsed: float
    memorize_set: tuple[Hashable, ...]
    choice_set: tuple[Hashable, ...]
    remaining: tuple[Hashable, ...]
    disabled: frozenset[Hashable]
    final_score: float | None


class QuizSession:
    """Runs one memorize-the-faces game over a fixed pool of items.

    ``rng`` drives every random draw so a seeded ``random.Random`` replays a
    game exactly. With a ``clock`` (a monotonic seconds reader) elapsed time
    is measured from the clock; otherwise it is the sum of ``on_tick`` deltas.
    """

    def __init__(
        self,
        pool: Iterable[Hashable],
        *,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        choice_count: int = DEFAULT_CHOICE_COUNT,
        logger: logging.Logger | None = None,
    ) -> None:
        items = tuple(pool)
        if not items:
            raise InsufficientPoolError(1, 0)
        if len(set(items)) != len(items):
            raise ValueError("Face pool contains duplicate items.")

        self.pool = items
        self.sampler = Sampler(rng)
        self.planner = RoundPlanner(self.sampler, choice_count=choice_count)
        self.scores = ScoreEngine()
        self.events = EventDispatcher()
        self.state = SessionState()
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._plan: RoundPlan | None = None
        self._choice_set: tuple[Hashable, ...] = ()
        self._remaining: list[Hashable] = []
        self._disabled: set[Hashable] = set()

    # -- observers -----------------------------------------------------

    def subscribe(self, listener: SessionListener) -> None:
        self.events.subscribe(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        self.events.unsubscribe(listener)

    # -- read access ---------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_active(self) -> bool:
        return self.state.phase in ACTIVE_PHASES

    @property
    def correct_answers(self) -> int:
        return self.state.correct_answers

    @property
    def incorrect_count(self) -> int:
        return self.scores.incorrect_count

    @property
    def elapsed(self) -> float:
        return self.state.elapsed

    @property
    def final_score(self) -> float | None:
        return self.state.final_score

    @property
    def memorize_set(self) -> tuple[Hashable, ...]:
        return self._plan.memorize_set if self._plan else ()

    @property
    def choice_set(self) -> tuple[Hashable, ...]:
        return self._choice_set

    @property
    def remaining(self) -> tuple[Hashable, ...]:
        return tuple(self._remaining)

    def is_selectable(self, item: Hashable) -> bool:
        return item in self._choice_set and item not in self._disabled

    def snapshot(self) -> SessionSnapshot:
        state = self.state
        return SessionSnapshot(
            phase=state.phase,
            round_index=state.round_index,
            correct_answers=state.correct_answers,
            incorrect_count=self.scores.incorrect_count,
            current_score=state.current_score,
            total_questions=state.total_questions,
            elapsed=state.elapsed,
            memorize_set=self.memorize_set,
            choice_set=self._choice_set,
            remaining=tuple(self._remaining),
            disabled=frozenset(self._disabled),
            final_score=state.final_score,
        )

    # -- transitions ---------------------------------------------------

    def validate_pool(self, total_questions: int) -> None:
        """Fail fast when the last round would need more faces than exist."""

        required = required_memorize_count(total_questions - 1)
        if len(self.pool) < required:
            self._logger.error(
                "Face pool too small for session",
                extra={"required": required, "available": len(self.pool)},
            )
            raise InsufficientPoolError(required, len(self.pool))

    def start(self, total_questions: int) -> None:
        if self.is_active:
            raise InvalidStateError(
                f"Cannot start while session is {self.state.phase.value}."
            )
        if total_questions < 1:
            raise ValueError("total_questions must be >= 1")
        self.validate_pool(total_questions)

        self.scores.reset()
        now = self._now()
        self.state = SessionState(
            total_questions=total_questions,
            elapsed_start=now,
            elapsed_now=now,
        )
        self._logger.info(
            "Session started",
            extra={
                "total_questions": total_questions,
                "pool_size": len(self.pool),
            },
        )
        self._begin_round()

    def ready_for_choices(self) -> None:
        self._require(Phase.MEMORIZING, "show choices")
        self._choice_set = tuple(self.sampler.shuffle(self._choice_set))
        self.state.phase = Phase.CHOOSING
        self.events.emit("choices_ready", self._choice_set)

    def select_item(self, item: Hashable) -> bool:
        """Handle a pick; return ``True`` when it was a memorized face."""

        self._require(Phase.CHOOSING, "select an item")
        if item not in self._choice_set:
            raise ValueError(f"{item!r} is not one of the current choices.")
        if item in self._disabled:
            raise InvalidStateError(f"{item!r} was already selected.")
        self._disabled.add(item)

        if item not in self._remaining:
            self.scores.record_incorrect()
            self._logger.info(
                "Incorrect pick",
                extra={
                    "round": self.state.round_index,
                    "incorrect_count": self.scores.incorrect_count,
                },
            )
            self.events.emit("item_incorrect", item)
            return False

        self._remaining.remove(item)
        self.events.emit("item_correctly_found", item)
        if not self._remaining:
            state = self.state
            state.correct_answers += 1
            state.current_score += 1
            state.phase = Phase.ROUND_COMPLETE
            self._logger.info(
                "Round complete",
                extra={
                    "round": state.round_index,
                    "correct_answers": state.correct_answers,
                    "total_questions": state.total_questions,
                },
            )
            self.events.emit(
                "round_complete",
                state.correct_answers,
                state.total_questions,
            )
        return True

    def complete_round(self) -> None:
        """Advance after the host's post-round pause has elapsed."""

        if self.state.phase is Phase.STOPPED:
            self._logger.debug("Ignoring round completion after stop")
            return
        self._require(Phase.ROUND_COMPLETE, "complete the round")
        if self.state.correct_answers >= self.state.total_questions:
            self._finish()
        else:
            self._begin_round()

    def on_tick(self, delta_seconds: float) -> None:
        if delta_seconds < 0:
            raise ValueError("delta_seconds must be >= 0")
        if not self.is_active:
            return
        if self._clock is not None:
            self.state.elapsed_now = self._clock()
        else:
            self.state.elapsed_now += delta_seconds

    def stop(self) -> None:
        if not self.is_active:
            self._logger.debug(
                "Stop ignored", extra={"phase": self.state.phase.value}
            )
            return
        self.state.phase = Phase.STOPPED
        self._logger.info(
            "Session stopped",
            extra={
                "round": self.state.round_index,
                "correct_answers": self.state.correct_answers,
            },
        )
        self.events.emit("session_stopped")

    # -- internals -----------------------------------------------------

    def _begin_round(self) -> None:
        try:
            plan = self.planner.plan_round(
                self.pool, self.state.correct_answers
            )
        except InsufficientPoolError:
            self.state.phase = Phase.IDLE
            self._logger.exception("Unable to build round; session aborted")
            raise

        self._plan = plan
        self._choice_set = plan.choice_set
        self._remaining = list(plan.memorize_set)
        self._disabled = set()
        self.state.round_index += 1
        self.state.phase = Phase.MEMORIZING
        self._logger.debug(
            "Round ready",
            extra={
                "round": self.state.round_index,
                "memorize_count": len(plan.memorize_set),
                "choice_count": len(plan.choice_set),
            },
        )
        self.events.emit("round_ready", plan.memorize_set, plan.choice_set)

    def _finish(self) -> None:
        state = self.state
        if self._clock is not None:
            state.elapsed_now = self._clock()
        average = state.elapsed / state.total_questions
        state.final_score = self.scores.finalize(average)
        state.phase = Phase.FINISHED
        self._logger.info(
            "Session finished",
            extra={
                "final_score": state.final_score,
                "elapsed": state.elapsed,
                "incorrect_count": self.scores.incorrect_count,
            },
        )
        self.events.emit("session_finished", state.final_score)

    def _now(self) -> float:
        return self._clock() if self._clock is not None else 0.0

    def _require(self, phase: Phase, action: str) -> None:
        if self.state.phase is not phase:
            raise InvalidStateError(
                f"Cannot {action} while session is {self.state.phase.value}."
            )
