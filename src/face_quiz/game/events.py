"""Listener contract for quiz session events.

Events are delivered synchronously, in subscription order, from inside the
session call that triggered them. Subscribe before ``QuizSession.start``.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence

__all__ = ["SessionListener", "EventDispatcher"]

logger = logging.getLogger(__name__)


class SessionListener:
    """Base listener; override only the events you care about."""

    def on_round_ready(
        self,
        memorize_set: Sequence[Hashable],
        choice_set: Sequence[Hashable],
    ) -> None:
        pass

    def on_choices_ready(self, choice_set: Sequence[Hashable]) -> None:
        pass

    def on_item_correctly_found(self, item: Hashable) -> None:
        pass

    def on_item_incorrect(self, item: Hashable) -> None:
        pass

    def on_round_complete(
        self, correct_answers: int, total_questions: int
    ) -> None:
        pass

    def on_session_finished(self, final_score: float) -> None:
        pass

    def on_session_stopped(self) -> None:
        pass


class EventDispatcher:
    """Fan-out of named events to the subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, event: str, *args: object) -> None:
        logger.debug("Dispatching session event", extra={"event": event})
        for listener in tuple(self._listeners):
            getattr(listener, f"on_{event}")(*args)
