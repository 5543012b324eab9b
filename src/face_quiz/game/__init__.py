"""Memorize-the-faces quiz core: sampling, round planning, scoring, sessions."""

from __future__ import annotations

from .config import (
    ConfigOverrides,
    GameConfig,
    GameConfigError,
    LoadResult,
    load_config,
)
from .errors import InsufficientPoolError, InvalidStateError, QuizError
from .events import EventDispatcher, SessionListener
from .planner import (
    DEFAULT_CHOICE_COUNT,
    RoundPlan,
    RoundPlanner,
    required_memorize_count,
)
from .pool import DEFAULT_FACES, build_pool, load_face_pool
from .sampler import Sampler
from .scoring import ScoreEngine
from .session import Phase, QuizSession, SessionSnapshot, SessionState

__all__ = [
    "ConfigOverrides",
    "GameConfig",
    "GameConfigError",
    "LoadResult",
    "load_config",
    "InsufficientPoolError",
    "InvalidStateError",
    "QuizError",
    "EventDispatcher",
    "SessionListener",
    "DEFAULT_CHOICE_COUNT",
    "RoundPlan",
    "RoundPlanner",
    "required_memorize_count",
    "DEFAULT_FACES",
    "build_pool",
    "load_face_pool",
    "Sampler",
    "ScoreEngine",
    "Phase",
    "QuizSession",
    "SessionSnapshot",
    "SessionState",
]
