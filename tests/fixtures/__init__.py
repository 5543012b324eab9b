"""Shared testing fixtures for the face_quiz test suite."""

from .session import FakeClock, RecordingListener, play_round  # noqa: F401
from .workspace import WorkspaceBuilder, build_tree  # noqa: F401

__all__ = [
    "FakeClock",
    "RecordingListener",
    "WorkspaceBuilder",
    "build_tree",
    "play_round",
]
