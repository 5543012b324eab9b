from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the package is not installed.
ROOT = TESTS_DIR.parent
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from fixtures import FakeClock, RecordingListener, WorkspaceBuilder  # noqa: E402


FACES = tuple(f"face-{index:02d}" for index in range(20))


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source so draws are reproducible."""

    return random.Random(1234)


@pytest.fixture
def faces() -> tuple[str, ...]:
    return FACES


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)
