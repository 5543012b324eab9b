"""Configuration loader for the face quiz game."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional, Sequence

from face_quiz.core import config as core_config
from face_quiz.core import workspace as workspace_mod

CONFIG_FILENAME = "game.toml"
CONFIG_ENV = "FACE_QUIZ_CONFIG"
ENV_PREFIX = "FACE_QUIZ_"

_DEFAULT_TOTAL_QUESTIONS = 8
_DEFAULT_ROUND_DELAY = 1.0
_DEFAULT_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg")
_DEFAULT_LOG_LEVEL = "INFO"


class GameConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class GameConfig:
    """Fully resolved configuration for a game run."""

    total_questions: int
    round_delay: float
    seed: Optional[int]
    faces_dir: Optional[Path]
    extensions: tuple[str, ...]
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    total_questions: Optional[int] = None
    round_delay: Optional[float] = None
    seed: Optional[int] = None
    faces_dir: Optional[Path] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: GameConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    loaded_path: Optional[Path] = None
    if requested_path.exists():
        try:
            table = core_config.load_with_defaults(
                requested_path, _default_table()
            )
        except core_config.TomlConfigError as exc:
            raise GameConfigError(str(exc)) from exc
        loaded_path = requested_path
    elif config_path is not None or _env_value(env_map, "CONFIG"):
        raise GameConfigError(f"Config file not found: {requested_path}")
    else:
        table = _default_table()

    game = table["game"]
    faces = table["faces"]

    total_questions = _resolve_int(
        "game.total_questions",
        _pick_first(
            overrides.total_questions,
            _env_value(env_map, "TOTAL_QUESTIONS"),
            game["total_questions"],
        ),
        minimum=1,
    )
    round_delay = _resolve_float(
        "game.round_delay",
        _pick_first(
            overrides.round_delay,
            _env_value(env_map, "ROUND_DELAY"),
            game["round_delay"],
        ),
    )
    seed = _resolve_int(
        "game.seed",
        _pick_first(overrides.seed, _env_value(env_map, "SEED"), game["seed"]),
        minimum=0,
    )
    faces_dir = _resolve_faces_dir(
        _pick_first(
            overrides.faces_dir,
            _env_value(env_map, "FACES_DIR"),
            faces["directory"],
        ),
        layout=layout,
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _env_value(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        )
    )

    config = GameConfig(
        total_questions=total_questions,
        round_delay=round_delay,
        seed=seed or None,
        faces_dir=faces_dir,
        extensions=_normalize_extensions(faces["extensions"]),
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return {
        "game": {
            "total_questions": _DEFAULT_TOTAL_QUESTIONS,
            "round_delay": _DEFAULT_ROUND_DELAY,
            "seed": 0,
        },
        "faces": {
            "directory": "",
            "extensions": list(_DEFAULT_EXTENSIONS),
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_value(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_int(key: str, value: object, *, minimum: int) -> int:
    if isinstance(value, bool):
        raise GameConfigError(f"{key} must be an integer.")
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise GameConfigError(f"{key} must be an integer.") from exc
    if isinstance(value, float) and not value.is_integer():
        raise GameConfigError(f"{key} must be an integer.")
    if number < minimum:
        raise GameConfigError(f"{key} must be >= {minimum}.")
    return number


def _resolve_float(key: str, value: object) -> float:
    if isinstance(value, bool):
        raise GameConfigError(f"{key} must be a number.")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise GameConfigError(f"{key} must be a number.") from exc
    if not math.isfinite(number):
        raise GameConfigError(f"{key} must be a finite number.")
    if number < 0:
        raise GameConfigError(f"{key} must be >= 0.")
    return number


def _resolve_faces_dir(
    value: object, *, layout: workspace_mod.WorkspaceLayout
) -> Optional[Path]:
    if isinstance(value, Path):
        candidate = value
    elif isinstance(value, str):
        if not value.strip():
            return _workspace_faces(layout)
        candidate = Path(value.strip())
    else:
        raise GameConfigError("faces.directory must be a string.")
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        candidate = layout.home / candidate
    return candidate.resolve()


def _workspace_faces(layout: workspace_mod.WorkspaceLayout) -> Optional[Path]:
    faces = layout.path_for("faces")
    if faces.is_dir() and any(faces.iterdir()):
        return faces
    return None


def _normalize_extensions(value: object) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise GameConfigError("faces.extensions must be a list of strings.")
    result: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise GameConfigError("Extensions must be non-empty strings.")
        normalized = item.strip().lower().lstrip(".")
        if normalized not in result:
            result.append(normalized)
    if not result:
        raise GameConfigError("At least one extension must be configured.")
    return tuple(result)


def _resolve_log_level(candidate: object) -> str:
    if not isinstance(candidate, str) or not candidate.strip():
        raise GameConfigError("logging.level must be a non-empty string.")
    return candidate.strip().upper()


def _env_value(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
