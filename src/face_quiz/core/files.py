"""File discovery helpers shared across face_quiz modules."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Set

__all__ = [
    "parse_extensions",
    "iter_asset_files",
]

DEFAULT_IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg"})


def parse_extensions(
    values: Optional[Sequence[str]],
    *,
    default: Optional[Iterable[str]] = None,
) -> Set[str]:
    """Normalize extension strings to a lowercase set without leading dots.

    Parameters
    ----------
    values:
        Raw extension inputs (with or without leading dots).
        ``None`` returns the provided default set.
    default:
        Fallback extensions when ``values`` is empty. Defaults to the common
        image formats.
    """
    fallback = set(default or DEFAULT_IMAGE_EXTENSIONS)
    if not values:
        return set(fallback)

    normalized: Set[str] = set()
    for item in values:
        if not isinstance(item, str):
            continue
        candidate = item.strip().lower()
        if candidate.startswith("."):
            candidate = candidate[1:]
        if candidate:
            normalized.add(candidate)
    return normalized or set(fallback)


def iter_asset_files(
    root: Path,
    extensions: Set[str],
    level_limit: int = 1,
) -> Iterator[Path]:
    """Yield files under ``root`` matching ``extensions`` sorted by name.

    ``level_limit`` bounds the directory depth (``0`` means no limit).
    """
    if level_limit < 0:
        raise ValueError("level_limit must be >= 0")

    path = Path(root)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    if path.is_file():
        if _matches_extension(path, extensions):
            yield path
        return
    for candidate in _sorted_directory_files(path):
        if level_limit and not _within_level_limit(
            candidate, path, level_limit
        ):
            continue
        if _matches_extension(candidate, extensions):
            yield candidate


def _sorted_directory_files(root: Path) -> List[Path]:
    return sorted(
        (child for child in root.rglob("*") if child.is_file()),
        key=lambda p: p.name.lower(),
    )


def _within_level_limit(path: Path, root: Path, level_limit: int) -> bool:
    try:
        rel = path.relative_to(root)
    except ValueError:
        return False
    return len(rel.parts) <= level_limit


def _matches_extension(path: Path, extensions: Set[str]) -> bool:
    return path.is_file() and path.suffix.lower().lstrip(".") in extensions
