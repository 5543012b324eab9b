"""Face pools: the fixed set of identifiers a session draws from."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from ..core.files import iter_asset_files, parse_extensions

__all__ = [
    "DEFAULT_FACES",
    "build_pool",
    "load_face_pool",
]

# Used when no image directory is configured. Large enough for the default
# eight-question game plus a full grid of decoys every round.
DEFAULT_FACES: tuple[str, ...] = (
    "aiko",
    "bruno",
    "chen",
    "dara",
    "emeka",
    "farah",
    "goran",
    "hana",
    "ines",
    "jonas",
    "kiri",
    "lena",
    "mateo",
    "nadia",
    "oskar",
    "priya",
    "quinn",
    "rosa",
    "sami",
    "tomas",
    "uma",
    "viktor",
    "wen",
    "yusuf",
)


def build_pool(items: Iterable[str]) -> tuple[str, ...]:
    """Normalize ``items`` into a pool, rejecting blanks and duplicates."""

    pool: list[str] = []
    seen: set[str] = set()
    for raw in items:
        item = str(raw).strip()
        if not item:
            raise ValueError("Face identifiers must be non-empty.")
        key = item.lower()
        if key in seen:
            raise ValueError(f"Duplicate face identifier '{item}'.")
        seen.add(key)
        pool.append(item)
    return tuple(pool)


def load_face_pool(
    directory: Path | None,
    *,
    extensions: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Return face identifiers from image files in ``directory``.

    Identifiers are file stems. ``None`` or an empty directory yields the
    built-in roster.
    """

    if directory is None:
        return DEFAULT_FACES
    allowed = parse_extensions(extensions)
    files = list(iter_asset_files(Path(directory), allowed))
    if not files:
        return DEFAULT_FACES
    return build_pool(path.stem for path in files)
