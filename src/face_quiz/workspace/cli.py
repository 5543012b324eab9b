"""CLI entry point that bootstraps the face quiz workspace."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from face_quiz.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="faces init",
        description=(
            "Create the face-quiz workspace with its config, logs and faces "
            "directories."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to FACE_QUIZ_DATA_HOME "
            "or ~/.face-quiz-data)."
        ),
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _format_created(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(
    argv: Sequence[str] | None = None, *, console: Console | None = None
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        parser.exit(1, f"{exc}\n")

    if args.quiet:
        return 0

    console = console or Console()
    created = layout.created
    console.print(
        f"Workspace ready at {layout.home} ({_format_created(created, 'home')})"
    )
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Status", style="dim")
    for name, directory in layout.items():
        table.add_row(name, str(directory), _format_created(created, name))
    console.print(table)
    console.print(
        "Drop face images into the faces directory to play with your own "
        "roster."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
