"""CLI entry point for playing the face quiz in a terminal."""

from __future__ import annotations

import argparse
import random
import secrets
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.panel import Panel

from face_quiz.core import config_templates
from face_quiz.core import workspace as workspace_mod
from face_quiz.core.config_templates import ConfigTemplateError
from face_quiz.core.logging import configure_logger, release_logger
from face_quiz.core.workspace import WorkspaceError
from face_quiz.game.config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    GameConfigError,
    load_config,
)
from face_quiz.game.errors import InsufficientPoolError
from face_quiz.game.pool import load_face_pool
from face_quiz.game.session import QuizSession

from .terminal import GameOutcome, run_terminal_game


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="faces play",
        description=(
            "Memorize a handful of faces, then pick them out of a grid of "
            "decoys. Faster rounds and fewer mistakes score higher."
        ),
        epilog=(
            "Run `faces play config init` to scaffold the default game.toml "
            "template."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and log paths.",
    )
    parser.add_argument(
        "--questions",
        type=int,
        help="Rounds to clear before the game is scored.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the face selection for a reproducible game.",
    )
    parser.add_argument(
        "--faces-dir",
        type=Path,
        help="Directory of face images; file names become the faces.",
    )
    parser.add_argument(
        "--round-delay",
        type=float,
        help="Pause in seconds after each cleared round.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = _build_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        total_questions=args.questions,
        round_delay=args.round_delay,
        seed=args.seed,
        faces_dir=args.faces_dir,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except (GameConfigError, WorkspaceError) as exc:
        parser.error(str(exc))

    config = load_result.config
    try:
        pool = load_face_pool(config.faces_dir, extensions=config.extensions)
    except (FileNotFoundError, ValueError) as exc:
        sys.stderr.write(f"Unable to load faces: {exc}\n")
        return 1

    logger, log_path = configure_logger(
        "face_quiz.play",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    seed = config.seed
    if seed is None:
        seed = secrets.randbits(32)
    logger.info(
        "Starting game",
        extra={
            "seed": seed,
            "pool_size": len(pool),
            "faces_dir": str(config.faces_dir) if config.faces_dir else None,
            "config_path": load_result.config_path,
        },
    )

    console = Console()
    try:
        session = QuizSession(pool, rng=random.Random(seed), logger=logger)
        outcome = run_terminal_game(
            session,
            console,
            _read_command,
            total_questions=config.total_questions,
            round_delay=config.round_delay,
        )
    except InsufficientPoolError as exc:
        console.print(
            Panel(str(exc), title="Cannot start game", border_style="red")
        )
        return 1
    finally:
        release_logger(logger)

    _print_summary(console, outcome, log_path)
    return 0


def _read_command() -> str:
    return input("> ")


def _print_summary(
    console: Console, outcome: GameOutcome, log_path: Path
) -> None:
    status = "abandoned" if outcome.stopped else "finished"
    console.print(
        f"[dim]Game {status} after {outcome.correct_answers} round(s); "
        f"log file: {log_path}[/]"
    )


def _handle_config(argv: Sequence[str]) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(argv)

    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    template = config_templates.get_template("game")
    try:
        written = template.write(target, overwrite=args.force)
    except ConfigTemplateError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    sys.stdout.write(f"Wrote game config to {written}\n")
    return 0


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="faces play config",
        description="Manage configuration files for the face quiz.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Write the default game.toml template.",
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to the workspace "
            "config directory)."
        ),
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root used when resolving the default config path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    return parser


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        return args.path.expanduser()
    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
