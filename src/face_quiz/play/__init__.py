"""Terminal front end for the face quiz."""

from __future__ import annotations

from .terminal import (
    GameOutcome,
    PlayCommand,
    TerminalPresenter,
    format_timer,
    parse_play_command,
    run_terminal_game,
)

__all__ = [
    "GameOutcome",
    "PlayCommand",
    "TerminalPresenter",
    "format_timer",
    "parse_play_command",
    "run_terminal_game",
]
