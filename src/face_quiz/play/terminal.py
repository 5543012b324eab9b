"""Rich-powered terminal host for a face quiz session.

The host owns everything the quiz core leaves outside: rendering, reading
commands, the running timer and the pause after each cleared round. It only
talks to the core through ``QuizSession``'s public API and listener events.
"""

from __future__ import annotations

import time
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Callable, Literal

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from face_quiz.game.events import SessionListener
from face_quiz.game.session import Phase, QuizSession

__all__ = [
    "GameOutcome",
    "PlayCommand",
    "TerminalPresenter",
    "format_timer",
    "parse_play_command",
    "run_terminal_game",
]

InputProvider = Callable[[], str]
Sleeper = Callable[[float], None]
GRID_COLUMNS = 3


@dataclass(frozen=True)
class GameOutcome:
    """Return value from ``run_terminal_game``."""

    final_score: float | None
    stopped: bool
    correct_answers: int
    incorrect_count: int
    elapsed: float


@dataclass(frozen=True)
class PlayCommand:
    """Normalized player command parsed from console input."""

    type: Literal["ready", "pick", "quit"]
    value: str | None = None


def parse_play_command(raw: str | None, *, phase: Phase) -> PlayCommand | None:
    """Parse raw input for the current phase; ``None`` when unrecognized."""

    if raw is None:
        return None
    text = raw.strip()
    lowered = text.lower()
    if lowered in {"q", "quit", "exit"}:
        return PlayCommand("quit")
    if phase is Phase.MEMORIZING:
        if lowered in {"", "r", "ready"}:
            return PlayCommand("ready")
        return None
    if phase is Phase.CHOOSING and text:
        return PlayCommand("pick", text)
    return None


def format_timer(seconds: float) -> str:
    """Render elapsed seconds as ``MM : SS``."""

    total = int(max(0.0, seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d} : {secs:02d}"


class TerminalPresenter(SessionListener):
    """Renders session events to a Rich console."""

    def __init__(self, session: QuizSession, console: Console) -> None:
        self.session = session
        self.console = console

    def on_round_ready(
        self,
        memorize_set: Sequence[Hashable],
        choice_set: Sequence[Hashable],
    ) -> None:
        self.console.print()
        self.console.rule(
            Text(f"Round {self.session.state.round_index}", style="bold cyan")
        )
        self.render_status()
        self.console.print(
            Panel(
                _face_grid(memorize_set),
                title="Memorize these faces!",
                border_style="cyan",
            )
        )
        self.console.print(
            Text("Press Enter when ready, or q to quit.", style="dim")
        )

    def on_choices_ready(self, choice_set: Sequence[Hashable]) -> None:
        self.render_choices()

    def on_item_correctly_found(self, item: Hashable) -> None:
        left = len(self.session.remaining)
        suffix = f" {left} to go." if left else ""
        self.console.print(
            f"[bold green]Found {escape(str(item))}![/]{suffix}"
        )

    def on_item_incorrect(self, item: Hashable) -> None:
        self.console.print(
            f"[red]{escape(str(item))} was not on the list.[/red]"
        )

    def on_round_complete(
        self, correct_answers: int, total_questions: int
    ) -> None:
        self.console.print(
            f"[bold green]Round cleared[/] ({correct_answers}/{total_questions})"
        )

    def on_session_finished(self, final_score: float) -> None:
        self.console.print()
        self.console.rule(Text("Result", style="bold magenta"))
        summary = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
        summary.add_column("Metric", style="bold")
        summary.add_column("Value", justify="right")
        summary.add_row("Time", format_timer(self.session.elapsed))
        summary.add_row("Mistakes", str(self.session.incorrect_count))
        self.console.print(summary)
        self.console.print(
            Panel(
                Text(f"Score: {int(final_score)}", style="bold"),
                border_style="magenta",
            )
        )

    def on_session_stopped(self) -> None:
        self.console.print("\n[bold yellow]Game abandoned.[/]")

    def render_status(self) -> None:
        state = self.session.state
        self.console.print(
            Text(
                f"Score {state.current_score} / {state.total_questions} | "
                f"Time {format_timer(state.elapsed)}",
                style="dim",
            )
        )

    def render_choices(self) -> None:
        session = self.session
        table = Table(show_header=False, box=box.SIMPLE, expand=True)
        for _ in range(GRID_COLUMNS):
            table.add_column(justify="center")
        cells = []
        for index, item in enumerate(session.choice_set, start=1):
            cell = Text(f"{index}. {item}")
            if not session.is_selectable(item):
                cell.stylize("dim strike")
            cells.append(cell)
        for row in _rows(cells):
            table.add_row(*row)
        self.console.print(
            Panel(
                table,
                title="Pick the faces you memorized!",
                border_style="green",
            )
        )
        self.console.print(
            Text("Enter a number or a name, or q to quit.", style="dim")
        )


def run_terminal_game(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
    *,
    total_questions: int,
    round_delay: float = 1.0,
    sleep: Sleeper = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> GameOutcome:
    """Play a full game in the terminal and return its outcome."""

    presenter = TerminalPresenter(session, console)
    session.subscribe(presenter)
    last_tick = clock()

    def tick() -> None:
        nonlocal last_tick
        now = clock()
        session.on_tick(max(0.0, now - last_tick))
        last_tick = now

    try:
        session.start(total_questions)
        while session.is_active:
            if session.phase is Phase.ROUND_COMPLETE:
                sleep(round_delay)
                tick()
                session.complete_round()
                continue
            try:
                raw = input_provider()
            except (EOFError, KeyboardInterrupt, StopIteration):
                session.stop()
                break
            tick()
            command = parse_play_command(raw, phase=session.phase)
            if command is None:
                console.print("[red]Unrecognized command. Try again.[/]")
                continue
            _apply_command(command, session, presenter)
    finally:
        session.unsubscribe(presenter)

    return GameOutcome(
        final_score=session.final_score,
        stopped=session.phase is Phase.STOPPED,
        correct_answers=session.correct_answers,
        incorrect_count=session.incorrect_count,
        elapsed=session.elapsed,
    )


def _apply_command(
    command: PlayCommand,
    session: QuizSession,
    presenter: TerminalPresenter,
) -> None:
    if command.type == "quit":
        session.stop()
        return
    if command.type == "ready":
        session.ready_for_choices()
        return
    item = _resolve_choice(command.value or "", session.choice_set)
    if item is None:
        presenter.console.print(
            "[red]'%s' is not one of the faces shown.[/red]"
            % escape(command.value or "")
        )
        return
    if not session.is_selectable(item):
        presenter.console.print(
            f"[yellow]{escape(str(item))} was already picked.[/]"
        )
        return
    session.select_item(item)
    if session.phase is Phase.CHOOSING:
        presenter.render_choices()


def _resolve_choice(
    value: str, choices: Sequence[Hashable]
) -> Hashable | None:
    """Match a face name first, then a 1-based grid number."""

    lowered = value.lower()
    for item in choices:
        if str(item).lower() == lowered:
            return item
    if value.isdigit():
        index = int(value) - 1
        if 0 <= index < len(choices):
            return choices[index]
    return None


def _face_grid(items: Sequence[Hashable]) -> Table:
    grid = Table.grid(expand=True, padding=(0, 2))
    columns = min(GRID_COLUMNS, max(1, len(items)))
    for _ in range(columns):
        grid.add_column(justify="center")
    for row in _rows([Text(str(item), style="bold") for item in items]):
        grid.add_row(*row[:columns])
    return grid


def _rows(cells: list[Text]) -> list[list[Text]]:
    rows = []
    for start in range(0, len(cells), GRID_COLUMNS):
        row = cells[start : start + GRID_COLUMNS]
        row.extend(Text("") for _ in range(GRID_COLUMNS - len(row)))
        rows.append(row)
    return rows
