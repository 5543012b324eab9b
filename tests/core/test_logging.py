from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from face_quiz.core import logging as core_logging


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        handler
        for handler in logger.handlers
        if getattr(handler, "_face_quiz_console", False)
    ]


def test_configure_logger_writes_json_lines(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "face_quiz.test_json",
        log_dir=tmp_path / "logs",
        filename="json.log",
    )

    logger.info("round ready", extra={"round": 2, "faces": ("ann", "bo")})
    try:
        raise ValueError("pool exhausted")
    except ValueError:
        logger.exception(
            "round failed",
            extra={"path": Path("faces"), "owner": object()},
        )
    logger.debug("not written at INFO")
    core_logging.release_logger(logger)

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["message"] == "round ready"
    assert first["level"] == "INFO"
    assert first["logger"] == "face_quiz.test_json"
    assert first["extra"] == {"round": 2, "faces": ["ann", "bo"]}

    second = json.loads(lines[1])
    assert "pool exhausted" in second["exception"]
    assert second["extra"]["path"] == "faces"
    assert second["extra"]["owner"].startswith("<object")


def test_default_filename_uses_logger_suffix(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "face_quiz.play_suffix", log_dir=tmp_path
    )
    core_logging.release_logger(logger)

    assert log_path == tmp_path / "play_suffix.log"


def test_verbose_adds_single_rich_handler(tmp_path):
    console = Console(record=True, width=120)
    name = "face_quiz.test_verbose"

    logger, _ = core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=True, console=console
    )
    core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=True, console=console
    )
    handlers = _console_handlers(logger)
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)

    logger.debug("debug goes to console")
    assert "debug goes to console" in console.export_text()

    core_logging.configure_logger(name, log_dir=tmp_path, verbose=False)
    assert _console_handlers(logger) == []
    core_logging.release_logger(logger)


def test_release_logger_keeps_foreign_handlers(tmp_path):
    logger, _ = core_logging.configure_logger(
        "face_quiz.test_release", log_dir=tmp_path
    )
    foreign = logging.NullHandler()
    logger.addHandler(foreign)

    core_logging.release_logger(logger)

    assert logger.handlers == [foreign]
    logger.removeHandler(foreign)


def test_blocked_log_dir_falls_back_to_tempdir(tmp_path, monkeypatch):
    blocked = tmp_path / "blocked"
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path / "tmp"))
    original_mkdir = Path.mkdir

    def fake_mkdir(self, *args, **kwargs):  # noqa: ANN001
        if self == blocked:
            raise PermissionError("denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", fake_mkdir)

    logger, log_path = core_logging.configure_logger(
        "face_quiz.test_blocked", log_dir=blocked, filename="blocked.log"
    )
    logger.info("still logged")
    core_logging.release_logger(logger)

    assert log_path.parent == tmp_path / "tmp" / "face-quiz-logs"
    assert "still logged" in log_path.read_text(encoding="utf-8")


def test_unwritable_file_uses_fallback_handler(tmp_path, monkeypatch):
    fallback_dir = tmp_path / "rotate-fallback"
    calls = {"count": 0}
    original_handler = core_logging.RotatingFileHandler

    def flaky_handler(path, *args, **kwargs):  # noqa: ANN001
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return original_handler(path, *args, **kwargs)

    monkeypatch.setattr(core_logging, "RotatingFileHandler", flaky_handler)
    monkeypatch.setattr(core_logging, "_fallback_log_dir", lambda: fallback_dir)

    logger, log_path = core_logging.configure_logger(
        "face_quiz.test_rotate", log_dir=tmp_path / "primary"
    )
    core_logging.release_logger(logger)

    assert log_path == fallback_dir / "test_rotate.log"
    assert calls["count"] == 2


def test_unknown_level_defaults_to_info(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "face_quiz.test_level", log_dir=tmp_path, level="chatty"
    )
    logger.debug("hidden")
    logger.info("shown")
    core_logging.release_logger(logger)

    contents = log_path.read_text(encoding="utf-8")
    assert "shown" in contents
    assert "hidden" not in contents
