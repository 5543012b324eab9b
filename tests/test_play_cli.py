from __future__ import annotations

import builtins
import logging

import pytest

from face_quiz.game.config import CONFIG_FILENAME
from face_quiz.play import cli as play_cli


@pytest.fixture(autouse=True)
def _isolate_workspace(tmp_path, monkeypatch):
    monkeypatch.setenv("FACE_QUIZ_DATA_HOME", str(tmp_path / "ws"))
    for key in ("FACE_QUIZ_CONFIG", "FACE_QUIZ_SEED", "FACE_QUIZ_FACES_DIR"):
        monkeypatch.delenv(key, raising=False)


def test_play_quits_cleanly(tmp_path, monkeypatch, capsys):
    answers = iter(["", "q"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    code = play_cli.main(["--questions", "2", "--seed", "5"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Game abandoned" in captured.out
    assert "Game abandoned after 0 round(s)" in captured.out
    log_file = tmp_path / "ws" / "logs" / "play.log"
    assert "Starting game" in log_file.read_text(encoding="utf-8")


def test_play_reports_small_pool(workspace, monkeypatch, capsys):
    faces_dir = workspace.face_dir(["solo"])
    monkeypatch.setattr(
        builtins,
        "input",
        lambda prompt="": pytest.fail("game should not prompt"),
    )

    code = play_cli.main(
        ["--faces-dir", str(faces_dir), "--questions", "3"]
    )

    captured = capsys.readouterr()
    assert code == 1
    assert "Cannot start game" in captured.out


def test_play_rejects_invalid_config(tmp_path, capsys):
    bad = tmp_path / "bad.toml"
    bad.write_text("[game]\ntotal_questions = 0\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        play_cli.main(["--config", str(bad)])

    assert excinfo.value.code == 2
    assert "total_questions" in capsys.readouterr().err


def test_config_init_writes_template(tmp_path, capsys):
    workspace_root = tmp_path / "init-ws"

    code = play_cli.main(["config", "init", "--workspace", str(workspace_root)])

    target = workspace_root / "config" / CONFIG_FILENAME
    assert code == 0
    assert target.exists()
    assert "[game]" in target.read_text(encoding="utf-8")
    assert str(target) in capsys.readouterr().out

    code = play_cli.main(["config", "init", "--workspace", str(workspace_root)])
    assert code == 1
    assert "already exists" in capsys.readouterr().err

    code = play_cli.main(
        ["config", "init", "--workspace", str(workspace_root), "--force"]
    )
    assert code == 0


def test_config_init_custom_path(tmp_path):
    target = tmp_path / "custom" / "game.toml"

    code = play_cli.main(["config", "init", "--path", str(target)])

    assert code == 0
    assert target.exists()


def test_logger_handlers_released_after_game(monkeypatch):
    answers = iter(["q"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    play_cli.main(["--questions", "1"])

    logger = logging.getLogger("face_quiz.play")
    assert not [
        handler
        for handler in logger.handlers
        if getattr(handler, "_face_quiz_file", False)
        or getattr(handler, "_face_quiz_console", False)
    ]
