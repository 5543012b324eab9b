from __future__ import annotations

from rich.console import Console

from face_quiz.workspace import cli


def make_console() -> Console:
    return Console(record=True, width=200)


def test_faces_init_creates_workspace(tmp_path, monkeypatch):
    target = tmp_path / "workspace"
    monkeypatch.setenv("FACE_QUIZ_DATA_HOME", str(target))
    console = make_console()

    code = cli.main([], console=console)

    assert code == 0
    assert "Workspace ready" in console.export_text()
    for name in ("config", "logs", "faces"):
        assert (target / name).is_dir()


def test_faces_init_supports_custom_path(tmp_path):
    target = tmp_path / "custom"
    console = make_console()

    code = cli.main(["--path", str(target)], console=console)

    assert code == 0
    assert target.is_dir()
    assert str(target) in console.export_text()


def test_faces_init_reports_existing_dirs(tmp_path):
    target = tmp_path / "again"
    cli.main(["--path", str(target), "--quiet"])
    console = make_console()

    cli.main(["--path", str(target)], console=console)

    assert "exists" in console.export_text()
    assert "created" not in console.export_text()


def test_faces_init_quiet_mode(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("FACE_QUIZ_DATA_HOME", str(tmp_path / "quiet"))

    code = cli.main(["--quiet"])

    assert code == 0
    assert capsys.readouterr().out == ""


def test_faces_init_rejects_file_target(tmp_path, capsys):
    target = tmp_path / "occupied"
    target.write_text("x", encoding="utf-8")

    try:
        cli.main(["--path", str(target)])
    except SystemExit as exc:
        assert exc.code == 1
    else:  # pragma: no cover - failure path
        raise AssertionError("expected SystemExit")
    assert "not a directory" in capsys.readouterr().err
