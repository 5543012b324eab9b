from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from face_quiz.core import workspace


def test_ensure_workspace_creates_game_directories(tmp_path):
    root = tmp_path / "data"

    layout = workspace.ensure_workspace(env={workspace.WORKSPACE_ENV: str(root)})

    assert layout.home == root.resolve()
    assert [name for name, _ in layout.items()] == ["config", "logs", "faces"]
    for name, path in layout.items():
        assert path.is_dir()
        assert layout.created[name] is True
    assert layout.created["home"] is True


def test_second_run_reports_existing(tmp_path):
    env = {workspace.WORKSPACE_ENV: str(tmp_path / "existing")}

    workspace.ensure_workspace(env=env)
    again = workspace.ensure_workspace(env=env)

    assert not any(again.created.values())


def test_explicit_path_beats_environment(tmp_path):
    env = {workspace.WORKSPACE_ENV: str(tmp_path / "from-env")}

    layout = workspace.ensure_workspace(env=env, path=tmp_path / "explicit")

    assert layout.home == (tmp_path / "explicit").resolve()
    assert not (tmp_path / "from-env").exists()


def test_create_false_leaves_disk_untouched(tmp_path):
    root = tmp_path / "deferred"

    layout = workspace.ensure_workspace(path=root, create=False)

    assert layout.path_for("faces") == root.resolve() / "faces"
    assert not root.exists()


def test_file_in_place_of_workspace_errors(tmp_path):
    target = tmp_path / "file"
    target.write_text("not a dir", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError, match="not a directory"):
        workspace.ensure_workspace(path=target)


def test_file_in_place_of_subdir_errors_without_create(tmp_path):
    root = tmp_path / "ws"
    root.mkdir()
    (root / "faces").write_text("oops", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError, match="faces"):
        workspace.ensure_workspace(path=root, create=False)


def test_path_for_unknown_key(tmp_path):
    layout = workspace.ensure_workspace(path=tmp_path, create=False)

    with pytest.raises(KeyError):
        layout.path_for("decks")


def test_default_location_falls_back_to_tempdir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path))
    real_ensure_dir = workspace._ensure_dir

    def deny_default(path: Path) -> bool:
        if path == workspace.DEFAULT_WORKSPACE.resolve():
            raise PermissionError("denied")
        return real_ensure_dir(path)

    monkeypatch.setattr(workspace, "_ensure_dir", deny_default)

    layout = workspace.ensure_workspace(env={})

    assert layout.home == tmp_path / "face-quiz-data"
    assert layout.path_for("faces").is_dir()


def test_override_never_falls_back(tmp_path, monkeypatch):
    def deny(path: Path) -> bool:
        raise PermissionError("nope")

    monkeypatch.setattr(workspace, "_ensure_dir", deny)

    with pytest.raises(workspace.WorkspaceError):
        workspace.ensure_workspace(path=tmp_path / "locked")
