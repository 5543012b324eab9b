from __future__ import annotations

import pytest

from face_quiz.core import config as core_config


DEFAULTS = {"game": {"total_questions": 8, "seed": 0}, "logging": {"level": "INFO"}}


def test_load_with_defaults_overlays_file(tmp_path):
    path = tmp_path / "game.toml"
    path.write_text("[game]\nseed = 42\n", encoding="utf-8")

    table = core_config.load_with_defaults(path, DEFAULTS)

    assert table["game"] == {"total_questions": 8, "seed": 42}
    assert table["logging"] == {"level": "INFO"}
    assert DEFAULTS["game"]["seed"] == 0


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "game.toml"
    path.write_text("[game]\ndifficulty = 'hard'\n", encoding="utf-8")

    with pytest.raises(core_config.TomlConfigError, match="game.difficulty"):
        core_config.load_with_defaults(path, DEFAULTS)


def test_scalar_in_place_of_table(tmp_path):
    path = tmp_path / "game.toml"
    path.write_text("game = 3\n", encoding="utf-8")

    with pytest.raises(core_config.TomlConfigError, match="Expected table"):
        core_config.load_with_defaults(path, DEFAULTS)


def test_load_toml_errors(tmp_path):
    with pytest.raises(core_config.TomlConfigError, match="not found"):
        core_config.load_toml(tmp_path / "missing.toml")

    broken = tmp_path / "broken.toml"
    broken.write_text("[game\n", encoding="utf-8")
    with pytest.raises(core_config.TomlConfigError, match="parse"):
        core_config.load_toml(broken)


def test_write_toml_template(tmp_path):
    target = tmp_path / "config" / "game.toml"

    core_config.write_toml_template(target, template="[game]\n")
    assert target.read_text(encoding="utf-8") == "[game]\n"

    with pytest.raises(core_config.TomlConfigError):
        core_config.write_toml_template(target, template="")
    core_config.write_toml_template(target, template="", overwrite=True)
    assert target.read_text(encoding="utf-8") == ""
