from pathlib import Path

import pytest

from fmselect.config_loader import DEFAULT_TEAM_SIZE, SelectorConfig, load_config
from fmselect.errors import ErrorCode, ParseError, ReadError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("FMSELECT_TEAM_SIZE", "FMSELECT_ROLE_FILE", "FMSELECT_PLAYER_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.team_size == DEFAULT_TEAM_SIZE
    assert config.expected_role_count == 11
    assert config.output_format == "text"
    assert config.role_file is None


def test_zero_team_size_disables_count_check():
    assert SelectorConfig(team_size=0).expected_role_count is None


def test_save_and_load(tmp_path):
    path = tmp_path / "config.json"
    config = SelectorConfig(role_file=Path("roles.txt"), team_size=7, output_format="csv")
    config.save(path)

    assert SelectorConfig.load(path) == config


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FMSELECT_TEAM_SIZE", "5")
    monkeypatch.setenv("FMSELECT_ROLE_FILE", "/tmp/roles.txt")

    config = load_config()

    assert config.team_size == 5
    assert config.role_file == Path("/tmp/roles.txt")
    assert config.player_file is None


def test_invalid_env_int_is_ignored(monkeypatch):
    monkeypatch.setenv("FMSELECT_TEAM_SIZE", "eleven")
    assert load_config().team_size == DEFAULT_TEAM_SIZE


def test_missing_config_file(tmp_path):
    with pytest.raises(ReadError) as exc:
        load_config(tmp_path / "missing.json")
    assert exc.value.code is ErrorCode.E100


@pytest.mark.parametrize("text", ["{not json", '{"team_size": -2}', '{"output_format": "xml"}'])
def test_invalid_config(tmp_path, text):
    path = tmp_path / "config.json"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ParseError) as exc:
        SelectorConfig.load(path)
    assert exc.value.code is ErrorCode.E101


def test_undecodable_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b"\xff\xfe{\x00}")
    with pytest.raises(ReadError) as exc:
        SelectorConfig.load(path)
    assert exc.value.code is ErrorCode.E104
