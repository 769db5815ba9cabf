"""Tests for configuration loading and validation."""

import pytest

from tleague.config_loader import (
    DEFAULT_ADMIN_PASSWORD,
    ConfigError,
    load_and_validate_config,
    load_config,
    validate_config,
)


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults(monkeypatch):
    monkeypatch.delenv("TLEAGUE_LANG", raising=False)
    config = load_and_validate_config()

    assert config["lang"] == "pt"
    assert config["admin_password"] == DEFAULT_ADMIN_PASSWORD
    assert config["group_size"] == 4
    assert config["state_file"].endswith("state.json")


def test_lang_from_env(monkeypatch):
    monkeypatch.setenv("TLEAGUE_LANG", "en")
    assert validate_config({})["lang"] == "en"


def test_load_valid_file(tmp_path):
    path = write_config(
        tmp_path,
        "lang: en\nadmin_password: secret\ngroup_size: 5\nstate_file: league.json\n",
    )
    config = load_and_validate_config(path)

    assert config == {
        "lang": "en",
        "admin_password": "secret",
        "group_size": 5,
        "state_file": "league.json",
    }


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "missing.yaml"))


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(write_config(tmp_path, "lang: [pt\n"))


def test_empty_file(tmp_path):
    with pytest.raises(ConfigError, match="empty"):
        load_config(write_config(tmp_path, ""))


def test_not_a_mapping(tmp_path):
    with pytest.raises(ConfigError, match="mapping"):
        load_config(write_config(tmp_path, "- pt\n- en\n"))


@pytest.mark.parametrize(
    "config, message",
    [
        ({"lang": "es"}, "lang must be one of"),
        ({"admin_password": ""}, "admin_password"),
        ({"admin_password": 1234}, "admin_password"),
        ({"group_size": 1}, "group_size"),
        ({"group_size": 9}, "group_size"),
        ({"group_size": True}, "group_size"),
        ({"group_size": "4"}, "group_size"),
        ({"state_file": "  "}, "state_file"),
    ],
)
def test_invalid_values(config, message):
    with pytest.raises(ConfigError, match=message):
        validate_config(config)
