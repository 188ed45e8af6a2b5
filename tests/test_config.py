import os

import pytest

from toggle_registry import ToggleRegistry
from toggle_registry.config import load_env_toggles, parse_bool


@pytest.mark.parametrize("raw", ["1", "true", "TRUE", " yes ", "On"])
def test_parse_bool_true_values(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", ["0", "false", "no", "off", "", "maybe"])
def test_parse_bool_false_values(raw):
    assert parse_bool(raw) is False


def test_load_env_toggles_from_mapping():
    environ = {
        "TOGGLE_NEW_CHECKOUT": "on",
        "TOGGLE_LEGACY_SEARCH": "0",
        "TOGGLE_": "1",
        "UNRELATED": "1",
    }
    assert load_env_toggles(environ=environ) == {"new_checkout": True, "legacy_search": False}


def test_load_env_toggles_custom_prefix():
    environ = {"FF_DARK_MODE": "yes", "TOGGLE_DARK_MODE": "no"}
    assert load_env_toggles(prefix="FF_", environ=environ) == {"dark_mode": True}


def test_load_env_toggles_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TOGGLE_FROM_PROCESS", "true")
    assert load_env_toggles()["from_process"] is True


def test_from_env_applies_environment_over_defaults():
    registry = ToggleRegistry.from_env(
        environ={"TOGGLE_BETA": "off", "TOGGLE_ALPHA": "on"},
        defaults={"beta": True, "gamma": lambda params: params.get("user") == "admin"},
    )
    assert registry.is_enabled("alpha") is True
    assert registry.is_disabled("beta") is True
    assert registry.is_enabled("gamma", user="admin")


def test_load_env_toggles_reads_dotenv_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("TOGGLE_FROM_DOTENV=on\n")
    monkeypatch.chdir(tmp_path)
    # load_dotenv writes into os.environ; keep that off the real environment
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.delitem(os.environ, "TOGGLE_FROM_DOTENV", raising=False)

    assert load_env_toggles()["from_dotenv"] is True
