"""Tests for settings resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codegpt.core import config
from codegpt.core.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT,
    get_config_path,
    load_config,
    load_settings,
)
from codegpt.exceptions import CodegptError, ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the user's environment and config file."""
    monkeypatch.delenv(config.API_KEY_ENV, raising=False)
    monkeypatch.delenv(config.ENDPOINT_ENV, raising=False)
    monkeypatch.setenv(config.CONFIG_PATH_ENV, str(tmp_path / "missing.json"))


def _write_config(tmp_path, data) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


def test_defaults():
    settings = load_settings(api_key="sk-test")
    assert settings.api_key == "sk-test"
    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.model == DEFAULT_MODEL
    assert settings.max_tokens == DEFAULT_MAX_TOKENS
    assert settings.timeout == DEFAULT_TIMEOUT == 300.0


def test_missing_api_key_raises():
    with pytest.raises(ConfigError, match="API key"):
        load_settings()


def test_environment_supplies_key_and_endpoint(monkeypatch):
    monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
    monkeypatch.setenv(config.ENDPOINT_ENV, "http://localhost:8080/v1/chat/completions")
    settings = load_settings()
    assert settings.api_key == "sk-env"
    assert settings.endpoint == "http://localhost:8080/v1/chat/completions"


def test_argument_beats_environment(monkeypatch):
    monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
    assert load_settings(api_key="sk-arg").api_key == "sk-arg"


def test_config_file_fills_gaps(tmp_path):
    path = _write_config(tmp_path, {
        "api_key": "sk-file",
        "model": "gpt-4",
        "max_tokens": 256,
        "timeout": 30,
        "unknown": "ignored",
    })
    settings = load_settings(config_path=path)
    assert settings.api_key == "sk-file"
    assert settings.model == "gpt-4"
    assert settings.max_tokens == 256
    assert settings.timeout == 30.0


def test_environment_beats_config_file(monkeypatch, tmp_path):
    path = _write_config(tmp_path, {"api_key": "sk-file", "endpoint": "http://file"})
    monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
    settings = load_settings(config_path=path)
    assert settings.api_key == "sk-env"
    assert settings.endpoint == "http://file"


def test_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(config.CONFIG_PATH_ENV, str(tmp_path / "custom.json"))
    assert get_config_path() == tmp_path / "custom.json"


def test_missing_config_file_is_empty(tmp_path):
    assert load_config(tmp_path / "nope.json") == {}


def test_invalid_config_file_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_object_config_file_raises(tmp_path):
    path = _write_config(tmp_path, ["api_key"])
    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_max_tokens_in_config_raises(tmp_path):
    path = _write_config(tmp_path, {"api_key": "k", "max_tokens": "lots"})
    with pytest.raises(ConfigError):
        load_settings(config_path=path)


def test_timeout_argument_beats_config_file(tmp_path):
    path = _write_config(tmp_path, {"api_key": "k", "timeout": 30})
    assert load_settings(timeout=5, config_path=path).timeout == 5.0


def test_config_error_is_a_codegpt_error():
    assert issubclass(ConfigError, CodegptError)
