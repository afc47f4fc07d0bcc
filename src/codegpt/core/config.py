"""Configuration management for codegpt."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from codegpt.exceptions import ConfigError

# Global config file
CODEGPT_HOME = Path.home() / ".codegpt"
GLOBAL_CONFIG_FILE = CODEGPT_HOME / "config.json"

CONFIG_PATH_ENV = "CODEGPT_CONFIG"
API_KEY_ENV = "OPENAI_API_KEY"
ENDPOINT_ENV = "OPENAI_ENDPOINT"

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "text-davinci-001"
DEFAULT_MAX_TOKENS = 1024
# Completions of a thousand tokens can take minutes
DEFAULT_TIMEOUT = 300.0

CONFIG_KEYS = ("api_key", "endpoint", "model", "max_tokens", "timeout")


@dataclass(frozen=True)
class Settings:
    """Connection and model settings, resolved once at startup.

    ``model`` and ``max_tokens`` are accepted but not sent with the request;
    the request always asks for the chat model pinned in the client.
    """
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT


def get_config_path() -> Path:
    """Get the path to the config file, honouring ``$CODEGPT_CONFIG``."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return GLOBAL_CONFIG_FILE


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load the JSON config file, or an empty dict when there is none.

    Unknown keys are ignored.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must hold a JSON object")

    return {key: data[key] for key in CONFIG_KEYS if data.get(key) is not None}


def load_settings(
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
    timeout: Optional[float] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """Resolve settings: explicit argument > environment > config file > default.

    Raises:
        ConfigError: if no API key is available or the config file is invalid
    """
    config = load_config(config_path)

    api_key = api_key or os.environ.get(API_KEY_ENV) or config.get("api_key")
    if not api_key:
        raise ConfigError(
            f"No API key given. Pass --api-key or set {API_KEY_ENV}."
        )

    try:
        return Settings(
            api_key=api_key,
            endpoint=endpoint or os.environ.get(ENDPOINT_ENV) or config.get("endpoint", DEFAULT_ENDPOINT),
            model=model or config.get("model", DEFAULT_MODEL),
            max_tokens=int(max_tokens if max_tokens is not None else config.get("max_tokens", DEFAULT_MAX_TOKENS)),
            timeout=float(timeout if timeout is not None else config.get("timeout", DEFAULT_TIMEOUT)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in config file: {e}") from e
