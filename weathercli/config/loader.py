"""YAML config loader and credential lookup."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from weathercli.config.schema import AppConfig


class ConfigError(Exception):
    """Raised when the config file cannot be read or fails validation."""


class MissingCredentialError(Exception):
    """Raised when the provider API key is not set."""

    def __init__(self, env_var: str):
        super().__init__(f"{env_var} not set")
        self.env_var = env_var


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults.
    """
    path = Path(path).expanduser()
    if not path.exists():
        return AppConfig()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a YAML mapping")

    try:
        return AppConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def resolve_api_key(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> str:
    """Return the provider API key from the environment.

    When reading the process environment, the nearest ``.env`` file at
    or above the working directory is loaded first without overriding variables already set.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    env_var = config.provider.api_key_env
    api_key = environ.get(env_var, "").strip()
    if not api_key:
        raise MissingCredentialError(env_var)
    return api_key



def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'provider.base_url'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, dict) and part in obj:
            obj = obj[part]
        elif part in getattr(type(obj), "model_fields", {}):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
