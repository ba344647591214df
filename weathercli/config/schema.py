"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from weathercli.config.defaults import (
    DEFAULT_API_KEY_ENV,
    DEFAULT_FAVORITES_PATH,
    OWM_BASE_URL,
)
from weathercli.models.weather import UnitSelector


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OWM_BASE_URL
    api_key_env: str = Field(default=DEFAULT_API_KEY_ENV, min_length=1)
    # None keeps the transport's own default timeout
    timeout_seconds: float | None = Field(default=None, gt=0.0)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    favorites_path: Path = DEFAULT_FAVORITES_PATH
    default_unit: UnitSelector = UnitSelector.CELSIUS
    default_city: str | None = None
    log_level: LogLevel = LogLevel.WARNING

    @field_validator("default_unit", "log_level", mode="before")
    @classmethod
    def _case_insensitive(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
