from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jwtexp.constants import (
    DEFAULT_EXPIRY_SKEW_SECONDS,
    DEFAULT_POOL_MAX_BUFFERS,
    DEFAULT_POOL_MIN_BUFFER_SIZE,
    ENV_PREFIX,
)
from jwtexp.errors import ConfigError

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class ExtractorSettings(BaseSettings):
    """Environment-driven knobs for logging, the scratch buffer pool and expiry checks."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    log_level: LogLevel = "warning"
    log_json: bool = False

    pool_max_buffers: int = Field(default=DEFAULT_POOL_MAX_BUFFERS, ge=0)
    pool_min_buffer_size: int = Field(default=DEFAULT_POOL_MIN_BUFFER_SIZE, ge=4)
    expiry_skew_seconds: int = Field(
        default=DEFAULT_EXPIRY_SKEW_SECONDS,
        ge=0,
        validation_alias=AliasChoices("JWTEXP_EXPIRY_SKEW_SECONDS", "JWTEXP_SKEW_SECONDS"),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


def load_settings(**overrides: object) -> ExtractorSettings:
    """Build settings from the environment, wrapping validation failures in ConfigError."""

    try:
        return ExtractorSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"invalid jwtexp settings: {exc}") from exc
