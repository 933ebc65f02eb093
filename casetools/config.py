"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    broker_url: str = Field(
        default="redis://localhost:6379/0",
        description="Connection URL of the Redis broker that relays notifications",
        min_length=1,
    )
    notifications_enabled: bool = Field(
        default=True,
        description="When disabled every notification is dropped instead of published",
    )
    notification_payload_camel_case: bool = Field(
        default=True,
        description="Rename payload keys to lowerCamelCase before publishing",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level used when the application starts",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
