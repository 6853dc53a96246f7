"""
Settings using pydantic-settings for type-safe configuration.

Environment variables are read once and cached. Every setting has a
default, so the library works without any environment at all.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="Log level: TRACE, DEBUG, INFO, WARNING or ERROR",
    )
    log_source: str = Field(
        default="followgraph",
        description="Source identifier shown in brackets in log lines",
    )

    # === Graph ===
    thread_safe: bool = Field(
        default=True,
        description="Guard every graph operation with a single exclusive lock",
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL: {v}. Must be one of {', '.join(LOG_LEVELS)}")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Tests that change the environment must call get_settings.cache_clear().
    """
    return Settings()
