"""
Configuration management for the tag migration tool.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tool settings loaded from TAGMIGRATOR_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TAGMIGRATOR_",
        case_sensitive=False,
        extra="ignore",
    )

    PROJECT_NAME: str = "Custom Attribute Tag Migration"

    # Server connection
    USERNAME: str | None = None
    PASSWORD: str | None = None
    VERIFY_SSL: bool = True
    REQUEST_TIMEOUT: float = 30.0  # seconds
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """
    Get cached tool settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
