"""
Configuration management for the recurrence pattern library.

Uses Pydantic Settings for type-safe environment variable loading.
Variables are prefixed with RECURRENCE_ and may be placed in a .env file.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_LOGGER = "recurrence_pattern"


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the recurrence_pattern logger"
    )

    # Expansion limits
    max_occurrences: int = Field(
        default=10000,
        ge=1,
        description="Maximum occurrences returned by a range query (safety limit)"
    )

    # Pattern defaults
    default_first_day_of_week: Literal[
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
    ] = Field(
        default="monday",
        description="Week start used when a pattern does not set firstDayOfWeek"
    )

    model_config = SettingsConfigDict(
        env_prefix="RECURRENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings (useful in tests).
    """
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Apply the configured log level to the package logger.

    Handlers are left to the host application.

    Returns:
        The package logger
    """
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level)
    return logger
