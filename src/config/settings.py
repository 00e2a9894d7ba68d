"""
Configuration Management for the Habit Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The store itself takes no environment input; the orchestrator reads these
settings and passes concrete objects down.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


class StorageSettings(BaseSettings):
    """Local persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HABIT_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["json", "sqlite", "memory"] = Field(
        default="json",
        description="Key-value backend used for the two collections"
    )
    data_dir: Path = Field(
        default=Path.home() / ".local" / "share" / "habit-tracker",
        description="Directory holding the JSON files or the SQLite database"
    )
    habits_key: str = Field(
        default="habit-tracker-habits",
        description="Storage key of the habits collection"
    )
    categories_key: str = Field(
        default="habit-tracker-categories",
        description="Storage key of the categories collection"
    )
    sqlite_filename: str = Field(
        default="habits.db",
        description="Database file name inside data_dir"
    )
    persist_empty_collections: bool = Field(
        default=False,
        description="Write [] when a collection becomes empty instead of keeping the last stored value"
    )

    @field_validator('habits_key', 'categories_key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys double as file names for the JSON backend."""
        if not _KEY_PATTERN.match(v):
            raise ValueError(
                f"Invalid storage key {v!r}: use letters, digits, '.', '-' or '_'"
            )
        return v

    @property
    def sqlite_path(self) -> Path:
        return self.data_dir / self.sqlite_filename


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        """DEBUG whenever debug mode is on."""
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
