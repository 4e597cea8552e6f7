"""
Configuration management using pydantic-settings.

Loads configuration from FIFOCACHE_* environment variables and .env files.
Validates the cache budget and provides typed access to settings.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DIRECTORY = "managed"
DEFAULT_SIZE = 5242880  # 5 MiB


class Settings(BaseSettings):
    """Cache settings loaded from environment variables.

    Optional:
        FIFOCACHE_CACHE_DIR: Cache root the managed subdirectory lives under
        FIFOCACHE_SUBDIRECTORY: Managed subdirectory ("" manages the whole root)
        FIFOCACHE_MAX_SIZE_BYTES: Cache budget in bytes
        FIFOCACHE_LOG_LEVEL: Logging level
        FIFOCACHE_LOG_FILE: JSON Lines log file
    """

    model_config = SettingsConfigDict(
        env_prefix="FIFOCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directories
    CACHE_DIR: Path = Field(default=Path(".cache"), description="Cache root directory")
    SUBDIRECTORY: str = Field(
        default=DEFAULT_DIRECTORY,
        description="Managed subdirectory under the cache root",
    )

    # Budget
    MAX_SIZE_BYTES: int = Field(
        default=DEFAULT_SIZE, gt=0, description="Maximum total bytes in the managed directory"
    )

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    LOG_FILE: Path | None = Field(default=None, description="JSON Lines log file")

    @field_validator("SUBDIRECTORY")
    @classmethod
    def validate_subdirectory(cls, v: str) -> str:
        """Reject subdirectories that would escape the cache root."""
        if Path(v).is_absolute() or ".." in Path(v).parts:
            raise ValueError("SUBDIRECTORY must be relative to CACHE_DIR and not contain '..'")
        return v

    @property
    def cache_dir(self) -> Path:
        """Get cache root (lowercase alias)."""
        return self.CACHE_DIR

    @property
    def managed_dir(self) -> Path:
        """Get the managed directory the settings point at."""
        if not self.SUBDIRECTORY:
            return self.CACHE_DIR
        return self.CACHE_DIR / self.SUBDIRECTORY

    def ensure_directories(self) -> None:
        """Create the cache root if it doesn't exist."""
        self.CACHE_DIR.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
