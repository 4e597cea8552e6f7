"""
Tests for configuration module.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from fifocache.config import (
    DEFAULT_DIRECTORY,
    DEFAULT_SIZE,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestSettingsDefaults:
    """Tests for Settings default values."""

    def test_defaults(self) -> None:
        """Test default values with no environment overrides."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.CACHE_DIR == Path(".cache")
        assert settings.SUBDIRECTORY == DEFAULT_DIRECTORY
        assert settings.MAX_SIZE_BYTES == DEFAULT_SIZE
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FILE is None

    def test_managed_dir(self) -> None:
        """Test the managed directory combines root and subdirectory."""
        settings = Settings(_env_file=None, CACHE_DIR=Path("/tmp/root"), SUBDIRECTORY="x")
        assert settings.managed_dir == Path("/tmp/root/x")

    def test_managed_dir_empty_subdirectory(self) -> None:
        """Test that an empty subdirectory means the root itself."""
        settings = Settings(_env_file=None, CACHE_DIR=Path("/tmp/root"), SUBDIRECTORY="")
        assert settings.managed_dir == Path("/tmp/root")


class TestSettingsValidation:
    """Tests for Settings validation."""

    def test_settings_loads_from_env(self, mock_env_vars: dict[str, str]) -> None:
        """Test that settings correctly loads from prefixed environment variables."""
        settings = get_settings()

        assert settings.CACHE_DIR == Path(mock_env_vars["FIFOCACHE_CACHE_DIR"])
        assert settings.SUBDIRECTORY == "thumbnails"
        assert settings.MAX_SIZE_BYTES == 1024
        assert settings.LOG_LEVEL == "DEBUG"

    def test_zero_size_rejected(self) -> None:
        """Test that a zero budget fails validation."""
        with patch.dict(os.environ, {"FIFOCACHE_MAX_SIZE_BYTES": "0"}, clear=False):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_absolute_subdirectory_rejected(self) -> None:
        """Test that the subdirectory must stay under the cache root."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, SUBDIRECTORY="/etc")
        assert "relative" in str(exc_info.value)

    def test_parent_subdirectory_rejected(self) -> None:
        """Test that ".." parts cannot climb out of the cache root."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SUBDIRECTORY="../sibling")

    def test_invalid_log_level_rejected(self) -> None:
        """Test that only known log levels are accepted."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")


class TestSettingsCache:
    """Tests for the settings singleton."""

    def test_get_settings_is_cached(self, mock_env_vars: dict[str, str]) -> None:
        """Test that repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, mock_env_vars: dict[str, str]) -> None:
        """Test that clearing the cache picks up new environment values."""
        first = get_settings()

        with patch.dict(os.environ, {"FIFOCACHE_MAX_SIZE_BYTES": "2048"}):
            clear_settings_cache()
            second = get_settings()

        assert first is not second
        assert second.MAX_SIZE_BYTES == 2048

    def test_ensure_directories(self, tmp_path: Path) -> None:
        """Test that the cache root is created."""
        settings = Settings(_env_file=None, CACHE_DIR=tmp_path / "a" / "b")
        settings.ensure_directories()
        assert (tmp_path / "a" / "b").is_dir()
