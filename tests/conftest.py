"""
Pytest configuration and fixtures for fifocache tests.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import patch

import pytest

from fifocache.cache import FIFOCache
from fifocache.config import Settings, clear_settings_cache

TEST_CONTENT = b"test"  # 4 bytes


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Provide an existing cache root directory."""
    root = tmp_path / "cache"
    root.mkdir()
    return root


@pytest.fixture
def cache(cache_root: Path) -> FIFOCache:
    """Provide a cache with default configuration under cache_root."""
    return FIFOCache(lambda: cache_root)


@pytest.fixture
def stream() -> Callable[[bytes], io.BytesIO]:
    """Factory for fresh in-memory source streams."""

    def make(content: bytes = TEST_CONTENT) -> io.BytesIO:
        return io.BytesIO(content)

    return make


@pytest.fixture
def mock_env_vars(tmp_path: Path) -> Generator[dict[str, str], None, None]:
    """Provide mock environment variables for testing."""
    env_vars = {
        "FIFOCACHE_CACHE_DIR": str(tmp_path / "env_cache"),
        "FIFOCACHE_SUBDIRECTORY": "thumbnails",
        "FIFOCACHE_MAX_SIZE_BYTES": "1024",
        "FIFOCACHE_LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        clear_settings_cache()
        yield env_vars


@pytest.fixture
def mock_settings(mock_env_vars: dict[str, str]) -> Settings:
    """Provide a Settings instance built from the mock environment."""
    from fifocache.config import get_settings

    settings = get_settings()
    settings.ensure_directories()
    return settings


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Automatically reset settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
