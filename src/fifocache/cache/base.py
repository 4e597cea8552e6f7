"""
Base classes for caching.

CacheProtocol is the abstract interface of a blocking, file-backed cache:
entries are stored from byte streams and retrieved as paths.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class CacheProtocol(ABC):
    """Abstract interface for cache implementations."""

    @abstractmethod
    def put(self, source: BinaryIO, name: str, declared_size: int) -> Path:
        """Store a stream in the cache under name."""
        ...

    @abstractmethod
    def get(self, name: str) -> Path | None:
        """Get the cached file for name, None on a miss."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every cached entry."""
        ...

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None
