"""
fifocache: a bounded, disk-backed file cache with oldest-first eviction.
"""

from fifocache.cache import FIFOCache
from fifocache.config import DEFAULT_DIRECTORY, DEFAULT_SIZE, Settings, get_settings
from fifocache.exceptions import (
    CacheIOError,
    ErrorKind,
    FIFOCacheError,
    InvalidArgumentError,
    InvalidStateError,
)
from fifocache.types import CacheEntry, PutResult

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_DIRECTORY",
    "DEFAULT_SIZE",
    "CacheEntry",
    "CacheIOError",
    "ErrorKind",
    "FIFOCache",
    "FIFOCacheError",
    "InvalidArgumentError",
    "InvalidStateError",
    "PutResult",
    "Settings",
    "get_settings",
]
