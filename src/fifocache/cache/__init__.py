"""
Cache package for bounded on-disk storage.

This package provides:
- Base interface (base.py): CacheProtocol
- Eviction helpers (eviction.py): oldest-first deletion over a flat directory
- File cache (file_cache.py): FIFOCache, a size-bounded directory of named files
"""

from fifocache.cache.base import CacheProtocol
from fifocache.cache.eviction import directory_size, evict, list_entries, oldest_first
from fifocache.cache.file_cache import BUFFER_SIZE, FIFOCache, open_local_stream

__all__ = [
    "BUFFER_SIZE",
    "CacheProtocol",
    "FIFOCache",
    "directory_size",
    "evict",
    "list_entries",
    "oldest_first",
    "open_local_stream",
]
