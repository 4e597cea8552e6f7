"""
Core types for the FIFO file cache.

This module defines:
- CacheEntry: immutable snapshot of one cached file
- PutResult: typed outcome of a cache insertion
- DirectoryProvider / StreamOpener: collaborator callables supplied by the host
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Union

from fifocache.exceptions import ErrorKind, FIFOCacheError

# Returns the absolute cache root the manager works under.
DirectoryProvider = Callable[[], Union[Path, str]]

# Resolves an opaque content locator (path, file:// URI, ...) to a readable stream.
StreamOpener = Callable[[str], BinaryIO]


@dataclass(frozen=True)
class CacheEntry:
    """Immutable snapshot of a cached file, taken at directory-listing time."""

    name: str
    path: Path
    size: int
    last_modified: float  # epoch seconds

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry[str]) -> CacheEntry:
        """Build an entry from an os.scandir() result."""
        stat = entry.stat(follow_symlinks=False)
        return cls(
            name=entry.name,
            path=Path(entry.path),
            size=stat.st_size,
            last_modified=stat.st_mtime,
        )


@dataclass(frozen=True)
class PutResult:
    """Outcome of a cache insertion, for callers that branch instead of catching.

    Exactly one of path and error is set.
    """

    path: Path | None = None
    error: FIFOCacheError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        """Kind of the failure, None on success."""
        return self.error.kind if self.error is not None else None
