"""
Oldest-first eviction over a flat cache directory.

The directory listing is the only record of what is cached, so every helper
here works from a fresh os.scandir() snapshot:
- oldest_first: ordering key, last-modified time ascending
- list_entries: regular files directly inside a directory
- directory_size: total bytes of those files
- evict: delete oldest files until enough bytes are freed
"""

from __future__ import annotations

import os
from pathlib import Path

from fifocache.logging import get_logger
from fifocache.types import CacheEntry

logger = get_logger(__name__)


def oldest_first(entry: CacheEntry) -> float:
    """Sort key placing the least recently modified entry first."""
    return entry.last_modified


def list_entries(directory: Path) -> list[CacheEntry]:
    """List the regular files directly inside directory.

    Subdirectories and other non-file entries are ignored. Files removed
    between the listing and their stat call are skipped.

    Args:
        directory: Directory to scan.

    Returns:
        Entries in listing order. Empty if the directory does not exist.
    """
    entries: list[CacheEntry] = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    if not dir_entry.is_file(follow_symlinks=False):
                        continue
                    entries.append(CacheEntry.from_dir_entry(dir_entry))
                except FileNotFoundError:
                    continue
    except (FileNotFoundError, NotADirectoryError):
        return []
    return entries


def directory_size(directory: Path) -> int:
    """Total size in bytes of the regular files directly inside directory."""
    return sum(entry.size for entry in list_entries(directory))


def evict(directory: Path, bytes_to_free: int | None = None) -> int:
    """Delete the oldest files in directory until bytes_to_free bytes are freed.

    Sizes come from the listing snapshot, taken before deletion. A file that
    is already gone counts as freed. Any other deletion failure is logged and
    skipped, so the directory may stay over budget; it is never raised.

    Args:
        directory: Directory to clean.
        bytes_to_free: Number of bytes to reclaim. None deletes every file.

    Returns:
        Number of bytes actually freed.
    """
    entries = sorted(list_entries(directory), key=oldest_first)
    bytes_deleted = 0
    failures = 0

    logger.debug(
        "Evicting",
        directory=str(directory),
        bytes_to_free=bytes_to_free,
        candidates=len(entries),
    )

    for entry in entries:
        if bytes_to_free is not None and bytes_deleted >= bytes_to_free:
            break
        try:
            entry.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            failures += 1
            logger.warning("Could not evict cache entry", name=entry.name, error=str(e))
            continue
        bytes_deleted += entry.size
        logger.debug("Evicted cache entry", name=entry.name, size=entry.size)

    if failures and bytes_to_free is not None and bytes_deleted < bytes_to_free:
        logger.warning(
            "Eviction freed less than requested",
            directory=str(directory),
            bytes_to_free=bytes_to_free,
            bytes_freed=bytes_deleted,
            failures=failures,
        )

    return bytes_deleted
