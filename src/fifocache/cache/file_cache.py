"""
File-based FIFO cache for named byte streams.

FIFOCache manages a single subdirectory of a host-supplied cache root. Each
entry is a plain file named by its key. The total size of the managed
directory is kept within a byte budget: when an insertion would overflow it,
the least recently modified files are deleted first until enough room is
made.

The directory listing is the only state. There is no index and no lock, so
entries survive reconstruction of the manager, and callers sharing one
manager or one directory across threads must serialize access themselves.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlparse
from urllib.request import url2pathname

from fifocache.cache.base import CacheProtocol
from fifocache.cache.eviction import directory_size, evict, list_entries, oldest_first
from fifocache.config import DEFAULT_DIRECTORY, DEFAULT_SIZE, Settings, get_settings
from fifocache.exceptions import (
    CacheIOError,
    FIFOCacheError,
    InvalidArgumentError,
    InvalidStateError,
)
from fifocache.logging import get_logger, log_context, setup_logging
from fifocache.types import CacheEntry, DirectoryProvider, PutResult, StreamOpener

logger = get_logger(__name__)

BUFFER_SIZE = 1024


def open_local_stream(locator: str) -> BinaryIO:
    """Open a local path or file:// URI for binary reading."""
    parsed = urlparse(locator)
    if parsed.scheme == "file":
        return open(url2pathname(parsed.path), "rb")
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ValueError(f"Unsupported locator scheme: {parsed.scheme}")
    return open(locator, "rb")


def _copy(source: BinaryIO, destination: BinaryIO) -> int:
    """Copy source into destination through a fixed buffer.

    Returns:
        Number of bytes copied.
    """
    total = 0
    while True:
        chunk = source.read(BUFFER_SIZE)
        if not chunk:
            break
        destination.write(chunk)
        total += len(chunk)
    return total


def _validate_subdirectory(path: str) -> None:
    parts = Path(path)
    if parts.is_absolute() or ".." in parts.parts:
        raise InvalidArgumentError(
            "Subdirectory must stay inside the cache root", {"subdirectory": path}
        )


def _validate_name(name: str) -> None:
    if not name or name in (".", ".."):
        raise InvalidArgumentError("Invalid cache entry name", {"name": name})
    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    if any(sep in name for sep in separators):
        raise InvalidArgumentError(
            "Cache entry name must not contain a path separator", {"name": name}
        )


class FIFOCache(CacheProtocol):
    """Bounded cache over one subdirectory of a cache root.

    Oldest entries by modification time are evicted first when a put would
    exceed the budget. Lowering the budget does not evict anything until the
    next put.

    This class does not support concurrent read/write operations.
    """

    DEFAULT_SIZE = DEFAULT_SIZE
    DEFAULT_DIRECTORY = DEFAULT_DIRECTORY

    def __init__(
        self,
        directory_provider: DirectoryProvider,
        subdirectory: str | None = None,
        size: int | None = None,
        stream_opener: StreamOpener | None = None,
    ) -> None:
        """Initialize FIFOCache.

        Args:
            directory_provider: Returns the cache root. The root itself is
                never created or removed by the cache.
            subdirectory: Managed subdirectory; "" manages the whole root.
            size: Cache budget in bytes.
            stream_opener: Resolves content locators for put_uri().
        """
        self._directory_provider = directory_provider
        self._stream_opener = stream_opener or open_local_stream
        self._subdirectory = DEFAULT_DIRECTORY
        self._size = DEFAULT_SIZE

        if subdirectory is not None:
            _validate_subdirectory(subdirectory)
            self._subdirectory = subdirectory
        if size is not None:
            self.set_size(size)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> FIFOCache:
        """Build a cache from settings (environment settings by default)."""
        settings = settings or get_settings()
        setup_logging(log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
        cache_dir = settings.CACHE_DIR
        return cls(
            lambda: cache_dir,
            subdirectory=settings.SUBDIRECTORY,
            size=settings.MAX_SIZE_BYTES,
        )

    # -- configuration -----------------------------------------------------

    @property
    def base_path(self) -> Path:
        return Path(self._directory_provider())

    @property
    def managed_dir(self) -> Path:
        """Directory holding the cached files."""
        if not self._subdirectory:
            return self.base_path
        return self.base_path / self._subdirectory

    def get_subdirectory(self) -> str:
        """Get the relative path of the managed subdirectory.

        By default this is DEFAULT_DIRECTORY.
        """
        return self._subdirectory

    def set_subdirectory(self, path: str | None) -> None:
        """Set the relative path of the managed subdirectory.

        An empty string makes the cache manage the whole cache root. Nothing
        is moved on disk.

        Raises:
            InvalidArgumentError: If path is None, absolute or contains "..".
            InvalidStateError: If the currently managed directory holds any bytes.
        """
        if path is None:
            raise InvalidArgumentError("Provided path was null")
        _validate_subdirectory(path)

        current = self.managed_dir
        dir_size = directory_size(current)
        if dir_size > 0:
            raise InvalidStateError(
                "Current cache directory is not empty",
                {"directory": str(current), "size": dir_size},
            )
        self._subdirectory = path

    subdirectory = property(get_subdirectory, set_subdirectory)

    def get_size(self) -> int:
        """Get the cache budget in bytes. By default this is DEFAULT_SIZE."""
        return self._size

    def set_size(self, size: int) -> None:
        """Set the cache budget in bytes.

        Raises:
            InvalidArgumentError: If size is 0.
        """
        if size == 0:
            raise InvalidArgumentError("Cache size cannot be 0")
        self._size = size

    size = property(get_size, set_size)

    def usage(self) -> int:
        """Current total size of the cached files, in bytes."""
        return directory_size(self.managed_dir)

    def entries(self) -> list[CacheEntry]:
        """Snapshot of the cached files, oldest first."""
        return sorted(list_entries(self.managed_dir), key=oldest_first)

    # -- operations ----------------------------------------------------------

    def put(self, source: BinaryIO, name: str, declared_size: int) -> Path:
        """Put a stream into the cache.

        The declared size drives the eviction decision and is not checked
        against the bytes actually read. A rejected argument leaves the source
        untouched; once writing starts, both streams are closed on return.

        Args:
            source: Readable binary stream to cache.
            name: Key for the cached data; the file's base name.
            declared_size: Size of the stream, in bytes.

        Returns:
            Path of the cached file.

        Raises:
            InvalidArgumentError: If declared_size is negative or larger than
                the cache, or name is not a plain file name.
            CacheIOError: If the managed directory cannot be created or the
                stream cannot be copied.
        """
        if declared_size < 0:
            raise InvalidArgumentError(
                "The provided stream size is smaller than 0",
                {"declared_size": declared_size},
            )
        if declared_size > self._size:
            raise InvalidArgumentError(
                "The provided stream size is larger than the cache",
                {"declared_size": declared_size, "cache_size": self._size},
            )
        _validate_name(name)

        try:
            with log_context(operation="put"):
                managed = self._ensure_managed_dir()

                projected = declared_size + directory_size(managed)
                if projected > self._size:
                    evict(managed, projected - self._size)

                output_path = managed / name
                try:
                    with open(output_path, "wb") as destination:
                        written = _copy(source, destination)
                except OSError as e:
                    raise CacheIOError(
                        "Failed to write cache entry", {"path": str(output_path)}
                    ) from e

                if written != declared_size:
                    logger.warning(
                        "Cached stream size differs from declared size",
                        name=name,
                        declared_size=declared_size,
                        written=written,
                    )
                logger.debug("Cached entry", name=name, size=written)
                return output_path
        finally:
            source.close()

    def put_uri(self, locator: str, name: str, declared_size: int) -> Path:
        """Put the content behind a locator into the cache.

        The locator is resolved with the stream opener given at construction.

        Raises:
            CacheIOError: If the locator cannot be opened.
        """
        try:
            source = self._stream_opener(locator)
        except (OSError, ValueError) as e:
            raise CacheIOError("Cannot open content", {"locator": locator}) from e
        return self.put(source, name, declared_size)

    def try_put(self, source: BinaryIO, name: str, declared_size: int) -> PutResult:
        """Like put(), but returns failures as a PutResult instead of raising."""
        try:
            return PutResult(path=self.put(source, name, declared_size))
        except FIFOCacheError as e:
            return PutResult(error=e)

    def get(self, name: str) -> Path | None:
        """Get the cached file for name.

        Returns:
            Path of the cached file, or None on a cache miss.
        """
        try:
            _validate_name(name)
        except InvalidArgumentError:
            return None
        path = self.managed_dir / name
        if not path.is_file():
            return None
        return path

    def clear(self) -> None:
        """Delete every cached file in the managed directory.

        Subdirectories inside the managed directory are left alone.
        """
        managed = self.managed_dir
        if not managed.exists():
            return
        with log_context(operation="clear"):
            freed = evict(managed)
            logger.debug("Cache cleared", directory=str(managed), bytes_freed=freed)

    def _ensure_managed_dir(self) -> Path:
        managed = self.managed_dir
        if managed.is_dir():
            return managed
        try:
            managed.mkdir(exist_ok=True)
        except OSError as e:
            raise CacheIOError(
                "Cannot create managed cache folder", {"path": str(managed)}
            ) from e
        logger.debug("Created managed cache folder", path=str(managed))
        return managed

    def __repr__(self) -> str:
        return (
            f"FIFOCache(managed_dir={str(self.managed_dir)!r}, size={self._size})"
        )
