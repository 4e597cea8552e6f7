"""
Custom exception hierarchy for the FIFO file cache.

All exceptions inherit from FIFOCacheError, which provides optional context
for structured error handling and logging, plus an ErrorKind tag so callers
can branch on the kind of failure without matching on classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of cache failures."""

    INVALID_ARGUMENT = "invalid_argument"
    INVALID_STATE = "invalid_state"
    IO_FAILURE = "io_failure"


class FIFOCacheError(Exception):
    """Base exception for all cache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging/debugging.
        kind: Tag identifying the kind of failure.
    """

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class InvalidArgumentError(FIFOCacheError, ValueError):
    """Raised when a caller passes a structurally invalid parameter.

    Examples:
        - Negative declared stream size
        - Declared stream size larger than the cache budget
        - A cache budget of 0
        - A null subdirectory path or an entry name with path separators
    """

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidStateError(FIFOCacheError, RuntimeError):
    """Raised when an operation is not allowed given the current cache contents.

    Context should include:
        - directory: The managed directory that blocked the operation
        - size: Its current size in bytes
    """

    kind = ErrorKind.INVALID_STATE


class CacheIOError(FIFOCacheError, OSError):
    """Raised when an underlying filesystem operation fails.

    Context should include:
        - path: The path being created, opened, read or written
    """

    kind = ErrorKind.IO_FAILURE
