"""Exception hierarchy for snipkeep.

Store and log operations raise subclasses of `SnipkeepError`; the CLI turns any
of them into a red ``Error:`` line and a non-zero exit status.
"""

from pathlib import Path

__all__ = [
    "SnipkeepError",
    "ValidationError",
    "NotFoundError",
    "CorruptStoreError",
    "StorageError",
    "LogMirrorError",
]


class SnipkeepError(Exception):
    """Root exception for all snipkeep errors."""


class ValidationError(SnipkeepError, ValueError):
    """Raised when a required field is missing, empty or malformed."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class NotFoundError(SnipkeepError, LookupError):
    """Raised when the target of an operation does not exist."""


class CorruptStoreError(SnipkeepError):
    """Raised when a snippet file is not a JSON object of snippet records."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Snippet file {path} is corrupt: {reason}")


class StorageError(SnipkeepError, OSError):
    """Raised when a file cannot be read or written."""

    def __init__(self, path: Path, action: str, cause: OSError):
        self.path = path
        self.action = action
        detail = cause.strerror or str(cause)
        super().__init__(f"Could not {action} {path}: {detail}")


class LogMirrorError(StorageError):
    """Raised when the markdown snippet log cannot be read or written."""
