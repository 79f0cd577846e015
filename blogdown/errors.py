"""Exception hierarchy shared by project, tree and gateway code."""

from __future__ import annotations

from pathlib import Path


class BlogdownError(Exception):
    """Base class for all errors raised by blogdown."""


class StorageError(BlogdownError):
    """Disk or filesystem failure (permissions, vanished paths, full disk)."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotFoundError(StorageError):
    """Operation target does not exist."""


class InvalidProjectError(BlogdownError):
    """Project manifest is missing or malformed."""


def storage_error_from_os(exc: OSError, path: Path | str) -> StorageError:
    """Translate ``OSError`` into the matching ``StorageError`` subclass."""
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(f"no such file or directory: {path}", path)
    reason = exc.strerror or exc.__class__.__name__
    return StorageError(f"{reason}: {path}", path)


__all__ = [
    "BlogdownError",
    "StorageError",
    "NotFoundError",
    "InvalidProjectError",
    "storage_error_from_os",
]
