"""Filesystem primitives translating ``OSError`` into blogdown errors.

These helpers do no authorization; ``FileGateway`` checks project scope
before calling them.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import StorageError, storage_error_from_os

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> bool:
    """Create ``path`` if missing.

    Returns ``True`` when the directory was created and ``False`` when it was
    already present. A non-directory in the way, or any other I/O failure,
    raises ``StorageError``.
    """
    try:
        path.mkdir()
    except FileExistsError as exc:
        if path.is_dir():
            logger.debug("directory already exists: %s", path)
            return False
        raise StorageError(f"not a directory: {path}", path) from exc
    except OSError as exc:
        raise storage_error_from_os(exc, path) from exc
    return True


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise storage_error_from_os(exc, path) from exc


def write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise storage_error_from_os(exc, path) from exc


def rename(source: Path, target: Path) -> None:
    try:
        source.rename(target)
    except OSError as exc:
        raise storage_error_from_os(exc, source) from exc


def copy_file(source: Path, target: Path) -> None:
    try:
        shutil.copyfile(source, target)
    except OSError as exc:
        raise storage_error_from_os(exc, source) from exc


def remove_file(path: Path) -> bool:
    """Delete ``path``; returns ``False`` when it was already gone."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise storage_error_from_os(exc, path) from exc
    return True


def clone_candidate(path: Path, attempt: int) -> Path:
    """Return ``<stem>(<attempt>)<ext>`` next to ``path``.

    The extension is everything from the last dot of the file name, so
    ``archive.tar.gz`` becomes ``archive.tar(1).gz`` and ``README`` becomes
    ``README(1)``.
    """
    name = path.name
    dot = name.rfind(".")
    if dot <= 0:
        stem, extension = name, ""
    else:
        stem, extension = name[:dot], name[dot:]
    return path.with_name(f"{stem}({attempt}){extension}")


def next_clone_path(path: Path) -> Path:
    """Try ``(1)``, ``(2)``, ... in order and return the first unused name."""
    attempt = 1
    while True:
        candidate = clone_candidate(path, attempt)
        if not candidate.exists() and not candidate.is_symlink():
            return candidate
        attempt += 1


__all__ = [
    "ensure_directory",
    "read_text",
    "write_text",
    "rename",
    "copy_file",
    "remove_file",
    "clone_candidate",
    "next_clone_path",
]
