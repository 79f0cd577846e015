"""Filesystem scanning that turns a directory into a ``DirectoryNode`` tree."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from ..errors import storage_error_from_os
from .types import DirectoryNode

logger = logging.getLogger(__name__)


def _scan_entries(node: DirectoryNode) -> None:
    """Fill ``node.files`` and ``node.subdirectories`` in listing order.

    Raises ``OSError`` when ``node.path`` itself cannot be listed. Entries that
    vanish between listing and ``lstat`` are dropped.
    """
    with os.scandir(node.path) as entries:
        names = [entry.name for entry in entries]

    for name in names:
        child_path = node.path / name
        try:
            mode = os.lstat(child_path).st_mode
        except FileNotFoundError:
            logger.debug("entry vanished during scan: %s", child_path)
            continue
        if stat.S_ISDIR(mode):
            node.subdirectories.append(DirectoryNode(path=child_path))
        else:
            node.files.append(child_path)


def _populate_subdirectories(node: DirectoryNode) -> None:
    """Recursively scan the child nodes of an already scanned ``node``."""
    kept: list[DirectoryNode] = []
    for child in node.subdirectories:
        try:
            _scan_entries(child)
        except OSError as exc:
            logger.debug("omitting unreadable subtree %s: %s", child.path, exc)
            continue
        _populate_subdirectories(child)
        kept.append(child)
    node.subdirectories = kept


def build_directory_tree(path: Path | str, *, expanded: bool = False) -> DirectoryNode:
    """Build a fresh tree snapshot rooted at ``path``.

    Sibling order follows the filesystem listing and is not sorted. Every
    node starts collapsed except the root when ``expanded`` is set, which is
    how user-initiated loads mark the project root open.

    A subdirectory that disappears or becomes unreadable mid-scan is left out
    of the snapshot. Failing to list the root raises ``StorageError``
    (``NotFoundError`` when it does not exist).
    """
    root = DirectoryNode(path=Path(path).absolute(), expanded=expanded)
    try:
        _scan_entries(root)
    except OSError as exc:
        raise storage_error_from_os(exc, root.path) from exc
    _populate_subdirectories(root)
    return root


__all__ = ["build_directory_tree"]
