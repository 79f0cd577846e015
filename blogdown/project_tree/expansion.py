"""Re-apply user expansion state onto a freshly built tree."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from .types import DirectoryNode


def reconcile_expansion(node: DirectoryNode, open_paths: Collection[Path]) -> None:
    """Mark every node whose path is in ``open_paths`` as expanded.

    All nodes are visited, collapsed parents included, so deeply nested open
    directories are still found. Flags are only ever set, never cleared.
    """
    for current in node.iter_nodes():
        if current.path in open_paths:
            current.expanded = True


__all__ = ["reconcile_expansion"]
