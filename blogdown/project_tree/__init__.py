"""Domain model for project directory trees.

This package contains non-UI tree primitives:
- the ``DirectoryNode`` datatype with exclusively owned children
- filesystem scanning that builds a fresh snapshot
- expansion reconciliation that survives rebuilds
"""

from __future__ import annotations

from .expansion import reconcile_expansion
from .fs import build_directory_tree
from .types import DirectoryNode

__all__ = [
    "DirectoryNode",
    "build_directory_tree",
    "reconcile_expansion",
]
