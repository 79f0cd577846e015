"""Domain datatype for filesystem-backed project directory trees."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DirectoryNode:
    """One directory observed at scan time.

    Children are owned exclusively by their parent node; there are no parent
    back-references and no node is shared between two trees. ``expanded`` is
    UI state and never derived from the filesystem.
    """

    path: Path
    files: list[Path] = field(default_factory=list)
    subdirectories: list["DirectoryNode"] = field(default_factory=list)
    expanded: bool = False

    def iter_nodes(self) -> Iterator["DirectoryNode"]:
        """Yield this node and every descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.subdirectories))

    def find(self, path: Path | str) -> "DirectoryNode | None":
        """Return the node whose path equals ``path``, if any."""
        target = Path(path)
        for node in self.iter_nodes():
            if node.path == target:
                return node
        return None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly payload for surfaces."""
        return {
            "path": str(self.path),
            "files": [str(file_path) for file_path in self.files],
            "directories": [child.to_dict() for child in self.subdirectories],
            "expanded": self.expanded,
        }


__all__ = ["DirectoryNode"]
