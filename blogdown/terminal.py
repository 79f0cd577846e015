"""Plain terminal rendering of project trees and a stdout-backed surface."""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from typing import TextIO

from . import events
from .project_tree import DirectoryNode

DIR_COLOR = "\033[1;34m"
MARKER_COLOR = "\033[38;5;44m"
MARKDOWN_COLOR = "\033[38;5;110m"
FILE_COLOR = "\033[38;5;252m"
RESET = "\033[0m"


def format_tree(node: DirectoryNode, *, color: bool = True) -> str:
    """Render ``node`` as indented lines; collapsed directories hide children."""
    lines: list[str] = []

    def paint(code: str, text: str) -> str:
        return f"{code}{text}{RESET}" if color else text

    def walk(directory: DirectoryNode, depth: int) -> None:
        indent = "  " * depth
        name = f"{directory.path.name or str(directory.path)}/"
        marker = "▾ " if directory.expanded else "▸ "
        lines.append(f"{indent}{paint(MARKER_COLOR, marker)}{paint(DIR_COLOR, name)}")
        if not directory.expanded:
            return
        for child in directory.subdirectories:
            walk(child, depth + 1)
        # file names line up with child directory names
        for file_path in directory.files:
            file_color = MARKDOWN_COLOR if file_path.suffix.lower() == ".md" else FILE_COLOR
            lines.append(f"{indent}    {paint(file_color, file_path.name)}")

    walk(node, 0)
    return "\n".join(lines) + "\n"


class TerminalSurface:
    """Surface that prints sidebar trees and asks questions on the terminal."""

    def __init__(self, stream: TextIO | None = None, *, color: bool | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._color = self._stream.isatty() if color is None else color
        self._lock = threading.Lock()

    def send(self, event: str, *payload: object) -> None:
        if event != events.RENDER_SIDEBAR:
            return
        (tree,) = payload
        with self._lock:
            self._stream.write(format_tree(tree, color=self._color))
            self._stream.flush()

    def ask(self, prompt: str, options: Sequence[str]) -> int:
        labels = "/".join(options)
        with self._lock:
            answer = input(f"{prompt} [{labels}] ").strip().lower()
        for idx, option in enumerate(options):
            if answer and option.lower().startswith(answer):
                return idx
        return len(options) - 1


__all__ = ["format_tree", "TerminalSurface"]
