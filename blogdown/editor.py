"""Headless editor-surface model: opened files and their edited state.

This mirrors what an editor pane tracks per tab without any rendering. Saving
goes through a ``save-file`` message and completes when the matching
``file-saved`` acknowledgement arrives.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .events import SAVE_FILE


@dataclass
class OpenedFile:
    """One file open in the editor."""

    path: str
    initial_content: str = ""
    current_content: str = ""

    @property
    def edited(self) -> bool:
        return self.current_content != self.initial_content

    @property
    def extension(self) -> str:
        return Path(self.path).suffix.lstrip(".")


SendMessage = Callable[..., object]


@dataclass
class OpenedFileManager:
    """Track opened files keyed by path plus the currently shown one.

    ``send`` delivers surface-to-core messages (for example a dispatcher's
    ``post``). ``on_change`` is called with a file whenever its edited state
    may have changed.
    """

    send: SendMessage
    on_change: Callable[[OpenedFile], None] | None = None
    opened: dict[str, OpenedFile] = field(default_factory=dict)
    current: OpenedFile | None = None

    def is_open(self, path: str) -> bool:
        return path in self.opened

    def open(self, path: str, content: str) -> OpenedFile:
        """Register loaded ``content`` for ``path`` and make it current."""
        opened_file = OpenedFile(path=path, initial_content=content, current_content=content)
        self.opened[path] = opened_file
        self.current = opened_file
        return opened_file

    def switch(self, path: str) -> OpenedFile | None:
        opened_file = self.opened.get(path)
        if opened_file is not None:
            self.current = opened_file
        return opened_file

    def close(self, path: str) -> None:
        """Close ``path``; the first remaining file becomes current."""
        closed = self.opened.pop(path, None)
        if closed is None or closed is not self.current:
            return
        self.current = next(iter(self.opened.values()), None)

    def update(self, path: str, content: str) -> None:
        opened_file = self.opened.get(path)
        if opened_file is None:
            return
        opened_file.current_content = content
        self._changed(opened_file)

    def save_current(self) -> bool:
        """Send ``save-file`` for the current file when it has edits."""
        opened_file = self.current
        if opened_file is None or not opened_file.edited:
            return False
        self.send(SAVE_FILE, opened_file.path, opened_file.current_content)
        return True

    def file_saved(self, path: str, content: str) -> None:
        """Apply a ``file-saved`` acknowledgement."""
        opened_file = self.opened.get(path)
        if opened_file is None:
            return
        opened_file.initial_content = content
        opened_file.current_content = content
        self._changed(opened_file)

    def _changed(self, opened_file: OpenedFile) -> None:
        if self.on_change is not None:
            self.on_change(opened_file)


__all__ = ["OpenedFile", "OpenedFileManager"]
