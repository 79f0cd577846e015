"""Message names and surface protocol shared with UI collaborators.

Core-to-surface messages are fire-and-forget ``send`` calls. The only
request/response exchange is the confirmation prompt, modelled as ``ask``.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

# core -> surface
PROJECT_LOADED = "project-loaded"
RENDER_SIDEBAR = "render-sidebar"
OPEN_MODAL = "open-modal"
FILE_CONTENTS = "file-contents"
FILE_SAVED = "file-saved"
CSS_CONTENT = "css-content"

# surface -> core
LOAD_FILE_CONTENTS = "load-file-contents"
SAVE_FILE = "save-file"
CREATE_POST = "create-post"
RENAME_FILE = "rename-file"
OPEN_DIRECTORY = "open-directory"
REQUEST_CSS = "request-css"
LOAD_LAST_PROJECT = "load-last-project"
OPEN_PROJECT = "open-project"


class Surface(Protocol):
    """Renderer-side collaborator receiving core events."""

    def send(self, event: str, *payload: object) -> None:
        ...

    def ask(self, prompt: str, options: Sequence[str]) -> int:
        """Answer an ``open-modal`` request with the index of the chosen option."""
        ...


@dataclass(frozen=True)
class SentEvent:
    """One recorded core-to-surface message."""

    name: str
    payload: tuple[object, ...]


class RecordingSurface:
    """Thread-safe surface that records events and answers prompts.

    ``answer`` is the option index returned by every ``ask`` call.
    """

    def __init__(self, answer: int = 1) -> None:
        self.answer = answer
        self.prompts: list[tuple[str, tuple[str, ...]]] = []
        self._events: list[SentEvent] = []
        self._lock = threading.Lock()

    def send(self, event: str, *payload: object) -> None:
        with self._lock:
            self._events.append(SentEvent(name=event, payload=payload))

    def ask(self, prompt: str, options: Sequence[str]) -> int:
        """Record the prompt, also as an ``open-modal`` event, and answer it."""
        with self._lock:
            self.prompts.append((prompt, tuple(options)))
            self._events.append(SentEvent(name=OPEN_MODAL, payload=(prompt, tuple(options))))
        return self.answer

    @property
    def events(self) -> list[SentEvent]:
        with self._lock:
            return list(self._events)

    def named(self, name: str) -> list[SentEvent]:
        """Return recorded events called ``name`` in send order."""
        return [event for event in self.events if event.name == name]


__all__ = [
    "PROJECT_LOADED",
    "RENDER_SIDEBAR",
    "OPEN_MODAL",
    "FILE_CONTENTS",
    "FILE_SAVED",
    "CSS_CONTENT",
    "LOAD_FILE_CONTENTS",
    "SAVE_FILE",
    "CREATE_POST",
    "RENAME_FILE",
    "OPEN_DIRECTORY",
    "REQUEST_CSS",
    "LOAD_LAST_PROJECT",
    "OPEN_PROJECT",
    "Surface",
    "SentEvent",
    "RecordingSurface",
]
