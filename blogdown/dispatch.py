"""Routing of surface-to-core messages onto the session and gateway.

``handle`` runs a message synchronously on the caller's thread. ``post`` runs
it on a small worker pool and returns the ``Future`` so failures stay visible
to the caller without blocking a UI thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from . import events
from .gateway import FileGateway
from .session import ProjectSession

logger = logging.getLogger(__name__)


class UnknownMessageError(KeyError):
    """Raised for message names without a registered handler."""


class MessageDispatcher:
    """Map message names to handlers and send responses to the surface."""

    def __init__(
        self,
        session: ProjectSession,
        gateway: FileGateway | None = None,
        *,
        max_workers: int = 4,
    ) -> None:
        self.session = session
        self.gateway = gateway if gateway is not None else FileGateway(session)
        self._executor: ThreadPoolExecutor | None = None
        self._max_workers = max_workers
        self._handlers: dict[str, Callable[..., object]] = {
            events.LOAD_FILE_CONTENTS: self._load_file_contents,
            events.SAVE_FILE: self._save_file,
            events.CREATE_POST: self._create_post,
            events.RENAME_FILE: self._rename_file,
            events.OPEN_DIRECTORY: self._open_directory,
            events.REQUEST_CSS: self._request_css,
            events.LOAD_LAST_PROJECT: self._load_last_project,
            events.OPEN_PROJECT: self._open_project,
        }

    @property
    def message_names(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def handle(self, name: str, *args: object) -> object:
        """Run the handler for ``name`` and return its result."""
        try:
            handler = self._handlers[name]
        except KeyError:
            raise UnknownMessageError(name) from None
        logger.debug("handling %s", name)
        return handler(*args)

    def post(self, name: str, *args: object) -> Future:
        """Run ``name`` on the worker pool."""
        if name not in self._handlers:
            raise UnknownMessageError(name)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="blogdown-dispatch",
            )
        return self._executor.submit(self.handle, name, *args)

    def shutdown(self) -> None:
        """Wait for posted messages, then release the worker pool."""
        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def _load_file_contents(self, path: str) -> None:
        content = self.gateway.read_file(path)
        if content is None:
            return
        self.session.surface.send(events.FILE_CONTENTS, path, content)

    def _save_file(self, path: str, content: str) -> None:
        if self.gateway.write_file(path, content) is None:
            return
        self.session.surface.send(events.FILE_SAVED, path, content)

    def _create_post(self, name: str, content: str) -> None:
        created = self.gateway.create_post(name, content)
        if created is None:
            return
        self.session.surface.send(events.FILE_CONTENTS, str(created), content)

    def _rename_file(self, path: str, new_name: str) -> None:
        self.gateway.rename_file(path, new_name)

    def _open_directory(self, path: str) -> None:
        self.session.toggle_open_directory(path)

    def _request_css(self) -> None:
        css = self.gateway.read_stylesheet()
        if css is None:
            return
        self.session.surface.send(events.CSS_CONTENT, css)

    def _load_last_project(self) -> object:
        return self.session.open_last_project()

    def _open_project(self, path: str) -> object:
        return self.session.confirm_and_open(path)


__all__ = ["MessageDispatcher", "UnknownMessageError"]
