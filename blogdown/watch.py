"""Filesystem watch coordination for the active project.

A watchdog observer reports every create/modify/delete/move anywhere under
the project root. Each notification runs one rebuild cycle while holding the
project's rebuild lock, so cycles never overlap. Notifications are not
debounced: a burst of N events yields up to N sequential cycles.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .errors import BlogdownError

logger = logging.getLogger(__name__)

# open/close events fire on plain reads and do not change the tree
TREE_CHANGING_EVENT_TYPES = frozenset({"created", "modified", "deleted", "moved"})


class _NotifyOnChange(FileSystemEventHandler):
    """Forward tree-changing watchdog events to a notify callback."""

    def __init__(self, notify: Callable[[], object]) -> None:
        super().__init__()
        self._notify = notify

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in TREE_CHANGING_EVENT_TYPES:
            return
        self._notify()


class WatchCoordinator:
    """Bridge raw filesystem notifications into serialized rebuild cycles.

    ``rebuild`` runs with ``lock`` held. After ``stop()`` no new cycle starts,
    including notifications already waiting on the lock; a cycle already
    running is allowed to finish.
    """

    def __init__(
        self,
        root: Path,
        rebuild: Callable[[], None],
        *,
        lock: threading.Lock | None = None,
        observer_factory: Callable[[], object] = Observer,
    ) -> None:
        self.root = root
        self._rebuild = rebuild
        self._lock = lock if lock is not None else threading.Lock()
        self._observer_factory = observer_factory
        self._observer = None
        self._state_lock = threading.Lock()
        self._started = False
        self._stopped = False

    @property
    def running(self) -> bool:
        with self._state_lock:
            return self._started and not self._stopped

    def start(self) -> None:
        """Begin watching ``root`` recursively."""
        with self._state_lock:
            if self._started:
                raise RuntimeError("watch coordinator already started")
            self._started = True
            observer = self._observer_factory()
            observer.schedule(_NotifyOnChange(self.notify), str(self.root), recursive=True)
            try:
                observer.start()
            except OSError:
                self._stopped = True
                raise
            self._observer = observer
        logger.debug("watching %s", self.root)

    def notify(self) -> bool:
        """Run one rebuild cycle; returns whether a cycle ran to completion."""
        if self._is_stopped():
            return False
        with self._lock:
            if self._is_stopped():
                logger.debug("dropping queued notification for stopped watch on %s", self.root)
                return False
            try:
                self._rebuild()
            except (BlogdownError, OSError):
                logger.exception("rebuild of %s failed; keeping previous tree", self.root)
                return False
        return True

    def stop(self) -> None:
        """Stop watching and release the OS watch. Safe to call repeatedly."""
        with self._state_lock:
            self._stopped = True
            observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        if observer is not threading.current_thread():
            observer.join()
        logger.debug("stopped watching %s", self.root)

    def _is_stopped(self) -> bool:
        with self._state_lock:
            return self._stopped


__all__ = ["TREE_CHANGING_EVENT_TYPES", "WatchCoordinator"]
