"""Project lifecycle: the single active project and its rebuild cycle.

``ProjectSession`` is the explicit session-context object holding at most one
active ``Project``. Opening another project stops the previous project's
watcher before the new tree is built, so two coordinators never publish for
different roots at the same time.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.observers import Observer

from .errors import BlogdownError
from .events import PROJECT_LOADED, RENDER_SIDEBAR, Surface
from .manifest import MANIFEST_FILENAME, ProjectConfig, default_manifest_text, load_manifest
from .project_tree import DirectoryNode, build_directory_tree, reconcile_expansion
from .settings import SettingsStore
from .storage import ensure_directory, write_text
from .templates import STARTER_DIRECTORIES, STARTER_FILES
from .watch import WatchCoordinator

logger = logging.getLogger(__name__)

INITIALIZE_PROMPT = "There isn't a project in this directory, would you like to make one?"
INITIALIZE_OPTIONS = ("Yes", "No")


class OpenOutcome(enum.Enum):
    """Result of an open request."""

    OPENED = "opened"
    NEEDS_CONFIRMATION = "needs-confirmation"
    DECLINED = "declined"


class Project:
    """One opened project: config, current tree snapshot and watcher.

    ``directory`` is only replaced while ``rebuild_lock`` is held.
    """

    def __init__(
        self,
        root_path: Path,
        config: ProjectConfig,
        surface: Surface,
        *,
        observer_factory: Callable[[], object] = Observer,
    ) -> None:
        self.root_path = root_path
        self.config = config
        self.directory: DirectoryNode | None = None
        self.rebuild_lock = threading.Lock()
        self._surface = surface
        self._observer_factory = observer_factory
        self._open_paths: set[Path] = set()
        self._open_paths_lock = threading.Lock()
        self._watcher: WatchCoordinator | None = None

    @property
    def open_directory_paths(self) -> frozenset[Path]:
        with self._open_paths_lock:
            return frozenset(self._open_paths)

    @property
    def watcher(self) -> WatchCoordinator | None:
        return self._watcher

    def contains(self, path: Path | str) -> bool:
        """Return whether ``path`` resolves to the root or somewhere below it."""
        try:
            resolved = Path(path).resolve()
        except (OSError, RuntimeError):
            return False
        return resolved.is_relative_to(self.root_path)

    def toggle_open_directory(self, path: Path) -> bool:
        """Flip ``path`` in the opened set; returns the new membership."""
        with self._open_paths_lock:
            if path in self._open_paths:
                self._open_paths.discard(path)
                return False
            self._open_paths.add(path)
            return True

    def load(self) -> DirectoryNode:
        """Build the initial tree, start watching, then publish.

        Nothing reaches the surface unless both the build and the watch start
        succeed. Notifications arriving meanwhile wait on ``rebuild_lock``.
        """
        with self.rebuild_lock:
            directory = build_directory_tree(self.root_path, expanded=True)
            self.start_watching()
            self.directory = directory
            self._surface.send(PROJECT_LOADED, directory)
            self._surface.send(RENDER_SIDEBAR, directory)
        return directory

    def rebuild(self) -> None:
        """Run build, reconcile and publish; caller holds ``rebuild_lock``."""
        directory = build_directory_tree(self.root_path, expanded=True)
        reconcile_expansion(directory, self.open_directory_paths)
        self.directory = directory
        self._surface.send(RENDER_SIDEBAR, directory)

    def start_watching(self) -> None:
        watcher = WatchCoordinator(
            self.root_path,
            self.rebuild,
            lock=self.rebuild_lock,
            observer_factory=self._observer_factory,
        )
        watcher.start()
        self._watcher = watcher

    def resume_watching(self) -> None:
        """Watch again after a pause and publish changes missed meanwhile."""
        self.start_watching()
        self._watcher.notify()

    def stop_watching(self) -> None:
        watcher, self._watcher = self._watcher, None
        if watcher is not None:
            watcher.stop()


class ProjectSession:
    """Owns the active project and the persisted last-project setting."""

    def __init__(
        self,
        surface: Surface,
        settings: SettingsStore | None = None,
        *,
        observer_factory: Callable[[], object] | None = None,
    ) -> None:
        self.surface = surface
        self.settings = settings if settings is not None else SettingsStore()
        self._observer_factory = observer_factory if observer_factory is not None else Observer
        self._lifecycle_lock = threading.RLock()
        self._active: Project | None = None

    @property
    def active_project(self) -> Project | None:
        return self._active

    def is_project(self, path: Path | str) -> bool:
        """Return whether the manifest sits directly inside ``path``."""
        try:
            return (Path(path) / MANIFEST_FILENAME).is_file()
        except OSError:
            return False

    def initialize_project(self, path: Path | str) -> None:
        """Write the default manifest plus starter directories and files.

        Existing directories are kept. Existing starter files are not
        overwritten. Other I/O failures raise ``StorageError``.
        """
        root = Path(path)
        write_text(root / MANIFEST_FILENAME, default_manifest_text())
        for name in STARTER_DIRECTORIES:
            ensure_directory(root / name)
        for parts, content in STARTER_FILES.items():
            target = root.joinpath(*parts)
            if target.exists():
                logger.debug("keeping existing starter file %s", target)
                continue
            write_text(target, content)
        logger.info("initialized project in %s", root)

    def open_project(self, path: Path | str, auto_initialize: bool = False) -> OpenOutcome:
        """Open ``path`` as the active project.

        A directory without a manifest is only scaffolded when
        ``auto_initialize`` is set; otherwise ``NEEDS_CONFIRMATION`` is returned
        and nothing is written, leaving the caller to ask the user and call
        ``initialize_then_open``.
        """
        root = _absolute(path)
        if not self.is_project(root):
            if not auto_initialize:
                logger.info("%s is not a project; confirmation required", root)
                return OpenOutcome.NEEDS_CONFIRMATION
            self.initialize_project(root)
        self._open_existing(root)
        return OpenOutcome.OPENED

    def initialize_then_open(self, path: Path | str) -> OpenOutcome:
        """Scaffold ``path`` after user confirmation, then open it."""
        root = _absolute(path)
        if not self.is_project(root):
            self.initialize_project(root)
        self._open_existing(root)
        return OpenOutcome.OPENED

    def confirm_and_open(self, path: Path | str) -> OpenOutcome:
        """Open ``path``, asking the surface before scaffolding a new project."""
        outcome = self.open_project(path)
        if outcome is not OpenOutcome.NEEDS_CONFIRMATION:
            return outcome
        choice = self.surface.ask(INITIALIZE_PROMPT, INITIALIZE_OPTIONS)
        if choice == 0:
            return self.initialize_then_open(path)
        logger.info("user declined to initialize %s", path)
        return OpenOutcome.DECLINED

    def last_opened_project_path(self) -> str:
        return self.settings.last_opened_project()

    def open_last_project(self) -> OpenOutcome | None:
        """Reopen the persisted last project, scaffolding it if needed.

        Returns ``None`` when nothing was recorded or the directory is gone.
        """
        last = self.last_opened_project_path()
        if not last:
            return None
        if not Path(last).is_dir():
            logger.info("last opened project %s no longer exists", last)
            return None
        return self.open_project(last, auto_initialize=True)

    def close_active_project(self) -> None:
        """Stop watching and discard the active project, if any."""
        with self._lifecycle_lock:
            project, self._active = self._active, None
        if project is None:
            return
        project.stop_watching()
        logger.info("closed project %s", project.root_path)

    def toggle_open_directory(self, path: Path | str) -> bool | None:
        """Flip expansion of ``path`` for the next rebuild.

        Returns the new membership, or ``None`` when skipped because no project
        is active or ``path`` lies outside its root.
        """
        project = self._active
        if project is None or not project.contains(path):
            logger.debug("ignoring expansion toggle outside active project: %s", path)
            return None
        return project.toggle_open_directory(Path(path).resolve())

    def _open_existing(self, root: Path) -> None:
        with self._lifecycle_lock:
            config = load_manifest(root)
            project = Project(root, config, self.surface, observer_factory=self._observer_factory)
            previous = self._active
            if previous is not None:
                previous.stop_watching()
            try:
                project.load()
            except (BlogdownError, OSError):
                project.stop_watching()
                if previous is not None:
                    previous.resume_watching()
                raise
            self._active = project
            self.settings.set_last_opened_project(root)
        logger.info("opened project %s (%s)", root, config.title)


def _absolute(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


__all__ = [
    "INITIALIZE_PROMPT",
    "INITIALIZE_OPTIONS",
    "OpenOutcome",
    "Project",
    "ProjectSession",
]
