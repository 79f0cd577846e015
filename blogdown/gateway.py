"""Project-scoped file operations for the editor surface.

Every operation is silently skipped (returns ``None``, touches nothing) when no
project is active or the target resolves outside the active project root.
Skips are logged at debug level only so unscoped callers learn nothing about
paths outside the project.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import storage
from .session import Project, ProjectSession

logger = logging.getLogger(__name__)

STYLESHEET_PARTS = ("css", "style.css")


class FileGateway:
    """Authorization boundary between surface requests and the disk."""

    def __init__(self, session: ProjectSession) -> None:
        self._session = session

    def _project_for(self, *paths: Path | str) -> Project | None:
        """Return the active project when it contains every path in ``paths``."""
        project = self._session.active_project
        if project is None:
            logger.debug("no active project; skipping operation on %s", paths)
            return None
        for path in paths:
            if not project.contains(path):
                logger.debug("skipping operation outside %s", project.root_path)
                return None
        return project

    def read_file(self, path: Path | str) -> str | None:
        """Return file text; ``NotFoundError`` when missing."""
        if self._project_for(path) is None:
            return None
        return storage.read_text(Path(path))

    def write_file(self, path: Path | str, content: str) -> Path | None:
        """Create or overwrite ``path`` with ``content``."""
        if self._project_for(path) is None:
            return None
        target = Path(path)
        storage.write_text(target, content)
        return target

    def create_post(self, title: str, content: str) -> Path | None:
        """Write ``<root>/<postsDirectory>/<title>.md`` and return its path."""
        project = self._session.active_project
        if project is None:
            logger.debug("no active project; skipping new post %r", title)
            return None
        posts_dir = project.root_path / project.config.posts_directory
        target = posts_dir / f"{title}.md"
        if self._project_for(posts_dir, target) is None:
            return None
        storage.ensure_directory(posts_dir)
        storage.write_text(target, content)
        return target

    def create_file(self, name: str, directory: Path | str) -> Path | None:
        """Create an empty file called ``name`` inside ``directory``."""
        target = Path(directory) / name
        if self._project_for(directory, target) is None:
            return None
        storage.write_text(target, "")
        return target

    def rename_file(self, path: Path | str, new_name: Path | str) -> Path | None:
        """Rename ``path``; relative ``new_name`` resolves next to the source.

        Collisions are not checked here; the platform's rename semantics apply.
        """
        source = Path(path)
        target = Path(new_name)
        if not target.is_absolute():
            target = source.parent / target
        if self._project_for(source, target) is None:
            return None
        storage.rename(source, target)
        return target

    def clone_file(self, path: Path | str) -> Path | None:
        """Copy ``path`` to the first free ``<stem>(n)<ext>`` sibling."""
        if self._project_for(path) is None:
            return None
        source = Path(path)
        target = storage.next_clone_path(source)
        storage.copy_file(source, target)
        return target

    def delete_file(self, path: Path | str) -> bool | None:
        """Delete ``path``. A file that is already gone counts as success."""
        if self._project_for(path) is None:
            return None
        removed = storage.remove_file(Path(path))
        if not removed:
            logger.debug("delete of missing file %s treated as success", path)
        return True

    def read_stylesheet(self) -> str | None:
        """Return the project's ``css/style.css`` text."""
        project = self._session.active_project
        if project is None:
            return None
        return storage.read_text(project.root_path.joinpath(*STYLESHEET_PARTS))


__all__ = ["FileGateway", "STYLESHEET_PARTS"]
