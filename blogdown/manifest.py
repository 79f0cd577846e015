"""Per-project JSON manifest (``blogdown.config.json``) loading.

A directory is a blogdown project when this manifest sits directly inside it.
The manifest is parsed once on open into an immutable ``ProjectConfig``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidProjectError

MANIFEST_FILENAME = "blogdown.config.json"

# JSON key -> ProjectConfig attribute
_REQUIRED_FIELDS = {
    "projectName": "project_name",
    "title": "title",
    "icon": "icon",
    "postsDirectory": "posts_directory",
    "imagesDirectory": "images_directory",
}

DEFAULT_MANIFEST = {
    "projectName": "example",
    "title": "Blog Name",
    "postsDirectory": "posts",
    "imagesDirectory": "img",
    "icon": "favicon.ico",
    "css": "style.css",
}


@dataclass(frozen=True)
class ProjectConfig:
    """Parsed project manifest."""

    project_name: str
    title: str
    icon: str
    posts_directory: str
    images_directory: str


def manifest_path(root: Path | str) -> Path:
    """Return the manifest location for project ``root``."""
    return Path(root) / MANIFEST_FILENAME


def parse_manifest(data: object) -> ProjectConfig:
    """Validate decoded manifest JSON and build a ``ProjectConfig``.

    Every required key must be present with a string value. Extra keys are
    ignored.
    """
    if not isinstance(data, dict):
        raise InvalidProjectError("manifest must be a JSON object")
    values: dict[str, str] = {}
    for key, attribute in _REQUIRED_FIELDS.items():
        value = data.get(key)
        if not isinstance(value, str):
            raise InvalidProjectError(f"manifest field {key!r} missing or not a string")
        values[attribute] = value
    return ProjectConfig(**values)


def load_manifest(root: Path | str) -> ProjectConfig:
    """Read and validate the manifest of project ``root``."""
    path = manifest_path(root)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidProjectError(f"cannot read manifest {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidProjectError(f"malformed manifest {path}: {exc}") from exc
    return parse_manifest(data)


def default_manifest_text() -> str:
    """Return the manifest written into freshly initialized projects."""
    return json.dumps(DEFAULT_MANIFEST, indent=4) + "\n"


__all__ = [
    "MANIFEST_FILENAME",
    "DEFAULT_MANIFEST",
    "ProjectConfig",
    "manifest_path",
    "parse_manifest",
    "load_manifest",
    "default_manifest_text",
]
