"""Persistent JSON application settings.

Stores the last opened project path. Reads are defensive: a missing or
malformed settings file falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "blogdown"
SETTINGS_FILENAME = "settings.json"
DEFAULT_SETTINGS_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / SETTINGS_FILENAME
SETTINGS_PATH = Path(os.environ["BLOGDOWN_SETTINGS"]) if os.environ.get("BLOGDOWN_SETTINGS") else DEFAULT_SETTINGS_PATH

LAST_OPENED_PROJECT_KEY = "lastOpenedProject"


class SettingsStore:
    """Small key/value store backed by one JSON object on disk.

    ``path`` defaults to the module-level ``SETTINGS_PATH`` resolved at call
    time, so tests can patch it.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else SETTINGS_PATH

    def load(self) -> dict[str, object]:
        """Return the stored object, or ``{}`` when missing or malformed."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable settings %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: dict[str, object]) -> None:
        """Persist ``data`` as pretty-printed JSON; failures are only logged."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write settings %s: %s", self.path, exc)

    def get_str(self, key: str, default: str = "") -> str:
        value = self.load().get(key)
        return value if isinstance(value, str) else default

    def set(self, key: str, value: object) -> None:
        data = self.load()
        data[key] = value
        self.save(data)

    def last_opened_project(self) -> str:
        """Return the last opened project path, ``""`` when unset."""
        return self.get_str(LAST_OPENED_PROJECT_KEY)

    def set_last_opened_project(self, path: Path | str) -> None:
        self.set(LAST_OPENED_PROJECT_KEY, str(path))


__all__ = [
    "APP_NAME",
    "SETTINGS_PATH",
    "LAST_OPENED_PROJECT_KEY",
    "SettingsStore",
]
