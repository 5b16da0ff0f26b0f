"""Loading and saving of settings, personal records and history.

Each record is serialised to JSON and kept under its own key in a
:class:`KeyValueStore`.  Loads never raise: missing or malformed data falls
back to defaults.  When no store is available (``store=None``) every load
returns defaults and every save is a no-op.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from backend.models import (
    THEMES,
    AllPRs,
    ExercisePRs,
    Settings,
    WorkoutSession,
)
from backend.units import UNITS

SETTINGS_KEY = "workoutapp_settings_v1"
PRS_KEY = "workoutapp_prs_v1"
HISTORY_KEY = "workoutapp_history_v1"

_MALFORMED = (ValueError, TypeError, KeyError, AttributeError, OverflowError)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Store kept in a plain ``dict``; nothing survives the process."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store writing each key to ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)


class Storage:
    """Gateway between the in-memory records and a key-value store."""

    def __init__(self, store: KeyValueStore | None) -> None:
        self.store = store

    @property
    def available(self) -> bool:
        return self.store is not None

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------
    def _read(self, key: str):
        """Return the decoded JSON stored under ``key`` or ``None``."""

        if self.store is None:
            return None
        try:
            raw = self.store.get(key)
        except (OSError, UnicodeDecodeError):
            logging.exception("Reading %s failed", key)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (ValueError, RecursionError):
            logging.warning("Discarding unreadable %s", key)
            return None

    def _write(self, key: str, payload) -> None:
        if self.store is None:
            return
        try:
            self.store.set(key, json.dumps(payload))
        except OSError:
            logging.exception("Writing %s failed", key)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def load_settings(self) -> Settings:
        """Return stored settings; invalid fields fall back individually."""

        data = self._read(SETTINGS_KEY)
        if not isinstance(data, dict):
            return Settings()
        defaults = Settings()
        unit = data.get("unit")
        theme = data.get("theme")
        return Settings(
            unit=unit if unit in UNITS else defaults.unit,
            theme=theme if theme in THEMES else defaults.theme,
        )

    def save_settings(self, settings: Settings) -> None:
        self._write(SETTINGS_KEY, settings.to_dict())

    # ------------------------------------------------------------------
    # Personal records
    # ------------------------------------------------------------------
    def load_prs(self) -> AllPRs:
        data = self._read(PRS_KEY)
        if data is None:
            return {}
        try:
            return {
                str(ex_id): ExercisePRs.from_dict(entry)
                for ex_id, entry in data.items()
            }
        except _MALFORMED:
            logging.warning("Discarding malformed %s", PRS_KEY)
            return {}

    def save_prs(self, prs: AllPRs) -> None:
        self._write(PRS_KEY, {ex_id: entry.to_dict() for ex_id, entry in prs.items()})

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def load_history(self) -> list[WorkoutSession]:
        data = self._read(HISTORY_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logging.warning("Discarding malformed %s", HISTORY_KEY)
            return []
        try:
            return [WorkoutSession.from_dict(item) for item in data]
        except _MALFORMED:
            logging.warning("Discarding malformed %s", HISTORY_KEY)
            return []

    def save_history(self, history: list[WorkoutSession]) -> None:
        self._write(HISTORY_KEY, [session.to_dict() for session in history])
