"""Application state shared by every screen.

:class:`AppState` owns the loaded settings, personal records and history
together with the exercise catalog.  Screens receive the instance they
work with instead of reaching for module globals; :class:`Storage` is the
only place where anything is written to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from backend import HISTORY_LIMIT, data_dir
from backend.exercises import DEFAULT_EXERCISES
from backend.models import THEMES, AllPRs, Exercise, Settings, WorkoutSession
from backend.prs import update_pr
from backend.storage import JsonFileStore, KeyValueStore, Storage
from backend.units import UNITS


class AppState:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self.settings: Settings = storage.load_settings()
        self.prs: AllPRs = storage.load_prs()
        self.history: list[WorkoutSession] = storage.load_history()
        self.exercises: list[Exercise] = list(DEFAULT_EXERCISES)

    @classmethod
    def from_store(cls, store: KeyValueStore | None) -> "AppState":
        return cls(Storage(store))

    @classmethod
    def from_data_dir(cls, directory: Path | None = None) -> "AppState":
        """Return state persisted as JSON files under ``directory``."""

        return cls.from_store(JsonFileStore(directory or data_dir()))

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def set_unit(self, unit: str) -> bool:
        if unit not in UNITS:
            return False
        self.settings = Settings(unit=unit, theme=self.settings.theme)
        self.storage.save_settings(self.settings)
        return True

    def set_theme(self, theme: str) -> bool:
        if theme not in THEMES:
            return False
        self.settings = Settings(unit=self.settings.unit, theme=theme)
        self.storage.save_settings(self.settings)
        return True

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def record_pr(self, exercise_id: str, reps: int, weight_lb: float, when: int) -> bool:
        """Apply a completed set to the PR table, saving only on change."""

        updated = update_pr(self.prs, exercise_id, reps, weight_lb, when)
        if updated is self.prs:
            return False
        self.prs = updated
        self.storage.save_prs(updated)
        logging.info("New %s PR: %s reps @ %s lb", exercise_id, reps, weight_lb)
        return True

    def add_session(self, session: WorkoutSession) -> None:
        """Prepend ``session`` to history, dropping the oldest beyond the cap."""

        self.history = [session, *self.history][:HISTORY_LIMIT]
        self.storage.save_history(self.history)
