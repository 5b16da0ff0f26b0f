"""Shared constants and configuration for backend modules."""

from __future__ import annotations

import os
from pathlib import Path

# Default values used when an exercise is first selected
DEFAULT_SETS_PER_EXERCISE = 3
DEFAULT_TARGET_REPS = 10

# Global rest between sets in seconds, unless an exercise overrides it
DEFAULT_REST_DURATION = 90

# Rep counts tracked for personal records
MIN_PR_REPS = 1
MAX_PR_REPS = 15

# Number of completed sessions kept in history
HISTORY_LIMIT = 100

# Directory holding persisted JSON records
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def data_dir() -> Path:
    """Return the data directory, honouring ``WORKOUTAPP_DATA_DIR``."""

    override = os.environ.get("WORKOUTAPP_DATA_DIR")
    if override:
        return Path(override)
    return DEFAULT_DATA_DIR


__all__ = [
    "DEFAULT_SETS_PER_EXERCISE",
    "DEFAULT_TARGET_REPS",
    "DEFAULT_REST_DURATION",
    "MIN_PR_REPS",
    "MAX_PR_REPS",
    "HISTORY_LIMIT",
    "DEFAULT_DATA_DIR",
    "data_dir",
]
