"""Built-in exercise catalog and custom exercise helpers."""

from __future__ import annotations

import re

from backend.models import Exercise

DEFAULT_EXERCISES: tuple[Exercise, ...] = (
    Exercise("bench_press", "Bench Press", "weights"),
    Exercise("squat", "Squat", "weights"),
    Exercise("deadlift", "Deadlift", "weights"),
    Exercise("overhead_press", "Overhead Press", "weights"),
    Exercise("pushups", "Push-ups", "bodyweight"),
    Exercise("pullups", "Pull-ups", "bodyweight"),
)

# Brief description shown on selection cards
EXERCISE_MUSCLES = {
    "bench_press": "Chest, shoulders, triceps",
    "squat": "Quads, glutes, core",
    "deadlift": "Posterior chain, back, glutes",
    "overhead_press": "Shoulders, triceps, upper chest",
    "pushups": "Chest, shoulders, triceps, core",
    "pullups": "Lats, biceps, upper back",
}


def slugify(name: str) -> str:
    """Return an id such as ``"front_squat"`` for ``"Front Squat!"``."""

    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def add_custom_exercise(
    exercises: list[Exercise], name: str, now: int
) -> Exercise | None:
    """Append a user-defined exercise named ``name`` to ``exercises``.

    Blank names are ignored.  When the derived id is already taken the
    current epoch milliseconds ``now`` are appended to keep it unique.
    Display names may repeat.
    """

    trimmed = name.strip()
    if not trimmed:
        return None
    ex_id = slugify(trimmed)
    if any(e.id == ex_id for e in exercises):
        ex_id = f"{ex_id}_{now}"
    exercise = Exercise(ex_id, trimmed, "weights")
    exercises.append(exercise)
    return exercise


def find_exercise(exercises: list[Exercise], exercise_id: str) -> Exercise | None:
    for exercise in exercises:
        if exercise.id == exercise_id:
            return exercise
    return None


def exercise_name(exercises: list[Exercise], exercise_id: str) -> str:
    """Return the display name for ``exercise_id``, or the id itself."""

    exercise = find_exercise(exercises, exercise_id)
    return exercise.name if exercise else exercise_id


def muscles_for(exercise: Exercise) -> str:
    if exercise.id in EXERCISE_MUSCLES:
        return EXERCISE_MUSCLES[exercise.id]
    if exercise.kind == "bodyweight":
        return "Bodyweight compound"
    return "Custom exercise"
