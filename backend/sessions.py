"""Text summaries of completed workout sessions."""

from __future__ import annotations

import time

from backend.models import SetResult, WorkoutSession
from backend.units import display_weight


def format_set(index: int, result: SetResult, unit: str) -> str:
    """Return ``"Set 1: 5 reps @ 225 lb"`` for the zero-based ``index``."""

    return (
        f"Set {index + 1}: {result.reps} reps @ "
        f"{display_weight(result.weight_lb, unit)} {unit}"
    )


def format_session(session: WorkoutSession, unit: str) -> str:
    """Return a multi-line summary of ``session`` with weights in ``unit``.

    Exercises without logged sets are listed with no set lines.
    """

    when = time.strftime("%Y-%m-%d %H:%M", time.localtime(session.date / 1000))
    lines = [f"Workout: {when}", f"Rest: {session.rest_seconds}s"]
    for exercise in session.exercises:
        lines.append(f"\n{exercise.name}")
        for idx, result in enumerate(exercise.sets):
            lines.append(f"  {format_set(idx, result, unit)}")
    return "\n".join(lines)
