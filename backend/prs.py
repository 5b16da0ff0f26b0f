"""Personal record tracking."""

from __future__ import annotations

from backend import MAX_PR_REPS, MIN_PR_REPS
from backend.models import AllPRs, ExercisePRs, RepPR
from backend.units import display_weight


def get_exercise_prs(prs: AllPRs, exercise_id: str) -> ExercisePRs:
    """Return the PRs for ``exercise_id`` or an empty entry."""

    return prs.get(exercise_id) or ExercisePRs(exercise_id=exercise_id, by_reps={})


def update_pr(
    prs: AllPRs,
    exercise_id: str,
    reps: int,
    weight_lb: float,
    when: int,
) -> AllPRs:
    """Return ``prs`` with the set applied if it beats the stored record.

    Only rep counts between :data:`MIN_PR_REPS` and :data:`MAX_PR_REPS` are
    tracked.  A new record needs strictly more weight than the existing one.
    When nothing changes the very same mapping is returned, so callers can
    compare with ``is`` to decide whether to persist.
    """

    if reps < MIN_PR_REPS or reps > MAX_PR_REPS:
        return prs
    current = get_exercise_prs(prs, exercise_id)
    existing = current.by_reps.get(reps)
    if existing is not None and weight_lb <= existing.weight_lb:
        return prs
    by_reps = {**current.by_reps, reps: RepPR(reps=reps, weight_lb=weight_lb, date=when)}
    return {**prs, exercise_id: ExercisePRs(exercise_id=exercise_id, by_reps=by_reps)}


def pr_rows(exercise_prs: ExercisePRs, unit: str) -> list[tuple[int, str]]:
    """Return one ``(reps, text)`` row per tracked rep count."""

    rows = []
    for reps in range(MIN_PR_REPS, MAX_PR_REPS + 1):
        pr = exercise_prs.by_reps.get(reps)
        if pr is None:
            rows.append((reps, "-"))
        else:
            rows.append((reps, f"{display_weight(pr.weight_lb, unit)} {unit}"))
    return rows
