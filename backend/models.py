"""Data model shared by the workout flow, PR tracking and persistence.

Persisted records use the camelCase keys of the stored JSON format; the
``to_dict``/``from_dict`` helpers translate between the two.  ``from_dict``
raises ``KeyError``, ``TypeError`` or ``ValueError`` for malformed data and
leaves it to :mod:`backend.storage` to treat that as absence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from backend import DEFAULT_SETS_PER_EXERCISE, DEFAULT_TARGET_REPS

EXERCISE_KINDS = ("weights", "bodyweight")
THEMES = ("ocean", "sunset", "forest", "none", "white")


@dataclass(frozen=True)
class Exercise:
    """An exercise that can be added to a workout."""

    id: str
    name: str
    kind: str = "weights"


@dataclass
class ExerciseConfig:
    """Per-workout configuration for a selected exercise."""

    exercise_id: str
    set_count: int = DEFAULT_SETS_PER_EXERCISE
    target_reps: int = DEFAULT_TARGET_REPS
    default_weight_lb: float | None = 0.0
    rest_seconds_override: int | None = None


@dataclass
class SetPlanRow:
    """Target reps and weight for one set of the active exercise."""

    target_reps: int
    weight_lb: float


@dataclass(frozen=True)
class SetResult:
    """A completed set."""

    reps: int
    weight_lb: float
    completed_at: int

    def to_dict(self) -> dict:
        return {
            "reps": self.reps,
            "weightLb": self.weight_lb,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetResult":
        return cls(
            reps=int(data["reps"]),
            weight_lb=float(data["weightLb"]),
            completed_at=int(data["completedAt"]),
        )


@dataclass(frozen=True)
class RepPR:
    """Heaviest weight lifted for an exact rep count."""

    reps: int
    weight_lb: float
    date: int

    def to_dict(self) -> dict:
        return {"reps": self.reps, "weightLb": self.weight_lb, "date": self.date}

    @classmethod
    def from_dict(cls, data: dict) -> "RepPR":
        return cls(
            reps=int(data["reps"]),
            weight_lb=float(data["weightLb"]),
            date=int(data["date"]),
        )


@dataclass(frozen=True)
class ExercisePRs:
    """All rep PRs of one exercise, keyed by rep count."""

    exercise_id: str
    by_reps: dict[int, RepPR] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_id,
            "byReps": {str(r): pr.to_dict() for r, pr in sorted(self.by_reps.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExercisePRs":
        by_reps = {
            int(reps): RepPR.from_dict(pr) for reps, pr in data["byReps"].items()
        }
        return cls(exercise_id=str(data["exerciseId"]), by_reps=by_reps)


# exercise id -> PRs
AllPRs = dict[str, ExercisePRs]


@dataclass
class Settings:
    unit: str = "lb"
    theme: str = "ocean"

    def to_dict(self) -> dict:
        return {"unit": self.unit, "theme": self.theme}


@dataclass(frozen=True)
class SessionExercise:
    """One exercise of a completed session with the name it had then."""

    exercise_id: str
    name: str
    sets: tuple[SetResult, ...] = ()

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_id,
            "name": self.name,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionExercise":
        return cls(
            exercise_id=str(data["exerciseId"]),
            name=str(data["name"]),
            sets=tuple(SetResult.from_dict(s) for s in data["sets"]),
        )


@dataclass(frozen=True)
class WorkoutSession:
    """A completed workout as stored in history."""

    id: str
    date: int
    rest_seconds: int
    unit_at_time: str
    exercises: tuple[SessionExercise, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "restSeconds": self.rest_seconds,
            "unitAtTime": self.unit_at_time,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSession":
        unit = data["unitAtTime"]
        if unit not in ("lb", "kg"):
            raise ValueError(f"Unknown unit '{unit}'")
        return cls(
            id=str(data["id"]),
            date=int(data["date"]),
            rest_seconds=int(data["restSeconds"]),
            unit_at_time=unit,
            exercises=tuple(SessionExercise.from_dict(e) for e in data["exercises"]),
        )
