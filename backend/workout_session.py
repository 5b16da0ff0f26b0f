"""Guided workout flow.

:class:`WorkoutStateMachine` walks the user through a workout: building a
plan during setup, logging sets one at a time while a rest countdown runs
between them, and storing the finished session in history.  The current
phase is one of :class:`SetupPhase`, :class:`InputPhase` or
:class:`DonePhase`; data that only makes sense while logging (cursor,
results, offsets) lives on :class:`InputPhase` so it cannot exist outside a
running workout.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Union

from assets.sounds import CuePlayer
from backend import DEFAULT_REST_DURATION
from backend.exercises import exercise_name, find_exercise
from backend.models import (
    Exercise,
    ExerciseConfig,
    SessionExercise,
    SetPlanRow,
    SetResult,
    WorkoutSession,
)
from backend.timer import CountdownTimer
from backend.units import parse_weight_text, weight_field_text

_CONFIG_FIELDS = (
    "set_count",
    "target_reps",
    "default_weight_lb",
    "rest_seconds_override",
)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(uuid.uuid4())


def _coerce_int(raw) -> int | None:
    """Return ``raw`` as an ``int`` or ``None`` if it is not a number."""

    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = raw
    else:
        try:
            value = float(str(raw).strip())
        except ValueError:
            return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return int(value)


@dataclass(frozen=True)
class Cursor:
    """Position of the set currently being performed."""

    exercise_index: int = 0
    set_index: int = 0


@dataclass
class PlanDraft:
    """Exercise selection and configuration built during setup."""

    selected: dict[str, ExerciseConfig] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def plan(self) -> list[ExerciseConfig]:
        """Return configs in selection order, skipping those without sets."""

        configs = (self.selected.get(ex_id) for ex_id in self.order)
        return [cfg for cfg in configs if cfg is not None and cfg.set_count > 0]


@dataclass
class Progress:
    """Logged sets and input fields of a running workout."""

    results: dict[str, list[SetResult]] = field(default_factory=dict)
    # rows inserted above already-logged results, per exercise
    offsets: dict[str, int] = field(default_factory=dict)
    reps: int = 0
    weight_lb: float = 0.0
    weight_text: str = ""


@dataclass(frozen=True)
class RowView:
    """One row of the set table for the current exercise."""

    index: int
    target_reps: int
    weight_lb: float
    result: SetResult | None
    is_current: bool

    @property
    def is_done(self) -> bool:
        return self.result is not None


@dataclass
class SetupPhase:
    draft: PlanDraft
    name = "setup"


@dataclass
class InputPhase:
    cursor: Cursor
    plan: list[ExerciseConfig]
    progress: Progress
    name = "input"

    @property
    def current(self) -> ExerciseConfig:
        return self.plan[self.cursor.exercise_index]


@dataclass
class DonePhase:
    session: WorkoutSession
    name = "done"


Phase = Union[SetupPhase, InputPhase, DonePhase]


class WorkoutStateMachine:
    """Drive a workout from setup to a stored session.

    ``app`` is the :class:`core.AppState` holding settings, PRs, history and
    the exercise catalog.  ``now`` returns epoch milliseconds and ``new_id``
    a unique session id; both default to the system clock and ``uuid4``.
    Operations called in a phase where they do not apply are ignored and
    report ``False``/``None``.
    """

    def __init__(
        self,
        app,
        *,
        timer: CountdownTimer | None = None,
        cue_player=None,
        now: Callable[[], int] = _epoch_ms,
        new_id: Callable[[], str] = _new_id,
        rest_seconds: int = DEFAULT_REST_DURATION,
    ) -> None:
        self.app = app
        self.timer = timer if timer is not None else CountdownTimer()
        self.cue_player = cue_player if cue_player is not None else CuePlayer()
        self.now = now
        self.new_id = new_id
        self.rest_seconds = rest_seconds
        self.draft = PlanDraft()
        # per-exercise set targets; kept when a workout is abandoned
        self.set_plans: dict[str, list[SetPlanRow]] = {}
        self.phase: Phase = SetupPhase(self.draft)
        self.cue_armed = False
        self.announcement = ""
        self.timer.bind(on_expire=self._on_rest_expired)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def phase_name(self) -> str:
        return self.phase.name

    @property
    def unit(self) -> str:
        return self.app.settings.unit

    def _announce(self, message: str) -> None:
        self.announcement = message
        logging.info(message)

    def _in_setup(self) -> bool:
        return isinstance(self.phase, SetupPhase)

    def _input_phase(self) -> InputPhase | None:
        return self.phase if isinstance(self.phase, InputPhase) else None

    def _init_rows(self, cfg: ExerciseConfig) -> list[SetPlanRow]:
        """Size the row table of ``cfg`` to its set count, keeping edits."""

        existing = self.set_plans.get(cfg.exercise_id, [])
        rows = [
            existing[i]
            if i < len(existing)
            else SetPlanRow(cfg.target_reps, cfg.default_weight_lb or 0.0)
            for i in range(cfg.set_count)
        ]
        self.set_plans[cfg.exercise_id] = rows
        return rows

    def _rows_for(self, cfg: ExerciseConfig) -> list[SetPlanRow]:
        rows = self.set_plans.get(cfg.exercise_id)
        if rows is None:
            rows = self._init_rows(cfg)
        return rows

    def _prefill_weight(self, progress: Progress, weight_lb: float) -> None:
        progress.weight_lb = weight_lb
        progress.weight_text = weight_field_text(weight_lb, self.unit)

    def _stop_rest(self) -> None:
        self.timer.pause()
        self.cue_armed = False

    def _on_rest_expired(self, *args) -> None:
        if not self.cue_armed:
            return
        self.cue_armed = False
        self.cue_player.play_cue()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def plan(self) -> list[ExerciseConfig]:
        if isinstance(self.phase, InputPhase):
            return self.phase.plan
        return self.draft.plan()

    def is_selected(self, exercise_id: str) -> bool:
        return exercise_id in self.draft.selected

    def toggle_select(self, exercise_id: str) -> bool:
        """Select or deselect ``exercise_id``; return ``True`` if now selected."""

        if not self._in_setup():
            return self.is_selected(exercise_id)
        draft = self.draft
        if exercise_id in draft.selected:
            del draft.selected[exercise_id]
            draft.order = [ex_id for ex_id in draft.order if ex_id != exercise_id]
            return False
        draft.selected[exercise_id] = ExerciseConfig(exercise_id=exercise_id)
        if exercise_id not in draft.order:
            draft.order.append(exercise_id)
        return True

    def update_config(self, exercise_id: str, **changes) -> bool:
        """Update configuration fields of a selected exercise."""

        unknown = set(changes) - set(_CONFIG_FIELDS)
        if unknown:
            raise TypeError(f"Unknown config fields: {', '.join(sorted(unknown))}")
        cfg = self.draft.selected.get(exercise_id)
        if cfg is None or not self._in_setup():
            return False
        for name, value in changes.items():
            if name in ("set_count", "target_reps"):
                count = _coerce_int(value)
                if count is None:
                    raise TypeError(f"{name} must be a number, got {value!r}")
                value = max(0, count)
            setattr(cfg, name, value)
        return True

    def set_config_count_text(self, exercise_id: str, field_name: str, raw) -> bool:
        """Set ``set_count`` or ``target_reps`` from user text."""

        if field_name not in ("set_count", "target_reps"):
            raise TypeError(f"Not a count field: {field_name}")
        value = _coerce_int(raw)
        if value is None:
            return False
        return self.update_config(exercise_id, **{field_name: max(0, value)})

    def set_config_weight_text(self, exercise_id: str, raw: str) -> bool:
        """Set the default weight from text in the display unit.

        Empty text clears the default; text that is not a number is ignored.
        """
        if raw.strip() == "":
            return self.update_config(exercise_id, default_weight_lb=None)
        if raw.strip() == "-":
            return False
        weight_lb = parse_weight_text(raw, self.unit)
        if weight_lb is None:
            return False
        return self.update_config(exercise_id, default_weight_lb=weight_lb)

    def set_config_rest_text(self, exercise_id: str, raw: str) -> bool:
        """Set the rest override in seconds; empty text falls back to global."""

        if str(raw).strip() == "":
            return self.update_config(exercise_id, rest_seconds_override=None)
        seconds = _coerce_int(raw)
        if seconds is None:
            return False
        return self.update_config(exercise_id, rest_seconds_override=max(0, seconds))

    def move_exercise(self, drag_id: str, target_id: str) -> bool:
        """Move ``drag_id`` to the position currently held by ``target_id``."""

        if not self._in_setup() or drag_id == target_id:
            return False
        order = self.draft.order
        if drag_id not in order:
            return False
        remaining = [ex_id for ex_id in order if ex_id != drag_id]
        if target_id not in remaining:
            return False
        remaining.insert(remaining.index(target_id), drag_id)
        self.draft.order = remaining
        return True

    def set_rest_seconds(self, seconds) -> bool:
        value = _coerce_int(seconds)
        if value is None:
            return False
        self.rest_seconds = max(0, value)
        return True

    # ------------------------------------------------------------------
    # Workout
    # ------------------------------------------------------------------
    def begin_workout(self) -> bool:
        if not self._in_setup():
            return False
        plan = self.draft.plan()
        if not plan:
            return False
        first = plan[0]
        progress = Progress()
        self._init_rows(first)
        progress.offsets[first.exercise_id] = 0
        self._prefill_weight(progress, first.default_weight_lb or 0.0)
        self.timer.reset(0)
        self.cue_armed = False
        self.phase = InputPhase(Cursor(0, 0), plan, progress)
        logging.info("Workout started with %d exercises", len(plan))
        self._announce("Begin working out")
        return True

    def record_set(self) -> SetResult | None:
        """Log the current set and move on to the next one."""

        phase = self._input_phase()
        if phase is None:
            return None
        cfg = phase.current
        progress = phase.progress
        now = self.now()
        result = SetResult(reps=progress.reps, weight_lb=progress.weight_lb, completed_at=now)
        progress.results.setdefault(cfg.exercise_id, []).append(result)
        self.app.record_pr(cfg.exercise_id, result.reps, result.weight_lb, now)

        cursor = phase.cursor
        if cursor.set_index + 1 < cfg.set_count:
            nxt = Cursor(cursor.exercise_index, cursor.set_index + 1)
        else:
            nxt = Cursor(cursor.exercise_index + 1, 0)
        if nxt.exercise_index >= len(phase.plan):
            self._finish(phase)
            return result

        next_cfg = phase.plan[nxt.exercise_index]
        rows = self._init_rows(next_cfg)
        progress.offsets.setdefault(next_cfg.exercise_id, 0)
        if nxt.set_index < len(rows):
            prefill = rows[nxt.set_index].weight_lb
        else:
            prefill = next_cfg.default_weight_lb or 0.0
        phase.cursor = nxt
        self._prefill_weight(progress, prefill)
        progress.reps = 0

        rest = next_cfg.rest_seconds_override
        self.timer.reset(self.rest_seconds if rest is None else rest)
        self.timer.start()
        self.cue_armed = True
        self._announce("Rest started")
        return result

    def add_set_at_top(self) -> bool:
        """Insert a warm-up set above the current exercise's rows."""

        phase = self._input_phase()
        if phase is None:
            return False
        cfg = phase.current
        ex_id = cfg.exercise_id
        progress = phase.progress
        rows = self._rows_for(cfg)
        cfg.set_count += 1
        self.set_plans[ex_id] = [SetPlanRow(cfg.target_reps, 0.0), *rows]
        if progress.results.get(ex_id):
            progress.offsets[ex_id] = progress.offsets.get(ex_id, 0) + 1
        else:
            progress.offsets[ex_id] = 0
        phase.cursor = Cursor(phase.cursor.exercise_index, 0)
        progress.reps = 0
        progress.weight_lb = 0.0
        progress.weight_text = ""
        self._announce("Added a set at the top")
        return True

    def set_reps_input(self, raw) -> bool:
        phase = self._input_phase()
        if phase is None:
            return False
        value = _coerce_int(raw)
        phase.progress.reps = max(0, value) if value is not None else 0
        return True

    def set_weight_text(self, raw: str) -> bool:
        """Update the weight field and the current row's planned weight.

        The text is kept as typed.  Returns ``False`` when it is not a
        number, leaving the last accepted weight in place.
        """
        phase = self._input_phase()
        if phase is None:
            return False
        progress = phase.progress
        progress.weight_text = raw
        weight_lb = parse_weight_text(raw, self.unit)
        if weight_lb is None:
            return False
        progress.weight_lb = weight_lb
        rows = self._rows_for(phase.current)
        if phase.cursor.set_index < len(rows):
            rows[phase.cursor.set_index].weight_lb = weight_lb
        return True

    def edit_row_target(self, row: int, target_reps) -> bool:
        phase = self._input_phase()
        if phase is None:
            return False
        value = _coerce_int(target_reps)
        rows = self._rows_for(phase.current)
        if value is None or not 0 <= row < len(rows):
            return False
        rows[row].target_reps = value
        return True

    def edit_row_weight_text(self, row: int, raw: str) -> bool:
        phase = self._input_phase()
        if phase is None:
            return False
        rows = self._rows_for(phase.current)
        if not 0 <= row < len(rows):
            return False
        weight_lb = parse_weight_text(raw, self.unit)
        if weight_lb is None:
            return False
        rows[row].weight_lb = weight_lb
        return True

    def rows(self) -> list[RowView]:
        """Return the set table of the current exercise."""

        phase = self._input_phase()
        if phase is None:
            return []
        cfg = phase.current
        plan_rows = self._rows_for(cfg)
        done = phase.progress.results.get(cfg.exercise_id, [])
        offset = phase.progress.offsets.get(cfg.exercise_id, 0)
        views = []
        for i in range(cfg.set_count):
            done_idx = i - offset
            row = plan_rows[i] if i < len(plan_rows) else None
            views.append(
                RowView(
                    index=i,
                    target_reps=row.target_reps if row else cfg.target_reps,
                    weight_lb=row.weight_lb if row else (cfg.default_weight_lb or 0.0),
                    result=done[done_idx] if 0 <= done_idx < len(done) else None,
                    is_current=i == phase.cursor.set_index,
                )
            )
        return views

    def current_exercise(self) -> Exercise | None:
        phase = self._input_phase()
        if phase is None:
            return None
        ex_id = phase.current.exercise_id
        return find_exercise(self.app.exercises, ex_id) or Exercise(ex_id, ex_id)

    def set_label(self) -> str:
        """Return text such as ``"Squat — Set 2 of 3"``."""

        phase = self._input_phase()
        if phase is None:
            return ""
        name = exercise_name(self.app.exercises, phase.current.exercise_id)
        return f"{name} — Set {phase.cursor.set_index + 1} of {phase.current.set_count}"

    def _finish(self, phase: InputPhase) -> None:
        self._stop_rest()
        results = phase.progress.results
        session = WorkoutSession(
            id=self.new_id(),
            date=self.now(),
            rest_seconds=self.rest_seconds,
            unit_at_time=self.unit,
            exercises=tuple(
                SessionExercise(
                    exercise_id=cfg.exercise_id,
                    name=exercise_name(self.app.exercises, cfg.exercise_id),
                    sets=tuple(results.get(cfg.exercise_id, ())),
                )
                for cfg in phase.plan
            ),
        )
        self.app.add_session(session)
        self.phase = DonePhase(session)
        self._announce("Workout complete")

    def abandon_workout(self) -> bool:
        """Return to setup without storing anything.

        Logged sets are discarded; edited set targets are kept for the next
        attempt.
        """
        if self._input_phase() is None:
            return False
        self._stop_rest()
        self.phase = SetupPhase(self.draft)
        logging.info("Workout abandoned")
        return True

    def new_workout(self) -> bool:
        """Leave the summary and start setting up again.

        The exercise selection and its configuration are kept.
        """
        if not isinstance(self.phase, DonePhase):
            return False
        self.set_plans = {}
        self.phase = SetupPhase(self.draft)
        return True

    def close(self) -> None:
        """Cancel the countdown; call when the owning screen goes away."""

        self._stop_rest()
        self.timer.unbind(on_expire=self._on_rest_expired)
