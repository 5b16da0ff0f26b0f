from pathlib import Path
import os
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

# Kivy parses sys.argv on import and rejects pytest options
os.environ.setdefault("KIVY_NO_ARGS", "1")

from backend.storage import MemoryStore
from backend.timer import CountdownTimer
from backend.workout_session import WorkoutStateMachine
from core import AppState


class FakeEvent:
    def __init__(self, clock, callback, interval):
        self.clock = clock
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True
        if self in self.clock.events:
            self.clock.events.remove(self)


class FakeClock:
    """Stand-in for ``kivy.clock.Clock`` that only ticks when told to."""

    def __init__(self):
        self.events: list[FakeEvent] = []

    def schedule_interval(self, callback, interval):
        event = FakeEvent(self, callback, interval)
        self.events.append(event)
        return event

    def advance(self, seconds: int = 1) -> None:
        for _ in range(seconds):
            for event in list(self.events):
                if event.cancelled:
                    continue
                if event.callback(event.interval) is False:
                    event.cancel()


class RecordingCuePlayer:
    def __init__(self):
        self.played = 0

    def play_cue(self):
        self.played += 1


class StepClock:
    """Deterministic epoch-millisecond clock advancing on every call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.value = start
        self.step = step

    def __call__(self) -> int:
        self.value += self.step
        return self.value


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timer(fake_clock):
    return CountdownTimer(clock=fake_clock)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app_state(store):
    return AppState.from_store(store)


@pytest.fixture
def cue_player():
    return RecordingCuePlayer()


@pytest.fixture
def machine(app_state, timer, cue_player):
    ids = iter(f"session-{n}" for n in range(1, 1000))
    return WorkoutStateMachine(
        app_state,
        timer=timer,
        cue_player=cue_player,
        now=StepClock(),
        new_id=lambda: next(ids),
    )
