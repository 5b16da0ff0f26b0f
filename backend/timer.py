"""One-second resolution countdown used for rest periods."""

from __future__ import annotations

from kivy.clock import Clock
from kivy.event import EventDispatcher
from kivy.properties import BooleanProperty, NumericProperty


def format_seconds(seconds: int) -> str:
    """Return ``seconds`` as ``MM:SS``."""

    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


class CountdownTimer(EventDispatcher):
    """Count ``seconds_left`` down to zero once per second.

    ``seconds_left`` and ``running`` are Kivy properties, so observers can
    ``bind`` to them.  ``on_expire`` is dispatched each time the countdown
    runs out.  Ticks are scheduled on ``clock`` which defaults to the global
    Kivy :data:`~kivy.clock.Clock`.
    """

    __events__ = ("on_expire",)

    seconds_left = NumericProperty(0)
    running = BooleanProperty(False)

    def __init__(self, clock=None, **kwargs):
        super().__init__(**kwargs)
        self._clock = clock if clock is not None else Clock
        self._event = None

    def start(self, seconds: int | None = None) -> None:
        """Begin ticking, optionally from ``seconds``.

        Does nothing while already running.
        """
        if self.running:
            return
        if seconds is not None:
            self.seconds_left = max(0, int(seconds))
        self.running = True
        self._event = self._clock.schedule_interval(self._tick, 1)

    def pause(self) -> None:
        self._cancel()
        self.running = False

    def reset(self, seconds: int) -> None:
        """Stop ticking and set the remaining time to ``seconds``."""
        self._cancel()
        self.seconds_left = max(0, int(seconds))
        self.running = False

    def _cancel(self) -> None:
        if self._event is not None:
            self._event.cancel()
            self._event = None

    def _tick(self, dt):
        if self.seconds_left <= 1:
            self._cancel()
            self.seconds_left = 0
            self.running = False
            self.dispatch("on_expire")
            return False
        self.seconds_left -= 1
        return True

    def on_expire(self):
        pass
