from __future__ import annotations

import logging
import math
import struct
import wave
from pathlib import Path

from kivy.core.audio import SoundLoader

from backend import data_dir

# Rest-finished beep: 880 Hz for 300 ms at 0.1 gain
CUE_FREQUENCY = 880
CUE_DURATION = 0.3
CUE_GAIN = 0.1
CUE_SAMPLE_RATE = 22050


def write_tone(
    path: Path,
    frequency: float = CUE_FREQUENCY,
    duration: float = CUE_DURATION,
    gain: float = CUE_GAIN,
    sample_rate: int = CUE_SAMPLE_RATE,
) -> Path:
    """Write a mono 16-bit sine tone to ``path``."""

    count = int(sample_rate * duration)
    amplitude = int(32767 * gain)
    frames = b"".join(
        struct.pack(
            "<h",
            int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate)),
        )
        for i in range(count)
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as fh:
        fh.setnchannels(1)
        fh.setsampwidth(2)
        fh.setframerate(sample_rate)
        fh.writeframes(frames)
    return path


class CuePlayer:
    """Play the audible cue when a rest period ends.

    The tone is synthesised on first use and loaded lazily through Kivy's
    :class:`~kivy.core.audio.SoundLoader`.  Playback is fire-and-forget:
    any failure is logged and swallowed.
    """

    def __init__(self, path: Path | None = None):
        self._path = Path(path) if path else data_dir() / "rest_done.wav"
        self._sound = None

    def _load(self):
        if self._sound is None:
            if not self._path.exists():
                write_tone(self._path)
            self._sound = SoundLoader.load(str(self._path))
        return self._sound

    def play_cue(self) -> None:
        try:
            snd = self._load()
            if snd:
                snd.stop()
                snd.play()
        except Exception:
            logging.debug("Cue playback failed", exc_info=True)
