"""Time-driven playback of a sequence of tones."""

import time
from dataclasses import dataclass
from typing import Optional

DEFAULT_IDLE_FREQUENCY = 20000
DEFAULT_BREAK_US = 1000
_US_PER_MINUTE = 60_000_000


@dataclass(frozen=True)
class Tone:
    """A note of ``frequency`` Hz held for ``duration_us`` microseconds.

    A frequency of ``None`` marks a rest, during which the player's idle
    tone is produced instead.
    """

    frequency: Optional[float]
    duration_us: float

    @classmethod
    def rest(cls, duration_us):
        return cls(None, duration_us)

    @property
    def is_rest(self):
        return self.frequency is None


@dataclass(frozen=True)
class NoteLengths:
    """Note durations in microseconds for one tempo."""

    whole: int
    half: int
    quarter: int
    eighth: int
    sixteenth: int
    thirty_second: int
    pause: float


def note_lengths(bpm, break_us=DEFAULT_BREAK_US):
    """Return the note durations for a tempo of ``bpm`` beats per minute.

    ``pause`` is the short gap used to separate repeated notes.
    """
    if bpm <= 0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    quarter = _US_PER_MINUTE // bpm
    return NoteLengths(
        whole=quarter * 4,
        half=quarter * 2,
        quarter=quarter,
        eighth=quarter // 2,
        sixteenth=quarter // 4,
        thirty_second=quarter // 8,
        pause=break_us,
    )


def _monotonic_us():
    return time.monotonic_ns() // 1000


class TonePlayer:
    """Steps through ``tones`` as time passes and loops at the end.

    ``clock`` returns the current time in microseconds.
    """

    def __init__(self, tones, clock=None):
        self.tones = tuple(tones)
        self.clock = clock or _monotonic_us
        self.index = 0
        self.start_time_us = None
        self.idle = Tone(DEFAULT_IDLE_FREQUENCY, 0)

    def __len__(self):
        return len(self.tones)

    def set_idle_frequency(self, frequency):
        """Set the frequency produced during rests."""
        self.idle = Tone(frequency, self.idle.duration_us)

    def update(self):
        """Return the tone to produce now; rests yield the idle tone.

        At most one tone is advanced per call.
        """
        if not self.tones:
            raise ValueError("no tones loaded")

        now = self.clock()
        if self.start_time_us is None:
            self.index = 0
            self.start_time_us = now

        elapsed = now - self.start_time_us
        if elapsed > self.tones[self.index].duration_us:
            self.start_time_us += elapsed
            self.index += 1

        if self.index >= len(self.tones):
            self.index = 0
            self.start_time_us = now

        tone = self.tones[self.index]
        return self.idle if tone.is_rest else tone