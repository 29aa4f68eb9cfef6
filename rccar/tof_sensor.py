"""Ultrasonic time-of-flight ranging as a polled state machine."""

import time
from dataclasses import dataclass
from enum import Enum

TIMEOUT_US = 1000 * 1000
BAD_MEASUREMENT_US = 200
OUT_OF_RANGE_US = 40 * 1000
TRIGGER_HIGH_US = 10
_STEPS_PER_POLL = 10


def _monotonic_us():
    return time.monotonic_ns() // 1000


class TofState(Enum):
    INIT = 0
    TRIG_HIGH = 1
    TRIG_HOLD = 2
    TRIG_LOW = 3
    WAIT_HIGH = 4
    WAIT_LOW = 5
    COOLDOWN = 6
    DEVICE_TIMEOUT = 7
    OK = 8
    OUT_OF_RANGE = 9
    BAD_MEASUREMENT = 10
    ERROR = 11


@dataclass(frozen=True)
class TofEvent:
    """Outcome of one measurement: the echo length and how it was judged."""

    duration_us: int
    trig_pin: int
    echo_pin: int
    state: TofState


class TofSensor:
    """Triggers the sensor and times its echo.

    ``write_trigger`` sets the trigger pin level, ``on_echo_edge`` must be
    called on every echo pin change, and ``poll`` advances the machine.
    ``clock`` returns microseconds.
    """

    def __init__(self, trig_pin, echo_pin, write_trigger, clock=None):
        self.trig_pin = trig_pin
        self.echo_pin = echo_pin
        self.write_trigger = write_trigger
        self.clock = clock or _monotonic_us
        self.state = TofState.INIT
        self.trig_high_time = 0
        self.trig_low_time = 0
        self.echo_high_time = 0
        self.echo_low_time = 0
        self.duration = 0
        self.last_event = None

    def on_echo_edge(self, level):
        """Record an echo edge; a falling edge completes the duration."""
        if level:
            self.echo_high_time = self.clock()
        else:
            self.echo_low_time = self.clock()
            self.duration = self.echo_low_time - self.echo_high_time

    def _emit(self, state):
        self.last_event = TofEvent(self.duration, self.trig_pin, self.echo_pin, state)
        return self.last_event

    def _step(self):
        """Advance one state; return (event or None, keep_going)."""
        state = self.state
        if state is TofState.INIT:
            self.state = TofState.TRIG_HIGH
        elif state is TofState.TRIG_HIGH:
            self.write_trigger(1)
            self.state = TofState.TRIG_HOLD
            self.trig_high_time = self.clock()
        elif state is TofState.TRIG_HOLD:
            if self.clock() - self.trig_high_time > TRIGGER_HIGH_US:
                self.state = TofState.TRIG_LOW
            else:
                return None, False
        elif state is TofState.TRIG_LOW:
            self.write_trigger(0)
            self.state = TofState.WAIT_HIGH
            self.trig_low_time = self.clock()
        elif state is TofState.WAIT_HIGH:
            if self.echo_high_time >= self.trig_high_time:
                self.state = TofState.WAIT_LOW
            elif self.clock() - self.trig_high_time > TIMEOUT_US:
                self.state = TofState.DEVICE_TIMEOUT
            else:
                return None, False
        elif state is TofState.WAIT_LOW:
            if self.echo_low_time < self.echo_high_time:
                return None, False
            if self.duration < BAD_MEASUREMENT_US:
                self.state = TofState.BAD_MEASUREMENT
            elif self.duration > OUT_OF_RANGE_US:
                self.state = TofState.OUT_OF_RANGE
            else:
                event = self._emit(TofState.OK)
                self.state = TofState.COOLDOWN
                return event, True
        elif state is TofState.COOLDOWN:
            if self.echo_low_time + self.duration * 2 <= self.clock():
                self.state = TofState.TRIG_HIGH
            else:
                return None, False
        elif state in (
            TofState.OUT_OF_RANGE,
            TofState.DEVICE_TIMEOUT,
            TofState.BAD_MEASUREMENT,
        ):
            event = self._emit(state)
            self.state = TofState.INIT
            return event, True
        else:
            raise RuntimeError(
                f"sensor ({self.trig_pin}, {self.echo_pin}) in invalid state {state.name}"
            )
        return None, True

    def poll(self):
        """Run up to ten steps; return the newest event produced, if any."""
        newest = None
        for _ in range(_STEPS_PER_POLL):
            event, keep_going = self._step()
            if event is not None:
                newest = event
            if not keep_going:
                break
        return newest