"""Power latch and the idle shutdown that releases it."""

import time

from .mathop import constrain
from .settings import (
    IDLE_SHUTDOWN_MAX_SECONDS,
    IDLE_SHUTDOWN_MIN_SECONDS,
    ONE_SECOND_IN_US,
)


def _monotonic_us():
    return time.monotonic_ns() // 1000


class PowerLatch:
    """Keeps the board powered while its wake pin is high.

    ``write_pin`` receives the pin level; the latch is engaged on creation.
    """

    def __init__(self, write_pin):
        self.write_pin = write_pin
        self.powered = False
        self.keep()

    def keep(self):
        self.write_pin(1)
        self.powered = True

    def kill(self):
        """Release the latch, which cuts the power."""
        self.write_pin(0)
        self.powered = False


class IdleShutdown:
    """Releases the latch once the remote has been away for too long.

    The delay is clamped to 10..100 seconds; ``clock`` returns microseconds.
    """

    def __init__(self, latch, idle_seconds=10, clock=None):
        self.latch = latch
        self.clock = clock or _monotonic_us
        seconds = constrain(idle_seconds, IDLE_SHUTDOWN_MIN_SECONDS, IDLE_SHUTDOWN_MAX_SECONDS)
        self.timeout_us = seconds * ONE_SECOND_IN_US
        self.last_seen_us = self.clock()

    def poll(self, connected):
        """Update with the connection state; return whether power is kept."""
        now = self.clock()
        if connected:
            self.last_seen_us = now
        if now - self.last_seen_us >= self.timeout_us:
            self.latch.kill()
            return False
        self.latch.keep()
        return True