"""Brushed DC motor driven through an H-bridge, with an optional pulse counter."""

from enum import Enum

from .mathop import constrain

DEFAULT_PWM_FREQUENCY = 20000.0
_FULL_DUTY = 100.0
_NO_DUTY = 0.0


class MotorDirection(Enum):
    """Whether the motor's idea of "forward" is reversed."""

    DEFAULT = 0
    REVERSED = 1


class HBridge:
    """The two PWM channels, A and B, that feed a motor driver.

    Duties are in percent; a channel held low reads 0 and one held high
    reads 100. A hardware driver subclasses this and applies each change.
    """

    def __init__(self):
        self.duty_a = _NO_DUTY
        self.duty_b = _NO_DUTY
        self.frequency = DEFAULT_PWM_FREQUENCY

    def _set(self, channel, duty):
        if channel == "A":
            self.duty_a = duty
        elif channel == "B":
            self.duty_b = duty
        else:
            raise ValueError(f"unknown channel {channel!r}")

    def set_low(self, channel):
        self._set(channel, _NO_DUTY)

    def set_high(self, channel):
        self._set(channel, _FULL_DUTY)

    def set_duty(self, channel, duty):
        self._set(channel, duty)

    def set_frequency(self, frequency):
        self.frequency = frequency


class PulseCounter:
    """Counts encoder edges; both rising and falling edges add one."""

    def __init__(self):
        self._count = 0

    @property
    def count(self):
        return self._count

    def pulse(self, edges=1):
        """Record ``edges`` encoder edges."""
        self._count += edges

    def clear(self):
        self._count = 0


class DcMotor:
    """One motor: direction-aware duty control, braking and coasting."""

    def __init__(self, bridge, counter=None, frequency=DEFAULT_PWM_FREQUENCY):
        self.bridge = bridge
        self.counter = counter
        self.direction = MotorDirection.DEFAULT
        self.frequency = frequency
        self.bridge.set_frequency(frequency)

    def set_direction(self, direction):
        self.direction = MotorDirection(direction)

    def set_duty(self, duty_cycle):
        """Drive at ``duty_cycle`` percent in the configured direction; 0 coasts."""
        duty_cycle = constrain(duty_cycle, 0, 100)
        if duty_cycle == 0:
            self.coast()
        elif self.direction is MotorDirection.DEFAULT:
            self.forward(duty_cycle)
        else:
            self.backward(duty_cycle)

    def set_frequency(self, frequency):
        """Set the PWM frequency in Hz, truncated to a whole number."""
        self.frequency = int(frequency)
        self.bridge.set_frequency(self.frequency)

    def forward(self, duty_cycle):
        """Drive forward whatever the direction setting."""
        self.bridge.set_low("A")
        self.bridge.set_duty("B", constrain(duty_cycle, 0, 100))

    def backward(self, duty_cycle):
        """Drive backward whatever the direction setting."""
        self.bridge.set_low("B")
        self.bridge.set_duty("A", constrain(duty_cycle, 0, 100))

    def brake(self):
        self.bridge.set_high("A")
        self.bridge.set_high("B")

    def coast(self):
        self.bridge.set_low("A")
        self.bridge.set_low("B")

    def _require_counter(self):
        if self.counter is None:
            raise RuntimeError("motor has no pulse counter")
        return self.counter

    def get_count(self):
        return self._require_counter().count

    def clear_count(self):
        self._require_counter().clear()