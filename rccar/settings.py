"""User-tunable settings of the car and its catapult."""

from dataclasses import dataclass

from .mathop import constrain

ONE_SECOND_IN_US = 1_000_000

# Idle shutdown delay is clamped into this range, in seconds.
IDLE_SHUTDOWN_MIN_SECONDS = 10
IDLE_SHUTDOWN_MAX_SECONDS = 100


@dataclass(frozen=True)
class CarSettings:
    """Motor powers (percent), idle shutdown delay and servo calibration."""

    idle_shutdown_seconds: int = 10
    left_motor_power: float = 35
    right_motor_power: float = 35
    left_motor_power_turning: float = 30
    right_motor_power_turning: float = 30
    motor_brake_on_idle: bool = False
    laser_power: float = 10
    laser_servo_angles: tuple = (110, 108, 106.5, 105.5, 104, 102.5, 102, 102)
    aiming_servo_angles: tuple = (145, 125, 105, 85, 65, 45, 25, 5)

    def __post_init__(self):
        if len(self.laser_servo_angles) != len(self.aiming_servo_angles):
            raise ValueError("laser and aiming servo angles must pair up")

    def calibration(self, setting):
        """Return ``(laser_angle, aiming_angle)`` for a setting numbered from 1."""
        if not 1 <= setting <= len(self.laser_servo_angles):
            raise IndexError(f"no calibration setting {setting}")
        return self.laser_servo_angles[setting - 1], self.aiming_servo_angles[setting - 1]

    def idle_shutdown_us(self):
        """Idle shutdown delay in microseconds, clamped to 10..100 seconds."""
        seconds = constrain(
            self.idle_shutdown_seconds, IDLE_SHUTDOWN_MIN_SECONDS, IDLE_SHUTDOWN_MAX_SECONDS
        )
        return seconds * ONE_SECOND_IN_US