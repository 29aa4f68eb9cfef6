"""Tank-style drive of two motors from remote button events."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .motor import MotorDirection
from .pid import PID
from .ringbuffer import Differentiator
from .settings import CarSettings

logger = logging.getLogger(__name__)

VELOCITY_INTEGRATE_SAMPLES = 5
ACCELERATION_INTEGRATE_SAMPLES = 5
SPEED_REFERENCE = 10
RAMPUP_INITIAL = 0.6
RAMPUP_DELTA = 0.005


class TankDirection(Enum):
    NONE = 0
    COAST = 1
    BRAKE = 2
    FORWARD = 3
    BACKWARD = 4
    TURN_LEFT = 5
    TURN_RIGHT = 6


class ControlButton(Enum):
    """Remote buttons that steer the car."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    TOGGLE_CONTROL = "toggle_control"


class ButtonState(Enum):
    UP = 0
    DOWN = 1
    LONG = 2


@dataclass(frozen=True)
class ButtonEvent:
    """A button changing state; ``button`` may be any identifier."""

    button: Any = None
    new_state: ButtonState = ButtonState.UP


@dataclass
class MotorStat:
    counter: int = 0
    velocity: float = 0.0
    acceleration: float = 0.0
    duty_cycle: float = 0.0
    set_velocity: float = 0.0


@dataclass
class GroupStat:
    left_motor: MotorStat = field(default_factory=MotorStat)
    right_motor: MotorStat = field(default_factory=MotorStat)
    delta_distance: float = 0.0
    delta_velocity: float = 0.0


def is_motor_control_button(button):
    """Return whether ``button`` is one of the steering buttons."""
    return isinstance(button, ControlButton)


_SWAPPED = {
    ControlButton.UP: ControlButton.LEFT,
    ControlButton.DOWN: ControlButton.RIGHT,
    ControlButton.LEFT: ControlButton.DOWN,
    ControlButton.RIGHT: ControlButton.UP,
}


def translate_button(button, swap_axis):
    """Map ``button`` through the axis swap; non-steering buttons give ``None``."""
    if not is_motor_control_button(button):
        return None
    if not swap_axis:
        return button
    return _SWAPPED.get(button, button)


class LinearPreference:
    """Tracks held direction buttons, preferring linear over angular motion."""

    def __init__(self):
        self.linear_up = ButtonState.UP
        self.linear_down = ButtonState.UP
        self.angular_left = ButtonState.UP
        self.angular_right = ButtonState.UP

    def update(self, button, state):
        """Record ``state`` for ``button`` and return the button that wins.

        Opposite buttons on one axis cancel each other; ``None`` means no
        direction is held. Other buttons are returned unchanged.
        """
        if button is ControlButton.UP:
            self.linear_up, self.linear_down = state, ButtonState.UP
        elif button is ControlButton.DOWN:
            self.linear_down, self.linear_up = state, ButtonState.UP
        elif button is ControlButton.LEFT:
            self.angular_left, self.angular_right = state, ButtonState.UP
        elif button is ControlButton.RIGHT:
            self.angular_right, self.angular_left = state, ButtonState.UP
        else:
            return button

        if self.linear_up is ButtonState.DOWN:
            return ControlButton.UP
        if self.linear_down is ButtonState.DOWN:
            return ControlButton.DOWN
        if self.angular_left is ButtonState.DOWN:
            return ControlButton.LEFT
        if self.angular_right is ButtonState.DOWN:
            return ControlButton.RIGHT
        return None


_MOTOR_DIRECTIONS = {
    TankDirection.FORWARD: (MotorDirection.DEFAULT, MotorDirection.DEFAULT),
    TankDirection.BACKWARD: (MotorDirection.REVERSED, MotorDirection.REVERSED),
    TankDirection.TURN_LEFT: (MotorDirection.REVERSED, MotorDirection.DEFAULT),
    TankDirection.TURN_RIGHT: (MotorDirection.DEFAULT, MotorDirection.REVERSED),
}


class MotorController:
    """Drives a left and a right :class:`DcMotor` as a tank.

    ``write_enable`` receives the level of the motor driver enable pin.
    """

    def __init__(self, left, right, write_enable, settings=None):
        self.left = left
        self.right = right
        self.write_enable = write_enable
        self.settings = settings or CarSettings()

        self.left_velocity = Differentiator(VELOCITY_INTEGRATE_SAMPLES)
        self.right_velocity = Differentiator(VELOCITY_INTEGRATE_SAMPLES)
        self.left_acceleration = Differentiator(ACCELERATION_INTEGRATE_SAMPLES)
        self.right_acceleration = Differentiator(ACCELERATION_INTEGRATE_SAMPLES)

        self.left_pid = PID(0.01, 0.07, 0.14, 0.007, 0.3)
        self.right_pid = PID(0.01, 0.07, 0.13, 0.005, 0.3)
        self.left_pid.set_output_range(-100, 100)
        self.right_pid.set_output_range(-100, 100)
        self.distance_pid = PID(0.01, 0.02, 0.02, 0.0, 0.4)
        self.distance_pid.set_output_range(-10, 10)

        self.direction = TankDirection.NONE
        self.stat = GroupStat()
        self.rampup = 0.0
        self.swap_axis = False
        self.preference = LinearPreference()

    def set_enable(self):
        self.write_enable(1)

    def clear_enable(self):
        self.write_enable(0)

    def set_direction(self, direction):
        """Change direction and reset counters, PIDs and differentiators."""
        logger.info("direction set [%s ---> %s]", self.direction.name, direction.name)
        self.direction = direction
        for motor in (self.left, self.right):
            if motor.counter is not None:
                motor.clear_count()
        for pid in (self.left_pid, self.right_pid, self.distance_pid):
            pid.reset()
        for diff in (
            self.left_velocity,
            self.right_velocity,
            self.left_acceleration,
            self.right_acceleration,
        ):
            diff.clear()

    def update_feedback(self):
        """Read the pulse counters and derive velocity and acceleration."""
        for motor, stat, velocity, acceleration in (
            (self.left, self.stat.left_motor, self.left_velocity, self.left_acceleration),
            (self.right, self.stat.right_motor, self.right_velocity, self.right_acceleration),
        ):
            stat.counter = motor.get_count()
            stat.velocity = velocity.update(stat.counter)
            stat.acceleration = acceleration.update(stat.velocity)

    def update_pid(self):
        """Run the distance PID and both speed PIDs, then apply the ramp-up."""
        left, right = self.stat.left_motor, self.stat.right_motor
        self.stat.delta_distance = left.counter - right.counter
        self.stat.delta_velocity = self.distance_pid.update(0, self.stat.delta_distance)

        left.duty_cycle = self.left_pid.update(
            left.set_velocity, left.velocity - self.stat.delta_velocity
        )
        right.duty_cycle = self.right_pid.update(
            right.set_velocity, right.velocity + self.stat.delta_velocity
        )
        left.duty_cycle *= self.rampup
        right.duty_cycle *= self.rampup
        if self.rampup >= 1:
            self.rampup = 1
        else:
            self.rampup += RAMPUP_DELTA

    def read_buttons(self, event):
        """Turn a button event into a direction and target velocity."""
        if not is_motor_control_button(event.button):
            return

        button = translate_button(event.button, self.swap_axis)
        button = self.preference.update(button, event.new_state)

        if button is None:
            self.set_direction(TankDirection.BRAKE)
            self.set_velocity(0, 0)
            return

        if button is ControlButton.UP:
            self.set_direction(TankDirection.FORWARD)
            self.set_velocity(SPEED_REFERENCE, SPEED_REFERENCE)
        elif button is ControlButton.DOWN:
            self.set_direction(TankDirection.BACKWARD)
            self.set_velocity(SPEED_REFERENCE, SPEED_REFERENCE)
        elif button is ControlButton.LEFT:
            self.set_direction(TankDirection.TURN_LEFT)
            self.set_velocity(SPEED_REFERENCE // 2, SPEED_REFERENCE // 2)
        elif button is ControlButton.RIGHT:
            self.set_direction(TankDirection.TURN_RIGHT)
            self.set_velocity(SPEED_REFERENCE // 2, SPEED_REFERENCE // 2)
        elif button is ControlButton.TOGGLE_CONTROL:
            if event.new_state is ButtonState.LONG:
                self.swap_axis = not self.swap_axis
                logger.info(
                    "Motor axis control is %s.", "Swapped" if self.swap_axis else "Normal"
                )
        self.rampup = RAMPUP_INITIAL

    def set_velocity(self, left, right):
        self.stat.left_motor.set_velocity = left
        self.stat.right_motor.set_velocity = right

    def update_duty_cycle_openloop(self):
        """Set fixed duties from the settings for the current direction."""
        s = self.settings
        if self.direction in (TankDirection.FORWARD, TankDirection.BACKWARD):
            duties = (s.left_motor_power, s.right_motor_power)
        elif self.direction in (TankDirection.TURN_LEFT, TankDirection.TURN_RIGHT):
            duties = (s.left_motor_power_turning, s.right_motor_power_turning)
        else:
            duties = (0, 0)
        self.stat.left_motor.duty_cycle, self.stat.right_motor.duty_cycle = duties

    def update_motors(self):
        """Apply the current direction and duties to the motors."""
        directions = _MOTOR_DIRECTIONS.get(self.direction)
        if directions is None:
            for motor in (self.left, self.right):
                if self.settings.motor_brake_on_idle:
                    motor.brake()
                else:
                    motor.coast()
            return
        self.left.set_direction(directions[0])
        self.right.set_direction(directions[1])
        self.left.set_duty(self.stat.left_motor.duty_cycle)
        self.right.set_duty(self.stat.right_motor.duty_cycle)

    def closeloop(self, event):
        """One control step using speed feedback."""
        self.update_feedback()
        self.update_pid()
        self.read_buttons(event)
        self.update_motors()

    def openloop(self, event):
        """One control step with fixed duties."""
        self.update_duty_cycle_openloop()
        self.update_motors()
        self.read_buttons(event)

    def stop_all(self):
        self.left.brake()
        self.right.brake()

    def format_stat(self):
        """Return a one-line summary of the controller state."""
        left, right = self.stat.left_motor, self.stat.right_motor
        return (
            f"Lcnt:{left.counter:6d}, Rcnt:{right.counter:6d} | "
            f"Lspd:{left.velocity:6.3f}, Rspd:{right.velocity:6.3f} | "
            f"Lacc:{left.acceleration:6.3f}, Racc:{right.acceleration:6.3f} | "
            f"Lpwm:{left.duty_cycle:6.3f}, Rpwm:{right.duty_cycle:6.3f} | "
            f"Δd: {self.stat.delta_distance:6.3f} | "
            f"Δs: {self.stat.delta_velocity:6.3f}"
        )