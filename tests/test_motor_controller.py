import pytest

from rccar.motor import DcMotor, HBridge, PulseCounter
from rccar.motor_controller import (
    ButtonEvent,
    ButtonState,
    ControlButton,
    LinearPreference,
    MotorController,
    TankDirection,
    is_motor_control_button,
    translate_button,
)
from rccar.settings import CarSettings


def make_controller(settings=None, counters=True):
    levels = []
    left = DcMotor(HBridge(), PulseCounter() if counters else None)
    right = DcMotor(HBridge(), PulseCounter() if counters else None)
    ctrl = MotorController(left, right, levels.append, settings)
    return ctrl, levels


def press(button):
    return ButtonEvent(button, ButtonState.DOWN)


def release(button):
    return ButtonEvent(button, ButtonState.UP)


@pytest.mark.parametrize("button", list(ControlButton))
def test_control_buttons_recognised(button):
    assert is_motor_control_button(button) is True


@pytest.mark.parametrize("button", [None, 7, "up"])
def test_other_buttons_not_control(button):
    assert is_motor_control_button(button) is False
    assert translate_button(button, False) is None


@pytest.mark.parametrize("button", list(ControlButton))
def test_translate_without_swap_is_identity(button):
    assert translate_button(button, False) is button


@pytest.mark.parametrize(
    "button,expected",
    [
        (ControlButton.UP, ControlButton.LEFT),
        (ControlButton.DOWN, ControlButton.RIGHT),
        (ControlButton.LEFT, ControlButton.DOWN),
        (ControlButton.RIGHT, ControlButton.UP),
        (ControlButton.TOGGLE_CONTROL, ControlButton.TOGGLE_CONTROL),
    ],
)
def test_translate_with_swap(button, expected):
    assert translate_button(button, True) is expected


def test_linear_preference_prefers_linear():
    pref = LinearPreference()
    assert pref.update(ControlButton.UP, ButtonState.DOWN) is ControlButton.UP
    assert pref.update(ControlButton.LEFT, ButtonState.DOWN) is ControlButton.UP
    assert pref.update(ControlButton.UP, ButtonState.UP) is ControlButton.LEFT
    assert pref.update(ControlButton.LEFT, ButtonState.UP) is None


def test_linear_preference_opposites_cancel():
    pref = LinearPreference()
    pref.update(ControlButton.UP, ButtonState.DOWN)
    assert pref.update(ControlButton.DOWN, ButtonState.DOWN) is ControlButton.DOWN
    assert pref.update(ControlButton.DOWN, ButtonState.UP) is None


def test_linear_preference_passes_other_buttons():
    pref = LinearPreference()
    assert pref.update(ControlButton.TOGGLE_CONTROL, ButtonState.LONG) is ControlButton.TOGGLE_CONTROL
    assert pref.update(None, ButtonState.DOWN) is None


def test_read_buttons_forward():
    ctrl, _ = make_controller()
    ctrl.read_buttons(press(ControlButton.UP))
    assert ctrl.direction is TankDirection.FORWARD
    assert ctrl.stat.left_motor.set_velocity == 10
    assert ctrl.stat.right_motor.set_velocity == 10
    assert ctrl.rampup == pytest.approx(0.6)


def test_read_buttons_turn_halves_speed():
    ctrl, _ = make_controller()
    ctrl.read_buttons(press(ControlButton.RIGHT))
    assert ctrl.direction is TankDirection.TURN_RIGHT
    assert ctrl.stat.left_motor.set_velocity == 5
    assert ctrl.stat.right_motor.set_velocity == 5


def test_release_brakes():
    ctrl, _ = make_controller()
    ctrl.read_buttons(press(ControlButton.DOWN))
    assert ctrl.direction is TankDirection.BACKWARD
    ctrl.read_buttons(release(ControlButton.DOWN))
    assert ctrl.direction is TankDirection.BRAKE
    assert ctrl.stat.left_motor.set_velocity == 0
    assert ctrl.stat.right_motor.set_velocity == 0


def test_non_control_event_ignored():
    ctrl, _ = make_controller()
    ctrl.read_buttons(ButtonEvent(None, ButtonState.DOWN))
    assert ctrl.direction is TankDirection.NONE
    assert ctrl.rampup == 0.0


def test_long_toggle_swaps_axis():
    ctrl, _ = make_controller()
    ctrl.read_buttons(ButtonEvent(ControlButton.TOGGLE_CONTROL, ButtonState.DOWN))
    assert ctrl.swap_axis is False
    ctrl.read_buttons(ButtonEvent(ControlButton.TOGGLE_CONTROL, ButtonState.LONG))
    assert ctrl.swap_axis is True
    ctrl.read_buttons(press(ControlButton.UP))
    assert ctrl.direction is TankDirection.TURN_LEFT


def test_set_direction_clears_counts():
    ctrl, _ = make_controller()
    ctrl.left.counter.pulse(5)
    ctrl.right.counter.pulse(3)
    ctrl.set_direction(TankDirection.FORWARD)
    assert ctrl.left.get_count() == 0
    assert ctrl.right.get_count() == 0


def test_set_direction_without_counters():
    ctrl, _ = make_controller(counters=False)
    ctrl.set_direction(TankDirection.BACKWARD)
    assert ctrl.direction is TankDirection.BACKWARD
    with pytest.raises(RuntimeError):
        ctrl.update_feedback()


def test_enable_pin_levels():
    ctrl, levels = make_controller()
    ctrl.set_enable()
    ctrl.clear_enable()
    assert levels == [1, 0]


def test_openloop_forward_applies_power():
    ctrl, _ = make_controller()
    ctrl.openloop(press(ControlButton.UP))
    ctrl.openloop(ButtonEvent())
    for motor in (ctrl.left, ctrl.right):
        assert motor.bridge.duty_a == 0
        assert motor.bridge.duty_b == 35


def test_openloop_turn_left():
    ctrl, _ = make_controller()
    ctrl.openloop(press(ControlButton.LEFT))
    ctrl.openloop(ButtonEvent())
    assert ctrl.left.bridge.duty_a == 30
    assert ctrl.left.bridge.duty_b == 0
    assert ctrl.right.bridge.duty_a == 0
    assert ctrl.right.bridge.duty_b == 30


def test_idle_coasts_by_default():
    ctrl, _ = make_controller()
    ctrl.stop_all()
    ctrl.update_duty_cycle_openloop()
    ctrl.update_motors()
    assert (ctrl.left.bridge.duty_a, ctrl.left.bridge.duty_b) == (0, 0)
    assert (ctrl.right.bridge.duty_a, ctrl.right.bridge.duty_b) == (0, 0)


def test_idle_brakes_when_configured():
    ctrl, _ = make_controller(CarSettings(motor_brake_on_idle=True))
    ctrl.update_motors()
    assert (ctrl.left.bridge.duty_a, ctrl.left.bridge.duty_b) == (100, 100)
    assert (ctrl.right.bridge.duty_a, ctrl.right.bridge.duty_b) == (100, 100)


def test_stop_all_brakes():
    ctrl, _ = make_controller()
    ctrl.stop_all()
    assert ctrl.left.bridge.duty_a == ctrl.left.bridge.duty_b == 100
    assert ctrl.right.bridge.duty_a == ctrl.right.bridge.duty_b == 100


def test_update_feedback_derives_velocity_and_acceleration():
    ctrl, _ = make_controller()
    ctrl.left.counter.pulse(3)
    ctrl.update_feedback()
    assert ctrl.stat.left_motor.counter == 3
    assert ctrl.stat.left_motor.velocity == 0
    ctrl.left.counter.pulse(2)
    ctrl.update_feedback()
    assert ctrl.stat.left_motor.counter == 5
    assert ctrl.stat.left_motor.velocity == 2
    assert ctrl.stat.left_motor.acceleration == 2
    assert ctrl.stat.right_motor.counter == 0


def test_update_pid_ramps_up_and_drives_toward_setpoint():
    ctrl, _ = make_controller()
    ctrl.read_buttons(press(ControlButton.UP))
    ctrl.update_feedback()
    ctrl.update_pid()
    assert ctrl.stat.left_motor.duty_cycle > 0
    assert ctrl.stat.right_motor.duty_cycle > 0
    assert ctrl.rampup == pytest.approx(0.605)


def test_update_pid_delta_distance():
    ctrl, _ = make_controller()
    ctrl.left.counter.pulse(4)
    ctrl.right.counter.pulse(1)
    ctrl.update_feedback()
    ctrl.update_pid()
    assert ctrl.stat.delta_distance == 3
    assert ctrl.stat.delta_velocity < 0


def test_rampup_caps_at_one():
    ctrl, _ = make_controller()
    ctrl.rampup = 1.2
    ctrl.update_feedback()
    ctrl.update_pid()
    assert ctrl.rampup == 1


def test_closeloop_zero_setpoint_keeps_motors_idle():
    ctrl, _ = make_controller()
    ctrl.closeloop(ButtonEvent())
    assert ctrl.stat.left_motor.duty_cycle == 0
    assert (ctrl.left.bridge.duty_a, ctrl.left.bridge.duty_b) == (0, 0)


def test_format_stat_contains_counts():
    ctrl, _ = make_controller()
    ctrl.left.counter.pulse(12)
    ctrl.update_feedback()
    text = ctrl.format_stat()
    assert text.startswith("Lcnt:    12, Rcnt:     0 |")
    assert "Lpwm: 0.000" in text