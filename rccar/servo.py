"""Hobby servo positioned by a 50 Hz PWM duty value."""

DEFAULT_DUTY_RESOLUTION = 14
DEFAULT_FREQ_HZ = 50


class Servo:
    """Maps angles to PWM duty values and hands them to ``set_duty``.

    At 50 Hz the bias is a 1 ms pulse, and every 90 degrees add about 1 ms.
    The bias duty is applied when the servo is created.
    """

    def __init__(
        self,
        set_duty,
        pin=0,
        duty_resolution=DEFAULT_DUTY_RESOLUTION,
        freq_hz=DEFAULT_FREQ_HZ,
        angle_offset=0.0,
    ):
        if duty_resolution <= 0:
            raise ValueError(f"duty resolution must be positive, got {duty_resolution}")
        self.set_duty = set_duty
        self.pin = pin
        self.duty_resolution = duty_resolution
        self.freq_hz = freq_hz
        self.angle_offset = angle_offset
        self.angle_to_duty_bias = ((1 << duty_resolution) - 1) // 20
        self.angle_to_duty_weight = float(self.angle_to_duty_bias // 90)
        self.set_duty(self.angle_to_duty_bias)

    def angle_to_duty(self, angle):
        """Return the duty value for ``angle`` degrees."""
        duty = int(
            self.angle_to_duty_weight * (angle + self.angle_offset) + self.angle_to_duty_bias
        )
        if duty < 0:
            raise ValueError(f"angle {angle} gives a negative duty")
        return duty

    def set_angle(self, angle):
        self.set_duty(self.angle_to_duty(angle))