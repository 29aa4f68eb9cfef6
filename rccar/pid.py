"""Discrete PID controller with integrator clamp and filtered derivative."""

from .mathop import constrain, map_range


class PID:
    """PID controller working on a normalised output in ``[-1, 1]``.

    The normalised output is mapped onto ``[out_min, out_max]`` when returned.
    """

    def __init__(self, dt, kp, ki, kd, ki_cap):
        self.set_timebase(dt)
        self.set_tuning(kp, ki, kd)
        self.set_integrator_cap(-ki_cap, ki_cap)
        self.set_output_range(-1, 1)
        self.reset()

    def reset(self):
        """Clear the internal state."""
        self.first_time = True
        self.output = 0.0
        self.integrator = 0.0
        self.differentiator = 0.0
        self.prev_error = 0.0
        self.prev_measurement = 0.0

    def set_timebase(self, dt):
        """Set the sample period; the derivative filter follows it."""
        self.dt = dt
        self.differentiator_tau = dt * 2

    def set_tuning(self, kp, ki, kd):
        self.kp = kp
        self.ki = ki
        self.kd = kd

    def set_output_range(self, out_min, out_max):
        self.out_min = out_min
        self.out_max = out_max

    def set_integrator_cap(self, imin, imax):
        self.integrator_min = imin
        self.integrator_max = imax

    def update(self, setpoint, measurement):
        """Advance the controller by one sample and return the output."""
        error = setpoint - measurement
        proportional = self.kp * error

        self.integrator += 0.5 * self.ki * self.dt * (error + self.prev_error)
        self.integrator = constrain(self.integrator, self.integrator_min, self.integrator_max)

        if not self.first_time:
            tau = self.differentiator_tau
            self.differentiator = -(
                2.0 * self.kd * (measurement - self.prev_measurement)
                + (2.0 * tau - self.dt) * self.differentiator
            ) / (2.0 * tau + self.dt)

        self.output = constrain(proportional + self.integrator + self.differentiator, -1, 1)

        self.prev_error = error
        self.prev_measurement = measurement
        self.first_time = False
        return map_range(self.output, -1, 1, self.out_min, self.out_max)