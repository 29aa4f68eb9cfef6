"""Control logic for a small remote-controlled car: PID, ring buffers, motors, LED, servo, tone player, power latch and ranging sensor."""

__version__ = "0.1.0"

__all__ = [
    "led_strip_encoder",
    "mathop",
    "mem_probe",
    "motor",
    "motor_controller",
    "pid",
    "power",
    "ringbuffer",
    "servo",
    "settings",
    "tof_sensor",
    "tone_player",
    "ws2812",
]