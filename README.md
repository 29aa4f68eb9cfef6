# rccar

Control logic for a small remote-controlled car, written as plain Python with
no dependencies. The classes never touch hardware themselves. Each one takes
small callables that write a pin level, set a PWM duty, transmit LED pulse
symbols or read a clock in microseconds. It also takes simple objects such as
an H-bridge or a pulse counter. You can back these with real hardware, with a
simulator or with a test double.

## Installation

```
pip install .
```

To install for development and run the tests:

```
pip install .[test]
pytest
```

## Modules

- `rccar.mathop`
  - `constrain(value, minimum, maximum)` clamps a value into a range.
  - `map_range(value, in_min, in_max, out_min, out_max)` re-maps a value
    linearly from one range to another. It extrapolates and does not clamp.
- `rccar.pid`
  - `PID(dt, kp, ki, kd, ki_cap)` is a discrete PID controller.
  - It integrates with the trapezoidal rule, and the integrator is clamped to
    `±ki_cap`.
  - The derivative is taken on the measurement and filtered.
  - The normalised output is clamped to `[-1, 1]` and then mapped onto the
    range set by `set_output_range` (default `-1..1`).
  - Its other methods are `reset`, `set_timebase`, `set_tuning`,
    `set_integrator_cap` and `update(setpoint, measurement)`.
- `rccar.ringbuffer`
  - `RingBuffer(capacity)` is a fixed-capacity FIFO with `put`, `fill`, `peek`,
    `get`, `clear`, `is_full` and `len()`.
  - Writing to a full buffer raises `RingBufferFull`. Reading from an empty one
    raises `RingBufferEmpty`. Both are subclasses of `RingBufferError`.
  - `Differentiator(samples)` returns the difference between the newest sample
    and the oldest sample still in its window.
- `rccar.mem_probe`
  - `format_dump(data, base_address=0)` returns a hex and ASCII dump with
    16 bytes per line.
  - `print_mem(data, base_address=0, file=None)` writes that dump out.
- `rccar.settings`
  - `CarSettings` is a frozen dataclass. It holds the motor powers for driving
    and for turning, brake-or-coast when idle, the idle shutdown delay, the
    laser power and the paired laser and aiming servo calibration angles.
  - `calibration(n)` returns the pair for setting `n`, counted from 1.
  - `idle_shutdown_us()` returns the delay clamped to 10–100 s, in
    microseconds.
- `rccar.tone_player`
  - `Tone(frequency, duration_us)` is one note. `Tone.rest(...)` is a rest.
  - `note_lengths(bpm, break_us=1000)` returns a `NoteLengths` of note
    durations for a tempo.
  - `TonePlayer(tones, clock=None)` advances through the tones as the clock
    moves and loops back at the end.
  - For a rest, `update()` returns the idle tone instead. Its frequency is
    20000 Hz by default and is changed with `set_idle_frequency`.
  - `update()` raises `ValueError` if no tones were given.
- `rccar.led_strip_encoder`
  - `LedStripEncoder(resolution_hz)` turns bytes into WS2812 timing `Symbol`s,
    most significant bit first, and ends with a 50 µs reset symbol.
- `rccar.ws2812`
  - `Rgb` has a `pixels()` method that returns the bytes in G, R, B order.
  - `Hsv` holds hue in degrees, saturation and value in percent.
    `hsv_to_rgb(hsv)` converts it to `Rgb`.
  - `Ws2812(transmit, pin=48, resolution_hz=10_000_000)` keeps a colour, set
    with `set_rgb` or `set_hsv`. `update()` hands the encoded symbols to
    `transmit`.
- `rccar.servo`
  - `Servo(set_duty, pin=0, duty_resolution=14, freq_hz=50, angle_offset=0.0)`
    converts angles to PWM duty values with `angle_to_duty`.
  - `set_angle` passes the duty to `set_duty`. The 1 ms bias duty is applied
    when the servo is created.
- `rccar.motor`
  - `HBridge` holds the duty of channels A and B and the PWM frequency.
    Subclass it to drive real outputs.
  - `PulseCounter` counts encoder edges.
  - `DcMotor(bridge, counter=None, frequency=20000.0)` has a direction setting
    (`MotorDirection`), `set_duty` (0 coasts), `forward`, `backward`, `brake`,
    `coast`, `set_frequency`, `get_count` and `clear_count`.
  - The counter methods raise `RuntimeError` when the motor has no counter.
- `rccar.power`
  - `PowerLatch(write_pin)` holds the wake pin high (`keep`) or releases it
    (`kill`).
  - `IdleShutdown(latch, idle_seconds=10, clock=None)` releases the latch once
    `poll(connected)` has seen no connection for the delay. The delay is
    clamped to 10–100 s. `poll` returns whether power is kept.
- `rccar.tof_sensor`
  - `TofSensor(trig_pin, echo_pin, write_trigger, clock=None)` is the trigger
    and echo state machine for an ultrasonic range sensor.
  - Call `on_echo_edge(level)` on every echo change and `poll()` regularly.
    `poll()` returns the newest `TofEvent` it produced, if any.
  - An event's `TofState` is `OK`, `OUT_OF_RANGE`, `BAD_MEASUREMENT` or
    `DEVICE_TIMEOUT`.
- `rccar.motor_controller`
  - `MotorController(left, right, write_enable, settings=None)` drives two
    `DcMotor`s as a tank from `ButtonEvent`s, which carry a `ControlButton`
    and a `ButtonState`.
  - `openloop(event)` uses the fixed powers from `CarSettings`.
  - `closeloop(event)` uses speed feedback through PID loops and needs both
    motors to have pulse counters.
  - A long press of `TOGGLE_CONTROL` swaps the axes of the direction buttons.
  - `format_stat()` returns a one-line status summary.

## Examples

```python
from rccar.pid import PID

pid = PID(dt=0.01, kp=0.07, ki=0.14, kd=0.007, ki_cap=0.3)
pid.set_output_range(-100, 100)
duty = pid.update(setpoint=10, measurement=7.5)
```

```python
from rccar.ringbuffer import Differentiator

velocity = Differentiator(samples=5)
for count in (0, 3, 7, 12, 18, 25):
    speed = velocity.update(count)
```

```python
from rccar.ws2812 import Hsv, hsv_to_rgb

rgb = hsv_to_rgb(Hsv(h=120, s=100, v=50))
print(rgb.pixels())   # bytes in G, R, B order
```

```python
from rccar.tone_player import Tone, TonePlayer, note_lengths

now = [0]
lengths = note_lengths(bpm=120, break_us=1000)
tune = [Tone(440.0, lengths.quarter), Tone.rest(lengths.pause), Tone(494.0, lengths.quarter)]
player = TonePlayer(tune, clock=lambda: now[0])
print(player.update().frequency)   # 440.0
```

```python
from rccar.motor import DcMotor, HBridge, PulseCounter
from rccar.motor_controller import ButtonEvent, ButtonState, ControlButton, MotorController

left = DcMotor(HBridge(), PulseCounter())
right = DcMotor(HBridge(), PulseCounter())
controller = MotorController(left, right, write_enable=lambda level: None)
controller.set_enable()
controller.openloop(ButtonEvent(ControlButton.UP, ButtonState.DOWN))
```

```python
from rccar.mem_probe import print_mem

print_mem(b"hello, world", base_address=0x3FC80000)
```

## What this package does not do

It has no command and no main loop, so nothing here runs a car by itself. It
has no wireless link to a remote controller, no signal-strength tracking, no
stored device settings, no built-in tunes, and no catapult or goalkeeper
controllers. It also does no GPIO, PWM or pulse transmission of its own. Your
application has to wire the classes to these.