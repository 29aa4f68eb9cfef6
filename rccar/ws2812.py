"""Single WS2812 RGB LED driven through a pulse transmitter."""

import struct
from dataclasses import dataclass

from .led_strip_encoder import LedStripEncoder

DEFAULT_PIN = 48
DEFAULT_RESOLUTION_HZ = 10_000_000


def _f32(value):
    return struct.unpack("f", struct.pack("f", value))[0]


_SCALE = _f32(2.55)


@dataclass(frozen=True)
class Rgb:
    r: int = 0
    g: int = 0
    b: int = 0

    def pixels(self):
        """Return the wire bytes in green, red, blue order."""
        return bytes((self.g, self.r, self.b))


@dataclass(frozen=True)
class Hsv:
    """Hue in degrees, saturation and value in percent."""

    h: int = 0
    s: int = 0
    v: int = 0


def hsv_to_rgb(hsv):
    """Convert ``hsv`` to an 8-bit :class:`Rgb`.

    A hue of 360 or more is reduced by 360 once; saturation and value are
    capped at 100.
    """
    h = hsv.h - 360 if hsv.h >= 360 else hsv.h
    s = min(hsv.s, 100)
    v = min(hsv.v, 100)

    rgb_max = int(_f32(v * _SCALE))
    rgb_min = int(_f32(rgb_max * (100 - s) / 100.0))
    sector = h // 60
    diff = h % 60
    adj = (rgb_max - rgb_min) * diff // 60

    if sector == 0:
        r, g, b = rgb_max, rgb_min + adj, rgb_min
    elif sector == 1:
        r, g, b = rgb_max - adj, rgb_max, rgb_min
    elif sector == 2:
        r, g, b = rgb_min, rgb_max, rgb_min + adj
    elif sector == 3:
        r, g, b = rgb_min, rgb_max - adj, rgb_max
    elif sector == 4:
        r, g, b = rgb_min + adj, rgb_min, rgb_max
    else:
        r, g, b = rgb_max, rgb_min, rgb_max - adj
    return Rgb(r & 0xFF, g & 0xFF, b & 0xFF)


class Ws2812:
    """One LED; ``transmit`` receives the encoded symbols of each update."""

    def __init__(self, transmit, pin=DEFAULT_PIN, resolution_hz=DEFAULT_RESOLUTION_HZ):
        self.transmit = transmit
        self.pin = pin
        self.resolution_hz = resolution_hz
        self.encoder = LedStripEncoder(resolution_hz)
        self.color = Rgb()

    def set_rgb(self, rgb):
        self.color = rgb

    def set_hsv(self, hsv):
        self.color = hsv_to_rgb(hsv)

    def update(self):
        """Send the current colour to the LED."""
        self.transmit(self.encoder.encode(self.color.pixels()))