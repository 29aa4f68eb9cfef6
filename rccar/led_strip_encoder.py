"""Encoding of LED strip pixel bytes into WS2812 pulse symbols."""

from dataclasses import dataclass

_US_PER_SECOND = 1_000_000
_RESET_US = 50


@dataclass(frozen=True)
class Symbol:
    """One pulse pair: ``level0`` for ``duration0`` ticks, then ``level1``."""

    level0: int
    duration0: int
    level1: int
    duration1: int


class LedStripEncoder:
    """Turns pixel bytes into pulse symbols, most significant bit first.

    Each byte becomes eight bit symbols; a low reset symbol of 50 us in
    total ends the frame. Durations are in ticks of ``resolution_hz``.
    """

    def __init__(self, resolution_hz):
        if resolution_hz <= 0:
            raise ValueError(f"resolution must be positive, got {resolution_hz}")
        self.resolution_hz = resolution_hz
        short = int(0.3 * resolution_hz / _US_PER_SECOND)
        long = int(0.9 * resolution_hz / _US_PER_SECOND)
        self.bit0 = Symbol(1, short, 0, long)
        self.bit1 = Symbol(1, long, 0, short)
        reset_ticks = resolution_hz // _US_PER_SECOND * _RESET_US // 2
        self.reset_code = Symbol(0, reset_ticks, 0, reset_ticks)

    def _bits(self, data):
        for byte in bytes(data):
            for shift in range(7, -1, -1):
                yield self.bit1 if (byte >> shift) & 1 else self.bit0

    def encode(self, data):
        """Return the symbols for ``data`` followed by the reset code."""
        symbols = list(self._bits(data))
        symbols.append(self.reset_code)
        return symbols