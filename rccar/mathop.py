"""Small numeric helpers shared by the controllers."""


def constrain(value, minimum, maximum):
    """Clamp ``value`` into the closed range ``[minimum, maximum]``."""
    if value >= maximum:
        return maximum
    if value <= minimum:
        return minimum
    return value


def map_range(value, in_min, in_max, out_min, out_max):
    """Linearly re-map ``value`` from one range onto another.

    ``in_min`` maps to ``out_min`` and ``in_max`` to ``out_max``; values
    outside the input range are extrapolated, not clamped.
    """
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min