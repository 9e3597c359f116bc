"""Small numeric helpers shared by the solar and brightness models."""

import math


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation with ``t`` clamped to [0, 1]."""
    return start + (end - start) * clamp01(t)


def round_half_away(value: float) -> int:
    # Python's round() is banker's rounding; offsets need 7.5 -> 8, -7.5 -> -8
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def is_missing(value: float | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))
