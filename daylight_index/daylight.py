"""Solar altitude to base brightness.

Models astronomical, nautical and civil twilight as linear ramps and
daytime as a sine ease towards full brightness at high sun.
"""

import math
from dataclasses import dataclass
from enum import Enum

from .mathutils import clamp01, lerp


class TwilightBand(str, Enum):
    NIGHT = "night"
    ASTRONOMICAL = "astronomical_twilight"
    NAUTICAL = "nautical_twilight"
    CIVIL = "civil_twilight"
    DAY = "day"


@dataclass(frozen=True)
class DaylightCurve:
    """Piecewise altitude → brightness calibration.

    The three twilight bands span ``breakpoints_deg`` (night edge, nautical
    edge, civil edge, horizon). ``levels`` gives the brightness at the
    start of each band and at the horizon. Above the horizon the curve is
    ``horizon_level + (1 - horizon_level) * sin(π/2 * alt/full_sun_deg)^exponent``.

    Raises:
        ValueError: If the calibration would be non-monotonic or leave [0, 1].
    """

    breakpoints_deg: tuple[float, float, float, float] = (-18.0, -12.0, -6.0, 0.0)
    levels: tuple[float, float, float, float] = (0.01, 0.06, 0.20, 0.55)
    full_sun_deg: float = 60.0
    exponent: float = 0.9

    def __post_init__(self) -> None:
        if len(self.breakpoints_deg) != 4 or len(self.levels) != 4:
            raise ValueError("breakpoints_deg and levels need exactly four entries")
        if list(self.breakpoints_deg) != sorted(set(self.breakpoints_deg)):
            raise ValueError(f"breakpoints must be strictly increasing: {self.breakpoints_deg}")
        if self.breakpoints_deg[-1] != 0.0:
            raise ValueError("the last breakpoint must be the horizon (0°)")
        if list(self.levels) != sorted(self.levels):
            raise ValueError(f"levels must be non-decreasing: {self.levels}")
        if not (0.0 <= self.levels[0] and self.levels[-1] <= 1.0):
            raise ValueError(f"levels must lie within [0, 1]: {self.levels}")
        if self.full_sun_deg <= 0 or self.exponent <= 0:
            raise ValueError("full_sun_deg and exponent must be positive")

    def __call__(self, altitude_deg: float) -> float:
        night, nautical, civil, horizon = self.breakpoints_deg
        if altitude_deg <= night:
            return 0.0
        if altitude_deg <= nautical:
            return lerp(self.levels[0], self.levels[1], (altitude_deg - night) / (nautical - night))
        if altitude_deg <= civil:
            return lerp(self.levels[1], self.levels[2], (altitude_deg - nautical) / (civil - nautical))
        if altitude_deg <= horizon:
            return lerp(self.levels[2], self.levels[3], (altitude_deg - civil) / (horizon - civil))

        x = clamp01(altitude_deg / self.full_sun_deg)
        ease = math.sin(math.pi / 2 * x) ** self.exponent
        return clamp01(self.levels[3] + (1.0 - self.levels[3]) * ease)

    def band(self, altitude_deg: float) -> TwilightBand:
        night, nautical, civil, horizon = self.breakpoints_deg
        if altitude_deg <= night:
            return TwilightBand.NIGHT
        if altitude_deg <= nautical:
            return TwilightBand.ASTRONOMICAL
        if altitude_deg <= civil:
            return TwilightBand.NAUTICAL
        if altitude_deg <= horizon:
            return TwilightBand.CIVIL
        return TwilightBand.DAY


CANONICAL_CURVE = DaylightCurve()


def daylight_factor(altitude_deg: float) -> float:
    """Base brightness in [0, 1] for a solar altitude, canonical calibration."""
    return CANONICAL_CURVE(altitude_deg)


def twilight_band(altitude_deg: float) -> TwilightBand:
    return CANONICAL_CURVE.band(altitude_deg)
