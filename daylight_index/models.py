"""Input records consumed by the brightness engine."""

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime

from .errors import InvalidLocation
from .mathutils import is_missing

TimestampLike = datetime | date | str | int | float

# Real-world offsets span UTC-12:00 .. UTC+14:00; ISO 8601 allows up to 18 hours
MAX_UTC_OFFSET_MINUTES = 18 * 60


@dataclass(frozen=True)
class HourlyObservation:
    timestamp: TimestampLike
    cloud_cover_percent: float | None = None   # 0..100
    precipitation_rate: float | None = None    # mm/h
    weather_code: int | None = None            # WMO code, Open-Meteo mapping

    @property
    def has_atmospherics(self) -> bool:
        return not (
            is_missing(self.cloud_cover_percent)
            and is_missing(self.precipitation_rate)
            and is_missing(self.weather_code)
        )


@dataclass(frozen=True)
class LocationContext:
    """Where and in which clock the observations were taken.

    Args:
        latitude_deg: Latitude in decimal degrees, north positive.
        longitude_deg: Longitude in decimal degrees, east positive.
        utc_offset_minutes: Minutes to add to UTC to obtain the location's
            local time (+120 for UTC+2). This must be the location's offset,
            not the offset of the machine running the computation. When None,
            the offset is estimated from longitude.
        timestamps_are_absolute_utc: Interpretation of offset-naive
            timestamps. False means they already are the location's local
            wall-clock; True means they are UTC.

    Raises:
        InvalidLocation: If a coordinate or the offset is out of range.
    """

    latitude_deg: float
    longitude_deg: float
    utc_offset_minutes: int | None = None
    timestamps_are_absolute_utc: bool = False

    def __post_init__(self) -> None:
        _check_range("latitude_deg", self.latitude_deg, -90.0, 90.0)
        _check_range("longitude_deg", self.longitude_deg, -180.0, 180.0)
        if self.utc_offset_minutes is not None:
            _check_range(
                "utc_offset_minutes",
                self.utc_offset_minutes,
                -MAX_UTC_OFFSET_MINUTES,
                MAX_UTC_OFFSET_MINUTES,
            )


def _check_range(field: str, value: float, lower: float, upper: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidLocation(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidLocation(field, value, "must be finite")
    if not lower <= value <= upper:
        raise InvalidLocation(field, value, f"must be within [{lower:g}, {upper:g}]")
