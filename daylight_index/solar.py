"""Solar position model.

NOAA low-precision approximation: a truncated Fourier series for the
equation of time and the solar declination, followed by the standard
hour-angle / zenith geometry. Accurate to well under a degree, which is
all a perceived-brightness index needs.

All functions take the location's local wall-clock together with the
UTC offset that wall-clock is expressed in. Any (wall_clock, offset)
pair describing the same physical instant yields the same altitude.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from .mathutils import clamp

MINUTES_PER_DAY = 1440


@dataclass(frozen=True)
class SolarPosition:
    altitude_deg: float
    zenith_deg: float
    declination_deg: float
    equation_of_time_min: float
    hour_angle_deg: float
    true_solar_time_min: float
    day_of_year: int


def fractional_year(day_of_year: int, hour_of_day: float) -> float:
    """Fractional year angle γ in radians."""
    return (2 * math.pi / 365) * (day_of_year - 1 + (hour_of_day - 12) / 24)


def equation_of_time_minutes(gamma: float) -> float:
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )


def solar_declination_rad(gamma: float) -> float:
    return (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )


def solar_position(
    wall_clock: datetime,
    latitude_deg: float,
    longitude_deg: float,
    utc_offset_minutes: float,
) -> SolarPosition:
    """Compute the sun's position for a local instant.

    Args:
        wall_clock: Local date and time at the location. Any tzinfo is
            ignored; only the calendar fields are read.
        latitude_deg: Latitude in degrees, north positive.
        longitude_deg: Longitude in degrees, east positive.
        utc_offset_minutes: Offset of ``wall_clock`` from UTC in minutes.

    Returns:
        SolarPosition with altitude in degrees above (positive) or below
        (negative) the horizon.
    """
    day_of_year = wall_clock.timetuple().tm_yday
    hour_of_day = (
        wall_clock.hour
        + wall_clock.minute / 60
        + (wall_clock.second + wall_clock.microsecond / 1e6) / 3600
    )

    gamma = fractional_year(day_of_year, hour_of_day)
    eqtime = equation_of_time_minutes(gamma)
    decl = solar_declination_rad(gamma)

    time_offset = eqtime + 4 * longitude_deg - utc_offset_minutes
    true_solar_time = (hour_of_day * 60 + time_offset) % MINUTES_PER_DAY

    hour_angle_deg = true_solar_time / 4 - 180
    lat = math.radians(latitude_deg)
    cos_zenith = (
        math.sin(lat) * math.sin(decl)
        + math.cos(lat) * math.cos(decl) * math.cos(math.radians(hour_angle_deg))
    )
    # Floating-point overshoot at the poles/subsolar point would break acos
    zenith_deg = math.degrees(math.acos(clamp(cos_zenith, -1.0, 1.0)))

    return SolarPosition(
        altitude_deg=90.0 - zenith_deg,
        zenith_deg=zenith_deg,
        declination_deg=math.degrees(decl),
        equation_of_time_min=eqtime,
        hour_angle_deg=hour_angle_deg,
        true_solar_time_min=true_solar_time,
        day_of_year=day_of_year,
    )


def solar_altitude_deg(
    wall_clock: datetime,
    latitude_deg: float,
    longitude_deg: float,
    utc_offset_minutes: float,
) -> float:
    return solar_position(wall_clock, latitude_deg, longitude_deg, utc_offset_minutes).altitude_deg
