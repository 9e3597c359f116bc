"""Atmospheric attenuation of the base daylight factor.

Cloud cover, precipitation and the WMO weather code each contribute an
independent transmittance (1 = unattenuated, 0 = fully blocked). Their
product scales the base brightness, but a fixed 35% share always passes
through so twilight stays perceptible under total overcast.
"""

from enum import Enum

from .mathutils import clamp, clamp01, is_missing

# Share of the base brightness that no weather can remove
UNOCCLUDABLE_SHARE = 0.35
# Cloud attenuation strength bounds (strongest with a low sun)
CLOUD_STRENGTH_LOW_SUN = 0.85
CLOUD_STRENGTH_HIGH_SUN = 0.55
CLOUD_EXPONENT = 1.2
# Precipitation: 10 mm/h removes 100%, capped at 50%
PRECIP_SCALE_MM_H = 10.0
PRECIP_MAX_REDUCTION = 0.5
# Fresh snow brightens the scene when the sun is up
SNOW_ALBEDO_BOOST = 1.1
SNOW_MIN_ALTITUDE_DEG = 5.0


class WeatherCondition(str, Enum):
    CLEAR = "clear"
    OVERCAST = "overcast"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    RAIN_SHOWERS = "rain_showers"
    SNOW_SHOWERS = "snow_showers"
    THUNDERSTORM = "thunderstorm"
    THUNDERSTORM_HAIL = "thunderstorm_hail"
    UNKNOWN = "unknown"


CONDITION_TRANSMITTANCE: dict[WeatherCondition, float] = {
    WeatherCondition.CLEAR: 1.0,   # partly cloudy too; cloud cover is handled separately
    WeatherCondition.OVERCAST: 0.9,
    WeatherCondition.FOG: 0.5,
    WeatherCondition.DRIZZLE: 0.85,
    WeatherCondition.RAIN: 0.75,
    WeatherCondition.SNOW: 0.85,
    WeatherCondition.RAIN_SHOWERS: 0.7,
    WeatherCondition.SNOW_SHOWERS: 0.8,
    WeatherCondition.THUNDERSTORM: 0.6,
    WeatherCondition.THUNDERSTORM_HAIL: 0.55,
    WeatherCondition.UNKNOWN: 0.85,
}

SNOW_CONDITIONS = frozenset({WeatherCondition.SNOW, WeatherCondition.SNOW_SHOWERS})


def classify_weather_code(code: int) -> WeatherCondition:
    """Bucket a WMO weather code (Open-Meteo mapping)."""
    if code in (0, 1, 2):
        return WeatherCondition.CLEAR
    if code == 3:
        return WeatherCondition.OVERCAST
    if code in (45, 48):
        return WeatherCondition.FOG
    if 51 <= code <= 57:
        return WeatherCondition.DRIZZLE
    if 61 <= code <= 67:
        return WeatherCondition.RAIN
    if 71 <= code <= 77:
        return WeatherCondition.SNOW
    if 80 <= code <= 82:
        return WeatherCondition.RAIN_SHOWERS
    if code in (85, 86):
        return WeatherCondition.SNOW_SHOWERS
    if code == 95:
        return WeatherCondition.THUNDERSTORM
    if code in (96, 99):
        return WeatherCondition.THUNDERSTORM_HAIL
    return WeatherCondition.UNKNOWN


def is_snow_code(code: int | None) -> bool:
    return not is_missing(code) and classify_weather_code(code) in SNOW_CONDITIONS


def cloud_transmittance(cloud_fraction: float, altitude_deg: float) -> float:
    altitude_factor = clamp01(altitude_deg / 60)
    strength = clamp(
        CLOUD_STRENGTH_LOW_SUN - 0.25 * altitude_factor,
        CLOUD_STRENGTH_HIGH_SUN,
        CLOUD_STRENGTH_LOW_SUN,
    )
    return 1.0 - strength * clamp01(cloud_fraction) ** CLOUD_EXPONENT


def precipitation_transmittance(rate_mm_h: float) -> float:
    return 1.0 - clamp(max(0.0, rate_mm_h) / PRECIP_SCALE_MM_H, 0.0, PRECIP_MAX_REDUCTION)


def weather_code_transmittance(code: int | None) -> float:
    if is_missing(code):
        return 1.0
    return CONDITION_TRANSMITTANCE[classify_weather_code(code)]


def combined_transmittance(
    altitude_deg: float,
    cloud_cover_percent: float | None = None,
    precipitation_rate: float | None = None,
    weather_code: int | None = None,
) -> float:
    """Product of the cloud, precipitation and weather-code transmittances.

    Missing (None or NaN) signals contribute no attenuation.
    """
    cloud_fraction = 0.0 if is_missing(cloud_cover_percent) else cloud_cover_percent / 100
    rate = 0.0 if is_missing(precipitation_rate) else precipitation_rate
    return clamp01(
        cloud_transmittance(cloud_fraction, altitude_deg)
        * precipitation_transmittance(rate)
        * weather_code_transmittance(weather_code)
    )


def attenuate(
    base: float,
    altitude_deg: float,
    *,
    cloud_cover_percent: float | None = None,
    precipitation_rate: float | None = None,
    weather_code: int | None = None,
) -> float:
    """Apply weather attenuation to a base daylight factor.

    Args:
        base: Unattenuated brightness in [0, 1].
        altitude_deg: Solar altitude; a low sun lets clouds dim more.
        cloud_cover_percent: Sky fraction covered by cloud, 0..100.
        precipitation_rate: Precipitation in mm/h.
        weather_code: WMO weather code.

    Returns:
        Brightness in [0, 1], never below ``0.35 * base``.
    """
    transmittance = combined_transmittance(
        altitude_deg, cloud_cover_percent, precipitation_rate, weather_code
    )
    index = clamp01(base * (UNOCCLUDABLE_SHARE + (1 - UNOCCLUDABLE_SHARE) * transmittance))

    if is_snow_code(weather_code) and altitude_deg > SNOW_MIN_ALTITUDE_DEG:
        index = min(1.0, index * SNOW_ALBEDO_BOOST)
    return index
