from .attenuation import WeatherCondition, attenuate, classify_weather_code
from .config import EngineConfig, InvalidTimestampPolicy, configure_logging
from .daylight import CANONICAL_CURVE, DaylightCurve, TwilightBand, daylight_factor, twilight_band
from .engine import (
    BrightnessIndexEngine,
    BrightnessSample,
    compute_brightness_index,
    compute_brightness_index_from_arrays,
)
from .errors import BrightnessError, InvalidLocation, InvalidTimestamp
from .models import HourlyObservation, LocationContext
from .solar import SolarPosition, solar_altitude_deg, solar_position
from .timestamps import LocalInstant, estimate_utc_offset_minutes, normalize_timestamp

__all__ = [
    "BrightnessError",
    "BrightnessIndexEngine",
    "BrightnessSample",
    "CANONICAL_CURVE",
    "DaylightCurve",
    "EngineConfig",
    "HourlyObservation",
    "InvalidLocation",
    "InvalidTimestamp",
    "InvalidTimestampPolicy",
    "LocalInstant",
    "LocationContext",
    "SolarPosition",
    "TwilightBand",
    "WeatherCondition",
    "attenuate",
    "classify_weather_code",
    "compute_brightness_index",
    "compute_brightness_index_from_arrays",
    "configure_logging",
    "daylight_factor",
    "estimate_utc_offset_minutes",
    "normalize_timestamp",
    "solar_altitude_deg",
    "solar_position",
    "twilight_band",
]
