"""Daylight brightness index engine.

Applies timestamp normalization, the solar position model, the daylight
curve and (optionally) atmospheric attenuation to an ordered batch of
hourly observations. Output keeps the input's length and order.

The computation is pure and synchronous; the engine only holds its
frozen config and may be shared freely.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import structlog

from .attenuation import attenuate, combined_transmittance
from .config import EngineConfig, InvalidTimestampPolicy
from .errors import InvalidTimestamp
from .mathutils import clamp01
from .models import HourlyObservation, LocationContext, TimestampLike
from .solar import solar_position
from .timestamps import normalize_timestamp, resolve_utc_offset

logger = structlog.get_logger()


@dataclass
class BrightnessSample:
    index: int
    timestamp: str
    local_time: str | None = None
    utc_offset_minutes: float | None = None
    altitude_deg: float | None = None
    band: str | None = None
    base: float | None = None
    transmittance: float | None = None
    brightness: float | None = None
    offset_estimated: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "local_time": self.local_time,
            "utc_offset_minutes": self.utc_offset_minutes,
            "altitude_deg": self.altitude_deg,
            "band": self.band,
            "base": self.base,
            "transmittance": self.transmittance,
            "brightness": self.brightness,
            "offset_estimated": self.offset_estimated,
            "error": self.error,
        }


class BrightnessIndexEngine:
    """Converts observations at a location into brightness indices in [0, 1].

    Args:
        config: Engine settings. Defaults to attenuation on, raise on
            invalid timestamps, whole-hour longitude offset estimates.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def compute(
        self,
        observations: Iterable[HourlyObservation | TimestampLike],
        location: LocationContext,
    ) -> list[float]:
        """Compute one brightness value per observation.

        Raises:
            InvalidTimestamp: On the first unparseable timestamp, with its
                batch index, when the policy is RAISE.
        """
        results: list[float] = []
        estimated = 0
        for index, item in enumerate(observations):
            try:
                sample = self._evaluate(index, _as_observation(item), location)
            except InvalidTimestamp as exc:
                if self.config.on_invalid == InvalidTimestampPolicy.RAISE:
                    raise exc.with_index(index) from exc
                logger.warning("Invalid timestamp replaced with NaN", index=index, reason=exc.reason)
                results.append(math.nan)
                continue
            results.append(sample.brightness)
            if sample.offset_estimated:
                estimated += 1

        self._report_estimate(location, estimated)
        logger.debug(
            "Brightness batch computed",
            count=len(results),
            latitude_deg=location.latitude_deg,
            longitude_deg=location.longitude_deg,
            attenuation=self.config.attenuation_enabled,
        )
        return results

    def compute_one(self, observation: HourlyObservation | TimestampLike, location: LocationContext) -> float:
        """Brightness for a single observation. Always raises on a bad timestamp."""
        return self._evaluate(0, _as_observation(observation), location).brightness

    def compute_detailed(
        self,
        observations: Iterable[HourlyObservation | TimestampLike],
        location: LocationContext,
    ) -> list[BrightnessSample]:
        """Like compute(), but returns the intermediate values per element.

        Never raises for a single bad element: the sample's ``error`` is set
        and its numeric fields stay None.
        """
        samples: list[BrightnessSample] = []
        for index, item in enumerate(observations):
            observation = _as_observation(item)
            try:
                samples.append(self._evaluate(index, observation, location))
            except InvalidTimestamp as exc:
                samples.append(
                    BrightnessSample(index=index, timestamp=str(observation.timestamp), error=exc.reason)
                )
        self._report_estimate(location, sum(s.offset_estimated for s in samples))
        return samples

    async def compute_async(
        self,
        observations: Iterable[HourlyObservation | TimestampLike],
        location: LocationContext,
    ) -> list[float]:
        """Coroutine front for async callers; does not suspend while computing."""
        return self.compute(observations, location)

    # ── internals ───────────────────────────────────────────────────────────

    def _report_estimate(self, location: LocationContext, count: int) -> None:
        # Only offset-naive elements depend on the guessed offset
        if count:
            offset, _ = resolve_utc_offset(location, snap_minutes=self.config.offset_snap_minutes)
            logger.warning(
                "UTC offset estimated from longitude",
                elements=count,
                longitude_deg=location.longitude_deg,
                offset_minutes=offset,
            )

    def _evaluate(self, index: int, observation: HourlyObservation, location: LocationContext) -> BrightnessSample:
        instant = normalize_timestamp(
            observation.timestamp, location, snap_minutes=self.config.offset_snap_minutes
        )
        position = solar_position(
            instant.wall_clock,
            location.latitude_deg,
            location.longitude_deg,
            instant.offset_minutes,
        )
        altitude = position.altitude_deg
        base = self.config.curve(altitude)

        if self.config.attenuation_enabled and observation.has_atmospherics:
            transmittance = combined_transmittance(
                altitude,
                observation.cloud_cover_percent,
                observation.precipitation_rate,
                observation.weather_code,
            )
            brightness = attenuate(
                base,
                altitude,
                cloud_cover_percent=observation.cloud_cover_percent,
                precipitation_rate=observation.precipitation_rate,
                weather_code=observation.weather_code,
            )
        else:
            transmittance = 1.0
            brightness = clamp01(base)

        return BrightnessSample(
            index=index,
            timestamp=str(observation.timestamp),
            local_time=instant.wall_clock.isoformat(),
            utc_offset_minutes=instant.offset_minutes,
            altitude_deg=altitude,
            band=self.config.curve.band(altitude).value,
            base=base,
            transmittance=transmittance,
            brightness=brightness,
            offset_estimated=instant.offset_estimated,
        )


def _as_observation(item: HourlyObservation | TimestampLike) -> HourlyObservation:
    if isinstance(item, HourlyObservation):
        return item
    return HourlyObservation(timestamp=item)


def _at(values: Sequence | None, index: int):
    if values is None or index >= len(values):
        return None
    return values[index]


def compute_brightness_index(
    observations: Iterable[HourlyObservation | TimestampLike],
    location: LocationContext,
    *,
    config: EngineConfig | None = None,
) -> list[float]:
    """Brightness index per observation, same length and order as the input."""
    return BrightnessIndexEngine(config).compute(observations, location)


def compute_brightness_index_from_arrays(
    times: Sequence[TimestampLike],
    location: LocationContext,
    *,
    cloud_cover: Sequence[float | None] | None = None,
    precipitation: Sequence[float | None] | None = None,
    weather_codes: Sequence[int | None] | None = None,
    config: EngineConfig | None = None,
) -> list[float]:
    """Brightness index from parallel arrays as returned by hourly weather APIs.

    Signal arrays shorter than ``times`` leave the trailing hours unattenuated.

    Raises:
        ValueError: If a signal array is longer than ``times``.
    """
    for name, values in (
        ("cloud_cover", cloud_cover),
        ("precipitation", precipitation),
        ("weather_codes", weather_codes),
    ):
        if values is not None and len(values) > len(times):
            raise ValueError(f"{name} has {len(values)} entries but times has {len(times)}")

    observations = [
        HourlyObservation(
            timestamp=t,
            cloud_cover_percent=_at(cloud_cover, i),
            precipitation_rate=_at(precipitation, i),
            weather_code=_at(weather_codes, i),
        )
        for i, t in enumerate(times)
    ]
    return compute_brightness_index(observations, location, config=config)
