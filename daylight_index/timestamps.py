"""Timestamp coercion and timezone handling.

Turns the heterogeneous timestamp representations produced by weather
APIs into a single LocalInstant: the location's wall-clock plus the UTC
offset it is expressed in. The offset is applied exactly once:

  - aware datetimes, strings ending in ``Z`` / ``±HH:MM`` and epoch
    milliseconds are absolute instants and are converted directly;
  - offset-naive values are the location's wall-clock as-is, unless the
    location says timestamps are absolute UTC, in which case they are
    shifted by the location's offset.

When the location carries no offset, one is estimated from longitude.
That estimate ignores DST, half-hour zones and political boundaries and
is only a degraded fallback.
"""

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from .errors import InvalidTimestamp
from .mathutils import round_half_away
from .models import LocationContext

DEFAULT_SNAP_MINUTES = 60
SUPPORTED_SNAP_MINUTES = (30, 60)


@dataclass(frozen=True)
class LocalInstant:
    wall_clock: datetime          # naive, location-local
    offset_minutes: float         # wall_clock - offset == UTC
    offset_estimated: bool = False

    @property
    def utc(self) -> datetime:
        return (self.wall_clock - timedelta(minutes=self.offset_minutes)).replace(tzinfo=timezone.utc)


def estimate_utc_offset_minutes(longitude_deg: float, snap_minutes: int = DEFAULT_SNAP_MINUTES) -> int:
    """Guess a UTC offset from longitude (15° per hour).

    Args:
        longitude_deg: Longitude in degrees, east positive.
        snap_minutes: 60 for whole-hour zones, 30 to allow half-hour zones.

    Raises:
        ValueError: If ``snap_minutes`` is not 30 or 60.
    """
    if snap_minutes not in SUPPORTED_SNAP_MINUTES:
        raise ValueError(f"snap_minutes must be one of {SUPPORTED_SNAP_MINUTES}, got {snap_minutes}")
    solar_minutes = longitude_deg * 4
    return round_half_away(solar_minutes / snap_minutes) * snap_minutes


def resolve_utc_offset(
    location: LocationContext,
    *,
    snap_minutes: int = DEFAULT_SNAP_MINUTES,
) -> tuple[float, bool]:
    """Return ``(offset_minutes, estimated)`` for a location."""
    if location.utc_offset_minutes is not None:
        return location.utc_offset_minutes, False
    return estimate_utc_offset_minutes(location.longitude_deg, snap_minutes), True


def parse_timestamp(value: object) -> datetime:
    """Coerce a raw timestamp into a datetime, aware or naive.

    Accepts datetimes, dates (midnight), ISO-8601 strings and epoch
    milliseconds. Numbers are always absolute (UTC) instants.

    Raises:
        InvalidTimestamp: If the value is not a calendar instant.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise InvalidTimestamp(value, "booleans are not timestamps")
    if isinstance(value, numbers.Real):
        try:
            if not math.isfinite(value):
                raise InvalidTimestamp(value, "epoch must be finite")
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except InvalidTimestamp:
            raise
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidTimestamp(value, f"epoch milliseconds out of range: {exc}") from exc
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidTimestamp(value, "empty string")
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidTimestamp(value, "not an ISO-8601 date/time") from exc
    if value is None:
        raise InvalidTimestamp(value, "missing timestamp")
    raise InvalidTimestamp(value, f"unsupported type {type(value).__name__}")


def normalize_timestamp(
    value: object,
    location: LocationContext,
    *,
    snap_minutes: int = DEFAULT_SNAP_MINUTES,
) -> LocalInstant:
    """Express a timestamp in the location's local wall-clock.

    ``offset_estimated`` is only set for offset-naive values: an absolute
    instant's altitude does not depend on which clock it is displayed in.

    Raises:
        InvalidTimestamp: If the value cannot be parsed or shifted.
    """
    offset, estimated = resolve_utc_offset(location, snap_minutes=snap_minutes)
    parsed = parse_timestamp(value)

    try:
        if parsed.tzinfo is not None and parsed.utcoffset() is not None:
            local_tz = timezone(timedelta(minutes=offset))
            wall_clock = parsed.astimezone(local_tz).replace(tzinfo=None)
            estimated = False
        elif location.timestamps_are_absolute_utc:
            wall_clock = parsed.replace(tzinfo=None) + timedelta(minutes=offset)
        else:
            wall_clock = parsed.replace(tzinfo=None)
    except OverflowError as exc:
        raise InvalidTimestamp(value, "outside the representable date range") from exc

    return LocalInstant(wall_clock=wall_clock, offset_minutes=offset, offset_estimated=estimated)
