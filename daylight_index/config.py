"""Engine configuration and logging setup.

Settings can be passed explicitly or read from environment variables:

  BRIGHTNESS_ATTENUATION          "true" (default) / "false"
  BRIGHTNESS_ON_INVALID           "raise" (default) / "nan"
  BRIGHTNESS_OFFSET_SNAP_MINUTES  "60" (default) / "30"
  LOG_LEVEL                       "INFO" (default), any stdlib level name
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, TextIO

import structlog

from .daylight import CANONICAL_CURVE, DaylightCurve
from .timestamps import DEFAULT_SNAP_MINUTES, SUPPORTED_SNAP_MINUTES

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class InvalidTimestampPolicy(str, Enum):
    RAISE = "raise"   # abort the batch with InvalidTimestamp
    NAN = "nan"       # substitute float("nan") for the bad element only


@dataclass(frozen=True)
class EngineConfig:
    attenuation_enabled: bool = True
    on_invalid: InvalidTimestampPolicy = InvalidTimestampPolicy.RAISE
    offset_snap_minutes: int = DEFAULT_SNAP_MINUTES
    curve: DaylightCurve = CANONICAL_CURVE

    def __post_init__(self) -> None:
        if self.offset_snap_minutes not in SUPPORTED_SNAP_MINUTES:
            raise ValueError(
                f"offset_snap_minutes must be one of {SUPPORTED_SNAP_MINUTES}, got {self.offset_snap_minutes}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a config from BRIGHTNESS_* environment variables.

        Raises:
            ValueError: If a variable holds an unrecognised value.
        """
        env = os.environ if environ is None else environ

        raw_attenuation = env.get("BRIGHTNESS_ATTENUATION", "true").strip().lower()
        if raw_attenuation in _TRUE:
            attenuation_enabled = True
        elif raw_attenuation in _FALSE:
            attenuation_enabled = False
        else:
            raise ValueError(f"BRIGHTNESS_ATTENUATION must be a boolean, got {raw_attenuation!r}")

        raw_policy = env.get("BRIGHTNESS_ON_INVALID", "raise").strip().lower()
        try:
            on_invalid = InvalidTimestampPolicy(raw_policy)
        except ValueError:
            raise ValueError(f"BRIGHTNESS_ON_INVALID must be 'raise' or 'nan', got {raw_policy!r}") from None

        raw_snap = env.get("BRIGHTNESS_OFFSET_SNAP_MINUTES", str(DEFAULT_SNAP_MINUTES)).strip()
        try:
            snap = int(raw_snap)
        except ValueError:
            raise ValueError(f"BRIGHTNESS_OFFSET_SNAP_MINUTES must be an integer, got {raw_snap!r}") from None

        return cls(attenuation_enabled=attenuation_enabled, on_invalid=on_invalid, offset_snap_minutes=snap)


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Install the JSON structlog pipeline used across the package.

    Args:
        level: Stdlib level name. Defaults to $LOG_LEVEL, then INFO.
        stream: Where rendered events are written. Defaults to stdout.
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level_name!r}")

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )
