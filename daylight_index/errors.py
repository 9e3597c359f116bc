"""Exceptions raised by the brightness engine.

All errors derive from ValueError: they describe bad input, never a
transient condition, so the same input always fails the same way.
"""

from typing import Any


class BrightnessError(ValueError):
    """Base class for all brightness engine errors."""


class InvalidTimestamp(BrightnessError):
    """A timestamp could not be parsed into a calendar instant.

    Args:
        value: The offending input value.
        reason: Short human-readable cause.
        index: Position of the element in the batch, when known.
    """

    def __init__(self, value: Any, reason: str, index: int | None = None) -> None:
        self.value = value
        self.reason = reason
        self.index = index
        super().__init__(self._format())

    def _format(self) -> str:
        where = f" at index {self.index}" if self.index is not None else ""
        return f"Invalid timestamp{where}: {self.value!r} ({self.reason})"

    def with_index(self, index: int) -> "InvalidTimestamp":
        return InvalidTimestamp(self.value, self.reason, index=index)


class InvalidLocation(BrightnessError):
    """Latitude, longitude or UTC offset outside its valid range."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r} ({reason})")
