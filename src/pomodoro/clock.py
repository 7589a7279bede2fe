"""Whole-second time value and the clock wrapper ticked by the controller."""

from __future__ import annotations

from .constants import (
    DEFAULT_HOURS,
    DEFAULT_MINUTES,
    DEFAULT_SECONDS,
    DIRECTION_COUNTDOWN,
    DIRECTION_COUNTUP,
    MAX_HOURS,
    MAX_MINUTES,
    MAX_SECONDS,
    MAX_TOTAL_SECONDS,
)
from .errors import BoundaryError, InvalidTimeError


class TimeValue:
    """Duration stored as a flat count of whole seconds in [0, 23:59:59]."""

    __slots__ = ("_total_seconds",)

    def __init__(self, total_seconds: int = 0):
        if not 0 <= total_seconds <= MAX_TOTAL_SECONDS:
            raise InvalidTimeError(
                f"total seconds must be in [0, {MAX_TOTAL_SECONDS}], got: {total_seconds}"
            )
        self._total_seconds = int(total_seconds)

    @classmethod
    def build(cls, hours: int, minutes: int, seconds: int) -> "TimeValue":
        """Build from components, validating each against its own range.

        The flattened total is never checked on its own: ``(0, 60, 0)`` is
        rejected even though 3600 seconds is representable.
        """
        if not 0 <= hours <= MAX_HOURS:
            raise InvalidTimeError(f"hours must be in [0, {MAX_HOURS}], got: {hours}")
        if not 0 <= minutes <= MAX_MINUTES:
            raise InvalidTimeError(f"minutes must be in [0, {MAX_MINUTES}], got: {minutes}")
        if not 0 <= seconds <= MAX_SECONDS:
            raise InvalidTimeError(f"seconds must be in [0, {MAX_SECONDS}], got: {seconds}")
        return cls(seconds + minutes * 60 + hours * 3600)

    @classmethod
    def from_seconds(cls, total_seconds: int) -> "TimeValue":
        return cls(total_seconds)

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def hours(self) -> int:
        return self._total_seconds // 3600

    @property
    def minutes(self) -> int:
        return (self._total_seconds % 3600) // 60

    @property
    def seconds(self) -> int:
        return self._total_seconds % 60

    @property
    def at_floor(self) -> bool:
        return self._total_seconds == 0

    @property
    def at_ceiling(self) -> bool:
        return self._total_seconds == MAX_TOTAL_SECONDS

    def increment(self) -> None:
        if self._total_seconds >= MAX_TOTAL_SECONDS:
            raise BoundaryError("cannot increment past 23:59:59")
        self._total_seconds += 1

    def decrement(self) -> None:
        if self._total_seconds <= 0:
            raise BoundaryError("cannot decrement below 00:00:00")
        self._total_seconds -= 1

    def render(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TimeValue({self.render()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        return self._total_seconds == other._total_seconds

    def __hash__(self) -> int:
        return hash(self._total_seconds)


class Clock:
    """Owns a single TimeValue and knows how to tick and reset it."""

    def __init__(
        self,
        *,
        hours: int = DEFAULT_HOURS,
        minutes: int = DEFAULT_MINUTES,
        seconds: int = DEFAULT_SECONDS,
    ):
        self._default = (hours, minutes, seconds)
        self._value = TimeValue.build(hours, minutes, seconds)

    @property
    def value(self) -> TimeValue:
        return self._value

    @property
    def total_seconds(self) -> int:
        return self._value.total_seconds

    def tick(self, direction: str = DIRECTION_COUNTDOWN) -> None:
        """Advance one second; raises BoundaryError at the limit for `direction`."""
        if direction == DIRECTION_COUNTUP:
            self._value.increment()
        else:
            self._value.decrement()

    def reset(self) -> None:
        self._value = TimeValue.build(*self._default)

    def render(self) -> str:
        return self._value.render()

    def __str__(self) -> str:
        return self.render()
