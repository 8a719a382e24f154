"""Elapsed-time computation between two parsed dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone

from clockface.dates import DateValue

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


@dataclass(frozen=True)
class Duration:
    """An unsigned duration broken into days and remainder hours/minutes/seconds."""

    days: int
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total: int) -> Duration:
        total = abs(total)
        days, rest = divmod(total, _DAY)
        hours, rest = divmod(rest, _HOUR)
        minutes, seconds = divmod(rest, _MINUTE)
        return cls(days, hours, minutes, seconds)

    def __str__(self) -> str:
        return (
            f"{self.days} days, {self.hours} hours, "
            f"{self.minutes} minutes, {self.seconds} seconds"
        )


@dataclass(frozen=True)
class DateRange:
    """The two sides of a difference request. No ordering is implied."""

    start: DateValue
    end: DateValue

    def duration(self) -> Duration:
        start = self.start.moment.astimezone(timezone.utc)
        end = self.end.moment.astimezone(timezone.utc)
        # Sub-second parts never come out of the accepted formats.
        return Duration.from_seconds(int((end - start).total_seconds()))


def diff(start: DateValue, end: DateValue) -> str:
    """Return the unsigned elapsed time between *start* and *end*.

    >>> str(Duration.from_seconds(-7 * 3600))
    '0 days, 7 hours, 0 minutes, 0 seconds'
    """
    return str(DateRange(start, end).duration())
