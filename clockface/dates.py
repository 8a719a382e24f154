"""Date parsing against an ordered list of accepted formats.

Formats are written with ``strftime`` directives, but parsing is lenient about
field ranges: an out-of-range month, day, hour, minute or second rolls over
into the next larger unit instead of failing. ``"%m.%d.%Y"`` therefore reads
``18.07.2003`` as the 7th day of the 18th month of 2003, i.e. 2004-06-07.

Supported directives: ``%Y %m %d %H %I %M %S %p`` and ``%%``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, tzinfo

from clockface.errors import DateNotProvided, InvalidDate

# directive -> (group name, regex)
_DIRECTIVES: dict[str, tuple[str, str]] = {
    "Y": ("year", r"\d{1,4}"),
    "m": ("month", r"\d{1,2}"),
    "d": ("day", r"\d{1,2}"),
    "H": ("hour", r"\d{1,2}"),
    "I": ("hour12", r"\d{1,2}"),
    "M": ("minute", r"\d{2}"),
    "S": ("second", r"\d{2}"),
    "p": ("meridiem", r"(?i:am|pm)"),
}


@dataclass(frozen=True)
class DateFormat:
    """One accepted textual layout, compiled to an anchored pattern."""

    pattern: str
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", _compile(self.pattern))

    def match(self, raw: str) -> datetime | None:
        """Return the naive wall-clock reading of *raw*, or None if it does not fit."""
        found = self.regex.fullmatch(raw)
        if found is None:
            return None
        fields = {name: value for name, value in found.groupdict().items() if value is not None}
        try:
            return _compose(fields)
        except (ValueError, OverflowError):
            return None


def _compile(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    seen: set[str] = set()
    chars = iter(pattern)
    for char in chars:
        if char != "%":
            parts.append(re.escape(char))
            continue
        directive = next(chars, None)
        if directive == "%":
            parts.append("%")
            continue
        if directive not in _DIRECTIVES:
            raise ValueError(f"unsupported directive %{directive} in {pattern!r}")
        name, expr = _DIRECTIVES[directive]
        if name in seen:
            raise ValueError(f"directive %{directive} repeated in {pattern!r}")
        seen.add(name)
        parts.append(f"(?P<{name}>{expr})")
    if ("hour12" in seen) != ("meridiem" in seen):
        raise ValueError(f"%I and %p must be used together in {pattern!r}")
    return re.compile("".join(parts))


def _compose(fields: dict[str, str]) -> datetime:
    year = int(fields.get("year", 1900))
    month = int(fields.get("month", 1))
    day = int(fields.get("day", 1))

    if "hour12" in fields:
        hour = int(fields["hour12"])
        if hour > 12:
            raise ValueError("12-hour clock value above 12")
        hour %= 12
        if fields["meridiem"].lower() == "pm":
            hour += 12
    else:
        hour = int(fields.get("hour", 0))

    carry, month_index = divmod(month - 1, 12)
    start = datetime(year + carry, month_index + 1, 1)
    return start + timedelta(
        days=day - 1,
        hours=hour,
        minutes=int(fields.get("minute", 0)),
        seconds=int(fields.get("second", 0)),
    )


# Order is part of the contract: the first format that parses wins.
ACCEPTED_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("%m.%d.%Y %H:%M:%S"),
    DateFormat("%I:%M%p %Y-%m-%d"),
)


@dataclass(frozen=True)
class DateValue:
    """A parsed date-time.

    ``moment`` is always timezone-aware and convertible to UTC. ``timezone`` is
    the zone the caller asked for, or None when the default zone was applied.
    """

    moment: datetime
    timezone: tzinfo | None = None

    def format(self, fmt: str) -> str:
        return self.moment.strftime(fmt)


class DateParser:
    """Parse date strings by trying each accepted format in order."""

    def __init__(
        self,
        formats: Sequence[DateFormat] = ACCEPTED_FORMATS,
        default_timezone: tzinfo | None = None,
    ) -> None:
        if not formats:
            raise ValueError("at least one date format is required")
        self.formats = tuple(formats)
        self.default_timezone = default_timezone

    def parse(self, raw: object, timezone: tzinfo | None = None) -> DateValue:
        """Parse *raw*, interpreting the wall-clock reading in *timezone*.

        Without *timezone* the parser's default zone is used, and without that
        the host's local zone.

        Raises:
            DateNotProvided: *raw* is None or empty.
            InvalidDate: *raw* fits none of the formats, or its instant falls
                outside the range datetime can represent in UTC.
        """
        if raw is None or raw == "":
            raise DateNotProvided()
        if not isinstance(raw, str):
            raise InvalidDate(f"date must be a string, got {type(raw).__name__}")

        for fmt in self.formats:
            wall_clock = fmt.match(raw)
            if wall_clock is None:
                continue
            try:
                moment = self._localize(wall_clock, timezone)
                moment.astimezone(UTC)
            except (OverflowError, ValueError, OSError) as exc:
                raise InvalidDate(f"{raw!r} is out of range in UTC") from exc
            return DateValue(moment, timezone)
        raise InvalidDate(f"no accepted format matches {raw!r}")

    def _localize(self, wall_clock: datetime, timezone: tzinfo | None) -> datetime:
        zone = timezone or self.default_timezone
        if zone is None:
            return wall_clock.astimezone()
        return wall_clock.replace(tzinfo=zone)

