"""Timezone resolution.

Region names go through :mod:`zoneinfo` (host database first, ``tzdata`` as the
fallback). Fixed offsets such as ``+07:00`` are accepted too.
"""

from __future__ import annotations

import re
from datetime import timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clockface.errors import InvalidTimezone

_OFFSET_RE = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")


def resolve_timezone(identifier: object) -> tzinfo:
    """Return the timezone named by *identifier*.

    Raises:
        InvalidTimezone: the identifier is not a string, is blank, or is not
            known to the timezone database.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidTimezone(f"unusable timezone identifier: {identifier!r}")

    match = _OFFSET_RE.match(identifier)
    if match:
        return _fixed_offset(identifier, match)

    try:
        return ZoneInfo(identifier)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezone(f"unknown timezone: {identifier!r}") from exc


def resolve_optional(identifier: object | None) -> tzinfo | None:
    """Resolve *identifier* unless it is absent, in which case return None."""
    if identifier is None:
        return None
    return resolve_timezone(identifier)


def _fixed_offset(identifier: str, match: re.Match[str]) -> tzinfo:
    hours = int(match["hours"])
    minutes = int(match["minutes"])
    if hours > 23 or minutes > 59:
        raise InvalidTimezone(f"offset out of range: {identifier!r}")
    offset = timedelta(hours=hours, minutes=minutes)
    if match["sign"] == "-":
        offset = -offset
    return timezone(offset)
