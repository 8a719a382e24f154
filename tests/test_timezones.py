"""Tests for timezone resolution."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from clockface.errors import InvalidTimezone
from clockface.timezones import resolve_optional, resolve_timezone


class TestResolveTimezone:
    @pytest.mark.parametrize("name", ["UTC", "Europe/London", "Asia/Novosibirsk", "America/New_York"])
    def test_region_names(self, name: str) -> None:
        assert resolve_timezone(name) == ZoneInfo(name)

    @pytest.mark.parametrize(
        "name",
        ["London/London", "Europe/Europe", "Europe", "", "   ", "../etc/passwd", "/etc/localtime"],
    )
    def test_unknown_names(self, name: str) -> None:
        with pytest.raises(InvalidTimezone):
            resolve_timezone(name)

    @pytest.mark.parametrize("value", [42, 1.5, ["UTC"], {"tz": "UTC"}, True])
    def test_non_string(self, value: object) -> None:
        with pytest.raises(InvalidTimezone):
            resolve_timezone(value)

    @pytest.mark.parametrize(
        ("text", "offset"),
        [
            ("+07:00", timedelta(hours=7)),
            ("-03:30", timedelta(hours=-3, minutes=-30)),
            ("+0545", timedelta(hours=5, minutes=45)),
            ("+00:00", timedelta(0)),
        ],
    )
    def test_fixed_offsets(self, text: str, offset: timedelta) -> None:
        tz = resolve_timezone(text)
        assert datetime(2024, 1, 1, tzinfo=tz).utcoffset() == offset

    @pytest.mark.parametrize("text", ["+24:00", "+05:60", "+5:00", "07:00"])
    def test_bad_offsets(self, text: str) -> None:
        with pytest.raises(InvalidTimezone):
            resolve_timezone(text)


class TestResolveOptional:
    def test_absent_is_none(self) -> None:
        assert resolve_optional(None) is None

    def test_present_is_resolved(self) -> None:
        assert resolve_optional("Asia/Tokyo") == ZoneInfo("Asia/Tokyo")

    def test_present_but_invalid(self) -> None:
        with pytest.raises(InvalidTimezone):
            resolve_optional("Mars/Olympus")
