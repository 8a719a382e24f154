"""Tests for duration breakdown and date differences."""

from zoneinfo import ZoneInfo

import pytest

from clockface.dates import DateParser
from clockface.diff import DateRange, Duration, diff

UTC = ZoneInfo("UTC")


@pytest.fixture
def parser() -> DateParser:
    return DateParser(default_timezone=UTC)


class TestDuration:
    def test_breakdown(self) -> None:
        assert Duration.from_seconds(90061) == Duration(1, 1, 1, 1)

    def test_negative_is_magnitude(self) -> None:
        assert Duration.from_seconds(-90061) == Duration(1, 1, 1, 1)

    def test_str(self) -> None:
        assert str(Duration(2, 2, 15, 0)) == "2 days, 2 hours, 15 minutes, 0 seconds"

    def test_zero(self) -> None:
        assert str(Duration.from_seconds(0)) == "0 days, 0 hours, 0 minutes, 0 seconds"

    def test_days_are_not_capped(self) -> None:
        assert Duration.from_seconds(400 * 86400).days == 400


class TestDiff:
    def test_same_wall_clock_in_different_zones(self, parser: DateParser) -> None:
        start = parser.parse("07.18.2003 10:30:00", UTC)
        end = parser.parse("07.18.2003 10:30:00", ZoneInfo("Asia/Novosibirsk"))
        assert diff(start, end) == "0 days, 7 hours, 0 minutes, 0 seconds"

    def test_mixed_formats_with_rollover(self, parser: DateParser) -> None:
        start = parser.parse("18.07.2003 10:30:00")
        end = parser.parse("12:45pm 2003-18-09")
        assert diff(start, end) == "2 days, 2 hours, 15 minutes, 0 seconds"

    def test_order_independent(self, parser: DateParser) -> None:
        start = parser.parse("07.18.2003 10:30:00")
        end = parser.parse("07.20.2003 11:31:01")
        assert diff(start, end) == diff(end, start) == "2 days, 1 hours, 1 minutes, 1 seconds"

    def test_dst_transition_counts_real_hours(self, parser: DateParser) -> None:
        # Clocks in London jumped forward at 01:00 on 2024-03-31.
        london = ZoneInfo("Europe/London")
        start = parser.parse("03.31.2024 00:30:00", london)
        end = parser.parse("03.31.2024 02:30:00", london)
        assert diff(start, end) == "0 days, 1 hours, 0 minutes, 0 seconds"

    def test_range_duration(self, parser: DateParser) -> None:
        date_range = DateRange(
            start=parser.parse("01.01.2020 00:00:00"),
            end=parser.parse("01.01.2021 00:00:00"),
        )
        assert date_range.duration() == Duration(366, 0, 0, 0)
