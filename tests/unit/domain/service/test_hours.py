"""Unit tests for the opening hours resolver."""

from datetime import datetime, timezone

import pytest

from portal.domain.service import parse_hour_range, resolve_open_status
from portal.domain.value import OpenStatus

# 2024-06-03 is a Monday
MONDAY = datetime(2024, 6, 3)
SATURDAY = datetime(2024, 6, 8)
SUNDAY = datetime(2024, 6, 9)


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


class TestAlwaysOpen:
    """Tests for 24-hour markers."""

    @pytest.mark.parametrize("timings", ["24/7", "24x7", "Open 24 hours", "24"])
    @pytest.mark.parametrize("hour", [0, 3, 12, 23])
    def test_24_hour_marker_is_open_at_any_time(self, timings, hour):
        """Any 24-hour marker should resolve to open regardless of time."""
        assert resolve_open_status(timings, at(SUNDAY, hour)) == OpenStatus.OPEN

    def test_marker_is_case_insensitive(self):
        assert resolve_open_status("OPEN 24X7", at(MONDAY, 4)) == OpenStatus.OPEN


class TestDayRanges:
    """Tests for weekday markers."""

    def test_mon_sat_is_closed_on_sunday(self):
        """Mon-Sat timings should be closed all day Sunday."""
        timings = "Mon-Sat: 9 AM - 8 PM"
        assert resolve_open_status(timings, at(SUNDAY, 12)) == OpenStatus.CLOSED

    def test_mon_sat_uses_hours_on_saturday(self):
        timings = "Mon-Sat: 9 AM - 8 PM"
        assert resolve_open_status(timings, at(SATURDAY, 12)) == OpenStatus.OPEN
        assert resolve_open_status(timings, at(SATURDAY, 20)) == OpenStatus.CLOSED

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_mon_fri_is_closed_on_weekends(self, day):
        timings = "mon - fri 10 am - 5 pm"
        assert resolve_open_status(timings, at(day, 12)) == OpenStatus.CLOSED

    def test_mon_fri_uses_hours_on_weekdays(self):
        timings = "MON-FRI 10 AM - 5 PM"
        assert resolve_open_status(timings, at(MONDAY, 12)) == OpenStatus.OPEN

    def test_day_marker_without_hours_is_unknown_on_open_days(self):
        assert resolve_open_status("Mon-Sat", at(MONDAY, 12)) == OpenStatus.UNKNOWN


class TestHourRange:
    """Tests for the half-open hour interval."""

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (8, 59, OpenStatus.CLOSED),
            (9, 0, OpenStatus.OPEN),
            (20, 59, OpenStatus.OPEN),
            (21, 0, OpenStatus.CLOSED),
        ],
    )
    def test_boundaries(self, hour, minute, expected):
        """Opening hour is inclusive and closing hour exclusive."""
        now = at(MONDAY, hour, minute)
        assert resolve_open_status("9 AM - 9 PM", now) == expected

    def test_24_hour_numbers_without_meridiem(self):
        """Bare hours are read as 24-hour values."""
        assert resolve_open_status("7-21", at(MONDAY, 20)) == OpenStatus.OPEN
        assert resolve_open_status("7-21", at(MONDAY, 6)) == OpenStatus.CLOSED

    def test_en_dash_separator(self):
        assert resolve_open_status("9am–5pm", at(MONDAY, 16)) == OpenStatus.OPEN

    def test_overnight_range_wraps_past_midnight(self):
        """A closing hour before the opening hour runs into the next day."""
        timings = "9 PM - 6 AM"
        assert resolve_open_status(timings, at(MONDAY, 23)) == OpenStatus.OPEN
        assert resolve_open_status(timings, at(MONDAY, 2)) == OpenStatus.OPEN
        assert resolve_open_status(timings, at(MONDAY, 6)) == OpenStatus.CLOSED
        assert resolve_open_status(timings, at(MONDAY, 12)) == OpenStatus.CLOSED

    @pytest.mark.parametrize("hour", [2, 7, 12, 23])
    def test_bare_inverted_pair_is_unknown(self, hour):
        """A bare "9-5" is not read as an overnight range."""
        now = at(MONDAY, hour)
        assert resolve_open_status("Mon-Sat 9-5", now) == OpenStatus.UNKNOWN

    def test_equal_hours_are_never_open(self):
        assert resolve_open_status("9 AM - 9 AM", at(MONDAY, 9)) == OpenStatus.CLOSED

    def test_ignores_timezone_of_now(self):
        """Only the wall-clock hour of ``now`` matters."""
        now = datetime(2024, 6, 3, 10, tzinfo=timezone.utc)
        assert resolve_open_status("9 AM - 5 PM", now) == OpenStatus.OPEN


class TestUnknown:
    """Tests for text that cannot be interpreted."""

    @pytest.mark.parametrize(
        "timings", ["sometime maybe", "By appointment", "", "   ", None]
    )
    @pytest.mark.parametrize("hour", [0, 9, 18])
    def test_uninterpretable_text_is_unknown(self, timings, hour):
        assert resolve_open_status(timings, at(MONDAY, hour)) == OpenStatus.UNKNOWN

    @pytest.mark.parametrize("timings", ["13 PM - 5 PM", "0 AM - 5 PM", "9 - 30"])
    def test_out_of_range_hours_are_unknown(self, timings):
        assert resolve_open_status(timings, at(MONDAY, 10)) == OpenStatus.UNKNOWN

    @pytest.mark.parametrize(
        "timings", ["10:00 AM - 6:00 PM", "10 AM - 6:30 PM", "08:00-20:00"]
    )
    def test_minute_precision_is_unknown(self, timings):
        assert resolve_open_status(timings, at(MONDAY, 12)) == OpenStatus.UNKNOWN


class TestParseHourRange:
    """Tests for hour extraction."""

    @pytest.mark.parametrize(
        "timings,expected",
        [
            ("9 am - 9 pm", (9, 21)),
            ("12 pm - 4 pm", (12, 16)),
            ("12 am - 6 am", (0, 6)),
            ("9 - 5 pm", (9, 17)),
            ("7-21", (7, 21)),
            ("9-5", None),
            ("22 - 6", None),
            ("10 pm - 6", (22, 6)),
            ("no hours here", None),
        ],
    )
    def test_parse(self, timings, expected):
        assert parse_hour_range(timings) == expected
