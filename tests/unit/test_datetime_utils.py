"""
Unit tests for clock and calendar helpers.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from rhythm.utils.datetime_utils import (
    add_minutes,
    format_hour,
    format_time_slot,
    is_valid_date_key,
    is_valid_week_key,
    previous_day_key,
    to_12_hour,
    to_24_hour,
    to_date_key,
    to_week_key,
    trailing_date_keys,
)


class TestDateKeys:
    def test_date_key_of_naive_datetime(self):
        assert to_date_key(datetime(2026, 1, 20, 9, 0)) == "2026-01-20"

    def test_date_key_uses_user_timezone(self):
        try:
            ZoneInfo("Asia/Tokyo")
        except ZoneInfoNotFoundError:
            pytest.skip("tz database not available")
        late_utc = datetime(2026, 1, 20, 23, 30, tzinfo=timezone.utc)
        assert to_date_key(late_utc, "Asia/Tokyo") == "2026-01-21"
        assert to_date_key(late_utc) == "2026-01-20"

    def test_validation(self):
        assert is_valid_date_key("2026-01-20")
        assert not is_valid_date_key("2026-02-30")
        assert not is_valid_date_key("Tue Jan 20 2026")
        assert not is_valid_date_key(20260120)

    def test_previous_day_crosses_month(self):
        assert previous_day_key("2026-03-01") == "2026-02-28"

    def test_trailing_keys_oldest_first(self):
        assert trailing_date_keys("2026-03-01", 3) == ["2026-02-27", "2026-02-28", "2026-03-01"]


class TestWeekKeys:
    def test_week_key_format(self):
        assert to_week_key(datetime(2026, 1, 20, 9, 0)) == "2026-W04"

    def test_sunday_belongs_to_previous_iso_week(self):
        assert to_week_key(datetime(2026, 1, 18, 23, 59)) == "2026-W03"
        assert to_week_key(datetime(2026, 1, 19, 0, 0)) == "2026-W04"

    def test_iso_year_differs_from_calendar_year(self):
        """Jan 1 2027 (Friday) is in the last ISO week of 2026."""
        assert to_week_key(datetime(2027, 1, 1)) == "2026-W53"
        assert to_week_key(datetime(2024, 12, 30)) == "2025-W01"

    def test_validation(self):
        assert is_valid_week_key("2026-W04")
        assert not is_valid_week_key("4")
        assert not is_valid_week_key(4)
        assert not is_valid_week_key(None)


class TestClockArithmetic:
    def test_add_minutes_wraps_past_midnight(self):
        assert add_minutes(23, 45, 30) == (0, 15)
        assert add_minutes(9, 0, 90) == (10, 30)

    def test_12_hour_conversion(self):
        assert to_24_hour(12, "AM") == 0
        assert to_24_hour(12, "PM") == 12
        assert to_24_hour(3, "PM") == 15
        assert to_24_hour(7, "am") == 7
        assert to_12_hour(0) == (12, "AM")
        assert to_12_hour(13) == (1, "PM")

    def test_labels(self):
        assert format_hour(0) == "12 AM"
        assert format_hour(12) == "12 PM"
        assert format_hour(15) == "3 PM"
        assert format_time_slot(9, 5) == "9:05 AM"
        assert format_time_slot(14, 15) == "2:15 PM"
