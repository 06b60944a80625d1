"""
Clock and calendar utilities.

Pure functions converting an instant to the keys the rollover ledger stores
(calendar date string, ISO week) and to/from (hour, minute) pairs.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
WEEK_KEY_RE = re.compile(r"^\d{4}-W\d{2}$")

UTC = timezone.utc


def now_utc() -> datetime:
    """Current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def now_local(user_timezone: Optional[str] = None) -> datetime:
    """
    Get the current time as the user sees it.

    Args:
        user_timezone: IANA timezone name; None uses the machine's local time

    Returns:
        datetime: timezone-aware when user_timezone is given, naive local otherwise
    """
    if user_timezone:
        return datetime.now(ZoneInfo(user_timezone))
    return datetime.now()


def to_local(now: datetime, user_timezone: Optional[str] = None) -> datetime:
    """
    Express an instant on the user's wall clock.

    Naive datetimes are already wall-clock values and are returned unchanged.
    """
    if user_timezone and now.tzinfo is not None:
        return now.astimezone(ZoneInfo(user_timezone))
    return now


def to_date_key(now: datetime, user_timezone: Optional[str] = None) -> str:
    """
    Calendar date string (YYYY-MM-DD) of the instant.

    Example:
        >>> to_date_key(datetime(2026, 1, 20, 9, 0))
        '2026-01-20'
    """
    return to_local(now, user_timezone).date().isoformat()


def iso_week(day: date) -> tuple[int, int]:
    """ISO (year, week): Monday-start, week 1 contains the year's first Thursday."""
    iso = day.isocalendar()
    return iso[0], iso[1]


def to_week_key(now: datetime, user_timezone: Optional[str] = None) -> str:
    """
    ISO week key of the instant, e.g. "2026-W04".

    The ISO year is part of the key so the same week number in a later year
    never compares equal.
    """
    year, week = iso_week(to_local(now, user_timezone).date())
    return f"{year}-W{week:02d}"


def is_valid_date_key(value: object) -> bool:
    if not isinstance(value, str) or not DATE_KEY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_week_key(value: object) -> bool:
    return isinstance(value, str) and bool(WEEK_KEY_RE.match(value))


def previous_day_key(day_key: str) -> str:
    return (date.fromisoformat(day_key) - timedelta(days=1)).isoformat()


def trailing_date_keys(today_key: str, days: int = 7) -> list[str]:
    """Date keys for the last `days` days, oldest first, ending with today."""
    today = date.fromisoformat(today_key)
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def to_total_minutes(hour: int, minute: int) -> int:
    return hour * 60 + minute


def add_minutes(hour: int, minute: int, duration: int) -> tuple[int, int]:
    """Add minutes to a wall-clock time, wrapping past midnight."""
    total = to_total_minutes(hour, minute) + duration
    return (total // 60) % 24, total % 60


def to_24_hour(hour12: int, meridiem: str) -> int:
    """Convert a 1-12 clock hour plus "AM"/"PM" to 0-23."""
    hour12 = hour12 % 12
    return hour12 + 12 if meridiem.upper() == "PM" else hour12


def to_12_hour(hour: int) -> tuple[int, str]:
    meridiem = "AM" if hour < 12 else "PM"
    hour12 = hour % 12
    return (12 if hour12 == 0 else hour12), meridiem


def format_hour(hour: int) -> str:
    """Hour label for the grid, e.g. "12 AM", "9 AM", "3 PM"."""
    hour12, meridiem = to_12_hour(hour)
    return f"{hour12} {meridiem}"


def format_time_slot(hour: int, minute: int) -> str:
    """Time label, e.g. "9:05 AM"."""
    hour12, meridiem = to_12_hour(hour)
    return f"{hour12}:{minute:02d} {meridiem}"
