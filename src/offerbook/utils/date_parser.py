"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2025-01-05", "January 5, 2025", etc.
    - Relative dates: "today", "yesterday", "last sunday", "this sunday"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str in ("sunday", "this sunday"):
        return most_recent_sunday(today)

    if date_str == "last sunday":
        # The Sunday strictly before today
        return most_recent_sunday(today - timedelta(days=1))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def most_recent_sunday(today: date | None = None) -> date:
    """Return the latest Sunday on or before ``today``.

    Offerings are collected on Sundays, so this is the default entry date.
    """
    today = today or date.today()
    # Monday is 0, Sunday is 6
    days_since_sunday = (today.weekday() + 1) % 7
    return today - timedelta(days=days_since_sunday)


def get_month_range(year: int, month: int) -> tuple[date, date]:
    """Get first and last day of a month.

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    start_date = date(year, month, 1)
    end_date = start_date + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date)


def get_year_range(year: int) -> tuple[date, date]:
    """Get January 1 and December 31 of a year."""
    return (date(year, 1, 1), date(year, 12, 31))


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    prev = date(year, month, 1) - relativedelta(months=1)
    return (prev.year, prev.month)
