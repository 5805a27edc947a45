"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser

SHORT_DATE_PATTERN = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{2})\s*$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", etc.) and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_short_date(date_str: str) -> date:
    """Parse an operator-typed D/M/YY date.

    Two-digit years map to 2000 + YY.

    Raises:
        ValueError: If the string is not D/M/YY, the day or month is out of
            range, or the date does not exist in the calendar
    """
    match = SHORT_DATE_PATTERN.match(date_str)
    if match is None:
        raise ValueError(f"Invalid date format - use DD/MM/YY: '{date_str}'")

    day, month, year = (int(part) for part in match.groups())
    if not 1 <= day <= 31:
        raise ValueError(f"Invalid day {day} in date '{date_str}'")
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month} in date '{date_str}'")

    try:
        return date(2000 + year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str}': {e}")
