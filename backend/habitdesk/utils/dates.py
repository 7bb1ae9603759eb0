"""
Date Utilities - Calendar-day helpers
All dates are YYYY-MM-DD strings with no time component
"""
from datetime import date, datetime, timedelta
from typing import List, Optional
import re

import pytz

from habitdesk.core.config import settings
from habitdesk.core.constants import DATE_FORMAT
from habitdesk.core.exceptions import FormatError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def get_app_tz():
    """
    Get the configured application timezone

    Returns:
        pytz timezone, or None to use the server's local time zone
    """
    if not settings.APP_TIMEZONE:
        return None
    return pytz.timezone(settings.APP_TIMEZONE)


def get_now() -> datetime:
    """
    Get the current datetime in the application timezone

    Returns:
        Timezone-aware datetime when APP_TIMEZONE is set, naive local time otherwise
    """
    tz = get_app_tz()
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def today() -> str:
    """Today's date as YYYY-MM-DD"""
    return format_date(get_now().date())


def yesterday() -> str:
    """Yesterday's date as YYYY-MM-DD"""
    return format_date(get_now().date() - timedelta(days=1))


def parse_date(s: str) -> date:
    """
    Parse a YYYY-MM-DD string

    Args:
        s: Date string

    Returns:
        date object

    Raises:
        FormatError: If the string is not a valid YYYY-MM-DD date
    """
    if not isinstance(s, str) or not _DATE_PATTERN.match(s):
        raise FormatError(f"Invalid date '{s}'. Use YYYY-MM-DD")
    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError:
        raise FormatError(f"Invalid date '{s}'. Use YYYY-MM-DD")


def shift_date(s: str, days: int) -> str:
    """Move a date string by a number of days (negative goes back)"""
    return format_date(parse_date(s) + timedelta(days=days))


def days_between(start: str, end: str) -> int:
    """
    Number of days from start to end

    Returns 0 when end is earlier than start.

    Raises:
        FormatError: If either date is malformed
    """
    days = (parse_date(end) - parse_date(start)).days
    return max(days, 0)


def dates_in_range(start: str, end: str) -> List[str]:
    """
    All date strings from start to end, inclusive and in order

    Returns an empty list when end is earlier than start.

    Raises:
        FormatError: If either bound is malformed
    """
    current = parse_date(start)
    last = parse_date(end)

    out = []
    while current <= last:
        out.append(format_date(current))
        current += timedelta(days=1)
    return out


def resolve_today(day: Optional[str] = None) -> str:
    """Return day if given, otherwise today's date string"""
    return day if day is not None else today()
