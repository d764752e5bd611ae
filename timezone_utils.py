"""
Timezone Utility Functions
Application dates are stored as naive UTC; recruiters pick date ranges in
the application's local time zone (APP_TIMEZONE, Eastern by default).
"""
import os
from datetime import date, datetime, time

import pytz


UTC = pytz.UTC
DEFAULT_TIMEZONE = 'America/New_York'


def get_app_timezone(name=None):
    """
    Resolve the application time zone

    Args:
        name: Zone name such as 'Europe/Berlin' (defaults to APP_TIMEZONE)

    Returns:
        tzinfo: pytz time zone

    Raises:
        pytz.UnknownTimeZoneError: If the name is not a known zone
    """
    return pytz.timezone(name or os.environ.get('APP_TIMEZONE') or DEFAULT_TIMEZONE)


def ensure_utc(dt):
    """
    Make a datetime timezone-aware in UTC

    Args:
        dt: datetime object (naive values are assumed to be UTC)

    Returns:
        datetime: Aware UTC datetime, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def utc_to_local(utc_dt, tz):
    """Convert a UTC datetime (naive or aware) to the given zone"""
    if utc_dt is None:
        return None
    return ensure_utc(utc_dt).astimezone(tz)


def local_day_bounds(date_from, date_to, tz):
    """
    Turn an inclusive local date range into UTC instants.

    The start is midnight at the beginning of date_from and the end is the
    last microsecond of date_to, both in tz.

    Args:
        date_from: date or None (open start)
        date_to: date or None (open end)
        tz: pytz time zone the dates are expressed in

    Returns:
        tuple: (start, end) aware UTC datetimes; either may be None
    """
    start = end = None
    if date_from is not None:
        start = tz.localize(datetime.combine(date_from, time.min)).astimezone(UTC)
    if date_to is not None:
        end = tz.localize(datetime.combine(date_to, time.max)).astimezone(UTC)
    return start, end


def parse_iso_date(value):
    """
    Parse a YYYY-MM-DD string

    Returns:
        date or None for an empty value

    Raises:
        ValueError: If the value is not an ISO date
    """
    if value is None or isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return date.fromisoformat(value)
