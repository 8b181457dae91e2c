"""
Time arithmetic helpers.
Minutes-of-day math, punch interval lengths, timezone conversions and
HH:MM formatting shared by the punch gate and the timesheet.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional
import pytz
from ..config import settings


def minutes_of_day(value) -> int:
    """
    Minutes elapsed since midnight for a time or datetime (seconds ignored).

    Args:
        value: time or datetime

    Returns:
        hour * 60 + minute
    """
    return value.hour * 60 + value.minute


def minutes_between(start: datetime, end: datetime) -> int:
    """
    Whole minutes from start to end, truncated toward zero.

    Args:
        start: Earlier instant
        end: Later instant

    Returns:
        Signed whole minutes
    """
    return int((end - start).total_seconds() / 60)


def floor_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, floored."""
    return int((end - start).total_seconds() // 60)


def utc_to_local(utc_datetime: datetime, timezone_str: Optional[str] = None) -> datetime:
    """
    Convert UTC datetime to local timezone.

    Args:
        utc_datetime: UTC datetime (naive values are taken as UTC)
        timezone_str: Timezone string (defaults to TZ_DEFAULT)

    Returns:
        Local datetime (timezone-aware)
    """
    tz = pytz.timezone(timezone_str or settings.tz_default)
    if utc_datetime.tzinfo is None:
        utc_dt = utc_datetime.replace(tzinfo=pytz.UTC)
    else:
        utc_dt = utc_datetime.astimezone(pytz.UTC)
    return utc_dt.astimezone(tz)


def local_day_bounds_utc(day: date, timezone_str: Optional[str] = None):
    """
    UTC instants for local midnight at the start of `day` and of the next day.

    Returns:
        (start_utc, end_utc) as timezone-aware datetimes, end exclusive
    """
    tz = pytz.timezone(timezone_str or settings.tz_default)
    start_local = tz.localize(datetime.combine(day, time.min))
    end_local = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return start_local.astimezone(pytz.UTC), end_local.astimezone(pytz.UTC)


def format_minutes(minutes: int) -> str:
    """HH:MM for a non-negative duration; '-' for zero."""
    if minutes == 0:
        return "-"
    minutes = abs(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_balance(minutes: int) -> str:
    """Signed HH:MM for a balance (e.g. +00:05, -08:00)."""
    sign = "-" if minutes < 0 else "+"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"
