"""
Timezone utilities for the calendar view.

Provides the local clock used for "today" navigation and the conversions
needed to bucket event times into local calendar days.
"""

from datetime import datetime, date
import time as _time
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """Set the local timezone for the application."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Returns:
        pytz timezone object for the configured local timezone.
    """
    try:
        return pytz.timezone(_local_timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback: try system timezone name
        try:
            return pytz.timezone(_time.tzname[0])
        except pytz.UnknownTimeZoneError:
            # Last resort: calculate offset and use fixed offset timezone
            if _time.localtime().tm_isdst:
                offset_seconds = -_time.altzone
            else:
                offset_seconds = -_time.timezone
            return pytz.FixedOffset(offset_seconds // 60)


def now_local() -> datetime:
    """Current moment in the configured local timezone."""
    return datetime.now(get_local_timezone())


def to_local_datetime(dt: datetime) -> datetime:
    """
    Convert an aware datetime to local timezone.

    Naive datetimes are assumed to already be local and are returned unchanged.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(get_local_timezone())
    return dt


def to_local_date(value) -> date:
    """Local calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return to_local_datetime(value).date()
    return value
