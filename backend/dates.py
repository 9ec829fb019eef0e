"""
Date arithmetic for calendar navigation.

Comparison of dates at day/week/month granularity, start-of-week lookup
for a culture tag, and month arithmetic with end-of-month clamping.
Weekdays use Python's numbering (Monday=0 ... Sunday=6).
"""

import calendar
from datetime import datetime, date, timedelta
from enum import Enum
from typing import Optional, Union


MONDAY = 0
SATURDAY = 5
SUNDAY = 6

DateLike = Union[date, datetime]


class Unit(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Territories whose weeks start on a day other than Monday (CLDR firstDay).
_SUNDAY_TERRITORIES = {
    "AG", "AS", "AU", "BD", "BR", "BS", "BT", "BW", "BZ", "CA", "CN", "CO",
    "DM", "DO", "ET", "GT", "GU", "HK", "HN", "ID", "IL", "IN", "JM", "JP",
    "KE", "KH", "KR", "LA", "MH", "MM", "MO", "MT", "MX", "MZ", "NI", "NP",
    "PA", "PE", "PH", "PK", "PR", "PT", "PY", "SA", "SG", "SV", "TH", "TT",
    "TW", "UM", "US", "VE", "VI", "WS", "YE", "ZA", "ZW",
}
_SATURDAY_TERRITORIES = {
    "AE", "AF", "BH", "DJ", "DZ", "EG", "IQ", "IR", "JO", "KW", "LY", "OM",
    "QA", "SD", "SY",
}

# Default territory for bare language tags.
_LANGUAGE_TERRITORIES = {
    "ar": "EG", "bg": "BG", "cs": "CZ", "da": "DK", "de": "DE", "el": "GR",
    "en": "US", "es": "ES", "fa": "IR", "fi": "FI", "fr": "FR", "he": "IL",
    "hi": "IN", "hu": "HU", "id": "ID", "it": "IT", "ja": "JP", "ko": "KR",
    "nb": "NO", "nl": "NL", "pl": "PL", "pt": "BR", "ro": "RO", "ru": "RU",
    "sv": "SE", "th": "TH", "tr": "TR", "uk": "UA", "vi": "VN", "zh": "CN",
}


def start_of_week(culture: Optional[str] = None) -> int:
    """
    Get the weekday on which weeks begin for a culture tag.

    Accepts tags like "en-US", "de_DE", "zh-Hant-TW" or a bare language
    such as "fr". Unknown or missing cultures start weeks on Sunday.
    """
    if not culture:
        return SUNDAY

    parts = culture.replace("_", "-").split(".")[0].split("-")
    territory = None
    for part in parts[1:]:
        if len(part) == 2 and part.isalpha():
            territory = part.upper()
            break
    if territory is None:
        territory = _LANGUAGE_TERRITORIES.get(parts[0].lower())
    if territory is None:
        return SUNDAY

    if territory in _SUNDAY_TERRITORIES:
        return SUNDAY
    if territory in _SATURDAY_TERRITORIES:
        return SATURDAY
    return MONDAY


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of(value: DateLike, unit, week_start: int = SUNDAY) -> date:
    """First day of the unit containing value."""
    unit = Unit(unit)
    d = _as_date(value)
    if unit == Unit.DAY:
        return d
    if unit == Unit.WEEK:
        return d - timedelta(days=(d.weekday() - week_start) % 7)
    return d.replace(day=1)


def eq(a: DateLike, b: DateLike, unit, week_start: int = SUNDAY) -> bool:
    """Check whether two dates fall within the same day, week or month."""
    return start_of(a, unit, week_start) == start_of(b, unit, week_start)


def _relocalize(value: DateLike) -> DateLike:
    """
    Give a shifted pytz-aware datetime the UTC offset of its new wall time.

    Arithmetic on pytz datetimes keeps the old offset, which is an hour off
    once a DST change lies in between.
    """
    localize = getattr(getattr(value, "tzinfo", None), "localize", None)
    if localize is None:
        return value
    return localize(value.replace(tzinfo=None))


def add_months(value: DateLike, months: int) -> DateLike:
    """
    Shift by calendar months, keeping the day of month where it exists.

    Days past the end of the target month clamp to its last day, so
    Jan 31 + 1 month is Feb 28 (or 29). Wall-clock time and zone are kept.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return _relocalize(value.replace(year=year, month=month, day=day))


def add(value: DateLike, amount: int, unit) -> DateLike:
    """Shift value by amount days, weeks or months."""
    unit = Unit(unit)
    if unit == Unit.DAY:
        return _relocalize(value + timedelta(days=amount))
    if unit == Unit.WEEK:
        return _relocalize(value + timedelta(weeks=amount))
    return add_months(value, amount)


def visible_range(value: DateLike, unit, week_start: int = SUNDAY,
                  span: Optional[int] = None) -> tuple[date, date]:
    """
    Get the inclusive first and last day displayed for value.

    Returns:
        - Day granularity: the day itself, or span days starting at it
        - Week granularity: the week containing value
        - Month granularity: the six-week grid around the month
    """
    unit = Unit(unit)
    if unit == Unit.DAY:
        first = _as_date(value)
        return first, first + timedelta(days=max(span or 1, 1) - 1)
    if unit == Unit.WEEK:
        first = start_of(value, Unit.WEEK, week_start)
        return first, first + timedelta(days=6)
    first = start_of(start_of(value, Unit.MONTH), Unit.WEEK, week_start)
    return first, first + timedelta(days=41)
