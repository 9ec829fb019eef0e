"""
ICS Subscription handler for read-only calendar feeds.

Fetches raw VCALENDAR text from a URL or a local file and expands it into
event records for a visible date range using recurring_ical_events.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, date, timedelta
from pathlib import Path
from typing import Optional

import pytz
import requests
from icalendar import Calendar as ICalCalendar
from recurring_ical_events import of as recurring_events_of

from .timezone_utils import to_local_datetime

logger = logging.getLogger(__name__)


@dataclass
class EventData:
    """One event occurrence as handed to the calendar renderers."""
    uid: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    location: str = ""
    calendar: str = ""
    color: str = "#4285f4"


def _to_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def start_key(event: EventData) -> datetime:
    """
    Sort key ordering events by the moment they start.

    Aware starts are converted to local wall time; naive (all-day) starts
    already are local.
    """
    return to_local_datetime(event.start).replace(tzinfo=None)


def parse_events(ical_text: str, start: date, end: date,
                 calendar: str = "", color: str = "#4285f4") -> list[EventData]:
    """
    Expand the events of a VCALENDAR that overlap [start, end].

    Recurring events produce one record per occurrence. All-day events
    keep their exclusive end date as midnight of the following day.
    """
    vcal = ICalCalendar.from_ical(ical_text)
    occurrences = recurring_events_of(vcal).between(start, end + timedelta(days=1))

    events = []
    for occurrence in occurrences:
        dtstart = occurrence.get('DTSTART')
        if dtstart is None:
            continue
        start_val = dtstart.dt
        all_day = not isinstance(start_val, datetime)

        dtend = occurrence.get('DTEND')
        if dtend is not None:
            end_val = dtend.dt
        elif occurrence.get('DURATION') is not None:
            end_val = start_val + occurrence.get('DURATION').dt
        else:
            end_val = start_val + timedelta(days=1) if all_day else start_val

        summary = occurrence.get('SUMMARY')
        location = occurrence.get('LOCATION')
        events.append(EventData(
            uid=str(occurrence.get('UID', '')),
            title=str(summary) if summary else 'Untitled',
            start=_to_datetime(start_val),
            end=_to_datetime(end_val),
            all_day=all_day,
            location=str(location) if location else '',
            calendar=calendar,
            color=color,
        ))

    events.sort(key=start_key)
    return events


class ICSSubscription:
    """
    Handler for a read-only ICS calendar.

    The url may be an http(s) address or a path to a local .ics file.
    """

    def __init__(self, name: str, url: str, color: str = "#34a853"):
        self.name = name
        self.url = url
        self.color = color
        self.id = self._generate_id(url)

        self._raw_data: Optional[str] = None
        self._last_fetch: Optional[datetime] = None
        self._error: Optional[str] = None

    @staticmethod
    def _generate_id(url: str) -> str:
        """Generate a unique ID from the URL."""
        return hashlib.md5(url.encode()).hexdigest()[:12]

    @property
    def is_remote(self) -> bool:
        return self.url.startswith(('http://', 'https://'))

    def fetch(self, timeout: int = 30) -> bool:
        """
        Fetch the ICS data.

        Returns:
            True if successful, False otherwise (see error).
        """
        try:
            if self.is_remote:
                response = requests.get(
                    self.url,
                    timeout=timeout,
                    headers={
                        'User-Agent': 'Calendar-View/1.0',
                        'Accept': 'text/calendar'
                    }
                )
                response.raise_for_status()
                # Ensure proper UTF-8 decoding
                response.encoding = 'utf-8'
                self._raw_data = response.text
            else:
                self._raw_data = Path(self.url).expanduser().read_text(encoding='utf-8')
        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            logger.warning("Fetching %s failed: %s", self.name, self._error)
            return False
        except OSError as e:
            self._error = f"File error: {e}"
            logger.warning("Reading %s failed: %s", self.name, self._error)
            return False

        self._last_fetch = datetime.now(pytz.UTC)
        self._error = None
        return True

    def get_ical_text(self, force_fetch: bool = False, cache_seconds: int = 300) -> Optional[str]:
        """
        Get the raw VCALENDAR text, fetching when the cache is stale.

        Returns:
            Raw VCALENDAR text, or None if fetch failed.
        """
        should_fetch = (
            force_fetch or
            self._raw_data is None or
            self._last_fetch is None or
            (datetime.now(pytz.UTC) - self._last_fetch).total_seconds() > cache_seconds
        )

        if should_fetch:
            self.fetch()

        return self._raw_data

    def get_events(self, start: date, end: date, force_fetch: bool = False) -> list[EventData]:
        """Event occurrences overlapping the inclusive day range."""
        ical_text = self.get_ical_text(force_fetch=force_fetch)
        if ical_text is None:
            return []
        try:
            return parse_events(ical_text, start, end, calendar=self.name, color=self.color)
        except ValueError as e:
            self._error = f"Parse error: {e}"
            logger.warning("Parsing %s failed: %s", self.name, self._error)
            return []

    @property
    def last_fetch(self) -> Optional[datetime]:
        """Get the last fetch time."""
        return self._last_fetch

    @property
    def error(self) -> Optional[str]:
        """Get the last error message."""
        return self._error


class ICSSubscriptionManager:
    """Manager for multiple ICS subscriptions."""

    def __init__(self):
        self._subscriptions: dict[str, ICSSubscription] = {}

    def add_subscription(self, name: str, url: str, color: str = "#34a853") -> ICSSubscription:
        """Add a new subscription."""
        sub = ICSSubscription(name=name, url=url, color=color)
        self._subscriptions[sub.id] = sub
        return sub

    def get_all_subscriptions(self) -> list[ICSSubscription]:
        """Get all subscriptions."""
        return list(self._subscriptions.values())

    def get_events(self, start: date, end: date, force_fetch: bool = False) -> list[EventData]:
        """Events from all subscriptions, sorted by start time."""
        events = []
        for sub in self._subscriptions.values():
            events.extend(sub.get_events(start, end, force_fetch=force_fetch))
        events.sort(key=start_key)
        return events
