"""
Configuration parser for Calendar View.

Handles TOML file parsing into the settings consumed by the navigation
core (views, initial date and view, culture) and the settings passed
through to the widgets (labels, formats, bindings, accessors, event
subscriptions).
"""

import tomllib
import os
import logging
from datetime import date
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .dates import Unit
from .views import DEFAULT_VIEWS, View, ViewDescriptor, InvalidView

logger = logging.getLogger(__name__)


@dataclass
class ICSSubscription:
    """Configuration for a read-only ICS subscription (URL or local file)."""
    name: str
    url: str
    color: str = ""


@dataclass
class BindingsConfig:
    """Configuration for keyboard bindings."""
    next: str = "Right"   # Key to go to next period
    prev: str = "Left"    # Key to go to previous period
    today: str = "T"      # Key to jump to today


@dataclass
class FormatsConfig:
    """strftime patterns used by the toolbar label and renderers."""
    date_format: str = "%d"                 # Day number in month cells
    day_format: str = "%a %d"               # Week and day column headings
    day_header: str = "%A %B %d, %Y"        # Toolbar label in day view
    week_header: str = "%b %d"              # Toolbar label in week view (start - end)
    month_header: str = "%B %Y"             # Toolbar label in month view
    agenda_header: str = "%b %d"            # Toolbar label in agenda view (start - end)
    agenda_date_format: str = "%a %b %d"
    time_format: str = "%H:%M"


@dataclass
class LabelsConfig:
    """Configuration for UI labels."""
    window_title: str = "Calendar View"
    previous: str = "◀"
    next: str = "▶"
    today: str = "Today"
    month: str = "Month"
    week: str = "Week"
    day: str = "Day"
    agenda: str = "Agenda"
    all_day: str = "All day"
    no_events: str = "No events"

    def view_label(self, view) -> str:
        """Toolbar label for a view; custom views show their identifier."""
        name = view.value if isinstance(view, View) else str(view)
        return getattr(self, name, None) if name in {v.value for v in View} else name


@dataclass
class AccessorsConfig:
    """Names of the event record fields read by the renderers."""
    title: str = "title"
    start: str = "start"
    end: str = "end"
    all_day: str = "all_day"
    color: str = "color"


@dataclass
class LocalizationConfig:
    """Configuration for localized day and month names."""
    # Default to English abbreviated day names
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun
    # Default to English full month names
    month_names: list[str] = None  # January February ... December

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        if self.month_names is None:
            self.month_names = [
                "January", "February", "March", "April", "May", "June",
                "July", "August", "September", "October", "November", "December"
            ]

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def get_month_name(self, month: int) -> str:
        """Get localized month name (1=January, 12=December)."""
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""

    def format(self, value: date, pattern: str) -> str:
        """strftime with %a/%A and %b/%B replaced by the localized names."""
        day_name = self.get_day_name(value.weekday())
        month_name = self.get_month_name(value.month)
        pattern = (pattern
                   .replace("%A", day_name).replace("%a", day_name)
                   .replace("%B", month_name).replace("%b", month_name[:3]))
        return value.strftime(pattern)


@dataclass
class Config:
    """Main configuration container for Calendar View."""

    views: list[str] = field(default_factory=lambda: [v.value for v in DEFAULT_VIEWS])
    default_view: Optional[str] = None
    default_date: Optional[date] = None
    culture: Optional[str] = None
    timezone: str = "UTC"
    toolbar: bool = True
    agenda_length: int = 1
    refresh_interval: int = 300  # Auto-refresh interval in seconds (0 to disable)
    bindings: BindingsConfig = field(default_factory=BindingsConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    formats: FormatsConfig = field(default_factory=FormatsConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    accessors: AccessorsConfig = field(default_factory=AccessorsConfig)
    ics_subscriptions: list[ICSSubscription] = field(default_factory=list)

    def __post_init__(self):
        # Names other than the built-in views are custom views; their
        # renderers come from the host (CalendarWidget components)
        invalid = [name for name in self.views if not isinstance(name, str) or not name]
        if invalid:
            raise ValueError(f"View names must be non-empty strings: {invalid!r}")
        if len(set(self.views)) != len(self.views):
            raise ValueError(f"Duplicate views in configuration: {self.views!r}")
        if not self.views:
            raise ValueError("At least one view must be configured")
        if self.default_view is not None and self.default_view not in self.views:
            raise InvalidView(self.default_view, self.views)
        if self.agenda_length < 1:
            raise ValueError(f"agenda_length must be at least 1, got {self.agenda_length}")

    def view_set(self):
        """
        Views in the form the navigation core consumes.

        A plain ordered list, or an ordered mapping when the agenda view
        needs a span other than one day.
        """
        if self.agenda_length == 1 or View.AGENDA.value not in self.views:
            return list(self.views)
        return {
            name: (ViewDescriptor(View.AGENDA, Unit.DAY, span=self.agenda_length)
                   if name == View.AGENDA.value else True)
            for name in self.views
        }

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'calendar-view' / 'calendar-view.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from parsed TOML data."""
        # Parse General section
        general = data.get('General', {})
        default_date = general.get('default_date')
        if isinstance(default_date, str):
            default_date = date.fromisoformat(default_date)

        # Parse ICS subscriptions
        # Supports both [Subscription.Name] and [Subscription] with nested sub-tables
        ics_subscriptions = []
        for key, value in data.items():
            # Format 1: [Subscription.Name]
            if key.startswith('Subscription.') and isinstance(value, dict):
                sub_id = key.split('.', 1)[1]
                logger.debug("Found ICS subscription (dot format): %s", sub_id)
                ics_subscriptions.append(_subscription(sub_id, value))

            # Format 2: [Subscription] with nested [Subscription.Name] sub-tables
            elif key == 'Subscription' and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict):
                        logger.debug("Found ICS subscription (nested format): %s", sub_key)
                        ics_subscriptions.append(_subscription(sub_key, sub_value))

        used_colors = [sub.color for sub in ics_subscriptions if sub.color]
        for sub in ics_subscriptions:
            if not sub.color:
                sub.color = get_next_color(used_colors)
                used_colors.append(sub.color)

        logger.debug("Total ICS subscriptions found: %d", len(ics_subscriptions))

        # Parse Localization section
        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        month_names_str = localization_data.get('month_names', '')
        localization = LocalizationConfig(
            day_names=day_names_str.split() if day_names_str else None,
            month_names=month_names_str.split() if month_names_str else None
        )

        return cls(
            views=list(general.get('views', [v.value for v in DEFAULT_VIEWS])),
            default_view=general.get('default_view'),
            default_date=default_date,
            culture=general.get('culture'),
            timezone=general.get('timezone', 'UTC'),
            toolbar=general.get('toolbar', True),
            agenda_length=general.get('agenda_length', 1),
            refresh_interval=general.get('refresh_interval', 300),
            bindings=_section(BindingsConfig, data.get('Bindings', {})),
            localization=localization,
            formats=_section(FormatsConfig, data.get('Formats', {})),
            labels=_section(LabelsConfig, data.get('Labels', {})),
            accessors=_section(AccessorsConfig, data.get('Accessors', {})),
            ics_subscriptions=ics_subscriptions
        )


def _subscription(sub_id: str, value: dict) -> ICSSubscription:
    return ICSSubscription(
        name=value.get('name', sub_id),
        url=value.get('url', ''),
        color=value.get('color', '')
    )


def _section(section_cls, values: dict):
    """Build a flat string section, keeping defaults for missing keys."""
    known = section_cls.__dataclass_fields__
    for key in values:
        if key not in known:
            logger.warning("Ignoring unknown %s key: %s", section_cls.__name__, key)
    return section_cls(**{k: v for k, v in values.items() if k in known})


# Colors palette for auto-assignment to calendars
CALENDAR_COLORS = [
    '#4285f4',  # Blue
    '#34a853',  # Green
    '#ea4335',  # Red
    '#fbbc05',  # Yellow
    '#9c27b0',  # Purple
    '#00bcd4',  # Cyan
    '#ff5722',  # Deep Orange
    '#607d8b',  # Blue Grey
    '#e91e63',  # Pink
    '#3f51b5',  # Indigo
]


def get_next_color(used_colors: list[str]) -> str:
    """Get the next available color from the palette."""
    for color in CALENDAR_COLORS:
        if color.lower() not in [c.lower() for c in used_colors]:
            return color
    # If all colors are used, cycle back
    return CALENDAR_COLORS[len(used_colors) % len(CALENDAR_COLORS)]
