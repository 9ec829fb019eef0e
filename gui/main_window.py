"""
Main Window for Calendar View.

Hosts the calendar widget, loads events from the configured ICS
subscriptions for the visible range, and wires keyboard shortcuts.
"""

import logging
from datetime import date
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QStatusBar, QApplication
from PySide6.QtCore import QTimer
from PySide6.QtGui import QKeySequence, QShortcut

from backend.accessors import accessor
from backend.config import Config
from backend.ics_subscription import ICSSubscriptionManager
from backend.move import Clock
from .widgets.calendar_widget import CalendarWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window.

    Features:
    - Calendar widget with toolbar and month/week/day/agenda views
    - Events from ICS subscriptions, reloaded when the visible range changes
    - Keyboard shortcuts for previous/next/today
    """

    def __init__(self, config: Config, now: Clock = None, components: Optional[dict] = None, parent=None):
        super().__init__(parent)
        self.config = config

        self._subscriptions = ICSSubscriptionManager()
        for sub in config.ics_subscriptions:
            self._subscriptions.add_subscription(sub.name, sub.url, sub.color)

        # Auto-refresh timer
        self._auto_refresh_timer = QTimer(self)
        self._auto_refresh_timer.timeout.connect(self._on_auto_refresh)

        self._setup_window()
        self._setup_ui(now, components)
        self._setup_shortcuts()
        self._setup_statusbar()

        self._refresh_events()

        # Start auto-refresh timer if interval > 0
        if config.refresh_interval > 0 and config.ics_subscriptions:
            self._auto_refresh_timer.start(config.refresh_interval * 1000)  # Convert to milliseconds
            logger.debug("Auto-refresh enabled every %d seconds", config.refresh_interval)

    def _setup_window(self):
        """Configure main window properties."""
        self.setWindowTitle(self.config.labels.window_title)
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

    def _setup_ui(self, now: Clock, components: Optional[dict]):
        """Set up the main UI layout."""
        self._calendar_widget = CalendarWidget(self.config, components=components, now=now)
        self._calendar_widget.range_changed.connect(self._on_range_changed)
        self._calendar_widget.event_selected.connect(self._on_event_selected)
        self._calendar_widget.slot_selected.connect(self._on_slot_selected)
        self.setCentralWidget(self._calendar_widget)

    def _setup_shortcuts(self):
        """Set up keyboard shortcuts from config bindings."""
        bindings = self.config.bindings
        for key, handler in (
            (bindings.prev, self._calendar_widget.go_previous),
            (bindings.next, self._calendar_widget.go_next),
            (bindings.today, self._calendar_widget.go_today),
        ):
            if key:
                shortcut = QShortcut(QKeySequence(key), self)
                shortcut.activated.connect(handler)

    def _setup_statusbar(self):
        """Set up the status bar."""
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("Ready")

    @property
    def calendar_widget(self) -> CalendarWidget:
        return self._calendar_widget

    def _refresh_events(self, force_fetch: bool = False):
        """Reload events for the visible range."""
        if not self.config.ics_subscriptions:
            return
        self._statusbar.showMessage("Loading events...")
        QApplication.processEvents()

        start, end = self._calendar_widget.get_date_range()
        events = self._subscriptions.get_events(start, end, force_fetch=force_fetch)
        self._calendar_widget.set_events(events)

        errors = [sub.error for sub in self._subscriptions.get_all_subscriptions() if sub.error]
        if errors:
            self._statusbar.showMessage(errors[0])
        else:
            self._statusbar.showMessage(f"Loaded {len(events)} events", 3000)

    def _on_range_changed(self, first: date, last: date):
        logger.debug("Visible range changed: %s - %s", first, last)
        self._refresh_events()

    def _on_auto_refresh(self):
        logger.debug("Auto-refresh triggered")
        self._refresh_events(force_fetch=True)

    def _on_event_selected(self, event):
        title = accessor(event, self.config.accessors.title, "")
        self._statusbar.showMessage(str(title))

    def _on_slot_selected(self, slot_info):
        self._statusbar.showMessage(f"{slot_info.start:%Y/%m/%d} selected", 3000)

    def current_date(self) -> Optional[date]:
        return self._calendar_widget.get_current_date()
