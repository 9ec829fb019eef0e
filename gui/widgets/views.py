"""
View renderers: Month, Week, Day and Agenda.

Renderers only display the range and events they are given and report
user interactions through signals; navigation decisions are made by the
CalendarWidget's controller.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta, time as dt_time

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
    QFrame, QPushButton, QListWidget, QListWidgetItem, QScrollArea
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent

from backend.accessors import accessor
from backend.config import (
    AccessorsConfig, FormatsConfig, LabelsConfig, LocalizationConfig
)
from backend.dates import SUNDAY
from backend.move import Navigate
from backend.navigation import SlotInfo
from backend.timezone_utils import to_local_date


@dataclass
class RenderContext:
    """Settings shared by all renderers of one calendar."""
    formats: FormatsConfig = field(default_factory=FormatsConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    accessors: AccessorsConfig = field(default_factory=AccessorsConfig)
    week_start: int = SUNDAY


def event_days(event, accessors: AccessorsConfig) -> tuple[date, date]:
    """First and last local day an event covers."""
    start = to_local_date(accessor(event, accessors.start))
    end = accessor(event, accessors.end) or accessor(event, accessors.start)
    end_day = to_local_date(end)
    # All-day events end at midnight of the next day
    if end_day > start and (accessor(event, accessors.all_day) or _is_midnight(end)):
        end_day = end_day - timedelta(days=1)
    return start, end_day


def _is_midnight(value) -> bool:
    return isinstance(value, datetime) and value.time() == dt_time.min


def events_on_day(events: list, day: date, accessors: AccessorsConfig) -> list:
    """Events that cover the given day."""
    result = []
    for event in events:
        first, last = event_days(event, accessors)
        if first <= day <= last:
            result.append(event)
    return result


def event_text(event, context: RenderContext) -> str:
    title = str(accessor(event, context.accessors.title, ""))
    if accessor(event, context.accessors.all_day):
        return title
    start = accessor(event, context.accessors.start)
    if isinstance(start, datetime):
        return f"{start.strftime(context.formats.time_format)} {title}"
    return title


class BaseView(QWidget):
    """Interface shared by the view renderers."""

    navigate_requested = Signal(str, object)  # action, date
    header_clicked = Signal(object)           # date
    event_selected = Signal(object)           # event record
    slot_selected = Signal(object)            # SlotInfo

    def __init__(self, context: RenderContext, parent=None):
        super().__init__(parent)
        self._context = context
        self._current: date = date.today()
        self._first: date = self._current
        self._last: date = self._current
        self._events: list = []

    def set_range(self, current: date, first: date, last: date):
        self._current = current
        self._first = first
        self._last = last
        self.refresh()

    def set_events(self, events: list):
        self._events = list(events)
        self.refresh()

    def days(self) -> list[date]:
        count = (self._last - self._first).days + 1
        return [self._first + timedelta(days=i) for i in range(count)]

    def refresh(self):
        raise NotImplementedError

    def _select_day(self, day: date):
        start = datetime.combine(day, dt_time.min)
        self.slot_selected.emit(SlotInfo(start, start + timedelta(days=1), [day]))

    def _event_button(self, event, parent=None) -> QPushButton:
        button = QPushButton(event_text(event, self._context), parent)
        button.setFlat(True)
        button.setCursor(Qt.PointingHandCursor)
        button.setStyleSheet("text-align: left; padding: 1px 4px;")
        color = accessor(event, self._context.accessors.color)
        if color:
            button.setStyleSheet(f"text-align: left; padding: 1px 4px; border-left: 3px solid {color};")
        button.clicked.connect(lambda checked=False, e=event: self.event_selected.emit(e))
        return button


class DayCell(QFrame):
    """A day with a clickable heading and its events."""

    header_clicked = Signal(object)
    clicked = Signal(object)
    double_clicked = Signal(object)

    def __init__(self, day: date, heading: str, dimmed: bool = False, parent=None):
        super().__init__(parent)
        self._day = day
        self.setFrameStyle(QFrame.Box | QFrame.Plain)
        if dimmed:
            self.setStyleSheet("background-color: #f5f5f5; color: #999999;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(2, 2, 2, 2)
        self._layout.setSpacing(1)

        self.header_button = QPushButton(heading)
        self.header_button.setFlat(True)
        self.header_button.setCursor(Qt.PointingHandCursor)
        self.header_button.clicked.connect(lambda: self.header_clicked.emit(self._day))
        self._layout.addWidget(self.header_button)
        self._layout.setAlignment(Qt.AlignTop)

    @property
    def day(self) -> date:
        return self._day

    def add_widget(self, widget: QWidget):
        self._layout.addWidget(widget)

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self._day)
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.double_clicked.emit(self._day)
        super().mouseDoubleClickEvent(event)


class MonthView(BaseView):
    """Month view showing a six-week grid of day cells."""

    def __init__(self, context: RenderContext, parent=None):
        super().__init__(context, parent)
        self._cells: list[DayCell] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(0, 0, 0, 0)
        header_layout.setSpacing(1)
        self._header_labels = []
        for i in range(7):
            weekday = (context.week_start + i) % 7
            label = QLabel(context.localization.get_day_name(weekday))
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet("font-weight: bold; padding: 4px;")
            header_layout.addWidget(label, 1)
            self._header_labels.append(label)
        layout.addWidget(header)

        grid_widget = QWidget()
        self._grid_layout = QGridLayout(grid_widget)
        self._grid_layout.setContentsMargins(0, 0, 0, 0)
        self._grid_layout.setSpacing(1)
        for col in range(7):
            self._grid_layout.setColumnStretch(col, 1)
        layout.addWidget(grid_widget, 1)

    def cells(self) -> list[DayCell]:
        return list(self._cells)

    def refresh(self):
        for cell in self._cells:
            self._grid_layout.removeWidget(cell)
            cell.hide()
            cell.deleteLater()
        self._cells.clear()

        context = self._context
        for i, day in enumerate(self.days()[:42]):
            heading = context.localization.format(day, context.formats.date_format)
            cell = DayCell(day, heading, dimmed=day.month != self._current.month)
            cell.header_clicked.connect(self.header_clicked.emit)
            cell.clicked.connect(self._select_day)
            cell.double_clicked.connect(
                lambda d: self.navigate_requested.emit(Navigate.DATE.value, d))
            for event in events_on_day(self._events, day, context.accessors):
                cell.add_widget(self._event_button(event, cell))
            self._grid_layout.addWidget(cell, i // 7, i % 7)
            self._cells.append(cell)


class DayColumnsView(BaseView):
    """Side-by-side day columns; base of the week and day views."""

    def __init__(self, context: RenderContext, parent=None):
        super().__init__(context, parent)
        self._cells: list[DayCell] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        container = QWidget()
        self._columns_layout = QHBoxLayout(container)
        self._columns_layout.setContentsMargins(0, 0, 0, 0)
        self._columns_layout.setSpacing(1)
        scroll.setWidget(container)
        layout.addWidget(scroll)

    def cells(self) -> list[DayCell]:
        return list(self._cells)

    def refresh(self):
        for cell in self._cells:
            self._columns_layout.removeWidget(cell)
            cell.hide()
            cell.deleteLater()
        self._cells.clear()

        context = self._context
        today = date.today()
        for day in self.days():
            heading = context.localization.format(day, context.formats.day_format)
            cell = DayCell(day, heading)
            if day == today:
                cell.header_button.setStyleSheet("font-weight: bold; color: #1976d2;")
            cell.header_clicked.connect(self.header_clicked.emit)
            cell.clicked.connect(self._select_day)
            day_events = events_on_day(self._events, day, context.accessors)
            # All-day events first
            day_events.sort(key=lambda e: not accessor(e, context.accessors.all_day))
            for event in day_events:
                cell.add_widget(self._event_button(event, cell))
            self._columns_layout.addWidget(cell, 1)
            self._cells.append(cell)


class WeekView(DayColumnsView):
    """Week view: seven day columns."""


class DayView(DayColumnsView):
    """Day view: a single day column (or the view's span of days)."""


class AgendaView(BaseView):
    """Agenda view listing events grouped by day."""

    def __init__(self, context: RenderContext, parent=None):
        super().__init__(context, parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._list = QListWidget()
        self._list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._list)

    def list_widget(self) -> QListWidget:
        return self._list

    def refresh(self):
        self._list.clear()
        context = self._context
        found = False
        for day in self.days():
            day_events = events_on_day(self._events, day, context.accessors)
            if not day_events:
                continue
            found = True
            heading = QListWidgetItem(context.localization.format(day, context.formats.agenda_date_format))
            heading.setFlags(Qt.ItemIsEnabled)
            font = heading.font()
            font.setBold(True)
            heading.setFont(font)
            self._list.addItem(heading)
            for event in day_events:
                text = event_text(event, context)
                if accessor(event, context.accessors.all_day):
                    text = f"{context.labels.all_day}  {text}"
                item = QListWidgetItem(f"    {text}")
                item.setData(Qt.UserRole, event)
                self._list.addItem(item)
        if not found:
            empty = QListWidgetItem(context.labels.no_events)
            empty.setFlags(Qt.NoItemFlags)
            self._list.addItem(empty)

    def _on_item_clicked(self, item: QListWidgetItem):
        event = item.data(Qt.UserRole)
        if event is not None:
            self.event_selected.emit(event)
