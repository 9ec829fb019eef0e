"""
Navigation toolbar: date label, Previous/Today/Next and view buttons.
"""

from datetime import date

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton, QButtonGroup, QFrame
from PySide6.QtCore import Signal
from PySide6.QtGui import QFont

from backend.config import FormatsConfig, LabelsConfig, LocalizationConfig
from backend.dates import Unit
from backend.move import Navigate
from backend.views import View, ViewDescriptor, view_key


def view_label(current: date, descriptor: ViewDescriptor, first: date, last: date,
               formats: FormatsConfig, localization: LocalizationConfig) -> str:
    """Toolbar text describing the range a view shows."""
    fmt = localization.format
    if descriptor.granularity == Unit.MONTH:
        return fmt(current, formats.month_header)
    if view_key(descriptor.name) == View.AGENDA.value:
        if first == last:
            return fmt(first, formats.agenda_header)
        return f"{fmt(first, formats.agenda_header)} - {fmt(last, formats.agenda_header)}"
    if descriptor.granularity == Unit.WEEK or first != last:
        return f"{fmt(first, formats.week_header)} - {fmt(last, formats.week_header)}"
    return fmt(current, formats.day_header)


class Toolbar(QWidget):
    """Toolbar driving a CalendarWidget."""

    navigate_requested = Signal(str)  # Navigate value
    view_requested = Signal(str)      # view identifier

    def __init__(self, view_names: list, labels: LabelsConfig = None, parent=None):
        super().__init__(parent)
        self._labels = labels or LabelsConfig()
        self._view_buttons: dict[str, QPushButton] = {}
        self._setup_ui(view_names)

    def _setup_ui(self, view_names: list):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        # Navigation buttons
        self._prev_btn = QPushButton(self._labels.previous)
        self._prev_btn.setToolTip("Previous")
        self._prev_btn.clicked.connect(lambda: self.navigate_requested.emit(Navigate.PREVIOUS.value))
        layout.addWidget(self._prev_btn)

        self._today_btn = QPushButton(self._labels.today)
        self._today_btn.clicked.connect(lambda: self.navigate_requested.emit(Navigate.TODAY.value))
        layout.addWidget(self._today_btn)

        self._next_btn = QPushButton(self._labels.next)
        self._next_btn.setToolTip("Next")
        self._next_btn.clicked.connect(lambda: self.navigate_requested.emit(Navigate.NEXT.value))
        layout.addWidget(self._next_btn)

        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        layout.addWidget(separator)

        self._date_label = QLabel()
        date_font = QFont(self._date_label.font())
        date_font.setBold(True)
        self._date_label.setFont(date_font)
        self._date_label.setMinimumWidth(200)
        layout.addWidget(self._date_label, 1)

        # View switcher, in configured order
        self._view_group = QButtonGroup(self)
        self._view_group.setExclusive(True)
        for name in view_names:
            key = view_key(name)
            button = QPushButton(self._labels.view_label(name))
            button.setCheckable(True)
            button.clicked.connect(lambda checked=False, k=key: self.view_requested.emit(k))
            self._view_group.addButton(button)
            layout.addWidget(button)
            self._view_buttons[key] = button

    def set_label(self, text: str):
        self._date_label.setText(text)

    def label(self) -> str:
        return self._date_label.text()

    def set_active_view(self, view):
        button = self._view_buttons.get(view_key(view))
        if button is not None:
            button.setChecked(True)

    def view_button(self, view) -> QPushButton:
        return self._view_buttons[view_key(view)]

    def nav_button(self, action) -> QPushButton:
        return {
            Navigate.PREVIOUS: self._prev_btn,
            Navigate.TODAY: self._today_btn,
            Navigate.NEXT: self._next_btn,
        }[Navigate(action)]
