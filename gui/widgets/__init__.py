"""
Calendar View GUI Widgets

Toolbar, view renderers and the calendar widget composing them.
"""

from .calendar_widget import CalendarWidget
from .toolbar import Toolbar
from .views import AgendaView, DayView, MonthView, WeekView

__all__ = ['CalendarWidget', 'Toolbar', 'MonthView', 'WeekView', 'DayView', 'AgendaView']
