"""
Calendar View GUI Module

PySide6-based graphical interface for the calendar view.
"""

from .main_window import MainWindow

__all__ = ['MainWindow']
