import os
from datetime import date, datetime

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Saturday
NOW = datetime(2024, 6, 15, 10, 30)


class Recorder:
    """Collects host notifications in call order."""

    def __init__(self):
        self.calls = []

    def on_navigate(self, new_date, view):
        self.calls.append(("navigate", new_date, view))

    def on_view(self, view):
        self.calls.append(("view", view))

    def on_select_event(self, event):
        self.calls.append(("select_event", event))

    def on_select_slot(self, slot_info):
        self.calls.append(("select_slot", slot_info))

    def notifiers(self) -> dict:
        return {
            "on_navigate": self.on_navigate,
            "on_view": self.on_view,
            "on_select_event": self.on_select_event,
        }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def june_15():
    return date(2024, 6, 15)


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
