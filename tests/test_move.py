from datetime import date, datetime, timedelta

import pytest
import pytz

from backend.dates import Unit
from backend.move import Navigate, move_date
from backend.views import DEFAULT_VIEWS, View, ViewDescriptor

from conftest import NOW

DATES = [date(2024, 1, 31), date(2024, 2, 29), date(2024, 6, 15), datetime(2024, 12, 31, 23, 30)]


@pytest.mark.parametrize("reference", DATES)
@pytest.mark.parametrize("view", DEFAULT_VIEWS + ["timeline"])
def test_today_ignores_reference(reference, view):
    assert move_date(Navigate.TODAY, reference, view, now=NOW) == NOW


def test_today_accepts_clock():
    assert move_date("TODAY", date(2000, 1, 1), View.DAY, now=lambda: NOW) == NOW


def test_today_defaults_to_local_clock():
    moved = move_date(Navigate.TODAY, date(2000, 1, 1), View.DAY)
    assert isinstance(moved, datetime)
    assert moved.tzinfo is not None


@pytest.mark.parametrize("view", DEFAULT_VIEWS)
def test_date_returns_reference(view):
    assert move_date(Navigate.DATE, date(2024, 6, 20), view) == date(2024, 6, 20)


class TestPreviousNext:
    def test_day(self):
        assert move_date(Navigate.NEXT, date(2024, 6, 15), View.DAY) == date(2024, 6, 16)
        assert move_date(Navigate.PREVIOUS, date(2024, 6, 1), View.DAY) == date(2024, 5, 31)

    def test_week(self):
        assert move_date(Navigate.NEXT, date(2024, 6, 15), View.WEEK) == date(2024, 6, 22)
        assert move_date(Navigate.PREVIOUS, date(2024, 6, 15), "week") == date(2024, 6, 8)

    def test_month(self):
        assert move_date(Navigate.NEXT, date(2024, 6, 15), View.MONTH) == date(2024, 7, 15)
        assert move_date(Navigate.PREVIOUS, date(2024, 1, 15), View.MONTH) == date(2023, 12, 15)

    def test_month_clamps_day(self):
        assert move_date(Navigate.NEXT, date(2024, 1, 31), View.MONTH) == date(2024, 2, 29)

    def test_agenda_defaults_to_one_day(self):
        assert move_date(Navigate.NEXT, date(2024, 6, 15), View.AGENDA) == date(2024, 6, 16)

    def test_descriptor_span(self):
        agenda = ViewDescriptor(View.AGENDA, Unit.DAY, span=30)
        work_week = ViewDescriptor("work_week", Unit.WEEK, span=5)
        assert move_date(Navigate.NEXT, date(2024, 6, 1), agenda) == date(2024, 7, 1)
        assert move_date(Navigate.PREVIOUS, date(2024, 6, 14), work_week) == date(2024, 6, 9)

    def test_unknown_view_steps_one_day(self):
        assert move_date(Navigate.NEXT, date(2024, 6, 15), "timeline") == date(2024, 6, 16)
        assert move_date(Navigate.NEXT, date(2024, 6, 15), ViewDescriptor("timeline")) == date(2024, 6, 16)

    def test_keeps_time_of_day(self):
        moved = move_date(Navigate.NEXT, datetime(2024, 6, 15, 10, 30), View.WEEK)
        assert moved == datetime(2024, 6, 22, 10, 30)


@pytest.mark.parametrize("reference", DATES)
@pytest.mark.parametrize("view", [View.DAY, View.WEEK])
def test_previous_then_next_round_trip(reference, view):
    back = move_date(Navigate.PREVIOUS, reference, view)
    assert move_date(Navigate.NEXT, back, view) == reference


def test_month_round_trip_without_clamping():
    reference = date(2024, 6, 15)
    back = move_date(Navigate.PREVIOUS, reference, View.MONTH)
    assert move_date(Navigate.NEXT, back, View.MONTH) == reference


def test_month_is_not_invertible_after_clamping():
    forward = move_date(Navigate.NEXT, date(2024, 1, 31), View.MONTH)
    again = move_date(Navigate.NEXT, forward, View.MONTH)
    assert again == date(2024, 3, 29)
    assert move_date(Navigate.PREVIOUS, forward, View.MONTH) != date(2024, 1, 31)


def test_unknown_action_returns_reference():
    reference = date(2024, 6, 15)
    assert move_date("SIDEWAYS", reference, View.MONTH) == reference


def test_is_pure():
    reference = date(2024, 6, 15)
    results = {move_date(Navigate.NEXT, reference, View.MONTH) for _ in range(3)}
    assert results == {date(2024, 7, 15)}
    assert reference == date(2024, 6, 15)
    assert move_date(Navigate.NEXT, reference, View.DAY) - reference == timedelta(days=1)


class TestAcrossDaylightSaving:
    amsterdam = pytz.timezone("Europe/Amsterdam")

    def test_next_month_takes_winter_offset(self):
        reference = self.amsterdam.localize(datetime(2024, 10, 1, 0, 30))
        moved = move_date(Navigate.NEXT, reference, View.MONTH)
        assert moved == self.amsterdam.localize(datetime(2024, 11, 1, 0, 30))
        assert moved.utcoffset() == timedelta(hours=1)
        assert moved.astimezone(self.amsterdam).date() == date(2024, 11, 1)

    def test_next_day_keeps_wall_time(self):
        reference = self.amsterdam.localize(datetime(2024, 10, 26, 12, 0))
        moved = move_date(Navigate.NEXT, reference, View.DAY)
        assert moved.replace(tzinfo=None) == datetime(2024, 10, 27, 12, 0)
        assert moved.utcoffset() == timedelta(hours=1)
        assert moved.astimezone(self.amsterdam).date() == date(2024, 10, 27)

    def test_previous_week_into_summer_time(self):
        reference = self.amsterdam.localize(datetime(2024, 10, 31, 0, 30))
        moved = move_date(Navigate.PREVIOUS, reference, View.WEEK)
        assert moved == self.amsterdam.localize(datetime(2024, 10, 24, 0, 30))
        assert moved.utcoffset() == timedelta(hours=2)

    def test_round_trip_across_change(self):
        reference = self.amsterdam.localize(datetime(2024, 10, 1, 0, 30))
        forward = move_date(Navigate.NEXT, reference, View.MONTH)
        assert move_date(Navigate.PREVIOUS, forward, View.MONTH) == reference
