from datetime import date, datetime

import pytest
import pytz

from backend.move import Navigate
from backend.navigation import NavigationController, SlotInfo
from backend.views import InvalidView, View, ViewDescriptor
from backend import timezone_utils
from backend.dates import Unit

from conftest import NOW

MONTH_WEEK_DAY = [View.MONTH, View.WEEK, View.DAY]


def make_controller(recorder=None, views=None, **kwargs):
    kwargs.setdefault("now", NOW)
    kwargs.setdefault("default_date", date(2024, 6, 15))
    if recorder is not None:
        kwargs.setdefault("on_select_slot", recorder.on_select_slot)
        for name, notifier in recorder.notifiers().items():
            kwargs.setdefault(name, notifier)
    return NavigationController(views=views or list(MONTH_WEEK_DAY), **kwargs)


class TestConstruction:
    def test_defaults_to_first_configured_view(self):
        controller = make_controller(views=[View.WEEK, View.DAY])
        assert controller.view == View.WEEK

    def test_default_date_comes_from_clock(self):
        controller = NavigationController(now=NOW)
        assert controller.date == NOW

    def test_invalid_default_view_fails(self):
        with pytest.raises(InvalidView):
            make_controller(default_view="year")

    def test_empty_views_fail(self):
        with pytest.raises(ValueError):
            NavigationController(views=[], now=NOW)

    def test_string_default_view_is_normalized(self):
        assert make_controller(default_view="day").view is View.DAY

    def test_culture_sets_week_start(self):
        assert make_controller(culture="en-US").week_start == 6
        assert make_controller(culture="de-DE").week_start == 0


class TestNavigate:
    def test_week_next(self, recorder):
        controller = make_controller(recorder, default_view=View.WEEK)
        controller.navigate(Navigate.NEXT)
        assert controller.date == date(2024, 6, 22)
        assert controller.view == View.WEEK
        assert recorder.calls == [("navigate", date(2024, 6, 22), View.WEEK)]

    def test_month_previous(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.navigate("PREV")
        assert controller.date == date(2024, 5, 15)

    def test_today_uses_injected_clock(self, recorder):
        controller = make_controller(recorder, default_date=date(2020, 1, 1), default_view=View.DAY)
        controller.navigate(Navigate.TODAY)
        assert controller.date == NOW
        assert recorder.calls == [("navigate", NOW, View.DAY)]

    def test_unknown_action_is_dropped(self, recorder):
        controller = make_controller(recorder)
        controller.navigate("SIDEWAYS")
        assert recorder.calls == []
        assert controller.date == date(2024, 6, 15)


class TestDrillDown:
    def test_date_in_visible_month_switches_to_day(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.navigate(Navigate.DATE, date(2024, 6, 3))
        assert recorder.calls == [
            ("navigate", date(2024, 6, 3), View.MONTH),
            ("view", View.DAY),
        ]
        assert controller.view == View.DAY
        assert controller.date == date(2024, 6, 3)

    def test_date_outside_month_keeps_view(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.navigate(Navigate.DATE, date(2024, 7, 3))
        assert recorder.calls == [("navigate", date(2024, 7, 3), View.MONTH)]
        assert controller.view == View.MONTH

    def test_date_in_visible_week_switches_to_day(self, recorder):
        # Sunday start: the week of Sat 2024-06-15 is 06-09 .. 06-15
        controller = make_controller(recorder, default_view=View.WEEK, culture="en-US")
        controller.navigate(Navigate.DATE, date(2024, 6, 10))
        assert controller.view == View.DAY

    def test_week_start_decides_drill_down(self, recorder):
        sunday = date(2024, 6, 16)
        us = make_controller(default_view=View.WEEK, culture="en-US")
        gb = make_controller(default_view=View.WEEK, culture="en-GB")
        us.navigate(Navigate.DATE, sunday)
        gb.navigate(Navigate.DATE, sunday)
        assert us.view == View.WEEK
        assert gb.view == View.DAY

    def test_no_drill_down_from_day(self, recorder):
        controller = make_controller(recorder, default_view=View.DAY)
        controller.navigate(Navigate.DATE, date(2024, 6, 15))
        assert recorder.calls == [("navigate", date(2024, 6, 15), View.DAY)]

    def test_day_must_be_configured(self, recorder):
        controller = make_controller(recorder, views=[View.MONTH, View.AGENDA])
        controller.navigate(Navigate.DATE, date(2024, 6, 3))
        assert controller.view == View.MONTH
        assert recorder.calls == [("navigate", date(2024, 6, 3), View.MONTH)]


class TestHeaderClick:
    def test_from_month(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.header_click(date(2024, 6, 15))
        assert recorder.calls == [
            ("view", View.DAY),
            ("navigate", date(2024, 6, 15), View.DAY),
        ]
        assert controller.view == View.DAY
        assert controller.date == date(2024, 6, 15)

    def test_outside_current_month_still_drills(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.header_click(date(2024, 7, 2))
        assert controller.view == View.DAY
        assert controller.date == date(2024, 7, 2)
        assert len(recorder.calls) == 2

    def test_from_day_only_navigates(self, recorder):
        controller = make_controller(recorder, default_view=View.DAY)
        controller.header_click(date(2024, 6, 18))
        assert recorder.calls == [("navigate", date(2024, 6, 18), View.DAY)]


class TestChangeView:
    def test_accepted(self, recorder):
        controller = make_controller(recorder)
        controller.change_view("week")
        assert controller.view is View.WEEK
        assert recorder.calls == [("view", View.WEEK)]

    def test_unconfigured_view_is_ignored(self, recorder):
        controller = make_controller(recorder)
        before = controller.state.snapshot()
        controller.change_view("year")
        assert recorder.calls == []
        assert controller.state.snapshot() == before

    def test_same_view_is_ignored(self, recorder):
        controller = make_controller(recorder, default_view=View.MONTH)
        controller.change_view(View.MONTH)
        assert recorder.calls == []


class TestControlled:
    def test_controlled_date_waits_for_host(self, recorder):
        controller = make_controller(recorder, date=date(2024, 6, 15), default_view=View.WEEK)
        controller.navigate(Navigate.NEXT)
        assert recorder.calls == [("navigate", date(2024, 6, 22), View.WEEK)]
        assert controller.date == date(2024, 6, 15)

        controller.receive(date=date(2024, 6, 22))
        assert controller.date == date(2024, 6, 22)

    def test_controlled_view_waits_for_host(self, recorder):
        controller = make_controller(recorder, view="month")
        controller.change_view(View.WEEK)
        assert recorder.calls == [("view", View.WEEK)]
        assert controller.view == View.MONTH

        controller.receive(view="week")
        assert controller.view is View.WEEK


class TestSelection:
    def test_select_event(self, recorder):
        controller = make_controller(recorder)
        event = {"title": "Review"}
        controller.select_event(event)
        assert controller.selected is event
        assert recorder.calls == [("select_event", event)]

    def test_select_slot_is_forwarded(self, recorder):
        controller = make_controller(recorder)
        slot = SlotInfo(date(2024, 6, 15), date(2024, 6, 16), [date(2024, 6, 15)])
        controller.select_slot(slot)
        assert recorder.calls == [("select_slot", slot)]

    def test_select_slot_without_callback(self):
        make_controller().select_slot(SlotInfo(date(2024, 6, 15), date(2024, 6, 16)))


class TestVisibleRange:
    def test_month(self):
        controller = make_controller(default_view=View.MONTH, culture="en-US")
        assert controller.visible_range() == (date(2024, 5, 26), date(2024, 7, 6))

    def test_agenda_span(self):
        agenda = ViewDescriptor(View.AGENDA, Unit.DAY, span=30)
        controller = make_controller(views={"month": True, "agenda": agenda}, default_view="agenda")
        assert controller.visible_range() == (date(2024, 6, 15), date(2024, 7, 14))
        controller.navigate(Navigate.NEXT)
        assert controller.date == date(2024, 7, 15)


def test_month_step_from_local_clock_lands_on_local_day(monkeypatch):
    monkeypatch.setattr(timezone_utils, "_local_timezone_name", "Europe/Amsterdam")
    amsterdam = pytz.timezone("Europe/Amsterdam")
    controller = NavigationController(views=list(MONTH_WEEK_DAY),
                                      now=amsterdam.localize(datetime(2024, 10, 1, 0, 30)))

    controller.navigate(Navigate.NEXT)

    assert timezone_utils.to_local_date(controller.date) == date(2024, 11, 1)
    assert controller.visible_range() == (date(2024, 10, 27), date(2024, 12, 7))
