"""
Navigation controller.

Turns navigation, header-click, selection and view-change requests into
state updates through the state bridge, applying the drill-down rule:
jumping to a date that is already visible switches to the Day view.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

from .dates import Unit, eq, start_of_week, visible_range
from .move import Clock, Navigate, move_date, resolve_now
from .state import StateBridge
from .views import (
    DEFAULT_VIEWS, InvalidView, View, ViewDescriptor, ViewId, ViewSet,
    normalize_view, resolve, view_key, view_names,
)

logger = logging.getLogger(__name__)


@dataclass
class SlotInfo:
    """A range of time slots selected in a view."""
    start: Any
    end: Any
    slots: list = field(default_factory=list)


class NavigationController:
    """
    Resolves navigation requests for one calendar instance.

    Args:
        views: Configured views, a sequence (toolbar order) or a mapping
        culture: Culture tag used to find the first day of the week
        now: Fixed moment or clock used for the default date and TODAY
        default_date: Initial date for an internally owned date
        default_view: Initial view for an internally owned view
        on_select_slot: Host callback for slot selections
        **props: Controlled values and notifiers passed to StateBridge
            (date, view, selected, on_navigate, on_view, on_select_event)
    """

    def __init__(
        self,
        views: ViewSet = None,
        culture: Optional[str] = None,
        now: Clock = None,
        default_date=None,
        default_view: Optional[ViewId] = None,
        on_select_slot: Optional[Callable[[SlotInfo], Any]] = None,
        **props,
    ):
        self._views = views if views is not None else list(DEFAULT_VIEWS)
        names = view_names(self._views)
        if not names:
            raise ValueError("At least one view must be configured")

        self._now = now
        self.culture = culture
        self.week_start = start_of_week(culture)
        self._on_select_slot = on_select_slot

        if default_view is None:
            default_view = names[0]
        else:
            # Fails with InvalidView: a bad initial configuration is a host bug
            resolve(default_view, self._views)
        if props.get("view") is not None:
            props["view"] = normalize_view(props["view"])

        self.state = StateBridge(
            {
                "date": default_date if default_date is not None else resolve_now(now),
                "view": normalize_view(default_view),
                "selected": None,
            },
            **props,
        )

    # ==================== State ====================

    @property
    def views(self) -> ViewSet:
        return self._views

    @property
    def view_names(self) -> list:
        return view_names(self._views)

    @property
    def date(self):
        return self.state.get("date")

    @property
    def view(self) -> ViewId:
        return self.state.get("view")

    @property
    def selected(self) -> Any:
        return self.state.get("selected")

    @property
    def descriptor(self) -> ViewDescriptor:
        return resolve(self.view, self._views)

    def granularity(self) -> Unit:
        """Granularity of the active view; views without one behave as Day."""
        return self.descriptor.granularity or Unit.DAY

    def visible_range(self) -> tuple[date, date]:
        """Inclusive first and last day shown by the active view."""
        descriptor = self.descriptor
        return visible_range(self.date, self.granularity(), self.week_start, descriptor.span)

    def receive(self, **values) -> None:
        """Accept host re-supplied values for controlled fields."""
        if "view" in values:
            values["view"] = normalize_view(values["view"])
        self.state.receive(**values)

    # ==================== Requests ====================

    def navigate(self, action, target=None) -> None:
        """
        Navigate to the date an action leads to.

        DATE jumps to target; if target lies in the unit already shown
        (same month in Month view, same week in Week view) the view also
        drills down to Day.
        """
        self._navigate(action, target, drill_down=True)

    def _navigate(self, action, target, drill_down: bool) -> None:
        try:
            action = Navigate(action)
        except ValueError:
            logger.debug("Dropping navigation with unknown action %r", action)
            return

        current = self.date
        view = self.view
        descriptor = self.descriptor
        new_date = move_date(action, target if target is not None else current, descriptor, self._now)

        logger.debug("Navigate %s: %s -> %s (%s)", action.value, current, new_date, view_key(view))
        self.state.set("date", new_date, view)

        if drill_down and action == Navigate.DATE:
            granularity = descriptor.granularity or Unit.DAY
            if eq(current, new_date, granularity, self.week_start):
                self.change_view(View.DAY)

    def header_click(self, target) -> None:
        """Drill into a day from its heading in Month or Week view."""
        if self.view in (View.MONTH, View.WEEK):
            self.change_view(View.DAY)
        self._navigate(Navigate.DATE, target, drill_down=False)

    def change_view(self, view: ViewId) -> None:
        """Switch to a configured view; unknown views are ignored."""
        if view == self.view:
            return
        try:
            resolve(view, self._views)
        except InvalidView as e:
            logger.debug("Ignoring view change: %s", e)
            return
        self.state.set("view", normalize_view(view))

    def select_event(self, event: Any) -> None:
        self.state.set("selected", event)

    def select_slot(self, slot_info: SlotInfo) -> None:
        if self._on_select_slot is not None:
            self._on_select_slot(slot_info)
