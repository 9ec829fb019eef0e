"""
Calendar widget composing the toolbar with the selected view renderer.

The widget owns a NavigationController. Every value it shows (date,
view, selection) is read back from the controller's state bridge, so the
host can either let the widget manage these values or control them by
passing them in together with their notifier callbacks.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QStackedWidget
from PySide6.QtCore import Signal

from backend.config import Config
from backend.move import Clock, Navigate
from backend.navigation import NavigationController, SlotInfo
from backend.state import NOTIFIERS
from backend.timezone_utils import to_local_date
from backend.views import View, ViewSet, resolve, view_key
from .toolbar import Toolbar, view_label
from .views import AgendaView, BaseView, DayView, MonthView, RenderContext, WeekView

logger = logging.getLogger(__name__)


BUILTIN_RENDERERS: dict[str, Callable[..., BaseView]] = {
    View.MONTH.value: MonthView,
    View.WEEK.value: WeekView,
    View.DAY.value: DayView,
    View.AGENDA.value: AgendaView,
}


class CalendarWidget(QWidget):
    """
    Main calendar widget with switchable views.

    Args:
        config: Settings for views, culture, labels, formats and accessors
        views: Overrides config.view_set(); a sequence or a mapping
        components: Renderer overrides by view identifier
        now: Fixed moment or clock used for the default date and TODAY
        on_select_slot: Host callback for slot selections
        **props: Controlled values and notifiers (date, view, selected,
            on_navigate, on_view, on_select_event)
    """

    navigated = Signal(object, str)   # new date, view
    view_changed = Signal(str)
    event_selected = Signal(object)
    slot_selected = Signal(object)
    range_changed = Signal(object, object)  # first day, last day

    def __init__(
        self,
        config: Optional[Config] = None,
        views: ViewSet = None,
        components: Optional[dict] = None,
        now: Clock = None,
        on_select_slot: Optional[Callable[[SlotInfo], Any]] = None,
        parent=None,
        **props,
    ):
        super().__init__(parent)
        self._config = config or Config()
        self._components = components or {}
        self._events: list = []
        self._renderers: dict[str, BaseView] = {}
        self._shown_range: Optional[tuple[date, date]] = None

        defaults = {
            "default_date": props.pop("default_date", self._config.default_date),
            "default_view": props.pop("default_view", self._config.default_view),
        }
        for field_name, notifier_name in NOTIFIERS.items():
            if field_name in props and props.get(notifier_name) is None:
                # A value without its notifier only seeds the widget-owned state
                value = props.pop(field_name)
                if field_name != "selected":
                    defaults[f"default_{field_name}"] = value

        self._controller = NavigationController(
            views=views if views is not None else self._config.view_set(),
            culture=self._config.culture,
            now=now,
            on_select_slot=self._on_slot_selected,
            **defaults,
            **props,
        )
        missing = [view_key(name) for name in self._controller.view_names if self._factory_for(name) is None]
        if missing:
            raise ValueError(f"No renderer available for views: {', '.join(missing)}")
        self._controller.state.subscribe(self._on_state_changed)
        self._host_select_slot = on_select_slot

        self._context = RenderContext(
            formats=self._config.formats,
            localization=self._config.localization,
            labels=self._config.labels,
            accessors=self._config.accessors,
            week_start=self._controller.week_start,
        )
        self._setup_ui()
        self._render()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._toolbar = Toolbar(self._controller.view_names, self._config.labels)
        self._toolbar.navigate_requested.connect(self.navigate)
        self._toolbar.view_requested.connect(self.change_view)
        self._toolbar.setVisible(self._config.toolbar)
        layout.addWidget(self._toolbar)

        self._stack = QStackedWidget()
        layout.addWidget(self._stack, 1)

    # ==================== Host API ====================

    @property
    def controller(self) -> NavigationController:
        return self._controller

    @property
    def toolbar(self) -> Toolbar:
        return self._toolbar

    def get_current_date(self):
        return self._controller.date

    def get_current_view(self):
        return self._controller.view

    def get_selected(self):
        return self._controller.selected

    def get_date_range(self) -> tuple[date, date]:
        return self._controller.visible_range()

    def current_renderer(self) -> BaseView:
        return self._stack.currentWidget()

    def set_events(self, events: list):
        self._events = list(events)
        renderer = self._stack.currentWidget()
        if renderer is not None:
            renderer.set_events(self._events)

    def set_date(self, d):
        """Hand back a controlled date after on_navigate."""
        self._controller.receive(date=d)
        self._render()

    def set_view(self, view):
        """Hand back a controlled view after on_view."""
        self._controller.receive(view=view)
        self._render()

    def set_selected(self, event):
        """Hand back a controlled selection after on_select_event."""
        self._controller.receive(selected=event)

    # ==================== Requests ====================

    def navigate(self, action, target=None):
        self._controller.navigate(action, target)

    def change_view(self, view):
        self._controller.change_view(view)
        # Rejected or controlled requests leave the toolbar on the shown view
        self._toolbar.set_active_view(self._controller.view)

    def header_click(self, target):
        self._controller.header_click(target)

    def go_today(self):
        self.navigate(Navigate.TODAY)

    def go_previous(self):
        self.navigate(Navigate.PREVIOUS)

    def go_next(self):
        self.navigate(Navigate.NEXT)

    # ==================== Notifications ====================

    def _on_state_changed(self, field_name: str, value, *extra):
        if field_name == "date":
            self.navigated.emit(value, view_key(extra[0]))
            self._render()
        elif field_name == "view":
            self.view_changed.emit(view_key(value))
            self._render()
        else:
            self.event_selected.emit(value)

    def _on_slot_selected(self, slot_info: SlotInfo):
        self.slot_selected.emit(slot_info)
        if self._host_select_slot is not None:
            self._host_select_slot(slot_info)

    # ==================== Rendering ====================

    def _factory_for(self, view) -> Optional[Callable[..., BaseView]]:
        """Renderer factory: the descriptor's, then components, then built-in."""
        key = view_key(view)
        descriptor = resolve(view, self._controller.views)
        return descriptor.renderer or self._components.get(key) or BUILTIN_RENDERERS.get(key)

    def _renderer_for(self, view) -> BaseView:
        key = view_key(view)
        renderer = self._renderers.get(key)
        if renderer is not None:
            return renderer

        logger.debug("Creating renderer for view %s", key)
        renderer = self._factory_for(view)(self._context)
        renderer.navigate_requested.connect(self.navigate)
        renderer.header_clicked.connect(self.header_click)
        renderer.event_selected.connect(self._controller.select_event)
        renderer.slot_selected.connect(self._controller.select_slot)
        self._stack.addWidget(renderer)
        self._renderers[key] = renderer
        return renderer

    def _render(self):
        controller = self._controller
        view = controller.view
        descriptor = controller.descriptor
        first, last = controller.visible_range()
        current = to_local_date(controller.date)

        renderer = self._renderer_for(view)
        self._stack.setCurrentWidget(renderer)
        renderer.set_range(current, first, last)
        renderer.set_events(self._events)

        self._toolbar.set_active_view(view)
        self._toolbar.set_label(view_label(
            current, descriptor, first, last,
            self._config.formats, self._config.localization
        ))

        if self._shown_range != (first, last):
            self._shown_range = (first, last)
            self.range_changed.emit(first, last)
