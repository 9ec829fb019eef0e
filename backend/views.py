"""
View registry.

Maps view identifiers to the descriptors that say how each view steps
through time and how it is rendered, and validates requested views
against the configured set.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .dates import Unit


class View(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    AGENDA = "agenda"


ViewId = Union[View, str]
ViewSet = Union[Sequence[ViewId], Mapping[ViewId, Any]]


class InvalidView(ValueError):
    """Requested view identifier is not among the configured views."""

    def __init__(self, view: ViewId, names: Sequence[ViewId]):
        self.view = view
        self.names = list(names)
        super().__init__(f"View '{view_key(view)}' is not configured (available: {', '.join(map(view_key, self.names))})")


@dataclass(frozen=True)
class ViewDescriptor:
    """
    Capabilities of one calendar view.

    granularity is the unit used for date equality and Previous/Next steps;
    None means the view declares none and is handled as a day view.
    span is the number of days one step covers for day/week based views.
    """
    name: ViewId
    granularity: Optional[Unit] = None
    span: Optional[int] = None
    renderer: Optional[Callable[..., Any]] = None
    label: Optional[str] = None


BUILTIN_VIEWS: dict[str, ViewDescriptor] = {
    View.MONTH.value: ViewDescriptor(View.MONTH, Unit.MONTH),
    View.WEEK.value: ViewDescriptor(View.WEEK, Unit.WEEK, span=7),
    View.DAY.value: ViewDescriptor(View.DAY, Unit.DAY, span=1),
    View.AGENDA.value: ViewDescriptor(View.AGENDA, Unit.DAY, span=1),
}

DEFAULT_VIEWS: list[View] = [View.MONTH, View.WEEK, View.DAY, View.AGENDA]


def view_key(view: ViewId) -> str:
    """Plain string form of a view identifier."""
    return view.value if isinstance(view, View) else str(view)


def view_names(views: ViewSet) -> list:
    """
    Get configured view identifiers.

    A sequence is returned in its own order (it decides toolbar order);
    a mapping yields its keys.
    """
    if isinstance(views, Mapping):
        return list(views.keys())
    return list(views)


def is_valid_view(view: ViewId, views: ViewSet) -> bool:
    """Check whether view is among the configured views."""
    return view_key(view) in {view_key(name) for name in view_names(views)}


def builtin_descriptor(view: ViewId) -> ViewDescriptor:
    """Built-in descriptor for view, or a bare one for custom identifiers."""
    return BUILTIN_VIEWS.get(view_key(view)) or ViewDescriptor(view)


def _from_config(name: ViewId, value: Any) -> ViewDescriptor:
    if isinstance(value, ViewDescriptor):
        return value
    base = builtin_descriptor(name)
    if value is True or value is None:
        return base
    if callable(value):
        return replace(base, renderer=value)
    raise TypeError(f"Unsupported view configuration for '{name}': {value!r}")


def resolve(view: ViewId, views: ViewSet) -> ViewDescriptor:
    """
    Get the descriptor for a configured view.

    Raises:
        InvalidView: view is not in the configured set.
    """
    names = view_names(views)
    for name in names:
        if view_key(name) == view_key(view):
            if isinstance(views, Mapping):
                return _from_config(name, views[name])
            return builtin_descriptor(name)
    raise InvalidView(view, names)


def normalize_view(view: ViewId) -> ViewId:
    """Turn a built-in identifier string into its View member."""
    try:
        return View(view_key(view))
    except ValueError:
        return view
