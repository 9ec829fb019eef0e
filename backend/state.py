"""
Controlled/uncontrolled state bridge.

Each tracked field (date, view, selected) is owned either by the host,
which supplies the value together with its change notifier, or by the
widget itself, which seeds a default and updates it on every set.
Ownership is decided once at construction.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Ownership(Enum):
    EXTERNAL = "external"
    INTERNAL = "internal"


# field -> name of its paired notifier
NOTIFIERS = {
    "date": "on_navigate",
    "view": "on_view",
    "selected": "on_select_event",
}

_UNSET = object()


@dataclass
class _Field:
    ownership: Ownership
    value: Any
    notifier: Optional[Callable[..., Any]]


class StateBridge:
    """
    Holds the calendar state tuple and routes updates to its owners.

    Args:
        defaults: Values seeded into internally owned fields
        **props: Host supplied values (date, view, selected) and
            notifiers (on_navigate, on_view, on_select_event)

    Example:
        bridge = StateBridge({"date": today, "view": "month"},
                             view="week", on_view=host.set_view)
        bridge.ownership("view")   # Ownership.EXTERNAL
        bridge.ownership("date")   # Ownership.INTERNAL
    """

    def __init__(self, defaults: Optional[dict] = None, **props):
        unknown = set(props) - set(NOTIFIERS) - set(NOTIFIERS.values())
        if unknown:
            raise TypeError(f"Unknown state properties: {', '.join(sorted(unknown))}")

        defaults = defaults or {}
        self._listeners: list[Callable[..., Any]] = []
        self._fields: dict[str, _Field] = {}
        for name, notifier_name in NOTIFIERS.items():
            value = props.get(name, _UNSET)
            notifier = props.get(notifier_name)
            if value is not _UNSET and notifier is not None:
                self._fields[name] = _Field(Ownership.EXTERNAL, value, notifier)
            else:
                self._fields[name] = _Field(Ownership.INTERNAL, defaults.get(name), notifier)

    def _field(self, name: str) -> _Field:
        try:
            return self._fields[name]
        except KeyError:
            raise KeyError(f"Unknown state field: {name}") from None

    def ownership(self, name: str) -> Ownership:
        return self._field(name).ownership

    def is_controlled(self, name: str) -> bool:
        return self._field(name).ownership == Ownership.EXTERNAL

    def get(self, name: str) -> Any:
        return self._field(name).value

    def set(self, name: str, value: Any, *extra) -> None:
        """
        Request a new value for a field.

        Externally owned fields only notify the host, which is expected to
        hand the value back through receive(). Internally owned fields
        update first and then notify, if a notifier was supplied.
        """
        field = self._field(name)
        if field.ownership == Ownership.INTERNAL:
            field.value = value
        if field.notifier is not None:
            field.notifier(value, *extra)
        for listener in self._listeners:
            listener(name, value, *extra)

    def subscribe(self, listener: Callable[..., Any]) -> None:
        """
        Observe every set request as listener(field, value, *extra).

        Listeners run after the owner was updated or notified and do not
        affect ownership.
        """
        self._listeners.append(listener)

    def receive(self, **values) -> None:
        """Accept values re-supplied by the host for externally owned fields."""
        for name, value in values.items():
            field = self._field(name)
            if field.ownership == Ownership.EXTERNAL:
                field.value = value
            else:
                logger.debug("Ignoring host value for internally owned field '%s'", name)

    def snapshot(self) -> dict:
        """Current (date, view, selected) values."""
        return {name: field.value for name, field in self._fields.items()}
