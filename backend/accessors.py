"""
Event field accessors.

Renderers never assume a shape for event records; they read fields
through an accessor that is either a callable or an attribute/key name.
"""

from collections.abc import Mapping
from typing import Any, Callable, Union

Accessor = Union[str, Callable[[Any], Any]]


def accessor(record: Any, field: Accessor, default: Any = None) -> Any:
    """Read a field from an event record."""
    if callable(field):
        return field(record)
    if isinstance(record, Mapping):
        return record.get(field, default)
    return getattr(record, field, default)
