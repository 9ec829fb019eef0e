"""
Move resolver: computes the date a navigation action leads to.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Union

from .dates import DateLike, Unit, add
from .timezone_utils import now_local
from .views import ViewDescriptor, ViewId, builtin_descriptor

logger = logging.getLogger(__name__)


class Navigate(str, Enum):
    PREVIOUS = "PREV"
    NEXT = "NEXT"
    TODAY = "TODAY"
    DATE = "DATE"


Clock = Union[datetime, Callable[[], datetime], None]


def resolve_now(now: Clock = None) -> datetime:
    """Current moment from a fixed datetime, a clock callable, or the local clock."""
    if now is None:
        return now_local()
    if callable(now):
        return now()
    return now


def step(view: Union[ViewId, ViewDescriptor]) -> tuple[Unit, int]:
    """
    Get the unit and amount one Previous/Next step moves for a view.

    Views without granularity step by one day.
    """
    descriptor = view if isinstance(view, ViewDescriptor) else builtin_descriptor(view)
    if descriptor.granularity is None:
        return Unit.DAY, 1
    if descriptor.granularity == Unit.MONTH:
        return Unit.MONTH, 1
    if descriptor.span:
        return Unit.DAY, descriptor.span
    return descriptor.granularity, 1


def move_date(action, reference: DateLike, view: Union[ViewId, ViewDescriptor],
              now: Clock = None) -> DateLike:
    """
    Compute the date a navigation action leads to.

    Args:
        action: A Navigate member or its string value
        reference: Current date, or the explicit target for DATE
        view: Active view identifier or descriptor
        now: Fixed moment or clock returning it, used for TODAY

    Returns:
        The new date. Unrecognized actions return reference unchanged.
    """
    try:
        action = Navigate(action)
    except ValueError:
        logger.debug("Ignoring unknown navigation action %r", action)
        return reference

    if action == Navigate.TODAY:
        return resolve_now(now)
    if action == Navigate.DATE:
        return reference

    unit, amount = step(view)
    if action == Navigate.PREVIOUS:
        amount = -amount
    return add(reference, amount, unit)
