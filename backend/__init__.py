"""
Calendar View Backend Module

This module provides the navigation core of the calendar view:
- Date arithmetic at day/week/month granularity (dates.py)
- View registry and validation (views.py)
- Move resolver for navigation actions (move.py)
- Controlled/uncontrolled state bridge (state.py)
- Navigation controller (navigation.py)
- Configuration parsing (config.py)
- ICS subscriptions as event sources (ics_subscription.py)
"""

from .config import Config
from .dates import Unit
from .move import Navigate, move_date
from .navigation import NavigationController, SlotInfo
from .state import Ownership, StateBridge
from .views import InvalidView, View, ViewDescriptor, resolve, view_names
from .ics_subscription import EventData, ICSSubscription

__all__ = [
    'Config',
    'Unit',
    'Navigate',
    'move_date',
    'NavigationController',
    'SlotInfo',
    'Ownership',
    'StateBridge',
    'InvalidView',
    'View',
    'ViewDescriptor',
    'resolve',
    'view_names',
    'EventData',
    'ICSSubscription',
]
