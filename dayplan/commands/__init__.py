"""
Command implementations for dayplan.
"""

from .act import ActCommand
from .calendar import CalendarCommand
from .analytics import AnalyticsCommand

__all__ = [
    'ActCommand',
    'CalendarCommand',
    'AnalyticsCommand',
]
