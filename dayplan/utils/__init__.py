"""
Utility functions for dayplan.
"""

from .date import start_of_day, day_window, date_window, in_window, parse_date
from .dispatch import InlineDispatcher, QueueDispatcher
from .formatting import error_summary, format_reminder_list, format_events

__all__ = [
    # Date utilities
    'start_of_day',
    'day_window',
    'date_window',
    'in_window',
    'parse_date',
    # Dispatchers
    'InlineDispatcher',
    'QueueDispatcher',
    # Text rendering
    'error_summary',
    'format_reminder_list',
    'format_events',
]
