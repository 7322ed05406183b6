"""
Core module for dayplan - contains domain models, configuration, and exceptions.
"""

from .models import (
    AccessScope,
    AccessResult,
    AuthorizationStatus,
    ReminderRecord,
    CalendarEvent,
    FetchResult,
    ListStatus,
    Activity,
    Note,
    DataPoint,
    AnalyticsPeriod,
    AppConfig
)

from .exceptions import (
    DayplanError,
    ConfigurationError,
    PlatformError,
    AuthorizationError,
    AccessTimeoutError,
    EventKitImportError,
    FetchError,
    StoreWriteError
)

__all__ = [
    # Models
    'AccessScope',
    'AccessResult',
    'AuthorizationStatus',
    'ReminderRecord',
    'CalendarEvent',
    'FetchResult',
    'ListStatus',
    'Activity',
    'Note',
    'DataPoint',
    'AnalyticsPeriod',
    'AppConfig',
    # Exceptions
    'DayplanError',
    'ConfigurationError',
    'PlatformError',
    'AuthorizationError',
    'AccessTimeoutError',
    'EventKitImportError',
    'FetchError',
    'StoreWriteError'
]
