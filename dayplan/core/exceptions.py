"""
Exception classes for dayplan.
"""


class DayplanError(Exception):
    """Base exception for all dayplan errors."""
    pass


class ConfigurationError(DayplanError):
    """Raised when configuration is invalid or missing."""
    pass


class PlatformError(DayplanError):
    """Base exception for errors coming from the EventKit store."""
    pass


class AuthorizationError(PlatformError):
    """Raised when access to reminders or calendar events is refused."""
    pass


class AccessTimeoutError(AuthorizationError):
    """Raised when the platform never answered an access request."""
    pass


class EventKitImportError(PlatformError):
    """Raised when EventKit/PyObjC dependencies are not available."""
    pass


class FetchError(PlatformError):
    """Raised when a reminder or event query fails."""
    pass


class StoreWriteError(PlatformError):
    """Raised when a change cannot be committed to the reminder store."""
    pass
