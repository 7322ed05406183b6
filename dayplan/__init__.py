"""dayplan - today's reminders, calendar and analytics on top of Apple EventKit."""

__version__ = "0.3.0"
