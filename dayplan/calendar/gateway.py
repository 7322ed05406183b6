"""Calendar section: the day's events across all calendars."""

from datetime import date, datetime
from typing import List, Optional
import logging

from dayplan.core.models import CalendarEvent
from dayplan.utils.date import date_window


class CalendarGateway:
    """Reads one day of events from the platform store."""

    def __init__(self, platform, logger: Optional[logging.Logger] = None):
        self.platform = platform
        self.logger = logger or logging.getLogger(__name__)

    def events_for_date(self, target_date: date) -> List[CalendarEvent]:
        """Events overlapping ``target_date``, ordered by start time."""
        start, end = date_window(target_date)
        events = self.platform.events_between(start, end)

        result = [e for e in events if _overlaps(e, start, end)]
        # All-day events sort ahead of timed ones starting at midnight.
        result.sort(key=lambda e: (e.start_time or start, not e.is_all_day, e.title.lower()))
        self.logger.debug(f"{len(result)} events on {target_date.isoformat()}")
        return result


def _overlaps(event: CalendarEvent, start: datetime, end: datetime) -> bool:
    if event.start_time is None:
        return False
    event_end = event.end_time or event.start_time
    if event_end == event.start_time:
        return start <= event.start_time < end
    return event.start_time < end and event_end > start
