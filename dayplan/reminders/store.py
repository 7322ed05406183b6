"""Today's reminders and completion write-back."""

from datetime import datetime
from typing import Callable, Optional
import logging

from dayplan.core.exceptions import (
    DayplanError,
    FetchError,
    StoreWriteError
)
from dayplan.core.models import FetchResult, ReminderRecord
from dayplan.utils.date import day_window, in_window


class ReminderStore:
    """
    Queries incomplete reminders due today and writes completion changes.

    ``clock`` returns the current local time and decides which day
    "today" is.
    """

    def __init__(self, platform, clock: Optional[Callable[[], datetime]] = None,
                 logger: Optional[logging.Logger] = None):
        self.platform = platform
        self.clock = clock or datetime.now
        self.logger = logger or logging.getLogger(__name__)

    def fetch_today(self) -> FetchResult:
        """
        Snapshot of incomplete reminders due in ``[startOfToday, startOfTomorrow)``.

        Every calendar the platform exposes is searched. A nil answer from
        the platform is reported as FAILED rather than as an empty day.
        """
        start, end = day_window(self.clock())
        self.logger.debug(f"Fetching reminders due in [{start.isoformat()}, {end.isoformat()})")

        try:
            fetched = self.platform.fetch_incomplete_reminders(start, end)
        except DayplanError as e:
            self.logger.warning(f"Reminder fetch failed: {e}")
            return FetchResult.failed(e)
        except Exception as e:
            self.logger.warning(f"Unexpected error fetching reminders: {e}")
            return FetchResult.failed(FetchError(f"Failed to fetch reminders: {e}"))

        if fetched is None:
            self.logger.warning("Reminder store returned no result set")
            return FetchResult.failed(FetchError("The reminder store returned no result"))

        # EventKit's due-date predicate includes its end bound; the window
        # here is half-open.
        todays = [
            record for record in fetched
            if not record.completed and in_window(record.due_date, start, end)
        ]
        todays.sort(key=lambda r: (r.due_date, r.title.lower()))
        self.logger.debug(f"Fetched {len(fetched)} reminders, {len(todays)} due today")
        return FetchResult.loaded(todays)

    def update(self, record: ReminderRecord, completed: bool) -> None:
        """
        Commit a new completion flag for ``record``.

        No concurrency check is made: the last write wins.

        Raises:
            StoreWriteError: the commit was rejected
        """
        try:
            self.platform.save_completion(record.identifier, completed)
        except StoreWriteError:
            raise
        except Exception as e:
            raise StoreWriteError(f"Failed to update reminder '{record.title}': {e}")
        self.logger.info(f"Marked reminder '{record.title}' completed={completed}")
