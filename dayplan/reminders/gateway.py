"""Apple Reminders and Calendar access through EventKit."""

import threading
import time
from datetime import datetime
from typing import Any, Callable, List, Optional
import logging

from dayplan.core.exceptions import (
    PlatformError,
    EventKitImportError,
    FetchError,
    StoreWriteError
)
from dayplan.core.models import (
    AccessScope,
    AuthorizationStatus,
    CalendarEvent,
    ReminderRecord
)


def describe_platform_error(error: Any) -> str:
    """Best-effort human text for an NSError (or anything else)."""
    if error is None:
        return "unknown error"
    if hasattr(error, 'localizedDescription'):
        try:
            return str(error.localizedDescription())
        except Exception:
            pass
    return str(error)


class EventKitGateway:
    """
    Thin binding over one EKEventStore.

    Access requests stay callback based so they can be joined by
    PermissionGateway; queries and saves block the caller until EventKit
    answers or the fetch timeout expires.
    """

    def __init__(self, fetch_timeout: float = 30.0,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.fetch_timeout = fetch_timeout
        self._store = None
        self._store_lock = threading.Lock()
        self._loaded = False

    def _ensure_eventkit(self):
        """Import EventKit with specific error handling."""
        if self._loaded:
            return
        try:
            import objc  # noqa: F401
            from EventKit import (
                EKEventStore, EKEntityTypeReminder, EKEntityTypeEvent
            )
            from Foundation import NSRunLoop, NSDate, NSCalendar
        except ImportError as e:
            self.logger.error(f"EventKit import failed: {e}")
            raise EventKitImportError(
                "EventKit not available. Please install PyObjC framework:\n"
                "  pip install 'dayplan[macos]'\n"
                f"Import error details: {e}"
            )

        self._EKEventStore = EKEventStore
        self._entity_types = {
            AccessScope.REMINDERS: EKEntityTypeReminder,
            AccessScope.EVENTS: EKEntityTypeEvent,
        }
        self._NSRunLoop = NSRunLoop
        self._NSDate = NSDate
        self._NSCalendar = NSCalendar
        self._loaded = True

    def _get_store(self):
        """Get or create the EventKit store."""
        with self._store_lock:
            if self._store is not None:
                return self._store

            self._ensure_eventkit()
            try:
                self._store = self._EKEventStore.alloc().init()
                self.logger.debug("EventKit store created successfully")
            except Exception as e:
                self.logger.error(f"Failed to create EventKit store: {e}")
                raise PlatformError(
                    f"Failed to initialize EventKit store: {e}\n"
                    "This may indicate a system-level EventKit issue."
                )
            return self._store

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------
    def authorization_status(self, scope: AccessScope) -> AuthorizationStatus:
        self._ensure_eventkit()
        raw = self._EKEventStore.authorizationStatusForEntityType_(
            self._entity_types[scope]
        )
        return AuthorizationStatus.from_raw(raw)

    def request_access(self, scope: AccessScope,
                       completion: Callable[[bool, Any], None]) -> None:
        """
        Ask EventKit for access to one scope.

        ``completion(granted, error)`` runs on a thread EventKit chooses.
        """
        store = self._get_store()

        def handler(granted, error):
            self.logger.debug(f"{scope.value} access answered: granted={bool(granted)}")
            completion(bool(granted), error)

        # macOS 14 split access into full/write-only; the old call is
        # deprecated there but still the only one on earlier releases.
        if scope is AccessScope.REMINDERS and hasattr(store, 'requestFullAccessToRemindersWithCompletion_'):
            store.requestFullAccessToRemindersWithCompletion_(handler)
        elif scope is AccessScope.EVENTS and hasattr(store, 'requestFullAccessToEventsWithCompletion_'):
            store.requestFullAccessToEventsWithCompletion_(handler)
        else:
            store.requestAccessToEntityType_completion_(
                self._entity_types[scope], handler
            )

    # ------------------------------------------------------------------
    # Run loop helpers
    # ------------------------------------------------------------------
    def pump(self, seconds: float = 0.1) -> None:
        """Run the current thread's run loop briefly so callbacks can fire."""
        try:
            self._ensure_eventkit()
        except EventKitImportError:
            time.sleep(seconds)
            return
        self._NSRunLoop.currentRunLoop().runUntilDate_(
            self._NSDate.dateWithTimeIntervalSinceNow_(seconds)
        )

    def _wait(self, done: threading.Event, what: str) -> None:
        start_time = time.time()
        while not done.is_set():
            if time.time() - start_time > self.fetch_timeout:
                raise FetchError(
                    f"{what} timed out after {self.fetch_timeout:g} seconds.\n"
                    "EventKit did not answer; try again or check system load."
                )
            self.pump(0.1)

    def _ns_date(self, value: datetime):
        return self._NSDate.dateWithTimeIntervalSince1970_(value.timestamp())

    def _from_ns_date(self, value, tz=None) -> Optional[datetime]:
        if value is None:
            return None
        return datetime.fromtimestamp(value.timeIntervalSince1970(), tz=tz)

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------
    def fetch_incomplete_reminders(self, start: datetime,
                                   end: datetime) -> Optional[List[ReminderRecord]]:
        """
        Incomplete reminders due between ``start`` and ``end`` in every list.

        Returns:
            Records converted from EventKit, or None when EventKit
            handed back nil instead of an array.
        """
        store = self._get_store()

        try:
            predicate = store.predicateForIncompleteRemindersWithDueDateStarting_ending_calendars_(
                self._ns_date(start), self._ns_date(end), None
            )
        except Exception as e:
            self.logger.error(f"Failed to create reminders predicate: {e}")
            raise FetchError(f"Failed to prepare reminder fetch: {e}")

        done = threading.Event()
        box = {'reminders': None}

        def completion(fetched):
            if fetched is not None:
                box['reminders'] = list(fetched)
            done.set()

        try:
            store.fetchRemindersMatchingPredicate_completion_(predicate, completion)
            self._wait(done, "Reminder fetch")
        except FetchError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to fetch reminders: {e}")
            raise FetchError(f"Failed to fetch reminders: {e}")

        if box['reminders'] is None:
            return None

        records = []
        for rem in box['reminders']:
            try:
                records.append(self._to_record(rem))
            except Exception as e:
                self.logger.warning(f"Failed to process reminder: {e}")
        return records

    def _to_record(self, rem) -> ReminderRecord:
        due_date = None
        components = rem.dueDateComponents()
        if components is not None:
            ns_date = self._NSCalendar.currentCalendar().dateFromComponents_(components)
            due_date = self._from_ns_date(ns_date)

        list_name = None
        cal = rem.calendar()
        if cal is not None:
            list_name = str(cal.title() or 'Untitled')

        return ReminderRecord(
            identifier=str(rem.calendarItemIdentifier()),
            title=str(rem.title() or ''),
            completed=bool(rem.isCompleted()),
            due_date=due_date,
            list_name=list_name,
        )

    def save_completion(self, identifier: str, completed: bool) -> None:
        """
        Set the completion flag on a reminder and commit immediately.

        Raises:
            StoreWriteError: the reminder is gone or EventKit rejected the save
        """
        store = self._get_store()
        try:
            reminder = store.calendarItemWithIdentifier_(identifier)
        except Exception as e:
            raise StoreWriteError(f"Failed to look up reminder {identifier}: {e}")

        if reminder is None:
            raise StoreWriteError(
                f"Reminder {identifier} no longer exists in the reminder store"
            )

        try:
            reminder.setCompleted_(bool(completed))
            success, error = store.saveReminder_commit_error_(reminder, True, None)
        except Exception as e:
            raise StoreWriteError(f"Failed to save reminder {identifier}: {e}")

        self.logger.debug(f"saveReminder result: success={success}, error={error}")
        if not success:
            raise StoreWriteError(
                f"EventKit rejected the change to reminder {identifier}: "
                f"{describe_platform_error(error)}"
            )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def events_between(self, start: datetime, end: datetime) -> List[CalendarEvent]:
        """Events overlapping ``[start, end)`` across all calendars."""
        store = self._get_store()

        try:
            predicate = store.predicateForEventsWithStartDate_endDate_calendars_(
                self._ns_date(start), self._ns_date(end), None
            )
            events = store.eventsMatchingPredicate_(predicate) or []
        except Exception as e:
            self.logger.error(f"Failed to fetch events: {e}")
            raise FetchError(f"Failed to fetch calendar events: {e}")

        result = []
        for event in events:
            try:
                cal = event.calendar()
                result.append(CalendarEvent(
                    event_id=str(event.eventIdentifier()),
                    title=str(event.title() or 'Untitled'),
                    start_time=self._from_ns_date(event.startDate()),
                    end_time=self._from_ns_date(event.endDate()),
                    location=str(event.location()) if event.location() else None,
                    notes=str(event.notes()) if event.notes() else None,
                    is_all_day=bool(event.isAllDay()),
                    calendar_name=str(cal.title()) if cal else 'Unknown',
                ))
            except Exception as e:
                self.logger.warning(f"Failed to process event: {e}")
                continue
        return result
