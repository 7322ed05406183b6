"""
Reminder list state for the Act section.

ReminderSyncController asks for access as soon as it is built, loads
today's reminders once access to the reminders scope is granted, and
writes completion toggles through to the store before reloading the
whole list.
"""

import threading
from enum import Enum
from typing import Callable, List, Optional
import logging

from dayplan.core.exceptions import AuthorizationError, DayplanError, StoreWriteError
from dayplan.core.models import AccessResult, FetchResult, ReminderRecord
from dayplan.utils.dispatch import InlineDispatcher


class SyncState(Enum):
    UNINITIALIZED = "uninitialized"
    REQUESTING_ACCESS = "requesting_access"
    READY = "ready"
    REFRESHING = "refreshing"
    ACCESS_DENIED = "access_denied"


Listener = Callable[[FetchResult], None]


class ReminderSyncController:
    """
    Publishes immutable FetchResult snapshots of today's reminders.

    Listeners only ever see complete snapshots. Overlapping toggles are not
    serialized: whichever refetch finishes last decides what is shown.
    """

    def __init__(self, service, dispatcher=None,
                 logger: Optional[logging.Logger] = None):
        self.service = service
        self.dispatcher = dispatcher or InlineDispatcher()
        self.logger = logger or logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._state = SyncState.UNINITIALIZED
        self._snapshot = FetchResult.loading()
        self._access: Optional[AccessResult] = None
        self._in_flight = 0
        self._settled = threading.Event()

        self._set_state(SyncState.REQUESTING_ACCESS)
        self.access_future = self.service.request_access(self._on_access)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def state(self) -> SyncState:
        with self._lock:
            return self._state

    @property
    def snapshot(self) -> FetchResult:
        with self._lock:
            return self._snapshot

    @property
    def reminders(self):
        return self.snapshot.reminders

    @property
    def access(self) -> Optional[AccessResult]:
        with self._lock:
            return self._access

    @property
    def settled(self) -> bool:
        """True once access has been answered and the first load finished."""
        return self._settled.is_set()

    def wait_until_settled(self, timeout: Optional[float] = None) -> bool:
        return self._settled.wait(timeout)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for future snapshots; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _set_state(self, state: SyncState) -> None:
        with self._lock:
            previous, self._state = self._state, state
        if previous is not state:
            self.logger.debug(f"Reminder controller: {previous.value} -> {state.value}")

    def _on_access(self, result: AccessResult) -> None:
        with self._lock:
            self._access = result

        try:
            if result.reminders_granted:
                self._set_state(SyncState.READY)
                self.refresh()
            else:
                self._set_state(SyncState.ACCESS_DENIED)
                error = result.error or AuthorizationError("Access to Reminders was not granted")
                self.logger.warning(f"Reminders access denied: {error}")
                self._publish(FetchResult.denied(error))
        finally:
            self._settled.set()

    def _publish(self, result: FetchResult) -> None:
        with self._lock:
            self._snapshot = result
            listeners = list(self._listeners)
        for listener in listeners:
            self.dispatcher.dispatch(listener, result)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def refresh(self) -> FetchResult:
        """
        Reload today's reminders and publish the result.

        Only runs once access is granted; otherwise the current snapshot is
        returned untouched.
        """
        with self._lock:
            if self._state not in (SyncState.READY, SyncState.REFRESHING):
                self.logger.debug(f"Skipping refresh in state {self._state.value}")
                return self._snapshot
            self._in_flight += 1
            self._state = SyncState.REFRESHING

        try:
            result = self.service.fetch_today()
        except DayplanError as e:
            result = FetchResult.failed(e)

        with self._lock:
            self._snapshot = result
            listeners = list(self._listeners)
            self._in_flight -= 1
            if self._in_flight == 0:
                self._state = SyncState.READY

        if result.error is not None:
            self.logger.warning(f"Reminder refresh failed: {result.error}")
        for listener in listeners:
            self.dispatcher.dispatch(listener, result)
        return result

    def toggle_completion(self, record: ReminderRecord) -> bool:
        """
        Flip ``record``'s completion flag in the store, then reload the list.

        A rejected write is logged and leaves the published list as it was.

        Returns:
            True if the store accepted the change
        """
        completed = not record.completed
        try:
            self.service.update(record, completed)
        except StoreWriteError as e:
            self.logger.error(f"Failed to toggle reminder '{record.title}': {e}")
            return False

        self.refresh()
        return True

    def toggle_by_id(self, identifier: str) -> bool:
        """Toggle the reminder with ``identifier`` from the current snapshot."""
        record = self.snapshot.find(identifier)
        if record is None:
            self.logger.warning(f"No reminder with id {identifier} in today's list")
            return False
        return self.toggle_completion(record)
