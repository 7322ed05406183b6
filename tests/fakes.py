#!/usr/bin/env python3
"""
In-memory stand-in for EventKitGateway.

Implements the same capability set (request_access, fetch_incomplete_reminders,
save_completion, events_between, pump) so the reminder flow can be exercised
without EventKit. Tests can hold access callbacks back, make fetches wait
on a gate, and inject platform failures.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from dayplan.core.exceptions import StoreWriteError
from dayplan.core.models import AccessScope, CalendarEvent, ReminderRecord


class PendingFetch:
    """A fetch parked until the test releases it."""

    def __init__(self, result: List[ReminderRecord]):
        self.result = result
        self.release = threading.Event()


class FakePlatform:
    """In-memory reminder/calendar store keyed by reminder identifier."""

    def __init__(self, reminders: Optional[List[ReminderRecord]] = None,
                 events: Optional[List[CalendarEvent]] = None):
        self._cond = threading.Condition()
        self.reminders: Dict[str, ReminderRecord] = {r.identifier: r for r in reminders or []}
        self.events: List[CalendarEvent] = list(events or [])

        self.grants: Dict[AccessScope, Tuple[bool, Any]] = {
            AccessScope.REMINDERS: (True, None),
            AccessScope.EVENTS: (True, None),
        }
        self.defer_access = False
        self.access_callbacks: Dict[AccessScope, Callable[[bool, Any], None]] = {}
        self.access_error: Optional[Exception] = None

        # EventKit's predicate keeps reminders due exactly at the end bound.
        self.filter_window = True
        self.fetch_windows: List[Tuple[datetime, datetime]] = []
        self.fetch_returns_none = False
        self.fetch_error: Optional[Exception] = None
        self.gate_fetches = False
        self.pending_fetches: List[PendingFetch] = []

        self.write_error: Optional[Exception] = None
        self.saves: List[Tuple[str, bool]] = []
        self.pump_calls = 0

    # Test helper API
    def answer(self, scope: AccessScope) -> None:
        granted, error = self.grants[scope]
        self.access_callbacks[scope](granted, error)

    def wait_for_pending(self, count: int, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: len(self.pending_fetches) >= count, timeout)

    # Capability set used by dayplan
    def request_access(self, scope: AccessScope, completion) -> None:
        if self.access_error is not None:
            raise self.access_error
        if self.defer_access:
            self.access_callbacks[scope] = completion
            return
        granted, error = self.grants[scope]
        completion(granted, error)

    def fetch_incomplete_reminders(self, start: datetime, end: datetime):
        with self._cond:
            self.fetch_windows.append((start, end))
            if self.fetch_error is not None:
                raise self.fetch_error
            if self.fetch_returns_none:
                return None
            result = [
                r for r in self.reminders.values()
                if not self.filter_window or (
                    not r.completed and r.due_date is not None and start <= r.due_date <= end
                )
            ]

        if self.gate_fetches:
            pending = PendingFetch(result)
            with self._cond:
                self.pending_fetches.append(pending)
                self._cond.notify_all()
            pending.release.wait(5.0)
        return result

    def save_completion(self, identifier: str, completed: bool) -> None:
        if self.write_error is not None:
            raise self.write_error
        with self._cond:
            record = self.reminders.get(identifier)
            if record is None:
                raise StoreWriteError(f"Reminder {identifier} no longer exists")
            self.reminders[identifier] = replace(record, completed=completed)
            self.saves.append((identifier, completed))

    def events_between(self, start: datetime, end: datetime) -> List[CalendarEvent]:
        return list(self.events)

    def pump(self, seconds: float = 0.1) -> None:
        self.pump_calls += 1
