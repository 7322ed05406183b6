"""Composition of access, fetch and update behind one object."""

from concurrent.futures import Future
from typing import Any, Callable, Optional

from dayplan.core.models import AccessResult, FetchResult, ReminderRecord
from dayplan.reminders.permissions import PermissionGateway
from dayplan.reminders.store import ReminderStore


class ReminderService:
    """Everything ReminderSyncController needs from the outside world."""

    def __init__(self, permissions: PermissionGateway, store: ReminderStore):
        self.permissions = permissions
        self.store = store

    def request_access(self, completion: Optional[Callable[[AccessResult], Any]] = None) -> "Future[AccessResult]":
        return self.permissions.request_access(completion)

    def fetch_today(self) -> FetchResult:
        return self.store.fetch_today()

    def update(self, record: ReminderRecord, completed: bool) -> None:
        self.store.update(record, completed)
