"""Reminders module for Apple Reminders integration."""

from .gateway import EventKitGateway
from .permissions import PermissionGateway
from .store import ReminderStore
from .service import ReminderService
from .controller import ReminderSyncController, SyncState

__all__ = [
    'EventKitGateway',
    'PermissionGateway',
    'ReminderStore',
    'ReminderService',
    'ReminderSyncController',
    'SyncState',
]
