"""
Composition root: builds the platform binding and the reminder service.

Nothing else in the package constructs an EventKitGateway; commands and
the TUI receive one (or a fake in tests) from here.
"""

from datetime import datetime
from typing import Callable, Optional
import logging

from dayplan.core.models import AppConfig
from dayplan.reminders.controller import ReminderSyncController
from dayplan.reminders.gateway import EventKitGateway
from dayplan.reminders.permissions import PermissionGateway
from dayplan.reminders.service import ReminderService
from dayplan.reminders.store import ReminderStore


def build_platform(config: AppConfig, logger: Optional[logging.Logger] = None) -> EventKitGateway:
    return EventKitGateway(fetch_timeout=config.fetch_timeout_seconds, logger=logger)


def build_service(platform, config: AppConfig, dispatcher=None,
                  clock: Optional[Callable[[], datetime]] = None) -> ReminderService:
    permissions = PermissionGateway(
        platform,
        dispatcher=dispatcher,
        timeout=config.access_timeout_seconds,
    )
    store = ReminderStore(platform, clock=clock)
    return ReminderService(permissions, store)


def build_controller(platform, config: AppConfig, dispatcher=None,
                     clock: Optional[Callable[[], datetime]] = None) -> ReminderSyncController:
    service = build_service(platform, config, dispatcher=dispatcher, clock=clock)
    return ReminderSyncController(service, dispatcher=dispatcher)


def settle_timeout(config: AppConfig) -> float:
    """Upper bound for access plus the first fetch."""
    return config.access_timeout_seconds + config.fetch_timeout_seconds + 5.0
