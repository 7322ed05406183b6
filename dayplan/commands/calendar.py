"""Calendar command - list the events of a day."""

import logging
from datetime import date
from typing import Optional

from ..calendar.gateway import CalendarGateway
from ..core.exceptions import DayplanError
from ..core.models import AppConfig
from ..reminders.permissions import PermissionGateway
from ..utils.date import parse_date
from ..utils.dispatch import QueueDispatcher
from ..utils.formatting import error_summary, format_events


class CalendarCommand:
    """Shows calendar events for one day."""

    def __init__(self, config: AppConfig, platform, verbose: bool = False):
        self.config = config
        self.platform = platform
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)

    def run(self, date_str: Optional[str] = None) -> bool:
        target_date = date.today()
        if date_str:
            target_date = parse_date(date_str)
            if target_date is None:
                print(f"Invalid date '{date_str}'. Use YYYY-MM-DD.")
                return False

        dispatcher = QueueDispatcher()
        permissions = PermissionGateway(
            self.platform, dispatcher=dispatcher,
            timeout=self.config.access_timeout_seconds,
        )
        access = permissions.request_access()
        dispatcher.run_until(access.done, idle=self.platform.pump)

        if not access.result().events_granted:
            error = access.result().error
            print("Calendar access not granted.")
            if error is not None:
                print(f"  {error_summary(error)}")
            return False

        try:
            events = CalendarGateway(self.platform).events_for_date(target_date)
        except DayplanError as exc:
            self.logger.error("Calendar fetch failed: %s", exc)
            print(f"Could not load events: {exc}")
            return False

        for line in format_events(target_date, events):
            print(line)
        return True
