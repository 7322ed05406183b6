"""Act command - today's incomplete reminders, with tap-to-toggle."""

import logging
from typing import Optional

from ..app import build_controller, settle_timeout
from ..core.models import AppConfig
from ..utils.dispatch import QueueDispatcher
from ..utils.formatting import format_reminder_list


class ActCommand:
    """Lists today's reminders and optionally toggles one of them."""

    def __init__(self, config: AppConfig, platform, verbose: bool = False):
        self.config = config
        self.platform = platform
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)

    def run(self, toggle_id: Optional[str] = None, show_ids: bool = False) -> bool:
        """
        Run the act command.

        Args:
            toggle_id: Identifier of a reminder to toggle before listing
            show_ids: Print reminder identifiers next to titles

        Returns:
            True if the list could be shown (and the toggle, if any, applied)
        """
        dispatcher = QueueDispatcher()
        controller = build_controller(self.platform, self.config, dispatcher=dispatcher)

        settled = dispatcher.run_until(
            lambda: controller.settled,
            timeout=settle_timeout(self.config),
            idle=self.platform.pump,
        )
        if not settled:
            print("Timed out waiting for the reminder store.")
            return False

        success = True
        if toggle_id:
            success = controller.toggle_by_id(toggle_id)
            dispatcher.drain()
            if not success:
                print(f"Could not toggle reminder {toggle_id}; the list below is unchanged.")

        snapshot = controller.snapshot
        print("\nToday")
        print("=" * 40)
        for line in format_reminder_list(snapshot, show_ids=show_ids or bool(toggle_id)):
            print(line)
        return success and snapshot.ok
