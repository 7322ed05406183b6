"""
Curses user interface for dayplan.
"""

import curses
import logging
from typing import Optional

from dayplan.core.models import AppConfig

from .controller import TUIController, SECTIONS
from .log_buffer import LogBuffer
from .view import TUIView


def run_tui(platform, config: AppConfig, config_path: Optional[str] = None) -> bool:
    """Run the TUI until the user quits."""
    log_buffer = LogBuffer()
    root = logging.getLogger("dayplan")
    root.addHandler(log_buffer)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    def _main(stdscr):
        view = TUIView(stdscr)
        controller = TUIController(view, platform, config,
                                   config_path=config_path, log_buffer=log_buffer)
        controller.run()

    try:
        curses.wrapper(_main)
    finally:
        root.removeHandler(log_buffer)
    return True


__all__ = ['run_tui', 'TUIController', 'TUIView', 'LogBuffer', 'SECTIONS']
