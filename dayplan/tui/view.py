#!/usr/bin/env python3
"""
TUI View Module - Handles all curses drawing.

The view knows nothing about reminders; it draws a tab bar, the lines the
controller hands it and a status bar.
"""

from __future__ import annotations

import curses
from typing import Any, Dict, List, Optional


class TUIView:
    """Visual presentation and curses rendering for the TUI."""

    def __init__(self, stdscr, key_timeout_ms: int = 100):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)
        self.stdscr.timeout(key_timeout_ms)
        self.height, self.width = self.stdscr.getmaxyx()

    def get_key(self) -> int:
        """Next key press, or -1 when the timeout passes without one."""
        try:
            return self.stdscr.getch()
        except curses.error:
            return -1

    def draw(self, state: Dict[str, Any]) -> None:
        """
        Draw one frame.

        Args:
            state: Dictionary with
                - sections: section names
                - section: index of the active section
                - lines: body text lines
                - highlight: body line index to highlight, or None
                - status: status bar message
        """
        self.height, self.width = self.stdscr.getmaxyx()
        self.stdscr.erase()

        if self.height < 8 or self.width < 40:
            self._addstr(0, 0, "Terminal too small (need 40x8 min)")
            self.stdscr.refresh()
            return

        self._draw_tabs(state['sections'], state['section'])
        self._draw_body(state['lines'], state.get('highlight'))
        self._draw_status_bar(state['status'])
        self.stdscr.refresh()

    def _addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        if y >= self.height or x >= self.width:
            return
        try:
            self.stdscr.addstr(y, x, text[:max(0, self.width - x - 1)], attr)
        except curses.error:
            pass

    def _draw_tabs(self, sections: List[str], active: int) -> None:
        x = 1
        for index, name in enumerate(sections):
            label = f" {index + 1}:{name} "
            attr = curses.A_REVERSE if index == active else curses.A_NORMAL
            self._addstr(0, x, label, attr)
            x += len(label) + 1
        self._addstr(1, 0, "-" * (self.width - 1))

    def _draw_body(self, lines: List[str], highlight: Optional[int]) -> None:
        top = 2
        room = self.height - top - 2
        offset = 0
        if highlight is not None and highlight >= room:
            offset = highlight - room + 1
        for row, line in enumerate(lines[offset:offset + room]):
            index = row + offset
            attr = curses.A_REVERSE if index == highlight else curses.A_NORMAL
            self._addstr(top + row, 2, line, attr)

    def _draw_status_bar(self, status: str) -> None:
        y = self.height - 1
        self._addstr(y, 0, " " * (self.width - 1), curses.A_REVERSE)
        self._addstr(y, 1, status, curses.A_REVERSE)
