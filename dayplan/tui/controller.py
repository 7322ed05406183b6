#!/usr/bin/env python3
"""
TUI Controller Module - Section navigation and key handling.

The controller owns the reminder controller, calendar gateway and
analytics model, turns key presses into actions and produces plain text
for TUIView to draw. Slow work (toggles, refreshes) runs on worker
threads; results come back through the QueueDispatcher drained by the
main loop.
"""

from __future__ import annotations

import curses
import threading
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from dayplan.analytics.model import AnalyticsModel, render_chart
from dayplan.app import build_controller
from dayplan.calendar.gateway import CalendarGateway
from dayplan.core.exceptions import DayplanError
from dayplan.core.models import AnalyticsPeriod, AppConfig, FetchResult, ListStatus, ReminderRecord
from dayplan.utils.dispatch import QueueDispatcher
from dayplan.utils.formatting import format_events, format_reminder, format_reminder_list


SECTIONS = ["Home", "Act", "Calendar", "Analytics", "Settings"]
HOME, ACT, CALENDAR, ANALYTICS, SETTINGS = range(len(SECTIONS))


class TUIController:
    """Drives the five-section terminal UI."""

    def __init__(self, view, platform, config: AppConfig,
                 config_path: Optional[str] = None,
                 dispatcher: Optional[QueueDispatcher] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 log_buffer=None):
        self.view = view
        self.platform = platform
        self.config = config
        self.config_path = config_path
        self.dispatcher = dispatcher or QueueDispatcher()
        self.clock = clock or datetime.now
        self.log_buffer = log_buffer

        self.reminders = build_controller(
            platform, config, dispatcher=self.dispatcher, clock=clock
        )
        self.reminders.subscribe(self._on_snapshot)
        self.calendar = CalendarGateway(platform)
        self.analytics = AnalyticsModel(config.period)
        self.analytics.fetch_data(config.period)

        # UI State
        self.section = HOME
        self.selected = 0
        self.status = "Requesting access..."
        self.is_running = True
        self.calendar_date: date = self.clock().date()
        self.events: Optional[List[Any]] = None
        self.events_error: Optional[str] = None
        self.completed_today: List[ReminderRecord] = []

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        while self.is_running:
            self.dispatcher.drain()
            self.view.draw(self.state())
            key = self.view.get_key()
            if key != -1:
                self.handle_key(key)
            self.platform.pump(0.02)

    def state(self) -> Dict[str, Any]:
        return {
            'sections': SECTIONS,
            'section': self.section,
            'lines': self.body_lines(),
            'highlight': self.selected if self._act_has_rows() else None,
            'status': self.status,
        }

    # ------------------------------------------------------------------
    # Callbacks (main context)
    # ------------------------------------------------------------------
    def _on_snapshot(self, snapshot: FetchResult) -> None:
        if snapshot.reminders:
            self.selected = min(self.selected, len(snapshot.reminders) - 1)
        else:
            self.selected = 0
        if snapshot.status is ListStatus.DENIED:
            self.status = "Reminders access denied"
        elif snapshot.status is ListStatus.FAILED:
            self.status = "Reminder fetch failed"
        else:
            self.status = f"{len(snapshot.reminders)} reminder(s) due today"
        if self.section == CALENDAR and self.events is None:
            self.load_events()

    def _set_status(self, status: str) -> None:
        self.status = status

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    def handle_key(self, key: int) -> None:
        if key in (ord('q'), ord('Q')):
            self.is_running = False
            return
        if key == ord('\t'):
            self.switch_section((self.section + 1) % len(SECTIONS))
            return
        if key == curses.KEY_BTAB:
            self.switch_section((self.section - 1) % len(SECTIONS))
            return
        if ord('1') <= key <= ord(str(len(SECTIONS))):
            self.switch_section(key - ord('1'))
            return

        if self.section == ACT:
            self._handle_act_key(key)
        elif self.section == CALENDAR:
            self._handle_calendar_key(key)
        elif self.section == ANALYTICS:
            if key in (ord('p'), ord('P')):
                self.select_period(self.analytics.period.next())

    def _handle_act_key(self, key: int) -> None:
        count = len(self.reminders.reminders)
        if key in (curses.KEY_UP, ord('k')) and count:
            self.selected = (self.selected - 1) % count
        elif key in (curses.KEY_DOWN, ord('j')) and count:
            self.selected = (self.selected + 1) % count
        elif key in (ord(' '), ord('\n'), curses.KEY_ENTER):
            self.toggle_selected()
        elif key in (ord('r'), ord('R')):
            self._in_background(self._refresh)

    def _handle_calendar_key(self, key: int) -> None:
        if key in (curses.KEY_LEFT, ord('[')):
            self.calendar_date -= timedelta(days=1)
            self.load_events()
        elif key in (curses.KEY_RIGHT, ord(']')):
            self.calendar_date += timedelta(days=1)
            self.load_events()
        elif key in (ord('t'), ord('T')):
            self.calendar_date = self.clock().date()
            self.load_events()
        elif key in (ord('r'), ord('R')):
            self.load_events()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def switch_section(self, index: int) -> None:
        self.section = index
        if index == CALENDAR and self.events is None:
            self.load_events()

    def select_period(self, period: AnalyticsPeriod) -> None:
        self.analytics.fetch_data(period)
        self.status = f"Analytics period: {period.label}"

    def toggle_selected(self) -> Optional[threading.Thread]:
        records = self.reminders.reminders
        if not records:
            return None
        record = records[min(self.selected, len(records) - 1)]
        self.status = f"Updating '{record.title}'..."
        return self._in_background(self._toggle, record)

    def _toggle(self, record) -> None:
        if self.reminders.toggle_completion(record):
            self.dispatcher.dispatch(self._record_toggle, record)
            return
        self.dispatcher.dispatch(self._set_status, f"Could not update '{record.title}' (see log)")

    def _record_toggle(self, record: ReminderRecord) -> None:
        self.completed_today = [r for r in self.completed_today if r.identifier != record.identifier]
        if not record.completed:
            self.completed_today.append(replace(record, completed=True))

    def _refresh(self) -> None:
        self.reminders.refresh()

    def _in_background(self, fn, *args) -> threading.Thread:
        worker = threading.Thread(target=fn, args=args, daemon=True)
        worker.start()
        return worker

    def load_events(self) -> None:
        access = self.reminders.access
        if access is None:
            self.events, self.events_error = None, "Waiting for calendar access..."
            return
        if not access.events_granted:
            self.events, self.events_error = [], "Calendar access not granted."
            return
        try:
            self.events = self.calendar.events_for_date(self.calendar_date)
            self.events_error = None
        except DayplanError as e:
            self.events, self.events_error = [], f"Could not load events: {e}"

    # ------------------------------------------------------------------
    # Section bodies
    # ------------------------------------------------------------------
    def _act_has_rows(self) -> bool:
        return self.section == ACT and self.reminders.snapshot.status is ListStatus.LOADED

    def body_lines(self) -> List[str]:
        if self.section == HOME:
            return self._home_lines()
        if self.section == ACT:
            return format_reminder_list(self.reminders.snapshot)
        if self.section == CALENDAR:
            return self._calendar_lines()
        if self.section == ANALYTICS:
            return self._analytics_lines()
        return self._settings_lines()

    def _home_lines(self) -> List[str]:
        today = self.clock()
        snapshot = self.reminders.snapshot
        lines = [today.strftime("%A, %d %B %Y"), ""]
        if snapshot.status is ListStatus.LOADED:
            lines.append(f"{len(snapshot.reminders)} reminder(s) left today")
            lines.append(f"Next: {snapshot.reminders[0].title}")
        else:
            lines.extend(format_reminder_list(snapshot))
        access = self.reminders.access
        if access is not None and not access.events_granted:
            lines.append("Calendar access not granted")
        if self.config.show_completed_in_home and self.completed_today:
            lines.extend(["", "Done today:"])
            lines.extend(f"  {format_reminder(r)}" for r in self.completed_today)
        lines.append("")
        lines.append("Tab/1-5 switch sections, q quits")
        return lines

    def _calendar_lines(self) -> List[str]:
        if self.events_error:
            return [self.events_error]
        if self.events is None:
            return ["Loading events..."]
        lines = format_events(self.calendar_date, self.events)
        lines.extend(["", "[ / ] previous/next day, t today, r reload"])
        return lines

    def _analytics_lines(self) -> List[str]:
        period = self.analytics.period
        selector = "  ".join(
            f"[{p.label}]" if p is period else p.label for p in AnalyticsPeriod
        )
        lines = [selector, ""]
        lines.extend(render_chart(self.analytics.chart_series(),
                                  width=max(10, self.view.width - 12)))
        lines.extend(["", "p cycles the period"])
        return lines

    def _settings_lines(self) -> List[str]:
        lines = [
            f"Config file:     {self.config_path or '(default)'}",
            f"Access timeout:  {self.config.access_timeout_seconds:g}s",
            f"Fetch timeout:   {self.config.fetch_timeout_seconds:g}s",
            f"Default period:  {self.config.period.label}",
        ]
        access = self.reminders.access
        if access is not None:
            lines.append(f"Reminders access: {'granted' if access.reminders_granted else 'denied'}")
            lines.append(f"Calendar access:  {'granted' if access.events_granted else 'denied'}")
        if self.log_buffer is not None:
            lines.extend(["", "Recent log:"])
            lines.extend(self.log_buffer.lines(8))
        return lines
