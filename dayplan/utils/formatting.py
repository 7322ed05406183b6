"""
Plain-text rendering shared by the CLI commands and the TUI.
"""

from datetime import date
from typing import List

from dayplan.core.models import CalendarEvent, FetchResult, ListStatus, ReminderRecord


STATUS_MESSAGES = {
    ListStatus.LOADING: "Loading today's reminders...",
    ListStatus.EMPTY: "Nothing due today.",
    ListStatus.DENIED: "Access to Reminders was not granted.",
    ListStatus.FAILED: "Could not load today's reminders.",
}


def error_summary(error: BaseException) -> str:
    """First line of an error message, or the error type when the message is empty."""
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


def format_reminder(record: ReminderRecord) -> str:
    box = "[x]" if record.completed else "[ ]"
    due = record.due_date.strftime("%H:%M") if record.due_date else "--:--"
    suffix = f"  ({record.list_name})" if record.list_name else ""
    return f"{box} {due}  {record.title}{suffix}"


def format_reminder_list(result: FetchResult, show_ids: bool = False) -> List[str]:
    """Lines describing a reminder snapshot, including why it may be empty."""
    if result.status is not ListStatus.LOADED:
        lines = [STATUS_MESSAGES[result.status]]
        if result.error is not None and result.status in (ListStatus.DENIED, ListStatus.FAILED):
            lines.append(f"  {error_summary(result.error)}")
        return lines

    lines = []
    for record in result.reminders:
        line = format_reminder(record)
        if show_ids:
            line = f"{line}  [{record.identifier}]"
        lines.append(line)
    return lines


def format_event(event: CalendarEvent) -> str:
    if event.is_all_day:
        when = "all-day    "
    else:
        start = event.start_time.strftime("%H:%M") if event.start_time else "--:--"
        end = event.end_time.strftime("%H:%M") if event.end_time else "--:--"
        when = f"{start}-{end}"
    where = f" @ {event.location}" if event.location else ""
    return f"{when}  {event.title}{where}  ({event.calendar_name})"


def format_events(target_date: date, events: List[CalendarEvent]) -> List[str]:
    header = f"Events on {target_date.strftime('%A %Y-%m-%d')}"
    if not events:
        return [header, "  No events."]
    return [header] + [f"  {format_event(e)}" for e in events]
