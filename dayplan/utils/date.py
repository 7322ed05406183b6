"""
Date helpers for day-bounded queries.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple


def start_of_day(moment: datetime) -> datetime:
    """Midnight at the beginning of ``moment``'s day, keeping its tzinfo."""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def day_window(moment: datetime) -> Tuple[datetime, datetime]:
    """
    Half-open window covering the day ``moment`` falls in.

    Args:
        moment: Any instant within the wanted day

    Returns:
        (start, end) where start is midnight and end is the next midnight;
        callers treat ``end`` as exclusive.
    """
    start = start_of_day(moment)
    return start, start + timedelta(days=1)


def date_window(target_date: date) -> Tuple[datetime, datetime]:
    """Half-open window covering ``target_date`` in local naive time."""
    return day_window(datetime.combine(target_date, time.min))


def in_window(value: Optional[datetime], start: datetime, end: datetime) -> bool:
    """True when ``start <= value < end``; a missing value is never inside."""
    if value is None:
        return False
    return start <= value < end


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string (a trailing time part is ignored).

    Returns:
        Parsed date object or None if invalid
    """
    if not date_str:
        return None

    if 'T' in date_str:
        date_str = date_str.split('T')[0]

    try:
        return datetime.strptime(date_str.strip(), '%Y-%m-%d').date()
    except ValueError:
        return None
