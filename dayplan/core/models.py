"""
Domain models for dayplan.

This module contains the core data structures shared by the gateways,
the reminder controller and the presentation layer.
"""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def data_point_id(timestamp: datetime, source: str) -> str:
    """Derive a stable DataPoint identifier from its timestamp and source.

    Re-fetching the same underlying sample yields the same identifier, so
    chart rows keep their identity across refreshes.

    Args:
        timestamp: Moment the sample describes
        source: Name of whatever produced the sample

    Returns:
        Identifier in the form "dp-{hash[:12]}"
    """
    key = f"{source}|{timestamp.isoformat()}"
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return f"dp-{digest[:12]}"


class AccessScope(Enum):
    """Personal-data scopes that need a separate grant."""
    REMINDERS = "reminders"
    EVENTS = "events"


class AuthorizationStatus(Enum):
    """EKAuthorizationStatus values, in EventKit's numeric order."""
    NOT_DETERMINED = 0
    RESTRICTED = 1
    DENIED = 2
    AUTHORIZED = 3
    WRITE_ONLY = 4

    @classmethod
    def from_raw(cls, value: Any) -> "AuthorizationStatus":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.NOT_DETERMINED


class ListStatus(Enum):
    """What a reminder list snapshot represents."""
    LOADING = "loading"
    EMPTY = "empty"
    DENIED = "denied"
    FAILED = "failed"
    LOADED = "loaded"


@dataclass(frozen=True)
class ReminderRecord:
    """A reminder as handed out by the platform store.

    The platform owns the record; instances only live until the next fetch.
    """
    identifier: str
    title: str
    completed: bool
    due_date: Optional[datetime] = None
    list_name: Optional[str] = None


@dataclass(frozen=True)
class CalendarEvent:
    """Calendar event data."""
    event_id: str
    title: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    location: Optional[str] = None
    notes: Optional[str] = None
    is_all_day: bool = False
    calendar_name: str = "Unknown"


@dataclass(frozen=True)
class AccessResult:
    """Combined outcome of the reminders and events access requests."""
    reminders_granted: bool
    events_granted: bool
    errors: Tuple[BaseException, ...] = ()

    @property
    def error(self) -> Optional[BaseException]:
        """First error reported, in scope order (reminders, then events)."""
        return self.errors[0] if self.errors else None

    @property
    def fully_granted(self) -> bool:
        return self.reminders_granted and self.events_granted


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a reminder query.

    Keeps "nothing due today" apart from "access denied" and "query failed".
    """
    status: ListStatus
    reminders: Tuple[ReminderRecord, ...] = ()
    error: Optional[BaseException] = None

    @classmethod
    def loaded(cls, reminders) -> "FetchResult":
        reminders = tuple(reminders)
        if not reminders:
            return cls(ListStatus.EMPTY)
        return cls(ListStatus.LOADED, reminders)

    @classmethod
    def failed(cls, error: BaseException) -> "FetchResult":
        return cls(ListStatus.FAILED, error=error)

    @classmethod
    def denied(cls, error: Optional[BaseException] = None) -> "FetchResult":
        return cls(ListStatus.DENIED, error=error)

    @classmethod
    def loading(cls) -> "FetchResult":
        return cls(ListStatus.LOADING)

    @property
    def ok(self) -> bool:
        return self.status in (ListStatus.EMPTY, ListStatus.LOADED)

    def find(self, identifier: str) -> Optional[ReminderRecord]:
        for record in self.reminders:
            if record.identifier == identifier:
                return record
        return None


@dataclass
class Activity:
    """A task owned by the app itself (not yet backed by any store)."""
    title: str
    identifier: str = field(default_factory=lambda: str(uuid4()))
    completed: bool = False
    recurrence_rule: Optional[str] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass
class Note:
    """Free-form note that may reference activities by identifier.

    The references are not owning; removing an activity leaves them as-is.
    """
    title: str
    content: str = ""
    identifier: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    related_activity_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DataPoint:
    """One analytics sample."""
    timestamp: datetime
    value: float
    completed: bool = False
    source: str = "reminders"

    @property
    def identifier(self) -> str:
        return data_point_id(self.timestamp, self.source)

    @property
    def day(self) -> date:
        return self.timestamp.date()


class AnalyticsPeriod(Enum):
    """Periods offered by the analytics selector."""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    HALF_YEAR = "half-year"
    YEAR = "year"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]

    @classmethod
    def parse(cls, value: str) -> "AnalyticsPeriod":
        """Parse a CLI/config token such as "half-year" or "Half-Year"."""
        token = (value or "").strip().lower().replace("_", "-").replace(" ", "-")
        for period in cls:
            if token in (period.value, period.label.lower()):
                return period
        choices = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown analytics period '{value}' (expected one of: {choices})")

    def next(self) -> "AnalyticsPeriod":
        members = list(AnalyticsPeriod)
        return members[(members.index(self) + 1) % len(members)]


_PERIOD_LABELS = {
    AnalyticsPeriod.WEEK: "Week",
    AnalyticsPeriod.MONTH: "Month",
    AnalyticsPeriod.QUARTER: "Quarter",
    AnalyticsPeriod.HALF_YEAR: "Half-Year",
    AnalyticsPeriod.YEAR: "Year",
}

_PERIOD_DAYS = {
    AnalyticsPeriod.WEEK: 7,
    AnalyticsPeriod.MONTH: 30,
    AnalyticsPeriod.QUARTER: 91,
    AnalyticsPeriod.HALF_YEAR: 182,
    AnalyticsPeriod.YEAR: 365,
}


@dataclass
class AppConfig:
    """Configuration for dayplan."""

    access_timeout_seconds: float = 30.0
    fetch_timeout_seconds: float = 30.0
    default_period: str = AnalyticsPeriod.WEEK.value
    show_completed_in_home: bool = False
    # Informational only; reminder queries always span every calendar.
    calendar_ids: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.access_timeout_seconds <= 0:
            raise ValueError("access_timeout_seconds must be positive")
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be positive")
        # Validates the token; raises ValueError on garbage.
        self.default_period = AnalyticsPeriod.parse(self.default_period).value

    @property
    def period(self) -> AnalyticsPeriod:
        return AnalyticsPeriod.parse(self.default_period)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "access_timeout_seconds": self.access_timeout_seconds,
            "fetch_timeout_seconds": self.fetch_timeout_seconds,
            "default_period": self.default_period,
            "show_completed_in_home": self.show_completed_in_home,
            "calendar_ids": list(self.calendar_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        timeouts = data.get("timeouts", {})
        if not isinstance(timeouts, dict):
            raise TypeError(f"timeouts must be an object, not {type(timeouts).__name__}")
        return cls(
            access_timeout_seconds=float(
                timeouts.get("access", data.get("access_timeout_seconds", 30.0))
            ),
            fetch_timeout_seconds=float(
                timeouts.get("fetch", data.get("fetch_timeout_seconds", 30.0))
            ),
            default_period=data.get("default_period", AnalyticsPeriod.WEEK.value),
            show_completed_in_home=bool(data.get("show_completed_in_home", False)),
            calendar_ids=list(data.get("calendar_ids", [])),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> AppConfig:
        config_path = _normalize_path(config_path)
        if not os.path.exists(config_path):
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError:
            return cls()

        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save_to_file(self, config_path: str) -> None:
        config_path = _normalize_path(config_path)
        os.makedirs(os.path.dirname(config_path), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as handle:
            json.dump(self.to_dict(), handle, indent=2)
