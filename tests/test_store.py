"""
Tests for ReminderStore (dayplan/reminders/store.py).
"""

from datetime import datetime

import pytest

from dayplan.core.exceptions import FetchError, StoreWriteError
from dayplan.core.models import ListStatus, ReminderRecord
from dayplan.reminders.store import ReminderStore
from tests.fakes import FakePlatform


def _record(identifier, due, completed=False, title=None):
    return ReminderRecord(identifier, title or identifier, completed, due)


class TestFetchToday:

    def test_only_todays_half_open_window(self, fixed_clock):
        platform = FakePlatform(reminders=[
            _record("late-yesterday", datetime(2024, 3, 14, 23, 59, 59)),
            _record("midnight", datetime(2024, 3, 15, 0, 0, 0)),
            _record("evening", datetime(2024, 3, 15, 23, 59, 59)),
            _record("tomorrow", datetime(2024, 3, 16, 0, 0, 0)),
        ])
        platform.filter_window = False
        store = ReminderStore(platform, clock=fixed_clock)

        result = store.fetch_today()

        assert result.status is ListStatus.LOADED
        assert [r.identifier for r in result.reminders] == ["midnight", "evening"]
        assert platform.fetch_windows == [
            (datetime(2024, 3, 15), datetime(2024, 3, 16))
        ]

    def test_inclusive_platform_end_bound_is_trimmed(self, fixed_clock):
        platform = FakePlatform(reminders=[
            _record("tomorrow", datetime(2024, 3, 16, 0, 0, 0)),
            _record("noon", datetime(2024, 3, 15, 12, 0, 0)),
        ])
        result = ReminderStore(platform, clock=fixed_clock).fetch_today()
        assert [r.identifier for r in result.reminders] == ["noon"]

    def test_completed_and_undated_reminders_are_dropped(self, fixed_clock):
        platform = FakePlatform(reminders=[
            _record("done", datetime(2024, 3, 15, 9), completed=True),
            _record("undated", None),
            _record("open", datetime(2024, 3, 15, 9)),
        ])
        platform.filter_window = False
        result = ReminderStore(platform, clock=fixed_clock).fetch_today()
        assert [r.identifier for r in result.reminders] == ["open"]

    def test_sorted_by_due_time(self, fixed_clock, fake_platform):
        result = ReminderStore(fake_platform, clock=fixed_clock).fetch_today()
        assert [r.identifier for r in result.reminders] == ["rem-1", "rem-2", "rem-3"]

    def test_empty_store_gives_empty_sequence(self, fixed_clock):
        result = ReminderStore(FakePlatform(), clock=fixed_clock).fetch_today()
        assert result.status is ListStatus.EMPTY
        assert result.reminders == ()
        assert result.error is None
        assert result.ok

    def test_nil_answer_is_a_failure_not_an_empty_day(self, fixed_clock):
        platform = FakePlatform()
        platform.fetch_returns_none = True
        result = ReminderStore(platform, clock=fixed_clock).fetch_today()
        assert result.status is ListStatus.FAILED
        assert isinstance(result.error, FetchError)
        assert result.reminders == ()

    def test_platform_error_is_reported(self, fixed_clock):
        platform = FakePlatform()
        platform.fetch_error = FetchError("timed out")
        result = ReminderStore(platform, clock=fixed_clock).fetch_today()
        assert result.status is ListStatus.FAILED
        assert result.error is platform.fetch_error

    def test_unexpected_exception_is_wrapped(self, fixed_clock):
        platform = FakePlatform()
        platform.fetch_error = RuntimeError("objc bridge exploded")
        result = ReminderStore(platform, clock=fixed_clock).fetch_today()
        assert isinstance(result.error, FetchError)
        assert "objc bridge exploded" in str(result.error)


class TestUpdate:

    def test_update_commits_flag(self, fake_platform, todays_reminders):
        store = ReminderStore(fake_platform)
        store.update(todays_reminders[0], True)
        assert fake_platform.saves == [("rem-1", True)]
        assert fake_platform.reminders["rem-1"].completed

    def test_missing_record_raises(self):
        store = ReminderStore(FakePlatform())
        with pytest.raises(StoreWriteError):
            store.update(_record("gone", None), True)

    def test_unexpected_failure_becomes_store_write_error(self, fake_platform, todays_reminders):
        fake_platform.write_error = OSError("disk full")
        with pytest.raises(StoreWriteError, match="disk full"):
            ReminderStore(fake_platform).update(todays_reminders[0], True)
