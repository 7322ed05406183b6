"""
Tests for ReminderSyncController (dayplan/reminders/controller.py).

Validates the access -> load flow, write-through toggles, failure handling
and the last-fetch-wins race between overlapping toggles.
"""

import threading
from dataclasses import replace
from unittest.mock import Mock

from dayplan.app import build_controller
from dayplan.core.exceptions import FetchError, StoreWriteError
from dayplan.core.models import AccessScope, AppConfig, FetchResult, ListStatus
from dayplan.reminders.controller import ReminderSyncController, SyncState
from dayplan.reminders.service import ReminderService
from dayplan.reminders.store import ReminderStore


def _ready_controller(platform, clock):
    controller = build_controller(platform, AppConfig(), clock=clock)
    assert controller.wait_until_settled(5)
    return controller


class TestStartup:

    def test_requests_access_on_construction(self, fake_platform, fixed_clock):
        fake_platform.defer_access = True
        controller = build_controller(fake_platform, AppConfig(), clock=fixed_clock)

        assert controller.state is SyncState.REQUESTING_ACCESS
        assert set(fake_platform.access_callbacks) == {AccessScope.REMINDERS, AccessScope.EVENTS}
        assert controller.snapshot.status is ListStatus.LOADING
        assert not controller.settled

    def test_grant_loads_todays_reminders(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)

        assert controller.state is SyncState.READY
        assert controller.snapshot.status is ListStatus.LOADED
        assert [r.identifier for r in controller.reminders] == ["rem-1", "rem-2", "rem-3"]
        assert controller.access.fully_granted

    def test_events_denial_does_not_block_reminders(self, fake_platform, fixed_clock):
        fake_platform.grants[AccessScope.EVENTS] = (False, None)
        controller = _ready_controller(fake_platform, fixed_clock)

        assert controller.state is SyncState.READY
        assert len(controller.reminders) == 3
        assert not controller.access.events_granted

    def test_reminders_denial_is_explicit(self, fake_platform, fixed_clock):
        fake_platform.grants[AccessScope.REMINDERS] = (False, None)
        controller = _ready_controller(fake_platform, fixed_clock)

        assert controller.state is SyncState.ACCESS_DENIED
        assert controller.snapshot.status is ListStatus.DENIED
        assert controller.snapshot.error is not None
        assert controller.reminders == ()
        assert fake_platform.fetch_windows == []

    def test_refresh_is_skipped_while_denied(self, fake_platform, fixed_clock):
        fake_platform.grants[AccessScope.REMINDERS] = (False, None)
        controller = _ready_controller(fake_platform, fixed_clock)

        assert controller.refresh() is controller.snapshot
        assert fake_platform.fetch_windows == []

    def test_failed_fetch_is_published(self, fake_platform, fixed_clock):
        fake_platform.fetch_returns_none = True
        controller = _ready_controller(fake_platform, fixed_clock)

        assert controller.state is SyncState.READY
        assert controller.snapshot.status is ListStatus.FAILED
        assert isinstance(controller.snapshot.error, FetchError)


class TestToggle:

    def test_toggle_writes_through_and_refetches(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        record = controller.reminders[0]
        fetches_before = len(fake_platform.fetch_windows)

        assert controller.toggle_completion(record) is True

        assert fake_platform.saves == [("rem-1", True)]
        assert len(fake_platform.fetch_windows) == fetches_before + 1
        assert controller.snapshot.find("rem-1") is None
        # The next query agrees with what the controller shows.
        fresh = ReminderStore(fake_platform, clock=fixed_clock).fetch_today()
        assert fresh.find("rem-1") is None
        assert controller.state is SyncState.READY

    def test_toggle_of_completed_record_reopens_it(self, fake_platform, fixed_clock, todays_reminders):
        controller = _ready_controller(fake_platform, fixed_clock)
        fake_platform.save_completion("rem-2", True)
        controller.refresh()
        assert controller.snapshot.find("rem-2") is None
        completed = replace(todays_reminders[1], completed=True)

        assert controller.toggle_completion(completed)
        assert fake_platform.saves[-1] == ("rem-2", False)
        assert controller.snapshot.find("rem-2") is not None

    def test_failed_write_leaves_list_untouched(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        before = controller.snapshot
        fetches_before = len(fake_platform.fetch_windows)
        fake_platform.write_error = StoreWriteError("permission revoked")

        assert controller.toggle_completion(before.reminders[0]) is False

        assert controller.snapshot is before
        assert controller.snapshot == before
        assert len(fake_platform.fetch_windows) == fetches_before

    def test_toggle_by_unknown_id(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        assert controller.toggle_by_id("nope") is False
        assert fake_platform.saves == []

    def test_toggle_by_id(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        assert controller.toggle_by_id("rem-3") is True
        assert [r.identifier for r in controller.reminders] == ["rem-1", "rem-2"]

    def test_overlapping_toggles_last_fetch_wins(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        first, second = controller.reminders[0], controller.reminders[1]
        fake_platform.gate_fetches = True

        toggle_a = threading.Thread(target=controller.toggle_completion, args=(first,))
        toggle_a.start()
        assert fake_platform.wait_for_pending(1)
        fetch_a = fake_platform.pending_fetches[0]

        toggle_b = threading.Thread(target=controller.toggle_completion, args=(second,))
        toggle_b.start()
        assert fake_platform.wait_for_pending(2)
        fetch_b = fake_platform.pending_fetches[1]
        assert controller.state is SyncState.REFRESHING

        # The second toggle's refetch completes first...
        fetch_b.release.set()
        toggle_b.join(5)
        assert [r.identifier for r in controller.reminders] == ["rem-3"]

        # ...then the first one's stale refetch lands and wins.
        fetch_a.release.set()
        toggle_a.join(5)

        assert [r.identifier for r in controller.reminders] == ["rem-2", "rem-3"]
        assert list(controller.reminders) == sorted(
            fetch_a.result, key=lambda r: r.due_date
        )
        assert controller.state is SyncState.READY


class TestPublishing:

    def test_listeners_receive_complete_snapshots(self, fake_platform, fixed_clock):
        controller = _ready_controller(fake_platform, fixed_clock)
        seen = []
        unsubscribe = controller.subscribe(seen.append)

        controller.toggle_by_id("rem-1")
        unsubscribe()
        controller.toggle_by_id("rem-2")

        assert len(seen) == 1
        assert isinstance(seen[0], FetchResult)
        assert [r.identifier for r in seen[0].reminders] == ["rem-2", "rem-3"]

    def test_works_with_any_service(self):
        service = Mock(spec=ReminderService)

        def request_access(completion):
            completion(Mock(reminders_granted=True, events_granted=True, error=None))
            return Mock()

        service.request_access.side_effect = request_access
        service.fetch_today.side_effect = FetchError("offline")

        controller = ReminderSyncController(service)

        assert controller.settled
        assert controller.snapshot.status is ListStatus.FAILED
        service.fetch_today.assert_called_once()
