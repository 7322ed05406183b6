#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- Platform-specific test skipping (macOS/EventKit tests)
- A fake platform store and a fixed clock
- Isolation of the dayplan working directory
"""

import os
import platform
import sys
from datetime import datetime, timedelta
from typing import List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dayplan.core.models import ReminderRecord
from dayplan.core.paths import reset_path_manager
from tests.fakes import FakePlatform

HAS_EVENTKIT = False

try:
    if platform.system() == "Darwin":
        import objc  # noqa: F401
        import EventKit  # noqa: F401
        HAS_EVENTKIT = True
except ImportError:
    pass


FIXED_NOW = datetime(2024, 3, 15, 10, 0, 0)


def pytest_configure(config):
    """Configure pytest environment."""
    config.addinivalue_line("markers", "macos: test requires macOS")
    config.addinivalue_line("markers", "eventkit: test requires EventKit framework")


def pytest_collection_modifyitems(config, items):
    """Skip macOS/EventKit tests where they cannot run."""
    skip_macos = pytest.mark.skip(reason="macOS/EventKit tests require Darwin platform")
    skip_eventkit = pytest.mark.skip(reason="Test requires EventKit framework")

    for item in items:
        if "macos" in item.keywords and platform.system() != "Darwin":
            item.add_marker(skip_macos)
        if "eventkit" in item.keywords and not HAS_EVENTKIT:
            item.add_marker(skip_eventkit)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point DAYPLAN_HOME at a temporary directory for every test."""
    monkeypatch.setenv("DAYPLAN_HOME", str(tmp_path / "dayplan-home"))
    reset_path_manager()
    yield tmp_path / "dayplan-home"
    reset_path_manager()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def todays_reminders() -> List[ReminderRecord]:
    """Three incomplete reminders due on 2024-03-15."""
    return [
        ReminderRecord("rem-1", "Buy groceries", False, FIXED_NOW.replace(hour=9), "Home"),
        ReminderRecord("rem-2", "Call dentist", False, FIXED_NOW.replace(hour=14), "Personal"),
        ReminderRecord("rem-3", "Send report", False, FIXED_NOW.replace(hour=17, minute=30), "Work"),
    ]


@pytest.fixture
def fake_platform(todays_reminders) -> FakePlatform:
    tomorrow = ReminderRecord("rem-9", "Tomorrow's thing", False,
                              FIXED_NOW + timedelta(days=1), "Work")
    return FakePlatform(reminders=todays_reminders + [tomorrow])
