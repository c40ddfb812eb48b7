"""Shared test fixtures for slotwise tests.

This module provides common fixtures used across all test modules:
- Fixed reference days (the week of Monday 2026-10-19)
- In-memory calendar readers built from (start, end) pairs
- Default scheduling config that ignores args/scheduling.yaml

Usage:
    def test_something(make_reader, tuesday):
        reader = make_reader([(tuesday.replace(hour=10), tuesday.replace(hour=11))])
        ...
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from slotwise.config_models import SchedulingConfig
from slotwise.office.providers.memory import InMemoryCalendarReader


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"


# ─────────────────────────────────────────────────────────────────────────────
# Date Fixtures
# ─────────────────────────────────────────────────────────────────────────────

MONDAY = datetime(2026, 10, 19)


@pytest.fixture
def monday() -> datetime:
    """Midnight on Monday 2026-10-19."""
    return MONDAY


@pytest.fixture
def tuesday() -> datetime:
    """Midnight on Tuesday 2026-10-20."""
    return MONDAY + timedelta(days=1)


@pytest.fixture
def wednesday() -> datetime:
    """Midnight on Wednesday 2026-10-21."""
    return MONDAY + timedelta(days=2)


@pytest.fixture
def friday() -> datetime:
    """Midnight on Friday 2026-10-23."""
    return MONDAY + timedelta(days=4)


@pytest.fixture
def saturday() -> datetime:
    """Midnight on Saturday 2026-10-24."""
    return MONDAY + timedelta(days=5)


# ─────────────────────────────────────────────────────────────────────────────
# Calendar Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_reader() -> Callable[..., InMemoryCalendarReader]:
    """Factory for in-memory readers.

    Returns:
        callable taking a list of (start, end) pairs
    """

    def _make(intervals: list[tuple[datetime, datetime]] | None = None) -> InMemoryCalendarReader:
        return InMemoryCalendarReader.from_intervals(intervals or [])

    return _make


@pytest.fixture
def empty_reader() -> InMemoryCalendarReader:
    """Reader with no events."""
    return InMemoryCalendarReader()


@pytest.fixture
def failing_reader() -> InMemoryCalendarReader:
    """Reader whose every fetch fails."""
    return InMemoryCalendarReader(error="Authentication failed - token may be expired")


# ─────────────────────────────────────────────────────────────────────────────
# Config Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def scheduling_config() -> SchedulingConfig:
    """Default scheduling config, independent of args/scheduling.yaml."""
    return SchedulingConfig()
