"""
Tool: Interval Helpers
Purpose: Half-open overlap tests for busy intervals and candidate slots

An interval [start, end) overlaps another when each starts before the other
ends. Intervals that only touch (one ends exactly when the other starts) do
not overlap, so back-to-back meetings are allowed.

Usage:
    from slotwise.office.calendar.intervals import overlaps, overlaps_any

    if not overlaps_any(slot, busy_intervals):
        free.append(slot)
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol


class Interval(Protocol):
    start: datetime
    end: datetime


def overlaps(a: Interval, b: Interval) -> bool:
    """True iff a and b share at least one instant."""
    return a.start < b.end and b.start < a.end


def overlaps_any(interval: Interval, others: Iterable[Interval]) -> bool:
    """True iff interval overlaps at least one of others."""
    return any(overlaps(interval, other) for other in others)
