"""
Tool: In-Memory Calendar Provider
Purpose: Serve a fixed list of events through the CalendarReader interface

Used for tests, dry runs, and callers that already hold their events
(e.g. a calendar export). Counts fetches so callers can see how many
round trips a request would cost against a real provider.

Usage:
    from slotwise.office.providers.memory import InMemoryCalendarReader

    reader = InMemoryCalendarReader.from_intervals([(start, end), ...])
"""

from datetime import datetime
from typing import Any

from slotwise.office.models import CalendarEvent, to_local
from slotwise.office.providers.base import CalendarReader


class InMemoryCalendarReader(CalendarReader):
    """Calendar reader backed by a list of CalendarEvent objects."""

    def __init__(self, events: list[CalendarEvent] | None = None, error: str | None = None):
        self.events = list(events or [])
        self.error = error
        self.fetch_count = 0

    @property
    def provider_name(self) -> str:
        return "memory"

    @classmethod
    def from_intervals(cls, intervals: list[tuple[datetime, datetime]]) -> "InMemoryCalendarReader":
        events = [
            CalendarEvent(
                event_id=f"evt-{i}",
                title=f"Busy {i}",
                start_time=start,
                end_time=end,
                provider="memory",
            )
            for i, (start, end) in enumerate(intervals)
        ]
        return cls(events)

    async def get_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> dict[str, Any]:
        """Return events that end after start_date and start before end_date."""
        self.fetch_count += 1

        if self.error:
            return {"success": False, "error": self.error}

        matching = [
            event
            for event in self.events
            if to_local(event.end_time) > start_date and to_local(event.start_time) < end_date
        ]
        matching.sort(key=lambda e: to_local(e.start_time))

        return {"success": True, "events": matching, "total": len(matching)}
