"""Calendar providers — read-only event sources for the scheduling engine

Components:
    base.py: CalendarReader interface
    google_workspace.py: Google Calendar v3 reader (aiohttp)
    memory.py: In-memory reader for tests and exported calendars
"""

from slotwise.office.providers.base import CalendarReader
from slotwise.office.providers.memory import InMemoryCalendarReader


__all__ = ["CalendarReader", "InMemoryCalendarReader"]
