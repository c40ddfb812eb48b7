"""
Tool: Calendar Provider Base
Purpose: Abstract base class for calendar read providers

Defines the read-only interface the scheduling engine depends on. Providers
implement get_events() in the dict-result style used across the office tools;
list_events() and list_busy_intervals() turn a failed result into
UpstreamFetchError so the engine can fail a request as a whole.

Usage:
    from slotwise.office.providers.base import CalendarReader
    from slotwise.office.providers.google_workspace import GoogleCalendarReader

    reader = GoogleCalendarReader(account)
    busy = await reader.list_busy_intervals(start, end)
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from slotwise.office.errors import UpstreamFetchError
from slotwise.office.models import BusyInterval, CalendarEvent


logger = logging.getLogger(__name__)


class CalendarReader(ABC):
    """
    Abstract base class for calendar providers.

    Range queries follow Google Calendar semantics: an event is returned when
    it ends after range start and starts before range end.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'google', 'memory')."""
        pass

    @abstractmethod
    async def get_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> dict[str, Any]:
        """
        Get calendar events in a date range.

        Args:
            start_date: Start of range (naive local time)
            end_date: End of range (naive local time)

        Returns:
            dict with success flag and list of CalendarEvent objects, or error
        """
        pass

    async def list_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """
        Get events in a range, raising on provider failure.

        Cancelled events are dropped.

        Raises:
            UpstreamFetchError: provider returned an error result
        """
        result = await self.get_events(start_date=start, end_date=end)

        if not result.get("success"):
            error = result.get("error", "unknown error")
            logger.warning(f"{self.provider_name} event fetch failed: {error}")
            raise UpstreamFetchError(error, provider=self.provider_name)

        events: list[CalendarEvent] = result.get("events", [])
        return [e for e in events if e.status != "cancelled"]

    async def list_busy_intervals(self, start: datetime, end: datetime) -> list[BusyInterval]:
        """
        Get busy intervals overlapping [start, end]. Order is not guaranteed.

        Raises:
            UpstreamFetchError: provider returned an error result
        """
        events = await self.list_events(start, end)
        return [event.to_busy_interval() for event in events]
