"""
Tool: Scheduling Errors
Purpose: Exception types raised by the scheduling engine

Usage:
    from slotwise.office.errors import InvalidRangeError, UpstreamFetchError

    try:
        slots = await scheduler.find_optimal_slots(30)
    except UpstreamFetchError as e:
        print(f"Calendar unavailable: {e}")
"""


class SchedulingError(Exception):
    """Base class for scheduling engine failures."""


class InvalidRangeError(SchedulingError, ValueError):
    """Request rejected before any calendar fetch (bad range or duration)."""


class UpstreamFetchError(SchedulingError):
    """The calendar provider could not return events."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider

    def __str__(self) -> str:
        message = super().__str__()
        if self.provider:
            return f"{self.provider}: {message}"
        return message
