"""
Tool: Availability Finder
Purpose: Enumerate free slots of a given duration inside a date range

Walks the range on a fixed grid (30 minutes by default) anchored at the
working-hours start, skipping weekends and non-working hours a whole day at a
time, and keeps every candidate that overlaps no busy interval.

Only the candidate's start hour is checked against working hours: a 90 minute
slot starting at 16:30 is offered even though it ends after 17:00.

Usage:
    from slotwise.office.calendar.availability import find_available_slots

    slots = await find_available_slots(reader, 30, start, end)
"""

import logging
from datetime import datetime, timedelta

from slotwise.office.calendar.intervals import overlaps_any
from slotwise.office.calendar.schemas import FindSlotsRequest, parse_request
from slotwise.office.models import DEFAULT_WORKING_HOURS, BusyInterval, CandidateSlot, HourRange
from slotwise.office.providers.base import CalendarReader


logger = logging.getLogger(__name__)

DEFAULT_STEP_MINUTES = 30


def _day_start(day: datetime, working_hours: HourRange) -> datetime:
    return day.replace(hour=working_hours.start, minute=0, second=0, microsecond=0)


def _is_weekend(value: datetime) -> bool:
    return value.weekday() >= 5  # Saturday=5, Sunday=6


def iter_candidate_starts(
    start: datetime,
    end: datetime,
    working_hours: HourRange = DEFAULT_WORKING_HOURS,
    exclude_weekends: bool = True,
    step_minutes: int = DEFAULT_STEP_MINUTES,
):
    """
    Yield grid-aligned slot starts in [start, end) that pass the calendar filters.

    The grid is anchored at working_hours.start on start's day; grid points
    before start are skipped so nothing is offered in the past.
    """
    step = timedelta(minutes=step_minutes)
    cursor = _day_start(start, working_hours)
    while cursor < start:
        cursor += step

    while cursor < end:
        if (exclude_weekends and _is_weekend(cursor)) or not working_hours.contains(cursor.hour):
            cursor = _day_start(cursor + timedelta(days=1), working_hours)
            continue

        yield cursor
        cursor += step


def free_slots(
    busy: list[BusyInterval],
    duration_minutes: int,
    start: datetime,
    end: datetime,
    working_hours: HourRange = DEFAULT_WORKING_HOURS,
    exclude_weekends: bool = True,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[CandidateSlot]:
    """Candidates on the grid that overlap none of the busy intervals."""
    slots = []
    for slot_start in iter_candidate_starts(start, end, working_hours, exclude_weekends, step_minutes):
        slot = CandidateSlot.starting_at(slot_start, duration_minutes)
        if not overlaps_any(slot, busy):
            slots.append(slot)
    return slots


async def find_available_slots(
    reader: CalendarReader,
    duration_minutes: int,
    start: datetime,
    end: datetime,
    working_hours: HourRange | None = None,
    exclude_weekends: bool = True,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[CandidateSlot]:
    """
    Find every free slot of duration_minutes between start and end.

    Args:
        reader: Calendar provider to read busy intervals from
        duration_minutes: Slot length, must be positive
        start: Start of search range (naive local time)
        end: End of search range, must be after start
        working_hours: Admissible start hours (default 9-17)
        exclude_weekends: Skip Saturdays and Sundays
        step_minutes: Grid size

    Returns:
        Chronological list of CandidateSlot (may be empty)

    Raises:
        InvalidRangeError: bad duration or range, raised before any fetch
        UpstreamFetchError: calendar could not be read
    """
    request = parse_request(
        FindSlotsRequest,
        duration_minutes=duration_minutes,
        start=start,
        end=end,
        working_hours=working_hours,
        exclude_weekends=exclude_weekends,
        step_minutes=step_minutes,
    )
    hours = request.working_hours.to_hour_range() if request.working_hours else DEFAULT_WORKING_HOURS

    range_start, range_end = request.start, request.end

    busy = await reader.list_busy_intervals(range_start, range_end)
    logger.debug(f"Loaded {len(busy)} busy intervals for {range_start:%Y-%m-%d} - {range_end:%Y-%m-%d}")

    slots = free_slots(
        busy,
        request.duration_minutes,
        range_start,
        range_end,
        working_hours=hours,
        exclude_weekends=request.exclude_weekends,
        step_minutes=request.step_minutes,
    )
    logger.debug(f"Found {len(slots)} free {request.duration_minutes}-minute slots")
    return slots
