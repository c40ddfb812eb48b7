"""
Tool: Slot Scorer
Purpose: Rank a candidate slot by how good a time it is for a meeting

Every slot starts at 100 points. Independent rules add or subtract points and
record a human-readable reason:

    Time of day      9-11 +20, 14-16 +10, 16+ -10
    Lunch            12-13 -30 (only with avoid_lunch_time)
    Day of week      Monday -5, Friday +5
    Meeting density  >3 events that day -15, none +10
    Buffer           room around neighbours +10, too tight -20 (only with buffer_between_meetings)
    Preferred hours  inside +5, outside -25 (only with preferred_hours)

Scores never go below zero. Density and buffer need calendar reads; both are
issued concurrently for each slot.

Usage:
    from slotwise.office.calendar.scoring import SlotScorer

    scorer = SlotScorer(reader)
    scored = await scorer.score_slot(slot, preferences)
"""

import asyncio
from datetime import datetime, time, timedelta

from slotwise.office.calendar.intervals import overlaps
from slotwise.office.models import BusyInterval, CandidateSlot, ScoredSlot, SchedulingPreferences
from slotwise.office.providers.base import CalendarReader


BASE_SCORE = 100
HIGH_DENSITY_THRESHOLD = 3

# Weekday() numbering
MONDAY = 0
FRIDAY = 4


def minutes_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 60


def has_buffer(slot: CandidateSlot, events: list[BusyInterval], buffer_minutes: int) -> bool:
    """
    True iff every event leaves at least buffer_minutes clear on its side of the slot.

    Events overlapping the slot always fail.
    """
    for event in events:
        if overlaps(event, slot):
            return False
        if event.end <= slot.start:
            if minutes_between(event.end, slot.start) < buffer_minutes:
                return False
        elif event.start >= slot.end:
            if minutes_between(slot.end, event.start) < buffer_minutes:
                return False
    return True


def apply_rules(
    slot: CandidateSlot,
    preferences: SchedulingPreferences,
    density: int,
    buffer_ok: bool | None,
) -> ScoredSlot:
    """
    Score a slot from already-fetched calendar facts.

    buffer_ok is None when no buffer preference is set.
    """
    score = BASE_SCORE
    reasons: list[str] = []

    hour = slot.start.hour
    weekday = slot.start.weekday()

    # Time of day
    if 9 <= hour < 11:
        score += 20
        reasons.append("Peak productivity hours (9-11 AM)")
    elif 14 <= hour < 16:
        score += 10
        reasons.append("Good afternoon slot")
    elif hour >= 16:
        score -= 10
        reasons.append("Late afternoon (less ideal)")

    if preferences.avoid_lunch_time and 12 <= hour < 13:
        score -= 30
        reasons.append("During typical lunch hours")

    if weekday == MONDAY:
        score -= 5
        reasons.append("Monday (busy start of week)")
    elif weekday == FRIDAY:
        score += 5
        reasons.append("Friday (good for wrap-ups)")

    if density > HIGH_DENSITY_THRESHOLD:
        score -= 15
        reasons.append(f"High meeting density ({density} meetings nearby)")
    elif density == 0:
        score += 10
        reasons.append("Clear block of time (no adjacent meetings)")

    if buffer_ok is not None:
        if buffer_ok:
            score += 10
            reasons.append("Good buffer time available")
        else:
            score -= 20
            reasons.append("No buffer time before/after")

    if preferences.preferred_hours is not None:
        if preferences.preferred_hours.contains(hour):
            score += 5
            reasons.append("Within preferred hours")
        else:
            score -= 25
            reasons.append("Outside preferred hours")

    return ScoredSlot(slot=slot, score=max(0, score), reasons=tuple(reasons))


class SlotScorer:
    """
    Scores candidate slots against a calendar.

    Holds no state between calls besides the reader; every score_slot() call
    reads the calendar afresh.
    """

    def __init__(self, reader: CalendarReader):
        self.reader = reader

    async def meeting_density(self, when: datetime) -> int:
        """Number of events on the calendar day containing when."""
        day_start = datetime.combine(when.date(), time.min)
        day_end = datetime.combine(when.date(), time.max)
        events = await self.reader.list_busy_intervals(day_start, day_end)
        return len(events)

    async def has_buffer_time(self, slot: CandidateSlot, buffer_minutes: int) -> bool:
        """Check the calendar for events too close to either side of the slot."""
        window = timedelta(minutes=buffer_minutes)
        events = await self.reader.list_busy_intervals(slot.start - window, slot.end + window)
        return has_buffer(slot, events, buffer_minutes)

    async def score_slot(
        self,
        slot: CandidateSlot,
        preferences: SchedulingPreferences | None = None,
    ) -> ScoredSlot:
        """
        Score one slot.

        Raises:
            UpstreamFetchError: a density or buffer read failed
        """
        preferences = preferences or SchedulingPreferences()
        buffer_minutes = preferences.buffer_between_meetings

        if buffer_minutes:
            density, buffer_ok = await asyncio.gather(
                self.meeting_density(slot.start),
                self.has_buffer_time(slot, buffer_minutes),
            )
        else:
            density = await self.meeting_density(slot.start)
            buffer_ok = None

        return apply_rules(slot, preferences, density, buffer_ok)

    async def score_slots(
        self,
        slots: list[CandidateSlot],
        preferences: SchedulingPreferences | None = None,
    ) -> list[ScoredSlot]:
        """Score slots concurrently, returning results in input order."""
        return list(await asyncio.gather(*(self.score_slot(slot, preferences) for slot in slots)))
