"""
Tool: Meeting Analytics
Purpose: Weekly and monthly meeting reports built from calendar events

Reports total meeting hours against a work-time budget (40 hours a week,
160 a month by default), the busiest weekday, the longest meeting, and a
keyword-based breakdown by meeting type. Monthly reports add per-week totals.
Also measures blocked focus time and the week-over-week change in meeting
count.

Weeks run Monday to Sunday. Only timed events count as meetings.

Usage:
    # Report for the current week or month
    python -m slotwise.office.calendar.scheduler --report week
    python -m slotwise.office.calendar.scheduler --report month

    # From code
    report = await generate_weekly_report(reader)
    comparison = await week_over_week(reader)
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any

from slotwise.config_models import SchedulingConfig, load_scheduling_config
from slotwise.office.errors import InvalidRangeError, SchedulingError
from slotwise.office.models import (
    WEEKDAY_NAMES,
    CalendarEvent,
    MeetingReport,
    WeekComparison,
    WeekSummary,
    sunday_weekday,
    to_local,
)
from slotwise.office.providers.base import CalendarReader


logger = logging.getLogger(__name__)

WEEKLY_WORK_HOURS = 40
MONTHLY_WORK_HOURS = 160

# First matching keyword wins
MEETING_CATEGORIES = [
    ("Standups", ("standup", "daily")),
    ("1:1s", ("1:1", "one-on-one")),
    ("Reviews", ("review", "retro")),
    ("Planning", ("planning", "sprint")),
    ("Interviews", ("interview",)),
    ("All Hands", ("all hands", "town hall")),
]
OTHER_CATEGORY = "Other"

FOCUS_KEYWORDS = ("focus", "do not book")

# Recommendation thresholds
CRITICAL_LOAD_PERCENT = 50
HIGH_LOAD_PERCENT = 40
INDUSTRY_AVERAGE_PERCENT = 31
HIGH_MEETING_COUNT = 25
HIGH_MEETING_HOURS = 20
CROWDED_DAY_MEETINGS = 6
HIGH_STANDUP_COUNT = 10

REPORT_PERIODS = ("week", "month")


# =============================================================================
# Periods
# =============================================================================


def week_start(value: datetime) -> datetime:
    """Midnight on the Monday of value's week."""
    day = value.replace(hour=0, minute=0, second=0, microsecond=0)
    return day - timedelta(days=day.weekday())


def month_bounds(value: datetime) -> tuple[datetime, datetime]:
    """First day of value's month and first day of the next month."""
    first = value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if first.month == 12:
        return first, first.replace(year=first.year + 1, month=1)
    return first, first.replace(month=first.month + 1)


# =============================================================================
# Report building
# =============================================================================


def categorize_meeting(title: str) -> str:
    lower = title.lower()
    for category, keywords in MEETING_CATEGORIES:
        if any(keyword in lower for keyword in keywords):
            return category
    return OTHER_CATEGORY


def _hours(minutes: float) -> float:
    return round(minutes / 60, 1)


def report_recommendations(
    total_hours: float,
    meeting_count: int,
    percentage_of_work_time: float,
    meetings_by_day: dict[str, int],
    meetings_by_type: dict[str, int],
) -> list[str]:
    """Suggestions for a report, from unrounded totals."""
    recommendations = []

    if percentage_of_work_time > CRITICAL_LOAD_PERCENT:
        recommendations.append(
            f"Critical: You spend {percentage_of_work_time:.0f}% of time in meetings "
            f"(industry avg: {INDUSTRY_AVERAGE_PERCENT}%). Consider declining non-essential meetings."
        )
    elif percentage_of_work_time > HIGH_LOAD_PERCENT:
        recommendations.append(
            f"You spend {percentage_of_work_time:.0f}% of time in meetings "
            f"(industry avg: {INDUSTRY_AVERAGE_PERCENT}%). Try to reduce by 20%."
        )

    if meeting_count > HIGH_MEETING_COUNT:
        recommendations.append(
            "High meeting count detected. Consider batching meetings on specific days "
            "to create full days for deep work."
        )

    if total_hours > HIGH_MEETING_HOURS:
        recommendations.append("Block at least one full day per week as meeting-free for focused work.")

    busiest = max(meetings_by_day.values(), default=0)
    if busiest > CROWDED_DAY_MEETINGS:
        recommendations.append(f"Your busiest day has {busiest} meetings. Try to redistribute across the week.")

    if meetings_by_type.get("Standups", 0) > HIGH_STANDUP_COUNT:
        recommendations.append("Consider reducing standup frequency or duration.")

    if recommendations:
        recommendations.append("Implement these changes gradually over the next 2 weeks.")
    else:
        recommendations.append("Your meeting load looks healthy! Keep it up.")

    return recommendations


def build_report(
    events: list[CalendarEvent],
    period_start: datetime,
    period_end: datetime,
    work_hours: float,
) -> MeetingReport:
    """
    Summarize timed events into a MeetingReport.

    Events are expected in start order; the busiest day on a tie and the
    longest meeting on a tie are the ones seen first.
    """
    total_minutes = 0
    longest: CalendarEvent | None = None
    by_day: dict[str, int] = defaultdict(int)
    by_type: dict[str, int] = defaultdict(int)

    for event in events:
        duration = event.duration_minutes
        total_minutes += duration

        if longest is None or duration > longest.duration_minutes:
            longest = event

        by_day[WEEKDAY_NAMES[sunday_weekday(to_local(event.start_time))]] += 1
        by_type[categorize_meeting(event.title)] += 1

    total_hours = total_minutes / 60
    percentage = total_hours / work_hours * 100

    return MeetingReport(
        period_start=period_start,
        period_end=period_end,
        total_meeting_hours=round(total_hours, 1),
        meeting_count=len(events),
        average_meeting_duration=round(total_minutes / len(events)) if events else 0,
        percentage_of_work_time=round(percentage, 1),
        busiest_day=max(by_day, key=by_day.get) if by_day else "No meetings",
        longest_meeting=longest,
        meetings_by_day=dict(by_day),
        meetings_by_type=dict(by_type),
        recommendations=report_recommendations(total_hours, len(events), percentage, by_day, by_type),
    )


# =============================================================================
# Calendar reads
# =============================================================================


async def _meetings(reader: CalendarReader, start: datetime, end: datetime) -> list[CalendarEvent]:
    events = await reader.list_events(start, end)
    return [e for e in events if not e.all_day]


async def generate_report(
    reader: CalendarReader,
    start: datetime,
    end: datetime,
    work_hours: float,
) -> MeetingReport:
    """
    Build a report for [start, end).

    Raises:
        UpstreamFetchError: calendar could not be read
    """
    events = await _meetings(reader, start, end)
    logger.debug(f"Reporting on {len(events)} meetings from {start:%Y-%m-%d} to {end:%Y-%m-%d}")
    return build_report(events, start, end, work_hours)


async def generate_weekly_report(
    reader: CalendarReader,
    now: datetime | None = None,
    work_hours: float = WEEKLY_WORK_HOURS,
) -> MeetingReport:
    """Report for the Monday-to-Sunday week containing now."""
    start = week_start(now or datetime.now())
    return await generate_report(reader, start, start + timedelta(days=7), work_hours)


async def weekly_breakdown(reader: CalendarReader, start: datetime, end: datetime) -> list[WeekSummary]:
    """
    Totals for every week touching [start, end), one read per week.

    Weeks are whole Monday-to-Sunday weeks, so the first and last may
    extend outside the range.
    """
    weeks = []
    current = week_start(start)
    while current < end:
        weeks.append(current)
        current += timedelta(days=7)

    per_week = await asyncio.gather(*(_meetings(reader, w, w + timedelta(days=7)) for w in weeks))

    return [
        WeekSummary(
            week_start=w,
            meeting_count=len(events),
            total_hours=_hours(sum(e.duration_minutes for e in events)),
        )
        for w, events in zip(weeks, per_week)
    ]


async def generate_monthly_report(
    reader: CalendarReader,
    now: datetime | None = None,
    work_hours: float = MONTHLY_WORK_HOURS,
) -> MeetingReport:
    """Report for the calendar month containing now, with a weekly breakdown."""
    start, end = month_bounds(now or datetime.now())
    report, breakdown = await asyncio.gather(
        generate_report(reader, start, end, work_hours),
        weekly_breakdown(reader, start, end),
    )
    report.weekly_breakdown = breakdown
    return report


async def focus_time_hours(reader: CalendarReader, now: datetime | None = None) -> float:
    """Hours of focus blocks ("focus", "do not book" in the title) this week."""
    start = week_start(now or datetime.now())
    events = await _meetings(reader, start, start + timedelta(days=7))
    focus = [e for e in events if any(k in e.title.lower() for k in FOCUS_KEYWORDS)]
    return _hours(sum(e.duration_minutes for e in focus))


async def week_over_week(reader: CalendarReader, now: datetime | None = None) -> WeekComparison:
    """Meeting count this week compared with last week."""
    current = week_start(now or datetime.now())
    previous = current - timedelta(days=7)

    this_week, last_week = await asyncio.gather(
        _meetings(reader, current, current + timedelta(days=7)),
        _meetings(reader, previous, current),
    )
    return WeekComparison(current_week=len(this_week), previous_week=len(last_week))


# =============================================================================
# Tool-style helpers
# =============================================================================


async def meeting_report(
    reader: CalendarReader,
    period: str = "week",
    config: SchedulingConfig | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Generate a weekly or monthly meeting report.

    Returns:
        {"success": bool, "period": str, "report": dict, "message": str}
    """
    config = config or load_scheduling_config()

    try:
        if period == "week":
            report = await generate_weekly_report(reader, now=now, work_hours=config.analytics.weekly_work_hours)
        elif period == "month":
            report = await generate_monthly_report(reader, now=now, work_hours=config.analytics.monthly_work_hours)
        else:
            raise InvalidRangeError(f"period: must be one of {', '.join(REPORT_PERIODS)}, got {period!r}")
    except SchedulingError as e:
        logger.warning(f"Could not build {period} report: {e}")
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "period": period,
        "report": report.to_dict(),
        "message": f"{report.meeting_count} meetings, {report.total_meeting_hours} hours this {period}",
    }


async def weekly_trends(reader: CalendarReader, now: datetime | None = None) -> dict[str, Any]:
    """
    Focus time blocked this week and the change in meeting count since last week.

    Returns:
        {"success": bool, "focus_time_hours": float, "week_over_week": dict, "message": str}
    """
    try:
        focus, comparison = await asyncio.gather(
            focus_time_hours(reader, now=now),
            week_over_week(reader, now=now),
        )
    except SchedulingError as e:
        logger.warning(f"Could not compute weekly trends: {e}")
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "focus_time_hours": focus,
        "week_over_week": comparison.to_dict(),
        "message": f"{focus} hours of focus time blocked; meetings changed by {comparison.change:+d} since last week",
    }
