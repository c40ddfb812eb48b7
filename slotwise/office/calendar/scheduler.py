"""
Tool: Smart Scheduler
Purpose: Find free meeting slots and rank them by productivity score

The ranking pipeline reads busy intervals once, enumerates free slots, scores
every slot concurrently, and sorts them best first. Equal scores keep their
chronological order. The full ranked list is returned; callers decide how many
to show.

Usage:
    # Suggest meeting times (top 5 by default)
    python -m slotwise.office.calendar.scheduler --suggest --duration 30 --days 7

    # Summarize meeting load over the last 30 days
    python -m slotwise.office.calendar.scheduler --analyze

    # From code
    scheduler = SmartScheduler(reader)
    ranked = await scheduler.find_optimal_slots(45, days_ahead=5, preferences=prefs)

Dependencies:
    - aiohttp (for the Google Calendar reader)
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import datetime, timedelta
from typing import Any

from slotwise.config_models import SchedulingConfig, load_scheduling_config
from slotwise.office.calendar.availability import find_available_slots
from slotwise.office.calendar.insights import analyze_productivity_patterns, generate_recommendations
from slotwise.office.calendar.schemas import OptimalSlotsRequest, parse_request
from slotwise.office.calendar.scoring import SlotScorer
from slotwise.office.errors import InvalidRangeError, SchedulingError
from slotwise.office.models import CandidateSlot, HourRange, ProductivityPatterns, ScoredSlot, SchedulingPreferences
from slotwise.office.providers.base import CalendarReader


logger = logging.getLogger(__name__)


class SmartScheduler:
    """
    Availability finder and slot ranking over one calendar reader.

    The reader is the only collaborator; nothing is cached between calls.
    """

    def __init__(self, reader: CalendarReader, config: SchedulingConfig | None = None):
        self.reader = reader
        self.config = config or load_scheduling_config()
        self.scorer = SlotScorer(reader)

    @property
    def default_working_hours(self) -> HourRange:
        return self.config.search.working_hours.to_hour_range()

    async def find_available_slots(
        self,
        duration_minutes: int,
        start: datetime,
        end: datetime,
        working_hours: HourRange | None = None,
        exclude_weekends: bool | None = None,
    ) -> list[CandidateSlot]:
        """
        Find free slots of duration_minutes between start and end.

        Raises:
            InvalidRangeError: duration not positive or start not before end
            UpstreamFetchError: calendar could not be read
        """
        if exclude_weekends is None:
            exclude_weekends = self.config.search.exclude_weekends

        return await find_available_slots(
            self.reader,
            duration_minutes,
            start,
            end,
            working_hours=working_hours or self.default_working_hours,
            exclude_weekends=exclude_weekends,
            step_minutes=self.config.search.step_minutes,
        )

    async def find_optimal_slots(
        self,
        duration_minutes: int,
        days_ahead: int = 7,
        preferences: SchedulingPreferences | None = None,
        now: datetime | None = None,
    ) -> list[ScoredSlot]:
        """
        Find and rank slots in the next days_ahead days, best first.

        Preferred hours, when set, also act as the working hours for the search.

        Args:
            duration_minutes: Meeting length
            days_ahead: Days to search from now
            preferences: Scoring preferences
            now: Search start (default: current local time)

        Returns:
            Every free slot with its score, sorted by score descending

        Raises:
            InvalidRangeError: invalid duration, days_ahead, or preferences
            UpstreamFetchError: calendar could not be read
        """
        preferences = preferences or SchedulingPreferences()
        parse_request(
            OptimalSlotsRequest,
            duration_minutes=duration_minutes,
            days_ahead=days_ahead,
            preferred_hours=preferences.preferred_hours,
            buffer_between_meetings=preferences.buffer_between_meetings,
        )

        now = now or datetime.now()
        slots = await self.find_available_slots(
            duration_minutes,
            now,
            now + timedelta(days=days_ahead),
            working_hours=preferences.preferred_hours or self.default_working_hours,
            exclude_weekends=True,
        )

        scored = await self.scorer.score_slots(slots, preferences)
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)

        logger.info(f"Ranked {len(ranked)} slots for a {duration_minutes}-minute meeting over {days_ahead} days")
        return ranked

    async def analyze_productivity_patterns(self, now: datetime | None = None) -> ProductivityPatterns:
        """Summarize meeting load over the configured lookback window."""
        return await analyze_productivity_patterns(
            self.reader,
            now=now,
            lookback_days=self.config.insights.lookback_days,
        )


async def suggest_meeting_times(
    reader: CalendarReader,
    duration_minutes: int = 30,
    days_ahead: int | None = None,
    preferences: SchedulingPreferences | None = None,
    top_n: int | None = None,
    config: SchedulingConfig | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Suggest the best meeting times.

    Args:
        reader: Calendar provider
        duration_minutes: Meeting duration in minutes
        days_ahead: Days to look ahead (default from config)
        preferences: Scoring preferences (default from config: avoid lunch, 15 minute buffer)
        top_n: Number of suggestions to return (default from config)
        config: Scheduling config (default: args/scheduling.yaml)
        now: Search start (default: current local time)

    Returns:
        {
            "success": bool,
            "top_slots": list[{"start", "end", "score", "reasons"}],
            "total_found": int,
            "message": str,
        }
    """
    config = config or load_scheduling_config()
    if days_ahead is None:
        days_ahead = config.search.days_ahead
    if top_n is None:
        top_n = config.search.top_n
    if preferences is None:
        preferences = config.defaults.to_preferences()

    scheduler = SmartScheduler(reader, config)
    try:
        if top_n < 1:
            raise InvalidRangeError(f"top_n: must be at least 1, got {top_n}")
        ranked = await scheduler.find_optimal_slots(
            duration_minutes,
            days_ahead=days_ahead,
            preferences=preferences,
            now=now,
        )
    except SchedulingError as e:
        logger.warning(f"Could not suggest meeting times: {e}")
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "top_slots": [s.to_dict() for s in ranked[:top_n]],
        "total_found": len(ranked),
        "duration_minutes": duration_minutes,
        "days_searched": days_ahead,
        "message": f"Found {len(ranked)} possible slots, showing top {min(top_n, len(ranked))} optimal times",
    }


async def analyze_productivity(
    reader: CalendarReader,
    config: SchedulingConfig | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Analyze calendar patterns and suggest focus time.

    Returns:
        {
            "success": bool,
            "analysis": {"most_productive_hours", "least_busy_days", "average_meetings_per_day"},
            "recommendations": list[str],
        }
    """
    config = config or load_scheduling_config()
    scheduler = SmartScheduler(reader, config)

    try:
        patterns = await scheduler.analyze_productivity_patterns(now=now)
    except SchedulingError as e:
        logger.warning(f"Could not analyze productivity: {e}")
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "analysis": patterns.to_dict(),
        "recommendations": generate_recommendations(
            patterns, high_load_threshold=config.insights.high_load_threshold
        ),
        "message": "Productivity analysis complete",
    }


def main():
    from slotwise.logging_config import setup_logging
    from slotwise.office.calendar.analytics import meeting_report, weekly_trends
    from slotwise.office.models import CalendarAccount
    from slotwise.office.providers.google_workspace import GoogleCalendarReader

    parser = argparse.ArgumentParser(
        description="Smart meeting scheduler for Google Calendar",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Suggest times for a 30 minute meeting this week
  python -m slotwise.office.calendar.scheduler --suggest --duration 30 --days 7

  # Prefer 10-15, with a 10 minute buffer
  python -m slotwise.office.calendar.scheduler --suggest --duration 45 --preferred-hours 10-15 --buffer 10

  # Analyze the last 30 days
  python -m slotwise.office.calendar.scheduler --analyze

  # Meeting report for this month
  python -m slotwise.office.calendar.scheduler --report month
        """,
    )

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--suggest", action="store_true", help="Suggest meeting times")
    actions.add_argument("--analyze", action="store_true", help="Analyze meeting load")
    actions.add_argument("--report", choices=["week", "month"], help="Meeting report for the current week or month")
    actions.add_argument("--trends", action="store_true", help="Focus time and week-over-week meeting change")

    parser.add_argument("--duration", type=int, default=30, help="Duration in minutes")
    parser.add_argument("--days", type=int, help="Days to look ahead")
    parser.add_argument("--top", type=int, help="Number of suggestions to show")
    parser.add_argument("--preferred-hours", help="Preferred hours as START-END, e.g. 9-12")
    parser.add_argument("--buffer", type=int, help="Minutes of buffer around other meetings")
    parser.add_argument("--allow-lunch", action="store_true", help="Do not penalize 12-13")
    parser.add_argument("--token", help="Google access token (default: from environment)")
    parser.add_argument("--calendar-id", help="Calendar to read (default from config)")

    args = parser.parse_args()
    setup_logging()

    config = load_scheduling_config()
    token = args.token or os.environ.get(config.google.access_token_env)
    if not token:
        print(f"Error: pass --token or set {config.google.access_token_env}")
        sys.exit(1)

    reader = GoogleCalendarReader(
        CalendarAccount(id="cli", access_token=token),
        calendar_id=args.calendar_id or config.google.calendar_id,
        page_size=config.google.page_size,
    )

    if args.suggest:
        preferences = config.defaults.to_preferences()
        if args.preferred_hours:
            try:
                start_hour, end_hour = (int(x) for x in args.preferred_hours.split("-"))
            except ValueError:
                print("Error: --preferred-hours must look like 9-12")
                sys.exit(1)
            preferences.preferred_hours = HourRange(start=start_hour, end=end_hour)
        if args.buffer is not None:
            preferences.buffer_between_meetings = args.buffer
        if args.allow_lunch:
            preferences.avoid_lunch_time = False

        result = asyncio.run(suggest_meeting_times(
            reader,
            duration_minutes=args.duration,
            days_ahead=args.days,
            preferences=preferences,
            top_n=args.top,
            config=config,
        ))
    elif args.report:
        result = asyncio.run(meeting_report(reader, period=args.report, config=config))
    elif args.trends:
        result = asyncio.run(weekly_trends(reader))
    else:
        result = asyncio.run(analyze_productivity(reader, config=config))

    if result.get("success"):
        print("OK")
    else:
        print(f"ERROR: {result.get('error')}")
        sys.exit(1)

    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
