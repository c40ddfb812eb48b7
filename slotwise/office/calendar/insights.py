"""
Tool: Productivity Insights
Purpose: Summarize recent meeting load to suggest when to protect focus time

Looks back over the last 30 days of events, counts meetings per start hour
and per weekday, and reports the quietest hours and days.

Usage:
    from slotwise.office.calendar.insights import analyze_productivity_patterns

    patterns = await analyze_productivity_patterns(reader)
    for tip in generate_recommendations(patterns):
        print(tip)
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta

from slotwise.office.models import WEEKDAY_NAMES, ProductivityPatterns, sunday_weekday
from slotwise.office.providers.base import CalendarReader


logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 30
HIGH_LOAD_THRESHOLD = 4.0


def _quietest(counts: dict[int, int], limit: int) -> list[int]:
    # Fewest meetings first; equal counts in ascending key order
    ranked = sorted(counts.items(), key=lambda item: (item[1], item[0]))
    return [key for key, _ in ranked[:limit]]


def summarize_events(starts: list[datetime], lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> ProductivityPatterns:
    """
    Build ProductivityPatterns from event start times.

    Only hours and days that had at least one meeting are ranked.
    """
    by_hour: dict[int, int] = defaultdict(int)
    by_day: dict[int, int] = defaultdict(int)
    for start in starts:
        by_hour[start.hour] += 1
        by_day[sunday_weekday(start)] += 1

    return ProductivityPatterns(
        most_productive_hours=_quietest(by_hour, 3),
        least_busy_days=_quietest(by_day, 2),
        average_meetings_per_day=round(len(starts) / lookback_days, 1),
    )


async def analyze_productivity_patterns(
    reader: CalendarReader,
    now: datetime | None = None,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> ProductivityPatterns:
    """
    Analyze the last lookback_days of calendar history.

    Raises:
        UpstreamFetchError: calendar could not be read
    """
    now = now or datetime.now()
    busy = await reader.list_busy_intervals(now - timedelta(days=lookback_days), now)
    logger.debug(f"Analyzing {len(busy)} events over {lookback_days} days")
    return summarize_events([interval.start for interval in busy], lookback_days)


def generate_recommendations(
    patterns: ProductivityPatterns,
    high_load_threshold: float = HIGH_LOAD_THRESHOLD,
) -> list[str]:
    """Turn a pattern summary into short suggestions."""
    recommendations = []

    if patterns.average_meetings_per_day > high_load_threshold:
        recommendations.append("High meeting load detected. Consider blocking focus time.")

    if patterns.most_productive_hours:
        hours = ", ".join(f"{h}:00" for h in patterns.most_productive_hours)
        recommendations.append(f"Protect {hours} for deep work.")

    if patterns.least_busy_days:
        days = " and ".join(WEEKDAY_NAMES[d] for d in patterns.least_busy_days)
        recommendations.append(f"{days} are your least busy days - ideal for focus work.")

    return recommendations
