"""Tests for slotwise/office/calendar/insights.py"""

from datetime import datetime, timedelta

import pytest

from slotwise.office.calendar.insights import (
    analyze_productivity_patterns,
    generate_recommendations,
    summarize_events,
)
from slotwise.office.models import ProductivityPatterns


class TestSummarizeEvents:
    def test_quietest_hours_ascending_count(self, monday):
        starts = (
            [monday.replace(hour=9)] * 4
            + [monday.replace(hour=14)] * 2
            + [monday.replace(hour=11)] * 1
            + [monday.replace(hour=16)] * 3
        )

        patterns = summarize_events(starts)

        assert patterns.most_productive_hours == [11, 14, 16]

    def test_ties_broken_by_earlier_hour(self, monday):
        starts = [monday.replace(hour=h) for h in (15, 10, 13, 8)]

        assert summarize_events(starts).most_productive_hours == [8, 10, 13]

    def test_least_busy_days_use_sunday_numbering(self, monday):
        friday = monday + timedelta(days=4)
        starts = [monday.replace(hour=9)] * 3 + [friday.replace(hour=9)] + [(monday + timedelta(days=1)).replace(hour=9)] * 2

        patterns = summarize_events(starts)

        assert patterns.least_busy_days == [5, 2]  # Friday, Tuesday

    def test_average_rounded_to_one_decimal(self, monday):
        starts = [monday.replace(hour=9)] * 47

        assert summarize_events(starts, lookback_days=30).average_meetings_per_day == 1.6

    def test_no_events(self):
        patterns = summarize_events([])

        assert patterns.most_productive_hours == []
        assert patterns.least_busy_days == []
        assert patterns.average_meetings_per_day == 0.0


class TestAnalyzeProductivityPatterns:
    @pytest.mark.asyncio
    async def test_reads_lookback_window(self, make_reader, monday):
        now = monday.replace(hour=12)
        reader = make_reader([
            (now - timedelta(days=40), now - timedelta(days=40) + timedelta(hours=1)),
            (now - timedelta(days=3), now - timedelta(days=3) + timedelta(hours=1)),
        ])

        patterns = await analyze_productivity_patterns(reader, now=now)

        assert patterns.most_productive_hours == [12]
        assert patterns.least_busy_days == [5]  # Friday before
        assert reader.fetch_count == 1


class TestRecommendations:
    def test_high_load(self):
        patterns = ProductivityPatterns([13, 8], [3], average_meetings_per_day=4.5)

        recommendations = generate_recommendations(patterns)

        assert recommendations == [
            "High meeting load detected. Consider blocking focus time.",
            "Protect 13:00, 8:00 for deep work.",
            "Wednesday are your least busy days - ideal for focus work.",
        ]

    def test_threshold_is_exclusive(self):
        assert generate_recommendations(ProductivityPatterns(average_meetings_per_day=4.0)) == []

    def test_two_days_joined(self):
        patterns = ProductivityPatterns(least_busy_days=[1, 5])

        assert generate_recommendations(patterns) == [
            "Monday and Friday are your least busy days - ideal for focus work."
        ]

    def test_to_dict_names(self):
        patterns = ProductivityPatterns([9], [0], 2.0)

        assert patterns.to_dict() == {
            "most_productive_hours": ["9:00"],
            "least_busy_days": ["Sunday"],
            "average_meetings_per_day": 2.0,
        }
