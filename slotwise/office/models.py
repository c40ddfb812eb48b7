"""
Tool: Office Models
Purpose: Data structures for calendar availability, slot scoring and meeting analytics

Usage:
    from slotwise.office.models import BusyInterval, CandidateSlot, ScoredSlot

All datetimes handled by the engine are naive and expressed in the local time
zone of the running process. Provider code converts aware timestamps with
to_local() before they reach the engine.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any


WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time. Naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def sunday_weekday(value: datetime) -> int:
    """Day of week with 0=Sunday, 1=Monday ... 6=Saturday."""
    return (value.weekday() + 1) % 7


@dataclass(frozen=True)
class BusyInterval:
    """
    One occupied period on the calendar.

    Half-open: [start, end). Touching intervals do not overlap.
    """

    start: datetime
    end: datetime

    def overlaps(self, other: "BusyInterval | CandidateSlot") -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class CandidateSlot:
    """
    A free interval of the requested duration.

    Produced by the availability finder on the 30-minute grid.
    """

    start: datetime
    end: datetime

    @classmethod
    def starting_at(cls, start: datetime, duration_minutes: int) -> "CandidateSlot":
        return cls(start=start, end=start + timedelta(minutes=duration_minutes))

    def overlaps(self, other: "BusyInterval | CandidateSlot") -> bool:
        return self.start < other.end and other.start < self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() / 60)

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class HourRange:
    """
    Daily hour window, start inclusive and end exclusive (0-23).

    Used both for working hours and for preferred meeting hours.
    """

    start: int = 9
    end: int = 17

    def contains(self, hour: int) -> bool:
        return self.start <= hour < self.end

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}

DEFAULT_WORKING_HOURS = HourRange(start=9, end=17)


@dataclass
class SchedulingPreferences:
    """
    Caller preferences for slot scoring.

    prefer_mornings and minimize_meeting_days are accepted for compatibility
    with callers but do not affect the score.
    """

    preferred_hours: HourRange | None = None
    avoid_lunch_time: bool = False
    prefer_mornings: bool = False
    minimize_meeting_days: bool = False
    buffer_between_meetings: int | None = None  # minutes

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.preferred_hours:
            d["preferred_hours"] = self.preferred_hours.to_dict()
        return d


@dataclass(frozen=True)
class ScoredSlot:
    """A candidate slot with its productivity score and the reasons behind it."""

    slot: CandidateSlot
    score: int
    reasons: tuple[str, ...] = ()

    @property
    def start(self) -> datetime:
        return self.slot.start

    @property
    def end(self) -> datetime:
        return self.slot.end

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.slot.start.isoformat(),
            "end": self.slot.end.isoformat(),
            "score": self.score,
            "reasons": list(self.reasons),
        }


@dataclass
class CalendarEvent:
    """
    Normalized calendar event returned by a provider.

    Only the fields the scheduling engine needs are kept.
    """

    event_id: str
    title: str = ""
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime = field(default_factory=datetime.now)
    all_day: bool = False
    status: str = "confirmed"  # confirmed, tentative, cancelled
    busy_status: str = "busy"  # free, busy
    calendar_id: str = "primary"
    provider: str = ""

    @property
    def duration_minutes(self) -> int:
        """Get event duration in minutes."""
        if self.all_day:
            return 24 * 60
        delta = self.end_time - self.start_time
        return int(delta.total_seconds() / 60)

    def to_busy_interval(self) -> BusyInterval:
        return BusyInterval(start=to_local(self.start_time), end=to_local(self.end_time))

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d = asdict(self)
        d["start_time"] = self.start_time.isoformat()
        d["end_time"] = self.end_time.isoformat()
        return d


@dataclass
class CalendarAccount:
    """
    Connected calendar account.

    Holds an access token obtained elsewhere; this package never runs an
    OAuth flow or refreshes tokens.
    """

    id: str
    provider: str = "google"
    email_address: str = ""
    access_token: str | None = None
    token_expiry: datetime | None = None

    def is_token_expired(self) -> bool:
        """Check if access token has expired. Unknown expiry counts as valid."""
        if not self.token_expiry:
            return False
        return to_local(self.token_expiry) <= datetime.now()

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict (excludes tokens)."""
        return {
            "id": self.id,
            "provider": self.provider,
            "email_address": self.email_address,
            "token_expiry": self.token_expiry.isoformat() if self.token_expiry else None,
        }


@dataclass
class ProductivityPatterns:
    """Meeting load summary derived from recent calendar history."""

    most_productive_hours: list[int] = field(default_factory=list)
    least_busy_days: list[int] = field(default_factory=list)  # 0=Sunday
    average_meetings_per_day: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "most_productive_hours": [f"{h}:00" for h in self.most_productive_hours],
            "least_busy_days": [WEEKDAY_NAMES[d] for d in self.least_busy_days],
            "average_meetings_per_day": self.average_meetings_per_day,
        }


@dataclass
class WeekSummary:
    """Meeting totals for one Monday-to-Sunday week."""

    week_start: datetime
    meeting_count: int = 0
    total_hours: float = 0.0

    @property
    def label(self) -> str:
        return f"Week of {self.week_start:%b} {self.week_start.day}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "week": self.label,
            "week_start": self.week_start.date().isoformat(),
            "meeting_count": self.meeting_count,
            "total_hours": self.total_hours,
        }


@dataclass
class MeetingReport:
    """
    Meeting analytics for one period (a week or a month).

    Only timed events count as meetings; all-day events are left out.
    """

    period_start: datetime
    period_end: datetime
    total_meeting_hours: float = 0.0
    meeting_count: int = 0
    average_meeting_duration: int = 0  # minutes
    percentage_of_work_time: float = 0.0
    busiest_day: str = "No meetings"
    longest_meeting: CalendarEvent | None = None
    meetings_by_day: dict[str, int] = field(default_factory=dict)
    meetings_by_type: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)
    weekly_breakdown: list[WeekSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "total_meeting_hours": self.total_meeting_hours,
            "meeting_count": self.meeting_count,
            "average_meeting_duration": self.average_meeting_duration,
            "percentage_of_work_time": self.percentage_of_work_time,
            "busiest_day": self.busiest_day,
            "longest_meeting": self.longest_meeting.to_dict() if self.longest_meeting else None,
            "meetings_by_day": dict(self.meetings_by_day),
            "meetings_by_type": dict(self.meetings_by_type),
            "recommendations": list(self.recommendations),
            "weekly_breakdown": [w.to_dict() for w in self.weekly_breakdown],
        }


@dataclass
class WeekComparison:
    """Meeting count this week against the week before."""

    current_week: int
    previous_week: int

    @property
    def change(self) -> int:
        return self.current_week - self.previous_week

    @property
    def change_percent(self) -> float:
        if self.previous_week == 0:
            return 0.0
        return round(self.change / self.previous_week * 100, 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_week": self.current_week,
            "previous_week": self.previous_week,
            "change": self.change,
            "change_percent": self.change_percent,
        }
