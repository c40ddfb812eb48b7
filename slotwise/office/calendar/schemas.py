"""
Request models for the scheduling engine.

Callers (chat commands, HTTP routes) hand loosely-typed input to these models;
anything that fails validation becomes InvalidRangeError before the engine
touches a calendar.

Usage:
    from slotwise.office.calendar.schemas import FindSlotsRequest, parse_request

    request = parse_request(FindSlotsRequest, duration_minutes=30, start=s, end=e)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from slotwise.office.errors import InvalidRangeError
from slotwise.office.models import HourRange, SchedulingPreferences, to_local


RequestT = TypeVar("RequestT", bound=BaseModel)


class HourRangeRequest(BaseModel):
    start: int = Field(ge=0, le=23)
    end: int = Field(ge=0, le=23)

    @model_validator(mode="after")
    def _check_order(self) -> "HourRangeRequest":
        if self.start >= self.end:
            raise ValueError(f"start hour ({self.start}) must be before end hour ({self.end})")
        return self

    def to_hour_range(self) -> HourRange:
        return HourRange(start=self.start, end=self.end)


class FindSlotsRequest(BaseModel):
    duration_minutes: int = Field(gt=0)
    start: datetime
    end: datetime
    working_hours: Optional[HourRangeRequest] = None
    exclude_weekends: bool = True
    step_minutes: int = Field(default=30, gt=0)

    @field_validator("start", "end")
    @classmethod
    def _as_local(cls, value: datetime) -> datetime:
        # Mixed naive and aware bounds compare after conversion
        return to_local(value)

    @model_validator(mode="after")
    def _check_range(self) -> "FindSlotsRequest":
        if self.start >= self.end:
            raise ValueError(f"start ({self.start.isoformat()}) must be before end ({self.end.isoformat()})")
        return self


class OptimalSlotsRequest(BaseModel):
    duration_minutes: int = Field(gt=0)
    days_ahead: int = Field(default=7, ge=1)
    preferred_hours: Optional[HourRangeRequest] = None
    avoid_lunch_time: bool = False
    prefer_mornings: bool = False
    minimize_meeting_days: bool = False
    buffer_between_meetings: Optional[int] = Field(default=None, ge=0)

    def to_preferences(self) -> SchedulingPreferences:
        return SchedulingPreferences(
            preferred_hours=self.preferred_hours.to_hour_range() if self.preferred_hours else None,
            avoid_lunch_time=self.avoid_lunch_time,
            prefer_mornings=self.prefer_mornings,
            minimize_meeting_days=self.minimize_meeting_days,
            buffer_between_meetings=self.buffer_between_meetings,
        )


def _hour_range_input(value):
    if isinstance(value, HourRange):
        return value.to_dict()
    return value


def parse_request(model_class: type[RequestT], **data) -> RequestT:
    """
    Validate keyword input into a request model.

    Raises:
        InvalidRangeError: input failed validation
    """
    for key in ("working_hours", "preferred_hours"):
        if key in data:
            data[key] = _hour_range_input(data[key])

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidRangeError(problems) from e
