from __future__ import annotations

import logging
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from slotwise import ARGS_DIR
from slotwise.office.models import HourRange, SchedulingPreferences

logger = logging.getLogger(__name__)


# =============================================================================
# SchedulingConfig (args/scheduling.yaml)
# =============================================================================

class HourRangeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    start: int = Field(default=9, ge=0, le=23)
    end: int = Field(default=17, ge=0, le=23)

    def to_hour_range(self) -> HourRange:
        return HourRange(start=self.start, end=self.end)


class SearchSettingsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    working_hours: HourRangeConfig = Field(default_factory=HourRangeConfig)
    exclude_weekends: bool = Field(default=True)
    step_minutes: int = Field(default=30, ge=1)
    days_ahead: int = Field(default=7, ge=1)
    top_n: int = Field(default=5, ge=1)


class PreferenceDefaultsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    preferred_hours: Optional[HourRangeConfig] = None
    avoid_lunch_time: bool = Field(default=True)
    prefer_mornings: bool = Field(default=False)
    minimize_meeting_days: bool = Field(default=False)
    buffer_between_meetings: Optional[int] = Field(default=15, ge=0)

    def to_preferences(self) -> SchedulingPreferences:
        return SchedulingPreferences(
            preferred_hours=self.preferred_hours.to_hour_range() if self.preferred_hours else None,
            avoid_lunch_time=self.avoid_lunch_time,
            prefer_mornings=self.prefer_mornings,
            minimize_meeting_days=self.minimize_meeting_days,
            buffer_between_meetings=self.buffer_between_meetings,
        )


class GoogleCalendarConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    calendar_id: str = Field(default="primary")
    page_size: int = Field(default=250, ge=1, le=2500)
    access_token_env: str = Field(default="GOOGLE_ACCESS_TOKEN")


class InsightsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    lookback_days: int = Field(default=30, ge=1)
    high_load_threshold: float = Field(default=4.0, ge=0)


class AnalyticsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    weekly_work_hours: float = Field(default=40, gt=0)
    monthly_work_hours: float = Field(default=160, gt=0)


class SchedulingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    search: SearchSettingsConfig = Field(default_factory=SearchSettingsConfig)
    defaults: PreferenceDefaultsConfig = Field(default_factory=PreferenceDefaultsConfig)
    google: GoogleCalendarConfig = Field(default_factory=GoogleCalendarConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @model_validator(mode="after")
    def _check_working_hours(self) -> "SchedulingConfig":
        hours = self.search.working_hours
        if hours.start >= hours.end:
            raise ValueError(
                f"working_hours.start ({hours.start}) must be before working_hours.end ({hours.end})"
            )
        return self


# =============================================================================
# load_and_validate
# =============================================================================

_CONFIG_MAP: dict[str, type[BaseModel]] = {
    "scheduling": SchedulingConfig,
}


def load_and_validate(config_name: str, model_class: type[BaseModel] | None = None) -> BaseModel:
    if model_class is None:
        model_class = _CONFIG_MAP.get(config_name)
        if model_class is None:
            raise ValueError(f"Unknown config: {config_name}. Available: {list(_CONFIG_MAP.keys())}")

    yaml_path = ARGS_DIR / f"{config_name}.yaml"

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return model_class.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {config_name}: {e}, using defaults")
        return model_class()


def load_scheduling_config() -> SchedulingConfig:
    """Load args/scheduling.yaml, falling back to defaults."""
    return load_and_validate("scheduling")  # type: ignore[return-value]
