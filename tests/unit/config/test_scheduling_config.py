"""Tests for slotwise/config_models.py"""

from unittest.mock import patch

import pytest

from slotwise.config_models import SchedulingConfig, load_and_validate, load_scheduling_config
from slotwise.office.models import HourRange


class TestSchedulingConfig:
    def test_defaults(self):
        config = SchedulingConfig()
        assert config.search.working_hours.to_hour_range() == HourRange(9, 17)
        assert config.search.exclude_weekends is True
        assert config.search.step_minutes == 30
        assert config.search.top_n == 5
        assert config.google.calendar_id == "primary"
        assert config.insights.lookback_days == 30
        assert config.analytics.weekly_work_hours == 40
        assert config.analytics.monthly_work_hours == 160

    def test_default_preferences(self):
        prefs = SchedulingConfig().defaults.to_preferences()
        assert prefs.avoid_lunch_time is True
        assert prefs.buffer_between_meetings == 15
        assert prefs.preferred_hours is None

    def test_preferred_hours_override(self):
        config = SchedulingConfig(defaults={"preferred_hours": {"start": 10, "end": 15}})
        assert config.defaults.to_preferences().preferred_hours == HourRange(10, 15)

    def test_extra_keys_allowed(self):
        config = SchedulingConfig(search={"days_ahead": 3, "unknown_field": "value"})
        assert config.search.days_ahead == 3

    def test_non_positive_work_hours_rejected(self):
        with pytest.raises(ValueError):
            SchedulingConfig(analytics={"weekly_work_hours": 0})

    def test_invalid_hour_rejected(self):
        with pytest.raises(ValueError):
            SchedulingConfig(search={"working_hours": {"start": 9, "end": 24}})

    def test_inverted_working_hours_rejected(self):
        with pytest.raises(ValueError, match="must be before"):
            SchedulingConfig(search={"working_hours": {"start": 17, "end": 9}})


class TestLoadAndValidate:
    def test_unknown_config_raises(self):
        with pytest.raises(ValueError, match="Unknown config"):
            load_and_validate("nonexistent_config")

    def test_missing_file_returns_defaults(self, tmp_path):
        with patch("slotwise.config_models.ARGS_DIR", tmp_path):
            config = load_scheduling_config()
            assert isinstance(config, SchedulingConfig)
            assert config.search.days_ahead == 7

    def test_valid_yaml_loads(self, tmp_path):
        yaml_file = tmp_path / "scheduling.yaml"
        yaml_file.write_text("search:\n  working_hours:\n    start: 8\n    end: 16\n  top_n: 10\n")
        with patch("slotwise.config_models.ARGS_DIR", tmp_path):
            config = load_scheduling_config()
            assert config.search.working_hours.start == 8
            assert config.search.top_n == 10

    def test_invalid_yaml_returns_defaults(self, tmp_path):
        yaml_file = tmp_path / "scheduling.yaml"
        yaml_file.write_text("search:\n  step_minutes: -30\n")
        with patch("slotwise.config_models.ARGS_DIR", tmp_path):
            config = load_scheduling_config()
            assert config.search.step_minutes == 30

    def test_repo_config_is_valid(self):
        config = load_scheduling_config()
        assert config.defaults.buffer_between_meetings == 15
        assert config.search.working_hours.to_hour_range() == HourRange(9, 17)
