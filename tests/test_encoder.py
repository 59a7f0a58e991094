"""Tests for the away rule field encoders."""

import datetime

import pytest

from away_rule_manager.commands import encoder
from away_rule_manager.commands_model import RuleConfig, ScheduleRule
from away_rule_manager.const import TimeOption
from away_rule_manager.exception import CommandValidationError


class TestNormalizeTime:
    """Start/end inputs collapse to minutes since midnight."""

    def test_minutes_pass_through(self):
        assert encoder.normalize_time(1320) == (TimeOption.FIXED, 1320)

    def test_datetime_uses_time_of_day_only(self):
        value = datetime.datetime(2021, 3, 14, 22, 15, 59)
        assert encoder.normalize_time(value) == (TimeOption.FIXED, 1335)

    def test_time_and_minutes_agree(self):
        assert encoder.normalize_time(
            datetime.time(7, 30)
        ) == encoder.normalize_time(450)

    def test_solar_options(self):
        assert encoder.normalize_time("sunrise") == (TimeOption.SUNRISE, 0)
        assert encoder.normalize_time("Sunset") == (TimeOption.SUNSET, 0)

    def test_out_of_range_minutes_are_not_rejected(self):
        """Ranges are enforced by RuleConfig, not the encoder."""
        assert encoder.normalize_time(2000) == (TimeOption.FIXED, 2000)

    @pytest.mark.parametrize("value", [True, "noon", 12.5, None])
    def test_unusable_input_rejected(self, value):
        with pytest.raises(CommandValidationError):
            encoder.normalize_time(value)


class TestWday:
    """Weekday indices map onto the 7-slot wday list."""

    def test_weekend(self):
        assert encoder.encode_wday([0, 6]) == [1, 0, 0, 0, 0, 0, 1]

    def test_weekdays(self):
        assert encoder.encode_wday([1, 2, 3, 4, 5]) == [0, 1, 1, 1, 1, 1, 0]

    def test_order_does_not_matter(self):
        assert encoder.encode_wday([6, 0]) == encoder.encode_wday([0, 6])

    def test_decode_returns_sorted_indices(self):
        assert encoder.decode_wday([1, 0, 0, 1, 0, 0, 1]) == [0, 3, 6]
        assert encoder.decode_wday([True, False, True]) == [0, 2]

    @pytest.mark.parametrize("days", [[7], [-1], ["mon"], [True]])
    def test_invalid_index_rejected(self, days):
        with pytest.raises(CommandValidationError):
            encoder.encode_wday(days)


class TestCreateScheduleRule:
    """create_schedule_rule builds the schedule part of a rule."""

    def test_repeating_rule(self):
        assert encoder.create_schedule_rule(1320, 1440, [0, 6]) == {
            "stime_opt": 0,
            "smin": 1320,
            "etime_opt": 0,
            "emin": 1440,
            "wday": [1, 0, 0, 0, 0, 0, 1],
            "repeat": 1,
        }

    def test_end_is_optional(self):
        schedule = encoder.create_schedule_rule("sunset", None, [1])
        assert schedule["stime_opt"] == int(TimeOption.SUNSET)
        assert "emin" not in schedule
        assert "etime_opt" not in schedule

    def test_no_days_makes_one_off_rule_for_today(self):
        saturday = datetime.date(2024, 6, 1)
        schedule = encoder.create_schedule_rule(60, 120, [], today=saturday)
        assert schedule["repeat"] == 0
        assert schedule["wday"] == [0, 0, 0, 0, 0, 0, 1]
        assert (schedule["year"], schedule["month"], schedule["day"]) == (
            2024,
            6,
            1,
        )

    def test_one_off_rule_uses_start_date(self):
        sunday_evening = datetime.datetime(2024, 6, 2, 18, 0)
        schedule = encoder.create_schedule_rule(
            sunday_evening, 1200, None, today=datetime.date(2000, 1, 1)
        )
        assert schedule["smin"] == 1080
        assert schedule["wday"] == [1, 0, 0, 0, 0, 0, 0]
        assert schedule["day"] == 2

    def test_round_trip_preserves_minutes_and_days(self):
        config = RuleConfig(
            start=datetime.time(6, 45), end=1015, days_of_week=[5, 1, 3]
        )
        echoed = {"id": "abc", **config.to_rule_params()}
        rule = ScheduleRule.from_wire(echoed)
        assert rule.start == 405
        assert rule.end == 1015
        assert set(rule.days_of_week) == {1, 3, 5}
        assert rule.enable is True
        assert rule.repeat is True


class TestEnable:
    """Enable flags travel as 1/0."""

    def test_encode(self):
        assert encoder.encode_enable(True) == 1
        assert encoder.encode_enable(False) == 0

    def test_decode_restores_bool(self):
        for flag in (True, False):
            assert encoder.decode_enable(encoder.encode_enable(flag)) is flag


class TestFormatting:
    """Human-readable renderings used by the CLI and API."""

    def test_format_minutes(self):
        assert encoder.format_minutes(1320) == "22:00"
        assert encoder.format_minutes(5) == "00:05"
        assert encoder.format_minutes(1440) == "24:00"
        assert encoder.format_minutes(0, TimeOption.SUNRISE) == "sunrise"

    def test_minutes_to_time_wraps_midnight(self):
        assert encoder.minutes_to_time(1440) == datetime.time(0, 0)

    def test_weekday_names(self):
        assert encoder.weekdays_to_names([0, 6]) == ["Sun", "Sat"]
