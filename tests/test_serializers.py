"""Tests for rule display serialization."""

from away_rule_manager.commands_model import ScheduleRule
from away_rule_manager.serializers import serialize_schedule_rule


def test_repeating_rule_labels(rule_list_response):
    rule = ScheduleRule.from_wire(rule_list_response["rule_list"][1])

    data = serialize_schedule_rule(rule)

    assert data["start_label"] == "sunset"
    assert data["end_label"] == "23:00"
    assert data["days"] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert "date" not in data


def test_one_off_rule_date():
    rule = ScheduleRule(
        start=60, repeat=False, day=2, month=6, year=2024, days_of_week=[0]
    )
    data = serialize_schedule_rule(rule)
    assert data["date"] == "2024-06-02"
    assert data["end_label"] is None


def test_one_off_rule_with_partial_date():
    """Test a year without month/day does not break serialization."""
    rule = ScheduleRule(start=60, repeat=False, year=2024)

    data = serialize_schedule_rule(rule)

    assert "date" not in data
    assert data["start_label"] == "01:00"
