"""Serialization helpers for rule display.

These convert decoded rules into JSON-safe, human-friendly primitives.
"""

from __future__ import annotations

from typing import Any, Dict

from .commands.encoder import format_minutes, weekdays_to_names
from .commands_model import ScheduleRule


def serialize_schedule_rule(rule: ScheduleRule) -> Dict[str, Any]:
    """Convert a ScheduleRule into a dictionary with readable times.

    The minute values are kept alongside the formatted strings so clients
    can round-trip them into an edit request.
    """
    data = rule.model_dump()
    data["start_label"] = format_minutes(rule.start, rule.start_option)
    data["end_label"] = (
        format_minutes(rule.end, rule.end_option)
        if rule.end is not None
        else None
    )
    data["days"] = weekdays_to_names(rule.days_of_week)
    if not rule.repeat and None not in (rule.year, rule.month, rule.day):
        data["date"] = f"{rule.year:04d}-{rule.month:02d}-{rule.day:02d}"
    return data
