"""Commands package: away rule field encoders."""

__all__ = [
    "TimeSpec",
    "create_schedule_rule",
    "decode_enable",
    "decode_wday",
    "encode_enable",
    "encode_time_boundary",
    "encode_wday",
    "format_minutes",
    "minutes_to_time",
    "normalize_time",
    "weekdays_to_names",
]
from .encoder import (
    TimeSpec,
    create_schedule_rule,
    decode_enable,
    decode_wday,
    encode_enable,
    encode_time_boundary,
    encode_wday,
    format_minutes,
    minutes_to_time,
    normalize_time,
    weekdays_to_names,
)
