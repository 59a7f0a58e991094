"""Rule field encoders for the away/anti-theft module.

Converts caller supplied times and weekday selections into the fields the
device stores for a rule, and back again for display.
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, Optional, Union

from ..const import MINUTES_PER_DAY, WEEKDAY_NAMES, TimeOption
from ..exception import CommandValidationError

TimeSpec = Union[datetime.datetime, datetime.time, int, str]

_SOLAR_OPTIONS = {
    "sunrise": TimeOption.SUNRISE,
    "sunset": TimeOption.SUNSET,
}


def normalize_time(value: TimeSpec) -> tuple[TimeOption, int]:
    """Return the (time option, minutes since midnight) pair for a boundary.

    Only the time-of-day of a ``datetime`` is used. Integers are taken as
    minutes since midnight without range checks; ``RuleConfig`` validates
    ranges before values reach this point.

    Examples:
        normalize_time(1320) -> (TimeOption.FIXED, 1320)
        normalize_time(datetime.time(22, 0)) -> (TimeOption.FIXED, 1320)
        normalize_time("sunset") -> (TimeOption.SUNSET, 0)
    """
    if isinstance(value, bool):
        raise CommandValidationError("Rule time cannot be a boolean")
    if isinstance(value, datetime.datetime):
        return TimeOption.FIXED, value.hour * 60 + value.minute
    if isinstance(value, datetime.time):
        return TimeOption.FIXED, value.hour * 60 + value.minute
    if isinstance(value, int):
        return TimeOption.FIXED, value
    if isinstance(value, str) and value.strip().lower() in _SOLAR_OPTIONS:
        return _SOLAR_OPTIONS[value.strip().lower()], 0
    raise CommandValidationError(f"Unsupported rule time: {value!r}")


def encode_time_boundary(value: TimeSpec, *, end: bool = False) -> dict[str, int]:
    """Encode a start (``stime_opt``/``smin``) or end (``etime_opt``/``emin``)."""
    option, minutes = normalize_time(value)
    if end:
        return {"etime_opt": int(option), "emin": minutes}
    return {"stime_opt": int(option), "smin": minutes}


def encode_wday(days_of_week: Iterable[int]) -> list[int]:
    """Encode weekday indices (0=Sunday) into the device's 7-slot wday list."""
    wday = [0] * 7
    for day in days_of_week:
        if isinstance(day, bool) or not isinstance(day, int):
            raise CommandValidationError(
                f"Weekday entries must be integers, got {day!r}"
            )
        if not 0 <= day <= 6:
            raise CommandValidationError(
                f"Weekday index must be 0-6 (0=Sunday), got {day}"
            )
        wday[day] = 1
    return wday


def decode_wday(wday: Iterable[Any]) -> list[int]:
    """Convert a wday list back into sorted weekday indices."""
    return [index for index, flag in enumerate(wday) if flag]


def _weekday_index(date: datetime.date) -> int:
    # isoweekday: Monday=1 .. Sunday=7
    return date.isoweekday() % 7


def create_schedule_rule(
    start: TimeSpec,
    end: Optional[TimeSpec] = None,
    days_of_week: Optional[Iterable[int]] = None,
    *,
    today: Optional[datetime.date] = None,
) -> dict[str, Any]:
    """Build the schedule portion of a rule.

    With weekdays the rule repeats weekly. Without any, the device expects a
    one-off rule, so the date of ``start`` (or ``today``) is encoded and
    only its weekday is selected.

    Args:
        start: Rule start as datetime/time, minutes since midnight, or
            ``"sunrise"``/``"sunset"``
        end: Rule end, same formats as ``start``; omitted when None
        days_of_week: Weekday indices, 0=Sunday through 6=Saturday
        today: Date used for one-off rules when ``start`` carries no date

    Returns:
        Mapping of protocol field names to encoded values
    """
    schedule: dict[str, Any] = {}
    schedule.update(encode_time_boundary(start))
    if end is not None:
        schedule.update(encode_time_boundary(end, end=True))

    days = list(days_of_week) if days_of_week is not None else []
    if days:
        schedule["wday"] = encode_wday(days)
        schedule["repeat"] = 1
        return schedule

    if isinstance(start, datetime.datetime):
        date = start.date()
    else:
        date = today or datetime.date.today()
    schedule["wday"] = encode_wday([_weekday_index(date)])
    schedule["repeat"] = 0
    schedule["day"] = date.day
    schedule["month"] = date.month
    schedule["year"] = date.year
    return schedule


def encode_enable(enable: bool) -> int:
    """Serialize an enable flag as the device's 1/0."""
    return 1 if enable else 0


def decode_enable(value: Any) -> bool:
    """Interpret a device enable field."""
    return bool(int(value or 0))


def minutes_to_time(minutes: int) -> datetime.time:
    """Convert minutes since midnight into a time (1440 wraps to 00:00)."""
    minutes = minutes % MINUTES_PER_DAY
    return datetime.time(minutes // 60, minutes % 60)


def format_minutes(minutes: int, option: int = TimeOption.FIXED) -> str:
    """Render a rule boundary for humans, e.g. ``22:00`` or ``sunset``."""
    if option == TimeOption.SUNRISE:
        return "sunrise"
    if option == TimeOption.SUNSET:
        return "sunset"
    if minutes == MINUTES_PER_DAY:
        return "24:00"
    return minutes_to_time(minutes).strftime("%H:%M")


def weekdays_to_names(days_of_week: Iterable[int]) -> list[str]:
    """Convert weekday indices into short names (Sun..Sat)."""
    return [WEEKDAY_NAMES[day] for day in days_of_week if 0 <= day <= 6]
