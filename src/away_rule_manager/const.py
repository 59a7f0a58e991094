"""Protocol constants for the away/anti-theft rule module."""

from enum import Enum, IntEnum

DEFAULT_NAMESPACE = "anti_theft"
DEFAULT_FREQUENCY = 5
MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class RuleVerb(str, Enum):
    """Sub-commands understood by the away rule module."""

    GET_RULES = "get_rules"
    ADD_RULE = "add_rule"
    EDIT_RULE = "edit_rule"
    DELETE_RULE = "delete_rule"
    DELETE_ALL_RULES = "delete_all_rules"
    SET_OVERALL_ENABLE = "set_overall_enable"


class TimeOption(IntEnum):
    """How the device interprets a rule boundary (stime_opt / etime_opt)."""

    FIXED = 0
    SUNRISE = 1
    SUNSET = 2
