"""Client-side management of smart plug away/anti-theft rules."""

__all__ = [
    "ChildId",
    "CommandEnvelope",
    "CommandTransport",
    "EditRuleConfig",
    "RuleConfig",
    "RuleManager",
    "ScheduleRule",
    "SendOptions",
    "check_response",
]
from .commands_model import (
    ChildId,
    CommandEnvelope,
    EditRuleConfig,
    RuleConfig,
    ScheduleRule,
    SendOptions,
)
from .rule_manager import RuleManager
from .transport import CommandTransport, check_response
