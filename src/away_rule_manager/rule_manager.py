"""Away/anti-theft rule lifecycle operations."""

from __future__ import annotations

import datetime
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from .commands_model import (
    ChildId,
    ChildTarget,
    CommandEnvelope,
    EditRuleConfig,
    RuleConfig,
    ScheduleRule,
    SendOptions,
    as_child_target,
)
from .config import get_namespace
from .const import RuleVerb
from .exception import CommandValidationError, ResponseError
from .transport import CommandTransport

logger = logging.getLogger(__name__)

_ConfigT = TypeVar("_ConfigT", bound=RuleConfig)


class RuleManager:
    """Manage the away rules stored on a device or one of its children.

    Every call sends exactly one command and returns the device response
    as-is. Nothing is cached: the device is the only source of truth for
    rule ids and persistence. A non-zero ``err_code`` is returned to the
    caller, not raised; transport failures propagate unchanged.
    """

    def __init__(
        self,
        transport: CommandTransport,
        namespace: Optional[str] = None,
        child_id: Union[ChildId, str, None] = None,
    ) -> None:
        """Bind the manager to a transport, namespace and optional child."""
        self._transport = transport
        self._namespace = namespace or get_namespace()
        self._child_id: ChildTarget = as_child_target(child_id)

    @property
    def namespace(self) -> str:
        """Protocol namespace commands are sent under."""
        return self._namespace

    @property
    def child_id(self) -> ChildTarget:
        """Child device addressed by this manager, or None for the parent."""
        return self._child_id

    def for_child(self, child_id: Union[ChildId, str, None]) -> RuleManager:
        """Return a manager for another child sharing this transport."""
        return type(self)(self._transport, self._namespace, child_id)

    def build_envelope(
        self, verb: RuleVerb, params: Optional[Dict[str, Any]] = None
    ) -> CommandEnvelope:
        """Wrap ``params`` for ``verb`` under this manager's namespace."""
        return CommandEnvelope(self._namespace, verb, params or {})

    async def _send(
        self,
        verb: RuleVerb,
        params: Optional[Dict[str, Any]],
        send_options: Optional[SendOptions],
    ) -> Dict[str, Any]:
        envelope = self.build_envelope(verb, params)
        logger.debug(
            "Sending %s.%s (child=%s)",
            self._namespace,
            verb.value,
            self._child_id,
        )
        response = await self._transport.send(
            envelope.to_dict(), self._child_id, send_options
        )
        err_code = response.get("err_code")
        if err_code not in (0, None):
            logger.warning(
                "%s.%s returned err_code %s (child=%s)",
                self._namespace,
                verb.value,
                err_code,
                self._child_id,
            )
        return response

    async def get_rules(
        self, send_options: Optional[SendOptions] = None
    ) -> Dict[str, Any]:
        """Request all rules; the response carries ``rule_list``."""
        return await self._send(RuleVerb.GET_RULES, None, send_options)

    async def get_rule(
        self, rule_id: str, send_options: Optional[SendOptions] = None
    ) -> Optional[Dict[str, Any]]:
        """Return the rule with ``rule_id``, or None if the device has none.

        The batch response's ``err_code`` is copied onto the returned
        mapping for convenience. It is the status of the get_rules call at
        lookup time, not a per-rule status. The rule in the response is not
        modified.
        """
        response = await self.get_rules(send_options)
        rule_list = response.get("rule_list")
        if rule_list is None:
            raise ResponseError(
                f"{self._namespace}.get_rules response has no rule_list",
                response,
            )
        for rule in rule_list:
            if rule.get("id") == rule_id:
                return {**rule, "err_code": response.get("err_code")}
        return None

    async def get_schedule_rules(
        self, send_options: Optional[SendOptions] = None
    ) -> List[ScheduleRule]:
        """Return the device rules decoded into ScheduleRule models."""
        response = await self.get_rules(send_options)
        return [
            ScheduleRule.from_wire(rule)
            for rule in response.get("rule_list") or []
        ]

    async def add_rule(
        self,
        config: Optional[RuleConfig] = None,
        *,
        send_options: Optional[SendOptions] = None,
        today: Optional[datetime.date] = None,
        **fields: Any,
    ) -> Dict[str, Any]:
        """Add a rule; the response carries the device-assigned ``id``.

        Pass a RuleConfig or its fields as keywords, e.g.
        ``add_rule(start=1320, end=1440, days_of_week=[0, 6])``.
        """
        rule = _coerce_config(RuleConfig, config, fields)
        return await self._send(
            RuleVerb.ADD_RULE, rule.to_rule_params(today=today), send_options
        )

    async def edit_rule(
        self,
        config: Optional[RuleConfig] = None,
        *,
        send_options: Optional[SendOptions] = None,
        today: Optional[datetime.date] = None,
        **fields: Any,
    ) -> Dict[str, Any]:
        """Replace the rule identified by ``id`` with the given settings."""
        rule = _coerce_config(EditRuleConfig, config, fields)
        return await self._send(
            RuleVerb.EDIT_RULE, rule.to_rule_params(today=today), send_options
        )

    async def delete_rule(
        self, rule_id: str, send_options: Optional[SendOptions] = None
    ) -> Dict[str, Any]:
        """Delete a single rule by id."""
        return await self._send(
            RuleVerb.DELETE_RULE, {"id": rule_id}, send_options
        )

    async def delete_all_rules(
        self, send_options: Optional[SendOptions] = None
    ) -> Dict[str, Any]:
        """Delete every away rule on the device."""
        return await self._send(RuleVerb.DELETE_ALL_RULES, None, send_options)

    async def set_overall_enable(
        self, enable: bool, send_options: Optional[SendOptions] = None
    ) -> Dict[str, Any]:
        """Turn the away feature on or off as a whole."""
        return await self._send(
            RuleVerb.SET_OVERALL_ENABLE,
            {"enable": 1 if enable else 0},
            send_options,
        )


def _coerce_config(
    config_cls: Type[_ConfigT],
    config: Optional[RuleConfig],
    fields: Dict[str, Any],
) -> _ConfigT:
    """Build ``config_cls`` from a config object, keyword fields, or both."""
    overrides = dict(fields)
    if "daysOfWeek" in overrides:
        if "days_of_week" in overrides:
            raise CommandValidationError(
                "Pass days_of_week or daysOfWeek, not both"
            )
        overrides["days_of_week"] = overrides.pop("daysOfWeek")
    if config is None:
        return config_cls(**overrides)
    if overrides or type(config) is not config_cls:
        base = config.model_dump(include=set(config_cls.model_fields))
        return config_cls(**{**base, **overrides})
    return config
