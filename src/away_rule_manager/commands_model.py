"""Command models for away rule requests and device rule entities."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from .commands.encoder import (
    create_schedule_rule,
    decode_enable,
    decode_wday,
    encode_enable,
    encode_wday,
)
from .config import get_default_frequency
from .const import DEFAULT_FREQUENCY, MINUTES_PER_DAY, RuleVerb, TimeOption
from .exception import CommandValidationError

RuleTime = Union[
    int, datetime.datetime, datetime.time, Literal["sunrise", "sunset"]
]


@dataclass(frozen=True)
class ChildId:
    """Identifier of a child device (e.g. one outlet of a power strip)."""

    value: str

    def __post_init__(self) -> None:
        """Reject empty identifiers."""
        if not self.value:
            raise CommandValidationError("Child id cannot be empty")

    def __str__(self) -> str:
        return self.value


# None addresses the parent device itself.
ChildTarget = Optional[ChildId]


def as_child_target(value: Union[ChildId, str, None]) -> ChildTarget:
    """Normalize a child id given as a string into a ChildTarget."""
    if value is None or isinstance(value, ChildId):
        return value
    return ChildId(value)


@dataclass(frozen=True)
class CommandEnvelope:
    """A single sub-command addressed to a device module namespace."""

    namespace: str
    verb: RuleVerb
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Assemble the nested ``{namespace: {verb: params}}`` mapping."""
        return {self.namespace: {self.verb.value: dict(self.params)}}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CommandEnvelope:
        """Parse a nested command mapping back into an envelope."""
        if len(data) != 1:
            raise CommandValidationError(
                f"Envelope must have exactly one namespace, got {list(data)}"
            )
        namespace, body = next(iter(data.items()))
        if not isinstance(body, Mapping) or len(body) != 1:
            raise CommandValidationError(
                f"Namespace '{namespace}' must wrap exactly one command"
            )
        verb, params = next(iter(body.items()))
        try:
            rule_verb = RuleVerb(verb)
        except ValueError as exc:
            raise CommandValidationError(
                f"Unsupported command '{verb}'"
            ) from exc
        return cls(namespace=namespace, verb=rule_verb, params=dict(params or {}))


class SendOptions(BaseModel):
    """Transport-level call options, passed through untouched."""

    model_config = ConfigDict(extra="allow")

    timeout: Optional[float] = Field(
        None, gt=0, description="Transport timeout in seconds"
    )
    transport: Optional[Literal["tcp", "udp"]] = Field(
        None, description="Preferred transport for this call"
    )


class RuleConfig(BaseModel):
    """Arguments for add_rule."""

    model_config = ConfigDict(extra="forbid")

    start: RuleTime = Field(
        ..., description="datetime/time, minutes since midnight, or solar"
    )
    end: RuleTime = Field(
        ..., description="datetime/time, minutes since midnight, or solar"
    )
    days_of_week: List[int] = Field(
        ...,
        validation_alias=AliasChoices("days_of_week", "daysOfWeek"),
        description="Weekday indices, 0=Sunday .. 6=Saturday",
    )
    frequency: int = Field(default_factory=get_default_frequency, ge=1)
    name: str = ""
    enable: bool = True

    @field_validator("start", "end", mode="before")
    @classmethod
    def reject_timestamps(cls, v: Any) -> Any:
        """Reject numbers that are not whole minutes.

        Without this a float or numeric string such as ``1320.5`` falls
        through to the datetime member and is read as a Unix timestamp.
        """
        if isinstance(v, (bool, float)):
            raise ValueError(
                f"Expected whole minutes, a time or sunrise/sunset, got {v!r}"
            )
        if isinstance(v, str):
            token = v.strip()
            try:
                float(token)
            except ValueError:
                return v
            if not token.isdigit():
                raise ValueError(f"Expected whole minutes, got {v!r}")
        return v

    @field_validator("start", "end")
    @classmethod
    def validate_minutes(cls, v: RuleTime) -> RuleTime:
        """Validate integer boundaries fall within one day."""
        if isinstance(v, int) and not 0 <= v <= MINUTES_PER_DAY:
            raise ValueError(
                f"Minutes since midnight must be 0-{MINUTES_PER_DAY}, got {v}"
            )
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: List[int]) -> List[int]:
        """Validate weekday selections.

        An empty list is accepted; the device then treats the rule as a
        one-off for the start date.
        """
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Weekday index must be 0-6, got {day}")
        if len(v) != len(set(v)):
            raise ValueError("Duplicate weekdays not allowed")
        return v

    def to_rule_params(
        self, *, today: Optional[datetime.date] = None
    ) -> Dict[str, Any]:
        """Merge rule attributes with the encoded schedule fields."""
        params: Dict[str, Any] = {
            "frequency": self.frequency,
            "name": self.name,
            "enable": encode_enable(self.enable),
        }
        params.update(
            create_schedule_rule(
                self.start, self.end, self.days_of_week, today=today
            )
        )
        return params


class EditRuleConfig(RuleConfig):
    """Arguments for edit_rule: a full rule plus the device-assigned id."""

    id: str = Field(..., min_length=1)

    def to_rule_params(
        self, *, today: Optional[datetime.date] = None
    ) -> Dict[str, Any]:
        """Encode the rule and address it by id."""
        params = {"id": self.id}
        params.update(super().to_rule_params(today=today))
        return params


class ScheduleRule(BaseModel):
    """An away rule as stored and reported by the device."""

    id: Optional[str] = None
    start: int = 0
    end: Optional[int] = None
    start_option: int = int(TimeOption.FIXED)
    end_option: int = int(TimeOption.FIXED)
    days_of_week: List[int] = Field(default_factory=list)
    repeat: bool = True
    frequency: int = DEFAULT_FREQUENCY
    name: str = ""
    enable: bool = True
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    err_code: Optional[int] = None

    @classmethod
    def from_wire(cls, raw: Mapping[str, Any]) -> ScheduleRule:
        """Decode a rule object from a get_rules ``rule_list`` entry."""
        return cls(
            id=raw.get("id"),
            start=raw.get("smin", 0),
            end=raw.get("emin"),
            start_option=raw.get("stime_opt", int(TimeOption.FIXED)),
            end_option=raw.get("etime_opt", int(TimeOption.FIXED)),
            days_of_week=decode_wday(raw.get("wday", [])),
            repeat=decode_enable(raw.get("repeat", 1)),
            frequency=raw.get("frequency", DEFAULT_FREQUENCY),
            name=raw.get("name", ""),
            enable=decode_enable(raw.get("enable", 1)),
            day=raw.get("day"),
            month=raw.get("month"),
            year=raw.get("year"),
            err_code=raw.get("err_code"),
        )

    def to_wire(self) -> Dict[str, Any]:
        """Encode the rule back into device field names."""
        data: Dict[str, Any] = {
            "stime_opt": self.start_option,
            "smin": self.start,
            "wday": encode_wday(self.days_of_week),
            "repeat": encode_enable(self.repeat),
            "frequency": self.frequency,
            "name": self.name,
            "enable": encode_enable(self.enable),
        }
        if self.id is not None:
            data["id"] = self.id
        if self.end is not None:
            data["etime_opt"] = self.end_option
            data["emin"] = self.end
        if not self.repeat:
            data.update(day=self.day, month=self.month, year=self.year)
        return data
