"""Away rule API routes.

Thin HTTP wrappers around RuleManager. A non-zero ``err_code`` from the
device is reported as 502 with the device response in the detail; a
transport timeout becomes 504.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ..commands_model import RuleConfig, ScheduleRule, SendOptions
from ..exception import (
    CommandTimeoutError,
    DeviceCommunicationError,
    ResponseError,
)
from ..rule_manager import RuleManager
from ..serializers import serialize_schedule_rule
from ..transport import check_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/away", tags=["away"])


class EnableRequest(BaseModel):
    """Payload for switching the away feature on or off."""

    enable: bool


def _manager(request: Request, child_id: Optional[str]) -> RuleManager:
    manager: RuleManager = request.app.state.rule_manager
    if child_id:
        return manager.for_child(child_id)
    return manager


def _send_options(request: Request) -> Optional[SendOptions]:
    return getattr(request.app.state, "send_options", None)


def _protocol_error(exc: ResponseError) -> HTTPException:
    return HTTPException(
        status_code=502,
        detail={"message": str(exc), "response": exc.response},
    )


async def _guarded(call: Awaitable[Any], context: str) -> Any:
    """Await a manager call and translate failures into HTTP errors."""
    try:
        return await call
    except (CommandTimeoutError, asyncio.TimeoutError) as exc:
        logger.error("%s timed out: %s", context, exc)
        raise HTTPException(
            status_code=504, detail=f"{context} timed out"
        ) from exc
    except DeviceCommunicationError as exc:
        logger.error("%s failed: %s", context, exc)
        raise HTTPException(
            status_code=502, detail=f"{context} failed: {exc}"
        ) from exc
    except ResponseError as exc:
        raise _protocol_error(exc) from exc


async def _checked(
    call: Awaitable[Dict[str, Any]], context: str
) -> Dict[str, Any]:
    """Like _guarded, but also reject a non-zero err_code."""
    response = await _guarded(call, context)
    try:
        check_response(response, context=context)
    except ResponseError as exc:
        raise _protocol_error(exc) from exc
    return response


@router.get("/rules")
async def list_rules(
    request: Request, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Return the device's get_rules response."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.get_rules(_send_options(request)), "get_rules"
    )


@router.get("/rules/{rule_id}")
async def get_rule(
    request: Request, rule_id: str, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Return a single rule with readable times, or 404."""
    manager = _manager(request, child_id)
    rule = await _guarded(
        manager.get_rule(rule_id, _send_options(request)), "get_rules"
    )
    if rule is None:
        raise HTTPException(status_code=404, detail="Rule not found")
    try:
        check_response(rule, context="get_rules")
    except ResponseError as exc:
        raise _protocol_error(exc) from exc
    return serialize_schedule_rule(ScheduleRule.from_wire(rule))


@router.post("/rules")
async def add_rule(
    request: Request, config: RuleConfig, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Add a rule and return the response carrying its new id."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.add_rule(config, send_options=_send_options(request)),
        "add_rule",
    )


@router.put("/rules/{rule_id}")
async def edit_rule(
    request: Request,
    rule_id: str,
    config: RuleConfig,
    child_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Replace an existing rule."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.edit_rule(
            config, id=rule_id, send_options=_send_options(request)
        ),
        "edit_rule",
    )


@router.delete("/rules/{rule_id}")
async def delete_rule(
    request: Request, rule_id: str, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Delete one rule."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.delete_rule(rule_id, _send_options(request)), "delete_rule"
    )


@router.delete("/rules")
async def delete_all_rules(
    request: Request, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Delete every rule."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.delete_all_rules(_send_options(request)), "delete_all_rules"
    )


@router.put("/enable")
async def set_overall_enable(
    request: Request, payload: EnableRequest, child_id: Optional[str] = None
) -> Dict[str, Any]:
    """Enable or disable the away feature."""
    manager = _manager(request, child_id)
    return await _checked(
        manager.set_overall_enable(payload.enable, _send_options(request)),
        "set_overall_enable",
    )
