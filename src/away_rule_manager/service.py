"""FastAPI wiring for the away rule service.

The host application supplies the device transport; this module only
builds the app around a RuleManager bound to it.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from .api.routes_rules import router as rules_router
from .commands_model import SendOptions
from .config import get_default_timeout
from .rule_manager import RuleManager
from .transport import CommandTransport

logger = logging.getLogger(__name__)


def create_app(
    transport: CommandTransport,
    *,
    namespace: Optional[str] = None,
    child_id: Optional[str] = None,
    send_options: Optional[SendOptions] = None,
) -> FastAPI:
    """Create the HTTP app exposing away rule operations for ``transport``."""
    app = FastAPI(title="Away Rule Service")
    app.state.rule_manager = RuleManager(transport, namespace, child_id)
    app.state.send_options = send_options or SendOptions(
        timeout=get_default_timeout()
    )
    app.include_router(rules_router)
    logger.info(
        "Away rule service ready (namespace=%s)",
        app.state.rule_manager.namespace,
    )
    return app
