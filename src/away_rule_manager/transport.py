"""Transport contract consumed by the rule manager.

The concrete transport (socket, encryption, retries, timeouts) lives outside
this package. Anything with a matching ``send`` coroutine can be used.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

from .commands_model import ChildTarget, SendOptions
from .exception import ResponseError


class CommandTransport(Protocol):
    """Delivers a command envelope to a device and returns its response."""

    async def send(
        self,
        envelope: Dict[str, Any],
        child_target: ChildTarget = None,
        options: Optional[SendOptions] = None,
    ) -> Dict[str, Any]:
        """Send ``envelope``, optionally to a child device.

        Returns the JSON-decoded response for the addressed command, which
        carries at least ``err_code``. Transport failures are raised.
        """
        ...


def check_response(
    response: Mapping[str, Any], *, context: str = "command"
) -> Mapping[str, Any]:
    """Raise ResponseError when ``response`` reports a non-zero err_code."""
    err_code = response.get("err_code")
    if err_code not in (0, None):
        raise ResponseError(
            f"{context} failed with err_code {err_code}"
            + (f": {response['err_msg']}" if "err_msg" in response else ""),
            response,
        )
    return response
