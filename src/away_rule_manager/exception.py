"""Exceptions module."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class CommandValidationError(Exception):
    """Raised when command arguments are invalid."""


class DeviceCommunicationError(Exception):
    """Raised when there are issues communicating with a device."""


class CommandTimeoutError(DeviceCommunicationError):
    """Raised when a command times out."""


class ResponseError(Exception):
    """Raised when a device response carries a non-zero err_code."""

    def __init__(
        self,
        message: str,
        response: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Keep the offending response for callers that inspect it."""
        super().__init__(message)
        self.response = dict(response or {})

    @property
    def err_code(self) -> Optional[int]:
        """Return the err_code reported by the device, if any."""
        return self.response.get("err_code")
