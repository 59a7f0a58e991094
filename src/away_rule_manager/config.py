"""Environment configuration helpers.

Settings are read from ``AWAY_RULES_*`` variables.
"""

from __future__ import annotations

import logging
import os

from .const import DEFAULT_FREQUENCY, DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)


def get_env(name: str, default: str | None = None) -> str | None:
    """Get an environment variable, or ``default`` when it is unset."""
    return os.getenv(name, default)


def get_env_float(name: str, default: float) -> float:
    """Get float environment variable, falling back to ``default``."""
    raw = get_env(name)
    if raw is None:
        return default

    try:
        return float(raw)
    except ValueError:
        logger.warning(
            "Invalid float value for %s: '%s'. Using default: %s",
            name,
            raw,
            default,
        )
        return default


def get_env_int(name: str, default: int) -> int:
    """Get integer environment variable, falling back to ``default``."""
    raw = get_env(name)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Invalid integer value for %s: '%s'. Using default: %s",
            name,
            raw,
            default,
        )
        return default


def get_namespace() -> str:
    """Return the protocol namespace used for away rule commands."""
    return get_env("AWAY_RULES_NAMESPACE", DEFAULT_NAMESPACE) or DEFAULT_NAMESPACE


def get_default_frequency() -> int:
    """Return the rule check interval used when callers give none."""
    return get_env_int("AWAY_RULES_DEFAULT_FREQUENCY", DEFAULT_FREQUENCY)


def get_default_timeout() -> float:
    """Return the transport timeout applied by the HTTP layer."""
    return get_env_float("AWAY_RULES_TIMEOUT", 10.0)


def get_log_level() -> str:
    """Return the configured log level name."""
    return (get_env("AWAY_RULES_LOG_LEVEL", "INFO") or "INFO").upper()
