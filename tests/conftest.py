"""Shared fixtures for away rule tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

NAMESPACE = "anti_theft"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep AWAY_RULES_* settings from leaking into tests."""
    for name in (
        "AWAY_RULES_NAMESPACE",
        "AWAY_RULES_DEFAULT_FREQUENCY",
        "AWAY_RULES_TIMEOUT",
        "AWAY_RULES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_transport():
    """Create a transport whose send() answers with err_code 0."""
    transport = MagicMock()
    transport.send = AsyncMock(return_value={"err_code": 0})
    return transport


@pytest.fixture
def rule_list_response():
    """A get_rules response holding a weekend rule and a weekday rule."""
    return {
        "err_code": 0,
        "enable": 1,
        "version": 2,
        "rule_list": [
            {
                "id": "rule-1",
                "name": "Weekend nights",
                "enable": 1,
                "wday": [1, 0, 0, 0, 0, 0, 1],
                "stime_opt": 0,
                "smin": 1320,
                "etime_opt": 0,
                "emin": 1440,
                "repeat": 1,
                "frequency": 5,
            },
            {
                "id": "rule-2",
                "name": "",
                "enable": 0,
                "wday": [0, 1, 1, 1, 1, 1, 0],
                "stime_opt": 2,
                "smin": 0,
                "etime_opt": 0,
                "emin": 1380,
                "repeat": 1,
                "frequency": 10,
            },
        ],
    }
