"""Shared fixtures for the coderabbit_mcp test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from coderabbit_mcp.config import ServerSettings

FIXED_NOW = datetime(2024, 1, 31, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings(
        api_key="cr-test-key",
        base_url="https://api.test/api/v1",
        default_agent_url="http://agent.test:8080",
    )
