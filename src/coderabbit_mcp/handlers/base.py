"""ToolHandler protocol — the contract every tool implementation satisfies."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from coderabbit_mcp.protocol.models import ToolResult

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def iso_timestamp(moment: datetime) -> str:
    """Format *moment* as ``2024-01-31T12:00:00.000Z``."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def json_block(title: str, payload: Any) -> str:
    """Render a titled, indented JSON block for a text content part."""
    return f"{title}\n\n{json.dumps(payload, indent=2)}"


@runtime_checkable
class ToolHandler(Protocol):
    """Executes one catalogued tool.

    ``arguments_model`` is the pydantic model the handler table parses the
    validated call arguments into before calling :meth:`handle`.
    """

    name: str
    arguments_model: type[BaseModel]

    async def handle(self, arguments: Any) -> ToolResult:
        """Run the tool and return its content."""
        ...
