"""``check_health`` — probe a self-hosted CodeRabbit agent."""

from __future__ import annotations

import logging

import httpx

from coderabbit_mcp.catalog.tools import DEFAULT_AGENT_URL
from coderabbit_mcp.handlers.models import CheckHealthArgs
from coderabbit_mcp.protocol.models import ToolResult

logger = logging.getLogger(__name__)

_TITLE = "CodeRabbit Agent Health Check"


class CheckHealthHandler:
    """GETs ``<agentUrl>/health`` with a bounded timeout.

    Never raises: an unreachable or failing agent is reported as an
    ``unhealthy`` result, not as an error.
    """

    name = "check_health"
    arguments_model = CheckHealthArgs

    def __init__(
        self,
        *,
        default_agent_url: str = DEFAULT_AGENT_URL,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._default_agent_url = default_agent_url
        self._timeout = timeout
        self._transport = transport

    async def handle(self, arguments: CheckHealthArgs) -> ToolResult:
        agent_url = arguments.agent_url or self._default_agent_url
        health_url = f"{agent_url.rstrip('/')}/health"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(health_url)
                response.raise_for_status()
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.info("Agent at %s is unhealthy: %s", agent_url, reason)
            return ToolResult.from_text(
                f"{_TITLE}\n\nStatus: ❌ Unhealthy\nURL: {agent_url}\nError: {reason}",
                {"status": "unhealthy", "url": agent_url, "error": reason},
            )

        return ToolResult.from_text(
            f"{_TITLE}\n\nStatus: ✅ Healthy\nURL: {agent_url}\n"
            f"Response: {response.status_code} {response.reason_phrase}",
            {"status": "healthy", "url": agent_url, "httpStatus": response.status_code},
        )
