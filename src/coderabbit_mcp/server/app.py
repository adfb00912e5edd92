"""Server assembly — wire the registry, handlers, router, and transport."""

from __future__ import annotations

import logging

import httpx

from coderabbit_mcp.catalog.registry import CapabilityRegistry
from coderabbit_mcp.config import ServerSettings
from coderabbit_mcp.handlers.base import Clock, utc_now
from coderabbit_mcp.handlers.table import HandlerTable
from coderabbit_mcp.protocol.transport import ServerTransport, StdioTransport
from coderabbit_mcp.server.loop import TransportLoop
from coderabbit_mcp.server.router import RequestRouter

logger = logging.getLogger(__name__)


def build_router(
    settings: ServerSettings,
    *,
    registry: CapabilityRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Clock = utc_now,
) -> RequestRouter:
    """Create a router over the default catalog and handler set.

    *transport* replaces the HTTP transport used by the network-bound
    handlers (tests pass an ``httpx.MockTransport``).

    Raises:
        RuntimeError: A catalogued tool has no handler, or a handler has no
            catalog entry.
    """
    registry = registry or CapabilityRegistry.default(agent_url=settings.default_agent_url)
    handlers = HandlerTable.from_settings(settings, transport=transport, clock=clock)

    declared = {tool.name for tool in registry.list_tools()}
    if declared != handlers.names():
        missing = sorted(declared - handlers.names())
        orphaned = sorted(handlers.names() - declared)
        msg = f"catalog/handler mismatch: missing={missing} orphaned={orphaned}"
        raise RuntimeError(msg)

    return RequestRouter(registry, handlers)


async def serve(settings: ServerSettings, transport: ServerTransport) -> None:
    """Serve requests from *transport* until its input closes."""
    router = build_router(settings)
    if not settings.has_credentials:
        logger.warning("CODERABBIT_API_KEY is not set; generate_report will fail")
    await TransportLoop(transport, router).run()


async def serve_stdio(settings: ServerSettings) -> None:
    """Serve requests over this process's stdin/stdout."""
    logger.info("CodeRabbit MCP Server running on stdio")
    await serve(settings, StdioTransport(line_limit=settings.max_line_bytes))
