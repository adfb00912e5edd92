"""Server core — validation, routing, envelopes, and the transport loop."""

from coderabbit_mcp.server.app import build_router, serve, serve_stdio
from coderabbit_mcp.server.loop import TransportLoop
from coderabbit_mcp.server.router import RequestRouter
from coderabbit_mcp.server.validator import SchemaValidator, ValidationResult

__all__ = [
    "RequestRouter",
    "SchemaValidator",
    "TransportLoop",
    "ValidationResult",
    "build_router",
    "serve",
    "serve_stdio",
]
