"""CodeRabbit MCP server — exposes CodeRabbit review tooling over JSON-RPC stdio."""

from __future__ import annotations

__version__ = "0.1.0"
