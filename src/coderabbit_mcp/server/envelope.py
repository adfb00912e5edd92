"""Response envelope builders — the only place responses are constructed."""

from __future__ import annotations

from typing import Any

from coderabbit_mcp.protocol.errors import ServerError
from coderabbit_mcp.protocol.models import JsonRpcError, JsonRpcResponse, RequestId


def success(request_id: RequestId | None, result: dict[str, Any]) -> JsonRpcResponse:
    """Wrap a method result."""
    return JsonRpcResponse(id=request_id, result=result)


def failure(request_id: RequestId | None, error: ServerError) -> JsonRpcResponse:
    """Wrap a :class:`ServerError` as a JSON-RPC error response."""
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=error.code, message=error.message, data=error.data),
    )
