"""Protocol layer — JSON-RPC models, error taxonomy, and transports."""

from coderabbit_mcp.protocol.errors import (
    ArgumentValidationError,
    DecodeError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ServerError,
    UnexpectedHandlerError,
    UnknownResourceError,
    UnknownToolError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamTimeout,
)
from coderabbit_mcp.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ResourceContents,
    ResourceDescriptor,
    TextContent,
    ToolDescriptor,
    ToolResult,
)
from coderabbit_mcp.protocol.transport import ServerTransport, StdioTransport, StreamTransport

__all__ = [
    "ArgumentValidationError",
    "DecodeError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ResourceContents",
    "ResourceDescriptor",
    "ServerError",
    "ServerTransport",
    "StdioTransport",
    "StreamTransport",
    "TextContent",
    "ToolDescriptor",
    "ToolResult",
    "UnexpectedHandlerError",
    "UnknownResourceError",
    "UnknownToolError",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamTimeout",
]
