"""Shared error types for the protocol layer.

Every error carries the JSON-RPC ``code`` it is reported with, so the envelope
builder can turn any of them into an error response without a lookup table.
"""

from __future__ import annotations

from typing import Any

# JSON-RPC 2.0 reserved codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Server-defined codes
UPSTREAM_ERROR = -32001
RESOURCE_NOT_FOUND = -32002


class ServerError(Exception):
    """Base error for every failure reported back to the client."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def type_name(self) -> str:
        return type(self).__name__

    @property
    def data(self) -> dict[str, Any]:
        """Structured detail attached to the error response."""
        return {"type": self.type_name}


class DecodeError(ServerError):
    """An input line could not be decoded as a JSON object."""

    code = PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Parse error" + (f": {detail}" if detail else ""))


class InvalidRequestError(ServerError):
    """A decoded message is not a valid JSON-RPC request."""

    code = INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid request" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ServerError):
    """The request names a method the server does not implement."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ServerError):
    """Method parameters are missing or have the wrong shape."""

    code = INVALID_PARAMS

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid params: {detail}")


class UnknownToolError(ServerError):
    """Requested tool does not exist in the registry."""

    code = INVALID_PARAMS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class UnknownResourceError(ServerError):
    """Requested resource URI does not exist in the registry."""

    code = RESOURCE_NOT_FOUND

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")

    @property
    def data(self) -> dict[str, Any]:
        return {"type": self.type_name, "uri": self.uri}


class ArgumentValidationError(ServerError):
    """Call arguments violate the tool's declared input schema."""

    code = INVALID_PARAMS

    def __init__(self, tool_name: str, violations: list[str]) -> None:
        self.tool_name = tool_name
        self.violations = violations
        detail = "; ".join(violations)
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")

    @property
    def type_name(self) -> str:
        return "ValidationError"

    @property
    def data(self) -> dict[str, Any]:
        return {"type": self.type_name, "violations": list(self.violations)}


class UpstreamError(ServerError):
    """A handler's call to an external service failed."""

    code = UPSTREAM_ERROR
    status: int | None = None

    @property
    def data(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type_name}
        if self.status is not None:
            data["status"] = self.status
        return data


class UpstreamAuthError(UpstreamError):
    """No credential is configured for the upstream service."""

    def __init__(self, detail: str = "API key not configured") -> None:
        super().__init__(f"CodeRabbit {detail}. Set CODERABBIT_API_KEY environment variable.")


class UpstreamHTTPError(UpstreamError):
    """The upstream service answered with a non-2xx status or failed in transit."""

    def __init__(self, status: int | None, detail: str) -> None:
        self.status = status
        self.detail = detail
        prefix = f"API Error: {status}" if status is not None else "API Error"
        super().__init__(f"{prefix} - {detail}")


class UpstreamTimeout(UpstreamError):
    """The upstream service did not answer within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Upstream request timed out after {timeout}s")


class UnexpectedHandlerError(ServerError):
    """A handler raised something outside the taxonomy.

    The original exception is logged, not sent to the client.
    """

    code = INTERNAL_ERROR

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Error executing {target}: internal error")
