"""RequestRouter — routes decoded JSON-RPC messages to the registry or handlers.

Holds no per-request state: every response is a function of the immutable
registry, the immutable handler table, and the incoming message.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from coderabbit_mcp import __version__
from coderabbit_mcp.protocol.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ServerError,
    UnexpectedHandlerError,
    UnknownToolError,
)
from coderabbit_mcp.protocol.models import JsonRpcRequest, JsonRpcResponse, RequestId
from coderabbit_mcp.server import envelope
from coderabbit_mcp.server.validator import SchemaValidator
from coderabbit_mcp.utils.telemetry import (
    ATTR_ERROR_TYPE,
    ATTR_RESOURCE_URI,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from coderabbit_mcp.catalog.registry import CapabilityRegistry
    from coderabbit_mcp.handlers.table import HandlerTable

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SERVER_NAME = "coderabbit-mcp-server"
PROTOCOL_VERSION = "2024-11-05"

# Short method names accepted alongside the MCP ones
METHOD_ALIASES: dict[str, str] = {
    "list-tools": "tools/list",
    "call-tool": "tools/call",
    "list-resources": "resources/list",
    "read-resource": "resources/read",
}

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class RequestRouter:
    """Dispatch MCP methods and normalise every outcome into a response.

    Usage::

        router = RequestRouter(CapabilityRegistry.default(), HandlerTable.from_settings(s))
        response = await router.route({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        handlers: HandlerTable,
        *,
        validator: SchemaValidator | None = None,
    ) -> None:
        self._registry = registry
        self._handlers = handlers
        self._validator = validator or SchemaValidator()
        self._methods: MappingProxyType[str, MethodHandler] = MappingProxyType({
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/read": self._read_resource,
        })

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    async def route(self, message: Any) -> JsonRpcResponse | None:
        """Handle one decoded message.

        Returns ``None`` for notifications.  Never raises: every failure is
        converted into an error response carrying the request id when it
        could be recovered.
        """
        try:
            request = self._parse(message)
        except ServerError as exc:
            logger.warning("Rejected message: %s", exc.message)
            return envelope.failure(_recover_id(message), exc)

        if request.is_notification:
            logger.debug("Ignoring notification %s", request.method)
            return None

        try:
            result = await self.dispatch(request.method, request.params)
        except ServerError as exc:
            return envelope.failure(request.id, exc)
        except Exception:
            logger.exception("Unhandled error while routing %s", request.method)
            return envelope.failure(request.id, UnexpectedHandlerError(request.method))
        return envelope.success(request.id, result)

    async def dispatch(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Run *method* and return its result payload.

        Raises:
            ServerError: Any taxonomy error raised along the way.
        """
        canonical = METHOD_ALIASES.get(method, method)
        handler = self._methods.get(canonical)
        if handler is None:
            raise MethodNotFoundError(method)
        logger.debug("Dispatching %s", canonical)
        return await handler(params)

    # -- Method implementations ---------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo") or {}
        logger.info("Client connected: %s %s", client.get("name", "?"), client.get("version", ""))
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self._registry.list_tools()]}

    async def _list_resources(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": [res.to_wire() for res in self._registry.list_resources()]}

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("'name' must be a non-empty string")

        descriptor = self._registry.get_tool(name)
        if descriptor is None or name not in self._handlers:
            raise UnknownToolError(name)

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        with _tracer.start_as_current_span("tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                validation = self._validator.validate(descriptor.input_schema, arguments)
                validation.raise_for_violations(name)
                result = await self._invoke(name, validation.arguments)
            except ServerError as exc:
                span.set_attribute(ATTR_ERROR_TYPE, exc.type_name)
                raise
        return result

    async def _invoke(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            result = await self._handlers.invoke(name, arguments)
        except ServerError:
            raise
        except Exception as exc:
            logger.exception("Handler for %s raised", name)
            raise UnexpectedHandlerError(name) from exc
        return result.to_wire()

    async def _read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if not isinstance(uri, str) or not uri:
            raise InvalidParamsError("'uri' must be a non-empty string")

        with _tracer.start_as_current_span("resource.read") as span:
            span.set_attribute(ATTR_RESOURCE_URI, uri)
            try:
                contents = self._registry.read_resource(uri)
            except ServerError as exc:
                span.set_attribute(ATTR_ERROR_TYPE, exc.type_name)
                raise
        return {"contents": [contents.to_wire()]}

    # -- Parsing --------------------------------------------------------------

    @staticmethod
    def _parse(message: Any) -> JsonRpcRequest:
        if not isinstance(message, dict):
            raise InvalidRequestError("request must be a JSON object")
        try:
            return JsonRpcRequest.model_validate(message)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "request" for err in exc.errors()
            )
            raise InvalidRequestError(f"malformed field(s): {fields}") from exc


def _recover_id(message: Any) -> RequestId | None:
    """Best-effort id for a message that failed to parse."""
    if not isinstance(message, dict):
        return None
    request_id = message.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (int, float, str)):
        return None
    return request_id
