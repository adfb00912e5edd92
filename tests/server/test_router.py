"""Tests for RequestRouter."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from coderabbit_mcp.catalog import CapabilityRegistry
from coderabbit_mcp.config import ServerSettings
from coderabbit_mcp.handlers import HandlerTable
from coderabbit_mcp.protocol.models import JsonRpcResponse, ToolResult
from coderabbit_mcp.server.app import build_router
from coderabbit_mcp.server.router import PROTOCOL_VERSION, SERVER_NAME, RequestRouter


class _Upstream:
    """Records requests and answers them with a fixed response."""

    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._response = response or httpx.Response(200, json={"report": "ok"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response


@pytest.fixture
def upstream() -> _Upstream:
    return _Upstream()


@pytest.fixture
def router(
    settings: ServerSettings, upstream: _Upstream, fixed_clock: Callable[[], datetime]
) -> RequestRouter:
    return build_router(settings, transport=httpx.MockTransport(upstream), clock=fixed_clock)


def _request(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def _call(name: str, arguments: Any = None, request_id: Any = 1) -> dict[str, Any]:
    params: dict[str, Any] = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return _request("tools/call", params, request_id)


async def _route(router: RequestRouter, message: Any) -> dict[str, Any]:
    response = await router.route(message)
    assert isinstance(response, JsonRpcResponse)
    return response.to_wire()


class TestListing:
    async def test_list_tools(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("tools/list"))
        names = [tool["name"] for tool in wire["result"]["tools"]]
        assert names == [
            "generate_report",
            "analyze_pull_request",
            "configure_review_settings",
            "send_review_command",
            "check_health",
            "create_custom_report",
        ]
        assert all("inputSchema" in tool for tool in wire["result"]["tools"])

    async def test_list_tools_alias(self, router: RequestRouter) -> None:
        canonical = await _route(router, _request("tools/list"))
        alias = await _route(router, _request("list-tools"))
        assert alias == canonical

    async def test_list_resources(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("resources/list", request_id="r1"))
        assert wire["id"] == "r1"
        assert [r["uri"] for r in wire["result"]["resources"]] == [
            "coderabbit://config/sample",
            "coderabbit://commands/help",
            "coderabbit://tools/astgrep",
            "coderabbit://env/template",
        ]

    async def test_list_resources_idempotent(self, router: RequestRouter) -> None:
        first = await _route(router, _request("list-resources"))
        second = await _route(router, _request("list-resources"))
        assert first == second
        for res in first["result"]["resources"]:
            read_a = await _route(router, _request("resources/read", {"uri": res["uri"]}))
            read_b = await _route(router, _request("resources/read", {"uri": res["uri"]}))
            assert read_a == read_b


class TestLifecycle:
    async def test_initialize(self, router: RequestRouter) -> None:
        wire = await _route(
            router,
            _request("initialize", {"clientInfo": {"name": "test-client", "version": "1.0"}}),
        )
        result = wire["result"]
        assert result["protocolVersion"] == PROTOCOL_VERSION
        assert result["serverInfo"]["name"] == SERVER_NAME
        assert set(result["capabilities"]) == {"tools", "resources"}

    async def test_ping(self, router: RequestRouter) -> None:
        assert (await _route(router, _request("ping")))["result"] == {}

    async def test_notification_gets_no_response(self, router: RequestRouter) -> None:
        assert await router.route({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None

    async def test_notification_is_not_dispatched(self, router: RequestRouter) -> None:
        with patch.object(HandlerTable, "invoke", new_callable=AsyncMock) as invoke:
            message = {"jsonrpc": "2.0", "method": "tools/call", "params": {"name": "check_health"}}
            assert await router.route(message) is None
        invoke.assert_not_awaited()


class TestCallTool:
    async def test_send_review_command(self, router: RequestRouter) -> None:
        wire = await _route(router, _call("send_review_command", {"command": "generate docstrings"}))
        text = wire["result"]["content"][0]["text"]
        assert text.startswith("CodeRabbit Command: @coderabbitai generate docstrings\n\n")

    async def test_remember_rule_with_context(self, router: RequestRouter) -> None:
        wire = await _route(
            router,
            _call("send_review_command", {"command": "remember rule", "context": "enforce camelCase"}),
        )
        assert "enforce camelCase" in wire["result"]["content"][0]["text"]

    async def test_call_tool_alias(self, router: RequestRouter) -> None:
        message = _request(
            "call-tool", {"name": "send_review_command", "arguments": {"command": "clarify suggestion"}}
        )
        wire = await _route(router, message)
        assert "Please clarify this suggestion" in wire["result"]["content"][0]["text"]

    async def test_generate_report_success(self, router: RequestRouter, upstream: _Upstream) -> None:
        wire = await _route(router, _call("generate_report", {"from": "2024-01-01", "to": "2024-01-31"}))
        assert len(upstream.requests) == 1
        assert wire["result"]["structuredContent"] == {"report": "ok"}

    async def test_missing_field_never_reaches_upstream(
        self, router: RequestRouter, upstream: _Upstream
    ) -> None:
        wire = await _route(router, _call("generate_report", {"from": "2024-01-01"}))
        error = wire["error"]
        assert error["code"] == -32602
        assert error["data"]["type"] == "ValidationError"
        assert error["data"]["violations"] == ["missing required field 'to'"]
        assert upstream.requests == []
        assert "result" not in wire

    async def test_invalid_enum(self, router: RequestRouter) -> None:
        with patch.object(HandlerTable, "invoke", new_callable=AsyncMock) as invoke:
            wire = await _route(router, _call("send_review_command", {"command": "deploy"}))
        assert wire["error"]["data"]["type"] == "ValidationError"
        invoke.assert_not_awaited()

    async def test_unknown_tool_never_invokes_handlers(self, router: RequestRouter) -> None:
        with patch.object(HandlerTable, "invoke", new_callable=AsyncMock) as invoke:
            wire = await _route(router, _call("delete_everything", {}))
        assert wire["error"]["code"] == -32602
        assert wire["error"]["data"] == {"type": "UnknownToolError"}
        assert wire["error"]["message"] == "Unknown tool: delete_everything"
        invoke.assert_not_awaited()

    async def test_missing_name(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("tools/call", {"arguments": {}}))
        assert wire["error"]["code"] == -32602
        assert wire["error"]["data"]["type"] == "InvalidParamsError"

    async def test_non_object_arguments(self, router: RequestRouter) -> None:
        wire = await _route(router, _call("check_health", ["http://x"]))
        assert wire["error"]["data"]["type"] == "ValidationError"

    async def test_arguments_default_to_empty(self, router: RequestRouter) -> None:
        wire = await _route(router, _call("check_health"))
        assert wire["result"]["structuredContent"]["url"] == "http://agent.test:8080"

    async def test_health_unreachable_is_success(
        self, settings: ServerSettings, fixed_clock: Callable[[], datetime]
    ) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        router = build_router(settings, transport=httpx.MockTransport(refuse), clock=fixed_clock)
        wire = await _route(router, _call("check_health", {"agentUrl": "http://127.0.0.1:1"}))
        assert "error" not in wire
        structured = wire["result"]["structuredContent"]
        assert structured["status"] == "unhealthy"
        assert structured["url"] == "http://127.0.0.1:1"
        assert structured["error"] == "Connection refused"

    async def test_health_any_failure_is_success(
        self, settings: ServerSettings, fixed_clock: Callable[[], datetime]
    ) -> None:
        def overflow(request: httpx.Request) -> httpx.Response:
            raise OverflowError("port must be 0-65535.")

        router = build_router(settings, transport=httpx.MockTransport(overflow), clock=fixed_clock)
        wire = await _route(router, _call("check_health", {"agentUrl": "http://localhost:99999"}, 7))
        assert wire["id"] == 7
        assert "error" not in wire
        assert wire["result"]["structuredContent"]["status"] == "unhealthy"

    async def test_upstream_error_carries_status(
        self, settings: ServerSettings, fixed_clock: Callable[[], datetime]
    ) -> None:
        upstream = _Upstream(httpx.Response(403, json={"message": "Forbidden"}))
        router = build_router(settings, transport=httpx.MockTransport(upstream), clock=fixed_clock)
        wire = await _route(router, _call("generate_report", {"from": "2024-01-01", "to": "2024-01-31"}))
        assert wire["error"]["code"] == -32001
        assert wire["error"]["message"] == "API Error: 403 - Forbidden"
        assert wire["error"]["data"] == {"type": "UpstreamHTTPError", "status": 403}

    async def test_missing_credentials(self, fixed_clock: Callable[[], datetime]) -> None:
        upstream = _Upstream()
        router = build_router(
            ServerSettings(api_key=None), transport=httpx.MockTransport(upstream), clock=fixed_clock
        )
        wire = await _route(router, _call("generate_report", {"from": "2024-01-01", "to": "2024-01-31"}))
        assert wire["error"]["data"]["type"] == "UpstreamAuthError"
        assert upstream.requests == []

    async def test_handler_crash_is_contained(self, router: RequestRouter) -> None:
        with patch.object(
            HandlerTable, "invoke", new_callable=AsyncMock, side_effect=KeyError("secret detail")
        ):
            wire = await _route(router, _call("send_review_command", {"command": "generate docstrings"}))
        assert wire["error"]["code"] == -32603
        assert wire["error"]["message"] == "Error executing send_review_command: internal error"
        assert "secret detail" not in wire["error"]["message"]

    async def test_defaults_reach_handler(self, router: RequestRouter) -> None:
        result = ToolResult.from_text("ok")
        with patch.object(HandlerTable, "invoke", new_callable=AsyncMock, return_value=result) as invoke:
            await _route(router, _call("check_health", {}))
        invoke.assert_awaited_once_with("check_health", {"agentUrl": "http://agent.test:8080"})


class TestReadResource:
    async def test_read(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("resources/read", {"uri": "coderabbit://commands/help"}))
        contents = wire["result"]["contents"]
        assert len(contents) == 1
        assert contents[0]["uri"] == "coderabbit://commands/help"
        assert contents[0]["mimeType"] == "text/markdown"
        assert contents[0]["text"].startswith("# CodeRabbit Commands Reference")

    async def test_read_alias(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("read-resource", {"uri": "coderabbit://env/template"}))
        assert wire["result"]["contents"][0]["mimeType"] == "text/plain"

    async def test_unknown_resource(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("resources/read", {"uri": "coderabbit://nope"}))
        assert wire["error"]["code"] == -32002
        assert wire["error"]["data"] == {"type": "UnknownResourceError", "uri": "coderabbit://nope"}

    async def test_missing_uri(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("resources/read", {}))
        assert wire["error"]["data"]["type"] == "InvalidParamsError"


class TestMalformedRequests:
    async def test_unknown_method(self, router: RequestRouter) -> None:
        wire = await _route(router, _request("tools/delete", request_id=9))
        assert wire["id"] == 9
        assert wire["error"]["code"] == -32601
        assert wire["error"]["message"] == "Method not found: tools/delete"

    async def test_non_object_message(self, router: RequestRouter) -> None:
        wire = await _route(router, [1, 2, 3])
        assert wire["id"] is None
        assert wire["error"]["code"] == -32600

    async def test_missing_method_keeps_id(self, router: RequestRouter) -> None:
        wire = await _route(router, {"jsonrpc": "2.0", "id": 5})
        assert wire["id"] == 5
        assert wire["error"]["code"] == -32600

    async def test_bad_params_keeps_id(self, router: RequestRouter) -> None:
        wire = await _route(router, {"jsonrpc": "2.0", "id": "q", "method": "tools/list", "params": "x"})
        assert wire["id"] == "q"
        assert wire["error"]["data"]["type"] == "InvalidRequestError"

    async def test_fractional_id_echoed(self, router: RequestRouter) -> None:
        wire = await _route(router, {"jsonrpc": "2.0", "id": 1.5, "method": "ping"})
        assert wire == {"jsonrpc": "2.0", "id": 1.5, "result": {}}

    async def test_boolean_id_rejected_not_coerced(self, router: RequestRouter) -> None:
        wire = await _route(router, {"jsonrpc": "2.0", "id": True, "method": "ping"})
        assert wire["id"] is None
        assert wire["error"]["code"] == -32600

    async def test_fractional_id_kept_on_invalid_request(self, router: RequestRouter) -> None:
        wire = await _route(router, {"jsonrpc": "2.0", "id": 2.5})
        assert wire["id"] == 2.5
        assert wire["error"]["code"] == -32600

    async def test_dispatch_directly(self, router: RequestRouter) -> None:
        result = await router.dispatch("list-resources", {})
        assert len(result["resources"]) == 4


class TestRegistryAccess:
    def test_router_exposes_registry(self, router: RequestRouter) -> None:
        assert [t.name for t in router.registry.list_tools()] == [
            t.name for t in CapabilityRegistry.default().list_tools()
        ]
