"""Tests for JSON-RPC envelopes and MCP payload models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

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


class TestJsonRpcRequest:
    def test_request_with_id(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "id": 7, "method": "tools/list"})
        assert req.id == 7
        assert req.params == {}
        assert not req.is_notification

    def test_string_id(self) -> None:
        req = JsonRpcRequest.model_validate({"id": "abc", "method": "ping"})
        assert req.id == "abc"

    def test_fractional_id_kept(self) -> None:
        req = JsonRpcRequest.model_validate({"id": 1.5, "method": "ping"})
        assert req.id == 1.5
        assert isinstance(req.id, float)

    def test_integer_id_stays_int(self) -> None:
        req = JsonRpcRequest.model_validate({"id": 3, "method": "ping"})
        assert type(req.id) is int

    @pytest.mark.parametrize("bad_id", [True, False, [1], {"a": 1}])
    def test_non_scalar_or_boolean_id_rejected(self, bad_id: object) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"id": bad_id, "method": "ping"})

    def test_numeric_string_id_not_coerced(self) -> None:
        req = JsonRpcRequest.model_validate({"id": "1", "method": "ping"})
        assert req.id == "1"

    def test_notification_has_no_id(self) -> None:
        req = JsonRpcRequest.model_validate({"method": "notifications/initialized"})
        assert req.is_notification

    def test_method_required(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"id": 1})

    def test_params_must_be_object(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"id": 1, "method": "tools/call", "params": [1, 2]})


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        resp = JsonRpcResponse(id=1, result={"tools": []})
        assert resp.to_wire() == {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}}
        assert not resp.is_error

    def test_error_wire_shape(self) -> None:
        resp = JsonRpcResponse(id="x", error=JsonRpcError(code=-32601, message="Method not found: foo"))
        wire = resp.to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "id": "x",
            "error": {"code": -32601, "message": "Method not found: foo"},
        }
        assert resp.is_error

    def test_null_id_kept_on_wire(self) -> None:
        resp = JsonRpcResponse(id=None, error=JsonRpcError(code=-32700, message="Parse error"))
        wire = resp.to_wire()
        assert "id" in wire
        assert wire["id"] is None

    def test_rejects_both_variants(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1, result={}, error=JsonRpcError(code=-1, message="x"))

    def test_rejects_neither_variant(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1)


class TestDescriptors:
    def test_tool_descriptor_wire_uses_camel_case(self) -> None:
        tool = ToolDescriptor(name="t", description="d", input_schema={"type": "object"})
        assert tool.to_wire() == {"name": "t", "description": "d", "inputSchema": {"type": "object"}}

    def test_tool_descriptor_accepts_alias(self) -> None:
        tool = ToolDescriptor.model_validate({"name": "t", "inputSchema": {"type": "object"}})
        assert tool.input_schema == {"type": "object"}

    def test_tool_descriptor_is_frozen(self) -> None:
        tool = ToolDescriptor(name="t")
        with pytest.raises(ValidationError):
            tool.name = "other"  # type: ignore[misc]

    def test_resource_descriptor_wire(self) -> None:
        res = ResourceDescriptor(uri="x://a", name="A", description="", mime_type="text/markdown")
        assert res.to_wire() == {
            "uri": "x://a",
            "name": "A",
            "description": "",
            "mimeType": "text/markdown",
        }


class TestToolResult:
    def test_from_text(self) -> None:
        result = ToolResult.from_text("hello")
        assert result.content == [TextContent(text="hello")]
        assert result.text == "hello"

    def test_wire_omits_missing_structured_content(self) -> None:
        assert ToolResult.from_text("hi").to_wire() == {
            "content": [{"type": "text", "text": "hi"}],
        }

    def test_wire_includes_structured_content(self) -> None:
        wire = ToolResult.from_text("hi", {"status": "ok"}).to_wire()
        assert wire["structuredContent"] == {"status": "ok"}

    def test_text_joins_blocks(self) -> None:
        result = ToolResult(content=[TextContent(text="a"), TextContent(text="b")])
        assert result.text == "a\nb"


class TestResourceContents:
    def test_wire(self) -> None:
        contents = ResourceContents(uri="x://a", mime_type="text/plain", text="body")
        assert contents.to_wire() == {"uri": "x://a", "mimeType": "text/plain", "text": "body"}
