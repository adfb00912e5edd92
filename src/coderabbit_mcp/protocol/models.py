"""MCP models — JSON-RPC 2.0 envelopes plus tool and resource payloads.

Covers the message shapes the server reads (requests and notifications) and
writes (responses), and the catalog/content payloads carried inside them.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------

# Strict so that booleans are rejected rather than coerced to 0 or 1
RequestId = StrictInt | StrictFloat | StrictStr


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification.

    A message without an ``id`` is a notification and never gets a response.
    """

    jsonrpc: str = "2.0"
    method: str
    id: RequestId | None = None
    params: dict[str, Any] = {}

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Holds exactly one of ``result`` or ``error``.
    """

    jsonrpc: str = "2.0"
    id: RequestId | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Dump for the transport; ``id`` is kept even when null."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data


# ---------------------------------------------------------------------------
# Catalog descriptors
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ResourceDescriptor(BaseModel):
    """A static resource definition as returned by ``resources/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default="text/plain", alias="mimeType")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Content payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The result of a ``tools/call``.

    ``structured_content`` mirrors the text block as a JSON object when the
    handler produced one.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    structured_content: dict[str, Any] | None = Field(default=None, alias="structuredContent")

    @classmethod
    def from_text(
        cls, text: str, structured: dict[str, Any] | None = None
    ) -> ToolResult:
        """Create a ToolResult with a single text content block."""
        return cls(content=[TextContent(text=text)], structured_content=structured)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ResourceContents(BaseModel):
    """The body of a resource returned by ``resources/read``."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(alias="mimeType")
    text: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
