"""HandlerTable — maps tool names to their implementations."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from coderabbit_mcp.handlers.base import Clock, ToolHandler, utc_now
from coderabbit_mcp.handlers.custom_report import CreateCustomReportHandler
from coderabbit_mcp.handlers.health import CheckHealthHandler
from coderabbit_mcp.handlers.pull_request import AnalyzePullRequestHandler
from coderabbit_mcp.handlers.report import GenerateReportHandler
from coderabbit_mcp.handlers.review_command import SendReviewCommandHandler
from coderabbit_mcp.handlers.review_config import ConfigureReviewSettingsHandler
from coderabbit_mcp.protocol.errors import ArgumentValidationError, UnknownToolError

if TYPE_CHECKING:
    from coderabbit_mcp.config import ServerSettings
    from coderabbit_mcp.protocol.models import ToolResult


class HandlerTable:
    """Immutable name-to-handler map.

    Usage::

        table = HandlerTable.from_settings(settings)
        result = await table.invoke("check_health", {"agentUrl": "http://agent:8080"})
    """

    def __init__(self, handlers: Iterable[ToolHandler]) -> None:
        table: dict[str, ToolHandler] = {}
        for handler in handlers:
            if handler.name in table:
                msg = f"duplicate handler for tool '{handler.name}'"
                raise ValueError(msg)
            table[handler.name] = handler
        self._handlers = MappingProxyType(table)

    @classmethod
    def from_settings(
        cls,
        settings: ServerSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock = utc_now,
    ) -> HandlerTable:
        """Build the standard handler set, injecting credentials and timeouts."""
        return cls([
            GenerateReportHandler(
                api_key=settings.api_key,
                base_url=settings.base_url,
                timeout=settings.request_timeout,
                transport=transport,
            ),
            AnalyzePullRequestHandler(clock=clock),
            ConfigureReviewSettingsHandler(),
            SendReviewCommandHandler(),
            CheckHealthHandler(
                default_agent_url=settings.default_agent_url,
                timeout=settings.health_timeout,
                transport=transport,
            ),
            CreateCustomReportHandler(clock=clock),
        ])

    def names(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    async def invoke(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Parse *arguments* into the handler's model and run it.

        Raises:
            UnknownToolError: No handler is registered under *name*.
            ArgumentValidationError: The arguments do not fit the handler's model.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)

        try:
            parsed = handler.arguments_model.model_validate(arguments)
        except ValidationError as exc:
            raise ArgumentValidationError(name, _describe_errors(exc)) from exc

        return await handler.handle(parsed)


def _describe_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        messages.append(f"field '{location}': {error['msg']}")
    return messages
