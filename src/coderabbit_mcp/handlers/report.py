"""``generate_report`` — on-demand reports from the CodeRabbit API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from coderabbit_mcp.handlers.base import json_block
from coderabbit_mcp.handlers.models import GenerateReportArgs
from coderabbit_mcp.protocol.errors import UpstreamAuthError, UpstreamHTTPError, UpstreamTimeout
from coderabbit_mcp.protocol.models import ToolResult

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-coderabbitai-api-key"


class GenerateReportHandler:
    """POSTs the date range to ``<base_url>/report.generate``.

    The credential and base URL are fixed at construction; an empty API key
    fails every call with :class:`UpstreamAuthError` before any request is
    made.  *transport* lets tests substitute an ``httpx.MockTransport``.
    """

    name = "generate_report"
    arguments_model = GenerateReportArgs

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/report.generate"

    async def handle(self, arguments: GenerateReportArgs) -> ToolResult:
        if not self._api_key:
            raise UpstreamAuthError()

        payload = {"from": arguments.from_.isoformat(), "to": arguments.to.isoformat()}
        headers = {
            "accept": "application/json",
            API_KEY_HEADER: self._api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Report request to %s timed out after %ss", self.endpoint, self._timeout)
            raise UpstreamTimeout(self._timeout) from exc
        except httpx.HTTPError as exc:
            logger.warning("Report request to %s failed: %s", self.endpoint, exc)
            raise UpstreamHTTPError(None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning("Report request returned %s: %s", response.status_code, detail)
            raise UpstreamHTTPError(response.status_code, detail)

        body = _decode_body(response)
        structured = body if isinstance(body, dict) else None
        return ToolResult.from_text(
            json_block("CodeRabbit Report Generated Successfully", body),
            structured,
        )


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_detail(response: httpx.Response) -> str:
    """Prefer the upstream's ``message`` field over the generic status text."""
    body = _decode_body(response)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status code {response.status_code}"
