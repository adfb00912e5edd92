"""``create_custom_report`` — illustrative templated report summary."""

from __future__ import annotations

from typing import Any

from coderabbit_mcp.handlers.base import Clock, iso_timestamp, json_block, utc_now
from coderabbit_mcp.handlers.models import CreateCustomReportArgs
from coderabbit_mcp.protocol.models import ToolResult


def _summary() -> dict[str, Any]:
    return {
        "totalPullRequests": 42,
        "mergedPullRequests": 38,
        "openPullRequests": 4,
        "averageReviewTime": "2.3 days",
        "topReviewers": ["alice", "bob", "charlie"],
    }


class CreateCustomReportHandler:
    """Echoes the template, range, and filters next to a fixed summary."""

    name = "create_custom_report"
    arguments_model = CreateCustomReportArgs

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._clock = clock

    async def handle(self, arguments: CreateCustomReportArgs) -> ToolResult:
        filters = (
            arguments.filters.model_dump(mode="json", by_alias=True, exclude_none=True)
            if arguments.filters is not None
            else {}
        )
        report: dict[str, Any] = {
            "template": arguments.template,
            "dateRange": arguments.date_range.model_dump(mode="json", by_alias=True),
            "filters": filters,
            "generatedAt": iso_timestamp(self._clock()),
            "summary": _summary(),
        }
        return ToolResult.from_text(json_block("Custom CodeRabbit Report", report), report)
