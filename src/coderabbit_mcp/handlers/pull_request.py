"""``analyze_pull_request`` — illustrative pull request analysis.

No git platform is contacted.  The payload has a fixed shape and fixed
values so clients can rely on its structure.
"""

from __future__ import annotations

from typing import Any

from coderabbit_mcp.handlers.base import Clock, iso_timestamp, json_block, utc_now
from coderabbit_mcp.handlers.models import AnalyzePullRequestArgs
from coderabbit_mcp.protocol.models import ToolResult


def _suggestions() -> list[dict[str, Any]]:
    return [
        {
            "type": "code_quality",
            "file": "src/utils.ts",
            "line": 42,
            "message": "Consider adding error handling for this function",
            "severity": "medium",
        },
        {
            "type": "documentation",
            "file": "src/api.ts",
            "line": 15,
            "message": "Missing docstring for this public function",
            "severity": "low",
        },
    ]


def _metrics() -> dict[str, Any]:
    return {
        "linesAdded": 150,
        "linesRemoved": 25,
        "filesChanged": 8,
        "complexityScore": 6.2,
    }


class AnalyzePullRequestHandler:
    name = "analyze_pull_request"
    arguments_model = AnalyzePullRequestArgs

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._clock = clock

    async def handle(self, arguments: AnalyzePullRequestArgs) -> ToolResult:
        analysis: dict[str, Any] = {
            "repository": arguments.repository,
            "pullRequest": arguments.pull_request_number,
            "timestamp": iso_timestamp(self._clock()),
        }
        if arguments.review_instructions:
            analysis["reviewInstructions"] = arguments.review_instructions
        analysis["suggestions"] = _suggestions()
        analysis["metrics"] = _metrics()

        return ToolResult.from_text(json_block("Pull Request Analysis Complete", analysis), analysis)
