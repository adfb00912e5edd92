"""Tool handlers — one module per catalogued tool, plus the table that routes to them."""

from coderabbit_mcp.handlers.base import ToolHandler
from coderabbit_mcp.handlers.custom_report import CreateCustomReportHandler
from coderabbit_mcp.handlers.health import CheckHealthHandler
from coderabbit_mcp.handlers.pull_request import AnalyzePullRequestHandler
from coderabbit_mcp.handlers.report import GenerateReportHandler
from coderabbit_mcp.handlers.review_command import SendReviewCommandHandler
from coderabbit_mcp.handlers.review_config import ConfigureReviewSettingsHandler
from coderabbit_mcp.handlers.table import HandlerTable

__all__ = [
    "AnalyzePullRequestHandler",
    "CheckHealthHandler",
    "ConfigureReviewSettingsHandler",
    "CreateCustomReportHandler",
    "GenerateReportHandler",
    "HandlerTable",
    "SendReviewCommandHandler",
    "ToolHandler",
]
