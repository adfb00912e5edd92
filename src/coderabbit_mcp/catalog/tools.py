"""Tool catalog — the fixed set of tools this server exposes, in list order."""

from __future__ import annotations

from coderabbit_mcp.protocol.models import ToolDescriptor

DEFAULT_AGENT_URL = "http://127.0.0.1:8080"

REVIEW_COMMANDS = (
    "generate docstrings",
    "explain reasoning",
    "remember rule",
    "provide context",
    "clarify suggestion",
)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

_DATE_RANGE = {
    "type": "object",
    "properties": {
        "from": {"type": "string", "format": "date"},
        "to": {"type": "string", "format": "date"},
    },
    "required": ["from", "to"],
}

GENERATE_REPORT = ToolDescriptor(
    name="generate_report",
    description="Generate CodeRabbit on-demand reports for specified date range",
    input_schema={
        "type": "object",
        "properties": {
            "from": {
                "type": "string",
                "format": "date",
                "description": "Start date (YYYY-MM-DD)",
            },
            "to": {
                "type": "string",
                "format": "date",
                "description": "End date (YYYY-MM-DD)",
            },
        },
        "required": ["from", "to"],
    },
)

ANALYZE_PULL_REQUEST = ToolDescriptor(
    name="analyze_pull_request",
    description="Analyze a specific pull request using CodeRabbit",
    input_schema={
        "type": "object",
        "properties": {
            "repository": {"type": "string", "description": "Repository URL or name"},
            "pullRequestNumber": {"type": "number", "description": "Pull request number"},
            "reviewInstructions": {
                "type": "string",
                "description": "Custom review instructions (optional)",
            },
        },
        "required": ["repository", "pullRequestNumber"],
    },
)

CONFIGURE_REVIEW_SETTINGS = ToolDescriptor(
    name="configure_review_settings",
    description="Configure CodeRabbit review settings for a repository",
    input_schema={
        "type": "object",
        "properties": {
            "repository": {"type": "string", "description": "Repository URL or name"},
            "configuration": {
                "type": "object",
                "properties": {
                    "pathInstructions": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "path": {"type": "string"},
                                "instructions": {"type": "string"},
                            },
                            "required": ["path", "instructions"],
                        },
                    },
                    "tools": {
                        "type": "object",
                        "properties": {
                            "astGrep": {
                                "type": "object",
                                "properties": {
                                    "essentialRules": {"type": "boolean"},
                                    "ruleDirs": _STRING_LIST,
                                    "utilDirs": _STRING_LIST,
                                    "packages": _STRING_LIST,
                                },
                            },
                        },
                    },
                },
            },
        },
        "required": ["repository", "configuration"],
    },
)

SEND_REVIEW_COMMAND = ToolDescriptor(
    name="send_review_command",
    description="Send a command to CodeRabbit during code review",
    input_schema={
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "enum": list(REVIEW_COMMANDS),
                "description": "CodeRabbit command to execute",
            },
            "context": {
                "type": "string",
                "description": "Additional context for the command",
            },
            "targetFiles": {
                **_STRING_LIST,
                "description": "Specific files to target (optional)",
            },
        },
        "required": ["command"],
    },
)


def check_health_tool(agent_url: str = DEFAULT_AGENT_URL) -> ToolDescriptor:
    """The health probe descriptor, advertising *agent_url* as the default target."""
    return ToolDescriptor(
        name="check_health",
        description="Check CodeRabbit agent health status",
        input_schema={
            "type": "object",
            "properties": {
                "agentUrl": {
                    "type": "string",
                    "description": f"CodeRabbit agent URL (default: {agent_url})",
                    "default": agent_url,
                },
            },
        },
    )


CHECK_HEALTH = check_health_tool()

CREATE_CUSTOM_REPORT = ToolDescriptor(
    name="create_custom_report",
    description="Create a custom report with specific template and filters",
    input_schema={
        "type": "object",
        "properties": {
            "template": {
                "type": "string",
                "description": "Custom report template instructions",
            },
            "dateRange": _DATE_RANGE,
            "filters": {
                "type": "object",
                "properties": {
                    "repositories": _STRING_LIST,
                    "authors": _STRING_LIST,
                    "labels": _STRING_LIST,
                    "includeOnlyMerged": {"type": "boolean"},
                    "excludeBots": {"type": "boolean"},
                },
            },
        },
        "required": ["template", "dateRange"],
    },
)

TOOLS: tuple[ToolDescriptor, ...] = (
    GENERATE_REPORT,
    ANALYZE_PULL_REQUEST,
    CONFIGURE_REVIEW_SETTINGS,
    SEND_REVIEW_COMMAND,
    CHECK_HEALTH,
    CREATE_CUSTOM_REPORT,
)


def build_tools(agent_url: str = DEFAULT_AGENT_URL) -> tuple[ToolDescriptor, ...]:
    """The catalog with the health probe defaulting to *agent_url*."""
    if agent_url == DEFAULT_AGENT_URL:
        return TOOLS
    return tuple(check_health_tool(agent_url) if t.name == "check_health" else t for t in TOOLS)
