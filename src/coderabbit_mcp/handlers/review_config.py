"""``configure_review_settings`` — render a ``.coderabbit.yaml`` document."""

from __future__ import annotations

from typing import Any

import yaml

from coderabbit_mcp.handlers.models import (
    AstGrepSettings,
    ConfigureReviewSettingsArgs,
    ReviewConfiguration,
)
from coderabbit_mcp.protocol.models import ToolResult

HEADER = "# CodeRabbit Configuration\n"


class _BlockStr(str):
    """Marks a string to be emitted as a ``|`` block literal."""


class _ConfigDumper(yaml.SafeDumper):
    pass


def _represent_block(dumper: yaml.SafeDumper, value: _BlockStr) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(value), style="|")


_ConfigDumper.add_representer(_BlockStr, _represent_block)


def build_document(configuration: ReviewConfiguration) -> dict[str, Any]:
    """Map the tool arguments onto the ``.coderabbit.yaml`` key layout."""
    reviews: dict[str, Any] = {}

    if configuration.path_instructions:
        reviews["path_instructions"] = [
            {"path": item.path, "instructions": _BlockStr(item.instructions)}
            for item in configuration.path_instructions
        ]

    if configuration.tools is not None and configuration.tools.ast_grep is not None:
        reviews["tools"] = {"ast-grep": _ast_grep_section(configuration.tools.ast_grep)}

    return {"reviews": reviews} if reviews else {}


def _ast_grep_section(settings: AstGrepSettings) -> dict[str, Any]:
    section: dict[str, Any] = {}
    if settings.essential_rules is not None:
        section["essential_rules"] = settings.essential_rules
    if settings.rule_dirs is not None:
        section["rule_dirs"] = list(settings.rule_dirs)
    if settings.util_dirs is not None:
        section["util_dirs"] = list(settings.util_dirs)
    if settings.packages is not None:
        section["packages"] = list(settings.packages)
    return section


def render_yaml(configuration: ReviewConfiguration) -> str:
    document = build_document(configuration)
    if not document:
        return HEADER
    body = yaml.dump(
        document,
        Dumper=_ConfigDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return f"{HEADER}\n{body}"


class ConfigureReviewSettingsHandler:
    name = "configure_review_settings"
    arguments_model = ConfigureReviewSettingsArgs

    async def handle(self, arguments: ConfigureReviewSettingsArgs) -> ToolResult:
        document = render_yaml(arguments.configuration)
        text = (
            f"CodeRabbit Configuration Generated for {arguments.repository}\n\n"
            f"```yaml\n{document}```"
        )
        return ToolResult.from_text(text, {"repository": arguments.repository, "yaml": document})
