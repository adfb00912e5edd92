"""Typed argument models — one per tool.

The handler table parses schema-validated arguments into these models, so
handler code never touches the raw decoded mapping.  Field aliases match the
camelCase names used on the wire.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class _Arguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DateRange(_Arguments):
    from_: date = Field(alias="from")
    to: date


class GenerateReportArgs(DateRange):
    """Arguments for ``generate_report``."""


class AnalyzePullRequestArgs(_Arguments):
    """Arguments for ``analyze_pull_request``."""

    repository: str
    pull_request_number: int = Field(alias="pullRequestNumber")
    review_instructions: str | None = Field(default=None, alias="reviewInstructions")


class PathInstruction(_Arguments):
    path: str
    instructions: str


class AstGrepSettings(_Arguments):
    essential_rules: bool | None = Field(default=None, alias="essentialRules")
    rule_dirs: list[str] | None = Field(default=None, alias="ruleDirs")
    util_dirs: list[str] | None = Field(default=None, alias="utilDirs")
    packages: list[str] | None = None


class ReviewTools(_Arguments):
    ast_grep: AstGrepSettings | None = Field(default=None, alias="astGrep")


class ReviewConfiguration(_Arguments):
    path_instructions: list[PathInstruction] | None = Field(default=None, alias="pathInstructions")
    tools: ReviewTools | None = None


class ConfigureReviewSettingsArgs(_Arguments):
    """Arguments for ``configure_review_settings``."""

    repository: str
    configuration: ReviewConfiguration


class ReviewCommand(str, Enum):
    """Commands CodeRabbit understands in pull request comments."""

    GENERATE_DOCSTRINGS = "generate docstrings"
    EXPLAIN_REASONING = "explain reasoning"
    REMEMBER_RULE = "remember rule"
    PROVIDE_CONTEXT = "provide context"
    CLARIFY_SUGGESTION = "clarify suggestion"


class SendReviewCommandArgs(_Arguments):
    """Arguments for ``send_review_command``."""

    command: ReviewCommand
    context: str | None = None
    target_files: list[str] | None = Field(default=None, alias="targetFiles")


class CheckHealthArgs(_Arguments):
    """Arguments for ``check_health``."""

    agent_url: str | None = Field(default=None, alias="agentUrl")


class ReportFilters(_Arguments):
    repositories: list[str] | None = None
    authors: list[str] | None = None
    labels: list[str] | None = None
    include_only_merged: bool | None = Field(default=None, alias="includeOnlyMerged")
    exclude_bots: bool | None = Field(default=None, alias="excludeBots")


class CreateCustomReportArgs(_Arguments):
    """Arguments for ``create_custom_report``."""

    template: str
    date_range: DateRange = Field(alias="dateRange")
    filters: ReportFilters | None = None
