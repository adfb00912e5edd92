"""``send_review_command`` — turn a command name into a PR comment directive."""

from __future__ import annotations

from typing import assert_never

from coderabbit_mcp.handlers.models import ReviewCommand, SendReviewCommandArgs
from coderabbit_mcp.protocol.models import ToolResult

MENTION = "@coderabbitai"

DEFAULT_RULE = "to follow best practices"
DEFAULT_CONTEXT = (
    "do not complain about lack of error handling here, "
    "it is handled higher up the execution stack."
)

_POSTING_HINT = (
    "This command can be posted as a comment in your pull request to interact with CodeRabbit."
)


def render_directive(command: ReviewCommand, context: str | None = None) -> str:
    """Return the comment text for *command*.

    Only ``remember rule`` and ``provide context`` use *context*; the others
    are fixed strings.
    """
    if command is ReviewCommand.GENERATE_DOCSTRINGS:
        return f"{MENTION} generate docstrings"
    if command is ReviewCommand.EXPLAIN_REASONING:
        return (
            f"{MENTION} Why do all of these functions need docstrings? "
            "Isn't it obvious enough what they do?"
        )
    if command is ReviewCommand.REMEMBER_RULE:
        return f"{MENTION} always remember {context or DEFAULT_RULE}"
    if command is ReviewCommand.PROVIDE_CONTEXT:
        return f"{MENTION} {context or DEFAULT_CONTEXT}"
    if command is ReviewCommand.CLARIFY_SUGGESTION:
        return f"{MENTION} Please clarify this suggestion"
    assert_never(command)


class SendReviewCommandHandler:
    name = "send_review_command"
    arguments_model = SendReviewCommandArgs

    async def handle(self, arguments: SendReviewCommandArgs) -> ToolResult:
        directive = render_directive(arguments.command, arguments.context)
        text = f"CodeRabbit Command: {directive}\n\n{_POSTING_HINT}"
        if arguments.target_files:
            text += f"\n\nTarget files: {', '.join(arguments.target_files)}"

        structured: dict[str, object] = {
            "command": arguments.command.value,
            "directive": directive,
        }
        if arguments.target_files:
            structured["targetFiles"] = list(arguments.target_files)
        return ToolResult.from_text(text, structured)
