"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from coderabbit_mcp.protocol.models import ResourceDescriptor, ToolDescriptor  # noqa: TC001

console = Console()
# stdout belongs to the protocol while serving
err_console = Console(stderr=True)


def print_tools_table(tools: tuple[ToolDescriptor, ...]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="CodeRabbit Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        required = ", ".join(tool.input_schema.get("required", [])) or "-"
        table.add_row(tool.name, required, _truncate(tool.description))

    console.print(table)


def print_resources_table(resources: tuple[ResourceDescriptor, ...]) -> None:
    """Pretty-print the resource catalog as a table."""
    table = Table(title="CodeRabbit Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Name")
    table.add_column("MIME type")
    table.add_column("Description")

    for resource in resources:
        table.add_row(
            resource.uri,
            resource.name,
            resource.mime_type,
            _truncate(resource.description),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
