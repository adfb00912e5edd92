"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from coderabbit_mcp.cli_commands.catalog import read, resources, tools
    from coderabbit_mcp.cli_commands.install import install
    from coderabbit_mcp.cli_commands.serve import serve

    cli.add_command(serve)
    cli.add_command(tools)
    cli.add_command(resources)
    cli.add_command(read)
    cli.add_command(install)
