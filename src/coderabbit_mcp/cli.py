"""Command line for running and inspecting the CodeRabbit MCP server."""

from __future__ import annotations

import click

from coderabbit_mcp import __version__
from coderabbit_mcp.cli_commands import register_commands


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="coderabbit-mcp")
def main() -> None:
    """CodeRabbit MCP server.

    Run ``coderabbit-mcp serve`` from an MCP client's config; the other
    commands print the tool and resource catalog or install the client entry.
    """


register_commands(main)

if __name__ == "__main__":
    main()
