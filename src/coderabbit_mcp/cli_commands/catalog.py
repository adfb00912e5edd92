"""``coderabbit-mcp tools|resources|read`` — inspect the static catalog."""

from __future__ import annotations

import json
import sys

import click

from coderabbit_mcp.cli_commands._output import (
    console,
    print_resources_table,
    print_tools_table,
)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the wire-format listing.")
def tools(as_json: bool) -> None:
    """List the tools the server advertises."""
    from coderabbit_mcp.catalog import CapabilityRegistry

    catalog = CapabilityRegistry.default().list_tools()
    if as_json:
        console.print_json(json.dumps({"tools": [t.to_wire() for t in catalog]}))
        return
    print_tools_table(catalog)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the wire-format listing.")
def resources(as_json: bool) -> None:
    """List the resources the server advertises."""
    from coderabbit_mcp.catalog import CapabilityRegistry

    catalog = CapabilityRegistry.default().list_resources()
    if as_json:
        console.print_json(json.dumps({"resources": [r.to_wire() for r in catalog]}))
        return
    print_resources_table(catalog)


@click.command()
@click.argument("uri")
def read(uri: str) -> None:
    """Print the body of the resource at URI."""
    from coderabbit_mcp.catalog import CapabilityRegistry
    from coderabbit_mcp.protocol.errors import UnknownResourceError

    try:
        contents = CapabilityRegistry.default().read_resource(uri)
    except UnknownResourceError as exc:
        console.print(f"[red]Error:[/red] {exc.message}")
        sys.exit(1)

    click.echo(contents.text)
