"""``coderabbit-mcp install`` — register the server with a desktop MCP client."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from coderabbit_mcp.cli_commands._output import console

SERVER_KEY = "coderabbit"
PLACEHOLDER_API_KEY = "cr-your-api-key-here"


def default_config_path(platform: str | None = None, home: Path | None = None) -> Path:
    """Location of the desktop client's config file for *platform*."""
    platform = platform or sys.platform
    home = home or Path.home()
    if platform == "win32":
        return home / "AppData" / "Roaming" / "Claude" / "claude_desktop_config.json"
    if platform == "darwin":
        return home / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
    return home / ".config" / "Claude" / "claude_desktop_config.json"


def server_entry(api_key: str | None) -> dict[str, Any]:
    return {
        "command": "coderabbit-mcp",
        "args": ["serve"],
        "env": {"CODERABBIT_API_KEY": api_key or PLACEHOLDER_API_KEY},
    }


def merge_server_entry(config: dict[str, Any], api_key: str | None) -> dict[str, Any]:
    """Return *config* with the ``mcpServers.coderabbit`` entry added or replaced.

    Other servers and unrelated top-level keys are left untouched.
    """
    merged = dict(config)
    servers = merged.get("mcpServers")
    servers = dict(servers) if isinstance(servers, dict) else {}
    servers[SERVER_KEY] = server_entry(api_key)
    merged["mcpServers"] = servers
    return merged


@click.command()
@click.option(
    "--config-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Client config file (defaults to the platform location).",
)
@click.option("--api-key", default=None, envvar="CODERABBIT_API_KEY", help="CodeRabbit API key.")
def install(config_path: Path | None, api_key: str | None) -> None:
    """Add or update the CodeRabbit entry in a desktop client's MCP config."""
    path = config_path or default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    config: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            console.print(f"[yellow]Warning:[/yellow] could not parse {path}, starting fresh ({exc})")
        else:
            if isinstance(loaded, dict):
                config = loaded
            else:
                console.print(f"[yellow]Warning:[/yellow] {path} is not a JSON object, starting fresh")

    try:
        path.write_text(json.dumps(merge_server_entry(config, api_key), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Failed to write config:[/red] {exc}")
        sys.exit(1)

    console.print(f"[green]Updated MCP client config:[/green] {path}")
    if not api_key:
        console.print(
            f"Set your CodeRabbit API key by replacing [bold]{PLACEHOLDER_API_KEY}[/bold] in the file."
        )
    console.print("Restart the client to pick up the change.")
