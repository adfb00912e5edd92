"""``coderabbit-mcp serve`` — run the JSON-RPC server on stdio."""

from __future__ import annotations

import asyncio
import sys

import click

from coderabbit_mcp.cli_commands._output import err_console

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML settings file.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(config_path: str | None, log_level: str | None, telemetry: bool) -> None:
    """Serve MCP requests over stdin/stdout until the input closes."""
    from coderabbit_mcp.config import SettingsError, load_settings
    from coderabbit_mcp.server.app import serve_stdio
    from coderabbit_mcp.utils.logging import configure_logging

    try:
        settings = load_settings(config_path)
    except SettingsError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})

    try:
        configure_logging(settings.log_level)
    except ValueError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if telemetry or settings.telemetry.enabled:
        from coderabbit_mcp.utils.telemetry import configure_telemetry

        endpoint = settings.telemetry.otlp_endpoint
        try:
            configure_telemetry(export_to_console=endpoint is None, otlp_endpoint=endpoint)
        except ImportError as exc:
            err_console.print(f"[yellow]Telemetry disabled:[/yellow] {exc}")

    try:
        asyncio.run(serve_stdio(settings))
    except KeyboardInterrupt:
        pass
