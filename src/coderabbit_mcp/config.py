"""Server configuration — upstream credentials, timeouts, logging, telemetry.

Settings come from an optional YAML file (with ``${VAR}`` expansion) overlaid
by environment variables, so a bare ``coderabbit-mcp serve`` works with just
``CODERABBIT_API_KEY`` exported.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from coderabbit_mcp.catalog.tools import DEFAULT_AGENT_URL
from coderabbit_mcp.protocol.transport import DEFAULT_LINE_LIMIT

DEFAULT_BASE_URL = "https://api.coderabbit.ai/api/v1"

# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "CODERABBIT_API_KEY": "api_key",
    "CODERABBIT_BASE_URL": "base_url",
    "CODERABBIT_AGENT_URL": "default_agent_url",
    "CODERABBIT_MCP_LOG_LEVEL": "log_level",
}


class SettingsError(Exception):
    """Raised when the settings file cannot be read or fails validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Process-wide configuration, built once at startup and passed down."""

    api_key: str | None = Field(default=None, description="CodeRabbit API key.")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="CodeRabbit API base URL.")
    request_timeout: float = Field(
        default=30.0, gt=0, description="Seconds before a report request is abandoned."
    )
    health_timeout: float = Field(
        default=5.0, gt=0, description="Seconds before a health probe is abandoned."
    )
    default_agent_url: str = DEFAULT_AGENT_URL
    log_level: str = "INFO"
    max_line_bytes: int = Field(default=DEFAULT_LINE_LIMIT, gt=0)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)


def load_settings(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ServerSettings:
    """Build :class:`ServerSettings` from *path* and the environment.

    Environment variables listed in :data:`ENV_VARS` win over file values.
    Empty environment values are ignored.

    Raises:
        SettingsError: On unreadable files, YAML errors, or invalid values.
    """
    environ = os.environ if env is None else env
    data: dict[str, Any] = _read_file(Path(path)) if path is not None else {}

    for var, field in ENV_VARS.items():
        value = environ.get(var)
        if value:
            data[field] = value

    try:
        return ServerSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc


def _read_file(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Cannot read {path}: {exc}") from exc

    expanded = os.path.expandvars(raw)

    try:
        data: Any = yaml.safe_load(expanded)
    except yaml.YAMLError as exc:
        raise SettingsError(f"YAML parse error: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError("Settings file must be a mapping")
    return data
