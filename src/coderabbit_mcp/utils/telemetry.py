"""OpenTelemetry tracing for tool calls and resource reads.

Spans go through the OpenTelemetry API, which is a no-op until
:func:`configure_telemetry` installs an SDK provider (the ``otel`` extra).
Exported spans are written to stderr or sent over OTLP, never to stdout,
which carries the protocol traffic.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# Span attribute keys
ATTR_TOOL_NAME = "coderabbit_mcp.tool.name"
ATTR_RESOURCE_URI = "coderabbit_mcp.resource.uri"
ATTR_ERROR_TYPE = "coderabbit_mcp.error.type"

_INSTRUMENTATION_NAME = "coderabbit_mcp"
_INSTALL_HINT = "Install it with: pip install coderabbit-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "coderabbit-mcp",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider with the requested exporters.

    Args:
        service_name: Value of the ``service.name`` resource attribute.
        export_to_console: Write finished spans as JSON to stderr.
        otlp_endpoint: Also ship spans over OTLP/gRPC to this endpoint.

    Raises:
        ImportError: ``opentelemetry-sdk`` is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)
    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)
    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
