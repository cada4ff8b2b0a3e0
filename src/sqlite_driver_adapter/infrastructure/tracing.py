"""OpenTelemetry tracing configuration."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


_TRACER_NAME = "sqlite_driver_adapter"

# Longest statement text attached to a span
MAX_STATEMENT_ATTRIBUTE_LENGTH = 2048


def setup_tracing(
    service_name: str = "sqlite_driver_adapter",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)

    Returns:
        Configured tracer instance
    """
    from sqlite_driver_adapter import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        console_exporter = ConsoleSpanExporter()
        provider.add_span_processor(BatchSpanProcessor(console_exporter))

    trace.set_tracer_provider(provider)

    return trace.get_tracer(_TRACER_NAME)


def get_tracer() -> trace.Tracer:
    """Get the adapter tracer from the current global provider."""
    return trace.get_tracer(_TRACER_NAME)


def statement_attributes(operation: str, sql: str | None = None) -> dict[str, Any]:
    """
    Build the database attributes of a statement span.

    Args:
        operation: Adapter operation (query, execute, script, begin)
        sql: Statement text, cut to MAX_STATEMENT_ATTRIBUTE_LENGTH characters

    Returns:
        Span attributes
    """
    attributes: dict[str, Any] = {"db.system": "sqlite", "db.operation": operation}
    if sql is not None:
        attributes["db.statement"] = sql[:MAX_STATEMENT_ATTRIBUTE_LENGTH]
    return attributes


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating a trace span.

    Args:
        name: Name of the span
        attributes: Optional attributes to add to the span

    Failures carrying an error ``kind`` (structured adapter errors) also
    tag the span with it, next to the exception event OpenTelemetry records.

    Yields:
        The created span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            kind = getattr(e, "kind", None)
            if kind is not None:
                span.set_attribute("sqlite_adapter.error_kind", getattr(kind, "value", str(kind)))
            raise
