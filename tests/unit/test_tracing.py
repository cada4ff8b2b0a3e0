"""Unit tests for tracing helpers."""

from __future__ import annotations

from typing import Generator

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from sqlite_driver_adapter.domain.entities import DriverAdapterError, TableDoesNotExist
from sqlite_driver_adapter.infrastructure import tracing
from sqlite_driver_adapter.infrastructure.tracing import (
    MAX_STATEMENT_ATTRIBUTE_LENGTH,
    statement_attributes,
    trace_span,
)


@pytest.fixture
def exporter(monkeypatch: pytest.MonkeyPatch) -> Generator[InMemorySpanExporter, None, None]:
    """Route adapter spans to an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(tracing, "get_tracer", lambda: provider.get_tracer("test"))
    yield exporter
    provider.shutdown()


@pytest.mark.unit
class TestStatementAttributes:
    """Tests for statement span attributes."""

    def test_with_statement(self) -> None:
        """Statement spans carry the system, operation and SQL text."""
        assert statement_attributes("query", "SELECT 1") == {
            "db.system": "sqlite",
            "db.operation": "query",
            "db.statement": "SELECT 1",
        }

    def test_without_statement(self) -> None:
        """Operations without SQL text omit db.statement."""
        assert statement_attributes("begin") == {"db.system": "sqlite", "db.operation": "begin"}

    def test_long_statement_is_cut(self) -> None:
        """Very long scripts are cut to the attribute limit."""
        sql = "x" * (MAX_STATEMENT_ATTRIBUTE_LENGTH + 10)

        assert len(statement_attributes("script", sql)["db.statement"]) == MAX_STATEMENT_ATTRIBUTE_LENGTH


@pytest.mark.unit
class TestTraceSpan:
    """Tests for the trace_span context manager."""

    def test_records_attributes(self, exporter: InMemorySpanExporter) -> None:
        """Spans are exported with their attributes."""
        with trace_span("sqlite_adapter.query", statement_attributes("query", "SELECT 1")):
            pass

        (span,) = exporter.get_finished_spans()
        assert span.name == "sqlite_adapter.query"
        assert span.attributes["db.statement"] == "SELECT 1"

    def test_tags_error_kind(self, exporter: InMemorySpanExporter) -> None:
        """Structured failures tag the span with their kind."""
        with pytest.raises(DriverAdapterError):
            with trace_span("sqlite_adapter.query"):
                raise DriverAdapterError(TableDoesNotExist(table="t"))

        (span,) = exporter.get_finished_spans()
        assert span.attributes["sqlite_adapter.error_kind"] == "TableDoesNotExist"
        assert span.status.status_code == StatusCode.ERROR

    def test_plain_errors_propagate(self, exporter: InMemorySpanExporter) -> None:
        """Other failures propagate without an error kind."""
        with pytest.raises(ValueError):
            with trace_span("sqlite_adapter.execute"):
                raise ValueError("boom")

        (span,) = exporter.get_finished_spans()
        assert "sqlite_adapter.error_kind" not in span.attributes
