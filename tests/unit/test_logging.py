"""Unit tests for logging helpers."""

from __future__ import annotations

import pytest

from sqlite_driver_adapter.infrastructure.logging import (
    get_logger,
    get_null_logger,
    truncate_statements,
)


@pytest.mark.unit
class TestTruncateStatements:
    """Tests for the SQL truncation processor."""

    def test_long_statement_is_cut(self) -> None:
        """Statements beyond the limit keep a prefix and their length."""
        processor = truncate_statements(6)
        event = processor(None, "info", {"event": "query_raw", "sql": "SELECT 1 + 1"})

        assert event["sql"] == "SELECT... (12 chars)"
        assert event["event"] == "query_raw"

    def test_short_statement_untouched(self) -> None:
        """Statements within the limit are logged as-is."""
        processor = truncate_statements(100)
        event = processor(None, "info", {"sql": "SELECT 1"})

        assert event["sql"] == "SELECT 1"

    def test_disabled(self) -> None:
        """A limit of 0 keeps every statement whole."""
        processor = truncate_statements(0)
        sql = "SELECT " + ", ".join(str(n) for n in range(500))

        assert processor(None, "info", {"sql": sql})["sql"] == sql

    def test_other_fields_untouched(self) -> None:
        """Only SQL text is truncated."""
        processor = truncate_statements(3)
        event = processor(None, "info", {"error": "UNIQUE constraint failed: t.v", "length": 1000})

        assert event == {"error": "UNIQUE constraint failed: t.v", "length": 1000}


@pytest.mark.unit
class TestLoggers:
    """Tests for logger construction."""

    def test_null_logger_accepts_events(self) -> None:
        """The default logger swallows events of every level."""
        logger = get_null_logger()

        logger.debug("query_raw", sql="SELECT 1")
        logger.info("adapter_connected", path=":memory:")
        logger.warning("catalog_lookup_failed", table="t")
        logger.error("adapter_connect_failed", error="unable to open database file")

    def test_bound_context(self) -> None:
        """Initial context is bound to the returned logger."""
        logger = get_logger("sqlite_driver_adapter", adapter="sqlite-test")

        assert logger is not None
        logger.debug("bound_logger_ready")
