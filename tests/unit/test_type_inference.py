"""Unit tests for value-based inference and column type unification."""

from __future__ import annotations

import pytest

from sqlite_driver_adapter.domain.services import get_column_types, infer_column_type
from sqlite_driver_adapter.domain.value_objects import MAX_SAFE_INTEGER, LogicalColumnType


def column(*values: object) -> list[tuple[object]]:
    """Build single-column rows."""
    return [(value,) for value in values]


@pytest.mark.unit
class TestInferColumnType:
    """Tests for infer_column_type."""

    def test_numbers(self) -> None:
        """All-numeric columns are UNKNOWN_NUMBER."""
        assert infer_column_type(column(1, 2, 3), 0) == LogicalColumnType.UNKNOWN_NUMBER
        assert infer_column_type(column(1.5, 2), 0) == LogicalColumnType.UNKNOWN_NUMBER

    def test_nulls_are_ignored(self) -> None:
        """Nulls do not change the inferred type."""
        assert infer_column_type(column(1, None, 3), 0) == LogicalColumnType.UNKNOWN_NUMBER

    def test_all_null_defaults_to_int32(self) -> None:
        """All-null and empty columns default to INT32."""
        assert infer_column_type(column(None, None), 0) == LogicalColumnType.INT32
        assert infer_column_type([], 0) == LogicalColumnType.INT32

    def test_text(self) -> None:
        """Any string makes the column TEXT."""
        assert infer_column_type(column(1, "a", 2), 0) == LogicalColumnType.TEXT

    def test_bytes_win(self) -> None:
        """A single buffer makes the column BYTES regardless of position."""
        assert infer_column_type(column("a", 1, b"\x00"), 0) == LogicalColumnType.BYTES
        assert infer_column_type(column(b"\x00", "a", 2**60), 0) == LogicalColumnType.BYTES

    def test_wide_integer(self) -> None:
        """Integers beyond the safe range make the column INT64."""
        assert infer_column_type(column(1, MAX_SAFE_INTEGER + 1), 0) == LogicalColumnType.INT64
        assert infer_column_type(column(-(2**63)), 0) == LogicalColumnType.INT64
        assert infer_column_type(column(MAX_SAFE_INTEGER), 0) == LogicalColumnType.UNKNOWN_NUMBER

    def test_never_demotes(self) -> None:
        """A later narrower value never demotes the column."""
        assert infer_column_type(column("a", 1, None), 0) == LogicalColumnType.TEXT
        assert infer_column_type(column(2**60, 1), 0) == LogicalColumnType.INT64

    def test_scans_every_row(self) -> None:
        """A disqualifying value in the last row still counts."""
        rows = column(*range(1000), "tail")
        assert infer_column_type(rows, 0) == LogicalColumnType.TEXT

    def test_column_index(self) -> None:
        """Only the requested column is inspected."""
        rows = [(1, "a"), (2, "b")]
        assert infer_column_type(rows, 0) == LogicalColumnType.UNKNOWN_NUMBER
        assert infer_column_type(rows, 1) == LogicalColumnType.TEXT


@pytest.mark.unit
class TestGetColumnTypes:
    """Tests for get_column_types."""

    def test_declared_types_without_rows(self) -> None:
        """Zero-row results are typed from declared types alone."""
        assert get_column_types(["id", "v"], ["INTEGER", "TEXT"], []) == [
            LogicalColumnType.INT32,
            LogicalColumnType.TEXT,
        ]

    def test_declared_type_wins(self) -> None:
        """A resolved declared type is trusted over the values."""
        assert get_column_types(["v"], ["TEXT"], column(1, 2)) == [LogicalColumnType.TEXT]

    def test_undeclared_columns_are_inferred(self) -> None:
        """Null and unrecognized declarations fall back to inference."""
        rows = [(1, b"\x01", None)]
        assert get_column_types(["a", "b", "c"], [None, "GEOMETRY", None], rows) == [
            LogicalColumnType.UNKNOWN_NUMBER,
            LogicalColumnType.BYTES,
            LogicalColumnType.INT32,
        ]

    def test_short_declared_types(self) -> None:
        """Missing declared entries count as undeclared."""
        rows = [("x", 2**60)]
        assert get_column_types(["a", "b"], ["TEXT"], rows) == [
            LogicalColumnType.TEXT,
            LogicalColumnType.INT64,
        ]

    def test_no_columns(self) -> None:
        """Non-row-returning statements produce an empty vector."""
        assert get_column_types([], [], []) == []
