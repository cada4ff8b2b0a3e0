"""Unit tests for StatementInspector."""

from __future__ import annotations

import pytest

from sqlite_driver_adapter.adapters.outbound import SourceColumns, StatementInspector


@pytest.mark.unit
class TestSourceTable:
    """Tests for single-table SELECT detection."""

    @pytest.fixture
    def inspector(self) -> StatementInspector:
        """Create an inspector for testing."""
        return StatementInspector()

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT id FROM t",
            "SELECT id FROM t WHERE id = ?",
            "select * from t where id = 999;",
            "SELECT id FROM t AS x ORDER BY id LIMIT 10",
            "SELECT id FROM t x WHERE x.id > 1",
            "SELECT id FROM main.t",
            'SELECT "id" FROM "t"',
            "SELECT DISTINCT v FROM t GROUP BY v HAVING COUNT(*) > 1",
            "-- leading comment\nSELECT id FROM t",
        ],
    )
    def test_accepted(self, inspector: StatementInspector, sql: str) -> None:
        """SELECTs from exactly one table are accepted."""
        assert inspector.source_table(sql) == "t"

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT 1",
            "SELECT a.id FROM a JOIN b ON a.id = b.a_id",
            "SELECT a.id FROM a LEFT JOIN b ON a.id = b.a_id",
            "SELECT * FROM a, b",
            "SELECT id FROM t WHERE id IN (SELECT t_id FROM u)",
            "SELECT * FROM (SELECT id FROM t)",
            "WITH x AS (SELECT id FROM t) SELECT id FROM x",
            "SELECT id FROM t UNION SELECT id FROM u",
            "SELECT 1; SELECT 2",
            "INSERT INTO t (v) VALUES (?)",
            "PRAGMA foreign_keys",
            "SELECT value FROM json_each(?)",
        ],
    )
    def test_rejected(self, inspector: StatementInspector, sql: str) -> None:
        """Anything but a single-table SELECT is not statically determinable."""
        assert inspector.source_table(sql) is None

    def test_malformed(self, inspector: StatementInspector) -> None:
        """Malformed statements are reported as not determinable."""
        assert inspector.source_table("SELECT FROM WHERE (((") is None
        assert inspector.source_table("") is None


@pytest.mark.unit
class TestSourceColumns:
    """Tests for output column tracing."""

    @pytest.fixture
    def inspector(self) -> StatementInspector:
        """Create an inspector for testing."""
        return StatementInspector()

    def test_named_columns(self, inspector: StatementInspector) -> None:
        """Named columns map to themselves."""
        assert inspector.source_columns("SELECT id, v FROM t", ["id", "v"]) == SourceColumns(
            table="t", columns=("id", "v")
        )

    def test_star(self, inspector: StatementInspector) -> None:
        """Star columns map by output name."""
        sources = inspector.source_columns("SELECT * FROM t WHERE id = 999", ["id", "v"])
        assert sources == SourceColumns(table="t", columns=("id", "v"))

    def test_alias(self, inspector: StatementInspector) -> None:
        """Aliased columns map to the aliased source column."""
        sources = inspector.source_columns("SELECT v AS value, id ident FROM t", ["value", "ident"])
        assert sources == SourceColumns(table="t", columns=("v", "id"))

    def test_qualified_and_table_alias(self, inspector: StatementInspector) -> None:
        """Qualified columns and table aliases resolve to the real table."""
        sources = inspector.source_columns("SELECT x.id, x.* FROM t AS x", ["id", "id", "v"])
        assert sources == SourceColumns(table="t", columns=("id", "id", "v"))

    def test_keyword_named_columns(self, inspector: StatementInspector) -> None:
        """Columns named like SQL keywords are still traced."""
        sources = inspector.source_columns("SELECT type, count, data FROM t", ["type", "count", "data"])
        assert sources == SourceColumns(table="t", columns=("type", "count", "data"))

    def test_expressions(self, inspector: StatementInspector) -> None:
        """Expressions have no source column."""
        sources = inspector.source_columns(
            "SELECT COUNT(*) AS n, id, v || 'x', ? FROM t", ["n", "id", "v || 'x'", "?"]
        )
        assert sources == SourceColumns(table="t", columns=(None, "id", None, None))

    def test_not_determinable(self, inspector: StatementInspector) -> None:
        """Non single-table statements yield no sources."""
        assert inspector.source_columns("SELECT 1 AS one", ["one"]) is None


@pytest.mark.unit
class TestSplitStatements:
    """Tests for script splitting."""

    @pytest.fixture
    def inspector(self) -> StatementInspector:
        """Create an inspector for testing."""
        return StatementInspector()

    def test_two_statements(self, inspector: StatementInspector) -> None:
        """Each statement comes back on its own."""
        statements = inspector.split_statements(
            "CREATE TABLE t (id INTEGER); INSERT INTO t VALUES (1);"
        )
        assert len(statements) == 2
        assert statements[0].startswith("CREATE TABLE t")
        assert statements[1].startswith("INSERT INTO t")

    def test_blank_and_comment_only(self, inspector: StatementInspector) -> None:
        """Empty pieces and bare comments are dropped."""
        assert inspector.split_statements("") == []
        assert inspector.split_statements("  ;\n;  ") == []
        assert inspector.split_statements("-- nothing here\n/* or here */") == []

    def test_trigger_body_is_one_statement(self, inspector: StatementInspector) -> None:
        """Semicolons inside BEGIN ... END do not split a trigger."""
        statements = inspector.split_statements(
            "CREATE TABLE t (x INTEGER);\n"
            "CREATE TRIGGER t_ins AFTER INSERT ON t BEGIN\n"
            "  UPDATE t SET x = 1; DELETE FROM t WHERE x = 2;\n"
            "END;\n"
            "SELECT 1;"
        )
        assert len(statements) == 3
        assert statements[1].startswith("CREATE TRIGGER")
        assert statements[1].rstrip().endswith("END;")
