"""SQLite storage engine adapter.

Implements the StorageEngine port on top of the standard library
``sqlite3`` binding. The connection runs in autocommit mode
(``isolation_level=None``) so the binding never opens or commits a
transaction on its own: only explicit BEGIN / COMMIT / ROLLBACK do.

Failures raised by ``sqlite3`` are converted into ``EngineError`` carrying
the symbolic extended result code (``SQLITE_CONSTRAINT_UNIQUE``, ...) and
the engine message.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Sequence

import structlog

from sqlite_driver_adapter.adapters.outbound.statement_inspector import StatementInspector
from sqlite_driver_adapter.domain.entities import RawResultSet
from sqlite_driver_adapter.infrastructure.logging import get_null_logger
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError


@contextmanager
def native_errors() -> Generator[None, None, None]:
    """Convert ``sqlite3`` failures raised inside the block into EngineError."""
    try:
        yield
    except sqlite3.Error as e:
        code = getattr(e, "sqlite_errorname", None) or getattr(e, "sqlite_errorcode", None)
        raise EngineError(str(e), code=code) from e


class SQLiteEngine:
    """Single-connection SQLite engine.

    Usage:
        engine = SQLiteEngine.open(":memory:")
        engine.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)")
        result = engine.query("SELECT * FROM t")
        engine.close()

    Thread Safety:
        Not thread-safe. One engine serves one adapter on one event loop.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        inspector: StatementInspector | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            connection: An open connection in autocommit mode.
            inspector: Statement inspector for declared-type lookup.
            logger: Optional structured logger (silent by default).
        """
        self._connection = connection
        self._inspector = inspector or StatementInspector()
        self._logger = logger or get_null_logger()

    @classmethod
    def open(
        cls,
        path: str | Path,
        foreign_keys: bool = True,
        logger: structlog.BoundLogger | None = None,
    ) -> SQLiteEngine:
        """Open a database file (or ``:memory:``).

        Args:
            path: Database path.
            foreign_keys: Whether to enforce foreign key constraints.
            logger: Optional structured logger.

        Returns:
            A ready engine.

        Raises:
            EngineError: If the database cannot be opened.
        """
        with native_errors():
            connection = sqlite3.connect(str(path), isolation_level=None)

        engine = cls(connection, logger=logger)
        if foreign_keys:
            try:
                engine.execute("PRAGMA foreign_keys = ON")
            except EngineError as e:
                engine._logger.warning("foreign_keys_pragma_failed", error=e.message)
        return engine

    @property
    def in_transaction(self) -> bool:
        """Return True if a native transaction is open."""
        return self._connection.in_transaction

    def query(self, sql: str, args: Sequence[Any] = ()) -> RawResultSet:
        """Execute a statement and materialize its rows."""
        with native_errors():
            cursor = self._connection.execute(sql, tuple(args))
            if cursor.description is None:
                return RawResultSet()
            column_names = [column[0] for column in cursor.description]
            values = cursor.fetchall()

        return RawResultSet(
            column_names=column_names,
            declared_types=self.declared_types(sql, column_names),
            values=values,
        )

    def execute(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Execute a statement and return the number of changed rows."""
        with native_errors():
            cursor = self._connection.execute(sql, tuple(args))
            return max(cursor.rowcount, 0)

    def execute_script(self, script: str) -> None:
        """Execute a script; statements after the first failure do not run.

        Statements run one at a time on the connection. ``executescript``
        is not used: it commits an open transaction before running.
        """
        for statement in self._inspector.split_statements(script):
            with native_errors():
                self._connection.execute(statement)

    def begin(self) -> None:
        """Issue a native BEGIN."""
        with native_errors():
            self._connection.execute("BEGIN")

    def commit(self) -> None:
        """Issue a native COMMIT."""
        with native_errors():
            self._connection.execute("COMMIT")

    def rollback(self) -> None:
        """Issue a native ROLLBACK."""
        with native_errors():
            self._connection.execute("ROLLBACK")

    def table_columns(self, table: str) -> dict[str, str | None]:
        """Read declared column types from the catalog."""
        quoted = '"' + table.replace('"', '""') + '"'
        with native_errors():
            rows = self._connection.execute(f"PRAGMA table_info({quoted})").fetchall()
        # (cid, name, type, notnull, dflt_value, pk)
        return {row[1].lower(): (row[2] or None) for row in rows}

    def declared_types(self, sql: str, column_names: Sequence[str]) -> list[str | None]:
        """Resolve the declared type of every output column of a statement.

        Types are only known for single-table SELECTs. A failed catalog
        lookup degrades the whole query to undeclared types.
        """
        unknown: list[str | None] = [None] * len(column_names)

        sources = self._inspector.source_columns(sql, column_names)
        if sources is None:
            return unknown

        try:
            catalog = self.table_columns(sources.table)
        except EngineError as e:
            self._logger.warning(
                "catalog_lookup_failed", table=sources.table, error=e.message
            )
            return unknown

        return [
            catalog.get(column.lower()) if column is not None else None
            for column in sources.columns
        ]

    def close(self) -> None:
        """Close the connection."""
        with native_errors():
            self._connection.close()
