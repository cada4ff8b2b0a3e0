"""Storage Engine port for the embedded SQL engine.

This outbound port defines the narrow binding the adapter needs from the
embedded engine. Every call executes synchronously; the adapter layers
its own asynchronous interface and transaction serialization on top.

Key responsibilities:
- Execute statements with engine-native positional arguments
- Report column names, declared types and raw rows for reads
- Expose native BEGIN / COMMIT / ROLLBACK
- Answer catalog lookups (table -> column -> declared type)
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence

from sqlite_driver_adapter.domain.entities import RawResultSet


class EngineError(Exception):
    """A failure reported by the engine, in its native shape.

    Attributes:
        code: Symbolic or numeric result code, None if unavailable.
        message: The engine's diagnostic message.
    """

    def __init__(self, message: str, code: str | int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"EngineError(code={self.code!r}, message={self.message!r})"


class StorageEngine(Protocol):
    """Protocol for the embedded storage engine.

    Implementations are single-connection and single-writer. They are not
    safe for unsynchronized concurrent transactional use.

    All methods raise ``EngineError`` for engine-native failures.
    """

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        """Return True if a native transaction is open."""
        ...

    @abstractmethod
    def query(self, sql: str, args: Sequence[Any] = ()) -> RawResultSet:
        """Execute a statement and materialize its rows.

        Args:
            sql: The statement text.
            args: Engine-native positional arguments.

        Returns:
            Column names, declared types and raw rows. A statement that
            produces no columns is still executed and reported with empty
            column names.
        """
        ...

    @abstractmethod
    def execute(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Execute a statement and return the number of changed rows."""
        ...

    @abstractmethod
    def execute_script(self, script: str) -> None:
        """Execute several statements in order, stopping at the first failure."""
        ...

    @abstractmethod
    def begin(self) -> None:
        """Issue a native BEGIN."""
        ...

    @abstractmethod
    def commit(self) -> None:
        """Issue a native COMMIT."""
        ...

    @abstractmethod
    def rollback(self) -> None:
        """Issue a native ROLLBACK."""
        ...

    @abstractmethod
    def table_columns(self, table: str) -> dict[str, str | None]:
        """Look up the declared type of every column of a table.

        Args:
            table: The table name.

        Returns:
            Lower-cased column name -> declared type (None when undeclared).
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the underlying connection."""
        ...
