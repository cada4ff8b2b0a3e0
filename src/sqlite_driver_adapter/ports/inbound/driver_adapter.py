"""Driver adapter ports offered to the caller runtime.

These inbound ports define what a SQL-oriented data-access runtime can
call. A plain queryable and a transaction share the same query surface;
a transaction adds commit and rollback, and the adapter adds scripts,
transaction start and disposal.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from sqlite_driver_adapter.domain.entities import Query, ResultSet, TransactionOptions
from sqlite_driver_adapter.domain.value_objects import IsolationLevel


class SqlQueryable(Protocol):
    """Protocol for anything that can run queries.

    Failures inside the taxonomy are raised as ``DriverAdapterError``;
    anything else propagates untranslated.
    """

    provider: str
    adapter_name: str

    @abstractmethod
    async def query_raw(self, query: Query) -> ResultSet:
        """Run a row-returning statement.

        Args:
            query: The statement, its arguments and their type tags.

        Returns:
            Column names, the fixed column type vector and mapped rows.
        """
        ...

    @abstractmethod
    async def execute_raw(self, query: Query) -> int:
        """Run a write statement.

        Returns:
            The number of rows changed.
        """
        ...


class Transaction(SqlQueryable, Protocol):
    """Protocol for an open transaction session.

    ``commit`` and ``rollback`` are idempotent: once the session has
    reached a terminal state both succeed without touching the engine.
    """

    options: TransactionOptions

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction and release the connection lock."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Roll the transaction back and release the connection lock."""
        ...


class SqlDriverAdapter(SqlQueryable, Protocol):
    """Protocol for a connected driver adapter."""

    @abstractmethod
    async def execute_script(self, script: str) -> None:
        """Execute a multi-statement script, stopping at the first failure."""
        ...

    @abstractmethod
    async def start_transaction(
        self, isolation_level: IsolationLevel | str | None = None
    ) -> Transaction:
        """Begin a transaction, waiting for any open one to finish first.

        Raises:
            DriverAdapterError: InvalidIsolationLevel for anything other
                than SERIALIZABLE.
        """
        ...

    @abstractmethod
    async def dispose(self) -> None:
        """Close the connection."""
        ...
