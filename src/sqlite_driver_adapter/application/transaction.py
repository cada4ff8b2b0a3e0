"""Transaction session.

A ``SqliteTransaction`` is handed out by the transaction controller while
it holds the adapter's transaction lock. It is a one-shot session:

    ACTIVE --commit--> COMMITTED
    ACTIVE --rollback / failed commit--> ROLLED_BACK

Terminal states absorb further commit / rollback calls without touching
the engine. Queries on a terminal session fail with
TransactionAlreadyClosed. The lock is released exactly once, on the
transition out of ACTIVE.
"""

from __future__ import annotations

import re
from typing import Callable, Literal

import structlog

from sqlite_driver_adapter.application.queryable import SqliteQueryable
from sqlite_driver_adapter.domain.entities import (
    DriverAdapterError,
    Query,
    ResultSet,
    TransactionAlreadyClosed,
    TransactionOptions,
)
from sqlite_driver_adapter.domain.value_objects import TransactionState
from sqlite_driver_adapter.infrastructure.logging import get_null_logger
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError


_COMMIT_PATTERN = re.compile(r"^\s*(?:COMMIT|END)(?:\s+TRANSACTION)?\s*;?\s*$", re.IGNORECASE)
_ROLLBACK_PATTERN = re.compile(r"^\s*ROLLBACK(?:\s+TRANSACTION)?\s*;?\s*$", re.IGNORECASE)


def transaction_control(sql: str) -> Literal["commit", "rollback"] | None:
    """Recognize a bare COMMIT or ROLLBACK statement.

    ``ROLLBACK TO <savepoint>`` is not a transaction-ending statement and
    is not recognized.
    """
    if _COMMIT_PATTERN.match(sql):
        return "commit"
    if _ROLLBACK_PATTERN.match(sql):
        return "rollback"
    return None


class SqliteTransaction:
    """An open transaction holding the adapter's transaction lock."""

    provider = "sqlite"

    def __init__(
        self,
        queryable: SqliteQueryable,
        release: Callable[[], None],
        options: TransactionOptions | None = None,
        logger: structlog.BoundLogger | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            queryable: Shared query capability of the owning adapter.
            release: Releases the transaction lock. Called exactly once.
            options: Session options reported to the caller runtime.
            logger: Optional structured logger.
            metrics: Optional metrics registry.
        """
        self._queryable = queryable
        self._release = release
        self.options = options or TransactionOptions()
        self._logger = logger or get_null_logger()
        self._metrics = metrics
        self._state = TransactionState.ACTIVE

    @property
    def adapter_name(self) -> str:
        return self._queryable.adapter_name

    @property
    def state(self) -> TransactionState:
        """Current lifecycle state."""
        return self._state

    async def query_raw(self, query: Query) -> ResultSet:
        """Run a row-returning statement inside the transaction."""
        self._ensure_active()
        return await self._queryable.query_raw(query)

    async def execute_raw(self, query: Query) -> int:
        """Run a write statement inside the transaction.

        A bare COMMIT or ROLLBACK ends the session through the lifecycle
        methods instead of reaching the engine, and reports 0 rows.
        """
        self._ensure_active()

        control = transaction_control(query.sql)
        if control == "commit":
            await self.commit()
            return 0
        if control == "rollback":
            await self.rollback()
            return 0

        return await self._queryable.execute_raw(query)

    async def commit(self) -> None:
        """Commit the transaction. A no-op once the session has ended.

        Raises:
            DriverAdapterError: If the engine refuses the commit. The
                session still ends as rolled back and the lock is released.
        """
        if self._state.is_terminal():
            self._logger.debug("transaction_commit_ignored", state=self._state.value)
            return

        self._logger.debug("transaction_commit")
        outcome = TransactionState.ROLLED_BACK
        try:
            self._queryable.engine.commit()
            outcome = TransactionState.COMMITTED
        except EngineError as e:
            self._abandon()
            raise self._queryable.driver_error(e) from e
        finally:
            self._finish(outcome)

    async def rollback(self) -> None:
        """Roll back the transaction. A no-op once the session has ended.

        Raises:
            DriverAdapterError: If the engine refuses the rollback. The
                session still ends as rolled back and the lock is released.
        """
        if self._state.is_terminal():
            self._logger.debug("transaction_rollback_ignored", state=self._state.value)
            return

        self._logger.debug("transaction_rollback")
        try:
            self._queryable.engine.rollback()
        except EngineError as e:
            raise self._queryable.driver_error(e) from e
        finally:
            self._finish(TransactionState.ROLLED_BACK)

    def _ensure_active(self) -> None:
        if not self._state.is_active():
            raise DriverAdapterError(TransactionAlreadyClosed())

    def _abandon(self) -> None:
        # A refused COMMIT can leave the native transaction open.
        if not self._queryable.engine.in_transaction:
            return
        try:
            self._queryable.engine.rollback()
        except EngineError as e:
            self._logger.warning("transaction_abandon_failed", error=e.message)

    def _finish(self, state: TransactionState) -> None:
        if self._state.is_terminal():
            return
        self._state = state
        if self._metrics is not None:
            self._metrics.transactions_total.labels(status=state.value).inc()
        self._logger.debug("transaction_finished", state=state.value)
        self._release()
