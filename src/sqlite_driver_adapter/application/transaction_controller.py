"""Transaction controller.

Serializes transactions on the adapter's single connection. One
``asyncio.Lock`` guards the connection: ``begin`` acquires it before the
native BEGIN and the returned session releases it on commit or rollback.
Waiters are granted the lock in arrival order, so at most one transaction
is open at a time and transactions never interleave.

Statements issued directly on the adapter (outside a transaction) do not
take the lock.
"""

from __future__ import annotations

import asyncio
import time

import structlog

from sqlite_driver_adapter.application.queryable import SqliteQueryable
from sqlite_driver_adapter.application.transaction import SqliteTransaction
from sqlite_driver_adapter.domain.entities import (
    DriverAdapterError,
    InvalidIsolationLevel,
    TransactionOptions,
)
from sqlite_driver_adapter.domain.value_objects import IsolationLevel
from sqlite_driver_adapter.infrastructure.logging import get_null_logger
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics
from sqlite_driver_adapter.infrastructure.tracing import statement_attributes, trace_span
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError


def check_isolation_level(level: IsolationLevel | str | None) -> None:
    """Accept only the default or SERIALIZABLE isolation.

    SQLite transactions are always serializable, so any other level
    would be silently weaker than requested.

    Raises:
        DriverAdapterError: InvalidIsolationLevel for anything else.
    """
    if level is None:
        return
    name = level.value if isinstance(level, IsolationLevel) else str(level)
    if name.strip().upper().replace(" ", "_") != IsolationLevel.SERIALIZABLE.value:
        raise DriverAdapterError(InvalidIsolationLevel(level=name))


class TransactionController:
    """Hands out transaction sessions one at a time.

    Usage:
        controller = TransactionController(queryable)
        tx = await controller.begin()
        await tx.execute_raw(Query("INSERT INTO t VALUES (1)"))
        await tx.commit()
    """

    def __init__(
        self,
        queryable: SqliteQueryable,
        logger: structlog.BoundLogger | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> None:
        self._queryable = queryable
        self._logger = logger or get_null_logger()
        self._metrics = metrics
        self._lock = asyncio.Lock()

    @property
    def locked(self) -> bool:
        """True while a transaction holds the connection."""
        return self._lock.locked()

    async def begin(self, isolation_level: IsolationLevel | str | None = None) -> SqliteTransaction:
        """Wait for the connection, then open a native transaction.

        Args:
            isolation_level: None or SERIALIZABLE.

        Returns:
            An active session owning the lock until it ends.

        Raises:
            DriverAdapterError: InvalidIsolationLevel (before any waiting),
                or the translated BEGIN failure (lock already released).
        """
        check_isolation_level(isolation_level)

        started = time.perf_counter()
        await self._lock.acquire()
        waited = time.perf_counter() - started
        if self._metrics is not None:
            self._metrics.lock_wait_seconds.observe(waited)
        self._logger.debug("transaction_lock_acquired", waited_seconds=round(waited, 6))

        try:
            with trace_span("sqlite_adapter.begin", statement_attributes("begin")):
                self._queryable.engine.begin()
        except EngineError as e:
            self._lock.release()
            raise self._queryable.driver_error(e) from e
        except BaseException:
            self._lock.release()
            raise

        if self._metrics is not None:
            self._metrics.transactions_active.inc()

        return SqliteTransaction(
            self._queryable,
            release=self._release,
            options=TransactionOptions(use_phantom_query=False),
            logger=self._logger,
            metrics=self._metrics,
        )

    def _release(self) -> None:
        if self._metrics is not None:
            self._metrics.transactions_active.dec()
        self._lock.release()
        self._logger.debug("transaction_lock_released")
