"""Core query capability shared by the adapter and its transactions.

``SqliteQueryable`` runs the full pipeline for a single statement:

    arguments -> argument marshaller -> engine
              -> declared types + raw rows -> type unifier
              -> row marshaller -> ResultSet

Engine failures are routed through the error translator. Transactions
reuse this object by composition and add their state guard in front.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator

import structlog

from sqlite_driver_adapter.domain.entities import (
    DriverAdapterError,
    Query,
    RawResultSet,
    ResultSet,
)
from sqlite_driver_adapter.domain.services import (
    convert_engine_error,
    get_column_types,
    map_query_args,
    map_row,
)
from sqlite_driver_adapter.infrastructure.logging import get_null_logger
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics
from sqlite_driver_adapter.infrastructure.tracing import statement_attributes, trace_span
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError, StorageEngine


DEFAULT_ADAPTER_NAME = "sqlite-driver-adapter"


class SqliteQueryable:
    """Runs queries against a storage engine and marshals the results.

    Attributes:
        provider: Always ``"sqlite"``.
        adapter_name: Name reported to the caller runtime.
    """

    provider = "sqlite"

    def __init__(
        self,
        engine: StorageEngine,
        adapter_name: str = DEFAULT_ADAPTER_NAME,
        logger: structlog.BoundLogger | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> None:
        """Initialize the queryable.

        Args:
            engine: The storage engine to drive.
            adapter_name: Name reported to the caller runtime.
            logger: Optional structured logger (silent by default).
            metrics: Optional metrics registry (nothing recorded if None).
        """
        self._engine = engine
        self.adapter_name = adapter_name
        self._logger = logger or get_null_logger()
        self._metrics = metrics

    @property
    def engine(self) -> StorageEngine:
        """The storage engine this queryable drives."""
        return self._engine

    async def query_raw(self, query: Query) -> ResultSet:
        """Run a row-returning statement and marshal its rows."""
        self._logger.debug("query_raw", sql=query.sql, arg_count=len(query.args))

        with self.instrument("query", query.sql):
            raw = self._perform_io(query)

        column_types = get_column_types(raw.column_names, raw.declared_types, raw.values)
        return ResultSet(
            column_names=raw.column_names,
            column_types=column_types,
            rows=[map_row(row, column_types) for row in raw.values],
        )

    async def execute_raw(self, query: Query) -> int:
        """Run a write statement and return the number of changed rows."""
        self._logger.debug("execute_raw", sql=query.sql, arg_count=len(query.args))

        with self.instrument("execute", query.sql):
            args = map_query_args(query.args, query.arg_types)
            try:
                return self._engine.execute(query.sql, args)
            except EngineError as e:
                raise self.driver_error(e) from e

    def _perform_io(self, query: Query) -> RawResultSet:
        args = map_query_args(query.args, query.arg_types)
        try:
            return self._engine.query(query.sql, args)
        except EngineError as e:
            raise self.driver_error(e) from e

    def driver_error(self, error: EngineError) -> DriverAdapterError:
        """Translate an engine failure for the caller.

        Returns:
            The structured error to raise.

        Raises:
            EngineError: ``error`` itself when it is outside the taxonomy.
        """
        self._logger.debug("engine_error", code=error.code, error=error.message)
        record = convert_engine_error(error)
        if self._metrics is not None:
            self._metrics.errors_total.labels(kind=record.kind.value).inc()
        return DriverAdapterError(record)

    @contextmanager
    def instrument(self, operation: str, sql: str) -> Generator[None, None, None]:
        """Trace a statement and record its outcome and latency."""
        start = time.perf_counter()
        status = "error"
        with trace_span(f"sqlite_adapter.{operation}", statement_attributes(operation, sql)):
            try:
                yield
                status = "success"
            finally:
                if self._metrics is not None:
                    self._metrics.queries_total.labels(operation=operation, status=status).inc()
                    self._metrics.query_latency_seconds.labels(operation=operation).observe(
                        time.perf_counter() - start
                    )
