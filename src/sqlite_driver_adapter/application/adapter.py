"""SQLite driver adapter and its factory.

The adapter is the object a caller runtime talks to. It owns one engine
connection and combines the shared query capability with the transaction
controller:

    adapter.query_raw / execute_raw   -> SqliteQueryable (no lock)
    adapter.start_transaction()       -> TransactionController (FIFO lock)
    adapter.execute_script()          -> engine script execution
    adapter.dispose()                 -> closes the connection

``SqliteAdapterFactory`` opens the configured database (or the shadow
database used for migrations) and returns a ready adapter.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog

from sqlite_driver_adapter.adapters.outbound.sqlite_engine import SQLiteEngine
from sqlite_driver_adapter.application.queryable import DEFAULT_ADAPTER_NAME, SqliteQueryable
from sqlite_driver_adapter.application.transaction import SqliteTransaction
from sqlite_driver_adapter.application.transaction_controller import TransactionController
from sqlite_driver_adapter.domain.entities import DriverAdapterError, Query, ResultSet
from sqlite_driver_adapter.domain.services import convert_engine_error
from sqlite_driver_adapter.domain.value_objects import IsolationLevel
from sqlite_driver_adapter.infrastructure.config import Config, DatabaseConfig, get_config
from sqlite_driver_adapter.infrastructure.logging import get_logger, get_null_logger, setup_logging
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics
from sqlite_driver_adapter.infrastructure.tracing import setup_tracing
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError, StorageEngine


SHADOW_DATABASE_URL = ":memory:"


class SqliteDriverAdapter:
    """Driver adapter over a single SQLite connection.

    Usage:
        adapter = await SqliteAdapterFactory().connect()
        await adapter.execute_script("CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)")

        async with adapter.transaction() as tx:
            await tx.execute_raw(Query("INSERT INTO t (v) VALUES (?)", ["a"], ["Text"]))

        result = await adapter.query_raw(Query("SELECT * FROM t"))
        await adapter.dispose()
    """

    provider = "sqlite"

    def __init__(
        self,
        engine: StorageEngine,
        adapter_name: str = DEFAULT_ADAPTER_NAME,
        logger: structlog.BoundLogger | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> None:
        self._engine = engine
        self._logger = logger or get_null_logger()
        self._metrics = metrics
        self._queryable = SqliteQueryable(engine, adapter_name, self._logger, metrics)
        self._controller = TransactionController(self._queryable, self._logger, metrics)

    @property
    def adapter_name(self) -> str:
        return self._queryable.adapter_name

    async def query_raw(self, query: Query) -> ResultSet:
        """Run a row-returning statement outside any transaction."""
        return await self._queryable.query_raw(query)

    async def execute_raw(self, query: Query) -> int:
        """Run a write statement outside any transaction."""
        return await self._queryable.execute_raw(query)

    async def execute_script(self, script: str) -> None:
        """Run several statements in order, stopping at the first failure.

        A blank script does nothing.

        Raises:
            DriverAdapterError: The translated failure of the failing statement.
        """
        if not script.strip():
            return

        self._logger.debug("execute_script", length=len(script))
        with self._queryable.instrument("script", script):
            try:
                self._engine.execute_script(script)
            except EngineError as e:
                raise self._queryable.driver_error(e) from e

    async def start_transaction(
        self, isolation_level: IsolationLevel | str | None = None
    ) -> SqliteTransaction:
        """Open a transaction, waiting behind any transaction already open.

        Args:
            isolation_level: None or SERIALIZABLE.

        Returns:
            An active transaction session.
        """
        return await self._controller.begin(isolation_level)

    @asynccontextmanager
    async def transaction(
        self, isolation_level: IsolationLevel | str | None = None
    ) -> AsyncIterator[SqliteTransaction]:
        """Scope a transaction: commit on exit, roll back on error.

        The session may also be ended explicitly inside the block; the
        implicit commit or rollback is then a no-op.
        """
        tx = await self.start_transaction(isolation_level)
        try:
            yield tx
        except BaseException:
            await tx.rollback()
            raise
        await tx.commit()

    async def dispose(self) -> None:
        """Close the connection."""
        self._logger.info("adapter_disposed", adapter=self.adapter_name)
        self._engine.close()


def normalize_url(url: str) -> str:
    """Turn a ``file:`` URL into a path the engine can open.

    >>> normalize_url("file:./dev.db")
    './dev.db'
    >>> normalize_url("file:///tmp/dev.db")
    '/tmp/dev.db'
    """
    if url.startswith("file:"):
        url = url[len("file:"):]
        if url.startswith("//"):
            url = url[2:]
    return url


class SqliteAdapterFactory:
    """Opens databases and wraps them in driver adapters.

    Usage:
        factory = SqliteAdapterFactory.from_config()
        adapter = await factory.connect()
        shadow = await factory.connect_to_shadow_db()
    """

    provider = "sqlite"

    def __init__(
        self,
        config: DatabaseConfig | None = None,
        logger: structlog.BoundLogger | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> None:
        self._config = config or DatabaseConfig()
        self._logger = logger or get_null_logger()
        self._metrics = metrics

    @classmethod
    def from_config(
        cls,
        config: Config | None = None,
        metrics: AdapterMetrics | None = None,
    ) -> SqliteAdapterFactory:
        """Build a factory with logging and tracing set up from settings.

        Args:
            config: Full configuration. Loaded from the environment if None.
            metrics: Optional metrics registry shared by every adapter.

        Returns:
            A factory whose adapters log through a bound structlog logger.
        """
        config = config or get_config()
        observability = config.observability
        setup_logging(
            level=observability.log_level,
            log_format=observability.log_format,
            max_statement_length=observability.max_statement_length,
        )
        if observability.otel_endpoint:
            setup_tracing(
                service_name=observability.otel_service_name,
                otlp_endpoint=observability.otel_endpoint,
            )

        logger = get_logger(
            "sqlite_driver_adapter", adapter=config.database.adapter_name, provider=cls.provider
        )
        return cls(config.database, logger=logger, metrics=metrics)

    @property
    def adapter_name(self) -> str:
        return self._config.adapter_name

    async def connect(self) -> SqliteDriverAdapter:
        """Open the configured database.

        Raises:
            DriverAdapterError: If the failure is a known kind (busy, locked).
            EngineError: Any other failure to open the database.
        """
        return self._open(self._config.url)

    async def connect_to_shadow_db(self) -> SqliteDriverAdapter:
        """Open the shadow database (in-memory unless configured)."""
        return self._open(self._config.shadow_database_url or SHADOW_DATABASE_URL)

    def _open(self, url: str) -> SqliteDriverAdapter:
        path = normalize_url(url)
        try:
            engine = SQLiteEngine.open(
                path, foreign_keys=self._config.foreign_keys, logger=self._logger
            )
        except EngineError as e:
            self._logger.error("adapter_connect_failed", path=path, error=e.message)
            raise DriverAdapterError(convert_engine_error(e)) from e
        self._logger.info("adapter_connected", adapter=self.adapter_name, path=path)
        return SqliteDriverAdapter(
            engine,
            adapter_name=self.adapter_name,
            logger=self._logger,
            metrics=self._metrics,
        )
