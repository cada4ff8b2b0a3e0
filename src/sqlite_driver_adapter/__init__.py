"""
SQLite Driver Adapter - SQLite bridge for a query-engine runtime

Runs parameterized SQL against an embedded SQLite database and returns
results in a dialect-neutral shape: resolved column types, marshalled
rows, a structured error taxonomy and serialized transactions.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from sqlite_driver_adapter.application import (  # noqa: E402
    SqliteAdapterFactory,
    SqliteDriverAdapter,
    SqliteTransaction,
)
from sqlite_driver_adapter.domain.entities import (  # noqa: E402
    DriverAdapterError,
    ErrorKind,
    Query,
    ResultSet,
)
from sqlite_driver_adapter.domain.value_objects import (  # noqa: E402
    ArgType,
    IsolationLevel,
    LogicalColumnType,
)

__all__ = [
    "__version__",
    "SqliteAdapterFactory",
    "SqliteDriverAdapter",
    "SqliteTransaction",
    "DriverAdapterError",
    "ErrorKind",
    "Query",
    "ResultSet",
    "ArgType",
    "IsolationLevel",
    "LogicalColumnType",
]
