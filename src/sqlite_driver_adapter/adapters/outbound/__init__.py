"""Outbound adapters - implementations of outbound ports.

These adapters bind the StorageEngine port to SQLite and inspect
statements to recover declared column types.
"""

from sqlite_driver_adapter.adapters.outbound.sqlite_engine import SQLiteEngine, native_errors
from sqlite_driver_adapter.adapters.outbound.statement_inspector import (
    SourceColumns,
    StatementInspector,
)

__all__ = [
    "SQLiteEngine",
    "SourceColumns",
    "StatementInspector",
    "native_errors",
]
