"""Domain entities for the driver adapter.

Exports:
    Query Types:
        - Query: SQL text plus tagged positional arguments
        - RawResultSet: Engine output before marshalling
        - ResultSet: Marshalled output for the caller
        - TransactionOptions: Options of an open transaction
        - RawRow, MappedRow: Row aliases

    Errors:
        - ErrorKind: Closed set of error kinds
        - ErrorRecord and its per-kind subclasses
        - DriverAdapterError: Exception carrying one record
"""

from sqlite_driver_adapter.domain.entities.errors import (
    ColumnNotFound,
    DriverAdapterError,
    ErrorKind,
    ErrorRecord,
    ForeignKeyConstraintViolation,
    InvalidIsolationLevel,
    NullConstraintViolation,
    SocketTimeout,
    TableDoesNotExist,
    TransactionAlreadyClosed,
    UniqueConstraintViolation,
)
from sqlite_driver_adapter.domain.entities.query import (
    MappedRow,
    Query,
    RawResultSet,
    RawRow,
    ResultSet,
    TransactionOptions,
)

__all__ = [
    # Query types
    "MappedRow",
    "Query",
    "RawResultSet",
    "RawRow",
    "ResultSet",
    "TransactionOptions",
    # Errors
    "ColumnNotFound",
    "DriverAdapterError",
    "ErrorKind",
    "ErrorRecord",
    "ForeignKeyConstraintViolation",
    "InvalidIsolationLevel",
    "NullConstraintViolation",
    "SocketTimeout",
    "TableDoesNotExist",
    "TransactionAlreadyClosed",
    "UniqueConstraintViolation",
]
