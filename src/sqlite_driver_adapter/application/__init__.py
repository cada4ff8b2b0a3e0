"""Application layer for the SQLite driver adapter.

The application layer composes the domain pipeline with the storage
engine to fulfil the caller runtime's use cases.

Exports:
    Adapter:
        - SqliteDriverAdapter: Queries, scripts and transactions on one connection
        - SqliteAdapterFactory: Opens the main or shadow database
    Queryable:
        - SqliteQueryable: Argument, type and row marshalling around the engine
    Transactions:
        - SqliteTransaction: One-shot transaction session
        - TransactionController: FIFO lock that serializes transactions
"""

from sqlite_driver_adapter.application.adapter import (
    SqliteAdapterFactory,
    SqliteDriverAdapter,
    normalize_url,
)
from sqlite_driver_adapter.application.queryable import SqliteQueryable
from sqlite_driver_adapter.application.transaction import SqliteTransaction, transaction_control
from sqlite_driver_adapter.application.transaction_controller import (
    TransactionController,
    check_isolation_level,
)

__all__ = [
    "SqliteDriverAdapter",
    "SqliteAdapterFactory",
    "normalize_url",
    "SqliteQueryable",
    "SqliteTransaction",
    "transaction_control",
    "TransactionController",
    "check_isolation_level",
]
