"""Inbound ports - API contracts for the caller runtime.

Inbound ports define the interfaces that a data-access runtime uses
to run queries and manage transactions through the adapter.
"""

from sqlite_driver_adapter.ports.inbound.driver_adapter import (
    SqlDriverAdapter,
    SqlQueryable,
    Transaction,
)

__all__ = [
    "SqlDriverAdapter",
    "SqlQueryable",
    "Transaction",
]
