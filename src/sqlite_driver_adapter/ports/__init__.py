"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to the caller runtime (SqlQueryable, Transaction)
- Outbound ports: Dependencies on external systems (StorageEngine)

Adapters implement these ports with concrete functionality.
"""

from sqlite_driver_adapter.ports.inbound import (
    SqlDriverAdapter,
    SqlQueryable,
    Transaction,
)
from sqlite_driver_adapter.ports.outbound import EngineError, StorageEngine

__all__ = [
    # Inbound ports
    "SqlDriverAdapter",
    "SqlQueryable",
    "Transaction",
    # Outbound ports
    "EngineError",
    "StorageEngine",
]
