"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Outbound adapters: Implement external dependencies (the SQLite engine)
"""

from sqlite_driver_adapter.adapters.outbound import (
    SQLiteEngine,
    StatementInspector,
)

__all__ = [
    # Outbound adapters
    "SQLiteEngine",
    "StatementInspector",
]
