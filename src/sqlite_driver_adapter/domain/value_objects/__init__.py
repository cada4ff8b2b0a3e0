"""Value objects for the driver adapter domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Column Types:
        - LogicalColumnType: Unified per-column result type
        - ArgType: Logical-type tag of a bound argument
        - MAX_SAFE_INTEGER: Largest integer exactly representable as a float
        - is_wide_integer: Detects integers beyond the safe range

    Transaction Types:
        - TransactionState: Session lifecycle states (ACTIVE, COMMITTED, ROLLED_BACK)
        - IsolationLevel: Requestable isolation levels
"""

from sqlite_driver_adapter.domain.value_objects.column_types import (
    MAX_SAFE_INTEGER,
    ArgType,
    LogicalColumnType,
    is_wide_integer,
)
from sqlite_driver_adapter.domain.value_objects.transaction_types import (
    IsolationLevel,
    TransactionState,
)

__all__ = [
    # Column types
    "ArgType",
    "LogicalColumnType",
    "MAX_SAFE_INTEGER",
    "is_wide_integer",
    # Transaction types
    "IsolationLevel",
    "TransactionState",
]
