"""Transaction-related types and enumerations.

These types define the lifecycle states of a transaction session and the
isolation levels a caller may request when starting one.
"""

from __future__ import annotations

from enum import Enum


class TransactionState(Enum):
    """Transaction session lifecycle states.

    State machine:

        begin() ──> ACTIVE
                      │
             ┌────────┴────────┐
             │                 │
         commit()          rollback()
             │                 │
             v                 v
         COMMITTED        ROLLED_BACK

    A failed native COMMIT also lands in ROLLED_BACK. Transitions are
    monotone: once a session leaves ACTIVE it never returns.
    """

    ACTIVE = "active"
    """Transaction is open and can execute statements."""

    COMMITTED = "committed"
    """Transaction has been committed."""

    ROLLED_BACK = "rolled_back"
    """Transaction has been rolled back, explicitly or by a failed commit."""

    def is_terminal(self) -> bool:
        """Check if this is a terminal state (COMMITTED or ROLLED_BACK)."""
        return self in (TransactionState.COMMITTED, TransactionState.ROLLED_BACK)

    def is_active(self) -> bool:
        """Check if the session can still execute statements."""
        return self == TransactionState.ACTIVE


class IsolationLevel(Enum):
    """Transaction isolation levels a caller may request.

    SQLite runs every write transaction serially against a single writer,
    so SERIALIZABLE is the only level the adapter can honour. The other
    members exist so that requests for them can be rejected with a
    structured error instead of a lookup failure.
    """

    READ_UNCOMMITTED = "READ_UNCOMMITTED"
    READ_COMMITTED = "READ_COMMITTED"
    REPEATABLE_READ = "REPEATABLE_READ"
    SNAPSHOT = "SNAPSHOT"
    SERIALIZABLE = "SERIALIZABLE"
