"""Structured error taxonomy surfaced to the caller runtime.

Every failure the adapter understands is described by exactly one
``ErrorRecord``: a kind tag plus the fields specific to that kind.
Records are built fresh for each failure and carried to the caller
inside a ``DriverAdapterError``.

Failures outside this closed set are never wrapped; they propagate
with their original diagnostics.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar


class ErrorKind(Enum):
    """Closed set of error kinds the adapter reports."""

    UNIQUE_CONSTRAINT_VIOLATION = "UniqueConstraintViolation"
    NULL_CONSTRAINT_VIOLATION = "NullConstraintViolation"
    FOREIGN_KEY_CONSTRAINT_VIOLATION = "ForeignKeyConstraintViolation"
    SOCKET_TIMEOUT = "SocketTimeout"
    TABLE_DOES_NOT_EXIST = "TableDoesNotExist"
    COLUMN_NOT_FOUND = "ColumnNotFound"
    TRANSACTION_ALREADY_CLOSED = "TransactionAlreadyClosed"
    INVALID_ISOLATION_LEVEL = "InvalidIsolationLevel"


@dataclass(frozen=True)
class ErrorRecord:
    """Base class for structured error records."""

    kind: ClassVar[ErrorKind]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary with the kind tag first."""
        data: dict[str, Any] = {"kind": self.kind.value}
        for key, value in asdict(self).items():
            data[key] = list(value) if isinstance(value, tuple) else value
        return data


@dataclass(frozen=True)
class UniqueConstraintViolation(ErrorRecord):
    """A UNIQUE or PRIMARY KEY constraint rejected a write."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNIQUE_CONSTRAINT_VIOLATION

    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class NullConstraintViolation(ErrorRecord):
    """A NOT NULL constraint rejected a write."""

    kind: ClassVar[ErrorKind] = ErrorKind.NULL_CONSTRAINT_VIOLATION

    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ForeignKeyConstraintViolation(ErrorRecord):
    """A FOREIGN KEY constraint rejected a write.

    SQLite does not name the offending key, so ``foreign_key`` is usually
    empty.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.FOREIGN_KEY_CONSTRAINT_VIOLATION

    foreign_key: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SocketTimeout(ErrorRecord):
    """The database was busy or locked by another connection."""

    kind: ClassVar[ErrorKind] = ErrorKind.SOCKET_TIMEOUT


@dataclass(frozen=True)
class TableDoesNotExist(ErrorRecord):
    """The statement referenced an unknown table."""

    kind: ClassVar[ErrorKind] = ErrorKind.TABLE_DOES_NOT_EXIST

    table: str | None = None


@dataclass(frozen=True)
class ColumnNotFound(ErrorRecord):
    """The statement referenced an unknown column."""

    kind: ClassVar[ErrorKind] = ErrorKind.COLUMN_NOT_FOUND

    column: str | None = None


@dataclass(frozen=True)
class TransactionAlreadyClosed(ErrorRecord):
    """A statement was issued on a committed or rolled-back transaction."""

    kind: ClassVar[ErrorKind] = ErrorKind.TRANSACTION_ALREADY_CLOSED

    cause: str = "Cannot execute query on a closed transaction."


@dataclass(frozen=True)
class InvalidIsolationLevel(ErrorRecord):
    """The requested isolation level is not supported by SQLite."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_ISOLATION_LEVEL

    level: str = ""


class DriverAdapterError(Exception):
    """Raised to the caller runtime with exactly one structured record."""

    def __init__(self, record: ErrorRecord) -> None:
        super().__init__(record.kind.value)
        self.record = record

    @property
    def kind(self) -> ErrorKind:
        """The kind tag of the carried record."""
        return self.record.kind
