"""Query and result entities exchanged with the caller runtime and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlite_driver_adapter.domain.value_objects import ArgType, LogicalColumnType


RawRow = Sequence[Any]
"""Fixed-length tuple of raw engine values, consumed immediately by marshalling."""

MappedRow = list[Any]
"""Wire-ready row aligned 1:1 with the column type vector."""


@dataclass(frozen=True)
class Query:
    """A SQL statement with positional arguments and their type tags.

    Attributes:
        sql: The statement text.
        args: Positional argument values.
        arg_types: One tag per argument; missing tags bind the value unchanged.
    """

    sql: str
    args: Sequence[Any] = ()
    arg_types: Sequence[ArgType | str | None] = ()


@dataclass
class RawResultSet:
    """What the engine returns for a statement before marshalling.

    A statement that produces no columns is reported with empty
    ``column_names`` and is treated as non-row-returning.
    """

    column_names: list[str] = field(default_factory=list)
    declared_types: list[str | None] = field(default_factory=list)
    values: list[RawRow] = field(default_factory=list)

    @property
    def returns_rows(self) -> bool:
        """Return True if the statement produced a result shape."""
        return bool(self.column_names)


@dataclass
class ResultSet:
    """Marshalled result handed back to the caller runtime."""

    column_names: list[str]
    column_types: list[LogicalColumnType]
    rows: list[MappedRow]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class TransactionOptions:
    """Options reported to the caller for an open transaction."""

    use_phantom_query: bool = False
