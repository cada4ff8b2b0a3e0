"""Value-based type inference and column type unification.

SQLite often cannot report a declared type for a result column
(expressions, aggregates, joins). Those columns are typed by scanning
every materialized value. Each value is ranked and the column keeps the
highest rank it has seen, so a single disqualifying value promotes the
column and nothing ever demotes it again:

    null < number < text < wide integer < byte buffer

The unifier then merges declared and inferred types into one vector,
computed once per query before any row is mapped.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence

from sqlite_driver_adapter.domain.entities import RawRow
from sqlite_driver_adapter.domain.services.type_resolver import resolve_declared_type
from sqlite_driver_adapter.domain.value_objects import LogicalColumnType, is_wide_integer


class _ValueRank(IntEnum):
    NULL = 0
    NUMBER = 1
    TEXT = 2
    WIDE_INTEGER = 3
    BYTES = 4


_RANK_TO_TYPE = {
    _ValueRank.NULL: LogicalColumnType.INT32,
    _ValueRank.NUMBER: LogicalColumnType.UNKNOWN_NUMBER,
    _ValueRank.TEXT: LogicalColumnType.TEXT,
    _ValueRank.WIDE_INTEGER: LogicalColumnType.INT64,
    _ValueRank.BYTES: LogicalColumnType.BYTES,
}


def _rank(value: Any) -> _ValueRank:
    if value is None:
        return _ValueRank.NULL
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _ValueRank.BYTES
    if is_wide_integer(value):
        return _ValueRank.WIDE_INTEGER
    if isinstance(value, (int, float)):
        return _ValueRank.NUMBER
    return _ValueRank.TEXT


def infer_column_type(rows: Sequence[RawRow], index: int) -> LogicalColumnType:
    """Infer the type of one column from all of its values.

    Args:
        rows: Every materialized row of the result.
        index: Position of the column within each row.

    Returns:
        The inferred type. A column with no rows or only nulls is INT32.
    """
    rank = _ValueRank.NULL
    for row in rows:
        value_rank = _rank(row[index])
        if value_rank > rank:
            rank = value_rank
            if rank == _ValueRank.BYTES:
                break
    return _RANK_TO_TYPE[rank]


def get_column_types(
    column_names: Sequence[str],
    declared_types: Sequence[str | None],
    rows: Sequence[RawRow],
) -> list[LogicalColumnType]:
    """Compute the fixed type vector for a query result.

    A declared type that resolves always wins; inference only runs for
    the unresolved columns.

    Args:
        column_names: Result column names. Empty for non-row-returning
            statements, which yield an empty vector.
        declared_types: Declared type per column; may be shorter than
            ``column_names``, missing entries count as None.
        rows: All materialized rows.

    Returns:
        One logical type per column.
    """
    column_types: list[LogicalColumnType] = []
    for index in range(len(column_names)):
        declared = declared_types[index] if index < len(declared_types) else None
        resolved = resolve_declared_type(declared)
        if resolved is None:
            resolved = infer_column_type(rows, index)
        column_types.append(resolved)
    return column_types
