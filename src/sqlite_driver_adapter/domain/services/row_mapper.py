"""Row marshalling from raw engine values to wire-ready values.

Conversion is driven by the column type vector computed for the query:

    - BYTES: buffers become lists of unsigned byte values
    - INT32 / INT64: fractional numbers truncate toward zero
    - INT64: engine integers become exact decimal strings
    - DATETIME: every supported input becomes ``YYYY-MM-DDTHH:MM:SS.sssZ``
    - wide integers (beyond 2**53 - 1) in any non-DATETIME column become
      exact decimal strings

Unparseable date strings are passed through untouched rather than raised.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from sqlite_driver_adapter.domain.entities import MappedRow, RawRow
from sqlite_driver_adapter.domain.value_objects import LogicalColumnType, is_wide_integer


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_datetime(value: datetime) -> str:
    """Format a datetime in the canonical UTC form with milliseconds."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def _from_epoch_millis(millis: int | float) -> datetime:
    if isinstance(millis, float):
        return _EPOCH + timedelta(milliseconds=millis)
    seconds, remainder = divmod(millis, 1000)
    return _EPOCH + timedelta(seconds=seconds, milliseconds=remainder)


def convert_datetime(value: Any) -> Any:
    """Convert a raw DATETIME column value to the canonical string.

    Accepts epoch milliseconds (int or float), ISO 8601 strings with or
    without an offset, and SQLite's ``YYYY-MM-DD HH:MM:SS`` form. Strings
    without an offset are taken as UTC. Anything that cannot be parsed is
    returned unchanged.
    """
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return value
        try:
            return format_datetime(_from_epoch_millis(value))
        except OverflowError:
            return value

    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return value
        return format_datetime(parsed)

    return value


def _truncate(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return value


def map_value(value: Any, column_type: LogicalColumnType) -> Any:
    """Convert one raw value according to its column type."""
    if value is None:
        return None

    if column_type == LogicalColumnType.DATETIME:
        return convert_datetime(value)

    if column_type == LogicalColumnType.BYTES:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return list(bytes(value))

    if column_type == LogicalColumnType.INT64:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return _truncate(value)

    if column_type == LogicalColumnType.INT32:
        value = _truncate(value)

    if is_wide_integer(value):
        return str(value)
    return value


def map_row(row: RawRow, column_types: Sequence[LogicalColumnType]) -> MappedRow:
    """Convert a raw row into a row aligned with the column type vector.

    Args:
        row: Raw engine values, one per column.
        column_types: The query's fixed type vector.

    Returns:
        The wire-ready row.
    """
    return [map_value(value, column_type) for value, column_type in zip(row, column_types)]
