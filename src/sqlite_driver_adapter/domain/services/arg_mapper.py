"""Argument marshalling from tagged caller values to SQLite-native values."""

from __future__ import annotations

import json
import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from sqlite_driver_adapter.domain.value_objects import ArgType


# SQLite's own DATETIME text form: no offset, no fractional seconds
ENGINE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_TRUE_STRINGS = frozenset({"true", "1", "t", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "f", "no"})


def _to_int(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else value
    if isinstance(value, (str, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            pass
        try:
            return int(Decimal(value.strip() if isinstance(value, str) else value))
        except (InvalidOperation, ValueError, OverflowError):
            return value
    return value


def _to_float(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    if isinstance(value, Decimal):
        return float(value)
    return value


def _to_flag(value: Any) -> Any:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return 1
        if lowered in _FALSE_STRINGS:
            return 0
        return value
    return 1 if value else 0


def _to_engine_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(ENGINE_DATETIME_FORMAT)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).strftime(ENGINE_DATETIME_FORMAT)
    return value


def map_arg(value: Any, tag: ArgType | str | None) -> Any:
    """Convert one argument to the value bound to the engine.

    Args:
        value: The caller's value.
        tag: Its logical-type tag.

    Returns:
        The engine-native value. Nulls and values the tag does not apply
        to are returned unchanged.
    """
    if value is None:
        return None

    arg_type = ArgType.parse(tag)

    if arg_type in (ArgType.INT32, ArgType.INT64):
        return _to_int(value)
    if arg_type in (ArgType.FLOAT, ArgType.DOUBLE):
        return _to_float(value)
    if arg_type == ArgType.BOOLEAN:
        return _to_flag(value)
    if arg_type == ArgType.DATETIME:
        return _to_engine_datetime(value)
    if arg_type == ArgType.BYTES:
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value
    if arg_type == ArgType.NUMERIC and isinstance(value, Decimal):
        return str(value)
    if arg_type == ArgType.JSON and not isinstance(value, (str, bytes)):
        return json.dumps(value)
    return value


def map_query_args(
    args: Sequence[Any], arg_types: Sequence[ArgType | str | None]
) -> list[Any]:
    """Convert all positional arguments of a query.

    Arguments without a matching tag are bound unchanged.
    """
    return [
        map_arg(value, arg_types[index] if index < len(arg_types) else None)
        for index, value in enumerate(args)
    ]
