"""Logical column and argument types.

The caller runtime works with a static column-type model while SQLite is
dynamically typed. Every result column is assigned exactly one
``LogicalColumnType`` per query, and every bound argument carries an
``ArgType`` tag telling the argument marshaller how to encode it.
"""

from __future__ import annotations

from enum import Enum


MAX_SAFE_INTEGER = 2**53 - 1
"""Largest integer a 64-bit float represents exactly."""


class LogicalColumnType(Enum):
    """Unified type assigned to a result column for one query's lifetime."""

    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT = "Float"
    DOUBLE = "Double"
    NUMERIC = "Numeric"
    TEXT = "Text"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    BYTES = "Bytes"
    JSON = "Json"
    UNKNOWN_NUMBER = "UnknownNumber"

    def is_integer(self) -> bool:
        """Check if values of this type are truncated to integers."""
        return self in (LogicalColumnType.INT32, LogicalColumnType.INT64)


class ArgType(Enum):
    """Logical-type tag attached to a bound query argument."""

    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT = "Float"
    DOUBLE = "Double"
    NUMERIC = "Numeric"
    TEXT = "Text"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    BYTES = "Bytes"
    JSON = "Json"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, tag: ArgType | str | None) -> ArgType:
        """Normalize a tag given as a member, its value or its name.

        Unrecognized or missing tags map to ``UNKNOWN`` so that the value
        is bound unchanged.
        """
        if isinstance(tag, ArgType):
            return tag
        if not isinstance(tag, str):
            return cls.UNKNOWN
        try:
            return cls(tag)
        except ValueError:
            pass
        return cls.__members__.get(tag.upper(), cls.UNKNOWN)


def is_wide_integer(value: object) -> bool:
    """Check if a value is an engine integer outside the safe 53-bit range."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and abs(value) > MAX_SAFE_INTEGER
    )
