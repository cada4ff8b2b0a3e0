"""Declared-type resolution.

Maps the type string a column was declared with in the schema to a
``LogicalColumnType``. SQLite accepts almost any declared type text, so
the string is normalized first: case is folded, length and precision
specifiers such as ``VARCHAR(255)`` or ``DECIMAL(10,2)`` are dropped, and
an ``UNSIGNED`` qualifier is removed but remembered.

``INT UNSIGNED`` and ``INTEGER UNSIGNED`` resolve to
UNKNOWN_NUMBER: an unsigned full-width integer cannot be guaranteed to fit
in 32 bits. Sub-word unsigned types (``TINYINT UNSIGNED`` and friends)
still fit and stay INT32.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlite_driver_adapter.domain.value_objects import LogicalColumnType


_SPECIFIER_RE = re.compile(r"\([^)]*\)")
_WHITESPACE_RE = re.compile(r"\s+")

_TYPE_MAP: dict[str, LogicalColumnType] = {
    # Text
    "TEXT": LogicalColumnType.TEXT,
    "VARCHAR": LogicalColumnType.TEXT,
    "CHAR": LogicalColumnType.TEXT,
    "CHARACTER": LogicalColumnType.TEXT,
    "NCHAR": LogicalColumnType.TEXT,
    "NVARCHAR": LogicalColumnType.TEXT,
    "CLOB": LogicalColumnType.TEXT,
    "VARYING CHARACTER": LogicalColumnType.TEXT,
    "CHARACTER VARYING": LogicalColumnType.TEXT,
    "NATIVE CHARACTER": LogicalColumnType.TEXT,
    # Integers that always fit in 32 bits
    "INT": LogicalColumnType.INT32,
    "INTEGER": LogicalColumnType.INT32,
    "TINYINT": LogicalColumnType.INT32,
    "SMALLINT": LogicalColumnType.INT32,
    "MEDIUMINT": LogicalColumnType.INT32,
    "INT2": LogicalColumnType.INT32,
    "INT4": LogicalColumnType.INT32,
    # 64-bit integers
    "BIGINT": LogicalColumnType.INT64,
    "INT8": LogicalColumnType.INT64,
    "BIG INT": LogicalColumnType.INT64,
    # Floating point
    "REAL": LogicalColumnType.DOUBLE,
    "DOUBLE": LogicalColumnType.DOUBLE,
    "DOUBLE PRECISION": LogicalColumnType.DOUBLE,
    "FLOAT": LogicalColumnType.FLOAT,
    # Exact numeric
    "NUMERIC": LogicalColumnType.NUMERIC,
    "DECIMAL": LogicalColumnType.NUMERIC,
    # Other
    "BOOLEAN": LogicalColumnType.BOOLEAN,
    "BOOL": LogicalColumnType.BOOLEAN,
    "DATE": LogicalColumnType.DATETIME,
    "DATETIME": LogicalColumnType.DATETIME,
    "TIMESTAMP": LogicalColumnType.DATETIME,
    "BLOB": LogicalColumnType.BYTES,
    "JSON": LogicalColumnType.JSON,
    "JSONB": LogicalColumnType.JSON,
}

# Full-width integer names that lose their 32-bit guarantee when unsigned
_FULL_WIDTH_INTEGERS = frozenset({"INT", "INTEGER"})


@dataclass(frozen=True, slots=True)
class ParsedDeclaredType:
    """A declared type string after normalization.

    Attributes:
        base: Upper-case type name without specifiers or UNSIGNED.
        unsigned: Whether the UNSIGNED qualifier was present.
    """

    base: str
    unsigned: bool = False


def parse_declared_type(declared: str | None) -> ParsedDeclaredType | None:
    """Normalize a declared type string.

    Args:
        declared: The raw declared type, or None.

    Returns:
        The parsed type, or None for a missing or blank declaration.

    Example:
        >>> parse_declared_type("tinyint(3) unsigned")
        ParsedDeclaredType(base='TINYINT', unsigned=True)
    """
    if declared is None:
        return None

    text = _SPECIFIER_RE.sub(" ", declared.upper())
    tokens = _WHITESPACE_RE.split(text.strip())
    unsigned = "UNSIGNED" in tokens
    base = " ".join(token for token in tokens if token and token != "UNSIGNED")

    if not base:
        return None
    return ParsedDeclaredType(base=base, unsigned=unsigned)


def resolve_declared_type(declared: str | None) -> LogicalColumnType | None:
    """Resolve a declared type string to a logical column type.

    Args:
        declared: The raw declared type, or None.

    Returns:
        The logical type, or None if the column is unresolved and must be
        typed from its values.
    """
    parsed = parse_declared_type(declared)
    if parsed is None:
        return None

    column_type = _TYPE_MAP.get(parsed.base)
    if column_type is None:
        return None

    if parsed.unsigned and parsed.base in _FULL_WIDTH_INTEGERS:
        return LogicalColumnType.UNKNOWN_NUMBER
    return column_type
