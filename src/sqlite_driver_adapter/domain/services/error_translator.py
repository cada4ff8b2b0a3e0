"""Translation of SQLite failures into the structured error taxonomy.

The translator is a pure function of the native ``(code, message)`` pair.
Constraint and lock failures are recognized by their (extended) result
code, missing tables and columns by their message text. Anything outside
the mapping is re-raised untouched.

References:
    - https://www.sqlite.org/rescode.html
"""

from __future__ import annotations

import re

from sqlite_driver_adapter.domain.entities import (
    ColumnNotFound,
    ErrorRecord,
    ForeignKeyConstraintViolation,
    NullConstraintViolation,
    SocketTimeout,
    TableDoesNotExist,
    UniqueConstraintViolation,
)
from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError


# Extended result codes, for engines that report numbers instead of names
_CODE_NAMES: dict[int, str] = {
    5: "SQLITE_BUSY",
    6: "SQLITE_LOCKED",
    19: "SQLITE_CONSTRAINT",
    261: "SQLITE_BUSY_RECOVERY",
    262: "SQLITE_LOCKED_SHAREDCACHE",
    517: "SQLITE_BUSY_SNAPSHOT",
    773: "SQLITE_BUSY_TIMEOUT",
    787: "SQLITE_CONSTRAINT_FOREIGNKEY",
    1299: "SQLITE_CONSTRAINT_NOTNULL",
    1555: "SQLITE_CONSTRAINT_PRIMARYKEY",
    2067: "SQLITE_CONSTRAINT_UNIQUE",
}

_UNIQUE_CODES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})
_NOT_NULL_CODE = "SQLITE_CONSTRAINT_NOTNULL"
_FOREIGN_KEY_CODE = "SQLITE_CONSTRAINT_FOREIGNKEY"
_BUSY_PREFIXES = ("SQLITE_BUSY", "SQLITE_LOCKED")

# A bare SQLITE_CONSTRAINT code is narrowed down by the message prefix
_CONSTRAINT_PREFIXES = (
    ("UNIQUE constraint failed", "SQLITE_CONSTRAINT_UNIQUE"),
    ("PRIMARY KEY constraint failed", "SQLITE_CONSTRAINT_PRIMARYKEY"),
    ("NOT NULL constraint failed", _NOT_NULL_CODE),
    ("FOREIGN KEY constraint failed", _FOREIGN_KEY_CODE),
)

_FIELDS_RE = re.compile(r"constraint failed:\s*(?P<fields>.+)$")
_NO_SUCH_TABLE_RE = re.compile(r"no such table:\s*(?P<table>\S+)")
_NO_SUCH_COLUMN_RE = re.compile(
    r"(?:no such column:|has no column named)\s*(?P<column>\S+)"
)


def normalize_code(code: str | int | None) -> str | None:
    """Return the symbolic SQLite code name for a name or a number."""
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return _CODE_NAMES.get(code)
    if isinstance(code, str) and code:
        return code.upper()
    return None


def extract_fields(message: str) -> tuple[str, ...]:
    """Extract column names from a ``... failed: table.col, table.col`` message.

    Example:
        >>> extract_fields("UNIQUE constraint failed: users.email, users.org")
        ('email', 'org')
    """
    match = _FIELDS_RE.search(message)
    if match is None:
        return ()
    fields = []
    for qualified in match.group("fields").split(","):
        name = qualified.strip().rsplit(".", 1)[-1]
        if name:
            fields.append(name)
    return tuple(fields)


def translate_error(code: str | int | None, message: str | None) -> ErrorRecord | None:
    """Map a native failure to a structured error record.

    Args:
        code: Symbolic (``SQLITE_CONSTRAINT_UNIQUE``) or numeric result code.
        message: The engine's error message.

    Returns:
        The error record, or None if the failure is not part of the taxonomy.
    """
    name = normalize_code(code)
    text = message if isinstance(message, str) else ""

    if name == "SQLITE_CONSTRAINT":
        for prefix, narrowed in _CONSTRAINT_PREFIXES:
            if text.startswith(prefix):
                name = narrowed
                break

    if name in _UNIQUE_CODES:
        return UniqueConstraintViolation(fields=extract_fields(text))
    if name == _NOT_NULL_CODE:
        return NullConstraintViolation(fields=extract_fields(text))
    if name == _FOREIGN_KEY_CODE:
        return ForeignKeyConstraintViolation()
    if name is not None and name.startswith(_BUSY_PREFIXES):
        return SocketTimeout()

    match = _NO_SUCH_TABLE_RE.search(text)
    if match is not None:
        return TableDoesNotExist(table=match.group("table"))

    match = _NO_SUCH_COLUMN_RE.search(text)
    if match is not None:
        return ColumnNotFound(column=match.group("column"))

    return None


def convert_engine_error(error: BaseException) -> ErrorRecord:
    """Translate an engine failure or re-raise it untranslated.

    Args:
        error: The failure raised by the storage engine.

    Returns:
        The structured error record.

    Raises:
        BaseException: ``error`` itself, when it is not an ``EngineError``
            or its code and message are outside the taxonomy.
    """
    if not isinstance(error, EngineError):
        raise error

    record = translate_error(error.code, error.message)
    if record is None:
        raise error
    return record
