"""Domain services for the column-type and marshalling pipeline.

Services are pure functions over values: they never touch the engine.
Together they turn declared types and raw rows into a typed result and
caller arguments into engine-native values, and they translate engine
failures into structured errors.
"""

from sqlite_driver_adapter.domain.services.arg_mapper import map_arg, map_query_args
from sqlite_driver_adapter.domain.services.error_translator import (
    convert_engine_error,
    extract_fields,
    translate_error,
)
from sqlite_driver_adapter.domain.services.row_mapper import (
    convert_datetime,
    format_datetime,
    map_row,
    map_value,
)
from sqlite_driver_adapter.domain.services.type_inference import (
    get_column_types,
    infer_column_type,
)
from sqlite_driver_adapter.domain.services.type_resolver import (
    ParsedDeclaredType,
    parse_declared_type,
    resolve_declared_type,
)

__all__ = [
    "ParsedDeclaredType",
    "convert_datetime",
    "convert_engine_error",
    "extract_fields",
    "format_datetime",
    "get_column_types",
    "infer_column_type",
    "map_arg",
    "map_query_args",
    "map_row",
    "map_value",
    "parse_declared_type",
    "resolve_declared_type",
    "translate_error",
]
