"""Infrastructure layer - cross-cutting concerns."""

from sqlite_driver_adapter.infrastructure.config import Config, get_config
from sqlite_driver_adapter.infrastructure.logging import (
    get_logger,
    get_null_logger,
    setup_logging,
    truncate_statements,
)
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics, setup_metrics
from sqlite_driver_adapter.infrastructure.tracing import (
    get_tracer,
    setup_tracing,
    statement_attributes,
    trace_span,
)

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "get_null_logger",
    "truncate_statements",
    "setup_metrics",
    "AdapterMetrics",
    "setup_tracing",
    "get_tracer",
    "statement_attributes",
    "trace_span",
]
