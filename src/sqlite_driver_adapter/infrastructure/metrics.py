"""Prometheus metrics for the SQLite driver adapter."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class AdapterMetrics:
    """Registry of all driver adapter metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Query metrics
        self.queries_total = Counter(
            "sqlite_adapter_queries_total",
            "Total number of statements executed",
            ["operation", "status"],  # operation: query, execute, script
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "sqlite_adapter_query_latency_seconds",
            "Statement latency in seconds",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        # Transaction metrics
        self.transactions_total = Counter(
            "sqlite_adapter_transactions_total",
            "Total number of finished transactions",
            ["status"],  # committed, rolled_back
            registry=self._registry,
        )

        self.transactions_active = Gauge(
            "sqlite_adapter_transactions_active",
            "Number of open transactions",
            registry=self._registry,
        )

        # Lock metrics
        self.lock_wait_seconds = Histogram(
            "sqlite_adapter_lock_wait_seconds",
            "Time spent waiting for the connection transaction lock",
            buckets=(0.001, 0.01, 0.1, 0.5, 1.0, 5.0, 10.0),
            registry=self._registry,
        )

        # Error metrics
        self.errors_total = Counter(
            "sqlite_adapter_errors_total",
            "Total number of translated errors",
            ["kind"],
            registry=self._registry,
        )

        # Adapter info
        self.info = Info(
            "sqlite_adapter",
            "SQLite driver adapter information",
            registry=self._registry,
        )


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> AdapterMetrics:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry to inject into adapters
    """
    metrics = AdapterMetrics(registry)

    from sqlite_driver_adapter import __version__
    metrics.info.info({
        "version": __version__,
    })

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=registry or REGISTRY)

    return metrics
