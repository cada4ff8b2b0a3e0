"""Pytest configuration and fixtures for sqlite_driver_adapter tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from sqlite_driver_adapter.adapters.outbound import SQLiteEngine
from sqlite_driver_adapter.application import SqliteDriverAdapter
from sqlite_driver_adapter.infrastructure.config import Config, DatabaseConfig
from sqlite_driver_adapter.infrastructure.metrics import AdapterMetrics


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration pointing at a temporary database file."""
    return Config(
        database=DatabaseConfig(
            url=f"file:{temp_dir / 'test.db'}",
            adapter_name="sqlite-test",
        ),
    )


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    """Provide a fresh Prometheus registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    return CollectorRegistry(auto_describe=True)


@pytest.fixture
def metrics(metrics_registry: CollectorRegistry) -> AdapterMetrics:
    """Provide adapter metrics bound to the per-test registry."""
    return AdapterMetrics(registry=metrics_registry)


@pytest.fixture
def engine() -> Generator[SQLiteEngine, None, None]:
    """Provide an in-memory SQLite engine with foreign keys enforced."""
    e = SQLiteEngine.open(":memory:")
    yield e
    e.close()


@pytest.fixture
def adapter(engine: SQLiteEngine, metrics: AdapterMetrics) -> SqliteDriverAdapter:
    """Provide an adapter over the in-memory engine."""
    return SqliteDriverAdapter(engine, adapter_name="sqlite-test", metrics=metrics)


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
