"""Outbound ports - dependencies on external systems.

The adapter depends on exactly one external system: the embedded
storage engine it drives.
"""

from sqlite_driver_adapter.ports.outbound.storage_engine import EngineError, StorageEngine

__all__ = [
    "EngineError",
    "StorageEngine",
]
