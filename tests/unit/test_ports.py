"""Unit tests checking the adapter classes against their ports."""

from __future__ import annotations

from typing import Protocol

import pytest

from sqlite_driver_adapter.adapters.outbound import SQLiteEngine
from sqlite_driver_adapter.application import SqliteDriverAdapter, SqliteQueryable, SqliteTransaction
from sqlite_driver_adapter.ports.inbound import SqlDriverAdapter, SqlQueryable, Transaction
from sqlite_driver_adapter.ports.outbound import StorageEngine


def protocol_members(protocol: type) -> set[str]:
    """Collect the methods and attributes a protocol declares."""
    members: set[str] = set()
    for cls in protocol.__mro__:
        if cls in (Protocol, object) or not getattr(cls, "_is_protocol", False):
            continue
        members.update(getattr(cls, "__annotations__", {}))
        members.update(
            name
            for name, value in vars(cls).items()
            if getattr(value, "__isabstractmethod__", False)
        )
    return members


@pytest.mark.unit
class TestPortConformance:
    """Each implementation provides every member of its port."""

    @pytest.mark.parametrize(
        "implementation,port",
        [
            (SqliteQueryable, SqlQueryable),
            (SqliteTransaction, Transaction),
            (SqliteDriverAdapter, SqlDriverAdapter),
            (SQLiteEngine, StorageEngine),
        ],
    )
    def test_members(self, implementation: type, port: type) -> None:
        """Methods and properties are present on the class."""
        instance_attributes = {"adapter_name", "options"}
        missing = {
            name
            for name in protocol_members(port)
            if not hasattr(implementation, name) and name not in instance_attributes
        }

        assert missing == set()

    def test_ports_declare_members(self) -> None:
        """The transaction port extends the queryable port."""
        assert {"query_raw", "execute_raw", "commit", "rollback"} <= protocol_members(Transaction)
        assert {"execute_script", "start_transaction", "dispose"} <= protocol_members(SqlDriverAdapter)
