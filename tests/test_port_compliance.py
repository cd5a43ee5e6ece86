"""Tests for port protocol compliance.

Verify that the bundled connection implementation satisfies the
ConnectionPort protocol the lifecycle tasks are written against.
"""

from dbtasks.application.ports.connection_port import ConnectionPort
from dbtasks.storage.database import SQLiteConnection


_CONNECTION_PORT_METHODS = ["connect", "disconnect", "reconnect", "encoding", "data_sources", "quote"]


def _has_port_methods(obj: object, method_names: list[str]) -> bool:
    """Check that *obj* has all required callable methods."""
    return all(callable(getattr(obj, name, None)) for name in method_names)


class TestSQLiteConnectionCompliance:
    def test_has_all_connection_port_methods(self, db_path):
        assert _has_port_methods(SQLiteConnection(db_path), _CONNECTION_PORT_METHODS)

    def test_isinstance_of_runtime_protocol(self, db_path):
        assert isinstance(SQLiteConnection(db_path), ConnectionPort)

    def test_active_is_bool(self, db_path):
        conn = SQLiteConnection(db_path)
        assert conn.active is False
        conn.connect()
        assert conn.active is True
        conn.disconnect()
