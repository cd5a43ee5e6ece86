"""Tests for the connection handler."""

import pytest

from dbtasks.config import DatabaseConfig
from dbtasks.core.errors import ConnectionNotEstablished
from dbtasks.storage.connection_handler import ConnectionHandler
from dbtasks.storage.database import SQLiteConnection


class TestConnectionHandler:
    def test_retrieve_without_establish_raises(self, handler, db_config):
        assert not handler.established(db_config)
        with pytest.raises(ConnectionNotEstablished):
            handler.retrieve_connection(db_config)

    def test_establish_is_lazy(self, handler, db_config, db_path):
        conn = handler.establish_connection(db_config)
        assert handler.established(db_config)
        assert not conn.active
        assert not handler.connected(db_config)
        assert not db_path.exists()

    def test_retrieve_opens_connection(self, handler, db_config, db_path):
        handler.establish_connection(db_config)
        conn = handler.retrieve_connection(db_config)
        assert conn.active
        assert handler.connected(db_config)
        assert db_path.exists()

    def test_retrieve_returns_same_connection(self, handler, db_config):
        handler.establish_connection(db_config)
        assert handler.retrieve_connection(db_config) is handler.retrieve_connection(db_config)

    def test_establish_replaces_and_closes_previous(self, handler, db_config):
        handler.establish_connection(db_config)
        first = handler.retrieve_connection(db_config)
        handler.establish_connection(db_config)
        second = handler.retrieve_connection(db_config)
        assert first is not second
        assert not first.active
        assert second.active

    def test_connections_keyed_by_env_and_name(self, handler, tmp_path):
        a = DatabaseConfig(database=str(tmp_path / "a.db"), env_name="test", name="primary")
        b = DatabaseConfig(database=str(tmp_path / "b.db"), env_name="test", name="cache")
        handler.establish_connection(a)
        handler.establish_connection(b)
        assert handler.retrieve_connection(a).db_path.name == "a.db"
        assert handler.retrieve_connection(b).db_path.name == "b.db"

    def test_disconnect_keeps_registration(self, handler, db_config):
        handler.establish_connection(db_config)
        handler.retrieve_connection(db_config)
        handler.disconnect(db_config)
        assert not handler.connected(db_config)
        assert handler.retrieve_connection(db_config).active

    def test_disconnect_unknown_is_noop(self, handler, db_config):
        handler.disconnect(db_config)

    def test_remove_connection(self, handler, db_config):
        handler.establish_connection(db_config)
        conn = handler.retrieve_connection(db_config)
        handler.remove_connection(db_config)
        assert not conn.active
        with pytest.raises(ConnectionNotEstablished):
            handler.retrieve_connection(db_config)

    def test_clear_all_connections(self, handler, db_config):
        handler.establish_connection(db_config)
        conn = handler.retrieve_connection(db_config)
        handler.clear_all_connections()
        assert not conn.active
        assert not handler.connected(db_config)

    def test_custom_factory(self, db_config):
        built = []

        def factory(cfg):
            built.append(cfg)
            return SQLiteConnection(cfg.database)

        handler = ConnectionHandler(factory=factory)
        handler.establish_connection(db_config)
        assert built == [db_config]
