"""Registry of established connections, keyed by database config.

Replaces a process-wide "current connection": each task object is handed
a handler and asks it for the connection belonging to its own config.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from dbtasks.application.ports.connection_port import ConnectionPort
from dbtasks.config import DatabaseConfig
from dbtasks.core.errors import ConnectionNotEstablished
from dbtasks.storage.database import SQLiteConnection

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[DatabaseConfig], ConnectionPort]


def _key(db_config: DatabaseConfig) -> Tuple[str, str]:
    return (db_config.env_name, db_config.name)


class ConnectionHandler:
    """Holds one connection per (environment, name) database config.

    Args:
        factory: Builds a connection object from a config. Defaults to
            :meth:`SQLiteConnection.from_config`.
    """

    def __init__(self, factory: Optional[ConnectionFactory] = None) -> None:
        self._factory = factory or SQLiteConnection.from_config
        self._connections: Dict[Tuple[str, str], ConnectionPort] = {}

    def establish_connection(self, db_config: DatabaseConfig) -> ConnectionPort:
        """Register a connection for *db_config*, replacing any previous one.

        The connection is not opened until it is first retrieved.
        """
        self.remove_connection(db_config)
        conn = self._factory(db_config)
        self._connections[_key(db_config)] = conn
        logger.debug("Established connection for %s.%s -> %s",
                     db_config.env_name, db_config.name, db_config.database)
        return conn

    def retrieve_connection(self, db_config: DatabaseConfig) -> ConnectionPort:
        """Return the opened connection for *db_config*.

        Raises:
            ConnectionNotEstablished: If *db_config* was never established.
        """
        conn = self._connections.get(_key(db_config))
        if conn is None:
            raise ConnectionNotEstablished(
                f"No connection established for {db_config.env_name}.{db_config.name}"
            )
        if not conn.active:
            conn.connect()
        return conn

    def established(self, db_config: DatabaseConfig) -> bool:
        return _key(db_config) in self._connections

    def connected(self, db_config: DatabaseConfig) -> bool:
        conn = self._connections.get(_key(db_config))
        return conn is not None and conn.active

    def disconnect(self, db_config: DatabaseConfig) -> None:
        """Close the connection for *db_config* without forgetting it."""
        conn = self._connections.get(_key(db_config))
        if conn is not None:
            conn.disconnect()

    def remove_connection(self, db_config: DatabaseConfig) -> None:
        conn = self._connections.pop(_key(db_config), None)
        if conn is not None:
            conn.disconnect()

    def clear_all_connections(self) -> None:
        for conn in self._connections.values():
            conn.disconnect()
        self._connections.clear()
