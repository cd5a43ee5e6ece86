"""Lifecycle tasks for a file-backed SQLite database.

Creates, drops, purges, and dumps/loads the structure of one database
described by a :class:`~dbtasks.config.DatabaseConfig`. Schema dump and
load shell out to the ``sqlite3`` command-line tool.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dbtasks.application.ports.connection_port import ConnectionPort
from dbtasks.config import DatabaseConfig, default_root
from dbtasks.core.errors import DatabaseAlreadyExists, NoDatabaseError
from dbtasks.storage.connection_handler import ConnectionHandler
from dbtasks.tasks.commands import ExtraFlags, normalize_flags, run_cmd
from dbtasks.tasks.schema_dumper import SchemaDumper

logger = logging.getLogger(__name__)

SQLITE_CMD = "sqlite3"

_FILTERED_SCHEMA_SQL = (
    "SELECT sql FROM sqlite_master WHERE tbl_name NOT IN ({condition}) "
    "ORDER BY tbl_name, type DESC, name"
)


class SQLiteDatabaseTasks:
    """Database lifecycle operations for one SQLite config.

    Args:
        db_config: Database to operate on.
        root: Directory that relative database paths are resolved against
            when dropping. Defaults to the configured root, then the
            current working directory.
        connection_handler: Handler that owns the connection for
            *db_config*. A private handler is created when omitted.
        schema_dumper: Source of table ignore patterns for structure dumps.
    """

    @classmethod
    def using_database_configurations(cls) -> bool:
        return True

    def __init__(
        self,
        db_config: DatabaseConfig,
        root: Optional[str | Path] = None,
        connection_handler: Optional[ConnectionHandler] = None,
        schema_dumper: Optional[SchemaDumper] = None,
    ) -> None:
        self._db_config = db_config
        self._root = Path(root) if root is not None else default_root()
        self._handler = connection_handler or ConnectionHandler()
        self._schema_dumper = schema_dumper or SchemaDumper()

    @property
    def db_config(self) -> DatabaseConfig:
        return self._db_config

    @property
    def root(self) -> Path:
        return self._root

    def establish_connection(self) -> ConnectionPort:
        return self._handler.establish_connection(self._db_config)

    @property
    def connection(self) -> ConnectionPort:
        return self._handler.retrieve_connection(self._db_config)

    def create(self) -> ConnectionPort:
        """Create the database by connecting to it.

        Raises:
            DatabaseAlreadyExists: If the database file is already present.
        """
        if os.path.exists(self._db_config.database):
            raise DatabaseAlreadyExists(self._db_config.database)

        self.establish_connection()
        return self.connection

    def database_path(self) -> Path:
        """Database file path, with relative paths joined to the root."""
        path = Path(self._db_config.database)
        return path if path.is_absolute() else self._root / path

    def drop(self) -> None:
        """Delete the database file.

        Raises:
            NoDatabaseError: If the file does not exist.
        """
        path = self.database_path()
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NoDatabaseError(str(exc)) from exc
        logger.debug("Removed %s", path)

    def purge(self) -> None:
        """Drop and recreate the database, leaving it connected.

        A missing database is not an error. The recreate step always runs
        and any error it raises is what the caller sees.
        """
        try:
            self.drop()
            self._handler.disconnect(self._db_config)
        except NoDatabaseError:
            logger.debug("Nothing to drop at %s", self._db_config.database)
        finally:
            self.create()
            self.connection.reconnect()

    def charset(self) -> str:
        return self.connection.encoding()

    def structure_dump(self, filename: str | Path, extra_flags: ExtraFlags = None) -> None:
        """Write the database schema to *filename* using ``sqlite3``.

        Tables matched by the schema dumper's ignore patterns are left out.

        Raises:
            NoDatabaseError: If ignore patterns are set and the database
                file does not exist.
            CommandFailed: If ``sqlite3`` fails or cannot be started.
        """
        args = normalize_flags(extra_flags)
        args.append(self._db_config.database)

        if self._schema_dumper.ignore_tables:
            # Listing tables needs a connection, which would create the file
            if not os.path.exists(self._db_config.database):
                raise NoDatabaseError(self._db_config.database)
            if not self._handler.established(self._db_config):
                self.establish_connection()
            conn = self.connection
            ignored = self._schema_dumper.ignored(conn.data_sources())
            condition = ", ".join(conn.quote(table) for table in ignored)
            args.append(_FILTERED_SCHEMA_SQL.format(condition=condition))
        else:
            args.append(".schema")

        run_cmd(SQLITE_CMD, args, stdout_path=str(filename))
        logger.info("Dumped structure of %s to %s", self._db_config.database, filename)

    def structure_load(self, filename: str | Path, extra_flags: ExtraFlags = None) -> None:
        """Feed the SQL in *filename* to ``sqlite3`` against the database.

        Raises:
            CommandFailed: If ``sqlite3`` fails or cannot be started.
        """
        args = normalize_flags(extra_flags)
        args.append(self._db_config.database)

        run_cmd(SQLITE_CMD, args, stdin_path=str(filename))
        logger.info("Loaded structure from %s into %s", filename, self._db_config.database)
