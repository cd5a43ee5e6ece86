"""Adapter-agnostic dispatcher for database lifecycle tasks.

Maps a config's ``adapter`` name to a task class and runs the requested
operation through it, reporting outcomes through logging.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Type, Union

from dbtasks.config import DatabaseConfig, Flags, TasksConfig, default_root
from dbtasks.core.errors import (
    AdapterNotSupported,
    DatabaseAlreadyExists,
    NoDatabaseError,
)
from dbtasks.storage.connection_handler import ConnectionHandler
from dbtasks.tasks.schema_dumper import SchemaDumper
from dbtasks.tasks.sqlite_database_tasks import SQLiteDatabaseTasks

logger = logging.getLogger(__name__)


class DatabaseTasks:
    """Runs lifecycle tasks for any registered database adapter.

    Args:
        root: Directory relative database paths are resolved against.
        connection_handler: Shared handler for every task object created.
        schema_dumper: Ignore list used by structure dumps.
        structure_dump_flags: Extra dump flags, a list for every adapter
            or a dict keyed by adapter name.
        structure_load_flags: Extra load flags, same shape as above.
    """

    def __init__(
        self,
        root: Optional[str | Path] = None,
        connection_handler: Optional[ConnectionHandler] = None,
        schema_dumper: Optional[SchemaDumper] = None,
        structure_dump_flags: Flags = None,
        structure_load_flags: Flags = None,
    ) -> None:
        self.root = Path(root) if root is not None else default_root()
        self.connection_handler = connection_handler or ConnectionHandler()
        self.schema_dumper = schema_dumper or SchemaDumper()
        self.structure_dump_flags = structure_dump_flags
        self.structure_load_flags = structure_load_flags
        self._tasks: List[Tuple[re.Pattern, Type[SQLiteDatabaseTasks]]] = []
        self.register_task(r"sqlite", SQLiteDatabaseTasks)

    @classmethod
    def from_config(cls, config: TasksConfig) -> "DatabaseTasks":
        return cls(
            root=config.root,
            schema_dumper=SchemaDumper.from_config(config.schema_dump),
            structure_dump_flags=config.structure_dump_flags,
            structure_load_flags=config.structure_load_flags,
        )

    def register_task(self, pattern: Union[str, re.Pattern], task_class: type) -> None:
        """Register *task_class* for adapters whose name matches *pattern*."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._tasks.append((pattern, task_class))

    def class_for_adapter(self, adapter: str) -> type:
        """Return the most recently registered task class for *adapter*.

        Raises:
            AdapterNotSupported: If no registered pattern matches.
        """
        for pattern, task_class in reversed(self._tasks):
            if pattern.search(adapter):
                return task_class
        raise AdapterNotSupported(f"Database adapter {adapter!r} not supported")

    def database_adapter_for(self, db_config: DatabaseConfig) -> SQLiteDatabaseTasks:
        task_class = self.class_for_adapter(db_config.adapter)
        return task_class(
            db_config,
            self.root,
            connection_handler=self.connection_handler,
            schema_dumper=self.schema_dumper,
        )

    def create(self, db_config: DatabaseConfig) -> None:
        """Create a database; an existing one is reported, not raised."""
        try:
            self.database_adapter_for(db_config).create()
        except DatabaseAlreadyExists:
            logger.warning("Database '%s' already exists", db_config.database)
        except Exception as exc:
            logger.error("Couldn't create '%s' database: %s", db_config.database, exc)
            raise
        else:
            logger.info("Created database '%s'", db_config.database)

    def create_all(self, configs: List[DatabaseConfig]) -> None:
        for db_config in configs:
            self.create(db_config)

    def drop(self, db_config: DatabaseConfig) -> None:
        """Drop a database; a missing one is reported, not raised."""
        try:
            self.database_adapter_for(db_config).drop()
        except NoDatabaseError:
            logger.warning("Database '%s' does not exist", db_config.database)
        except Exception as exc:
            logger.error("Couldn't drop database '%s': %s", db_config.database, exc)
            raise
        else:
            logger.info("Dropped database '%s'", db_config.database)

    def drop_all(self, configs: List[DatabaseConfig]) -> None:
        for db_config in configs:
            self.drop(db_config)

    def purge(self, db_config: DatabaseConfig) -> None:
        self.database_adapter_for(db_config).purge()
        logger.info("Purged database '%s'", db_config.database)

    def charset(self, db_config: DatabaseConfig) -> str:
        return self.database_adapter_for(db_config).charset()

    @staticmethod
    def _flags_for(flags: Flags, adapter: str) -> Optional[List[str]]:
        if isinstance(flags, dict):
            return flags.get(adapter)
        return flags

    def structure_dump(self, db_config: DatabaseConfig, filename: str | Path) -> None:
        flags = self._flags_for(self.structure_dump_flags, db_config.adapter)
        self.database_adapter_for(db_config).structure_dump(filename, flags)

    def structure_load(self, db_config: DatabaseConfig, filename: str | Path) -> None:
        flags = self._flags_for(self.structure_load_flags, db_config.adapter)
        self.database_adapter_for(db_config).structure_load(filename, flags)
