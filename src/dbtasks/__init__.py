"""
dbtasks: lifecycle tasks for file-backed SQLite databases.

Create, drop, purge, and dump or load the schema of a SQLite database,
using the ``sqlite3`` command-line tool for structure dumps.
"""

from .core import (
    DatabaseTasksError,
    DatabaseAlreadyExists,
    NoDatabaseError,
    ConnectionNotEstablished,
    AdapterNotSupported,
    CommandFailed,
)
from .config import (
    DatabaseConfig,
    SchemaDumpConfig,
    LoggingConfig,
    TasksConfig,
    get_default_config,
    set_default_config,
)
from .application import ConnectionPort
from .storage import SQLiteConnection, ConnectionHandler
from .tasks import SchemaDumper, SQLiteDatabaseTasks, DatabaseTasks

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "DatabaseConfig",
    "SchemaDumpConfig",
    "LoggingConfig",
    "TasksConfig",
    "get_default_config",
    "set_default_config",
    # Errors
    "DatabaseTasksError",
    "DatabaseAlreadyExists",
    "NoDatabaseError",
    "ConnectionNotEstablished",
    "AdapterNotSupported",
    "CommandFailed",
    # Connections
    "ConnectionPort",
    "SQLiteConnection",
    "ConnectionHandler",
    # Tasks
    "SchemaDumper",
    "SQLiteDatabaseTasks",
    "DatabaseTasks",
]
