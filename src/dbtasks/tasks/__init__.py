"""Database lifecycle tasks and the dispatcher that selects them."""

from .schema_dumper import SchemaDumper, pattern_matches
from .sqlite_database_tasks import SQLiteDatabaseTasks
from .database_tasks import DatabaseTasks

__all__ = [
    "SchemaDumper",
    "pattern_matches",
    "SQLiteDatabaseTasks",
    "DatabaseTasks",
]
