# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""SQLite connection manager used by the lifecycle tasks."""

import re
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from dbtasks.config import DatabaseConfig
from dbtasks.core.errors import ConnectionNotEstablished


_PRAGMA_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_DATA_SOURCES_SQL = """\
SELECT name FROM sqlite_master
WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
ORDER BY name
"""


class SQLiteConnection:
    """Lazily opened SQLite connection for one database file."""

    def __init__(
        self,
        database: str | Path,
        timeout: float = 5.0,
        pragmas: Optional[Dict[str, Any]] = None,
    ):
        self.db_path = Path(database)
        self.timeout = timeout
        self.pragmas = dict(pragmas or {})
        self._conn: Optional[sqlite3.Connection] = None

    @classmethod
    def from_config(cls, db_config: DatabaseConfig) -> "SQLiteConnection":
        return cls(db_config.database, timeout=db_config.timeout, pragmas=db_config.pragmas)

    @property
    def active(self) -> bool:
        return self._conn is not None

    def connect(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self.db_path),
                timeout=self.timeout,
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            for name, value in self.pragmas.items():
                if not _PRAGMA_NAME.match(name):
                    conn.close()
                    raise ValueError(f"Invalid pragma name: {name!r}")
                conn.execute(f"PRAGMA {name}={self.quote(value)}")
            self._conn = conn
        return self._conn

    def disconnect(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def reconnect(self) -> None:
        """Close the current connection and open a fresh one."""
        self.disconnect()
        self.connect()

    def _require_active(self) -> sqlite3.Connection:
        if self._conn is None:
            raise ConnectionNotEstablished(
                f"No active connection to {self.db_path}"
            )
        return self._conn

    def encoding(self) -> str:
        """Return the text encoding of the open database."""
        row = self._require_active().execute("PRAGMA encoding").fetchone()
        return row[0]

    def data_sources(self) -> List[str]:
        """List user tables and views, excluding sqlite internals."""
        rows = self.connect().execute(_DATA_SOURCES_SQL).fetchall()
        return [r["name"] for r in rows]

    @staticmethod
    def quote(value: Any) -> str:
        """Render *value* as an SQLite literal."""
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (int, float)):
            return repr(value)
        if isinstance(value, (bytes, bytearray)):
            return f"X'{bytes(value).hex()}'"
        text = str(value).replace("'", "''")
        return f"'{text}'"

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a single SQL statement and commit."""
        conn = self.connect()
        cursor = conn.execute(sql, params)
        conn.commit()
        return cursor

    def executemany(self, sql: str, params_list: List[tuple]) -> None:
        """Execute a SQL statement for each set of params and commit."""
        conn = self.connect()
        conn.executemany(sql, params_list)
        conn.commit()

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        """Execute and return a single row."""
        return self.connect().execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        """Execute and return all rows."""
        return self.connect().execute(sql, params).fetchall()

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"SQLiteConnection({str(self.db_path)!r}, {state})"
