"""Connection port: interface the lifecycle tasks need from a connection.

Any connection implementation (the bundled SQLite one, an ORM wrapper,
a test double) must implement this Protocol to be driven by the tasks.
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class ConnectionPort(Protocol):
    """Protocol for a live database connection handle."""

    @property
    def active(self) -> bool:
        """Whether the underlying connection is currently open."""
        ...

    def connect(self) -> Any:
        """Open the underlying connection if it is not already open."""
        ...

    def disconnect(self) -> None:
        """Close the underlying connection if it is open."""
        ...

    def reconnect(self) -> None:
        """Close and reopen the underlying connection."""
        ...

    def encoding(self) -> str:
        """Return the database text encoding.

        Returns:
            Encoding name as reported by the database, e.g. ``"UTF-8"``.
        """
        ...

    def data_sources(self) -> List[str]:
        """List the table and view names visible through the connection.

        Returns:
            Names of user tables and views.
        """
        ...

    def quote(self, value: Any) -> str:
        """Render a value as an SQL literal.

        Args:
            value: Python value to quote.

        Returns:
            SQL literal text safe to splice into a statement.
        """
        ...
