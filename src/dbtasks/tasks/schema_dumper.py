"""Table ignore list consulted when dumping a database structure."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from dbtasks.config import IgnorePattern, SchemaDumpConfig


def pattern_matches(pattern: IgnorePattern, table: str) -> bool:
    """Check whether an ignore pattern matches a table name.

    Plain strings must equal the name; compiled expressions match
    anywhere in it.
    """
    if isinstance(pattern, re.Pattern):
        return pattern.search(table) is not None
    return pattern == table


class SchemaDumper:
    """Holds the ignore patterns for structure dumps.

    Args:
        ignore_tables: Table names or compiled regular expressions.
    """

    def __init__(self, ignore_tables: Optional[Iterable[IgnorePattern]] = None) -> None:
        self.ignore_tables: List[IgnorePattern] = list(ignore_tables or [])

    @classmethod
    def from_config(cls, config: SchemaDumpConfig) -> "SchemaDumper":
        return cls(config.ignore_tables)

    def ignored(self, data_sources: Iterable[str]) -> List[str]:
        """Return the data sources matched by any ignore pattern, in order."""
        return [
            table
            for table in data_sources
            if any(pattern_matches(p, table) for p in self.ignore_tables)
        ]
