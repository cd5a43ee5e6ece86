"""Tests for the structure-dump ignore list."""

import re

from dbtasks.config import SchemaDumpConfig
from dbtasks.tasks.schema_dumper import SchemaDumper, pattern_matches


class TestPatternMatches:
    def test_string_is_exact(self):
        assert pattern_matches("users", "users")
        assert not pattern_matches("user", "users")

    def test_regex_matches_anywhere(self):
        assert pattern_matches(re.compile("tmp"), "old_tmp_data")
        assert pattern_matches(re.compile("^tmp_"), "tmp_data")
        assert not pattern_matches(re.compile("^tmp_"), "data_tmp_")


class TestSchemaDumper:
    def test_empty_by_default(self):
        assert SchemaDumper().ignore_tables == []
        assert SchemaDumper().ignored(["users"]) == []

    def test_ignored_keeps_source_order(self):
        dumper = SchemaDumper(["users", re.compile("^tmp_")])
        sources = ["accounts", "tmp_b", "users", "tmp_a"]
        assert dumper.ignored(sources) == ["tmp_b", "users", "tmp_a"]

    def test_table_matched_by_several_patterns_listed_once(self):
        dumper = SchemaDumper(["tmp_a", re.compile("tmp")])
        assert dumper.ignored(["tmp_a"]) == ["tmp_a"]

    def test_from_config(self):
        cfg = SchemaDumpConfig.from_dict({"ignore_tables": ["/^ar_/"]})
        dumper = SchemaDumper.from_config(cfg)
        assert dumper.ignored(["ar_internal_metadata", "posts"]) == ["ar_internal_metadata"]
