"""Tests for custom variable collection and substitution."""

from unittest.mock import MagicMock

from aboutlibs.resources import DictResourceProvider
from aboutlibs.variables import collect_custom_variables, insert_variables


class TestInsertVariables:
    def test_replaces_uppercase_placeholder(self):
        assert insert_variables("<<<FOO>>> bar", {"foo": "X"}) == "X bar"

    def test_unmatched_placeholder_removed(self):
        assert insert_variables("<<<FOO>>>", {}) == ""

    def test_replaces_every_occurrence(self):
        text = "<<<OWNER>>> and <<<OWNER>>>"
        assert insert_variables(text, {"owner": "Square"}) == "Square and Square"

    def test_multiple_variables(self):
        text = "Copyright <<<YEAR>>> <<<OWNER>>>"
        result = insert_variables(text, {"owner": "Square, Inc.", "year": "2019"})
        assert result == "Copyright 2019 Square, Inc."

    def test_empty_value_treated_as_unmatched(self):
        assert insert_variables("a <<<YEAR>>> b", {"year": ""}) == "a  b"

    def test_lowercase_placeholder_not_matched(self):
        assert insert_variables("<<<foo>>>", {"foo": "X"}) == ""

    def test_stray_delimiters_stripped(self):
        assert insert_variables("a <<< b >>> c >>>", {}) == "a  b  c "
        assert insert_variables("open <<< only", {}) == "open  only"

    def test_stray_delimiter_keeps_following_text(self):
        text = "Use a <<< b shift.\nFull terms follow.\nCopyright <<<YEAR>>> Owner"
        assert insert_variables(text, {}) == "Use a  b shift.\nFull terms follow.\nCopyright  Owner"

    def test_plain_text_unchanged(self):
        assert insert_variables("Plain text", {"foo": "X"}) == "Plain text"

    def test_applied_in_sorted_key_order(self):
        # "a" runs before "b", so the token "a" produces is replaced by "b"
        result = insert_variables("<<<A>>>", {"b": "done", "a": "<<<B>>>"})
        assert result == "done"


class TestCollectCustomVariables:
    def test_external_manifest(self):
        resources = DictResourceProvider({
            "define_lib": "year;owner",
            "library_lib_year": "2020",
            "library_lib_owner": "Me",
        })
        assert collect_custom_variables(resources, "lib") == {"year": "2020", "owner": "Me"}

    def test_falls_back_to_internal_manifest(self, resources):
        assert collect_custom_variables(resources, "okhttp") == {
            "year": "2019",
            "owner": "Square, Inc.",
        }

    def test_external_manifest_takes_precedence(self):
        resources = DictResourceProvider({
            "define_lib": "a",
            "define_int_lib": "b",
            "library_lib_a": "1",
            "library_lib_b": "2",
        })
        assert collect_custom_variables(resources, "lib") == {"a": "1"}

    def test_empty_values_and_names_skipped(self):
        resources = DictResourceProvider({
            "define_lib": "year;;missing;",
            "library_lib_year": "2020",
            "library_lib_missing": "",
        })
        assert collect_custom_variables(resources, "lib") == {"year": "2020"}

    def test_no_manifest(self):
        provider = MagicMock()
        provider.get_string.return_value = ""
        assert collect_custom_variables(provider, "lib") == {}
        assert provider.get_string.call_count == 2
