"""Tests for bindb.paths."""

import pytest

from bindb.paths import (
    Index,
    Key,
    get_path,
    has_path,
    parse_path,
    set_path,
    unset_path,
)


class TestParsePath:
    """Tests for the path tokenizer."""

    def test_single_key(self):
        """A plain name is one root key step."""
        assert parse_path("users") == (Key("users"),)

    def test_dotted(self):
        """Dots separate mapping keys."""
        assert parse_path("a.b.c") == (Key("a"), Key("b"), Key("c"))

    def test_bracket_indices(self):
        """Brackets after a name become index steps."""
        assert parse_path("users[1].profile.role") == (
            Key("users"),
            Index(1),
            Key("profile"),
            Key("role"),
        )

    def test_chained_indices(self):
        """Several bracket suffixes on one segment."""
        assert parse_path("grid[2][3]") == (Key("grid"), Index(2), Index(3))

    def test_leading_index(self):
        """A path can start with an index."""
        assert parse_path("[0].name") == (Index(0), Key("name"))

    def test_quoted_bracket_key(self):
        """Quoted bracket content is a mapping key."""
        assert parse_path("a['b.c']") == (Key("a"), Key("b.c"))
        assert parse_path('a["x"]') == (Key("a"), Key("x"))

    def test_non_numeric_bracket(self):
        """Unquoted non-numeric bracket content is a mapping key."""
        assert parse_path("a[b]") == (Key("a"), Key("b"))

    def test_negative_index_is_key(self):
        """Negative numbers are not indices."""
        assert parse_path("a[-1]") == (Key("a"), Key("-1"))

    def test_unclosed_bracket_is_literal(self):
        """An unclosed bracket stays in the key name."""
        assert parse_path("a[0") == (Key("a[0"),)
        assert parse_path("a.b[") == (Key("a"), Key("b["))

    def test_empty_segments(self):
        """Empty segments are empty keys."""
        assert parse_path("") == (Key(""),)
        assert parse_path("a..b") == (Key("a"), Key(""), Key("b"))
        assert parse_path("a.") == (Key("a"), Key(""))

    def test_name_after_bracket(self):
        """Text after a bracket starts a new key."""
        assert parse_path("a[0]b") == (Key("a"), Index(0), Key("b"))


class TestGetPath:
    """Tests for get_path and has_path."""

    @pytest.fixture
    def document(self):
        return {
            "users": [
                {"name": "ada", "profile": {"role": "admin"}},
                {"name": "bob", "profile": {"role": "user"}},
            ],
            "config": {"theme": "dark", "0": "zero"},
            "empty": None,
            "count": 5,
        }

    def test_root_key(self, document):
        """Root keys resolve directly."""
        assert get_path(document, "count") == 5

    def test_nested(self, document):
        """Mixed mapping and index traversal."""
        assert get_path(document, "users[1].profile.role") == "user"
        assert get_path(document, "config.theme") == "dark"

    def test_dot_digit_indexes_list(self):
        """A decimal key indexes into a list."""
        assert get_path({"a": [10, 20]}, "a.1") == 20

    def test_index_on_mapping_uses_string_key(self, document):
        """An index step on a mapping looks up its string form."""
        assert get_path(document, "config[0]") == "zero"

    def test_missing_returns_default(self, document):
        """Unresolvable paths return the default."""
        assert get_path(document, "nope") is None
        assert get_path(document, "nope", "fallback") == "fallback"
        assert get_path(document, "users[10].name", "x") == "x"
        assert get_path(document, "count.value", 0) == 0
        assert get_path(document, "users.name", "x") == "x"

    def test_stored_none_is_not_default(self, document):
        """A stored None is a value, not a miss."""
        assert get_path(document, "empty", "fallback") is None
        assert has_path(document, "empty") is True

    def test_has_path(self, document):
        """has_path reports presence."""
        assert has_path(document, "users[0].profile") is True
        assert has_path(document, "users[2]") is False
        assert has_path(document, "config.missing") is False
        assert has_path(document, "count.x") is False


class TestSetPath:
    """Tests for set_path."""

    def test_root_assignment(self):
        """A single-step path assigns the root key."""
        document = {}
        assert set_path(document, "a", [1, 2]) is True
        assert document == {"a": [1, 2]}

    def test_creates_mappings(self):
        """Missing intermediates become mappings."""
        document = {}
        set_path(document, "a.b.c", 5)
        assert document == {"a": {"b": {"c": 5}}}

    def test_creates_sequences_for_indices(self):
        """Missing intermediates before an index become padded lists."""
        document = {}
        set_path(document, "a.items[2].name", "x")
        assert document == {"a": {"items": [None, None, {"name": "x"}]}}

    def test_digit_key_creates_mapping(self):
        """Dotted digits create mappings, not lists."""
        document = {}
        set_path(document, "a.0", "x")
        assert document == {"a": {"0": "x"}}

    def test_extends_existing_list(self):
        """Indices past the end pad an existing list."""
        document = {"arr": [1]}
        set_path(document, "arr[3]", 4)
        assert document == {"arr": [1, None, None, 4]}

    def test_replaces_existing_element(self):
        """Indices in range replace in place."""
        document = {"arr": [1, 2, 3]}
        set_path(document, "arr[1]", 20)
        assert document == {"arr": [1, 20, 3]}

    def test_keeps_siblings(self):
        """Setting a nested key keeps sibling keys."""
        document = {"a": {"x": 1}}
        set_path(document, "a.y", 2)
        assert document == {"a": {"x": 1, "y": 2}}

    def test_replaces_scalar_intermediate(self):
        """A scalar in the middle of the path is replaced by a container."""
        document = {"a": 0}
        set_path(document, "a.b", 1)
        assert document == {"a": {"b": 1}}

    def test_non_integer_key_on_list_is_noop(self):
        """Addressing a list with a name fails without mutating."""
        document = {"arr": [{"x": 1}]}
        assert set_path(document, "arr.name.deep", 5) is False
        assert set_path(document, "arr.name", 5) is False
        assert document == {"arr": [{"x": 1}]}

    def test_into_list_element(self):
        """Paths descend into list elements."""
        document = {"users": [{"profile": {"age": 25}}]}
        set_path(document, "users[0].profile.age", 26)
        assert document["users"][0]["profile"]["age"] == 26


class TestUnsetPath:
    """Tests for unset_path."""

    def test_root_key(self):
        """Removes root keys."""
        document = {"a": 1, "b": 2}
        assert unset_path(document, "a") is True
        assert document == {"b": 2}

    def test_nested_key(self):
        """Removes nested keys and keeps the parent."""
        document = {"a": {"b": 1, "c": 2}}
        assert unset_path(document, "a.b") is True
        assert document == {"a": {"c": 2}}

    def test_list_element(self):
        """Removing a list element shifts later elements."""
        document = {"arr": [1, 2, 3]}
        assert unset_path(document, "arr[1]") is True
        assert document == {"arr": [1, 3]}

    def test_missing(self):
        """Missing paths report False and change nothing."""
        document = {"a": {"b": 1}, "arr": [1]}
        assert unset_path(document, "x") is False
        assert unset_path(document, "a.x") is False
        assert unset_path(document, "x.y") is False
        assert unset_path(document, "arr[5]") is False
        assert unset_path(document, "arr.name") is False
        assert document == {"a": {"b": 1}, "arr": [1]}
