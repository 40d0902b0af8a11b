"""Nested query decoding tests."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from signed_query import (
    ErrorCode,
    PayloadConflictError,
    from_query,
    insert_at_path,
    parse_key,
    to_query,
)


class TestParseKey:

    def test_bare_name(self):
        assert parse_key("timestamp") == ["timestamp"]

    def test_bracket_groups(self):
        assert parse_key("a[b][][c]") == ["a", "b", None, "c"]

    def test_trailing_sequence(self):
        assert parse_key("tags[]") == ["tags", None]

    def test_malformed_key_is_literal(self):
        assert parse_key("a[b") == ["a[b"]
        assert parse_key("[]") == ["[]"]


class TestFromQuery:
    """Test rebuilding nested structures from query strings."""

    def test_nested_mapping(self):
        result = from_query("account[account_code]=112358132134&timestamp=1329942996")
        assert result == {
            "account": {"account_code": "112358132134"},
            "timestamp": "1329942996",
        }

    def test_percent_encoded_brackets(self):
        """Fully escaped keys decode the same as literal brackets."""
        result = from_query("account%5Baccount_code%5D=123&timestamp=1")
        assert result == {"account": {"account_code": "123"}, "timestamp": "1"}

    def test_sequence(self):
        assert from_query("tags[]=b&tags[]=a") == {"tags": ["b", "a"]}

    def test_sequence_of_mappings(self):
        result = from_query("items[][qty]=2&items[][sku]=x&items[][qty]=3&items[][sku]=y")
        assert result == {
            "items": [
                {"qty": "2", "sku": "x"},
                {"qty": "3", "sku": "y"},
            ]
        }

    def test_values_unescaped(self):
        assert from_query("a+b=c%26d%3De%5Bf%5D") == {"a b": "c&d=e[f]"}

    def test_empty_and_missing_values(self):
        assert from_query("a=&b") == {"a": "", "b": ""}

    def test_value_keeps_extra_equals(self):
        assert from_query("a=x=y") == {"a": "x=y"}

    def test_empty_input(self):
        assert from_query("") == {}
        assert from_query("&&") == {}

    def test_values_stay_strings(self):
        result = from_query("n=5000&t=true")
        assert result == {"n": "5000", "t": "true"}


class TestCollisionPolicy:
    """Conflicting paths: scalars are overwritten, mapping/sequence clashes fail."""

    def test_mapping_overwrites_scalar(self):
        assert from_query("a=1&a[b]=2") == {"a": {"b": "2"}}

    def test_scalar_overwrites_mapping(self):
        assert from_query("a[b]=2&a=1") == {"a": "1"}

    def test_sequence_overwrites_scalar(self):
        assert from_query("a=1&a[]=2") == {"a": ["2"]}

    def test_repeated_scalar_last_wins(self):
        assert from_query("a=1&a=2") == {"a": "2"}

    def test_mapping_then_sequence_fails(self):
        with pytest.raises(PayloadConflictError) as exc_info:
            from_query("a[b]=1&a[]=2")
        assert exc_info.value.code == ErrorCode.PAYLOAD_CONFLICT
        assert exc_info.value.details["key"] == "a"

    def test_sequence_then_mapping_fails(self):
        with pytest.raises(PayloadConflictError):
            from_query("a[]=1&a[b]=2")


class TestInsertAtPath:

    def test_creates_intermediate_mappings(self):
        tree = {}
        insert_at_path(tree, ["a", "b", "c"], "v")
        assert tree == {"a": {"b": {"c": "v"}}}

    def test_appends_to_existing_sequence(self):
        tree = {"a": ["1"]}
        insert_at_path(tree, ["a", None], "2")
        assert tree == {"a": ["1", "2"]}


class TestRoundTrip:
    """from_query(to_query(x)) rebuilds x with scalars as strings."""

    def test_nested_structure(self):
        data = {
            "account": {"account_code": "a b&c=d", "name": "Ann"},
            "items": [{"sku": "x", "qty": 2}, {"sku": "y", "qty": 3}],
            "tags": ["gold", "annual"],
            "flag": True,
            "amount": 5000,
        }
        assert from_query(to_query(data)) == {
            "account": {"account_code": "a b&c=d", "name": "Ann"},
            "items": [{"sku": "x", "qty": "2"}, {"sku": "y", "qty": "3"}],
            "tags": ["gold", "annual"],
            "flag": "true",
            "amount": "5000",
        }

    def test_nested_names_with_brackets(self):
        """Escaped brackets inside names never turn into path brackets."""
        data = {"p": {"a[b": "1", "c]": "2"}}
        assert to_query(data) == "p[a%5Bb]=1&p[c%5D]=2"
        assert from_query(to_query(data)) == data

    def test_bracketed_name_inside_sequence_element(self):
        data = {"items": [{"x[0]": "1"}]}
        assert from_query(to_query(data)) == data

    def test_deep_nesting(self):
        data = {"a": {"b": {"c": {"d": ["1", "2"]}}}}
        assert from_query(to_query(data)) == data
