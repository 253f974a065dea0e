"""Tests for path formatting, parsing and path-addressed mutation."""

import pytest

from jnode._jsonpath import (
    PathConflictError,
    format_path,
    get_value_at_path,
    parse_path,
    set_value_at_path,
)


class TestFormatPath:
    def test_root(self):
        assert format_path([]) == "$"
        assert format_path(None) == "$"

    def test_mixed_segments(self):
        assert format_path(["key", 0, "nested"]) == '$["key"][0]["nested"]'

    def test_single_key(self):
        assert format_path(["customer"]) == '$["customer"]'

    def test_quotes_are_escaped(self):
        assert format_path(['say "hi"']) == '$["say \\"hi\\""]'

    def test_unicode_kept(self):
        assert format_path(["이름"]) == '$["이름"]'

    def test_stable(self):
        path = ("a", 1, "b")
        assert format_path(path) == format_path(list(path))


class TestParsePath:
    def test_root(self):
        assert parse_path("$") == ()

    def test_reads_formatted_path(self):
        path = ("key", 0, 'with "quote"', 12)
        assert parse_path(format_path(path)) == path

    def test_single_quotes(self):
        assert parse_path("$['a'][3]") == ("a", 3)

    def test_digit_string_key_stays_string(self):
        assert parse_path('$["0"]') == ("0",)

    @pytest.mark.parametrize(
        "text", ["", "a", "$[", "$[-1]", "$[x]", '$["a"', "$['a", "$.a", "$[1.5]"]
    )
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_path(text)


class TestGetValueAtPath:
    def test_nested(self):
        data = {"a": [{"b": 1}]}
        assert get_value_at_path(data, ["a", 0, "b"]) == 1

    def test_root(self):
        data = {"a": 1}
        assert get_value_at_path(data, []) is data

    def test_missing(self):
        data = {"a": [1]}
        assert get_value_at_path(data, ["a", 5]) is None
        assert get_value_at_path(data, ["b"]) is None
        assert get_value_at_path(data, ["a", "x"]) is None


class TestSetValueAtPath:
    """Installing a replacement at a path."""

    def test_empty_path_returns_replacement(self):
        replacement = {"new": True}
        assert set_value_at_path({"old": 1}, [], replacement) is replacement
        assert set_value_at_path([1, 2], None, 5) == 5

    def test_creates_missing_containers(self):
        result = set_value_at_path({}, ["a", 2, "b"], "v")
        assert isinstance(result["a"], list)
        assert isinstance(result["a"][2], dict)
        assert result["a"][2]["b"] == "v"

    def test_sparse_extension_pads_with_null(self):
        result = set_value_at_path({"a": [1]}, ["a", 3], "x")
        assert result == {"a": [1, None, None, "x"]}

    def test_original_untouched(self):
        root = {"a": {"b": 1}, "c": [1, 2]}
        result = set_value_at_path(root, ["a", "b"], 2)
        assert root == {"a": {"b": 1}, "c": [1, 2]}
        assert result == {"a": {"b": 2}, "c": [1, 2]}
        assert result["c"] is not root["c"]

    def test_destructive_overwrite_of_wrong_kind(self):
        result = set_value_at_path({"x": [1, 2, 3]}, ["x", "y"], "r")
        assert result == {"x": {"y": "r"}}

    def test_object_replaced_by_array_when_index_follows(self):
        result = set_value_at_path({"x": {"k": 1}}, ["x", 0], "r")
        assert result == {"x": ["r"]}

    def test_scalar_replaced_by_container(self):
        result = set_value_at_path({"x": 5}, ["x", "y", "z"], 1)
        assert result == {"x": {"y": {"z": 1}}}

    def test_null_is_materialized(self):
        result = set_value_at_path({"x": None}, ["x", "y"], 1)
        assert result == {"x": {"y": 1}}

    def test_final_segment_changes_type(self):
        result = set_value_at_path({"x": {"deep": [1]}}, ["x"], "flat")
        assert result == {"x": "flat"}

    def test_root_of_wrong_kind(self):
        assert set_value_at_path({"a": 1}, [0], "z") == ["z"]
        assert set_value_at_path([1, 2], ["k"], "z") == {"k": "z"}
        assert set_value_at_path(None, ["k", 1], "z") == {"k": [None, "z"]}

    def test_existing_siblings_preserved(self):
        root = {"a": [{"b": 1, "c": 2}, {"d": 3}]}
        result = set_value_at_path(root, ["a", 0, "b"], 10)
        assert result == {"a": [{"b": 10, "c": 2}, {"d": 3}]}

    def test_invalid_segments(self):
        with pytest.raises(ValueError):
            set_value_at_path({}, ["a", -1], 1)
        with pytest.raises(TypeError):
            set_value_at_path({}, ["a", 1.5], 1)
        with pytest.raises(TypeError):
            set_value_at_path({}, [True], 1)


class TestStrictMode:
    def test_conflict_raises(self):
        with pytest.raises(PathConflictError) as info:
            set_value_at_path({"x": [1, 2, 3]}, ["x", "y"], "r", strict=True)
        assert info.value.prefix == ("x",)
        assert info.value.expected == "object"

    def test_root_conflict_raises(self):
        with pytest.raises(PathConflictError) as info:
            set_value_at_path({"a": 1}, [0], "z", strict=True)
        assert info.value.prefix == ()

    def test_missing_containers_still_created(self):
        result = set_value_at_path({}, ["a", 0, "b"], 1, strict=True)
        assert result == {"a": [{"b": 1}]}

    def test_conflict_is_value_error(self):
        with pytest.raises(ValueError):
            set_value_at_path({"x": 1}, ["x", 0], "r", strict=True)
