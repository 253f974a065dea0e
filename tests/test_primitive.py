"""Tests for text to scalar conversion."""

import pytest

from jnode._primitive import coerce_primitive, scalar_to_text, scalar_type


class TestCoercePrimitive:
    """Text to scalar conversion."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("true", True),
            ("false", False),
            ("null", None),
            ("", ""),
            ("42", 42),
            ("3.14", 3.14),
            ("007", "007"),
            ("abc", "abc"),
        ],
    )
    def test_coercion_table(self, text, expected):
        result = coerce_primitive(text)
        assert result == expected
        assert type(result) is type(expected)

    def test_ambiguous_numbers_stay_strings(self):
        for text in ["1e", "1e3", " 42", "+5", "-0", "1_000", "0x10"]:
            assert coerce_primitive(text) == text

    def test_non_finite_stays_string(self):
        for text in ["NaN", "Infinity", "-Infinity", "inf", "nan"]:
            assert coerce_primitive(text) == text

    def test_negative_and_float(self):
        assert coerce_primitive("-12") == -12
        assert coerce_primitive("-0.5") == -0.5

    def test_case_sensitive_literals(self):
        assert coerce_primitive("True") == "True"
        assert coerce_primitive("NULL") == "NULL"

    def test_scalar_to_text_is_coercion_inverse(self):
        for value in [None, True, False, 0, 42, -7, 3.14, "", "abc", "007"]:
            assert coerce_primitive(scalar_to_text(value)) == value

    def test_scalar_type(self):
        assert scalar_type(None) == "null"
        assert scalar_type(True) == "boolean"
        assert scalar_type(1) == "number"
        assert scalar_type(1.5) == "number"
        assert scalar_type("x") == "string"
        assert scalar_type({}) == "object"
        assert scalar_type([]) == "array"
