"""
Tests for the datatemplate core engine: literals, patterns and templates.
"""

import re
from decimal import Decimal
from enum import Enum
from fractions import Fraction

import pytest

from datatemplate import (
    SUCCESS,
    SchemaKind,
    SchemaError,
    ValidationFailure,
    check_schema,
    classify,
    double,
    is_failure,
    is_success,
    is_valid,
    number,
    optional,
    string,
    validate,
)


class Color(Enum):
    RED = "red"
    BLUE = "blue"


class TestLiterals:
    def test_booleans(self):
        assert is_success(validate(True, True))
        assert is_failure(validate(True, False))
        assert is_success(validate(False, False))
        assert is_failure(validate(False, True))

    def test_numbers(self):
        assert is_success(validate(3, 3))
        assert is_success(validate(3.1, 3.1))
        assert is_failure(validate(3, 4))

    def test_numbers_of_different_kinds_do_not_match(self):
        assert is_failure(validate(3, 3.0))
        assert is_failure(validate(1, True))
        assert is_failure(validate(True, 1))
        assert is_failure(validate(Fraction(1, 2), 0.5))
        assert is_failure(validate(Decimal("1.0"), 1.0))
        assert is_success(validate(Fraction(4, 2), 2))

    def test_strings(self):
        assert is_success(validate("string", "string"))
        assert is_failure(validate("string", "stri"))
        assert is_failure(validate("string", "string and stuff"))

    def test_enum_members_act_as_keywords(self):
        assert is_success(validate(Color.RED, Color.RED))
        assert is_failure(validate(Color.RED, Color.BLUE))
        assert is_failure(validate(Color.RED, "red"))

    def test_none(self):
        assert is_success(validate(None, None))
        assert is_failure(validate(None, False))

    def test_failure_reason(self):
        result = validate(1, 2)
        assert result == [ValidationFailure((), "Expected 1 but found 2")]
        assert validate(None, 0)[0].reason == "Expected None but found 0"


class TestPatterns:
    def test_full_match(self):
        assert is_success(validate(re.compile("a*"), "aaaa"))
        assert is_failure(validate(re.compile("a*"), "aaab"))

    def test_non_string(self):
        assert is_failure(validate(re.compile("a*"), 1))
        assert is_failure(validate(re.compile("a*"), b"aaa"))

    def test_bytes_pattern(self):
        assert is_success(validate(re.compile(b"a+"), b"aa"))
        assert is_failure(validate(re.compile(b"a+"), "aa"))


class TestMapTemplate:
    schema = {"a": 1, "b": double, "c": optional(string)}

    def test_vanilla_case(self):
        assert is_success(validate(self.schema, {"a": 1, "b": 3.14, "c": "x"}))
        assert is_failure(validate(self.schema, {"a": 1, "b": "string", "c": "x"}))

    def test_extra_keys_rejected(self):
        result = validate({"a": 1}, {"a": 1, "b": 2})
        assert len(result) == 1
        assert result[0].path == ()
        assert result[0].reason == "Got unsupported entries {'b': 2}"

    def test_optional_keys_can_be_left_out(self):
        assert is_valid({"a": 1, "b": optional(1)}, {"a": 1})

    def test_missing_required_key(self):
        result = validate({"a": 1, "b": 2}, {"a": 1})
        assert [f.path for f in result] == [("b",)]

    def test_not_a_map(self):
        result = validate({"a": 1}, [1])
        assert result == [ValidationFailure((), "Expected map but got [1]")]

    def test_nested_path(self):
        result = validate({"a": {"b": number}}, {"a": {"b": "x"}})
        assert len(result) == 1
        assert result[0].path == ("a", "b")

    def test_collects_every_failure(self):
        result = validate({"a": 1, "b": 2, "c": 3}, {"a": 0, "b": 2, "c": 0})
        assert [f.path for f in result] == [("a",), ("c",)]


class TestVectorTemplate:
    schema = [1, {"a": double}, string]

    def test_vanilla_case(self):
        assert is_success(validate(self.schema, [1, {"a": 3.1}, "string"]))
        assert is_failure(validate(self.schema, [2, {"a": 3.1}, "string"]))

    def test_exact_length(self):
        assert is_failure(validate(self.schema, [1, {"a": 3.1}]))
        assert is_failure(validate(self.schema, [1, {"a": 3.1}, "s", "extra"]))
        result = validate(self.schema, [1])
        assert result[0].reason.startswith("Expected vector of length 3")

    def test_index_paths(self):
        result = validate(self.schema, [1, {"a": "x"}, 5])
        assert [f.path for f in result] == [(1, "a"), (2,)]

    def test_tuples_are_vectors(self):
        assert is_valid((1, 2), [1, 2])
        assert is_valid([1, 2], (1, 2))

    def test_strings_are_not_vectors(self):
        result = validate(["a", "b"], "ab")
        assert result[0].reason == "Expected vector but got 'ab'"


class TestPredicates:
    def test_plain_functions(self):
        def even(x):
            return x % 2 == 0

        assert is_valid(even, 2)
        assert not is_valid(even, 3)

    def test_raising_predicate_is_a_failure(self):
        def even(x):
            return x % 2 == 0

        result = validate(even, "string")
        assert len(result) == 1
        assert "does not satisfy predicate even" in result[0].reason

    def test_result_passes_through(self):
        custom = [ValidationFailure(("deep",), "custom reason")]
        assert validate(lambda _: custom, 1) == custom
        assert validate(lambda _: SUCCESS, 1) is SUCCESS

    def test_truthiness(self):
        assert is_valid(re.compile("x").search, "abc x")
        assert not is_valid(re.compile("x").search, "abc")

    def test_classes_check_instances(self):
        assert is_valid(str, "s")
        assert not is_valid(int, "s")
        assert not is_valid(int, True)
        assert is_valid(bool, True)
        result = validate({"n": int}, {"n": "1"})
        assert result == [ValidationFailure(("n",), "Expected type int but got '1'")]


class TestSchemaErrors:
    def test_unclassifiable_schema(self):
        with pytest.raises(SchemaError):
            validate({1, 2}, 1)

    def test_nested_unclassifiable_schema(self):
        with pytest.raises(SchemaError):
            validate({"a": object()}, {"a": 1})


class TestRendering:
    def test_empty_path(self):
        assert str(ValidationFailure((), "boom")) == "Failure: boom"

    def test_nested_path(self):
        failure = ValidationFailure(("a", 0), "boom")
        assert str(failure) == "Failure at ['a', 0]: boom"


class CallableDict(dict):
    def __call__(self, value):
        return True


class TestClassify:
    def test_structural_kinds_win_over_callable(self):
        assert classify(CallableDict(a=1)) is SchemaKind.MAPPING
        assert not is_valid(CallableDict(a=1), {"a": 2})

    def test_kinds(self):
        assert classify(None) is SchemaKind.LITERAL
        assert classify("abc") is SchemaKind.LITERAL
        assert classify(re.compile("a")) is SchemaKind.PATTERN
        assert classify((1, 2)) is SchemaKind.SEQUENCE
        assert classify(optional(1)) is SchemaKind.VALIDATOR
        assert classify(int) is SchemaKind.TYPE
        assert classify(len) is SchemaKind.PREDICATE

    def test_check_schema_returns_schema(self):
        schema = {"a": [1, string]}
        assert check_schema(schema) is schema


class TestPredicateReturns:
    def test_none_is_a_failure(self):
        assert not is_valid(lambda _: None, 1)

    def test_string_is_the_reason(self):
        result = validate({"a": lambda _: "too small"}, {"a": 1})
        assert result == [ValidationFailure(("a",), "too small")]

    def test_other_values_are_failures(self):
        assert not is_valid(lambda _: ["bad"], 1)
        assert not is_valid(lambda _: 1, 1)
        result = validate(lambda _: ["bad"], 1)
        assert result[0].reason.endswith("(returned ['bad'])")
