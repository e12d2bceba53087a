"""
Core validation engine for datatemplate.

validate() matches a schema against a candidate value by the shape of the
schema and returns SUCCESS or a flat list of path-annotated failures.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from enum import Enum
from numbers import Complex, Number, Rational, Real
from typing import Any, Callable, Mapping, Sequence

from .classify import SchemaKind, classify, is_mapping, is_sequence
from .context import render
from .types import (
    SUCCESS,
    Failures,
    Result,
    as_result,
    fail,
    is_failure,
    is_success,
    prefix_all,
)

logger = logging.getLogger(__name__)


def validate(schema: Any, value: Any) -> Result:
    """
    Validate a value against a schema.

    Returns:
        SUCCESS if the value conforms
        [ValidationFailure(path, reason), ...] otherwise

    Raises:
        SchemaError: If the schema (or a node reached inside it) cannot be
                     classified. Mismatches in the value never raise.

    Usage:
        validate({"name": string, "tags": vector_of(string)}, payload)
        validate([1, re.compile("[a-z]+")], [1, "abc"])
    """
    match classify(schema):
        case SchemaKind.LITERAL:
            return _validate_literal(schema, value)
        case SchemaKind.PATTERN:
            return _validate_pattern(schema, value)
        case SchemaKind.MAPPING:
            return _validate_mapping(schema, value)
        case SchemaKind.SEQUENCE:
            return _validate_sequence(schema, value)
        case SchemaKind.VALIDATOR:
            return schema(value)
        case SchemaKind.TYPE:
            return _validate_type(schema, value)
        case SchemaKind.PREDICATE:
            return _validate_predicate(schema, value)


def is_valid(schema: Any, value: Any) -> bool:
    """Equivalent to is_success(validate(schema, value))."""
    return is_success(validate(schema, value))


def _numeric_family(n: Number) -> str:
    if isinstance(n, Rational):
        return "rational"
    if isinstance(n, Decimal):
        return "decimal"
    if isinstance(n, Real):
        return "real"
    if isinstance(n, Complex):
        return "complex"
    return type(n).__name__


def _same_kind(expected: Any, actual: Any) -> bool:
    """Equal-comparing values of different kinds (True vs 1, 3 vs 3.0) are distinct."""
    if isinstance(expected, bool) or isinstance(actual, bool):
        return isinstance(expected, bool) and isinstance(actual, bool)
    if isinstance(expected, Enum) or isinstance(actual, Enum):
        return isinstance(expected, Enum) and isinstance(actual, Enum)
    if isinstance(expected, Number) and isinstance(actual, Number):
        return _numeric_family(expected) == _numeric_family(actual)
    return True


def _validate_literal(expected: Any, actual: Any) -> Result:
    if expected is None:
        if actual is None:
            return SUCCESS
        return fail(f"Expected None but found {render(actual)}")

    if _same_kind(expected, actual) and expected == actual:
        return SUCCESS
    return fail(f"Expected {expected!r} but found {render(actual)}")


def _validate_pattern(pattern: re.Pattern, value: Any) -> Result:
    if isinstance(value, type(pattern.pattern)) and pattern.fullmatch(value):
        return SUCCESS
    return fail(f"Expected value matching {pattern.pattern!r} but got {render(value)}")


def _validate_mapping(template: Mapping, value: Any) -> Result:
    if not is_mapping(value):
        return fail(f"Expected map but got {render(value)}")

    unsupported = {k: v for k, v in value.items() if k not in template}
    if unsupported:
        return fail(f"Got unsupported entries {render(unsupported)}")

    failures: Failures = []
    for key, sub_schema in template.items():
        # Missing keys validate as None, so optional() accepts their absence
        result = validate(sub_schema, value.get(key))
        if is_failure(result):
            failures.extend(prefix_all(result, key))

    return failures or SUCCESS


def _validate_sequence(template: Sequence, value: Any) -> Result:
    if not is_sequence(value):
        return fail(f"Expected vector but got {render(value)}")

    if len(template) != len(value):
        return fail(
            f"Expected vector of length {len(template)} but got {render(value)}"
        )

    failures: Failures = []
    for i, (sub_schema, item) in enumerate(zip(template, value)):
        result = validate(sub_schema, item)
        if is_failure(result):
            failures.extend(prefix_all(result, i))

    return failures or SUCCESS


def _validate_type(cls: type, value: Any) -> Result:
    if isinstance(value, bool) and cls not in (bool, object):
        matched = False
    else:
        matched = isinstance(value, cls)

    if matched:
        return SUCCESS
    return fail(f"Expected type {cls.__name__} but got {render(value)}")


def _predicate_name(predicate: Callable) -> str:
    return getattr(predicate, "__name__", None) or repr(predicate)


def _validate_predicate(predicate: Callable[[Any], Any], value: Any) -> Result:
    name = _predicate_name(predicate)
    try:
        outcome = predicate(value)
    except Exception as e:
        logger.debug(
            "Predicate %s raised %r for %s, treating as unsatisfied",
            name,
            e,
            render(value),
        )
        outcome = False
    return as_result(outcome, value, name)
