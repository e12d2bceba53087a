"""
Schema classification for datatemplate.

A schema carries no type tag: its runtime shape decides which validation
algorithm applies. classify() is an ordered chain of type tests where the
first match wins, so mappings and sequences are treated structurally even
when they also happen to be callable.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from enum import Enum, auto
from numbers import Number
from typing import Any

from .types import SchemaError, Validator

TEXT_TYPES = (str, bytes, bytearray)


class SchemaKind(Enum):
    LITERAL = auto()
    PATTERN = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    VALIDATOR = auto()
    TYPE = auto()
    PREDICATE = auto()


def is_literal(value: Any) -> bool:
    return value is None or isinstance(value, (bool, Number, str, bytes, Enum))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Ordered collections, excluding text which is validated as a literal."""
    return isinstance(value, Sequence) and not isinstance(value, TEXT_TYPES)


def classify(schema: Any) -> SchemaKind:
    """
    Determine how a schema validates.

    Raises:
        SchemaError: If the value cannot act as a schema (e.g. a set).
    """
    if is_literal(schema):
        return SchemaKind.LITERAL
    if isinstance(schema, re.Pattern):
        return SchemaKind.PATTERN
    if is_mapping(schema):
        return SchemaKind.MAPPING
    if is_sequence(schema):
        return SchemaKind.SEQUENCE
    if isinstance(schema, Validator):
        return SchemaKind.VALIDATOR
    if isinstance(schema, type):
        return SchemaKind.TYPE
    if callable(schema):
        return SchemaKind.PREDICATE
    raise SchemaError(f"Cannot use {type(schema).__name__} as a schema: {schema!r}")


def check_schema(schema: Any) -> Any:
    """
    Recursively verify that every node of a schema can be classified.

    Returns the schema unchanged so combinators can check inline.
    """
    kind = classify(schema)
    if kind is SchemaKind.MAPPING:
        for sub in schema.values():
            check_schema(sub)
    elif kind is SchemaKind.SEQUENCE:
        for sub in schema:
            check_schema(sub)
    return schema


def is_primitive(schema: Any) -> bool:
    """
    Whether a schema is built purely from scalar literals.

    Mappings qualify when all their keys and values are primitive, sequences
    when all their elements are.
    """
    if is_literal(schema):
        return True
    if is_mapping(schema):
        return all(is_primitive(k) and is_primitive(v) for k, v in schema.items())
    if is_sequence(schema):
        return all(is_primitive(v) for v in schema)
    return False
