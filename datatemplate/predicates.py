"""
Built-in type checks for datatemplate validation.

Ordinary validators, usable anywhere a schema is expected. Booleans are
not numbers here, matching literal comparison in the core engine.
"""

from __future__ import annotations

import logging
from enum import Enum
from fractions import Fraction
from numbers import Number
from typing import Any, Callable

from .context import render
from .types import SUCCESS, Result, Validator, fail

logger = logging.getLogger(__name__)


def type_check(predicate: Callable[[Any], bool], type_name: str) -> Validator:
    """
    Wrap a membership test as a validator with a uniform failure message.

    Usage:
        positive = type_check(lambda x: isinstance(x, int) and x > 0, "positive int")
    """

    def check(value: Any) -> Result:
        try:
            matched = bool(predicate(value))
        except Exception as e:
            logger.debug(
                "Type check %s raised %r for %s, treating as unsatisfied",
                type_name,
                e,
                render(value),
            )
            matched = False
        if matched:
            return SUCCESS
        return fail(f"Expected type {type_name} but got {render(value)}")

    return Validator(check=check, name=type_name)


def _is_integer(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


number = type_check(
    lambda x: isinstance(x, Number) and not isinstance(x, bool), "number"
)
string = type_check(lambda x: isinstance(x, str), "string")
keyword = type_check(lambda x: isinstance(x, Enum), "keyword")
boolean = type_check(lambda x: isinstance(x, bool), "boolean")
int_ = type_check(_is_integer, "int")
# Python ints are unbounded, so long and int accept the same values
long = type_check(_is_integer, "long")
double = type_check(lambda x: isinstance(x, float), "double")
ratio = type_check(lambda x: isinstance(x, Fraction), "ratio")
