"""
Result types for datatemplate validation.

A result is either the SUCCESS marker or a non-empty list of
ValidationFailure records, each carrying the full path from the root of
the validated value.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Union

from .context import render

logger = logging.getLogger(__name__)

PathSegment = Hashable
Path = tuple[PathSegment, ...]


class Outcome(Enum):
    """Sentinel for a successful validation."""

    SUCCESS = "success"

    def __repr__(self) -> str:
        return "SUCCESS"


SUCCESS = Outcome.SUCCESS


class SchemaError(ValueError):
    """Raised when a schema is ill-formed, before any value is validated."""


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single mismatch, located by its path from the validated root."""

    path: Path
    reason: str

    def __str__(self) -> str:
        if not self.path:
            return f"Failure: {self.reason}"
        return f"Failure at {list(self.path)!r}: {self.reason}"

    def prefixed(self, *segments: PathSegment) -> ValidationFailure:
        return ValidationFailure((*segments, *self.path), self.reason)


Failures = list[ValidationFailure]
Result = Union[Outcome, Failures]


def is_success(result: Any) -> bool:
    """Check whether a validation result indicates success."""
    return result is SUCCESS


def is_failure(result: Any) -> bool:
    """Check whether a validation result indicates failure."""
    return result is not SUCCESS


def fail(path_or_reason: Path | str, reason: str | None = None) -> Failures:
    """
    Build a one-element failure result.

    Usage:
        fail("Expected map")                  # failure at the empty path
        fail(("user", "age"), "Expected int")  # failure at a given path
    """
    if reason is None:
        return [ValidationFailure((), str(path_or_reason))]
    return [ValidationFailure(tuple(path_or_reason), reason)]


def is_result(value: Any) -> bool:
    """True for SUCCESS or a non-empty list of ValidationFailure."""
    if value is SUCCESS:
        return True
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(f, ValidationFailure) for f in value)
    )


def prefix_all(failures: Failures, *segments: PathSegment) -> Failures:
    return [f.prefixed(*segments) for f in failures]


def as_result(outcome: Any, value: Any, name: str) -> Result:
    """
    Normalize what a predicate or check function returned into a Result.

    A Result passes through unchanged. True and a regex match mean success;
    False and None are a generic failure. A string is taken as the failure
    reason. Anything else is a failure, never judged by truthiness.
    """
    if is_result(outcome):
        return outcome
    if outcome is True or isinstance(outcome, re.Match):
        return SUCCESS
    if outcome is False or outcome is None:
        return fail(f"Value {render(value)} does not satisfy predicate {name}")
    if isinstance(outcome, str):
        return fail(outcome)
    return fail(
        f"Value {render(value)} does not satisfy predicate {name} "
        f"(returned {outcome!r})"
    )


CheckFn = Callable[[Any], Result]


@dataclass(frozen=True, slots=True)
class Validator:
    """
    Immutable validator built by a combinator.

    Wraps a check function, plus a display name used when the validator
    shows up inside a failure message. The check may return a full Result
    or a plain bool; exceptions it raises become a failure.
    """

    check: CheckFn
    name: str = "validator"

    def __call__(self, value: Any) -> Result:
        try:
            outcome = self.check(value)
        except Exception as e:
            logger.debug(
                "Validator %s raised %r for %s, treating as unsatisfied",
                self.name,
                e,
                render(value),
            )
            outcome = False
        return as_result(outcome, value, self.name)

    def __repr__(self) -> str:
        return self.name

    def __or__(self, other: Any) -> Validator:
        """
        Either side must pass.

        Usage:
            optional(string) | number
        """
        # Deferred: the combinator library builds on this module
        from .validators import choice

        return choice(self, other)

    def __ror__(self, other: Any) -> Validator:
        """Support `1 | optional(2)` where the plain schema comes first."""
        from .validators import choice

        return choice(other, self)

    def __and__(self, other: Any) -> Validator:
        """
        Both sides must pass.

        Usage:
            number & Validator(check=..., name="even")
            open_map({"a": double}) & open_map({"b": double})
        """
        from .validators import combine

        return combine(self, other)

    def __rand__(self, other: Any) -> Validator:
        from .validators import combine

        return combine(other, self)


def explain(result: Result) -> str:
    """Render a result for diagnostics, one failure per line."""
    if is_success(result):
        return "Success"
    return "\n".join(str(f) for f in result)
