"""
Combinators for datatemplate validation.

Each factory returns an immutable Validator closing over its arguments.
Sub-schemas are checked when the validator is built, so an ill-formed
schema raises SchemaError before any value is seen.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Set
from typing import Any, Mapping

from .classify import check_schema, is_mapping, is_primitive, is_sequence
from .context import render
from .core import validate
from .models import RepetitionBounds
from .types import (
    SUCCESS,
    Failures,
    Result,
    SchemaError,
    Validator,
    fail,
    is_failure,
    is_success,
    prefix_all,
)

logger = logging.getLogger(__name__)


def _describe(*schemas: Any) -> str:
    return ", ".join(repr(s) for s in schemas)


def _require_template(template: Any, combinator: str) -> Mapping:
    if not is_mapping(template):
        raise SchemaError(
            f"{combinator}() requires map templates, got {type(template).__name__}"
        )
    check_schema(template)
    return template


def _project(value: Mapping, template: Mapping) -> dict:
    return {k: value[k] for k in template if k in value}


def optional(schema: Any) -> Validator:
    """
    Accept None, otherwise validate against the schema.

    Inside a map template this also accepts a missing key.

    Usage:
        {"id": int, "nickname": optional(string)}
    """
    check_schema(schema)

    def check(value: Any) -> Result:
        if value is None:
            return SUCCESS
        return validate(schema, value)

    return Validator(check=check, name=f"optional({schema!r})")


def choice(*schemas: Any) -> Validator:
    """
    Succeed if at least one schema accepts the value.

    Usage:
        choice("draft", "published")
        choice(int, {"ref": string})
    """
    for s in schemas:
        check_schema(s)
    primitive = all(is_primitive(s) for s in schemas)

    def check(value: Any) -> Result:
        results = []
        for s in schemas:
            result = validate(s, value)
            if is_success(result):
                return SUCCESS
            results.append(result)

        if primitive:
            return fail(
                f"Value {render(value)} did not match any allowed choices: "
                f"{list(schemas)!r}"
            )
        failures: Failures = fail(f"Value {render(value)} failed all allowed choices")
        for result in results:
            failures.extend(result)
        return failures

    return Validator(check=check, name=f"choice({_describe(*schemas)})")


def combine(*schemas: Any) -> Validator:
    """
    Succeed only if every schema accepts the value.

    All failures are reported, not just the first. Mostly useful to join
    open_map() fragments that each check a subset of keys.

    Usage:
        combine(open_map({"a": double}), open_map({"b": double}))
        number & even
    """
    for s in schemas:
        check_schema(s)

    def check(value: Any) -> Result:
        failures: Failures = []
        for s in schemas:
            result = validate(s, value)
            if is_failure(result):
                failures.extend(result)
        return failures or SUCCESS

    return Validator(check=check, name=f"combine({_describe(*schemas)})")


def set_of(schema: Any) -> Validator:
    """
    A set whose every element satisfies the schema.

    Element failures carry no position since sets are unordered.
    """
    check_schema(schema)

    def check(value: Any) -> Result:
        if not isinstance(value, Set):
            return fail(f"Expected set but got {render(value)}")

        failures: Failures = []
        for item in value:
            result = validate(schema, item)
            if is_failure(result):
                failures.extend(result)
        return failures or SUCCESS

    return Validator(check=check, name=f"set_of({schema!r})")


def map_of(key_schema: Any, value_schema: Any) -> Validator:
    """
    A map of any size whose keys and values satisfy the given schemas.

    Key failures are reported where the map was found; value failures are
    prefixed with their key.

    Usage:
        map_of(string, vector_of(int_))
    """
    check_schema(key_schema)
    check_schema(value_schema)

    def check(value: Any) -> Result:
        if not is_mapping(value):
            return fail(f"Expected map but got {render(value)}")

        failures: Failures = []
        for k, v in value.items():
            key_result = validate(key_schema, k)
            if is_failure(key_result):
                failures.extend(key_result)
            value_result = validate(value_schema, v)
            if is_failure(value_result):
                failures.extend(prefix_all(value_result, k))
        return failures or SUCCESS

    return Validator(check=check, name=f"map_of({key_schema!r}, {value_schema!r})")


def vector_of(schema: Any, **options: int) -> Validator:
    """
    A repetition of elements, each satisfying the schema.

    Args:
        schema: Schema every element must satisfy
        count: Exact number of elements
        min: Minimum number of elements (or min_length)
        max: Maximum number of elements (or max_length)

    A violated bound is reported alone; elements are then not checked.

    Usage:
        vector_of(string)
        vector_of(choice("a", "b"), min=1, max=3)
    """
    check_schema(schema)
    bounds = RepetitionBounds.parse(**options)

    def check(value: Any) -> Result:
        if not is_sequence(value):
            return fail(f"Expected vector but got {render(value)}")

        n = len(value)
        if bounds.count is not None and n != bounds.count:
            return fail(
                f"Expected vector of length {bounds.count} but got {render(value)}"
            )
        if bounds.min_length is not None and n < bounds.min_length:
            return fail(
                f"Expected vector of minimum length {bounds.min_length} "
                f"but got {render(value)}"
            )
        if bounds.max_length is not None and n > bounds.max_length:
            return fail(
                f"Expected vector of maximum length {bounds.max_length} "
                f"but got {render(value)}"
            )

        failures: Failures = []
        for i, item in enumerate(value):
            result = validate(schema, item)
            if is_failure(result):
                failures.extend(prefix_all(result, i))
        return failures or SUCCESS

    name = f"vector_of({schema!r}"
    if bounds.describe():
        name += f", {bounds.describe()}"
    return Validator(check=check, name=name + ")")


def open_map(template: Mapping) -> Validator:
    """
    Match only the keys named in the template, ignoring any others.

    Usage:
        open_map({"id": int_})   # accepts {"id": 1, "extra": "ignored"}
    """
    _require_template(template, "open_map")

    def check(value: Any) -> Result:
        if not is_mapping(value):
            return fail(f"Expected type map but got {render(value)}")
        return validate(template, _project(value, template))

    return Validator(check=check, name=f"open_map({template!r})")


def merged_map(*templates: Mapping) -> Validator:
    """
    A closed map assembled from several templates with disjoint keys.

    Raises:
        SchemaError: If any key appears in more than one template.

    Usage:
        identity = {"id": int_, "name": string}
        audit = {"created": string, "updated": optional(string)}
        user = merged_map(identity, audit)
    """
    for t in templates:
        _require_template(t, "merged_map")

    counts = Counter(k for t in templates for k in t)
    duplicates = [k for k, n in counts.items() if n > 1]
    if duplicates:
        logger.debug("Rejected merged_map over templates %r", templates)
        raise SchemaError(
            f"Non-orthogonal templates: the keys {duplicates!r} "
            "appear in more than one template."
        )
    all_keys = set(counts)

    def check(value: Any) -> Result:
        if not is_mapping(value):
            return fail(f"Expected type map but got {render(value)}")

        unsupported = {k: v for k, v in value.items() if k not in all_keys}
        if unsupported:
            return fail(f"Got unsupported entries {render(unsupported)}")

        failures: Failures = []
        for t in templates:
            result = validate(t, _project(value, t))
            if is_failure(result):
                failures.extend(result)
        return failures or SUCCESS

    return Validator(check=check, name=f"merged_map({_describe(*templates)})")
