"""
datatemplate - structural validation where data structures are their own schemas.

Usage:
    from datatemplate import validate, optional, choice, vector_of, string

    schema = {
        "name": string,
        "role": choice("admin", "member"),
        "email": optional(re.compile(r"[^@]+@[^@]+")),
        "tags": vector_of(string, max=10),
    }

    result = validate(schema, data)
    if is_failure(result):
        print(explain(result))
"""

from .classify import SchemaKind, check_schema, classify
from .context import validation_context
from .core import is_valid, validate
from .models import RepetitionBounds, conforms_to
from .predicates import (
    boolean,
    double,
    int_,
    keyword,
    long,
    number,
    ratio,
    string,
    type_check,
)
from .types import (
    SUCCESS,
    Result,
    SchemaError,
    ValidationFailure,
    Validator,
    explain,
    fail,
    is_failure,
    is_success,
)
from .validators import (
    choice,
    combine,
    map_of,
    merged_map,
    open_map,
    optional,
    set_of,
    vector_of,
)

__all__ = [
    # Results
    "SUCCESS",
    "Result",
    "ValidationFailure",
    "SchemaError",
    "is_success",
    "is_failure",
    "fail",
    "explain",
    # Engine
    "validate",
    "is_valid",
    "classify",
    "check_schema",
    "SchemaKind",
    # Combinators
    "Validator",
    "optional",
    "choice",
    "combine",
    "set_of",
    "map_of",
    "vector_of",
    "open_map",
    "merged_map",
    # Type checks
    "type_check",
    "number",
    "string",
    "keyword",
    "boolean",
    "int_",
    "long",
    "double",
    "ratio",
    # Pydantic interop
    "conforms_to",
    "RepetitionBounds",
    # Configuration
    "validation_context",
]
