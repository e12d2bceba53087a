"""
Pydantic interop for datatemplate.

Provides conforms_to() for using pydantic models as schemas, and the
option models combinators use to check their own configuration.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError

from .types import SUCCESS, Result, SchemaError, ValidationFailure, Validator


class RepetitionBounds(BaseModel):
    """
    Length bounds accepted by vector_of().

    Options are spelled count, min and max; min_length and max_length are
    accepted as well.
    """

    model_config = ConfigDict(
        extra="forbid", frozen=True, strict=True, populate_by_name=True
    )

    count: Optional[NonNegativeInt] = None
    min_length: Optional[NonNegativeInt] = Field(default=None, alias="min")
    max_length: Optional[NonNegativeInt] = Field(default=None, alias="max")

    @classmethod
    def parse(cls, **options: Any) -> RepetitionBounds:
        """Build bounds, raising SchemaError for unknown or invalid options."""
        for alias, name in (("min", "min_length"), ("max", "max_length")):
            if alias in options and name in options:
                raise SchemaError(f"Give only one of {alias!r} and {name!r}")
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise SchemaError(f"Invalid vector_of options {options!r}: {e}") from e

    def describe(self) -> str:
        parts = [
            f"{name}={value}"
            for name, value in self.model_dump(by_alias=True).items()
            if value is not None
        ]
        return ", ".join(parts)


def _failures_from(error: ValidationError) -> list[ValidationFailure]:
    return [
        ValidationFailure(tuple(detail["loc"]), detail["msg"])
        for detail in error.errors()
    ]


def conforms_to(model: type[BaseModel]) -> Validator:
    """
    Validate values against a pydantic model, without coercion.

    The model runs in strict mode and the validated instance is discarded;
    each pydantic error becomes a ValidationFailure located by its loc.

    Usage:
        class User(BaseModel):
            name: str
            age: int

        validate({"users": vector_of(conforms_to(User))}, payload)
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise SchemaError(f"conforms_to() requires a pydantic model, got {model!r}")

    def check(value: Any) -> Result:
        try:
            model.model_validate(value, strict=True)
        except ValidationError as e:
            return _failures_from(e)
        return SUCCESS

    return Validator(check=check, name=f"conforms_to({model.__name__})")
