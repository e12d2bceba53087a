"""
Context manager for validation configuration (e.g., message rendering).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Optional

# Context variable for truncating rendered values in failure messages
_repr_limit: ContextVar[Optional[int]] = ContextVar("repr_limit", default=None)


def current_repr_limit() -> Optional[int]:
    """Get the active repr limit, or None when values are rendered in full."""
    return _repr_limit.get()


def render(value: Any) -> str:
    """Render a value for a failure message, honoring the active repr limit."""
    text = repr(value)
    limit = _repr_limit.get()
    if limit is not None and len(text) > limit:
        return text[:limit] + "..."
    return text


@contextmanager
def validation_context(*, repr_limit: Optional[int] = None):
    """
    Context manager for validation configuration.

    Args:
        repr_limit: If set, candidate values rendered into failure reasons
                    are truncated to this many characters. Only message text
                    is affected, never the validation outcome.

    Example:
        from datatemplate import validate, validation_context

        with validation_context(repr_limit=40):
            result = validate({"rows": [int]}, huge_payload)
    """
    if repr_limit is not None and repr_limit < 0:
        raise ValueError("repr_limit must be non-negative")
    token = _repr_limit.set(repr_limit)
    try:
        yield
    finally:
        _repr_limit.reset(token)
