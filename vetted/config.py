"""
Context manager for validation configuration (e.g., strict records).
"""

import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional

# Python frames one level of a typical recursive schema takes
# (Lazy -> Record -> field container -> element -> Lazy)
FRAMES_PER_LEVEL = 8

# Context variables for run configuration
_strict_mode: ContextVar[bool] = ContextVar("strict_mode", default=False)
_max_depth: ContextVar[Optional[int]] = ContextVar("max_depth", default=None)


def is_strict() -> bool:
    """Check if strict records are currently enabled."""
    return _strict_mode.get()


def default_max_depth() -> int:
    """Depth limit derived from the interpreter recursion limit (125 at the default 1000)."""
    return sys.getrecursionlimit() // FRAMES_PER_LEVEL


def get_max_depth() -> int:
    """Maximum number of nested Lazy resolutions allowed in one run."""
    max_depth = _max_depth.get()
    return default_max_depth() if max_depth is None else max_depth


@contextmanager
def validation_context(
    *, strict: Optional[bool] = None, max_depth: Optional[int] = None
):
    """
    Context manager for validation configuration.

    Args:
        strict: If True, Record validators that don't set `strict`
               themselves reject keys that are not declared in the schema.
        max_depth: Limit on nested Lazy resolutions. Exceeding it yields a
               validation error instead of exhausting the call stack.

    Example:
        from vetted import Record, String, validate, validation_context

        schema = Record({"name": String()})

        # Normal - undeclared keys are ignored
        validate(schema, {"name": "Jane", "extra": 1})  # Pass

        # Strict - undeclared keys are reported
        with validation_context(strict=True):
            validate(schema, {"name": "Jane", "extra": 1})  # Fail
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    tokens = []
    if strict is not None:
        tokens.append((_strict_mode, _strict_mode.set(strict)))
    if max_depth is not None:
        tokens.append((_max_depth, _max_depth.set(max_depth)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
