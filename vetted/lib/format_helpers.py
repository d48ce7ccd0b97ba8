"""
Helper functions for rendering values and errors in messages.
"""

import json
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable

from ..types import PathSegment, ValidationError


def stringify(value: Any) -> str:
    """
    Render a value unambiguously for an error message.

    Strings are double-quoted so "5" and 5 read differently, None renders as
    None, dates render in ISO-8601 and everything else uses repr().
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    try:
        return repr(value)
    except Exception:
        # A broken __repr__ shouldn't mask the validation failure
        return f"<{type(value).__name__} object>"


def render_segment(segment: PathSegment) -> str:
    """Render a path segment without container-specific markup."""
    if isinstance(segment, Enum):
        return str(segment.value)
    return str(segment)


def render_path(path: Iterable[PathSegment]) -> str:
    return ".".join(render_segment(segment) for segment in path)


def render_error(error: ValidationError) -> str:
    """Render one error as "<dot.joined.path>: <message>"."""
    if not error.path:
        return error.message
    return f"{render_path(error.path)}: {error.message}"
