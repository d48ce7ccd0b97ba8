"""
Schema operations for vetted.

Provides validate(), assert_valid(), parse() and errors_to_string(). This is
the only place the Outcome algebra is turned into an external result, and
assert_valid() is the only place a data failure becomes an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Union

from .context import Context
from .exceptions import AssertValidError, SchemaError
from .lib.format_helpers import render_error
from .types import (
    Fail,
    Outcome,
    Pass,
    ValidationError,
    ValidationResult,
    result_case,
)

logger = logging.getLogger(__name__)

FailMessage = Union[str, Callable[[Fail], str], None]


def validate(validator: Callable[[Context], Outcome], input: Any) -> ValidationResult:
    """
    Validate a value.

    Args:
        validator: Any validator (a callable taking a Context)
        input: The value to validate

    Returns:
        Pass(input, output) if validation passes
        Fail(input, errors) if validation fails

    Raises:
        SchemaError: If `validator` is not callable

    Usage:
        schema = Record({
            "name": String(),
            "age": Number() & Gte(0),
        })
        result = validate(schema, {"name": "Alice", "age": 30})
    """
    if not callable(validator):
        raise SchemaError(f"Validator must be a function, got {type(validator).__name__}")

    context = Context.create(input)
    outcome = validator(context)

    return result_case(
        outcome,
        ok=lambda value: Pass(input=input, output=context.accrete(value).output),
        err=lambda message: Fail(input=input, errors=context.raise_error(message).errors),
        errs=lambda errors: Fail(input=input, errors=context.raise_errors(errors).errors),
    )


def is_valid(result: ValidationResult) -> bool:
    return isinstance(result, Pass)


def errors_to_string(errors: Iterable[ValidationError]) -> str:
    """
    Format errors one per line as "<dot.joined.path>: <message>".

    Errors at the root have no path to show and render as the bare message.
    """
    return "\n".join(render_error(error) for error in errors)


def _default_fail_message(result: Fail) -> str:
    return f"ValidationError:\n{errors_to_string(result.errors)}"


def assert_valid(
    validator: Callable[[Context], Outcome], input: Any, message: FailMessage = None
) -> Pass:
    """
    Validate input and raise if invalid.

    Args:
        validator: Any validator
        input: The value to validate
        message: Exception message, or a function building it from the Fail result

    Returns:
        The Pass result

    Raises:
        AssertValidError: If validation fails. The Fail result is on `.result`
    """
    result = validate(validator, input)
    if isinstance(result, Pass):
        return result

    if message is None:
        text = _default_fail_message(result)
    elif isinstance(message, str):
        text = message
    elif callable(message):
        text = message(result)
    else:
        raise SchemaError(
            f"Message must be a string or a function, got {type(message).__name__}"
        )

    logger.debug("Validation failed with %d error(s)", len(result.errors))
    raise AssertValidError(text, result)


def parse(
    validator: Callable[[Context], Outcome], input: Any, message: FailMessage = None
) -> Any:
    """
    Validate input and return the normalized output.

    Usage:
        port = parse(StringToNumber() & Between(1, 65535), "8080")  # 8080

    Raises:
        AssertValidError: If validation fails
    """
    return assert_valid(validator, input, message).output
