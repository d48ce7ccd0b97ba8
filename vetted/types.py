"""
Type definitions for vetted.

Provides the Outcome algebra (Ok/Error/Errors), the external validation
result (Pass/Fail), message variants and type aliases.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

from .exceptions import SchemaError

if TYPE_CHECKING:
    from .context import Context

T = TypeVar("T")


# Type aliases
PathSegment = Hashable
Path = tuple[PathSegment, ...]


@dataclass(frozen=True, slots=True)
class ValidationError:
    """A single failure located at `path` within the input."""

    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing the (possibly transformed) value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Error:
    """Single failure at the current path."""

    message: str

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Errors:
    """Multiple failures, already path-qualified."""

    errors: tuple[ValidationError, ...]

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Outcome = Union[Ok[Any], Error, Errors]


def _identity(x: Any) -> Any:
    return x


def result_case(
    outcome: Outcome,
    ok: Callable[[Any], Any] = _identity,
    err: Callable[[str], Any] = _identity,
    errs: Callable[[tuple[ValidationError, ...]], Any] = _identity,
) -> Any:
    """
    Dispatch an outcome to the handler for its variant.

    Raises:
        SchemaError: If `outcome` is not an Ok, Error or Errors. This means a
            validator broke the contract, which is a programming error.
    """
    match outcome:
        case Ok(value=value):
            return ok(value)
        case Error(message=message):
            return err(message)
        case Errors(errors=errors):
            return errs(errors)

    raise SchemaError(f"Could not match outcome {outcome!r}")


@dataclass(frozen=True, slots=True)
class Pass:
    """Validation passed; `output` holds the normalized value."""

    input: Any
    output: Any

    @property
    def status(self) -> str:
        return "pass"

    @property
    def valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Fail:
    """Validation failed; every violation is listed in `errors`."""

    input: Any
    errors: tuple[ValidationError, ...]

    @property
    def output(self) -> None:
        return None

    @property
    def status(self) -> str:
        return "fail"

    @property
    def valid(self) -> bool:
        return False


ValidationResult = Union[Pass, Fail]


@dataclass(frozen=True, slots=True)
class StaticMessage:
    """A fixed error message."""

    text: str

    def render(self, ctx: Context) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class DynamicMessage:
    """An error message computed from the failing context."""

    fn: Callable[[Context], str]

    def render(self, ctx: Context) -> str:
        return self.fn(ctx)


Message = Union[StaticMessage, DynamicMessage]
MessageLike = Union[str, Callable[["Context"], str], StaticMessage, DynamicMessage, None]


def to_message(message: MessageLike, default: Callable[[Context], str]) -> Message:
    """
    Normalize a user supplied message option.

    Conversion rules:
        None -> DynamicMessage(default)
        str -> StaticMessage
        StaticMessage | DynamicMessage -> pass through
        Callable -> DynamicMessage
    """
    if message is None:
        return DynamicMessage(default)
    if isinstance(message, (StaticMessage, DynamicMessage)):
        return message
    if isinstance(message, str):
        return StaticMessage(message)
    if callable(message):
        return DynamicMessage(message)

    raise SchemaError(
        f"Message must be a string or a function, got {type(message).__name__}"
    )
