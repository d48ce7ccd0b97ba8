"""
Core validator classes for vetted.

Provides the Validator base with operator composition, the V and Coerce leaf
nodes every primitive validator is built from, and to_validator().
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from .context import Context
from .exceptions import SchemaError
from .types import Error, Message, MessageLike, Ok, Outcome, to_message

CheckFn = Callable[[Any], Any]
ConvertFn = Callable[[Any], Any]

# Exceptions a conversion may raise for bad data. Anything else is a bug in
# the conversion itself and propagates.
DATA_ERRORS = (TypeError, ValueError, ArithmeticError, OSError)


class Validator:
    """
    Base class for library validators.

    Any callable taking a Context and returning an Outcome is a validator;
    subclasses additionally compose with `&` (chain) and `|` (union).
    """

    __slots__ = ()

    def __call__(self, ctx: Context) -> Outcome:
        raise NotImplementedError

    def __and__(self, other: Any) -> Validator:
        """
        Combine with AND logic: the right side validates the left's output.

        Usage:
            String() & Length(min=1)
        """
        from .combinators import Chain

        return Chain(self, other)

    def __rand__(self, other: Any) -> Validator:
        from .combinators import Chain

        return Chain(other, self)

    def __or__(self, other: Any) -> Validator:
        """
        Combine with OR logic: the first alternative to pass wins.

        Usage:
            String() | Number()
        """
        from .combinators import Union

        return Union(self, other)

    def __ror__(self, other: Any) -> Validator:
        from .combinators import Union

        return Union(other, self)


@dataclass(frozen=True, slots=True)
class V(Validator):
    """
    Immutable predicate validator node.

    Passes the cursor value through unchanged when `check` returns a truthy
    value, otherwise fails with `message`.
    """

    check: CheckFn
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        try:
            passed = self.check(ctx.value)
        except Exception:
            # A check that can't evaluate the value rejects it
            passed = False

        if not passed:
            return Error(self.message.render(ctx))

        return Ok(ctx.value)

    def with_message(self, msg: MessageLike) -> V:
        """Return new validator with custom error message."""
        return replace(self, message=to_message(msg, self.message.render))


@dataclass(frozen=True, slots=True)
class Coerce(Validator):
    """
    Immutable conversion validator node.

    `convert` returns the normalized value, or raises ValueError/TypeError to
    reject the input.
    """

    convert: ConvertFn
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        try:
            return Ok(self.convert(ctx.value))
        except DATA_ERRORS:
            return Error(self.message.render(ctx))

    def with_message(self, msg: MessageLike) -> Coerce:
        """Return new validator with custom error message."""
        return replace(self, message=to_message(msg, self.message.render))


def to_validator(v: Any) -> Callable[[Context], Outcome]:
    """
    Coerce a schema shorthand to a validator.

    Conversion rules:
        Validator | Callable -> pass through
        type -> Instance(type)
        dict -> Record with recursive conversion
        list -> ListOf(list[0]), or ListOf(Union(...)) for several item types
        tuple -> Tuple with one validator per position
    """
    # Imported here; these modules build on this one
    from .combinators import Union
    from .containers import ListOf, Record, Tuple
    from .validators import Instance

    if isinstance(v, Validator):
        return v

    if isinstance(v, type):
        return Instance(v)

    if isinstance(v, dict):
        return Record(v)

    if isinstance(v, list):
        if len(v) == 0:
            raise ValueError("Empty list cannot be converted to validator")
        if len(v) == 1:
            return ListOf(v[0])
        return ListOf(Union(*v))

    if isinstance(v, tuple):
        return Tuple(list(v))

    if callable(v):
        return v

    raise SchemaError(f"Cannot convert {type(v).__name__} to validator")
