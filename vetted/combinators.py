"""
Combinators for vetted.

Chain, Union, Default, Lazy and Nilable build validators out of other
validators. They only rely on the validator contract, so they compose with
any leaf, collection or adapter validator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import get_max_depth
from .context import Context
from .core import Validator, to_validator
from .exceptions import SchemaError
from .lib.format_helpers import stringify
from .types import Error, Ok, Outcome

logger = logging.getLogger(__name__)

ValidatorFn = Callable[[Context], Outcome]


@dataclass(frozen=True, slots=True)
class ChainV(Validator):
    """Logical AND: each stage validates the previous stage's output."""

    validators: tuple[ValidatorFn, ...]

    def __call__(self, ctx: Context) -> Outcome:
        current = ctx
        for validator in self.validators:
            outcome = validator(current)
            if not isinstance(outcome, Ok):
                return outcome
            current = current.accrete(outcome.value)

        return Ok(current.value)


@dataclass(frozen=True, slots=True)
class UnionV(Validator):
    """
    Logical OR: the first alternative to pass wins.

    Every alternative sees the same context. When all of them fail only the
    last alternative's errors are reported.
    """

    validators: tuple[ValidatorFn, ...]

    def __call__(self, ctx: Context) -> Outcome:
        base = ctx.clear_errors()
        outcome: Outcome = Ok(ctx.value)
        for validator in self.validators:
            outcome = validator(base)
            if isinstance(outcome, Ok):
                return outcome

        return outcome


@dataclass(frozen=True, slots=True)
class DefaultV(Validator):
    validator: ValidatorFn
    value: Any = None
    factory: Optional[Callable[[], Any]] = None

    def __call__(self, ctx: Context) -> Outcome:
        if ctx.value is None:
            substitute = self.factory() if self.factory is not None else self.value
            # The default still has to pass the wrapped validator
            ctx = ctx.with_value(substitute)
        return self.validator(ctx)


@dataclass(frozen=True, slots=True)
class LazyV(Validator):
    """
    Resolves the real validator on every call.

    This is what makes recursive schemas possible: the thunk only runs once a
    value reaches it, so schema depth is bounded by input depth.
    """

    thunk: Callable[[], Any]

    def __call__(self, ctx: Context) -> Outcome:
        max_depth = get_max_depth()
        if ctx.depth >= max_depth:
            logger.debug(
                "Lazy validator at path %r exceeded max depth %d", ctx.path, max_depth
            )
            return Error(f"Maximum validation depth of {max_depth} exceeded")

        produced = self.thunk()
        try:
            validator = to_validator(produced)
        except (SchemaError, ValueError):
            return Error(f"Expected validator function, got {stringify(produced)}")

        return validator(ctx.descend())


@dataclass(frozen=True, slots=True)
class NilableV(Validator):
    validator: ValidatorFn

    def __call__(self, ctx: Context) -> Outcome:
        if ctx.value is None:
            return Ok(None)
        return self.validator(ctx)


def Chain(*validators: Any) -> ChainV:
    """
    Apply validators in sequence, feeding each output into the next.

    Stops at the first failure and returns its errors unchanged.

    Usage:
        Chain(String(), StringToNumber(), Gte(0))
        String() & StringToNumber()          # same as Chain(...)
    """
    if not validators:
        raise SchemaError("Chain requires at least one validator")
    return ChainV(validators=tuple(to_validator(v) for v in validators))


def Union(*validators: Any) -> UnionV:
    """
    Try validators in order and pass with the first that succeeds.

    Usage:
        Union(Number(), StringToNumber())
        Number() | NoneValue()               # same as Union(...)
    """
    if not validators:
        raise SchemaError("Union requires at least one validator")
    return UnionV(validators=tuple(to_validator(v) for v in validators))


def Default(
    validator: Any,
    value: Any = None,
    *,
    factory: Optional[Callable[[], Any]] = None,
) -> DefaultV:
    """
    Substitute a default for None before validating.

    Args:
        validator: Validator applied to the value or its default
        value: Static default
        factory: Zero-argument function called on every use, for mutable defaults

    Usage:
        Default(Number(), 0)
        Default(ListOf(String()), factory=list)
    """
    if factory is not None and not callable(factory):
        raise SchemaError("Default factory must be a function")
    return DefaultV(validator=to_validator(validator), value=value, factory=factory)


def Lazy(thunk: Callable[[], Any]) -> LazyV:
    """
    Defer building a validator until a value reaches it.

    Usage:
        def tree():
            return Record({
                "value": Number(),
                "children": ListOf(Lazy(tree)),
            })
    """
    if not callable(thunk):
        raise SchemaError("Lazy requires a function returning a validator")
    return LazyV(thunk=thunk)


def Nilable(validator: Any) -> NilableV:
    """Allow None, validate anything else."""
    return NilableV(validator=to_validator(validator))
