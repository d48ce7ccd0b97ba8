"""
Collection validators for vetted.

Indexed containers (ListOf, TupleOf, SetOf and the fixed-length ListTuple and
Tuple) and keyed containers (Record and DictOf). All of them check the
container kind first, then validate every element and report every element
error in one pass.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from .config import is_strict
from .context import Context, EntryIndex
from .core import Validator, to_validator
from .exceptions import SchemaError
from .lib.format_helpers import stringify
from .types import (
    Error,
    Errors,
    Message,
    MessageLike,
    Ok,
    Outcome,
    PathSegment,
    ValidationError,
    result_case,
    to_message,
)
from .validators import String

ValidatorFn = Callable[[Context], Outcome]

# (path segment, validator, element value)
Step = tuple[PathSegment, ValidatorFn, Any]


def outcome_errors(ctx: Context, outcome: Outcome) -> tuple[ValidationError, ...]:
    """Path-qualified errors of an outcome produced at `ctx`."""
    return result_case(
        outcome,
        ok=lambda _value: (),
        err=lambda message: (ValidationError(ctx.path, message),),
        errs=tuple,
    )


def reduce_validators(context: Context, steps: Iterable[Step]) -> Context:
    """
    Run each step's validator on its element and collect the results.

    The returned context's output maps each passing segment to its validated
    value; its errors hold every failure in step order. A failing element is
    never written to the output.
    """
    depth = len(context.path)
    base = context.clear_errors().with_output(None)
    output: dict[PathSegment, Any] = {}
    errors: list[ValidationError] = []

    for segment, validator, value in steps:
        item_ctx = base.move_to(depth, segment, value)
        outcome = validator(item_ctx)
        if isinstance(outcome, Ok):
            output[segment] = outcome.value
        else:
            errors.extend(outcome_errors(item_ctx, outcome))

    return base.with_output(output).with_errors(errors)


def _kind_message(description: str) -> Callable[[Context], str]:
    def message(ctx: Context) -> str:
        return f"Expected {description}, got {stringify(ctx.value)}"

    return message


@dataclass(frozen=True, slots=True)
class SeqV(Validator):
    """Validator for homogeneous lists, tuples and sets."""

    items: ValidatorFn
    kind: type | tuple[type, ...]
    build: Callable[[Any, Iterable[Any]], Any]
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if not isinstance(value, self.kind):
            return Error(self.message.render(ctx))

        result = reduce_validators(
            ctx, ((i, self.items, item) for i, item in enumerate(value))
        )

        if result.errors:
            return Errors(result.errors)

        items = list(result.output.values())
        try:
            return Ok(self.build(value, items))
        except TypeError:
            # A set can't hold items its validator turned unhashable, e.g. dicts
            return Error(f"Expected hashable validated items, got {stringify(items)}")


@dataclass(frozen=True, slots=True)
class TupleV(Validator):
    """Validator for fixed-length positional lists or tuples."""

    validators: tuple[ValidatorFn, ...]
    kind: type
    build: Callable[[Iterable[Any]], Any]
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if not isinstance(value, self.kind) or len(value) != len(self.validators):
            return Error(self.message.render(ctx))

        result = reduce_validators(
            ctx,
            (
                (i, validator, item)
                for i, (validator, item) in enumerate(zip(self.validators, value))
            ),
        )

        if result.errors:
            return Errors(result.errors)
        return Ok(self.build(result.output.values()))


@dataclass(frozen=True, slots=True)
class RecordV(Validator):
    """
    Validator for mappings with a fixed set of declared keys.

    Declared keys missing from the input are validated as None, so the field
    validator decides whether absence is allowed. Undeclared keys are ignored
    unless strict.
    """

    fields: Mapping[Any, ValidatorFn]
    strict: Optional[bool]
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if not isinstance(value, Mapping):
            return Error(self.message.render(ctx))

        result = reduce_validators(
            ctx,
            ((key, validator, value.get(key)) for key, validator in self.fields.items()),
        )

        strict = is_strict() if self.strict is None else self.strict
        if strict:
            unexpected = [
                ValidationError((*ctx.path, key), "Unexpected key")
                for key in value
                if key not in self.fields
            ]
            result = result.raise_errors(unexpected)

        if result.errors:
            return Errors(result.errors)
        return Ok(dict(result.output))


@dataclass(frozen=True, slots=True)
class MapV(Validator):
    """
    Validator for mappings of arbitrary size with uniform keys and values.

    Entry i's key is validated at path (..., i, 0) and its value at
    (..., i, 1), so both sides of an entry can fail independently.
    """

    keys: ValidatorFn
    values: ValidatorFn
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if not isinstance(value, Mapping):
            return Error(self.message.render(ctx))

        depth = len(ctx.path)
        base = ctx.clear_errors().with_output(None)
        output: dict[Any, Any] = {}
        errors: list[ValidationError] = []

        for index, (key, item) in enumerate(value.items()):
            entry_ctx = base.move_to(depth, EntryIndex(index), (key, item))
            key_ctx = entry_ctx.move_to(depth + 1, 0, key)
            item_ctx = entry_ctx.move_to(depth + 1, 1, item)

            key_outcome = self.keys(key_ctx)
            item_outcome = self.values(item_ctx)

            if not (isinstance(key_outcome, Ok) and isinstance(item_outcome, Ok)):
                errors.extend(outcome_errors(key_ctx, key_outcome))
                errors.extend(outcome_errors(item_ctx, item_outcome))
                continue

            try:
                output[key_outcome.value] = item_outcome.value
            except TypeError:
                errors.append(
                    ValidationError(
                        key_ctx.path,
                        f"Expected hashable validated key, got {stringify(key_outcome.value)}",
                    )
                )

        if errors:
            return Errors(tuple(errors))
        return Ok(output)


def _build_set(value: Any, items: Iterable[Any]) -> Any:
    return frozenset(items) if isinstance(value, frozenset) else set(items)


def ListOf(item: Any, message: MessageLike = None) -> SeqV:
    """
    Validate a list and every item in it.

    Usage:
        ListOf(Number())
        ListOf(Record({"id": String()}))
    """
    return SeqV(
        items=to_validator(item),
        kind=list,
        build=lambda _value, items: list(items),
        message=to_message(message, _kind_message("list")),
    )


def TupleOf(item: Any, message: MessageLike = None) -> SeqV:
    """Validate a tuple of any length and every item in it."""
    return SeqV(
        items=to_validator(item),
        kind=tuple,
        build=lambda _value, items: tuple(items),
        message=to_message(message, _kind_message("tuple")),
    )


def SetOf(item: Any, message: MessageLike = None) -> SeqV:
    """
    Validate a set or frozenset and every item in it.

    Items are addressed by iteration order; the output keeps the input's set type.
    """
    return SeqV(
        items=to_validator(item),
        kind=(set, frozenset),
        build=_build_set,
        message=to_message(message, _kind_message("set")),
    )


def _fixed(
    validators: Sequence[Any],
    kind: type,
    name: str,
    build: Callable[[Iterable[Any]], Any],
    message: MessageLike,
) -> TupleV:
    if isinstance(validators, (str, bytes)) or not isinstance(validators, Sequence):
        raise SchemaError(f"{name} validators must be a list or tuple")
    converted = tuple(to_validator(v) for v in validators)
    n = len(converted)

    def default_message(ctx: Context) -> str:
        if isinstance(ctx.value, kind):
            return (
                f"Expected {name} of length {n}, "
                f"got length {len(ctx.value)}: {stringify(ctx.value)}"
            )
        return f"Expected {name} of length {n}, got {stringify(ctx.value)}"

    return TupleV(
        validators=converted,
        kind=kind,
        build=build,
        message=to_message(message, default_message),
    )


def ListTuple(validators: Sequence[Any], message: MessageLike = None) -> TupleV:
    """
    Validate a fixed-length list with one validator per position.

    Usage:
        ListTuple([Number(), Number()])     # an [x, y] pair
    """
    return _fixed(validators, list, "list-tuple", list, message)


def Tuple(validators: Sequence[Any], message: MessageLike = None) -> TupleV:
    """
    Validate a fixed-length tuple with one validator per position.

    Usage:
        Tuple([String(), Number()])         # ("name", 42)
    """
    return _fixed(validators, tuple, "tuple", tuple, message)


def Record(
    fields: Mapping[Any, Any],
    strict: Optional[bool] = None,
    message: MessageLike = None,
) -> RecordV:
    """
    Validate a mapping with declared keys.

    Args:
        fields: Mapping of key to validator (or schema shorthand)
        strict: Reject undeclared keys. None defers to validation_context()
        message: Message for non-mapping values

    Usage:
        Record({
            "name": String(),
            "email": Nilable(String()),
            "tags": [String()],
        })
    """
    if not isinstance(fields, Mapping):
        raise SchemaError(
            "Record fields must be a mapping of keys to validators, "
            f"got {type(fields).__name__}"
        )
    return RecordV(
        fields={key: to_validator(v) for key, v in fields.items()},
        strict=strict,
        message=to_message(message, _kind_message("record")),
    )


def DictOf(*validators: Any, message: MessageLike = None) -> MapV:
    """
    Validate a mapping of any size with a key and a value validator.

    Usage:
        DictOf(Number())                   # str keys, number values
        DictOf(StringToNumber(), String())
    """
    if len(validators) == 1:
        keys, values = String(), validators[0]
    elif len(validators) == 2:
        keys, values = validators
    else:
        raise SchemaError(
            f"DictOf takes a value validator, or a key and a value validator, "
            f"got {len(validators)} arguments"
        )

    return MapV(
        keys=to_validator(keys),
        values=to_validator(values),
        message=to_message(message, _kind_message("dict")),
    )
