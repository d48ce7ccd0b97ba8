"""
Adapters for values that aren't plain dicts and lists.

Each adapter only implements the validator contract, so it plugs into Chain,
Union and the collection validators like any other validator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .containers import reduce_validators
from .context import Context
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
    ValidationError,
    to_message,
)

logger = logging.getLogger(__name__)

ValidatorFn = Callable[[Context], Outcome]

_SCALARS = (str, bytes, bytearray, bool, int, float, complex)


def _expected(description: str) -> Callable[[Context], str]:
    def message(ctx: Context) -> str:
        return f"Expected {description}, got {stringify(ctx.value)}"

    return message


@dataclass(frozen=True, slots=True)
class AttrsV(Validator):
    """Record validator reading declared attributes off arbitrary objects."""

    fields: Mapping[str, ValidatorFn]
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if value is None or isinstance(value, (Mapping, *_SCALARS)):
            return Error(self.message.render(ctx))

        result = reduce_validators(
            ctx,
            (
                (name, validator, getattr(value, name, None))
                for name, validator in self.fields.items()
            ),
        )

        if result.errors:
            return Errors(result.errors)
        return Ok(dict(result.output))


@dataclass(frozen=True, slots=True)
class IterableV(Validator):
    """Validator for any iterable, materialized into a list."""

    items: ValidatorFn
    message: Message

    def __call__(self, ctx: Context) -> Outcome:
        value = ctx.value
        if not isinstance(value, Iterable) or isinstance(value, (Mapping, str, bytes)):
            return Error(self.message.render(ctx))

        result = reduce_validators(
            ctx, ((i, self.items, item) for i, item in enumerate(value))
        )

        if result.errors:
            return Errors(result.errors)
        return Ok(list(result.output.values()))


@dataclass(frozen=True, slots=True)
class ModelV(Validator):
    """
    Validator backed by a pydantic model.

    Pydantic's error locations are appended to the current path, so nested
    model errors read like any other vetted error.
    """

    model: type[BaseModel]
    as_dict: bool = False

    def __call__(self, ctx: Context) -> Outcome:
        try:
            instance = self.model.model_validate(ctx.value)
        except PydanticValidationError as e:
            logger.debug(
                "%s rejected value at path %r with %d error(s)",
                self.model.__name__,
                ctx.path,
                e.error_count(),
            )
            return Errors(
                tuple(
                    ValidationError((*ctx.path, *err["loc"]), err["msg"])
                    for err in e.errors()
                )
            )

        if self.as_dict:
            return Ok(instance.model_dump())
        return Ok(instance)


def Attrs(fields: Mapping[str, Any], message: MessageLike = None) -> AttrsV:
    """
    Validate declared attributes of an object (dataclass, namedtuple, any class).

    Missing attributes are validated as None. The output is a dict.

    Usage:
        Attrs({"x": Number(), "y": Number()})
    """
    if not isinstance(fields, Mapping):
        raise SchemaError("Attrs fields must be a mapping of attribute names to validators")
    if not all(isinstance(name, str) for name in fields):
        raise SchemaError("Attrs field names must be strings")
    return AttrsV(
        fields={name: to_validator(v) for name, v in fields.items()},
        message=to_message(message, _expected("object")),
    )


def IterableOf(item: Any, message: MessageLike = None) -> IterableV:
    """
    Validate every item of an iterable (generator, range, deque, ...).

    Strings, bytes and mappings are rejected. The output is a list.
    """
    return IterableV(
        items=to_validator(item),
        message=to_message(message, _expected("iterable")),
    )


def Model(model: type[BaseModel], as_dict: bool = False) -> ModelV:
    """
    Validate a value with a pydantic model.

    Args:
        model: A pydantic BaseModel subclass
        as_dict: Output model_dump() instead of the model instance

    Usage:
        class User(BaseModel):
            name: str

        ListOf(Model(User))
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise SchemaError("Model requires a pydantic BaseModel subclass")
    return ModelV(model=model, as_dict=as_dict)
