"""
Immutable validation context and generic navigation.

A Context is created once per validate() call and threaded through every
validator. Each operation returns a new Context.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field, replace
from functools import reduce, singledispatch
from itertools import islice
from typing import Any, Iterable

from .types import Path, PathSegment, ValidationError


class EntryIndex(int):
    """
    Path segment addressing the n-th (key, value) entry of a mapping.

    Compares and renders like a plain int, so a dictionary error path reads
    (0, 1) while navigation still knows to pick the entry rather than key 0.
    """

    __slots__ = ()


@singledispatch
def step(container: Any, segment: PathSegment) -> Any:
    """
    Navigate one level into `container`.

    Objects that aren't mappings, sequences or sets are read by attribute.
    Register more container types with `step.register`.
    """
    if container is None or not isinstance(segment, str):
        return None
    return getattr(container, segment, None)


@step.register
def _(container: Mapping, segment: PathSegment) -> Any:
    if isinstance(segment, EntryIndex):
        if 0 <= segment < len(container):
            return next(islice(container.items(), segment, None))
        return None
    try:
        return container.get(segment)
    except TypeError:
        # Unhashable segment
        return None


@step.register
def _(container: Sequence, segment: PathSegment) -> Any:
    if isinstance(segment, str) and hasattr(type(container), "_fields"):
        # namedtuple field
        return getattr(container, segment, None)
    if not isinstance(segment, int) or isinstance(segment, bool):
        return None
    if 0 <= segment < len(container):
        return container[segment]
    return None


@step.register
def _(container: Set, segment: PathSegment) -> Any:
    if not isinstance(segment, int) or isinstance(segment, bool):
        return None
    if 0 <= segment < len(container):
        return next(islice(container, segment, None))
    return None


def get_in(root: Any, path: Iterable[PathSegment]) -> Any:
    """Resolve `path` against `root`; unreachable locations resolve to None."""
    return reduce(step, path, root)


@dataclass(frozen=True, slots=True)
class Context:
    """
    Cursor state for a validation run.

    Attributes:
        value: The value under the cursor
        path: Location of the cursor within `input`
        input: The original input, never changed
        output: Output assembled so far by the enclosing container validator
        errors: Errors accumulated so far, in encounter order
        depth: Number of nested Lazy resolutions above the cursor
    """

    value: Any
    path: Path = ()
    input: Any = None
    output: Any = None
    errors: tuple[ValidationError, ...] = field(default=())
    depth: int = 0

    @classmethod
    def create(cls, input: Any) -> Context:
        """Seed a context for a fresh run over `input`."""
        return cls(value=input, path=(), input=input, output=None, errors=())

    def enter_path(self, segment: PathSegment) -> Context:
        """Move the cursor one level down."""
        new_path = (*self.path, segment)
        return replace(self, path=new_path, value=get_in(self.input, new_path))

    def replace_path(self, index: int, segment: PathSegment) -> Context:
        """Truncate the path to `index` segments, then enter `segment`."""
        new_path = (*self.path[:index], segment)
        return replace(self, path=new_path, value=get_in(self.input, new_path))

    def leave_path(self) -> Context:
        """Move the cursor one level up."""
        new_path = self.path[:-1]
        return replace(self, path=new_path, value=get_in(self.input, new_path))

    def move_to(self, index: int, segment: PathSegment, value: Any) -> Context:
        """
        Like replace_path, but with the value already in hand.

        Collection validators use this for elements they are iterating, so
        moving to a sibling never re-walks `input` from the root.
        """
        return replace(self, path=(*self.path[:index], segment), value=value)

    def with_value(self, value: Any) -> Context:
        return replace(self, value=value)

    def with_output(self, output: Any) -> Context:
        return replace(self, output=output)

    def clear_errors(self) -> Context:
        return replace(self, errors=())

    def with_errors(self, errors: Iterable[ValidationError]) -> Context:
        return replace(self, errors=tuple(errors))

    def descend(self) -> Context:
        return replace(self, depth=self.depth + 1)

    def raise_error(self, err: str | ValidationError) -> Context:
        """Append an error; a bare message is located at the current path."""
        if isinstance(err, str):
            err = ValidationError(self.path, err)
        return replace(self, errors=(*self.errors, err))

    def raise_errors(self, errs: Iterable[str | ValidationError]) -> Context:
        return reduce(Context.raise_error, errs, self)

    def accrete(self, value: Any) -> Context:
        """Store a validated value as the cursor value and the whole output."""
        return replace(self, value=value, output=value)

    def accrete_at(self, key: PathSegment, value: Any) -> Context:
        """Store a validated value as the cursor value and at output[key]."""
        output = dict(self.output or {})
        output[key] = value
        return replace(self, value=value, output=output)
