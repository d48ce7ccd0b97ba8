"""
Built-in leaf validators for vetted.

Provides factory functions that return V (predicate) and Coerce (conversion)
instances. Every factory takes an optional `message`: a static string or a
function of the failing Context.
"""

from __future__ import annotations

import enum
import math
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from numbers import Real
from typing import Any, Callable, Iterable

from .context import Context
from .core import Coerce, V
from .exceptions import SchemaError
from .lib.format_helpers import stringify
from .types import MessageLike, to_message

UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
INTEGER_PATTERN = re.compile(r"^\s*[-+]?\d+\s*$")


def _expected(description: str) -> Callable[[Context], str]:
    """Default message: "Expected <description>, got <value>"."""

    def message(ctx: Context) -> str:
        return f"Expected {description}, got {stringify(ctx.value)}"

    return message


def _is_number(x: Any) -> bool:
    return isinstance(x, (Real, Decimal)) and not isinstance(x, bool)


def _is_finite_number(x: Any) -> bool:
    return _is_number(x) and math.isfinite(x)


def String(message: MessageLike = None) -> V:
    """
    Validate that value is a str.

    Usage:
        String()
        String(message="Name must be text")
    """
    return V(
        check=lambda x: isinstance(x, str),
        message=to_message(message, _expected("string")),
    )


def Number(message: MessageLike = None) -> V:
    """Validate that value is a real number. Booleans are rejected."""
    return V(check=_is_number, message=to_message(message, _expected("number")))


def Numeric(message: MessageLike = None) -> V:
    """
    Validate that value is a string holding a finite number, e.g. "42" or "-1.5".

    The original string is passed through; use StringToNumber to convert.
    """

    def check(x: Any) -> bool:
        return isinstance(x, str) and math.isfinite(float(x))

    return V(check=check, message=to_message(message, _expected("numeric string")))


def Boolean(message: MessageLike = None) -> V:
    return V(
        check=lambda x: isinstance(x, bool),
        message=to_message(message, _expected("boolean")),
    )


def NoneValue(message: MessageLike = None) -> V:
    return V(check=lambda x: x is None, message=to_message(message, _expected("None")))


def Regex(pattern: str, message: MessageLike = None) -> V:
    """
    Validate string fully matches regex pattern.

    Usage:
        Regex(r"[a-z]+")
        Regex(r"\\d{3}-\\d{4}")
    """
    if not isinstance(pattern, str):
        raise SchemaError("Expected a regex pattern string")
    compiled = re.compile(pattern)

    def check(x: Any) -> bool:
        return isinstance(x, str) and compiled.fullmatch(x) is not None

    return V(
        check=check,
        message=to_message(message, _expected(f"string matching {pattern}")),
    )


def Uuid(message: MessageLike = None) -> V:
    """Validate a lower-case, hyphenated UUID string."""
    return Regex(
        UUID_PATTERN, message=to_message(message, _expected("UUID string"))
    )


def Literal(expected: Any, message: MessageLike = None) -> V:
    """Validate exact equality."""

    def check(x: Any) -> bool:
        # True == 1 in Python; a literal True shouldn't accept 1
        return isinstance(x, bool) == isinstance(expected, bool) and x == expected

    return V(
        check=check,
        message=to_message(message, _expected(f"literal {stringify(expected)}")),
    )


def OneOf(
    values: Iterable[Any] | type[enum.Enum], message: MessageLike = None
) -> V:
    """
    Validate value is one of a set of allowed values.

    Usage:
        OneOf(["active", "inactive", "pending"])
        OneOf(Color)        # members of an enum.Enum subclass
    """
    if isinstance(values, type) and issubclass(values, enum.Enum):
        enum_cls = values
        description = ", ".join(stringify(member) for member in enum_cls)

        def check(x: Any) -> bool:
            return isinstance(x, enum_cls)

    else:
        allowed = tuple(values)
        description = ", ".join(stringify(v) for v in allowed)

        def check(x: Any) -> bool:
            return x in allowed

    return V(check=check, message=to_message(message, _expected(f"one of {description}")))


def Predicate(fn: Callable[[Any], Any], message: MessageLike = None) -> V:
    """
    Create validator from arbitrary predicate function.

    Usage:
        Predicate(lambda x: x > 0, "Must be positive")
        Predicate(str.isalpha, "Must be alphabetic")
    """
    if not callable(fn):
        raise SchemaError("Predicate must be a function")
    return V(check=fn, message=to_message(message, _expected("value passing predicate")))


def Instance(cls: type | tuple[type, ...], message: MessageLike = None) -> V:
    """
    Validate that value is an instance of a class.

    Usage:
        Instance(Decimal)
        Instance((list, tuple))
    """
    classes = cls if isinstance(cls, tuple) else (cls,)
    if not classes or not all(isinstance(c, type) for c in classes):
        raise SchemaError("Instance requires a class or a tuple of classes")
    name = " or ".join(c.__name__ for c in classes)

    return V(
        check=lambda x: isinstance(x, classes),
        message=to_message(message, _expected(f"instance of {name}")),
    )


def Date(message: MessageLike = None) -> V:
    """Validate that value is a datetime.date (datetime included)."""
    return V(
        check=lambda x: isinstance(x, date),
        message=to_message(message, _expected("valid date")),
    )


def Gt(bound: Any, message: MessageLike = None) -> V:
    """Validate greater than."""
    return V(check=lambda x: x > bound, message=to_message(message, _expected(f"value > {bound}")))


def Gte(bound: Any, message: MessageLike = None) -> V:
    """Validate greater than or equal."""
    return V(check=lambda x: x >= bound, message=to_message(message, _expected(f"value >= {bound}")))


def Lt(bound: Any, message: MessageLike = None) -> V:
    """Validate less than."""
    return V(check=lambda x: x < bound, message=to_message(message, _expected(f"value < {bound}")))


def Lte(bound: Any, message: MessageLike = None) -> V:
    """Validate less than or equal."""
    return V(check=lambda x: x <= bound, message=to_message(message, _expected(f"value <= {bound}")))


def Between(
    lower: Any, upper: Any, inclusive: bool = True, message: MessageLike = None
) -> V:
    """Validate value is between bounds."""
    if inclusive:

        def check(x: Any) -> bool:
            return lower <= x <= upper

        return V(
            check=check,
            message=to_message(message, _expected(f"value between {lower} and {upper}")),
        )

    def check_exclusive(x: Any) -> bool:
        return lower < x < upper

    return V(
        check=check_exclusive,
        message=to_message(
            message, _expected(f"value between {lower} and {upper} (exclusive)")
        ),
    )


def Length(
    min: int | None = None, max: int | None = None, message: MessageLike = None
) -> V:
    """
    Validate length is within range (inclusive).

    Usage:
        Length(1, 10)      # 1 to 10 items
        Length(min=5)      # At least 5
        Length(max=20)     # At most 20
    """

    def check(x: Any) -> bool:
        n = len(x)
        if min is not None and n < min:
            return False
        if max is not None and n > max:
            return False
        return True

    parts = []
    if min is not None:
        parts.append(f">= {min}")
    if max is not None:
        parts.append(f"<= {max}")
    description = f"length {' and '.join(parts)}" if parts else "value with a length"

    return V(check=check, message=to_message(message, _expected(description)))


def StringToNumber(accept_numbers: bool = False, message: MessageLike = None) -> Coerce:
    """
    Convert a numeric string to an int or float.

    Args:
        accept_numbers: Also pass through values that are already finite numbers
    """

    def convert(x: Any) -> int | float:
        if accept_numbers and _is_finite_number(x):
            return x
        if not isinstance(x, str):
            raise TypeError(type(x).__name__)
        if INTEGER_PATTERN.match(x):
            return int(x)
        number = float(x)
        if not math.isfinite(number):
            raise ValueError(x)
        return number

    return Coerce(convert=convert, message=to_message(message, _expected("numeric string")))


def StringToBoolean(accept_booleans: bool = False, message: MessageLike = None) -> Coerce:
    """Convert "true"/"false" (any case) to a bool."""

    def convert(x: Any) -> bool:
        if accept_booleans and isinstance(x, bool):
            return x
        if not isinstance(x, str):
            raise TypeError(type(x).__name__)
        lowered = x.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(x)

    return Coerce(convert=convert, message=to_message(message, _expected("boolean-string")))


def _parse_iso(x: str) -> datetime:
    # fromisoformat() only accepts a trailing Z from 3.11
    if x.endswith(("Z", "z")):
        x = x[:-1] + "+00:00"
    return datetime.fromisoformat(x)


def StringToDate(accept_dates: bool = False, message: MessageLike = None) -> Coerce:
    """Convert an ISO-8601 string to a datetime."""

    def convert(x: Any) -> date:
        if accept_dates and isinstance(x, date):
            return x
        if not isinstance(x, str):
            raise TypeError(type(x).__name__)
        return _parse_iso(x)

    return Coerce(convert=convert, message=to_message(message, _expected("valid date-string")))


def NumberToDate(accept_dates: bool = False, message: MessageLike = None) -> Coerce:
    """Convert a POSIX timestamp in seconds to a UTC datetime."""

    def convert(x: Any) -> date:
        if accept_dates and isinstance(x, date):
            return x
        if not _is_finite_number(x):
            raise TypeError(type(x).__name__)
        return datetime.fromtimestamp(float(x), tz=timezone.utc)

    return Coerce(convert=convert, message=to_message(message, _expected("valid timestamp")))


def DateToString(accept_strings: bool = False, message: MessageLike = None) -> Coerce:
    """
    Convert a date or datetime to its ISO-8601 string.

    Args:
        accept_strings: Also pass through strings that already parse as ISO-8601
    """

    def convert(x: Any) -> str:
        if accept_strings and isinstance(x, str):
            _parse_iso(x)
            return x
        if not isinstance(x, date):
            raise TypeError(type(x).__name__)
        return x.isoformat()

    return Coerce(convert=convert, message=to_message(message, _expected("valid date")))


def DateToNumber(accept_numbers: bool = False, message: MessageLike = None) -> Coerce:
    """
    Convert a date or datetime to a POSIX timestamp in seconds.

    Naive datetimes and plain dates are read as UTC.
    """

    def convert(x: Any) -> float:
        if accept_numbers and _is_number(x):
            return x
        if isinstance(x, datetime):
            if x.tzinfo is None:
                x = x.replace(tzinfo=timezone.utc)
            return x.timestamp()
        if isinstance(x, date):
            return datetime.combine(x, time(), tzinfo=timezone.utc).timestamp()
        raise TypeError(type(x).__name__)

    return Coerce(convert=convert, message=to_message(message, _expected("valid date")))
