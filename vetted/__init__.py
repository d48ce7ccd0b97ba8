"""
vetted - composable runtime validation with precise error paths.

Usage:
    from vetted import ListOf, Nilable, Number, Record, String, validate

    schema = Record({
        "name": String(),
        "email": Nilable(String()),
        "scores": ListOf(Number()),
    })

    result = validate(schema, data)
    if not result.valid:
        print(errors_to_string(result.errors))
"""

from .combinators import Chain, Default, Lazy, Nilable, Union
from .config import validation_context
from .containers import DictOf, ListOf, ListTuple, Record, SetOf, Tuple, TupleOf
from .context import Context, EntryIndex
from .core import Coerce, V, Validator, to_validator
from .exceptions import AssertValidError, SchemaError, VettedError
from .interop import Attrs, IterableOf, Model
from .schema import assert_valid, errors_to_string, is_valid, parse, validate
from .types import (
    DynamicMessage,
    Error,
    Errors,
    Fail,
    Ok,
    Pass,
    StaticMessage,
    ValidationError,
    result_case,
)
from .validators import (
    Between,
    Boolean,
    Date,
    DateToNumber,
    DateToString,
    Gt,
    Gte,
    Instance,
    Length,
    Literal,
    Lt,
    Lte,
    NoneValue,
    Number,
    NumberToDate,
    Numeric,
    OneOf,
    Predicate,
    Regex,
    String,
    StringToBoolean,
    StringToDate,
    StringToNumber,
    Uuid,
)

__all__ = [
    # Outcomes and results
    "Ok",
    "Error",
    "Errors",
    "result_case",
    "ValidationError",
    "Pass",
    "Fail",
    "StaticMessage",
    "DynamicMessage",
    # Core
    "Context",
    "EntryIndex",
    "Validator",
    "V",
    "Coerce",
    "to_validator",
    "validation_context",
    # Leaf validators
    "String",
    "Number",
    "Numeric",
    "Boolean",
    "NoneValue",
    "Regex",
    "Uuid",
    "Literal",
    "OneOf",
    "Predicate",
    "Instance",
    "Date",
    "Gt",
    "Gte",
    "Lt",
    "Lte",
    "Between",
    "Length",
    "StringToNumber",
    "StringToBoolean",
    "StringToDate",
    "NumberToDate",
    "DateToString",
    "DateToNumber",
    # Collections
    "ListOf",
    "TupleOf",
    "SetOf",
    "ListTuple",
    "Tuple",
    "Record",
    "DictOf",
    # Combinators
    "Chain",
    "Union",
    "Default",
    "Lazy",
    "Nilable",
    # Interop
    "Attrs",
    "IterableOf",
    "Model",
    # Driver
    "validate",
    "assert_valid",
    "parse",
    "is_valid",
    "errors_to_string",
    # Exceptions
    "VettedError",
    "SchemaError",
    "AssertValidError",
]
