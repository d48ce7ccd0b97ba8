"""
Tests for vetted.containers.
"""

import time
from dataclasses import dataclass

import pytest

import vetted.context
from vetted import (
    Attrs,
    Context,
    DictOf,
    Error,
    Errors,
    ListOf,
    ListTuple,
    Nilable,
    Number,
    Ok,
    Record,
    SchemaError,
    SetOf,
    String,
    StringToBoolean,
    StringToNumber,
    Tuple,
    TupleOf,
    ValidationError,
    validate,
    validation_context,
)


def run(validator, value):
    return validator(Context.create(value))


class TestListOf:
    def test_valid(self):
        assert run(ListOf(Number()), [1, 2, 3]) == Ok([1, 2, 3])

    def test_empty(self):
        assert run(ListOf(Number()), []) == Ok([])

    def test_collects_every_element_error(self):
        result = run(ListOf(Number()), [1, "x", 3, "y"])
        assert result == Errors(
            (
                ValidationError((1,), 'Expected number, got "x"'),
                ValidationError((3,), 'Expected number, got "y"'),
            )
        )

    def test_kind_mismatch_short_circuits(self):
        assert run(ListOf(Number()), "abc") == Error('Expected list, got "abc"')
        assert run(ListOf(Number()), (1, 2)) == Error("Expected list, got (1, 2)")

    def test_output_holds_transformed_items(self):
        assert run(ListOf(StringToNumber()), ["1", "2.5"]) == Ok([1, 2.5])

    def test_nested_paths(self):
        result = run(ListOf(ListOf(Number())), [[1], [2, "x"]])
        assert result.errors == (ValidationError((1, 1), 'Expected number, got "x"'),)

    def test_list_of_records(self):
        result = run(ListOf(Record({"id": Number()})), [{"id": 1}, {"id": "x"}, {}])
        assert result.errors == (
            ValidationError((1, "id"), 'Expected number, got "x"'),
            ValidationError((2, "id"), "Expected number, got None"),
        )

    def test_custom_message(self):
        assert run(ListOf(Number(), message="Need a list"), 5) == Error("Need a list")

    def test_requires_validator(self):
        with pytest.raises(SchemaError):
            ListOf(5)


class TestTupleOfAndSetOf:
    def test_tuple_of(self):
        assert run(TupleOf(Number()), (1, 2)) == Ok((1, 2))
        assert run(TupleOf(Number()), [1, 2]) == Error("Expected tuple, got [1, 2]")
        assert run(TupleOf(Number()), (1, "x")).errors[0].path == (1,)

    def test_set_of(self):
        assert run(SetOf(Number()), {1, 2}) == Ok({1, 2})
        assert run(SetOf(Number()), [1]) == Error("Expected set, got [1]")

    def test_set_of_keeps_frozenset(self):
        result = run(SetOf(StringToNumber()), frozenset({"1"}))
        assert result == Ok(frozenset({1}))
        assert isinstance(result.value, frozenset)

    def test_set_of_errors(self):
        result = run(SetOf(Number()), {"x"})
        assert result == Errors((ValidationError((0,), 'Expected number, got "x"'),))


class TestFixedTuples:
    def test_tuple(self):
        v = Tuple([String(), Number()])
        assert run(v, ("name", 42)) == Ok(("name", 42))

    def test_tuple_element_errors(self):
        v = Tuple([Number(), String(), Number()])
        result = run(v, ("str", 500, 1))
        assert result.errors == (
            ValidationError((0,), 'Expected number, got "str"'),
            ValidationError((1,), "Expected string, got 500"),
        )

    def test_length_mismatch(self):
        v = Tuple([Number(), Number()])
        assert run(v, (1,)) == Error("Expected tuple of length 2, got length 1: (1,)")

    def test_kind_mismatch(self):
        v = ListTuple([Number(), Number()])
        assert run(v, (1, 2)) == Error("Expected list-tuple of length 2, got (1, 2)")

    def test_list_tuple(self):
        v = ListTuple([StringToNumber(), StringToBoolean()])
        assert run(v, ["1", "true"]) == Ok([1, True])

    def test_validators_must_be_a_sequence(self):
        with pytest.raises(SchemaError):
            Tuple(Number())


class TestRecord:
    schema = Record({"name": String(), "age": Number()})

    def test_valid(self):
        data = {"name": "Jane", "age": 30}
        result = validate(self.schema, data)
        assert result.valid
        assert result.output == data

    def test_reports_every_field(self):
        result = validate(self.schema, {"name": 5, "age": "x"})
        assert result.errors == (
            ValidationError(("name",), "Expected string, got 5"),
            ValidationError(("age",), 'Expected number, got "x"'),
        )

    def test_missing_keys_are_validated_as_none(self):
        result = run(self.schema, {"name": "Jane"})
        assert result.errors == (ValidationError(("age",), "Expected number, got None"),)

    def test_optional_key_passes_through(self):
        result = validate(Record({"k": Nilable(String())}), {})
        assert result.valid
        assert result.output == {"k": None}

    def test_extra_keys_are_tolerated_and_dropped(self):
        assert run(self.schema, {"name": "Jane", "age": 1, "x": 0}) == Ok(
            {"name": "Jane", "age": 1}
        )

    def test_strict_rejects_unknown_keys(self):
        v = Record({"name": String()}, strict=True)
        assert run(v, {"name": "Jane", "extra": 1, "more": 2}) == Errors(
            (
                ValidationError(("extra",), "Unexpected key"),
                ValidationError(("more",), "Unexpected key"),
            )
        )

    def test_strict_from_validation_context(self):
        v = Record({"name": String()})
        with validation_context(strict=True):
            assert run(v, {"name": "Jane", "extra": 1}).is_err()
        assert run(v, {"name": "Jane", "extra": 1}).is_ok()

    def test_explicit_strict_overrides_context(self):
        v = Record({"name": String()}, strict=False)
        with validation_context(strict=True):
            assert run(v, {"name": "Jane", "extra": 1}).is_ok()

    def test_non_mapping(self):
        assert run(self.schema, None) == Error("Expected record, got None")
        assert run(self.schema, ["a"]) == Error("Expected record, got ['a']")

    def test_nested_records(self):
        v = Record({"user": Record({"tags": ListOf(String())})})
        result = run(v, {"user": {"tags": ["a", 1]}})
        assert result.errors == (
            ValidationError(("user", "tags", 1), "Expected string, got 1"),
        )

    def test_schema_shorthand(self):
        v = Record({"name": str, "tags": [str], "address": {"zip": str}})
        assert run(v, {"name": "a", "tags": [], "address": {"zip": "1"}}).is_ok()
        result = run(v, {"name": 5, "tags": ["a"], "address": {}})
        assert result.errors == (
            ValidationError(("name",), "Expected instance of str, got 5"),
            ValidationError(("address", "zip"), "Expected instance of str, got None"),
        )

    def test_fields_must_be_mapping(self):
        with pytest.raises(SchemaError):
            Record([String()])


class TestDictOf:
    def test_valid(self):
        assert run(DictOf(Number()), {"a": 1, "b": 2}) == Ok({"a": 1, "b": 2})

    def test_key_and_value_errors_on_same_entry(self):
        result = validate(DictOf(String(), Number()), {1: "a"})
        assert not result.valid
        assert result.errors == (
            ValidationError((0, 0), "Expected string, got 1"),
            ValidationError((0, 1), 'Expected number, got "a"'),
        )

    def test_errors_across_entries(self):
        result = run(DictOf(Number()), {"a": "x", "b": 2, 3: 4})
        assert result.errors == (
            ValidationError((0, 1), 'Expected number, got "x"'),
            ValidationError((2, 0), "Expected string, got 3"),
        )

    def test_converts_keys_and_values(self):
        v = DictOf(StringToNumber(), StringToBoolean())
        assert run(v, {"1": "true", "2": "false"}) == Ok({1: True, 2: False})

    def test_nested_value_paths(self):
        result = run(DictOf(ListOf(Number())), {"a": [1], "b": [1, "x"]})
        assert result.errors == (ValidationError((1, 1, 1), 'Expected number, got "x"'),)

    def test_dict_of_records(self):
        v = Record({"test": DictOf(Record({"a": Number()}))})
        assert run(v, {"test": {"x": {"a": 1}}}) == Ok({"test": {"x": {"a": 1}}})

    def test_non_mapping(self):
        assert run(DictOf(Number()), [("a", 1)]) == Error("Expected dict, got [('a', 1)]")

    def test_argument_count(self):
        with pytest.raises(SchemaError):
            DictOf()
        with pytest.raises(SchemaError):
            DictOf(String(), Number(), Number())


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class TestUnhashableOutput:
    def test_set_of_dict_outputs_is_an_error(self):
        v = SetOf(Attrs({"x": Number(), "y": Number()}))
        result = validate(v, {Point(1, 2)})
        assert result.errors == (
            ValidationError((), "Expected hashable validated items, got [{'x': 1, 'y': 2}]"),
        )

    def test_set_of_hashable_outputs_still_passes(self):
        assert validate(SetOf(StringToNumber()), {"1", "2"}).output == {1, 2}

    def test_dict_key_converted_to_unhashable_is_an_error(self):
        def split_key(ctx):
            return Ok(ctx.value.split(","))

        result = validate(DictOf(split_key, Number()), {"a,b": 1, "c": 2})
        assert result.errors == (
            ValidationError((0, 0), "Expected hashable validated key, got ['a', 'b']"),
            ValidationError((1, 0), "Expected hashable validated key, got ['c']"),
        )


class TestLargeInputs:
    size = 20_000

    def count_navigation(self, monkeypatch):
        calls = []
        original = vetted.context.get_in

        def counting_get_in(root, path):
            calls.append(path)
            return original(root, path)

        monkeypatch.setattr(vetted.context, "get_in", counting_get_in)
        return calls

    def test_elements_are_not_renavigated_from_the_root(self, monkeypatch):
        calls = self.count_navigation(monkeypatch)
        validate(ListOf(Number()), list(range(1000)))
        validate(SetOf(Number()), set(range(1000)))
        validate(DictOf(Number()), {str(i): i for i in range(1000)})
        validate(Record({"items": ListOf(Record({"id": Number()}))}), {"items": [{"id": 1}] * 1000})
        assert calls == []

    def test_large_collections_validate_in_linear_time(self):
        data = list(range(self.size))
        started = time.perf_counter()
        assert validate(ListOf(Number()), data).output == data
        assert validate(SetOf(Number()), set(data)).output == set(data)
        mapping = {str(i): i for i in data}
        assert validate(DictOf(Number()), mapping).output == mapping
        assert time.perf_counter() - started < 5.0

    def test_large_collection_reports_every_error(self):
        data = ["x"] * self.size
        result = validate(ListOf(Number()), data)
        assert len(result.errors) == self.size
        assert result.errors[-1].path == (self.size - 1,)
