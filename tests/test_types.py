"""
Tests for vetted.types.
"""

import pytest

from vetted import (
    Context,
    DynamicMessage,
    Error,
    Errors,
    Fail,
    Ok,
    Pass,
    SchemaError,
    StaticMessage,
    ValidationError,
    result_case,
)
from vetted.types import to_message


class TestOutcome:
    def test_ok(self):
        assert Ok(5).value == 5
        assert Ok(5).is_ok()
        assert not Ok(5).is_err()

    def test_error(self):
        assert Error("bad").message == "bad"
        assert Error("bad").is_err()

    def test_errors(self):
        errs = Errors((ValidationError(("a",), "bad"),))
        assert errs.is_err()
        assert not errs.is_ok()
        assert errs.errors[0].path == ("a",)

    def test_equality(self):
        assert Ok([1, 2]) == Ok([1, 2])
        assert Error("x") != Error("y")


class TestResultCase:
    def test_dispatches_ok(self):
        assert result_case(Ok(1), ok=lambda v: v + 1) == 2

    def test_dispatches_error(self):
        assert result_case(Error("bad"), err=lambda m: m.upper()) == "BAD"

    def test_dispatches_errors(self):
        errs = (ValidationError((0,), "bad"),)
        assert result_case(Errors(errs), errs=len) == 1

    def test_handlers_default_to_identity(self):
        assert result_case(Ok("v")) == "v"
        assert result_case(Error("m")) == "m"

    def test_unknown_outcome_raises(self):
        with pytest.raises(SchemaError):
            result_case(("ok", 5))

    def test_unknown_outcome_is_a_type_error(self):
        with pytest.raises(TypeError):
            result_case(None)


class TestResults:
    def test_pass(self):
        result = Pass(input=1, output=1)
        assert result.status == "pass"
        assert result.valid

    def test_fail_has_no_output(self):
        result = Fail(input=1, errors=(ValidationError((), "bad"),))
        assert result.status == "fail"
        assert result.output is None
        assert not result.valid


class TestMessages:
    def test_none_uses_default(self):
        message = to_message(None, lambda ctx: f"got {ctx.value}")
        assert isinstance(message, DynamicMessage)
        assert message.render(Context.create(3)) == "got 3"

    def test_string_is_static(self):
        message = to_message("Value is invalid", lambda ctx: "default")
        assert message == StaticMessage("Value is invalid")
        assert message.render(Context.create(3)) == "Value is invalid"

    def test_function_is_dynamic(self):
        message = to_message(lambda ctx: f"Invalid {ctx.value!r}", lambda ctx: "")
        assert message.render(Context.create(None)) == "Invalid None"

    def test_message_variants_pass_through(self):
        static = StaticMessage("x")
        assert to_message(static, lambda ctx: "") is static

    def test_invalid_message_raises(self):
        with pytest.raises(SchemaError):
            to_message(42, lambda ctx: "")
