from __future__ import annotations

import pytest

from service_mock.domain.variable import NULL, Variable
from service_mock.errors import ReturnValueAlreadySetError, VariableTypeError
from service_mock.kernel.context import ExecutionContext


def test_get_absent_variable_returns_none() -> None:
    assert ExecutionContext().get("missing", int) is None


def test_get_null_variable_returns_none() -> None:
    # Null is a present variable but reads as absent.
    ctx = ExecutionContext()
    ctx.set("x", None)
    assert ctx.get_variable("x") == NULL
    assert ctx.get("x", str) is None


def test_get_with_wrong_type_raises() -> None:
    ctx = ExecutionContext()
    ctx.set("count", 3)
    with pytest.raises(VariableTypeError):
        ctx.get("count", str)
    assert ctx.get("count", int) == 3


def test_set_overwrites_previous_value() -> None:
    # Last write wins, including a change of variant.
    ctx = ExecutionContext()
    ctx.set("x", 1)
    ctx.set("x", "one")
    assert ctx.get_variable("x") == Variable.of("one")


def test_return_value_is_set_once() -> None:
    ctx = ExecutionContext()
    assert not ctx.has_return_value
    assert ctx.ret() is None
    ctx.return_value({"x": 1})
    assert ctx.has_return_value
    assert ctx.ret() == {"x": 1}
    with pytest.raises(ReturnValueAlreadySetError):
        ctx.return_value("again")
    assert ctx.ret() == {"x": 1}


def test_returning_none_still_sets_the_slot() -> None:
    # None is a valid JSON result, so it still counts as a return.
    ctx = ExecutionContext()
    ctx.return_value(None)
    with pytest.raises(ReturnValueAlreadySetError):
        ctx.return_value(None)
