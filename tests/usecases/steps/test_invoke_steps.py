from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from service_mock.domain.topology import ServiceType
from service_mock.domain.variable import NULL, Variable
from service_mock.errors import InvalidServiceTypeError
from service_mock.kernel.context import ExecutionContext
from service_mock.usecases.steps import CallStep, SendStep

if TYPE_CHECKING:
    from conftest import FakeHost


async def test_call_to_virtual_object_without_key_uses_own_key(keyed_host: FakeHost) -> None:
    # An omitted key addresses the caller's own instance.
    step = CallStep(target_type="VirtualObject", service="Counter", handler="add")
    await step.run(keyed_host, ExecutionContext(), None)
    (target, _), = keyed_host.calls
    assert target.key == "k1"
    assert str(target) == "Counter/k1/add"


async def test_call_stores_decoded_result(host: FakeHost) -> None:
    host.call_result = b'{"Integer": 7}'
    exec_ctx = ExecutionContext()
    exec_ctx.set("arg", "hi")
    step = CallStep(target_type="SERVICE", service="Greeter", handler="greet", input="arg", output="reply")
    await step.run(host, exec_ctx, None)
    (target, payload), = host.calls
    assert target.key is None
    assert Variable.decode(payload) == Variable.of("hi")
    assert exec_ctx.get("reply", int) == 7


async def test_call_with_explicit_key(host: FakeHost) -> None:
    step = CallStep(target_type="WORKFLOW", service="Signup", handler="run", key="user-1")
    await step.run(host, ExecutionContext(), None)
    assert host.calls[0][0].key == "user-1"


async def test_send_with_missing_input_sends_null(host: FakeHost) -> None:
    step = SendStep(target_type="SERVICE", service="Audit", handler="log", input="nothing")
    await step.run(host, ExecutionContext(), None)
    (target, payload), = host.sends
    assert str(target) == "Audit/log"
    assert Variable.decode(payload) == NULL
    assert host.calls == []


def test_keyed_target_needs_key_from_stateless_caller() -> None:
    step = SendStep(target_type="VIRTUAL_OBJECT", service="Counter", handler="add")
    with pytest.raises(InvalidServiceTypeError):
        step.validate(ServiceType.SERVICE)
    step.validate(ServiceType.VIRTUAL_OBJECT)
    SendStep(target_type="VIRTUAL_OBJECT", service="Counter", handler="add", key="a").validate(ServiceType.SERVICE)


def test_call_writes_only_when_output_given() -> None:
    assert CallStep(target_type="SERVICE", service="S", handler="h").writes == ()
    assert CallStep(target_type="SERVICE", service="S", handler="h", output="r").writes == ("r",)
