from __future__ import annotations

from service_mock.kernel.step import step_factory
from service_mock.kernel.step_registry import StepRegistry
from service_mock.usecases.steps import (
    BusyStep,
    CallStep,
    EchoStep,
    GetStep,
    IncrementStep,
    RandomStep,
    ReturnStep,
    SendStep,
    SetStep,
    SleepStep,
)

BUILTIN_STEPS = (
    EchoStep,
    SleepStep,
    BusyStep,
    SetStep,
    GetStep,
    RandomStep,
    IncrementStep,
    CallStep,
    SendStep,
    ReturnStep,
)


def build_step_registry(*, freeze: bool = True) -> StepRegistry:
    # Registry is built once at startup and passed to the composition root.
    # Pass freeze=False to add custom step kinds before freezing it yourself.
    registry = StepRegistry()
    for step_cls in BUILTIN_STEPS:
        registry.register(step_cls.kind, step_factory(step_cls))
    return registry.freeze() if freeze else registry
