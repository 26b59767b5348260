from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, ClassVar, Protocol, TypeVar

from pydantic import ConfigDict, TypeAdapter, ValidationError
from pydantic.dataclasses import dataclass as pydantic_dataclass

from service_mock.errors import InvalidStepParametersError

if TYPE_CHECKING:
    from service_mock.domain.topology import ServiceType
    from service_mock.kernel.context import ExecutionContext
    from service_mock.ports.host import HostContext


class Step(Protocol):
    # Step contract: validated once at startup, run once per invocation in declared order.
    kind: ClassVar[str]
    terminates: ClassVar[bool]

    @property
    def reads(self) -> tuple[str, ...]:
        """Variables that an earlier step must have written."""
        raise NotImplementedError("Step protocol has no implementation")

    @property
    def writes(self) -> tuple[str, ...]:
        """Variables this step writes."""
        raise NotImplementedError("Step protocol has no implementation")

    def validate(self, service_type: ServiceType) -> None:
        """Raise InvalidServiceTypeError when the step cannot run under ``service_type``."""
        raise NotImplementedError("Step protocol has no implementation")

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        raise NotImplementedError("Step protocol has no implementation")


class BaseStep:
    # Defaults shared by the built-in steps; they only override what differs.
    kind: ClassVar[str] = ""
    terminates: ClassVar[bool] = False

    @property
    def reads(self) -> tuple[str, ...]:
        return ()

    @property
    def writes(self) -> tuple[str, ...]:
        return ()

    def validate(self, service_type: ServiceType) -> None:
        return None


# Steps are frozen pydantic dataclasses; unknown params are rejected.
step_dataclass = partial(pydantic_dataclass, frozen=True, config=ConfigDict(extra="forbid"))

# A factory turns the untyped ``params`` of a step declaration into a Step.
StepFactory = Callable[[object], Step]

S = TypeVar("S")


def step_factory(step_cls: type[S]) -> Callable[[object], S]:
    adapter = TypeAdapter(step_cls)
    kind = getattr(step_cls, "kind", step_cls.__name__)

    def create(params: object) -> S:
        # Steps without parameters may omit ``params`` entirely.
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise InvalidStepParametersError(kind, f"params must be a mapping, got {type(params).__name__}")
        try:
            return adapter.validate_python(dict(params))
        except ValidationError as exc:
            raise InvalidStepParametersError(kind, _describe(exc)) from exc

    return create


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error["loc"]) or "params"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)
