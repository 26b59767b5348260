from __future__ import annotations

from typing import ClassVar

from service_mock.domain.topology import ServiceType
from service_mock.domain.variable import NULL, Variable
from service_mock.errors import InvalidServiceTypeError, TerminalError
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


def require_keyed(kind: str, service_type: ServiceType) -> None:
    # Keyed state needs an addressable object/workflow instance.
    if not service_type.is_keyed:
        raise InvalidServiceTypeError(kind, service_type, "keyed state requires a virtual object or workflow")


@step_dataclass
class SetStep(BaseStep):
    # Writes the current value of variable ``input`` to keyed state under ``key``.
    kind: ClassVar[str] = "set"

    key: str
    input: str

    @property
    def reads(self) -> tuple[str, ...]:
        return (self.input,)

    def validate(self, service_type: ServiceType) -> None:
        require_keyed(self.kind, service_type)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        variable = exec_ctx.get_variable(self.input)
        if variable is None:
            raise TerminalError(f"unknown variable {self.input}")
        ctx.set(self.key, variable.encode())


@step_dataclass
class GetStep(BaseStep):
    # Reads keyed state ``key`` into variable ``output``; Null when the key is not set.
    kind: ClassVar[str] = "get"

    key: str
    output: str

    @property
    def writes(self) -> tuple[str, ...]:
        return (self.output,)

    def validate(self, service_type: ServiceType) -> None:
        require_keyed(self.kind, service_type)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        raw = await ctx.get(self.key)
        exec_ctx.set(self.output, NULL if raw is None else Variable.decode(raw))
