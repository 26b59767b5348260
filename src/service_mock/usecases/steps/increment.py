from __future__ import annotations

from typing import ClassVar

from service_mock.errors import VariableTypeError
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


@step_dataclass
class IncrementStep(BaseStep):
    # Adds ``steps`` to integer variable ``input``; absent or non-integer values count as 0.
    kind: ClassVar[str] = "increment"

    input: str
    steps: int = 1

    @property
    def writes(self) -> tuple[str, ...]:
        return (self.input,)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        try:
            value = exec_ctx.get(self.input, int) or 0
        except VariableTypeError:
            value = 0
        exec_ctx.set(self.input, value + self.steps)
