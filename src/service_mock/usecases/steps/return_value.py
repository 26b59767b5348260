from __future__ import annotations

from typing import ClassVar

from service_mock.errors import TerminalError
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


@step_dataclass
class ReturnStep(BaseStep):
    # Ends the handler with the wire form of variable ``output``.
    kind: ClassVar[str] = "return"
    terminates: ClassVar[bool] = True

    output: str

    @property
    def reads(self) -> tuple[str, ...]:
        return (self.output,)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        variable = exec_ctx.get_variable(self.output)
        if variable is None:
            raise TerminalError(f"unknown variable {self.output}")
        exec_ctx.return_value(variable.to_json())
