from __future__ import annotations

from typing import ClassVar

from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


@step_dataclass
class EchoStep(BaseStep):
    # Returns the handler input unchanged.
    kind: ClassVar[str] = "echo"
    terminates: ClassVar[bool] = True

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        exec_ctx.return_value(input)
