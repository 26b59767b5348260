from __future__ import annotations

import secrets
from typing import Annotated, ClassVar

from pydantic import Field

from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


@step_dataclass
class RandomStep(BaseStep):
    # Generates ``size`` random bytes into variable ``output``.
    kind: ClassVar[str] = "random"

    size: Annotated[int, Field(ge=0, le=65535)]
    output: str

    @property
    def writes(self) -> tuple[str, ...]:
        return (self.output,)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        exec_ctx.set(self.output, secrets.token_bytes(self.size))
