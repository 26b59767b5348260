from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from service_mock.domain.topology import HandlerType, ServiceType
from service_mock.errors import InvalidHandlerError, InvalidServiceTypeError
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import Step
from service_mock.ports.host import HostContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MockHandler:
    """An ordered list of steps bound to one handler name.

    Built once at startup and shared read-only by every invocation. Each run
    gets a fresh ExecutionContext; steps only talk to each other through it.
    """

    steps: tuple[Step, ...] = ()
    ty: HandlerType | None = None
    name: str = field(default="", compare=False)

    @classmethod
    def of(cls, steps: Sequence[Step], ty: HandlerType | None = None, *, name: str = "") -> MockHandler:
        return cls(steps=tuple(steps), ty=ty, name=name)

    def validate(self, service_type: ServiceType) -> None:
        # Static data-flow check: steps are data, so every read and return is known up front.
        written: set[str] = set()
        terminator: int | None = None
        for idx, step in enumerate(self.steps):
            try:
                step.validate(service_type)
            except InvalidServiceTypeError as exc:
                raise InvalidHandlerError(f"step {idx}: {exc}") from exc
            missing = [name for name in step.reads if name not in written]
            if missing:
                raise InvalidHandlerError(
                    f"step {idx} ('{step.kind}') reads variable(s) {', '.join(missing)} that no earlier step sets"
                )
            if step.terminates:
                if terminator is not None:
                    raise InvalidHandlerError(
                        f"step {idx} ('{step.kind}') sets the return value already set by step {terminator}"
                    )
                terminator = idx
            written.update(step.writes)

    async def run(self, ctx: HostContext, input: object) -> object:
        exec_ctx = ExecutionContext()
        for idx, step in enumerate(self.steps):
            try:
                await step.run(ctx, exec_ctx, input)
            except Exception as exc:
                # First failure stops the sequence; effects already committed by the host stay.
                exc.add_note(f"while running step {idx} ('{step.kind}') of handler '{self.name}'")
                logger.warning("Step %d (%s) of handler '%s' failed: %s", idx, step.kind, self.name, exc)
                raise
        return exec_ctx.ret()
