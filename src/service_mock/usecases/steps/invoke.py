from __future__ import annotations

import json
import logging
from typing import ClassVar

from service_mock.domain.topology import ServiceType, ServiceTypeField
from service_mock.domain.variable import NULL, Variable
from service_mock.errors import InvalidServiceTypeError
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext, RequestTarget

logger = logging.getLogger(__name__)


@step_dataclass
class RemoteStep(BaseStep):
    """Addressing shared by ``call`` and ``send``.

    ``target_type`` selects SERVICE, VIRTUAL_OBJECT or WORKFLOW addressing.
    For keyed targets an omitted ``key`` means the caller's own key, so a
    handler can address its own object or workflow instance. ``input`` names
    the variable sent as the request body; when it is unset, Null is sent.
    """

    target_type: ServiceTypeField
    service: str
    handler: str
    key: str | None = None
    input: str | None = None

    def validate(self, service_type: ServiceType) -> None:
        # A stateless caller has no key of its own to fall back on.
        if self.target_type.is_keyed and self.key is None and not service_type.is_keyed:
            raise InvalidServiceTypeError(
                self.kind,
                service_type,
                f"a key is required to address {self.target_type} '{self.service}' from a stateless service",
            )

    def target(self, ctx: HostContext) -> RequestTarget:
        key = None
        if self.target_type.is_keyed:
            key = self.key if self.key is not None else ctx.key()
        return RequestTarget(service_type=self.target_type, service=self.service, handler=self.handler, key=key)

    def payload(self, exec_ctx: ExecutionContext) -> bytes:
        variable = NULL
        if self.input is not None:
            found = exec_ctx.get_variable(self.input)
            if found is None:
                logger.debug("Variable '%s' is not set; sending null to %s/%s", self.input, self.service, self.handler)
            else:
                variable = found
        return variable.encode()


@step_dataclass
class CallStep(RemoteStep):
    # Request/response call; the result is stored in ``output`` when given.
    kind: ClassVar[str] = "call"

    output: str | None = None

    @property
    def writes(self) -> tuple[str, ...]:
        return () if self.output is None else (self.output,)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        target = self.target(ctx)
        logger.debug("Calling %s", target)
        raw = await ctx.request(target, self.payload(exec_ctx)).call()
        if self.output is not None:
            exec_ctx.set(self.output, Variable.from_json(json.loads(raw) if raw else None))


@step_dataclass
class SendStep(RemoteStep):
    # Fire-and-forget; nothing is awaited or stored.
    kind: ClassVar[str] = "send"

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        target = self.target(ctx)
        logger.debug("Sending to %s", target)
        ctx.request(target, self.payload(exec_ctx)).send()
