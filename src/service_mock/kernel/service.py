from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from service_mock.domain.topology import (
    ALLOWED_HANDLER_TYPES,
    ServiceType,
    validate_handler_name,
    validate_service_name,
)
from service_mock.errors import InvalidHandlerError, TerminalError, UnknownHandlerError
from service_mock.kernel.discovery import HandlerDiscovery, ServiceDiscovery
from service_mock.kernel.handler import MockHandler
from service_mock.ports.host import Invocation

if TYPE_CHECKING:
    from collections.abc import Mapping

    from service_mock.kernel.endpoint import Endpoint, EndpointBuilder

logger = logging.getLogger(__name__)


@dataclass
class MockService:
    """A named, typed collection of mock handlers.

    Mutable only while it is being assembled; ``bind`` freezes the handlers
    behind a ServiceHandle that concurrent invocations share.
    """

    name: str
    ty: ServiceType
    handlers: dict[str, MockHandler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_service_name(self.name)

    def add_handler(self, name: str, handler: MockHandler) -> None:
        validate_handler_name(name)
        if name in self.handlers:
            raise InvalidHandlerError(f"Handler '{name}' is already defined on service '{self.name}'")
        if handler.ty is not None and handler.ty not in ALLOWED_HANDLER_TYPES[self.ty]:
            raise InvalidHandlerError(
                f"Handler '{name}' of type {handler.ty} is not allowed on {self.ty} service '{self.name}'"
            )
        if handler.name != name:
            handler = MockHandler(steps=handler.steps, ty=handler.ty, name=name)
        self.handlers[name] = handler

    def service_discovery(self) -> ServiceDiscovery:
        return ServiceDiscovery(
            name=self.name,
            ty=self.ty,
            handlers=tuple(HandlerDiscovery(name=name, ty=handler.ty) for name, handler in self.handlers.items()),
        )

    def bind(self, builder: EndpointBuilder) -> EndpointBuilder:
        # Discovery is computed once here and handed to the builder explicitly.
        discovery = self.service_discovery()
        handle = ServiceHandle(name=self.name, ty=self.ty, handlers=MappingProxyType(dict(self.handlers)))
        return builder.bind(discovery, handle)

    def endpoint(self) -> Endpoint:
        from service_mock.kernel.endpoint import EndpointBuilder

        return self.bind(EndpointBuilder()).build()


@dataclass(frozen=True, slots=True)
class ServiceHandle:
    # Immutable view of a bound service; safe to share across concurrent invocations.
    name: str
    ty: ServiceType
    handlers: Mapping[str, MockHandler]

    async def handle(self, invocation: Invocation) -> None:
        logger.debug("Running handler %s/%s", invocation.service_name, invocation.handler_name)
        try:
            handler = self.handlers.get(invocation.handler_name)
            if handler is None:
                raise UnknownHandlerError(invocation.service_name, invocation.handler_name)
            raw = await invocation.input()
            result = await handler.run(invocation, _decode_input(raw))
            invocation.handle_result(json.dumps(result).encode("utf-8"), None)
        except Exception as exc:
            invocation.handle_result(None, exc)
        finally:
            invocation.end()


def _decode_input(raw: bytes) -> object:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TerminalError(f"Invalid JSON input: {exc}", status_code=400) from exc
