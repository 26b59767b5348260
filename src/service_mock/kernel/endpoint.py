from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from service_mock.domain.topology import HandlerType
from service_mock.errors import ConfigError, UnknownHandlerError, UnknownServiceError
from service_mock.kernel.discovery import ServiceDiscovery
from service_mock.ports.host import Invocation

if TYPE_CHECKING:
    from collections.abc import Mapping

    from service_mock.kernel.service import ServiceHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoundService:
    discovery: ServiceDiscovery
    handle: ServiceHandle


@dataclass
class EndpointBuilder:
    # Registration slot: one discovery descriptor and one shared handle per service.
    _services: dict[str, BoundService] = field(default_factory=dict)

    def bind(self, discovery: ServiceDiscovery, handle: ServiceHandle) -> EndpointBuilder:
        if discovery.name in self._services:
            raise ConfigError(f"Service '{discovery.name}' is bound twice")
        logger.debug("Binding service '%s' (%s) with %d handler(s)", discovery.name, discovery.ty, len(discovery.handlers))
        self._services[discovery.name] = BoundService(discovery=discovery, handle=handle)
        return self

    def build(self) -> Endpoint:
        return Endpoint(services=MappingProxyType(dict(self._services)))


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Immutable set of bound services that dispatches invocations by service name."""

    services: Mapping[str, BoundService]

    def discover(self) -> dict[str, object]:
        return {"services": [bound.discovery.to_dict() for bound in self.services.values()]}

    def service(self, name: str) -> BoundService:
        bound = self.services.get(name)
        if bound is None:
            raise UnknownServiceError(name)
        return bound

    def handler_type(self, service: str, handler: str) -> HandlerType | None:
        discovered = self.service(service).discovery.handler(handler)
        if discovered is None:
            raise UnknownHandlerError(service, handler)
        return discovered.ty

    async def handle(self, invocation: Invocation) -> None:
        await self.service(invocation.service_name).handle.handle(invocation)
