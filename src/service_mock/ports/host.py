from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol, runtime_checkable

from service_mock.domain.topology import ServiceType


@dataclass(frozen=True, slots=True)
class RequestTarget:
    # Address of a handler on another (or the same) service.
    service_type: ServiceType
    service: str
    handler: str
    key: str | None = None

    def __post_init__(self) -> None:
        if self.service_type.is_keyed and self.key is None:
            raise ValueError(f"{self.service_type} target {self.service}/{self.handler} requires a key")

    def __str__(self) -> str:
        if self.key is None:
            return f"{self.service}/{self.handler}"
        return f"{self.service}/{self.key}/{self.handler}"


# Host ports isolate the durable-execution runtime from the engine.
@runtime_checkable
class HostRequest(Protocol):
    async def call(self) -> bytes:
        """Invoke the target and wait for its JSON-encoded result."""
        raise NotImplementedError("HostRequest is a port; use a concrete adapter.")

    def send(self) -> None:
        """Invoke the target without waiting for a result."""
        raise NotImplementedError("HostRequest is a port; use a concrete adapter.")


@runtime_checkable
class HostContext(Protocol):
    async def sleep(self, duration: timedelta) -> None:
        """Durable timer: the host may persist the invocation and resume it later."""
        raise NotImplementedError("HostContext is a port; use a concrete adapter.")

    def set(self, key: str, value: bytes) -> None:
        """Write keyed state of the current object/workflow instance."""
        raise NotImplementedError("HostContext is a port; use a concrete adapter.")

    async def get(self, key: str) -> bytes | None:
        """Read keyed state of the current object/workflow instance."""
        raise NotImplementedError("HostContext is a port; use a concrete adapter.")

    def request(self, target: RequestTarget, payload: bytes) -> HostRequest:
        """Prepare a request to another handler; payload is JSON."""
        raise NotImplementedError("HostContext is a port; use a concrete adapter.")

    def key(self) -> str:
        """Key of the current instance; empty for stateless services."""
        raise NotImplementedError("HostContext is a port; use a concrete adapter.")


@runtime_checkable
class Invocation(HostContext, Protocol):
    service_name: str
    handler_name: str

    async def input(self) -> bytes:
        """Raw JSON input of the current invocation."""
        raise NotImplementedError("Invocation is a port; use a concrete adapter.")

    def handle_result(self, result: bytes | None, error: BaseException | None) -> None:
        """Report the JSON result or the failure of the invocation."""
        raise NotImplementedError("Invocation is a port; use a concrete adapter.")

    def end(self) -> None:
        """Close the invocation; nothing may be reported afterwards."""
        raise NotImplementedError("Invocation is a port; use a concrete adapter.")
