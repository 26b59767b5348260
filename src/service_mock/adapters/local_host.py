from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import timedelta

from service_mock.domain.topology import HandlerType
from service_mock.domain.variable import Variable
from service_mock.errors import TerminalError
from service_mock.kernel.endpoint import Endpoint
from service_mock.ports.host import HostRequest, Invocation, RequestTarget

logger = logging.getLogger(__name__)

Timer = Callable[[float], Awaitable[None]]


@dataclass
class LocalRuntime:
    """In-process host for running and testing mock services.

    Implements the host contract without any durability: timers are plain
    asyncio sleeps, keyed state lives in memory and nothing is retried. Like
    the real host it lets one non-shared invocation per object/workflow key
    run at a time, while stateless services run in parallel.
    """

    endpoint: Endpoint
    timer: Timer = asyncio.sleep
    _state: dict[tuple[str, str], dict[str, bytes]] = field(default_factory=dict)
    _locks: dict[tuple[str, str], _KeyLock] = field(default_factory=dict)
    _pending: set[asyncio.Task[bytes]] = field(default_factory=set)

    async def invoke(self, service: str, handler: str, payload: bytes = b"null", key: str | None = None) -> bytes:
        bound = self.endpoint.service(service)
        handler_type = self.endpoint.handler_type(service, handler)

        if bound.discovery.ty.is_keyed:
            if key is None:
                raise TerminalError(f"{bound.discovery.ty} '{service}' requires a key", status_code=400)
        else:
            key = ""

        invocation = LocalInvocation(
            runtime=self,
            service_name=service,
            handler_name=handler,
            instance_key=key,
            payload=payload,
        )
        if bound.discovery.ty.is_keyed and handler_type is not HandlerType.SHARED:
            async with self._exclusive(service, key):
                await self.endpoint.handle(invocation)
        else:
            await self.endpoint.handle(invocation)
        return invocation.outcome()

    def spawn(self, target: RequestTarget, payload: bytes) -> None:
        task = asyncio.get_running_loop().create_task(
            self.invoke(target.service, target.handler, payload, target.key)
        )
        self._pending.add(task)
        task.add_done_callback(self._send_done)

    async def drain(self) -> None:
        # Wait for fire-and-forget invocations, including the ones they start.
        while self._pending:
            await asyncio.wait(set(self._pending))

    def state(self, service: str, key: str) -> dict[str, Variable]:
        return {name: Variable.decode(raw) for name, raw in self._state.get((service, key), {}).items()}

    def _send_done(self, task: asyncio.Task[bytes]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Sent invocation failed: %s", exc, exc_info=exc)

    @asynccontextmanager
    async def _exclusive(self, service: str, key: str) -> AsyncIterator[None]:
        # Entries live only while some invocation holds or awaits the key.
        slot = (service, key)
        entry = self._locks.get(slot)
        if entry is None:
            entry = self._locks[slot] = _KeyLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[slot]

    def _store(self, service: str, key: str) -> dict[str, bytes]:
        return self._state.setdefault((service, key), {})


@dataclass
class _KeyLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


@dataclass
class LocalInvocation(Invocation):
    runtime: LocalRuntime
    service_name: str
    handler_name: str
    instance_key: str
    payload: bytes
    _result: bytes | None = None
    _error: BaseException | None = None
    _ended: bool = False

    async def sleep(self, duration: timedelta) -> None:
        await self.runtime.timer(duration.total_seconds())

    def set(self, key: str, value: bytes) -> None:
        self.runtime._store(self.service_name, self.instance_key)[key] = value

    async def get(self, key: str) -> bytes | None:
        return self.runtime._store(self.service_name, self.instance_key).get(key)

    def request(self, target: RequestTarget, payload: bytes) -> HostRequest:
        return LocalRequest(runtime=self.runtime, target=target, payload=payload)

    def key(self) -> str:
        return self.instance_key

    async def input(self) -> bytes:
        return self.payload

    def handle_result(self, result: bytes | None, error: BaseException | None) -> None:
        if self._ended:
            raise RuntimeError("invocation already ended")
        self._result = result
        self._error = error

    def end(self) -> None:
        self._ended = True

    def outcome(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._result if self._result is not None else b"null"


@dataclass(frozen=True)
class LocalRequest(HostRequest):
    runtime: LocalRuntime
    target: RequestTarget
    payload: bytes

    async def call(self) -> bytes:
        return await self.runtime.invoke(self.target.service, self.target.handler, self.payload, self.target.key)

    def send(self) -> None:
        self.runtime.spawn(self.target, self.payload)
