from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

import pytest

from service_mock.ports.host import RequestTarget


@dataclass
class FakeRequest:
    host: FakeHost
    target: RequestTarget
    payload: bytes

    async def call(self) -> bytes:
        self.host.calls.append((self.target, self.payload))
        return self.host.call_result

    def send(self) -> None:
        self.host.sends.append((self.target, self.payload))


@dataclass
class FakeHost:
    # Records every host interaction; state is a plain dict of encoded values.
    instance_key: str = ""
    call_result: bytes = b"null"
    state: dict[str, bytes] = field(default_factory=dict)
    sleeps: list[timedelta] = field(default_factory=list)
    calls: list[tuple[RequestTarget, bytes]] = field(default_factory=list)
    sends: list[tuple[RequestTarget, bytes]] = field(default_factory=list)

    async def sleep(self, duration: timedelta) -> None:
        self.sleeps.append(duration)

    def set(self, key: str, value: bytes) -> None:
        self.state[key] = value

    async def get(self, key: str) -> bytes | None:
        return self.state.get(key)

    def request(self, target: RequestTarget, payload: bytes) -> FakeRequest:
        return FakeRequest(host=self, target=target, payload=payload)

    def key(self) -> str:
        return self.instance_key


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def keyed_host() -> FakeHost:
    return FakeHost(instance_key="k1")
