from __future__ import annotations

import asyncio
import random
from datetime import timedelta
from typing import ClassVar

from pydantic import Field

from service_mock.domain.durations import DurationField
from service_mock.kernel.context import ExecutionContext
from service_mock.kernel.step import BaseStep, step_dataclass
from service_mock.ports.host import HostContext


def jittered(duration: timedelta, jitter: float | None) -> timedelta:
    # Adds a uniform random extra delay in [0, jitter * duration].
    if not jitter:
        return duration
    return duration + duration * random.uniform(0.0, jitter)


@step_dataclass
class SleepStep(BaseStep):
    """Durable pause.

    The timer is owned by the host, so the pause survives retries and process
    restarts. ``duration`` is human readable ("2s", "500ms"); ``jitter`` is a
    factor such that ``duration=10s, jitter=0.1`` adds between 0s and 1s.
    """

    kind: ClassVar[str] = "sleep"

    duration: DurationField
    jitter: float | None = Field(default=None, ge=0.0)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        await ctx.sleep(jittered(self.duration, self.jitter))


@step_dataclass
class BusyStep(BaseStep):
    """Non-durable pause that keeps the invocation busy.

    Uses a process-local timer the host knows nothing about, which is what
    CPU-bound or otherwise in-process work looks like from the outside.
    """

    kind: ClassVar[str] = "busy"

    duration: DurationField
    jitter: float | None = Field(default=None, ge=0.0)

    async def run(self, ctx: HostContext, exec_ctx: ExecutionContext, input: object) -> None:
        await asyncio.sleep(jittered(self.duration, self.jitter).total_seconds())
