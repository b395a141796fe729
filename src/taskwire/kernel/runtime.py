"""Runtime port - the deferred-result implementation the combinators run on.

Every suspension point in the engine (timers, fan-in, the clock read by
``single``) goes through the active Runtime, so a different implementation
can be plugged in without touching the combinators.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol

from taskwire.kernel.trace import Trace


class Runtime(Protocol):
    """Deferred-result port."""

    trace: Trace | None

    def now(self) -> float:
        """Current time in seconds, from a monotonic clock."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the current task for ``seconds``."""
        ...

    async def gather(self, *aws: Awaitable[Any]) -> list[Any]:
        """Run awaitables concurrently, results in argument order.

        The first failure is raised; the remaining awaitables keep running.
        """
        ...


@dataclass
class AsyncioRuntime:
    """Default runtime backed by the running asyncio event loop."""

    trace: Trace | None = None

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def gather(self, *aws: Awaitable[Any]) -> list[Any]:
        return list(await asyncio.gather(*aws))


_runtime: Runtime = AsyncioRuntime()


def get_runtime() -> Runtime:
    """Return the runtime combinators currently run on."""
    return _runtime


def set_runtime(runtime: Runtime) -> Runtime:
    """Install ``runtime`` globally and return the previous one."""
    global _runtime
    previous = _runtime
    _runtime = runtime
    return previous


@contextmanager
def use_runtime(runtime: Runtime) -> Iterator[Runtime]:
    """Temporarily install ``runtime``; the previous one is restored on exit."""
    previous = set_runtime(runtime)
    try:
        yield runtime
    finally:
        set_runtime(previous)
