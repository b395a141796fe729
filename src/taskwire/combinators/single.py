"""Mutual-exclusion wrapper: single."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from taskwire.errors import LockTimeoutError
from taskwire.kernel import Runtime, Task, get_runtime, normalize

logger = logging.getLogger(__name__)


class LockSettings(BaseModel):
    """Tunables of a ``single`` lock, in seconds."""

    timeout: float = Field(default=60.0, gt=0)
    poll_interval: float | None = Field(default=None, gt=0)

    @property
    def interval(self) -> float:
        """Poll interval; defaults to 1% of the timeout, rounded up to the millisecond."""
        if self.poll_interval is not None:
            return self.poll_interval
        return math.ceil(self.timeout * 10) / 1000


@dataclass
class _Hold:
    since: float


@dataclass
class _Lock:
    hold: _Hold | None = None


def single(
    task: Any = None,
    timeout: float = 60.0,
    poll_interval: float | None = None,
    *,
    name: str | None = None,
) -> Task[Any, Any]:
    """Serialize concurrent invocations of a task.

    Each call to ``single`` owns an independent lock. An invocation that
    finds the lock free takes it and runs the task. An invocation that finds
    it held sleeps ``poll_interval`` and checks again; once the holder has
    kept the lock for ``timeout`` seconds the waiter clears the lock and
    fails with ``LockTimeoutError``.

    The holder is never cancelled. It releases the lock when its task
    settles, whether it succeeded or failed, unless the lock was already
    forced away from it.

    Args:
        task: Task-like value to guard.
        timeout: Seconds a waiter tolerates the same holder.
        poll_interval: Seconds between lock checks.
        name: Name reported in timeout errors; defaults to the task's name.

    Returns:
        Task[Any, Any]: The guarded task.
    """
    settings = LockSettings(timeout=timeout, poll_interval=poll_interval)
    inner = normalize(task)
    label = name or inner.name
    lock = _Lock()

    async def acquire(runtime: Runtime) -> _Hold:
        while lock.hold is not None:
            await runtime.sleep(settings.interval)
            current = lock.hold
            if current is None:
                break
            elapsed = runtime.now() - current.since
            if elapsed >= settings.timeout:
                lock.hold = None
                logger.warning("Lock for %s forced open after %.3fs", label, elapsed)
                if runtime.trace is not None:
                    runtime.trace.record("lock_timeout", info={"task": label, "elapsed": elapsed})
                raise LockTimeoutError(elapsed, label)

        hold = _Hold(since=runtime.now())
        lock.hold = hold
        logger.debug("Lock for %s acquired", label)
        if runtime.trace is not None:
            runtime.trace.record("lock_acquire", info={"task": label})
        return hold

    async def _run(value: Any, ctx: Any) -> Any:
        runtime = get_runtime()
        hold = await acquire(runtime)
        try:
            return await inner(value, ctx)
        finally:
            if lock.hold is hold:
                lock.hold = None
                duration_ms = (runtime.now() - hold.since) * 1000
                logger.debug("Lock for %s released", label)
                if runtime.trace is not None:
                    runtime.trace.record(
                        "lock_release", info={"task": label}, duration_ms=duration_ms
                    )

    return Task(_run, name=label)
