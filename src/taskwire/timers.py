"""Timer tasks."""

from __future__ import annotations

from typing import Any

from taskwire.kernel import Task, get_runtime


def wait(seconds: float) -> Task[Any, Any]:
    """A task that sleeps for ``seconds`` and then passes its input through."""

    async def _run(value: Any, ctx: Any) -> Any:
        await get_runtime().sleep(seconds)
        return value

    return Task(_run, name=f"wait({seconds})")
