"""Sequential combinators: wrap, waterfall, series."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from taskwire.kernel import Task, normalize, through


def steps_of(tasks: Any, *, skip_empty: bool = True) -> list[Task[Any, Any]]:
    """Normalize a list of task-like values.

    Anything that is not a list-like sequence (``None``, a number, a string)
    yields no steps.
    """
    if not isinstance(tasks, Sequence) or isinstance(tasks, (str, bytes, bytearray)):
        return []
    return [normalize(t) for t in tasks if not (skip_empty and t is None)]


def waterfall(tasks: Sequence[Any] | None = None) -> Task[Any, Any]:
    """Run tasks one after another, threading each result into the next.

    Semantics:
        - ``None`` elements contribute no step
        - Every step receives the same context
        - Result is the last step's result
        - A failing step aborts the remaining ones

    Args:
        tasks: Sequence of task-like values.

    Returns:
        Task[Any, Any]: pass-through when there is nothing to run.
    """
    steps = steps_of(tasks)
    if not steps:
        return through
    if len(steps) == 1:
        return steps[0]

    async def _run(value: Any, ctx: Any) -> Any:
        for step in steps:
            value = await step(value, ctx)
        return value

    return Task(_run, name="waterfall")


def series(tasks: Sequence[Any] | None = None) -> Task[Any, list[Any]]:
    """Run tasks one after another, collecting every step's result.

    Each step receives the previous step's result, exactly as in
    ``waterfall``; the composite resolves with the list of all of them.
    No partial list is returned when a step fails.
    """
    steps = steps_of(tasks)

    async def _run(value: Any, ctx: Any) -> list[Any]:
        results: list[Any] = []
        for step in steps:
            value = await step(value, ctx)
            results.append(value)
        return results

    return Task(_run, name="series")


def wrap(*tasks: Any) -> Task[Any, Any]:
    """Normalize task-like values into a single Task.

    No argument gives a pass-through task, one argument is normalized on its
    own, several arguments are composed with ``waterfall``.
    """
    if len(tasks) > 1:
        return waterfall(tasks)
    if not tasks:
        return through
    return normalize(tasks[0])
