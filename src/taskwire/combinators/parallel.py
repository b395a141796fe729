"""Fan-out combinator."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from taskwire.kernel import Task, get_runtime

from .sequence import steps_of


def parallel(tasks: Sequence[Any] | None = None) -> Task[Any, list[Any]]:
    """Run tasks concurrently with the same input.

    Semantics:
        - Every task receives the same value and context
        - All tasks are started before any of them is awaited
        - Results keep task order, whatever order they finish in
        - ``None`` elements pass the input value through
        - The first observed failure is raised; other tasks are not
          cancelled and their outcomes are discarded

    Trace behavior:
        - Records "parallel_begin"
        - Records each branch as child event
        - Records "parallel_end", also when a branch fails (no branch
          events are recorded then)

    Args:
        tasks: Sequence of task-like values.

    Returns:
        Task[Any, list[Any]]: resolves ``[]`` for an absent or scalar input.
    """
    steps = steps_of(tasks, skip_empty=False)

    async def _run(value: Any, ctx: Any) -> list[Any]:
        runtime = get_runtime()
        trace = runtime.trace

        parallel_id = None
        if trace is not None:
            parallel_id = trace.record("parallel_begin", info={"branches": len(steps)})

        start_time = time.perf_counter()
        failed = True
        try:
            results = await runtime.gather(*(step(value, ctx) for step in steps))
            failed = False
        finally:
            if trace is not None:
                duration_ms = (time.perf_counter() - start_time) * 1000
                if not failed:
                    for i, step in enumerate(steps):
                        trace.record(f"branch_{i}", info={"task": step.name}, parent_id=parallel_id)
                trace.record(
                    "parallel_end",
                    info={"failed": failed},
                    parent_id=parallel_id,
                    duration_ms=duration_ms,
                )

        return results

    return Task(_run, name="parallel")
