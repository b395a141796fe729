"""Branching and looping combinators: if_, while_."""

from __future__ import annotations

from typing import Any

from taskwire.kernel import Task, normalize

from .sequence import waterfall


def if_(cond: Any = None, then: Any = None, otherwise: Any = None) -> Task[Any, Any]:
    """Run exactly one of two tasks depending on a condition task.

    Semantics:
        - ``cond`` is evaluated with the input value
        - Truthy result -> ``then``, otherwise -> ``otherwise``
        - Both branches receive the original input, not the condition's result
        - A failing condition raises without running either branch

    Unset arguments default to pass-through, so ``if_()`` returns its input
    and ``if_(None, a, b)`` branches on the truthiness of the input itself.
    """
    cond_task = normalize(cond)
    true_task = normalize(then)
    false_task = normalize(otherwise)

    async def _run(value: Any, ctx: Any) -> Any:
        if await cond_task(value, ctx):
            return await true_task(value, ctx)
        return await false_task(value, ctx)

    return Task(_run, name="if")


def while_(cond: Any = None, *body: Any) -> Task[Any, Any]:
    """Repeat the body tasks while the condition task is truthy.

    Each round the condition receives the current value; when it is truthy
    the body runs as a waterfall over that value and its result becomes the
    next current value. A falsy condition ends the loop and resolves with the
    current value unchanged.

    ``while_(None, *body)`` tests the threaded value itself, which gives
    do-while loops when the last body task produces the condition.
    """
    cond_task = normalize(cond)
    body_task = waterfall(body)

    async def _run(value: Any, ctx: Any) -> Any:
        # Explicit loop: the stack depth stays constant across rounds.
        while await cond_task(value, ctx):
            value = await body_task(value, ctx)
        return value

    return Task(_run, name="while")
