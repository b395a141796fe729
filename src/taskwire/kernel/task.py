"""Task - the uniform async shape every task-like value is normalized into."""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

V = TypeVar("V")
R = TypeVar("R")

Run = Callable[[Any, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Task(Generic[V, R]):
    """A normalized task: ``await task(value, ctx)``.

    ``value`` is the input threaded through a composition, ``ctx`` is the
    invocation context handed unchanged to every step of it.
    """

    _run: Run
    name: str | None = field(default=None, compare=False)

    async def __call__(self, value: V | None = None, ctx: Any = None) -> R:
        return await self._run(value, ctx)

    def then(self, next_task: Any) -> Task[V, Any]:
        """Chain a task-like value after this one.

        The result of this task becomes the input of ``next_task``; the
        context is passed to both.
        """
        following = normalize(next_task)

        async def _run(value: V | None, ctx: Any) -> Any:
            return await following(await self(value, ctx), ctx)

        return Task(_run, name=self.name)

    def __repr__(self) -> str:
        return f"Task({self.name or '<anonymous>'})"


class TaskKind(Enum):
    """Variants a task-like value is classified into."""

    EMPTY = "empty"
    TASK = "task"
    CALLABLE = "callable"
    DEFERRED = "deferred"
    CONSTANT = "constant"


def classify(obj: Any) -> TaskKind:
    """Pick the variant ``obj`` normalizes as."""
    if obj is None:
        return TaskKind.EMPTY
    if isinstance(obj, Task):
        return TaskKind.TASK
    if inspect.isawaitable(obj) or isinstance(obj, concurrent.futures.Future):
        return TaskKind.DEFERRED
    if callable(obj):
        return TaskKind.CALLABLE
    return TaskKind.CONSTANT


async def _through(value: Any, ctx: Any) -> Any:
    return value


through: Task[Any, Any] = Task(_through, name="through")


def _from_empty(_: None) -> Task[Any, Any]:
    return through


def _from_task(task: Task[Any, Any]) -> Task[Any, Any]:
    return task


def _from_constant(constant: Any) -> Task[Any, Any]:
    async def _run(value: Any, ctx: Any) -> Any:
        return constant

    return Task(_run, name=f"constant({type(constant).__name__})")


def _from_deferred(deferred: Any) -> Task[Any, Any]:
    # Scheduled lazily so normalization works outside a running loop;
    # every invocation after the first adopts the same settlement.
    settled: list[asyncio.Future[Any]] = []

    async def _run(value: Any, ctx: Any) -> Any:
        if not settled:
            if isinstance(deferred, concurrent.futures.Future):
                settled.append(asyncio.wrap_future(deferred))
            else:
                settled.append(asyncio.ensure_future(deferred))
        return await settled[0]

    return Task(_run, name="deferred")


def positional_arity(fn: Callable[..., Any]) -> int:
    """How many of (value, ctx) ``fn`` receives, capped at 2.

    The context is passed only into a second positional parameter that has
    no default or is named ``ctx``; a defaulted parameter keeps its default.
    ``*args`` callables receive the value only.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1
    positional: list[inspect.Parameter] = []
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 1
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional.append(param)
    if len(positional) < 2:
        return len(positional)
    second = positional[1]
    if second.default is inspect.Parameter.empty or second.name == "ctx":
        return 2
    return 1


def _from_callable(fn: Callable[..., Any]) -> Task[Any, Any]:
    arity = positional_arity(fn)

    async def _run(value: Any, ctx: Any) -> Any:
        if arity >= 2:
            result = fn(value, ctx)
        elif arity == 1:
            result = fn(value)
        else:
            result = fn()
        if isinstance(result, concurrent.futures.Future):
            result = asyncio.wrap_future(result)
        if inspect.isawaitable(result):
            result = await result
        return result

    return Task(_run, name=getattr(fn, "__name__", None))


_BUILDERS: dict[TaskKind, Callable[[Any], Task[Any, Any]]] = {
    TaskKind.EMPTY: _from_empty,
    TaskKind.TASK: _from_task,
    TaskKind.CALLABLE: _from_callable,
    TaskKind.DEFERRED: _from_deferred,
    TaskKind.CONSTANT: _from_constant,
}


def normalize(obj: Any = None) -> Task[Any, Any]:
    """Turn any task-like value into a Task.

    - ``None``: pass the input value through unchanged
    - Task: returned as is
    - callable: called with the value, plus the context when its second
      positional parameter is required or named ``ctx``; awaitable results
      are awaited
    - awaitable / concurrent future: its settlement, input ignored
    - anything else: that exact object, input ignored

    Normalization never fails on the shape of ``obj``.
    """
    return _BUILDERS[classify(obj)](obj)
