"""Per-element loops: each_series, each."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from taskwire.kernel import Task, get_runtime, normalize

from .sequence import waterfall


def _elements(items: Any) -> list[Any]:
    if isinstance(items, Iterable) and not isinstance(items, (str, bytes, bytearray)):
        return list(items)
    return []


def each_series(items: Any = None, *body: Any) -> Task[Any, list[Any]]:
    """Run the body once per element, one element at a time.

    ``items`` is a task-like value resolving to the elements (a plain list
    works as a constant; the default passes the input through). The body is
    a waterfall whose input is the element itself, not the previous
    element's result. Resolves with the per-element results in order.
    """
    items_task = normalize(items)
    body_task = waterfall(body)

    async def _run(value: Any, ctx: Any) -> list[Any]:
        results: list[Any] = []
        for element in _elements(await items_task(value, ctx)):
            results.append(await body_task(element, ctx))
        return results

    return Task(_run, name="each_series")


def each(items: Any = None, *body: Any) -> Task[Any, list[Any]]:
    """Run the body once per element, all elements concurrently.

    Element binding is the same as ``each_series``; results keep element
    order regardless of completion order. The first failure is raised and
    the remaining bodies keep running.
    """
    items_task = normalize(items)
    body_task = waterfall(body)

    async def _run(value: Any, ctx: Any) -> list[Any]:
        elements = _elements(await items_task(value, ctx))
        return await get_runtime().gather(*(body_task(e, ctx) for e in elements))

    return Task(_run, name="each")
