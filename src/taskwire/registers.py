"""Shared registers whose mutations are tasks.

Every method below has the task signature ``(value, ctx)`` and can be
spliced directly into a combinator list, e.g. ``waterfall([load, stack.push])``.
Mutations are synchronous and unguarded; wrap access from concurrent
branches with ``single``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


class Counter:
    """A numeric register.

    ``incr``/``decr``/``set`` resolve with the value they were given, ``get``
    resolves with the register itself. With ``resolves_count=True``,
    ``incr``/``decr`` resolve with the updated count instead.
    """

    def __init__(self, value: Any = 0, step: Any = 1, *, resolves_count: bool = False) -> None:
        self.value = _to_number(value)
        self.step = _to_number(step) or 1
        self.resolves_count = resolves_count

    async def incr(self, value: Any = None, ctx: Any = None) -> Any:
        self.value += self.step
        return self.value if self.resolves_count else value

    async def decr(self, value: Any = None, ctx: Any = None) -> Any:
        self.value -= self.step
        return self.value if self.resolves_count else value

    async def get(self, value: Any = None, ctx: Any = None) -> int | float:
        return self.value

    async def set(self, value: Any = None, ctx: Any = None) -> Any:
        self.value = _to_number(value)
        return value

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"Counter(value={self.value!r}, step={self.step!r})"


def number(value: Any = 0, step: Any = 1) -> Counter:
    """A counter whose ``incr``/``decr`` resolve with the updated count.

    Its ``decr`` works as a loop condition: ``while_(number(5).decr, body)``
    runs the body four times.
    """
    return Counter(value, step, resolves_count=True)


class Stack:
    """An ordered register with ``push``/``pop`` tasks."""

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self.items: list[Any] = list(items) if items is not None else []

    async def push(self, value: Any = None, ctx: Any = None) -> Any:
        self.items.append(value)
        return value

    async def pop(self, value: Any = None, ctx: Any = None) -> Any:
        if not self.items:
            return None
        return self.items.pop()

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"Stack({self.items!r})"
