"""Error types raised by the task engine."""

from __future__ import annotations


class TaskwireError(Exception):
    """Base class for errors raised by taskwire itself.

    Failures raised by wrapped callables are never converted into this type;
    they propagate through every combinator unchanged.
    """


class LockTimeoutError(TaskwireError, TimeoutError):
    """Raised to a caller that waited too long for a ``single``-guarded task.

    The caller that holds the lock never receives this error; only the
    waiting caller that observed the timeout does.
    """

    def __init__(self, elapsed: float, name: str | None = None) -> None:
        self.elapsed = elapsed
        self.name = name
        target = f" for {name!r}" if name else ""
        super().__init__(f"Lock timeout{target} after {elapsed:.3f}s")

    def __repr__(self) -> str:
        return f"LockTimeoutError(elapsed={self.elapsed!r}, name={self.name!r})"
