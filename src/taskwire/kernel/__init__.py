"""Kernel layer - the task shape and the runtime it runs on."""

from taskwire.kernel.runtime import (
    AsyncioRuntime,
    Runtime,
    get_runtime,
    set_runtime,
    use_runtime,
)
from taskwire.kernel.task import Task, TaskKind, classify, normalize, through
from taskwire.kernel.trace import Evidence, Trace

__all__ = [
    "Task",
    "TaskKind",
    "classify",
    "normalize",
    "through",
    # Runtime
    "Runtime",
    "AsyncioRuntime",
    "get_runtime",
    "set_runtime",
    "use_runtime",
    # Tracing
    "Evidence",
    "Trace",
]
