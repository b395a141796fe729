from .combinators import (
    LockSettings,
    each,
    each_series,
    if_,
    parallel,
    series,
    single,
    waterfall,
    while_,
    wrap,
)
from .errors import LockTimeoutError, TaskwireError
from .kernel import (
    AsyncioRuntime,
    Evidence,
    Runtime,
    Task,
    TaskKind,
    Trace,
    get_runtime,
    normalize,
    set_runtime,
    use_runtime,
)
from .registers import Counter, Stack, number
from .timers import wait

__all__ = [
    # Core
    "Task",
    "TaskKind",
    "normalize",
    "wrap",
    # Combinators
    "waterfall",
    "series",
    "parallel",
    "if_",
    "while_",
    "each",
    "each_series",
    "single",
    "LockSettings",
    "wait",
    # Registers
    "Counter",
    "Stack",
    "number",
    # Errors
    "TaskwireError",
    "LockTimeoutError",
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
