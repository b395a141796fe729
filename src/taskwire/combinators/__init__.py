"""Combinators - compose task-like values into larger async workflows."""

from .control import if_, while_
from .each import each, each_series
from .parallel import parallel
from .sequence import series, waterfall, wrap
from .single import LockSettings, single

__all__ = [
    "wrap",
    "waterfall",
    "series",
    "parallel",
    "if_",
    "while_",
    "each",
    "each_series",
    "single",
    "LockSettings",
]
