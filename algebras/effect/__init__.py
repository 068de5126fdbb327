"""
Effects
=======

IO (синхронный), TaskIO и TaskResult (асинхронные, ленивые).
"""

from .io import IO
from .task_io import TaskIO
from .task_result import TaskResult

__all__ = (
    "IO",
    "TaskIO",
    "TaskResult",
)
