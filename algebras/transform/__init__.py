"""
Transformers
============

Reader / Writer / State и их варианты поверх TaskResult.
"""

from .log import Log
from .reader import Reader
from .writer import Writer
from .state import State
from .reader_task_result import ReaderTaskResult
from .writer_task_result import WriterTaskResult
from .state_task_result import StateTaskResult

__all__ = (
    "Log",
    "Reader",
    "Writer",
    "State",
    "ReaderTaskResult",
    "WriterTaskResult",
    "StateTaskResult",
)
