"""
Collection combinators
======================

traverse / sequence для Option, Result, TaskResult, Validation,
конвейеры последовательностей (SequencePipe, SequenceTerminal, ops),
функции над итерируемыми (items) и строками (text).
"""

from . import items, ops, text
from .pipe import SequencePipe, SequenceTerminal
from .traverse import (
    first_option,
    sequence_option,
    sequence_result,
    sequence_task_result,
    sequence_validation,
    traverse_option,
    traverse_result,
    traverse_task_result,
    traverse_validation,
)

__all__ = (
    "items",
    "ops",
    "text",
    "SequencePipe",
    "SequenceTerminal",
    "first_option",
    "traverse_option",
    "sequence_option",
    "traverse_result",
    "sequence_result",
    "traverse_task_result",
    "sequence_task_result",
    "traverse_validation",
    "sequence_validation",
)
