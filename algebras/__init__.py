"""
Algebras: small immutable effect types for Python.

Option, Result, Try, IO, TaskIO, TaskResult, Reader / Writer / State
(plus TaskResult-lifted variants), Validation, Lens, Validator and Cont,
all sharing one combinator surface: map / bind / apply / alt / select_many.

Architecture:
- core        - чистые значения (Unit, Option, Result, Try)
- effect      - отложенные эффекты (IO, TaskIO, TaskResult)
- transform   - Reader / Writer / State и их TaskResult-варианты
- validation  - накопление ошибок и оптика
- do          - workflow-блоки с ранним выходом
- interop     - kungfu, каналы, HTTP, БД
"""

# Core types
from ._types import AsyncThunk, ErrorFactory, Predicate, Projector, Selector, Sink, Thunk

# Errors
from ._errors import InvalidOperationError, LensNotInitializedError

# Internal helpers (for custom wrappers)
from . import _helpers

# Pure values
from .core import UNIT, Option, Result, Try, Unit

# Effects
from .effect import IO, TaskIO, TaskResult

# Transformers
from .transform import Log, Reader, ReaderTaskResult, State, StateTaskResult, Writer, WriterTaskResult

# Validation & optics
from .validation import Lens, Validation, Validator, ensure

# Continuations
from .continuation import Cont

# Do-notation
from . import do
from .do import DoScope, ScopeState, workflow

# Collections
from . import collection
from .collection import (
    SequencePipe,
    SequenceTerminal,
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

# Lift helpers
from . import lift
from .lift import pipe

# Interop
from . import interop

__all__ = (
    # Types
    "AsyncThunk",
    "ErrorFactory",
    "Predicate",
    "Projector",
    "Selector",
    "Sink",
    "Thunk",
    # Errors
    "InvalidOperationError",
    "LensNotInitializedError",
    # Helpers
    "_helpers",
    # Core
    "Unit",
    "UNIT",
    "Option",
    "Result",
    "Try",
    # Effects
    "IO",
    "TaskIO",
    "TaskResult",
    # Transformers
    "Log",
    "Reader",
    "Writer",
    "State",
    "ReaderTaskResult",
    "WriterTaskResult",
    "StateTaskResult",
    # Validation
    "Validation",
    "Lens",
    "Validator",
    "ensure",
    # Continuations
    "Cont",
    # Do
    "do",
    "DoScope",
    "ScopeState",
    "workflow",
    # Collections
    "collection",
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
    # Lift
    "lift",
    "pipe",
    # Interop
    "interop",
)
