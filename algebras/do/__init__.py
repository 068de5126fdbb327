"""
Do-notation
===========

Workflow-блоки с ранним выходом для TaskResult.

Example:
    from algebras import do

    result = await do.run(lambda scope: scope.return_(1))
"""

from .scope import DoScope, ScopeState
from .runner import Workflow, execute, run, workflow

__all__ = (
    "DoScope",
    "ScopeState",
    "Workflow",
    "execute",
    "run",
    "workflow",
)
