"""
Lift helpers.

Supports two import styles:
    from algebras import lift as L   # Recommended
    from algebras import lift        # Explicit

Architecture:
- L.up.*  - подъем значений в контейнеры
- L.pipe  - явная передача значения в sink

Examples:
    from algebras import lift as L

    maybe = L.to_option(config.get("port"))
    checked = L.validate(age, lambda a: a >= 18, lambda: "Must be adult")
    task = L.to_task_result(user)
    L.pipe(report, print)
"""

from __future__ import annotations

from . import up
from .up import pipe, to_io, to_ok, to_option, to_task_result, validate

__all__ = (
    "up",
    "to_option",
    "to_ok",
    "validate",
    "to_io",
    "to_task_result",
    "pipe",
)
