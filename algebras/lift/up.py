"""
Подъем значений в контейнеры.

Функции для преобразования обычных значений в Option, Result, Validation,
IO и TaskResult, плюс явная передача значения в sink.
"""

from __future__ import annotations

from .._types import ErrorFactory, Predicate, Sink
from ..core import Option, Result
from ..effect import IO, TaskResult
from ..validation import Validation


def to_option[T](value: T | None, predicate: Predicate[T] | None = None) -> Option[T]:
    """
    Lift a nullable value into Option.

    **When to use:** At the edge of code that signals absence with None.

    Example:
        from algebras import lift

        lift.to_option(os.environ.get("HOME"))         # Some("/root") or None_
        lift.to_option(5, lambda x: x > 10)            # None_

    NOTE: With a predicate, a present value that fails it is treated as absent.
    """
    option = Option.from_nullable(value)
    return option if predicate is None else option.filter(predicate)


def to_ok[T](value: T) -> Result[T]:
    """Lift a plain value into a successful Result."""
    return Result.ok(value)


def validate[T](value: T, predicate: Predicate[T], error_factory: ErrorFactory) -> Validation[T]:
    """
    Single-rule validation of a plain value.

    Example:
        from algebras import lift

        lift.validate(age, lambda a: a >= 18, lambda: "Must be adult")
    """
    if predicate(value):
        return Validation.success(value)
    return Validation.failure(error_factory())


def to_io[T](value: T) -> IO[T]:
    """IO that yields value without side effects."""
    return IO.pure(value)


def to_task_result[T](value: T) -> TaskResult[T]:
    """
    Completed successful TaskResult.

    **When to use:** To start a TaskResult chain from a plain value.
    """
    return TaskResult.ok(value)


def pipe[T](value: T, sink: Sink[T]) -> T:
    """
    Feed value to an explicit sink and return it unchanged.

    Example:
        from algebras import lift

        total = lift.pipe(compute_total(), print)   # prints, then keeps going
    """
    sink(value)
    return value


__all__ = (
    "to_option",
    "to_ok",
    "validate",
    "to_io",
    "to_task_result",
    "pipe",
)
