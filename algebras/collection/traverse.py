"""Traverse combinators

Map every item to a container and collect the values, sequentially."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from .._helpers import identity
from .._types import Predicate
from ..core import Option, Result
from ..effect import TaskResult
from ..validation import Validation

# Search
def first_option[T](items: Iterable[T], predicate: Predicate[T] | None = None) -> Option[T]:
    """First item (matching predicate when given), or empty."""
    for item in items:
        if predicate is None or predicate(item):
            return Option.some(item)
    return Option.none()

# Option
def traverse_option[A, T](items: Iterable[A], handler: Callable[[A], Option[T]]) -> Option[list[T]]:
    """Some(values) when every item maps to Some; empty on the first empty."""
    values: list[T] = []
    for item in items:
        option = handler(item)
        if option.is_none:
            return Option.none()
        values.append(typing.cast(T, option.value))
    return Option.some(values)

def sequence_option[T](options: Iterable[Option[T]]) -> Option[list[T]]:
    return traverse_option(options, identity)

# Result
def traverse_result[A, T](items: Iterable[A], handler: Callable[[A], Result[T]]) -> Result[list[T]]:
    """Ok(values), or the first failure. Items after the failure are not visited."""
    values: list[T] = []
    for item in items:
        result = handler(item)
        if result.is_error:
            return Result.fail(result.error)
        values.append(typing.cast(T, result.value))
    return Result.ok(values)

def sequence_result[T](results: Iterable[Result[T]]) -> Result[list[T]]:
    return traverse_result(results, identity)

# TaskResult
def traverse_task_result[A, T](
    items: Iterable[A],
    handler: Callable[[A], TaskResult[T]],
) -> TaskResult[list[T]]:
    """Monadic map: A -> TaskResult[T]. Sequential to preserve effect order."""

    async def run() -> Result[list[T]]:
        values: list[T] = []
        for item in items:
            result = await handler(item).run()
            if result.is_error:
                return Result.fail(result.error)
            values.append(typing.cast(T, result.value))
        return Result.ok(values)

    return TaskResult(run)

def sequence_task_result[T](tasks: Iterable[TaskResult[T]]) -> TaskResult[list[T]]:
    return traverse_task_result(tasks, identity)

# Validation
def traverse_validation[A, T](
    items: Iterable[A],
    handler: Callable[[A], Validation[T]],
) -> Validation[list[T]]:
    """Valid(values), or every error from every invalid item in order."""
    values: list[T] = []
    errors: list[str] = []
    valid = True
    for item in items:
        validation = handler(item)
        if validation.is_valid:
            values.append(typing.cast(T, validation.value))
        else:
            valid = False
            errors.extend(validation.errors)
    if not valid:
        return Validation.failure(*errors)
    return Validation.success(values)

def sequence_validation[T](validations: Iterable[Validation[T]]) -> Validation[list[T]]:
    return traverse_validation(validations, identity)

__all__ = (
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
