"""
kungfu bridge
=============

Конвертация между Result/Try/TaskResult и kungfu Result/LazyCoroResult.
"""

from __future__ import annotations

import typing
from typing import assert_never

from kungfu import Error, LazyCoroResult, Ok
from kungfu import Result as KResult

from .._helpers import exception_message
from ..core import Result, Try
from ..effect import TaskResult


def to_kungfu[T](result: Result[T]) -> KResult[T, str]:
    """Result -> kungfu Ok(value) / Error(message)."""
    if result.is_ok:
        return Ok(typing.cast(T, result.value))
    return Error(typing.cast(str, result.error))


def from_kungfu[T, E](result: KResult[T, E]) -> Result[T]:
    """
    kungfu Result -> Result.

    Exception errors become their message, other errors their str().
    """
    match result:
        case Ok(value):
            return Result.ok(value)
        case Error(error):
            if isinstance(error, BaseException):
                return Result.fail(exception_message(error))
            return Result.fail(None if error is None else str(error))
        case _ as unreachable:
            assert_never(unreachable)


def try_to_kungfu[T](attempt: Try[T]) -> KResult[T, Exception | None]:
    """Try -> kungfu Result keeping the captured exception as the error."""
    if attempt.is_success:
        return Ok(typing.cast(T, attempt.value))
    return Error(attempt.exception)


def to_lazy_coro_result[T](task: TaskResult[T]) -> LazyCoroResult[T, str]:
    """TaskResult -> kungfu LazyCoroResult with the message as error."""

    async def run() -> KResult[T, str]:
        return to_kungfu(await task.run())

    return LazyCoroResult(run)


def from_lazy_coro_result[T, E](lazy: LazyCoroResult[T, E]) -> TaskResult[T]:
    """kungfu LazyCoroResult -> TaskResult."""

    async def run() -> Result[T]:
        return from_kungfu(await lazy())

    return TaskResult(run)


__all__ = (
    "to_kungfu",
    "from_kungfu",
    "try_to_kungfu",
    "to_lazy_coro_result",
    "from_lazy_coro_result",
)
