"""Workflow boundary: runs a DoScope body and turns its outcome into a Result."""

from __future__ import annotations

import asyncio
import functools
import logging
import typing
from collections.abc import Awaitable, Callable
from contextlib import AsyncExitStack

from .._errors import OPERATION_CANCELLED
from .._helpers import exception_message
from ..core import Result
from ..effect import TaskResult
from .scope import DoScope, ScopeState, ShortCircuit

logger = logging.getLogger(__name__)

type Workflow[T] = Callable[[DoScope], Awaitable[T]]


async def execute[T](workflow: Workflow[T]) -> Result[T]:
    """
    Run workflow with a fresh scope and report its outcome.

    - short circuit: failure with the recorded error (even if the body caught the signal)
    - escaping exception: failure with its message
    - cancellation: failure with "Operation was cancelled."

    Resources registered with scope.use are released before this returns.
    """
    resources = AsyncExitStack()
    scope = DoScope(resources)
    try:
        async with resources:
            value = await workflow(scope)
    except ShortCircuit:
        logger.debug("Workflow short-circuited: %s", scope.error)
        return Result.fail(scope.error)
    except asyncio.CancelledError:
        scope.finish(ScopeState.FAULTED)
        logger.debug("Workflow was cancelled")
        return Result.fail(OPERATION_CANCELLED)
    except Exception as exc:
        if scope.state is ScopeState.SHORT_CIRCUITED:
            logger.debug("Workflow short-circuited: %s", scope.error)
            return Result.fail(scope.error)
        scope.finish(ScopeState.FAULTED)
        logger.debug("Workflow faulted", exc_info=exc)
        return Result.fail(exception_message(exc))

    if scope.state is ScopeState.SHORT_CIRCUITED:
        logger.debug("Workflow swallowed its short circuit: %s", scope.error)
        return Result.fail(scope.error)
    scope.finish(ScopeState.COMPLETED)
    return Result.ok(value)


def run[T](workflow: Workflow[T]) -> TaskResult[T]:
    """Lazy version of execute: the workflow starts when the TaskResult is awaited."""
    return TaskResult(lambda: execute(workflow))


def workflow[**P, T](
    fn: Callable[typing.Concatenate[DoScope, P], Awaitable[T]],
) -> Callable[P, TaskResult[T]]:
    """
    Decorator: async def f(scope, *args) becomes f(*args) -> TaskResult.

    Example:
        @workflow
        async def load_profile(scope: DoScope, user_id: int) -> Profile:
            user = await scope.bind(fetch_user(user_id))
            scope.ensure(user.active, "User is inactive")
            return await scope.return_(Profile(user))

        await load_profile(42)   # Result[Profile]
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> TaskResult[T]:
        return run(lambda scope: fn(scope, *args, **kwargs))

    return wrapper


__all__ = ("execute", "run", "workflow", "Workflow")
