"""
TaskIO - deferred asynchronous effect
=====================================

Ленивая асинхронная операция. Результат одного экземпляра кэшируется (acache).
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Awaitable, Callable, Coroutine
from contextlib import AsyncExitStack

from kungfu.library.caching import acache

from .._helpers import as_coroutine, enter_resource, exception_message, maybe_await
from .._types import AsyncThunk, ErrorFactory
from ..core import UNIT, Option, Result, Try, Unit

if typing.TYPE_CHECKING:
    from .task_result import TaskResult


class TaskIO[T]:
    """
    Lazy asynchronous effect.

    The thunk runs on first await; later awaits of the same instance reuse
    its outcome. Every combinator builds a new TaskIO that awaits this one.

    Example:
        fetch = TaskIO(lambda: client.get_user(42))
        name = await fetch.map(lambda u: u.name)
    """

    __slots__ = ("_thunk",)

    def __init__(self, thunk: AsyncThunk[T], /) -> None:
        self._thunk: Callable[[], Coroutine[typing.Any, typing.Any, T]] = acache(as_coroutine(thunk))

    @staticmethod
    def pure[V](value: V) -> TaskIO[V]:
        async def thunk() -> V:
            return value

        return TaskIO(thunk)

    @staticmethod
    def from_awaitable[V](awaitable: Awaitable[V]) -> TaskIO[V]:
        async def thunk() -> V:
            return await awaitable

        return TaskIO(thunk)

    @staticmethod
    def from_action(action: Callable[[], Awaitable[object]]) -> TaskIO[Unit]:
        """Wrap an async procedure; the TaskIO yields UNIT."""

        async def thunk() -> Unit:
            await action()
            return UNIT

        return TaskIO(thunk)

    def run(self) -> Coroutine[typing.Any, typing.Any, T]:
        """Coroutine producing the value. Exceptions propagate."""
        return self._thunk()

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> TaskIO[U]:
        async def thunk() -> U:
            return f(await self.run())

        return TaskIO(thunk)

    def select[U](self, f: Callable[[T], U], /) -> TaskIO[U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], TaskIO[U]], /) -> TaskIO[U]:
        async def thunk() -> U:
            return await f(await self.run()).run()

        return TaskIO(thunk)

    def select_many[I, R](
        self,
        binder: Callable[[T], TaskIO[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> TaskIO[R]:
        if projector is None:
            return typing.cast(TaskIO[R], self.bind(binder))

        async def thunk() -> R:
            value = await self.run()
            return projector(value, await binder(value).run())

        return TaskIO(thunk)

    def apply[U](self, f: TaskIO[Callable[[T], U]], /) -> TaskIO[U]:
        """Applicative <*>: the function task is awaited first."""

        async def thunk() -> U:
            fn = await f.run()
            return fn(await self.run())

        return TaskIO(thunk)

    def tap(self, f: Callable[[T], object], /) -> TaskIO[T]:
        """Observe the value with a sync or async inspector."""

        async def thunk() -> T:
            value = await self.run()
            await maybe_await(f(value))
            return value

        return TaskIO(thunk)

    def then[U](self, next_task: TaskIO[U], /) -> TaskIO[U]:
        async def thunk() -> U:
            await self.run()
            return await next_task.run()

        return TaskIO(thunk)

    # Time

    def delay(self, seconds: float) -> TaskIO[T]:
        """Wait before running this task."""

        async def thunk() -> T:
            await asyncio.sleep(seconds)
            return await self.run()

        return TaskIO(thunk)

    def timeout(self, seconds: float) -> TaskIO[T]:
        """Fail with TimeoutError when the task does not finish in time."""

        async def thunk() -> T:
            async with asyncio.timeout(seconds):
                return await self.run()

        return TaskIO(thunk)

    # Resources

    def using[Res, U](
        self,
        acquire: Callable[[T], TaskIO[Res]],
        use: Callable[[T, Res], TaskIO[U]],
    ) -> TaskIO[U]:
        """
        Acquire a resource from the value, use it, then dispose it.

        Disposal runs after use completes or raises. Async context managers
        are exited, objects with aclose() or close() are closed.
        """

        async def thunk() -> U:
            value = await self.run()
            resource = await acquire(value).run()
            async with AsyncExitStack() as stack:
                handle = await enter_resource(stack, resource)
                return await use(value, handle).run()

        return TaskIO(thunk)

    # Conversions

    async def to_option(self) -> Option[T]:
        """Empty when the task raises or produces None."""
        try:
            return Option.from_nullable(await self.run())
        except Exception:
            return Option.none()

    async def to_result(self, error_factory: ErrorFactory | None = None) -> Result[T]:
        try:
            return Result.ok(await self.run())
        except Exception as exc:
            return Result.fail(error_factory() if error_factory is not None else exception_message(exc))

    async def to_try(self) -> Try[T]:
        try:
            return Try.success(await self.run())
        except Exception as exc:
            return Try.failure(exc)

    def to_task_result(self, error_factory: ErrorFactory | None = None) -> TaskResult[T]:
        from .task_result import TaskResult

        async def thunk() -> Result[T]:
            return await self.to_result(error_factory)

        return TaskResult(thunk)

    def to_task_io(self) -> TaskIO[T]:
        return self

    # Protocol methods

    def __await__(self) -> typing.Generator[typing.Any, None, T]:
        return self.run().__await__()


__all__ = ("TaskIO",)
