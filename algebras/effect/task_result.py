"""
TaskResult - asynchronous fallible computation
==============================================

Ленивая асинхронная операция, результат которой - Result[T].
Кэшируется так же, как TaskIO: один экземпляр = одно вычисление.
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Awaitable, Callable, Coroutine

from kungfu.library.caching import acache

from .._errors import OPERATION_CANCELLED, InvalidOperationError
from .._helpers import as_coroutine, exception_message, maybe_await
from .._types import AsyncThunk, ErrorFactory, Predicate, Thunk
from ..core import Option, Result

if typing.TYPE_CHECKING:
    from .task_io import TaskIO


class TaskResult[T]:
    """
    Lazy asynchronous computation that ends in Result[T].

    Failures short-circuit: once a step fails, later steps are not run.

    Example:
        user = TaskResult.catching(lambda: api.fetch_user(42))
        name = await user.ensure(lambda u: u.active, "inactive").map(lambda u: u.name)
        # Ok("alice") / Error("inactive") / Error(<exception message>)
    """

    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], Awaitable[Result[T]]], /) -> None:
        self._thunk: Callable[[], Coroutine[typing.Any, typing.Any, Result[T]]] = acache(as_coroutine(thunk))

    # Constructors

    @staticmethod
    def ok[V](value: V) -> TaskResult[V]:
        return TaskResult.from_result(Result.ok(value))

    @staticmethod
    def fail(error: str | None) -> TaskResult[typing.Any]:
        return TaskResult.from_result(Result.fail(error))

    @staticmethod
    def from_result[V](result: Result[V]) -> TaskResult[V]:
        async def thunk() -> Result[V]:
            return result

        return TaskResult(thunk)

    @staticmethod
    def catching[V](thunk: AsyncThunk[V]) -> TaskResult[V]:
        """
        Run an async thunk, turning exceptions into failures.

        Cancellation becomes a failure with "Operation was cancelled.".
        """

        async def run() -> Result[V]:
            try:
                return Result.ok(await thunk())
            except asyncio.CancelledError:
                return Result.fail(OPERATION_CANCELLED)
            except Exception as exc:
                return Result.fail(exception_message(exc))

        return TaskResult(run)

    @staticmethod
    def from_awaitable[V](awaitable: Awaitable[V]) -> TaskResult[V]:
        async def thunk() -> V:
            return await awaitable

        return TaskResult.catching(thunk)

    def run(self) -> Coroutine[typing.Any, typing.Any, Result[T]]:
        """Coroutine producing the Result."""
        return self._thunk()

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> TaskResult[U]:
        async def thunk() -> Result[U]:
            return (await self.run()).map(f)

        return TaskResult(thunk)

    def select[U](self, f: Callable[[T], U], /) -> TaskResult[U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], TaskResult[U]], /) -> TaskResult[U]:
        async def thunk() -> Result[U]:
            result = await self.run()
            if result.is_error:
                return Result.fail(result.error)
            return await f(typing.cast(T, result.value)).run()

        return TaskResult(thunk)

    def select_many[I, R](
        self,
        binder: Callable[[T], TaskResult[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> TaskResult[R]:
        if projector is None:
            return typing.cast(TaskResult[R], self.bind(binder))

        async def thunk() -> Result[R]:
            result = await self.run()
            if result.is_error:
                return Result.fail(result.error)
            value = typing.cast(T, result.value)
            intermediate = await binder(value).run()
            return intermediate.map(lambda i: projector(value, i))

        return TaskResult(thunk)

    def apply[U](self, f: TaskResult[Callable[[T], U]], /) -> TaskResult[U]:
        """
        Applicative <*>.

        Both sides are awaited, function first, before any failure is
        reported. The function-side error wins when both fail.
        """

        async def thunk() -> Result[U]:
            fn = await f.run()
            value = await self.run()
            return value.apply(fn)

        return TaskResult(thunk)

    def tap(self, f: Callable[[T], object], /) -> TaskResult[T]:
        """Observe a success value with a sync or async inspector."""

        async def thunk() -> Result[T]:
            result = await self.run()
            if result.is_ok:
                await maybe_await(f(typing.cast(T, result.value)))
            return result

        return TaskResult(thunk)

    # Recovery / Alternative

    def or_else(self, fallback: Thunk[TaskResult[T]], /) -> TaskResult[T]:
        """Lazy alternative: fallback is built and awaited only on failure."""

        async def thunk() -> Result[T]:
            result = await self.run()
            if result.is_ok:
                return result
            return await fallback().run()

        return TaskResult(thunk)

    def alt(self, other: TaskResult[T], /) -> TaskResult[T]:
        return self.or_else(lambda: other)

    def __or__(self, other: TaskResult[T]) -> TaskResult[T]:
        return self.alt(other)

    def recover(self, f: Callable[[str], T], /) -> TaskResult[T]:
        async def thunk() -> Result[T]:
            return (await self.run()).recover(f)

        return TaskResult(thunk)

    def ensure(self, predicate: Predicate[T], error: str | ErrorFactory, /) -> TaskResult[T]:
        """
        Turn a success into a failure when predicate rejects its value.

        Existing failures pass through unchanged.
        """

        async def thunk() -> Result[T]:
            result = await self.run()
            if result.is_error or predicate(typing.cast(T, result.value)):
                return result
            return Result.fail(error if isinstance(error, str) else error())

        return TaskResult(thunk)

    # Conversions

    async def to_option(self) -> Option[T]:
        return (await self.run()).to_option()

    async def to_result(self) -> Result[T]:
        return await self.run()

    def to_task_io(self, error_factory: Callable[[str], Exception] | None = None) -> TaskIO[T]:
        """TaskIO that raises on failure (InvalidOperationError unless a factory is given)."""
        from .task_io import TaskIO

        async def thunk() -> T:
            result = await self.run()
            if result.is_ok:
                return typing.cast(T, result.value)
            message = typing.cast(str, result.error)
            raise error_factory(message) if error_factory is not None else InvalidOperationError(message)

        return TaskIO(thunk)

    # Protocol methods

    def __await__(self) -> typing.Generator[typing.Any, None, Result[T]]:
        return self.run().__await__()


__all__ = ("TaskResult",)
