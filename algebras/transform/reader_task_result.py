"""
ReaderTaskResult - Reader over TaskResult
=========================================

Окружение E -> асинхронный Result. Ошибка прерывает цепочку.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..core import Result
from ..effect import TaskResult


class ReaderTaskResult[E, T]:
    """
    Environment-dependent asynchronous fallible computation.

    Example:
        fetch = ReaderTaskResult(lambda client: TaskResult.catching(client.get_user))
        name = fetch.map(lambda u: u.name)
        await name.run(client)
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[E], TaskResult[T]], /) -> None:
        self._run = run

    @staticmethod
    def pure[Env, V](value: V) -> ReaderTaskResult[Env, V]:
        return ReaderTaskResult(lambda _: TaskResult.ok(value))

    @staticmethod
    def fail[Env](error: str) -> ReaderTaskResult[Env, typing.Any]:
        return ReaderTaskResult(lambda _: TaskResult.fail(error))

    @staticmethod
    def ask[Env]() -> ReaderTaskResult[Env, Env]:
        return ReaderTaskResult(lambda env: TaskResult.ok(env))

    @staticmethod
    def asks[Env, V](f: Callable[[Env], V]) -> ReaderTaskResult[Env, V]:
        return ReaderTaskResult(lambda env: TaskResult.ok(f(env)))

    @staticmethod
    def from_task_result[Env, V](task: TaskResult[V]) -> ReaderTaskResult[Env, V]:
        """Ignore the environment and reuse task."""
        return ReaderTaskResult(lambda _: task)

    def run(self, env: E) -> TaskResult[T]:
        return self._run(env)

    def to_task_result(self, env: E) -> TaskResult[T]:
        return self._run(env)

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> ReaderTaskResult[E, U]:
        return ReaderTaskResult(lambda env: self._run(env).map(f))

    def select[U](self, f: Callable[[T], U], /) -> ReaderTaskResult[E, U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], ReaderTaskResult[E, U]], /) -> ReaderTaskResult[E, U]:
        return ReaderTaskResult(lambda env: self._run(env).bind(lambda value: f(value).run(env)))

    def select_many[I, R](
        self,
        binder: Callable[[T], ReaderTaskResult[E, I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> ReaderTaskResult[E, R]:
        if projector is None:
            return typing.cast(ReaderTaskResult[E, R], self.bind(binder))

        def run(env: E) -> TaskResult[R]:
            return self._run(env).select_many(lambda value: binder(value).run(env), projector)

        return ReaderTaskResult(run)

    def apply[U](self, f: ReaderTaskResult[E, Callable[[T], U]], /) -> ReaderTaskResult[E, U]:
        return ReaderTaskResult(lambda env: self._run(env).apply(f.run(env)))

    def local[Outer](self, f: Callable[[Outer], E], /) -> ReaderTaskResult[Outer, T]:
        return ReaderTaskResult(lambda env: self._run(f(env)))

    async def execute(self, env: E) -> Result[T]:
        """Run against env and await the Result."""
        return await self._run(env).run()


__all__ = ("ReaderTaskResult",)
