"""WriterTaskResult Monad

Combined monad unifying:
- Lazy (deferred computations)
- Coro (asynchronous)
- Result[T] (success/error)
- Writer[Log[L]] (log accumulation)

Built on top of TaskResult: the success value is a (value, log) pair."""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..core import Result
from ..effect import TaskResult
from .log import Log


class WriterTaskResult[T, L]:
    """Lazy asynchronous Result with an accumulated log.

    Monadic laws:
    - Left identity: pure(a).bind(f) ≡ f(a)
    - Right identity: m.bind(pure) ≡ m
    - Associativity: m.bind(f).bind(g) ≡ m.bind(x => f(x).bind(g))

    A failure drops the remaining steps and their log lines.
    """

    __slots__ = ("_task",)

    def __init__(self, task: TaskResult[tuple[T, Log[L]]], /) -> None:
        self._task = task

    @staticmethod
    def pure[V, LogT](value: V) -> WriterTaskResult[V, LogT]:
        """Lift a value into the monad with empty log."""
        return WriterTaskResult(TaskResult.ok((value, Log())))

    @staticmethod
    def fail[LogT](error: str) -> WriterTaskResult[typing.Any, LogT]:
        return WriterTaskResult(TaskResult.fail(error))

    @staticmethod
    def tell[LogT](*entries: LogT) -> WriterTaskResult[None, LogT]:
        """Write entries to the log without producing a value."""
        return WriterTaskResult(TaskResult.ok((None, Log.of(*entries))))

    @staticmethod
    def of[V, LogT](value: V, *entries: LogT) -> WriterTaskResult[V, LogT]:
        return WriterTaskResult(TaskResult.ok((value, Log.of(*entries))))

    @staticmethod
    def from_task_result[V, LogT](task: TaskResult[V]) -> WriterTaskResult[V, LogT]:
        """Lift a TaskResult with empty log."""
        return WriterTaskResult(task.map(lambda value: (value, Log())))

    def run(self) -> TaskResult[tuple[T, Log[L]]]:
        return self._task

    # Functor operations

    def map[U](self, f: Callable[[T], U], /) -> WriterTaskResult[U, L]:
        """Functor fmap - apply function to success value, preserve log."""
        return WriterTaskResult(self._task.map(lambda pair: (f(pair[0]), pair[1])))

    def select[U](self, f: Callable[[T], U], /) -> WriterTaskResult[U, L]:
        return self.map(f)

    # Monad operations

    def bind[U](self, f: Callable[[T], WriterTaskResult[U, L]], /) -> WriterTaskResult[U, L]:
        """
        Monadic bind (>>=).

        - On Ok: runs f, combines logs (this log first)
        - On Error: short-circuit
        """

        def step(pair: tuple[T, Log[L]]) -> TaskResult[tuple[U, Log[L]]]:
            value, log = pair
            return f(value).run().map(lambda following: (following[0], log.combine(following[1])))

        return WriterTaskResult(self._task.bind(step))

    def select_many[I, R](
        self,
        binder: Callable[[T], WriterTaskResult[I, L]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> WriterTaskResult[R, L]:
        if projector is None:
            return typing.cast(WriterTaskResult[R, L], self.bind(binder))
        return self.bind(lambda value: binder(value).map(lambda intermediate: projector(value, intermediate)))

    def apply[U](self, f: WriterTaskResult[Callable[[T], U], L], /) -> WriterTaskResult[U, L]:
        """Applicative <*>: function side first, its log precedes the value log."""
        return f.bind(lambda fn: self.map(fn))

    # Writer operations

    def with_log(self, *entries: L) -> WriterTaskResult[T, L]:
        """Add entries to log without changing computation."""
        return WriterTaskResult(self._task.map(lambda pair: (pair[0], pair[1].combine(Log.of(*entries)))))

    async def execute(self) -> Result[tuple[T, Log[L]]]:
        return await self._task.run()

    # Protocol methods

    def __await__(self) -> typing.Generator[typing.Any, None, Result[tuple[T, Log[L]]]]:
        """Allow direct await on the writer."""
        return self._task.run().__await__()


__all__ = ("WriterTaskResult",)
