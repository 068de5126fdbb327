"""
StateTaskResult - State over TaskResult
=======================================

S -> асинхронный Result[(T, S)]. При ошибке дальнейшие переходы состояния не выполняются.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..core import UNIT, Result, Unit
from ..effect import TaskResult


class StateTaskResult[S, T]:
    """
    Asynchronous fallible state transition.

    Example:
        step = StateTaskResult.modify(lambda n: n + 1).bind(lambda _: StateTaskResult.get())
        await step.run(0)   # Ok((1, 1))
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[S], TaskResult[tuple[T, S]]], /) -> None:
        self._run = run

    @staticmethod
    def pure[St, V](value: V) -> StateTaskResult[St, V]:
        return StateTaskResult(lambda state: TaskResult.ok((value, state)))

    @staticmethod
    def fail[St](error: str) -> StateTaskResult[St, typing.Any]:
        return StateTaskResult(lambda _: TaskResult.fail(error))

    @staticmethod
    def get[St]() -> StateTaskResult[St, St]:
        return StateTaskResult(lambda state: TaskResult.ok((state, state)))

    @staticmethod
    def put[St](new_state: St) -> StateTaskResult[St, Unit]:
        return StateTaskResult(lambda _: TaskResult.ok((UNIT, new_state)))

    @staticmethod
    def modify[St](f: Callable[[St], St]) -> StateTaskResult[St, Unit]:
        return StateTaskResult(lambda state: TaskResult.ok((UNIT, f(state))))

    @staticmethod
    def from_task_result[St, V](task: TaskResult[V]) -> StateTaskResult[St, V]:
        """Lift a TaskResult, state unchanged."""
        return StateTaskResult(lambda state: task.map(lambda value: (value, state)))

    def run(self, state: S) -> TaskResult[tuple[T, S]]:
        return self._run(state)

    def to_task_result(self, state: S) -> TaskResult[tuple[T, S]]:
        return self._run(state)

    async def evaluate(self, state: S) -> Result[T]:
        """Run and keep only the value."""
        return (await self._run(state).run()).map(lambda pair: pair[0])

    async def execute(self, state: S) -> Result[S]:
        """Run and keep only the final state."""
        return (await self._run(state).run()).map(lambda pair: pair[1])

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> StateTaskResult[S, U]:
        return StateTaskResult(lambda state: self._run(state).map(lambda pair: (f(pair[0]), pair[1])))

    def select[U](self, f: Callable[[T], U], /) -> StateTaskResult[S, U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], StateTaskResult[S, U]], /) -> StateTaskResult[S, U]:
        return StateTaskResult(lambda state: self._run(state).bind(lambda pair: f(pair[0]).run(pair[1])))

    def select_many[I, R](
        self,
        binder: Callable[[T], StateTaskResult[S, I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> StateTaskResult[S, R]:
        if projector is None:
            return typing.cast(StateTaskResult[S, R], self.bind(binder))
        return self.bind(lambda value: binder(value).map(lambda intermediate: projector(value, intermediate)))

    def apply[U](self, f: StateTaskResult[S, Callable[[T], U]], /) -> StateTaskResult[S, U]:
        """Applicative <*>: the function step runs first and its state feeds this step."""
        return f.bind(lambda fn: self.map(fn))


__all__ = ("StateTaskResult",)
