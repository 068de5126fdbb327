"""
State - state threading
=======================

Функция S -> (T, S). bind передаёт пост-состояние следующему шагу.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..core import UNIT, Result, Unit
from ..effect import IO


class State[S, T]:
    """
    Stateful computation: S -> (value, new state).

    Example:
        counter = State.modify(lambda n: n + 1).bind(lambda _: State.get())
        counter.run(0)   # (1, 1)
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[S], tuple[T, S]], /) -> None:
        self._run = run

    @staticmethod
    def pure[St, V](value: V) -> State[St, V]:
        return State(lambda state: (value, state))

    @staticmethod
    def get[St]() -> State[St, St]:
        return State(lambda state: (state, state))

    @staticmethod
    def put[St](new_state: St) -> State[St, Unit]:
        return State(lambda _: (UNIT, new_state))

    @staticmethod
    def modify[St](f: Callable[[St], St]) -> State[St, Unit]:
        return State(lambda state: (UNIT, f(state)))

    @staticmethod
    def gets[St, V](f: Callable[[St], V]) -> State[St, V]:
        return State(lambda state: (f(state), state))

    def run(self, state: S) -> tuple[T, S]:
        return self._run(state)

    def evaluate(self, state: S) -> T:
        """Run and keep only the value."""
        return self._run(state)[0]

    def execute(self, state: S) -> S:
        """Run and keep only the final state."""
        return self._run(state)[1]

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> State[S, U]:
        def run(state: S) -> tuple[U, S]:
            value, next_state = self._run(state)
            return f(value), next_state

        return State(run)

    def select[U](self, f: Callable[[T], U], /) -> State[S, U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], State[S, U]], /) -> State[S, U]:
        def run(state: S) -> tuple[U, S]:
            value, next_state = self._run(state)
            return f(value).run(next_state)

        return State(run)

    def select_many[I, R](
        self,
        binder: Callable[[T], State[S, I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> State[S, R]:
        if projector is None:
            return typing.cast(State[S, R], self.bind(binder))

        def run(state: S) -> tuple[R, S]:
            value, middle = self._run(state)
            intermediate, final = binder(value).run(middle)
            return projector(value, intermediate), final

        return State(run)

    def apply[U](self, f: State[S, Callable[[T], U]], /) -> State[S, U]:
        """Applicative <*>: the function step runs first, then this step."""

        def run(state: S) -> tuple[U, S]:
            fn, middle = f.run(state)
            value, final = self._run(middle)
            return fn(value), final

        return State(run)

    # Conversions

    def to_io(self, state: S) -> IO[tuple[T, S]]:
        return IO(lambda: self._run(state))

    def to_result(self, state: S) -> Result[tuple[T, S]]:
        """Run capturing exceptions as failures."""
        return Result.catching(lambda: self._run(state))


__all__ = ("State",)
