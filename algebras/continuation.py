"""
Cont - continuation monad
=========================

Вычисление в стиле передачи продолжений: (V -> O) -> O.
call_cc даёт ранний выход через захваченное продолжение.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .core import Result
from .effect import IO


class Cont[O, V]:
    """
    Continuation-passing computation producing V for a continuation returning O.

    Example:
        def safe_div(x: int, y: int) -> Cont[str, int]:
            return Cont.call_cc(
                lambda escape: escape(0) if y == 0 else Cont.pure(x // y)
            )

        safe_div(10, 2).run(str)   # "5"
        safe_div(1, 0).run(str)    # "0"
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[Callable[[V], O]], O], /) -> None:
        self._run = run

    @staticmethod
    def pure[Out, Val](value: Val) -> Cont[Out, Val]:
        return Cont(lambda k: k(value))

    @staticmethod
    def call_cc[Out, Val](f: Callable[[Callable[[Val], Cont[Out, Val]]], Cont[Out, Val]]) -> Cont[Out, Val]:
        """
        Call with current continuation.

        f receives an escape function; the Cont it returns ignores whatever
        follows and hands its value straight to the captured continuation.
        """

        def run(k: Callable[[Val], Out]) -> Out:
            def escape(value: Val) -> Cont[Out, Val]:
                return Cont(lambda _: k(value))

            return f(escape).run(k)

        return Cont(run)

    def run(self, k: Callable[[V], O], /) -> O:
        return self._run(k)

    # Functor / Monad

    def map[U](self, f: Callable[[V], U], /) -> Cont[O, U]:
        return Cont(lambda k: self._run(lambda value: k(f(value))))

    def select[U](self, f: Callable[[V], U], /) -> Cont[O, U]:
        return self.map(f)

    def bind[U](self, f: Callable[[V], Cont[O, U]], /) -> Cont[O, U]:
        return Cont(lambda k: self._run(lambda value: f(value).run(k)))

    def select_many[I, R](
        self,
        binder: Callable[[V], Cont[O, I]],
        projector: Callable[[V, I], R] | None = None,
        /,
    ) -> Cont[O, R]:
        if projector is None:
            return typing.cast(Cont[O, R], self.bind(binder))
        return Cont(
            lambda k: self._run(
                lambda value: binder(value).run(lambda intermediate: k(projector(value, intermediate)))
            )
        )

    def apply[U](self, f: Cont[O, Callable[[V], U]], /) -> Cont[O, U]:
        """Applicative <*>: the function continuation runs first."""
        return Cont(lambda k: f.run(lambda fn: self._run(lambda value: k(fn(value)))))

    def then[U](self, next_cont: Cont[O, U], /) -> Cont[O, U]:
        return Cont(lambda k: self._run(lambda _: next_cont.run(k)))

    # Conversions

    def to_io(self, k: Callable[[V], O], /) -> IO[O]:
        return IO(lambda: self._run(k))

    def to_result(self, k: Callable[[V], O], /) -> Result[O]:
        """Run with k, capturing exceptions as failures."""
        return Result.catching(lambda: self._run(k))


__all__ = ("Cont",)
