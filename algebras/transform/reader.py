"""
Reader - environment threading
==============================

Вычисление, зависящее от окружения E (конфиг, зависимости).
"""

from __future__ import annotations

import typing
from collections.abc import Callable


class Reader[E, T]:
    """
    Computation that reads an environment.

    Example:
        port = Reader.asks(lambda cfg: cfg.port)
        url = port.map(lambda p: f"http://localhost:{p}")
        url.run(Config(port=8080))   # "http://localhost:8080"
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[E], T], /) -> None:
        self._run = run

    @staticmethod
    def pure[Env, V](value: V) -> Reader[Env, V]:
        return Reader(lambda _: value)

    @staticmethod
    def ask[Env]() -> Reader[Env, Env]:
        """Yield the environment itself."""
        return Reader(lambda env: env)

    @staticmethod
    def asks[Env, V](f: Callable[[Env], V]) -> Reader[Env, V]:
        """Yield a projection of the environment."""
        return Reader(f)

    def run(self, env: E) -> T:
        return self._run(env)

    def map[U](self, f: Callable[[T], U], /) -> Reader[E, U]:
        return Reader(lambda env: f(self._run(env)))

    def select[U](self, f: Callable[[T], U], /) -> Reader[E, U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], Reader[E, U]], /) -> Reader[E, U]:
        return Reader(lambda env: f(self._run(env)).run(env))

    def select_many[I, R](
        self,
        binder: Callable[[T], Reader[E, I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> Reader[E, R]:
        if projector is None:
            return typing.cast(Reader[E, R], self.bind(binder))

        def run(env: E) -> R:
            value = self._run(env)
            return projector(value, binder(value).run(env))

        return Reader(run)

    def apply[U](self, f: Reader[E, Callable[[T], U]], /) -> Reader[E, U]:
        """Applicative <*>: both readers see the same environment."""
        return Reader(lambda env: f.run(env)(self._run(env)))

    def local[Outer](self, f: Callable[[Outer], E], /) -> Reader[Outer, T]:
        """Run this reader against an environment derived by f."""
        return Reader(lambda env: self._run(f(env)))

    def to_func(self) -> Callable[[E], T]:
        return self._run


__all__ = ("Reader",)
