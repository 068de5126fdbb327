"""
IO - deferred synchronous effect
================================

Описание побочного эффекта. Ничего не выполняется до run(), каждый run() выполняет заново.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import exception_message
from .._types import ErrorFactory, Thunk
from ..core import UNIT, Option, Result, Try, Unit

if typing.TYPE_CHECKING:
    from .task_result import TaskResult


class IO[T]:
    """
    Deferred synchronous side effect.

    Example:
        counter = IO(lambda: next(ids))
        counter.map(str).run()        # runs the effect now
    """

    __slots__ = ("_effect",)

    def __init__(self, effect: Thunk[T], /) -> None:
        self._effect = effect

    @staticmethod
    def pure[V](value: V) -> IO[V]:
        return IO(lambda: value)

    @staticmethod
    def from_action(action: Callable[[], object]) -> IO[Unit]:
        """Wrap a procedure; the IO yields UNIT."""

        def effect() -> Unit:
            action()
            return UNIT

        return IO(effect)

    @property
    def effect(self) -> Thunk[T]:
        return self._effect

    def run(self) -> T:
        """Execute the effect. Exceptions propagate."""
        return self._effect()

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> IO[U]:
        return IO(lambda: f(self._effect()))

    def select[U](self, f: Callable[[T], U], /) -> IO[U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], IO[U]], /) -> IO[U]:
        return IO(lambda: f(self._effect()).run())

    def select_many[I, R](
        self,
        binder: Callable[[T], IO[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> IO[R]:
        if projector is None:
            return typing.cast(IO[R], self.bind(binder))

        def effect() -> R:
            value = self._effect()
            return projector(value, binder(value).run())

        return IO(effect)

    def apply[U](self, f: IO[Callable[[T], U]], /) -> IO[U]:
        """Applicative <*>: the function effect runs before the value effect."""

        def effect() -> U:
            fn = f.run()
            return fn(self._effect())

        return IO(effect)

    def tap(self, f: Callable[[T], object], /) -> IO[T]:
        def effect() -> T:
            value = self._effect()
            f(value)
            return value

        return IO(effect)

    def then[U](self, next_io: IO[U], /) -> IO[U]:
        """Run self for its effect, then next_io."""

        def effect() -> U:
            self._effect()
            return next_io.run()

        return IO(effect)

    # Conversions (exceptions are captured, not raised)

    def to_result(self) -> Result[T]:
        return Result.catching(self._effect)

    def to_option(self) -> Option[T]:
        """Empty when the effect raises or produces None."""
        try:
            return Option.from_nullable(self._effect())
        except Exception:
            return Option.none()

    def to_try(self) -> Try[T]:
        return Try.run(self._effect)

    def to_task_result(self, error_factory: ErrorFactory | None = None) -> TaskResult[T]:
        """Lazy TaskResult; the effect runs when the TaskResult is awaited."""
        from .task_result import TaskResult

        async def thunk() -> Result[T]:
            try:
                return Result.ok(self._effect())
            except Exception as exc:
                message = error_factory() if error_factory is not None else exception_message(exc)
                return Result.fail(message)

        return TaskResult(thunk)

    def __repr__(self) -> str:
        return f"IO({self._effect!r})"


__all__ = ("IO",)
