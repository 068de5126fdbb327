"""
Option - optional value
=======================

Some(value) или пусто. Пустой Option - один общий экземпляр.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._errors import OPTION_EMPTY, InvalidOperationError
from .._types import ErrorFactory, Predicate, Thunk

if typing.TYPE_CHECKING:
    from ..effect.io import IO
    from ..effect.task_result import TaskResult
    from .attempt import Try
    from .result import Result


class Option[T]:
    """
    Optional value: either Some(value) or empty.

    Functor / Applicative / Monad:
    - map(identity) == self
    - bind(Option.some) == self
    - m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))

    Example:
        Option.some(2).bind(lambda x: Option.some(x * 3))   # Some(6)
        Option.none() | Option.some(5)                       # Some(5)
    """

    __slots__ = ("_has_value", "_value")
    __match_args__ = ("value",)

    def __init__(self, has_value: bool, value: T | None = None, /) -> None:
        self._has_value = has_value
        self._value = value if has_value else None

    # Factories

    @staticmethod
    def some[V](value: V) -> Option[V]:
        """Wrap a present value."""
        return Option(True, value)

    @staticmethod
    def none() -> Option[typing.Any]:
        """The empty option."""
        return _NONE

    @staticmethod
    def from_nullable[V](value: V | None) -> Option[V]:
        """None becomes empty, anything else becomes Some."""
        if value is None:
            return _NONE
        return Option(True, value)

    # Inspection

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> T | None:
        """Raw payload; None when empty."""
        return self._value

    @property
    def is_some(self) -> bool:
        return self._has_value

    @property
    def is_none(self) -> bool:
        return not self._has_value

    def value_or(self, fallback: T) -> T:
        return typing.cast(T, self._value) if self._has_value else fallback

    def value_or_else(self, fallback: Thunk[T]) -> T:
        return typing.cast(T, self._value) if self._has_value else fallback()

    def match[R](self, some: Callable[[T], R], none: Thunk[R]) -> R:
        """Eliminate the option into a plain value."""
        if self._has_value:
            return some(typing.cast(T, self._value))
        return none()

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> Option[U]:
        if not self._has_value:
            return _NONE
        return Option(True, f(typing.cast(T, self._value)))

    def select[U](self, f: Callable[[T], U], /) -> Option[U]:
        """Alias for map (comprehension vocabulary)."""
        return self.map(f)

    def bind[U](self, f: Callable[[T], Option[U]], /) -> Option[U]:
        if not self._has_value:
            return _NONE
        return f(typing.cast(T, self._value))

    def select_many[I, R](
        self,
        binder: Callable[[T], Option[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> Option[R]:
        """
        bind followed by a projection over (source, intermediate).

        Equivalent of `from x in m from y in binder(x) select projector(x, y)`.
        """
        if projector is None:
            return typing.cast(Option[R], self.bind(binder))
        if not self._has_value:
            return _NONE
        value = typing.cast(T, self._value)
        intermediate = binder(value)
        if not intermediate._has_value:
            return _NONE
        return Option(True, projector(value, typing.cast(I, intermediate._value)))

    def apply[U](self, f: Option[Callable[[T], U]], /) -> Option[U]:
        """Applicative <*>: Some only when both the function and the value are present."""
        if f._has_value and self._has_value:
            return Option(True, typing.cast(Callable[[T], U], f._value)(typing.cast(T, self._value)))
        return _NONE

    def lift_a2[U, R](self, other: Option[U], f: Callable[[T, U], R], /) -> Option[R]:
        """Combine two options with a binary function."""
        if self._has_value and other._has_value:
            return Option(True, f(typing.cast(T, self._value), typing.cast(U, other._value)))
        return _NONE

    def filter(self, predicate: Predicate[T], /) -> Option[T]:
        if self._has_value and predicate(typing.cast(T, self._value)):
            return self
        return _NONE

    def tap(self, f: Callable[[T], object], /) -> Option[T]:
        """Run f on the value for observation only."""
        if self._has_value:
            f(typing.cast(T, self._value))
        return self

    def join[U](self: Option[Option[U]]) -> Option[U]:
        """Flatten Option[Option[U]] into Option[U]."""
        if not self._has_value:
            return _NONE
        return typing.cast(Option[U], self._value)

    # Alternative

    def alt(self, other: Option[T], /) -> Option[T]:
        """First populated option wins."""
        return self if self._has_value else other

    def __or__(self, other: Option[T]) -> Option[T]:
        return self.alt(other)

    def or_else(self, fallback: Thunk[Option[T]], /) -> Option[T]:
        """Lazy alternative: fallback is evaluated only when empty."""
        return self if self._has_value else fallback()

    # Conversions

    def to_result(self, error: str) -> Result[T]:
        from .result import Result

        if self._has_value:
            return Result.ok(typing.cast(T, self._value))
        return Result.fail(error)

    def to_try(self, error_factory: ErrorFactory | None = None) -> Try[T]:
        from .attempt import Try

        if self._has_value:
            return Try.success(typing.cast(T, self._value))
        message = error_factory() if error_factory is not None else OPTION_EMPTY
        return Try.failure(InvalidOperationError(message))

    def to_io(self, error_factory: ErrorFactory | None = None) -> IO[T]:
        """Lazy IO that raises InvalidOperationError when run on an empty option."""
        from ..effect.io import IO

        def effect() -> T:
            if self._has_value:
                return typing.cast(T, self._value)
            raise InvalidOperationError(error_factory() if error_factory is not None else OPTION_EMPTY)

        return IO(effect)

    def to_task_result(self, error: str | ErrorFactory) -> TaskResult[T]:
        """Completed TaskResult; error may be a literal or a factory."""
        from ..effect.task_result import TaskResult

        if self._has_value:
            return TaskResult.ok(typing.cast(T, self._value))
        return TaskResult.fail(error if isinstance(error, str) else error())

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self._has_value == other._has_value and self._value == other._value

    def __hash__(self) -> int:
        return hash((Option, self._has_value, self._value))

    def __bool__(self) -> bool:
        return self._has_value

    def __repr__(self) -> str:
        if self._has_value:
            return f"Some({self._value!r})"
        return "None_"


_NONE: typing.Final[Option[typing.Any]] = Option(False)


__all__ = ("Option",)
