"""
Result - fallible value
=======================

Ok(value) или Error(message). Ошибка - всегда строка.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._errors import InvalidOperationError
from .._helpers import error_or_unknown, exception_message
from .._types import Thunk
from .option import Option

if typing.TYPE_CHECKING:
    from ..effect.io import IO
    from ..effect.task_result import TaskResult
    from .attempt import Try


class Result[T]:
    """
    Success value or an error message.

    Failures short-circuit every combinator. A failure built from a blank
    message carries "Unknown error" instead.

    Example:
        Result.ok(5).map(lambda x: x + 1)                 # Ok(6)
        Result.fail("boom").map(lambda x: x + 1)          # Error(boom)
        Result.fail("a") | Result.ok(1)                   # Ok(1)
    """

    __slots__ = ("_is_success", "_value", "_error")
    __match_args__ = ("value", "error")

    def __init__(self, is_success: bool, value: T | None = None, error: str | None = None, /) -> None:
        self._is_success = is_success
        self._value = value if is_success else None
        self._error = None if is_success else error_or_unknown(error)

    @staticmethod
    def ok[V](value: V) -> Result[V]:
        return Result(True, value)

    @staticmethod
    def fail(error: str | None) -> Result[typing.Any]:
        return Result(False, None, error)

    @staticmethod
    def catching[V](thunk: Thunk[V]) -> Result[V]:
        """Run thunk; an exception becomes a failure carrying its message."""
        try:
            return Result(True, thunk())
        except Exception as exc:
            return Result(False, None, exception_message(exc))

    # Inspection

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_ok(self) -> bool:
        return self._is_success

    @property
    def is_error(self) -> bool:
        return not self._is_success

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def error(self) -> str | None:
        return self._error

    def value_or(self, fallback: T) -> T:
        return typing.cast(T, self._value) if self._is_success else fallback

    def value_or_else(self, fallback: Callable[[str], T]) -> T:
        """Compute a fallback from the error message."""
        if self._is_success:
            return typing.cast(T, self._value)
        return fallback(typing.cast(str, self._error))

    def match[R](self, on_ok: Callable[[T], R], on_error: Callable[[str], R]) -> R:
        if self._is_success:
            return on_ok(typing.cast(T, self._value))
        return on_error(typing.cast(str, self._error))

    # Functor / Monad

    def _failed[U](self) -> Result[U]:
        return typing.cast(Result[U], self)

    def map[U](self, f: Callable[[T], U], /) -> Result[U]:
        if not self._is_success:
            return self._failed()
        return Result(True, f(typing.cast(T, self._value)))

    def select[U](self, f: Callable[[T], U], /) -> Result[U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], Result[U]], /) -> Result[U]:
        if not self._is_success:
            return self._failed()
        return f(typing.cast(T, self._value))

    def select_many[I, R](
        self,
        binder: Callable[[T], Result[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> Result[R]:
        if projector is None:
            return typing.cast(Result[R], self.bind(binder))
        if not self._is_success:
            return self._failed()
        value = typing.cast(T, self._value)
        intermediate = binder(value)
        if not intermediate._is_success:
            return intermediate._failed()
        return Result(True, projector(value, typing.cast(I, intermediate._value)))

    def apply[U](self, f: Result[Callable[[T], U]], /) -> Result[U]:
        """
        Applicative <*>, left-biased.

        The function side is checked first, so its error wins when both fail.
        """
        if not f._is_success:
            return f._failed()
        if not self._is_success:
            return self._failed()
        return Result(True, typing.cast(Callable[[T], U], f._value)(typing.cast(T, self._value)))

    def tap(self, f: Callable[[T], object], /) -> Result[T]:
        if self._is_success:
            f(typing.cast(T, self._value))
        return self

    # Recovery / Alternative

    def recover(self, f: Callable[[str], T], /) -> Result[T]:
        """Turn a failure into a success computed from the error."""
        if self._is_success:
            return self
        return Result(True, f(typing.cast(str, self._error)))

    def recover_with(self, f: Callable[[str], Result[T]], /) -> Result[T]:
        """Replace a failure with another Result computed from the error."""
        if self._is_success:
            return self
        return f(typing.cast(str, self._error))

    def or_else(self, fallback: Thunk[Result[T]], /) -> Result[T]:
        return self if self._is_success else fallback()

    def alt(self, other: Result[T], /) -> Result[T]:
        return self if self._is_success else other

    def __or__(self, other: Result[T]) -> Result[T]:
        return self.alt(other)

    # Conversions

    def to_option(self) -> Option[T]:
        if self._is_success:
            return Option.some(typing.cast(T, self._value))
        return Option.none()

    def to_try(self) -> Try[T]:
        from .attempt import Try

        if self._is_success:
            return Try.success(typing.cast(T, self._value))
        return Try.failure(InvalidOperationError(self._error))

    def to_io(self) -> IO[T]:
        """IO that yields the value, or raises InvalidOperationError with the error."""
        from ..effect.io import IO

        def effect() -> T:
            if self._is_success:
                return typing.cast(T, self._value)
            raise InvalidOperationError(self._error)

        return IO(effect)

    def to_task_result(self) -> TaskResult[T]:
        from ..effect.task_result import TaskResult

        return TaskResult.from_result(self)

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (
            self._is_success == other._is_success
            and self._value == other._value
            and self._error == other._error
        )

    def __hash__(self) -> int:
        return hash((Result, self._is_success, self._value, self._error))

    def __repr__(self) -> str:
        if self._is_success:
            return f"Ok({self._value!r})"
        return f"Error({self._error})"


__all__ = ("Result",)
