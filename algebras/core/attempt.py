"""
Try - captured exception
========================

Success(value) или Failure(exception). В отличие от Result хранит само исключение.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._errors import InvalidOperationError, TRY_NOT_SUCCESSFUL
from .._helpers import exception_message
from .._types import Thunk
from .option import Option
from .result import Result

if typing.TYPE_CHECKING:
    from ..effect.io import IO
    from ..effect.task_result import TaskResult


class Try[T]:
    """
    Success value or the exception that prevented it.

    Example:
        Try.run(lambda: int("42"))        # Success(42)
        Try.run(lambda: int("x"))         # Failure(invalid literal ...)
    """

    __slots__ = ("_is_success", "_value", "_exception")
    __match_args__ = ("value", "exception")

    def __init__(
        self,
        is_success: bool,
        value: T | None = None,
        exception: Exception | None = None,
        /,
    ) -> None:
        self._is_success = is_success
        self._value = value if is_success else None
        self._exception = None if is_success else exception

    @staticmethod
    def success[V](value: V) -> Try[V]:
        return Try(True, value)

    @staticmethod
    def failure(exception: Exception | None) -> Try[typing.Any]:
        return Try(False, None, exception)

    @staticmethod
    def run[V](thunk: Thunk[V]) -> Try[V]:
        """Run thunk and capture any exception it raises."""
        try:
            return Try(True, thunk())
        except Exception as exc:
            return Try(False, None, exc)

    # Inspection

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def exception(self) -> Exception | None:
        return self._exception

    def get_or_raise(self) -> T:
        """Return the value or re-raise the captured exception unchanged."""
        if self._is_success:
            return typing.cast(T, self._value)
        if self._exception is not None:
            raise self._exception
        raise InvalidOperationError(TRY_NOT_SUCCESSFUL)

    def value_or(self, fallback: T) -> T:
        return typing.cast(T, self._value) if self._is_success else fallback

    def match[R](self, on_success: Callable[[T], R], on_failure: Callable[[Exception | None], R]) -> R:
        if self._is_success:
            return on_success(typing.cast(T, self._value))
        return on_failure(self._exception)

    # Functor / Monad

    def _failed[U](self) -> Try[U]:
        return typing.cast(Try[U], self)

    def map[U](self, f: Callable[[T], U], /) -> Try[U]:
        """Map the value; an exception raised by f becomes a failure."""
        if not self._is_success:
            return self._failed()
        value = typing.cast(T, self._value)
        return Try.run(lambda: f(value))

    def select[U](self, f: Callable[[T], U], /) -> Try[U]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], Try[U]], /) -> Try[U]:
        if not self._is_success:
            return self._failed()
        try:
            return f(typing.cast(T, self._value))
        except Exception as exc:
            return Try(False, None, exc)

    def select_many[I, R](
        self,
        binder: Callable[[T], Try[I]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> Try[R]:
        if projector is None:
            return typing.cast(Try[R], self.bind(binder))
        value = typing.cast(T, self._value)
        return self.bind(binder).map(lambda intermediate: projector(value, intermediate))

    def apply[U](self, f: Try[Callable[[T], U]], /) -> Try[U]:
        """Applicative <*>, left-biased: the function side's failure wins."""
        if not f._is_success:
            return f._failed()
        if not self._is_success:
            return self._failed()
        fn = typing.cast(Callable[[T], U], f._value)
        value = typing.cast(T, self._value)
        return Try.run(lambda: fn(value))

    def tap(self, f: Callable[[T], object], /) -> Try[T]:
        if self._is_success:
            f(typing.cast(T, self._value))
        return self

    # Recovery / Alternative

    def recover(self, f: Callable[[Exception | None], T], /) -> Try[T]:
        if self._is_success:
            return self
        exception = self._exception
        return Try.run(lambda: f(exception))

    def recover_with(self, f: Callable[[Exception | None], Try[T]], /) -> Try[T]:
        if self._is_success:
            return self
        return f(self._exception)

    def alt(self, other: Try[T], /) -> Try[T]:
        return self if self._is_success else other

    def __or__(self, other: Try[T]) -> Try[T]:
        return self.alt(other)

    # Conversions

    def _message(self) -> str | None:
        if self._exception is None:
            return None
        return exception_message(self._exception)

    def to_result(self) -> Result[T]:
        if self._is_success:
            return Result.ok(typing.cast(T, self._value))
        return Result.fail(self._message())

    def to_option(self) -> Option[T]:
        if self._is_success:
            return Option.some(typing.cast(T, self._value))
        return Option.none()

    def to_io(self) -> IO[T]:
        """IO that yields the value or re-raises the captured exception."""
        from ..effect.io import IO

        return IO(self.get_or_raise)

    def to_task_result(self) -> TaskResult[T]:
        from ..effect.task_result import TaskResult

        return TaskResult.from_result(self.to_result())

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Try):
            return NotImplemented
        return (
            self._is_success == other._is_success
            and self._value == other._value
            and self._exception is other._exception
        )

    def __hash__(self) -> int:
        return hash((Try, self._is_success, self._value, id(self._exception)))

    def __repr__(self) -> str:
        if self._is_success:
            return f"Success({self._value!r})"
        message = self._message()
        return f"Failure({message if message is not None else '<unknown>'})"


__all__ = ("Try",)
