"""
Validation - error accumulation
===============================

Аппликатив, который собирает все ошибки вместо остановки на первой.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from .._types import ErrorFactory, Predicate
from ..core import Option, Result
from ..effect import TaskResult


class Validation[T]:
    """
    Valid value or the list of errors that prevented it.

    apply / combine / ensure accumulate errors; map only carries them over.

    Example:
        Validation.failure("a").combine(Validation.failure("b"), operator.add)
        # Invalid([a, b])
    """

    __slots__ = ("_is_valid", "_value", "_errors")
    __match_args__ = ("value", "errors")

    def __init__(self, is_valid: bool, value: T | None = None, errors: Iterable[str] = (), /) -> None:
        self._is_valid = is_valid
        self._value = value if is_valid else None
        self._errors: tuple[str, ...] = () if is_valid else tuple(errors)

    @staticmethod
    def success[V](value: V) -> Validation[V]:
        return Validation(True, value)

    @staticmethod
    def failure(*errors: str) -> Validation[typing.Any]:
        return Validation(False, None, errors)

    @staticmethod
    def of[V](value: V, *errors: str) -> Validation[V]:
        """Valid when no errors are given."""
        if errors:
            return Validation(False, None, errors)
        return Validation(True, value)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def errors(self) -> tuple[str, ...]:
        return self._errors

    # Functor

    def map[U](self, f: Callable[[T], U], /) -> Validation[U]:
        if not self._is_valid:
            return Validation(False, None, self._errors)
        return Validation(True, f(typing.cast(T, self._value)))

    def select[U](self, f: Callable[[T], U], /) -> Validation[U]:
        return self.map(f)

    # Applicative

    def apply[U](self, f: Validation[Callable[[T], U]], /) -> Validation[U]:
        """Applicative <*>: errors of the function side come first."""
        if self._is_valid and f._is_valid:
            return Validation(True, typing.cast(Callable[[T], U], f._value)(typing.cast(T, self._value)))
        return Validation(False, None, f._errors + self._errors)

    def combine(self, other: Validation[T], combiner: Callable[[T, T], T], /) -> Validation[T]:
        """Merge two validations; left errors come first."""
        if self._is_valid and other._is_valid:
            return Validation(True, combiner(typing.cast(T, self._value), typing.cast(T, other._value)))
        return Validation(False, None, self._errors + other._errors)

    def ensure(self, predicate: Predicate[T], error: str | ErrorFactory, /) -> Validation[T]:
        """
        Require predicate to hold.

        An invalid validation gains the error too, so callers see every
        failed requirement at once.
        """
        if self._is_valid and predicate(typing.cast(T, self._value)):
            return self
        message = error if isinstance(error, str) else error()
        return Validation(False, None, (*self._errors, message))

    # Conversions

    def to_option(self) -> Option[T]:
        if self._is_valid:
            return Option.some(typing.cast(T, self._value))
        return Option.none()

    def to_result(self, error_message: str | None = None) -> Result[T]:
        """Failure message defaults to the errors joined with ", "."""
        if self._is_valid:
            return Result.ok(typing.cast(T, self._value))
        return Result.fail(error_message if error_message is not None else ", ".join(self._errors))

    def to_task_result(self, error_message: str | None = None) -> TaskResult[T]:
        return TaskResult.from_result(self.to_result(error_message))

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Validation):
            return NotImplemented
        return (
            self._is_valid == other._is_valid
            and self._value == other._value
            and self._errors == other._errors
        )

    def __hash__(self) -> int:
        return hash((Validation, self._is_valid, self._value, self._errors))

    def __repr__(self) -> str:
        if self._is_valid:
            return f"Valid({self._value!r})"
        return f"Invalid([{', '.join(self._errors)}])"


__all__ = ("Validation",)
