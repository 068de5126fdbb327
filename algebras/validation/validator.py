"""
Validator - declarative rule set
================================

Набор правил T -> Validation[Unit]. validate() прогоняет все правила и собирает ошибки.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._types import Predicate
from ..core import UNIT, Unit
from .lens import Lens
from .validation import Validation

type Rule[T] = Callable[[T], Validation[Unit]]

_VALID_UNIT: typing.Final = Validation.success(UNIT)


class Validator[T]:
    """
    Ordered, immutable collection of validation rules.

    Example:
        validator = (
            Validator.empty()
            .ensure(lambda p: bool(p.name.strip()), "Name required")
            .ensure_at(Lens.attr("age", "Age"), lambda age: age >= 18, "Must be adult")
        )
        validator.validate(Person("", 15))
        # Invalid([Name required, Age: Must be adult])
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: tuple[Rule[T], ...] = (), /) -> None:
        self._rules = rules

    @staticmethod
    def empty() -> Validator[typing.Any]:
        """Shared validator without rules."""
        return _EMPTY

    @property
    def rules(self) -> tuple[Rule[T], ...]:
        return self._rules

    @property
    def is_empty(self) -> bool:
        return not self._rules

    def append(self, other: Validator[T], /) -> Validator[T]:
        """Rules of self, then rules of other. An empty side returns the other instance."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return Validator(self._rules + other._rules)

    def _with_rule(self, rule: Rule[T]) -> Validator[T]:
        return Validator((*self._rules, rule))

    def ensure(self, predicate: Predicate[T], error: str, /) -> Validator[T]:
        def rule(subject: T) -> Validation[Unit]:
            return _VALID_UNIT if predicate(subject) else Validation.failure(error)

        return self._with_rule(rule)

    def ensure_at[V](self, lens: Lens[T, V], predicate: Predicate[V], error: str, /) -> Validator[T]:
        """Check the field focused by lens; the error is prefixed with the lens path."""
        message = _prefixed(lens, error)

        def rule(subject: T) -> Validation[Unit]:
            return _VALID_UNIT if predicate(lens.get(subject)) else Validation.failure(message)

        return self._with_rule(rule)

    def ensure_nested[V](self, lens: Lens[T, V], nested: Validator[V], /) -> Validator[T]:
        """Run nested on the focused field; every nested error gets the lens path prefix."""

        def rule(subject: T) -> Validation[Unit]:
            result = nested.validate(lens.get(subject))
            if result.is_valid:
                return _VALID_UNIT
            return Validation.failure(*(_prefixed(lens, error) for error in result.errors))

        return self._with_rule(rule)

    def validate(self, subject: T) -> Validation[Unit]:
        """Run every rule; Valid(()) only when no rule reported an error."""
        errors: list[str] = []
        for rule in self._rules:
            outcome = rule(subject)
            if not outcome.is_valid:
                errors.extend(outcome.errors)
        if errors:
            return Validation.failure(*errors)
        return _VALID_UNIT

    def apply(self, subject: T) -> Validation[Unit]:
        return self.validate(subject)

    def __call__(self, subject: T) -> Validation[Unit]:
        return self.validate(subject)

    def __repr__(self) -> str:
        return f"Validator(rules={len(self._rules)})"


_EMPTY: typing.Final[Validator[typing.Any]] = Validator()


def _prefixed(lens: Lens[typing.Any, typing.Any], error: str) -> str:
    if lens.is_named:
        return f"{lens.path}: {error}"
    return error


@typing.overload
def ensure[T](validator: Validator[T], predicate: Predicate[T], error: str, /) -> Validator[T]: ...


@typing.overload
def ensure[T, V](validator: Validator[T], lens: Lens[T, V], predicate: Predicate[V], error: str, /) -> Validator[T]: ...


@typing.overload
def ensure[T, V](validator: Validator[T], lens: Lens[T, V], nested: Validator[V], /) -> Validator[T]: ...


def ensure(validator: Validator[typing.Any], *args: typing.Any) -> Validator[typing.Any]:
    """
    Add a rule to validator.

    - ensure(v, predicate, error)
    - ensure(v, lens, predicate, error)
    - ensure(v, lens, nested_validator)
    """
    match args:
        case (Lens() as lens, Validator() as nested):
            return validator.ensure_nested(lens, nested)
        case (Lens() as lens, predicate, str() as error):
            return validator.ensure_at(lens, predicate, error)
        case (predicate, str() as error) if callable(predicate):
            return validator.ensure(predicate, error)
        case _:
            raise TypeError(f"Unsupported ensure arguments: {args!r}")


__all__ = ("Validator", "Rule", "ensure")
