"""
Lens - functional getter/setter pair
====================================

Фокус на части неизменяемой структуры. Путь (path) используется в сообщениях валидации.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable

from .._errors import LensNotInitializedError

ROOT_PATH: typing.Final = "$"


class Lens[S, T]:
    """
    Getter and immutable setter focusing on a T inside an S.

    Composition joins paths with a dot; "$" marks an unnamed lens.

    Example:
        name = Lens.attr("name")
        city = Lens.attr("address").compose(Lens.attr("city"))
        city.describe()              # "address.city"
        city.set(person, "Paris")    # new Person, same name
    """

    __slots__ = ("_getter", "_setter", "_path")

    def __init__(
        self,
        getter: Callable[[S], T] | None = None,
        setter: Callable[[S, T], S] | None = None,
        path: str | None = None,
    ) -> None:
        self._getter = getter
        self._setter = setter
        self._path = path

    @staticmethod
    def create[Src, V](
        getter: Callable[[Src], V],
        setter: Callable[[Src, V], Src],
        path: str | None = None,
    ) -> Lens[Src, V]:
        return Lens(getter, setter, path)

    @staticmethod
    def identity[Src]() -> Lens[Src, Src]:
        return Lens(lambda source: source, lambda _, value: value, ROOT_PATH)

    @staticmethod
    def attr(name: str, path: str | None = None) -> Lens[typing.Any, typing.Any]:
        """
        Lens over a dataclass field.

        The setter builds a copy through dataclasses.replace. path defaults to name.
        """
        return Lens(
            lambda source: getattr(source, name),
            lambda source, value: dataclasses.replace(source, **{name: value}),
            name if path is None else path,
        )

    @property
    def getter(self) -> Callable[[S], T] | None:
        return self._getter

    @property
    def setter(self) -> Callable[[S, T], S] | None:
        return self._setter

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def is_initialized(self) -> bool:
        return self._getter is not None and self._setter is not None

    @property
    def is_named(self) -> bool:
        return bool(self._path) and self._path != ROOT_PATH

    def get(self, source: S) -> T:
        if self._getter is None:
            raise LensNotInitializedError()
        return self._getter(source)

    def set(self, source: S, value: T) -> S:
        if self._setter is None:
            raise LensNotInitializedError()
        return self._setter(source, value)

    def over(self, source: S, f: Callable[[T], T]) -> S:
        """Set the focus to f(current focus)."""
        return self.set(source, f(self.get(source)))

    def compose[U](self, child: Lens[T, U]) -> Lens[S, U]:
        """
        Focus deeper through child.

        Path: both named -> "parent.child", one named -> that one, neither -> "$".
        """
        if not self.is_initialized:
            raise ValueError("Cannot compose an uninitialized lens.")
        if not child.is_initialized:
            raise ValueError("Cannot compose with an uninitialized lens.")

        if self.is_named and child.is_named:
            path = f"{self._path}.{child._path}"
        elif self.is_named:
            path = self._path
        elif child.is_named:
            path = child._path
        else:
            path = ROOT_PATH

        def get(source: S) -> U:
            return child.get(self.get(source))

        def set_(source: S, value: U) -> S:
            return self.set(source, child.set(self.get(source), value))

        return Lens(get, set_, path)

    def describe(self) -> str:
        return self._path if self.is_named else ROOT_PATH

    def __repr__(self) -> str:
        return f"Lens({self.describe()})"


__all__ = ("Lens", "ROOT_PATH")
