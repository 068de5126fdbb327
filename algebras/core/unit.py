from __future__ import annotations

import typing


class Unit:
    """
    Value of an effect that produces nothing interesting.

    There is exactly one instance, UNIT. It displays as "()".
    """

    __slots__ = ()

    _instance: typing.ClassVar[Unit | None] = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unit)

    def __hash__(self) -> int:
        return hash(Unit)


UNIT: typing.Final = Unit()


__all__ = ("Unit", "UNIT")
