"""
Writer - value with an accumulated log
======================================

Синхронный Writer: значение + Log[L]. Логи только добавляются, порядок сохраняется.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from .._types import Sink
from ..effect import IO
from .log import Log


class Writer[T, L]:
    """
    Value paired with a log.

    bind concatenates this writer's log before the next writer's log.

    Example:
        w = Writer.tell("start").bind(lambda _: Writer.of(5, "computed"))
        w.pretty()   # "5 | logs: [start, computed]"
    """

    __slots__ = ("_value", "_logs")
    __match_args__ = ("value", "logs")

    def __init__(self, value: T, logs: Iterable[L] = (), /) -> None:
        self._value = value
        self._logs: Log[L] = logs if isinstance(logs, Log) else Log(tuple(logs))

    @staticmethod
    def pure[V, LogT](value: V) -> Writer[V, LogT]:
        """Lift a value with an empty log."""
        return Writer(value)

    @staticmethod
    def tell[LogT](entry: LogT) -> Writer[None, LogT]:
        """Write one entry without producing a value."""
        return Writer(None, Log.of(entry))

    @staticmethod
    def of[V, LogT](value: V, *entries: LogT) -> Writer[V, LogT]:
        return Writer(value, Log.of(*entries))

    @property
    def value(self) -> T:
        return self._value

    @property
    def logs(self) -> Log[L]:
        return self._logs

    # Functor / Monad

    def map[U](self, f: Callable[[T], U], /) -> Writer[U, L]:
        """Transform the value, log unchanged."""
        return Writer(f(self._value), self._logs)

    def select[U](self, f: Callable[[T], U], /) -> Writer[U, L]:
        return self.map(f)

    def bind[U](self, f: Callable[[T], Writer[U, L]], /) -> Writer[U, L]:
        following = f(self._value)
        return Writer(following._value, self._logs.combine(following._logs))

    def select_many[I, R](
        self,
        binder: Callable[[T], Writer[I, L]],
        projector: Callable[[T, I], R] | None = None,
        /,
    ) -> Writer[R, L]:
        if projector is None:
            return typing.cast(Writer[R, L], self.bind(binder))
        following = binder(self._value)
        return Writer(projector(self._value, following._value), self._logs.combine(following._logs))

    def apply[U](self, f: Writer[Callable[[T], U], L], /) -> Writer[U, L]:
        """Applicative <*>: function log first, then value log."""
        return Writer(f._value(self._value), f._logs.combine(self._logs))

    # Writer operations

    def append_log(self, entry: L, /) -> Writer[T, L]:
        return Writer(self._value, self._logs.tell(entry))

    def append_logs(self, entries: Iterable[L], /) -> Writer[T, L]:
        return Writer(self._value, self._logs.combine(Log(tuple(entries))))

    def tap(self, f: Callable[[T], object], /) -> Writer[T, L]:
        f(self._value)
        return self

    def tap_logs(self, f: Callable[[Log[L]], object], /) -> Writer[T, L]:
        f(self._logs)
        return self

    def to_io(self, sink: Sink[L] | None = None) -> IO[T]:
        """
        IO yielding the value. When run, every log entry goes to sink.

        Without a sink the logs are dropped.
        """

        def effect() -> T:
            if sink is not None:
                for entry in self._logs:
                    sink(entry)
            return self._value

        return IO(effect)

    def pretty(self) -> str:
        return f"{self._value} | logs: [{', '.join(map(str, self._logs))}]"

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Writer):
            return NotImplemented
        return self._value == other._value and self._logs == other._logs

    def __hash__(self) -> int:
        return hash((Writer, self._value, self._logs))

    def __repr__(self) -> str:
        return f"Writer({self._value!r}, {self._logs!r})"


__all__ = ("Writer",)
