"""
Log - Моноидный аккумулятор для Writer
======================================
"""

from __future__ import annotations

from collections.abc import Iterable


class Log[A](tuple[A, ...]):
    """
    Immutable log accumulator for Writer monads.

    Tuple with monoidal operations:
    - empty: пустой лог (просто Log())
    - combine: конкатенация логов

    Monoid laws hold:
    - Left identity: Log().combine(x) == x
    - Right identity: x.combine(Log()) == x
    - Associativity: (x.combine(y)).combine(z) == x.combine(y.combine(z))
    """

    __slots__ = ()

    @staticmethod
    def of[T](*items: T) -> Log[T]:
        """Create log with items."""
        return Log(items)

    @staticmethod
    def concat[T](logs: Iterable[Log[T]]) -> Log[T]:
        """Fold several logs into one, left to right."""
        result: Log[T] = Log()
        for log in logs:
            result = result.combine(log)
        return result

    def combine(self, other: Log[A], /) -> Log[A]:
        """
        Combine two logs (monoidal append).

        When one side is empty the other is returned as is.

        Example:
            Log.of("a", "b").combine(Log.of("c"))  # Log(["a", "b", "c"])
        """
        if not other:
            return self
        if not self:
            return other
        return Log(tuple.__add__(self, other))

    def tell(self, item: A, /) -> Log[A]:
        """
        Append single item.

        Convenience method equivalent to self.combine(Log.of(item))
        """
        return Log((*self, item))

    def __repr__(self) -> str:
        return f"Log([{', '.join(map(str, self))}])"


__all__ = ("Log",)
