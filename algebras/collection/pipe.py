"""
Sequence pipes
==============

Переиспользуемые преобразования последовательностей (SequencePipe)
и терминальные свёртки (SequenceTerminal). Применение: items | pipe.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable

from .items import difference, distinct, intersect


def _materialize[T](source: Iterable[T]) -> tuple[T, ...]:
    return source if isinstance(source, tuple) else tuple(source)


class SequencePipe[S, R]:
    """
    Transformation Iterable[S] -> tuple[R, ...].

    Pipes compose with then() and combine over the same source with the set
    operations. Every combination materializes the source once, so
    generators are consumed a single time.

    Operators (sugar for the named methods):
        items | pipe    - invoke
        a + b           - concat
        a - b           - difference
        a & b           - intersect
        a ^ b           - symmetric_difference
        ~a              - reversed
        a * n           - repeat

    Example:
        from algebras.collection import ops

        double_evens = ops.filter(lambda x: x % 2 == 0).then(ops.map(lambda x: x * 2))
        [1, 2, 3, 4] | double_evens                    # (4, 8)
    """

    __slots__ = ("_apply",)

    def __init__(self, apply: Callable[[Iterable[S]], Iterable[R]], /) -> None:
        self._apply = apply

    def invoke(self, source: Iterable[S]) -> tuple[R, ...]:
        return tuple(self._apply(source))

    def __call__(self, source: Iterable[S]) -> tuple[R, ...]:
        return self.invoke(source)

    def __ror__(self, source: Iterable[S]) -> tuple[R, ...]:
        return self.invoke(source)

    @typing.overload
    def then[N](self, following: SequencePipe[R, N], /) -> SequencePipe[S, N]: ...

    @typing.overload
    def then[N](self, following: SequenceTerminal[R, N], /) -> SequenceTerminal[S, N]: ...

    def then(self, following: typing.Any, /) -> typing.Any:
        """Feed the output of self into following (a pipe or a terminal)."""
        apply = self._apply
        if isinstance(following, SequenceTerminal):
            return SequenceTerminal(lambda source: following.invoke(apply(source)))
        return SequencePipe(lambda source: following._apply(apply(source)))

    # Combination over one source

    def _both(self, other: SequencePipe[S, R]) -> Callable[[Iterable[S]], tuple[tuple[R, ...], tuple[R, ...]]]:
        def run(source: Iterable[S]) -> tuple[tuple[R, ...], tuple[R, ...]]:
            items = _materialize(source)
            return self.invoke(items), other.invoke(items)

        return run

    def concat(self, other: SequencePipe[S, R], /) -> SequencePipe[S, R]:
        both = self._both(other)

        def run(source: Iterable[S]) -> tuple[R, ...]:
            left, right = both(source)
            return left + right

        return SequencePipe(run)

    def difference(self, other: SequencePipe[S, R], /) -> SequencePipe[S, R]:
        """Distinct outputs of self that other does not produce."""
        both = self._both(other)
        return SequencePipe(lambda source: difference(*both(source)))

    def intersect(self, other: SequencePipe[S, R], /) -> SequencePipe[S, R]:
        both = self._both(other)
        return SequencePipe(lambda source: intersect(*both(source)))

    def symmetric_difference(self, other: SequencePipe[S, R], /) -> SequencePipe[S, R]:
        """Outputs only one side produces: left-only items, then right-only items."""
        both = self._both(other)

        def run(source: Iterable[S]) -> tuple[R, ...]:
            left, right = both(source)
            return difference(left, right) + difference(right, left)

        return SequencePipe(run)

    def reversed(self) -> SequencePipe[S, R]:
        return SequencePipe(lambda source: self.invoke(_materialize(source))[::-1])

    def repeat(self, repetitions: int, /) -> SequencePipe[S, R]:
        """Output of self, repetitions times over."""
        if repetitions < 0:
            raise ValueError(f"repeat(): repetitions must be >= 0, got {repetitions}")
        return SequencePipe(lambda source: self.invoke(_materialize(source)) * repetitions)

    def distinct(self) -> SequencePipe[S, R]:
        return SequencePipe(lambda source: distinct(self.invoke(source)))

    __add__ = concat
    __sub__ = difference
    __and__ = intersect
    __xor__ = symmetric_difference
    __mul__ = repeat

    def __invert__(self) -> SequencePipe[S, R]:
        return self.reversed()

    def __repr__(self) -> str:
        return "SequencePipe(...)"


class SequenceTerminal[S, R]:
    """
    Fold Iterable[S] -> R.

    Example:
        from algebras.collection import ops

        stats = ops.count() & ops.sum()
        [1, 2, 3] | stats                              # (3, 6)
        [1, 2, 3] | ops.count().select(str)            # "3"
    """

    __slots__ = ("_apply",)

    def __init__(self, apply: Callable[[Iterable[S]], R], /) -> None:
        self._apply = apply

    def invoke(self, source: Iterable[S]) -> R:
        return self._apply(source)

    def __call__(self, source: Iterable[S]) -> R:
        return self._apply(source)

    def __ror__(self, source: Iterable[S]) -> R:
        return self._apply(source)

    def select[N](self, projector: Callable[[R], N], /) -> SequenceTerminal[S, N]:
        apply = self._apply
        return SequenceTerminal(lambda source: projector(apply(source)))

    def map[N](self, projector: Callable[[R], N], /) -> SequenceTerminal[S, N]:
        return self.select(projector)

    def pair[O](self, other: SequenceTerminal[S, O], /) -> SequenceTerminal[S, tuple[R, O]]:
        """Run both terminals over one materialized source."""

        def run(source: Iterable[S]) -> tuple[R, O]:
            items = _materialize(source)
            return self.invoke(items), other.invoke(items)

        return SequenceTerminal(run)

    __and__ = pair

    def __repr__(self) -> str:
        return "SequenceTerminal(...)"


__all__ = ("SequencePipe", "SequenceTerminal")
