"""
Sequence operators
==================

Фабрики SequencePipe и SequenceTerminal. Модуль используется как пространство
имён: ops.map, ops.filter, ops.sum ... (имена совпадают со встроенными).

Example:
    from algebras.collection import ops

    evens = ops.filter(lambda x: x % 2 == 0)
    [1, 2, 3, 4] | evens.then(ops.sum())          # 6
    [1, 2, 3] | (ops.count() & ops.sum())         # (3, 6)
"""

from __future__ import annotations

import builtins
import itertools
import typing
from collections.abc import Callable, Iterable

from .._errors import InvalidOperationError
from .._types import Predicate, Selector
from ..core import Option
from . import items as _items
from .items import Key
from .pipe import SequencePipe, SequenceTerminal

def _require(values: tuple[typing.Any, ...], name: str) -> None:
    if not values:
        raise InvalidOperationError(f"{name}(): sequence contains no elements")

# ============================================================================
# Projection and filtering
# ============================================================================

def map[S, R](selector: Selector[S, R]) -> SequencePipe[S, R]:
    return SequencePipe(lambda source: builtins.map(selector, source))

def filter[S](predicate: Predicate[S]) -> SequencePipe[S, S]:
    return SequencePipe(lambda source: builtins.filter(predicate, source))

def bind[S, R](selector: Callable[[S], Iterable[R]]) -> SequencePipe[S, R]:
    """Map every item to an iterable and flatten."""
    return SequencePipe(lambda source: itertools.chain.from_iterable(builtins.map(selector, source)))

def distinct[S]() -> SequencePipe[S, S]:
    return SequencePipe(_items.distinct)

def distinct_by[S](key: Key[S]) -> SequencePipe[S, S]:
    """First item for every distinct key."""
    return SequencePipe(lambda source: _items.distinct(source, key))

def default_if_empty[S](default: S) -> SequencePipe[S, S]:
    def run(source: Iterable[S]) -> tuple[S, ...]:
        values = tuple(source)
        return values if values else (default,)

    return SequencePipe(run)

# ============================================================================
# Concatenation and slicing
# ============================================================================

def append[S](*values: S) -> SequencePipe[S, S]:
    return SequencePipe(lambda source: _items.append(source, *values))

def prepend[S](*values: S) -> SequencePipe[S, S]:
    return SequencePipe(lambda source: _items.prepend(source, *values))

def concat_with[S](other: Iterable[S]) -> SequencePipe[S, S]:
    kept = tuple(other)
    return SequencePipe(lambda source: _items.combine(source, kept))

def take[S](count: int) -> SequencePipe[S, S]:
    if count < 0:
        raise ValueError(f"take(): count must be >= 0, got {count}")
    return SequencePipe(lambda source: _items.take(source, count))

def skip[S](count: int) -> SequencePipe[S, S]:
    if count < 0:
        raise ValueError(f"skip(): count must be >= 0, got {count}")
    return SequencePipe(lambda source: _items.skip(source, count))

def take_last[S](count: int) -> SequencePipe[S, S]:
    if count < 0:
        raise ValueError(f"take_last(): count must be >= 0, got {count}")
    return SequencePipe(lambda source: _items.take_last(source, count))

def skip_last[S](count: int) -> SequencePipe[S, S]:
    if count < 0:
        raise ValueError(f"skip_last(): count must be >= 0, got {count}")

    def run(source: Iterable[S]) -> tuple[S, ...]:
        values = tuple(source)
        return values[: builtins.max(len(values) - count, 0)]

    return SequencePipe(run)

def reverse[S]() -> SequencePipe[S, S]:
    return SequencePipe(_items.reverse)

# ============================================================================
# Ordering
# ============================================================================

def order_by[S](key: Callable[[S], typing.Any]) -> SequencePipe[S, S]:
    """Stable ascending sort."""
    return SequencePipe(lambda source: sorted(source, key=key))

def order_by_descending[S](key: Callable[[S], typing.Any]) -> SequencePipe[S, S]:
    """Stable descending sort."""
    return SequencePipe(lambda source: sorted(source, key=key, reverse=True))

# ============================================================================
# Set operations against a fixed sequence
# ============================================================================

def union_with[S](other: Iterable[S], key: Key[S] | None = None) -> SequencePipe[S, S]:
    kept = tuple(other)
    return SequencePipe(lambda source: _items.union(source, kept, key))

def intersect_with[S](other: Iterable[S], key: Key[S] | None = None) -> SequencePipe[S, S]:
    kept = tuple(other)
    return SequencePipe(lambda source: _items.intersect(source, kept, key))

def except_with[S](other: Iterable[S], key: Key[S] | None = None) -> SequencePipe[S, S]:
    kept = tuple(other)
    return SequencePipe(lambda source: _items.difference(source, kept, key))

def symmetric_except_with[S](other: Iterable[S], key: Key[S] | None = None) -> SequencePipe[S, S]:
    kept = tuple(other)
    return SequencePipe(lambda source: _items.symmetric_difference(source, kept, key))

# ============================================================================
# Grouping and joins
# ============================================================================

def _group[T, K](values: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    groups: dict[K, list[T]] = {}
    for value in values:
        groups.setdefault(key(value), []).append(value)
    return groups

@typing.overload
def group_by[S, K](key: Callable[[S], K]) -> SequencePipe[S, tuple[K, tuple[S, ...]]]: ...

@typing.overload
def group_by[S, K, R](key: Callable[[S], K], result: Callable[[K, tuple[S, ...]], R]) -> SequencePipe[S, R]: ...

def group_by(key: typing.Any, result: typing.Any = None) -> typing.Any:
    """
    Groups in order of first appearance.

    Without result every group is a (key, items) pair.
    """
    project = result if result is not None else (lambda group_key, values: (group_key, values))

    def run(source: Iterable[typing.Any]) -> Iterable[typing.Any]:
        return (project(group_key, tuple(values)) for group_key, values in _group(source, key).items())

    return SequencePipe(run)

def join_on[S, O, K, R](
    inner: Iterable[O],
    outer_key: Callable[[S], K],
    inner_key: Callable[[O], K],
    result: Callable[[S, O], R],
) -> SequencePipe[S, R]:
    """Inner join: one result per matching (outer, inner) pair, outer order first."""
    kept = tuple(inner)

    def run(source: Iterable[S]) -> Iterable[R]:
        lookup = _group(kept, inner_key)
        for item in source:
            for match in lookup.get(outer_key(item), ()):
                yield result(item, match)

    return SequencePipe(run)

def group_join[S, O, K, R](
    inner: Iterable[O],
    outer_key: Callable[[S], K],
    inner_key: Callable[[O], K],
    result: Callable[[S, tuple[O, ...]], R],
) -> SequencePipe[S, R]:
    """One result per outer item with all of its inner matches (possibly none)."""
    kept = tuple(inner)

    def run(source: Iterable[S]) -> Iterable[R]:
        lookup = _group(kept, inner_key)
        return (result(item, tuple(lookup.get(outer_key(item), ()))) for item in source)

    return SequencePipe(run)

def left_join[S, O, K](
    inner: Iterable[O],
    outer_key: Callable[[S], K],
    inner_key: Callable[[O], K],
) -> SequencePipe[S, tuple[S, tuple[O, ...]]]:
    """Every outer item paired with its matches; unmatched items get ()."""
    return group_join(inner, outer_key, inner_key, lambda item, matches: (item, matches))

def right_join[S, O, K](
    inner: Iterable[O],
    outer_key: Callable[[S], K],
    inner_key: Callable[[O], K],
) -> SequencePipe[S, tuple[Option[S], O]]:
    """Every inner item paired with each matching outer item, or with an empty Option."""
    kept = tuple(inner)

    def run(source: Iterable[S]) -> Iterable[tuple[Option[S], O]]:
        lookup = _group(source, outer_key)
        for match in kept:
            outers = lookup.get(inner_key(match), ())
            if not outers:
                yield Option.none(), match
            for item in outers:
                yield Option.some(item), match

    return SequencePipe(run)

# ============================================================================
# Windows and running folds
# ============================================================================

def zip_with[S, O, R](other: Iterable[O], combine: Callable[[S, O], R]) -> SequencePipe[S, R]:
    """Pairwise combination; stops at the shorter side."""
    kept = tuple(other)
    return SequencePipe(lambda source: builtins.map(combine, source, kept))

def chunk[S](size: int) -> SequencePipe[S, tuple[S, ...]]:
    if size <= 0:
        raise ValueError(f"chunk(): size must be > 0, got {size}")
    return SequencePipe(lambda source: _items.chunk(source, size))

def pairwise[S]() -> SequencePipe[S, tuple[S, S]]:
    return SequencePipe(itertools.pairwise)

def window[S](size: int, step: int = 1, *, allow_partial: bool = False) -> SequencePipe[S, tuple[S, ...]]:
    """
    Sliding windows of size items, advancing by step.

    Trailing windows shorter than size are kept only with allow_partial.
    """
    if size <= 0:
        raise ValueError(f"window(): size must be > 0, got {size}")
    if step <= 0:
        raise ValueError(f"window(): step must be > 0, got {step}")

    def run(source: Iterable[S]) -> Iterable[tuple[S, ...]]:
        values = tuple(source)
        for start in range(0, len(values), step):
            frame = values[start : start + size]
            if len(frame) == size or allow_partial:
                yield frame

    return SequencePipe(run)

def scan[S, A](seed: A, folder: Callable[[A, S], A]) -> SequencePipe[S, A]:
    """Running accumulation. The seed itself is not emitted."""

    def run(source: Iterable[S]) -> Iterable[A]:
        accumulator = seed
        for item in source:
            accumulator = folder(accumulator, item)
            yield accumulator

    return SequencePipe(run)

# ============================================================================
# Terminals: materialization
# ============================================================================

def to_list[S]() -> SequenceTerminal[S, list[S]]:
    return SequenceTerminal(list)

def to_tuple[S]() -> SequenceTerminal[S, tuple[S, ...]]:
    return SequenceTerminal(tuple)

def to_set[S]() -> SequenceTerminal[S, set[S]]:
    return SequenceTerminal(set)

def to_dict[S, K, V](key: Callable[[S], K], value: Callable[[S], V]) -> SequenceTerminal[S, dict[K, V]]:
    """Later items overwrite earlier items with the same key."""
    return SequenceTerminal(lambda source: {key(item): value(item) for item in source})

# ============================================================================
# Terminals: queries
# ============================================================================

def count[S](predicate: Predicate[S] | None = None) -> SequenceTerminal[S, int]:
    if predicate is None:
        return SequenceTerminal(lambda source: builtins.sum(1 for _ in source))
    return SequenceTerminal(lambda source: builtins.sum(1 for item in source if predicate(item)))

def contains[S](value: S) -> SequenceTerminal[S, bool]:
    return SequenceTerminal(lambda source: value in source)

def any[S](predicate: Predicate[S] | None = None) -> SequenceTerminal[S, bool]:
    if predicate is None:
        return SequenceTerminal(lambda source: not _items.is_empty(source))
    return SequenceTerminal(lambda source: builtins.any(predicate(item) for item in source))

def all[S](predicate: Predicate[S]) -> SequenceTerminal[S, bool]:
    return SequenceTerminal(lambda source: builtins.all(predicate(item) for item in source))

def first[S](predicate: Predicate[S] | None = None) -> SequenceTerminal[S, S]:
    """First (matching) item. Raises InvalidOperationError when there is none."""

    def run(source: Iterable[S]) -> S:
        for item in source:
            if predicate is None or predicate(item):
                return item
        raise InvalidOperationError("first(): sequence contains no matching element")

    return SequenceTerminal(run)

def element_at[S](index: int) -> SequenceTerminal[S, S]:
    if index < 0:
        raise ValueError(f"element_at(): index must be >= 0, got {index}")

    def run(source: Iterable[S]) -> S:
        for position, item in enumerate(source):
            if position == index:
                return item
        raise InvalidOperationError(f"element_at(): sequence has no element at {index}")

    return SequenceTerminal(run)

def last[S]() -> SequenceTerminal[S, S]:
    def run(source: Iterable[S]) -> S:
        values = tuple(source)
        _require(values, "last")
        return values[-1]

    return SequenceTerminal(run)

def single[S]() -> SequenceTerminal[S, S]:
    """The only item. Raises InvalidOperationError for zero or several items."""

    def run(source: Iterable[S]) -> S:
        values = tuple(itertools.islice(source, 2))
        _require(values, "single")
        if len(values) > 1:
            raise InvalidOperationError("single(): sequence contains more than one element")
        return values[0]

    return SequenceTerminal(run)

def sequence_equal[S](other: Iterable[S], key: Key[S] | None = None) -> SequenceTerminal[S, bool]:
    """Same length and pairwise equal items (compared by key when given)."""
    kept = tuple(other)

    def run(source: Iterable[S]) -> bool:
        values = tuple(source)
        if len(values) != len(kept):
            return False
        if key is None:
            return values == kept
        return builtins.all(key(a) == key(b) for a, b in zip(values, kept))

    return SequenceTerminal(run)

# ============================================================================
# Terminals: aggregation
# ============================================================================

def max[S]() -> SequenceTerminal[S, S]:
    def run(source: Iterable[S]) -> S:
        values = tuple(source)
        _require(values, "max")
        return builtins.max(values)  # type: ignore[type-var]

    return SequenceTerminal(run)

def min[S]() -> SequenceTerminal[S, S]:
    def run(source: Iterable[S]) -> S:
        values = tuple(source)
        _require(values, "min")
        return builtins.min(values)  # type: ignore[type-var]

    return SequenceTerminal(run)

def max_by[S](key: Callable[[S], typing.Any]) -> SequenceTerminal[S, S]:
    """Item with the largest key; the first one wins ties."""

    def run(source: Iterable[S]) -> S:
        values = tuple(source)
        _require(values, "max_by")
        return builtins.max(values, key=key)

    return SequenceTerminal(run)

def min_by[S](key: Callable[[S], typing.Any]) -> SequenceTerminal[S, S]:
    """Item with the smallest key; the first one wins ties."""

    def run(source: Iterable[S]) -> S:
        values = tuple(source)
        _require(values, "min_by")
        return builtins.min(values, key=key)

    return SequenceTerminal(run)

def sum[S]() -> SequenceTerminal[S, S]:
    """Sum of the items; 0 for an empty sequence."""
    return SequenceTerminal(lambda source: builtins.sum(source))  # type: ignore[arg-type]

def average[S]() -> SequenceTerminal[S, float]:
    def run(source: Iterable[S]) -> float:
        values = tuple(source)
        _require(values, "average")
        return builtins.sum(values) / len(values)  # type: ignore[arg-type]

    return SequenceTerminal(run)

@typing.overload
def aggregate[S, A](seed: A, folder: Callable[[A, S], A]) -> SequenceTerminal[S, A]: ...

@typing.overload
def aggregate[S, A, R](seed: A, folder: Callable[[A, S], A], result: Callable[[A], R]) -> SequenceTerminal[S, R]: ...

def aggregate(seed: typing.Any, folder: typing.Any, result: typing.Any = None) -> typing.Any:
    """Left fold from seed, optionally projected."""

    def run(source: Iterable[typing.Any]) -> typing.Any:
        accumulator = seed
        for item in source:
            accumulator = folder(accumulator, item)
        return accumulator if result is None else result(accumulator)

    return SequenceTerminal(run)

def join[S](separator: str) -> SequenceTerminal[S, str]:
    return SequenceTerminal(lambda source: _items.join(source, separator))

__all__ = (
    "map",
    "filter",
    "bind",
    "distinct",
    "distinct_by",
    "default_if_empty",
    "append",
    "prepend",
    "concat_with",
    "take",
    "skip",
    "take_last",
    "skip_last",
    "reverse",
    "order_by",
    "order_by_descending",
    "union_with",
    "intersect_with",
    "except_with",
    "symmetric_except_with",
    "group_by",
    "join_on",
    "group_join",
    "left_join",
    "right_join",
    "zip_with",
    "chunk",
    "pairwise",
    "window",
    "scan",
    "to_list",
    "to_tuple",
    "to_set",
    "to_dict",
    "count",
    "contains",
    "any",
    "all",
    "first",
    "element_at",
    "last",
    "single",
    "sequence_equal",
    "max",
    "min",
    "max_by",
    "min_by",
    "sum",
    "average",
    "aggregate",
    "join",
)
