"""Sequence helpers

Free functions over plain iterables. Every helper materializes its result as a
tuple and leaves its inputs untouched. Set operations keep the first occurrence
of each item, in left-to-right order; key (when given) must return hashable values."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable

from .._helpers import identity
from .._types import Predicate

type Key[T] = Callable[[T], Hashable]

def _key_of[T](key: Key[T] | None) -> Key[T]:
    return key if key is not None else identity

def _check_count(name: str, count: int) -> None:
    if count < 0:
        raise ValueError(f"{name}(): count must be >= 0, got {count}")

# Inspection
def is_empty(items: Iterable[object]) -> bool:
    for _ in items:
        return False
    return True

def filter_items[T](items: Iterable[T], predicate: Predicate[T]) -> tuple[T, ...]:
    return tuple(item for item in items if predicate(item))

# Monoid
def empty[T]() -> tuple[T, ...]:
    """Identity element of combine."""
    return ()

def combine[T](first: Iterable[T], second: Iterable[T]) -> tuple[T, ...]:
    """Concatenation. Duplicates are kept."""
    return (*first, *second)

# Set operations
def distinct[T](items: Iterable[T], key: Key[T] | None = None) -> tuple[T, ...]:
    select = _key_of(key)
    seen: set[Hashable] = set()
    kept: list[T] = []
    for item in items:
        marker = select(item)
        if marker not in seen:
            seen.add(marker)
            kept.append(item)
    return tuple(kept)

def union[T](left: Iterable[T], right: Iterable[T], key: Key[T] | None = None) -> tuple[T, ...]:
    return distinct((*left, *right), key)

def difference[T](left: Iterable[T], right: Iterable[T], key: Key[T] | None = None) -> tuple[T, ...]:
    """Distinct items of left whose key does not appear in right."""
    select = _key_of(key)
    excluded = {select(item) for item in right}
    return distinct((item for item in left if select(item) not in excluded), key)

def intersect[T](left: Iterable[T], right: Iterable[T], key: Key[T] | None = None) -> tuple[T, ...]:
    """Distinct items of left whose key also appears in right."""
    select = _key_of(key)
    included = {select(item) for item in right}
    return distinct((item for item in left if select(item) in included), key)

def symmetric_difference[T](left: Iterable[T], right: Iterable[T], key: Key[T] | None = None) -> tuple[T, ...]:
    """Items found on one side only: left-only items first, then right-only items."""
    first, second = tuple(left), tuple(right)
    return difference(first, second, key) + difference(second, first, key)

# Reshaping
def reverse[T](items: Iterable[T]) -> tuple[T, ...]:
    return tuple(items)[::-1]

def repeat[T](items: Iterable[T], repetitions: int) -> tuple[T, ...]:
    """The whole sequence, repetitions times over."""
    if repetitions < 0:
        raise ValueError(f"repeat(): repetitions must be >= 0, got {repetitions}")
    return tuple(items) * repetitions

def append[T](items: Iterable[T], *values: T) -> tuple[T, ...]:
    return (*items, *values)

def prepend[T](items: Iterable[T], *values: T) -> tuple[T, ...]:
    return (*values, *items)

def chunk[T](items: Iterable[T], size: int) -> tuple[tuple[T, ...], ...]:
    """Consecutive groups of size items; the last group may be shorter."""
    if size <= 0:
        raise ValueError(f"chunk(): size must be > 0, got {size}")
    materialized = tuple(items)
    return tuple(materialized[start : start + size] for start in range(0, len(materialized), size))

def take[T](items: Iterable[T], count: int) -> tuple[T, ...]:
    _check_count("take", count)
    taken: list[T] = []
    if count == 0:
        return ()
    for item in items:
        taken.append(item)
        if len(taken) == count:
            break
    return tuple(taken)

def skip[T](items: Iterable[T], count: int) -> tuple[T, ...]:
    _check_count("skip", count)
    return tuple(items)[count:]

def take_last[T](items: Iterable[T], count: int) -> tuple[T, ...]:
    _check_count("take_last", count)
    if count == 0:
        return ()
    return tuple(items)[-count:]

# Materialization
def to_list[T](items: Iterable[T]) -> list[T]:
    return list(items)

def join(items: Iterable[object], separator: str) -> str:
    """String form of every item, joined with separator."""
    return separator.join(str(item) for item in items)

__all__ = (
    "is_empty",
    "filter_items",
    "empty",
    "combine",
    "distinct",
    "union",
    "difference",
    "intersect",
    "symmetric_difference",
    "reverse",
    "repeat",
    "append",
    "prepend",
    "chunk",
    "take",
    "skip",
    "take_last",
    "to_list",
    "join",
)
