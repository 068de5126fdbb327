"""
Core type definitions for algebras.

Типы и алиасы используемые по всей библиотеке.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

# ============================================================================
# Type aliases
# ============================================================================

# Predicate = function that tests a value
type Predicate[T] = Callable[[T], bool]

# Selector = function that transforms a value
type Selector[T, R] = Callable[[T], R]

# Projector = 3-arg select_many projection (source value, intermediate) -> result
type Projector[T, I, R] = Callable[[T, I], R]

# Thunk = zero-arg deferred computation
type Thunk[T] = Callable[[], T]

# AsyncThunk = zero-arg deferred async computation
type AsyncThunk[T] = Callable[[], Awaitable[T]]

# Sink = explicit side-effect target (console, list.append, logger call...)
# NOTE: Вместо глобального print всегда передаём sink явно.
type Sink[T] = Callable[[T], None]

# ErrorFactory = lazily builds an error message
type ErrorFactory = Callable[[], str]

__all__ = (
    "Predicate",
    "Selector",
    "Projector",
    "Thunk",
    "AsyncThunk",
    "Sink",
    "ErrorFactory",
)
