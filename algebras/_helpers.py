"""Internal helpers for algebras.

Common functions used across multiple modules.
These are not part of the public API but can be used for writing custom wrappers."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable, Callable, Coroutine
from contextlib import AsyncExitStack

from ._errors import UNKNOWN_ERROR

# Identity function
def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x

# Error message normalisation
def is_blank(message: str | None) -> bool:
    """True for None, empty and whitespace-only messages."""
    return message is None or not message.strip()

def error_or_unknown(message: str | None) -> str:
    """
    Return message unchanged, or UNKNOWN_ERROR when it is blank.

    Every short-circuiting combinator routes propagated errors through here
    so a failure never carries an empty message.
    """
    if is_blank(message):
        return UNKNOWN_ERROR
    return typing.cast(str, message)

def exception_message(exc: BaseException) -> str:
    """Human-readable message of an exception (class name when str() is empty)."""
    return str(exc) or type(exc).__name__

# Sync-or-async callbacks
async def maybe_await[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return typing.cast(T, value)

# Coroutine normalisation
def as_coroutine[T](
    thunk: Callable[[], Awaitable[T]],
) -> Callable[[], Coroutine[typing.Any, typing.Any, T]]:
    """
    Wrap a thunk returning any awaitable into a coroutine function.

    acache expects a coroutine function.
    """

    async def run() -> T:
        return await thunk()

    return run

# Resource disposal
async def enter_resource[R](stack: AsyncExitStack, resource: R) -> R:
    """
    Register resource on stack so it is released when the stack unwinds.

    Async context managers are entered (their __aenter__ result is returned),
    objects with aclose() or close() are scheduled for closing.
    """
    if hasattr(resource, "__aenter__") and hasattr(resource, "__aexit__"):
        return await stack.enter_async_context(typing.cast(typing.Any, resource))
    aclose = getattr(resource, "aclose", None)
    if callable(aclose):
        stack.push_async_callback(aclose)
        return resource
    close = getattr(resource, "close", None)
    if callable(close):
        stack.callback(close)
        return resource
    raise TypeError(f"{type(resource).__name__} is not an asynchronously disposable resource")

__all__ = (
    "identity",
    "is_blank",
    "error_or_unknown",
    "exception_message",
    "maybe_await",
    "as_coroutine",
    "enter_resource",
)
