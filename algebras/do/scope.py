"""
DoScope - imperative-looking TaskResult workflows
=================================================

Внутри workflow значения извлекаются через await scope.bind(...).
Первая ошибка прерывает workflow (внутренний сигнал), граница превращает её в Result.
"""

from __future__ import annotations

import asyncio
import enum
import typing
from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator, Awaitable, Iterable
from contextlib import AsyncExitStack

from .._errors import OPERATION_CANCELLED, InvalidOperationError
from .._helpers import enter_resource, error_or_unknown, exception_message
from ..core import Result
from ..effect import TaskResult


class ScopeState(enum.Enum):
    RUNNING = "running"
    SHORT_CIRCUITED = "short_circuited"
    FAULTED = "faulted"
    COMPLETED = "completed"


class ShortCircuit(Exception):
    """Signal unwinding a workflow after its first failure. Caught at the boundary."""

    __slots__ = ("error",)

    def __init__(self, error: str) -> None:
        super().__init__(error)
        self.error = error


class DoScope:
    """
    Single-use context handed to a workflow body.

    Every operation either returns a plain value or short-circuits the
    workflow. Once short-circuited, further operations re-raise the signal.

    Example:
        async def checkout(scope: DoScope, cart_id: int) -> Receipt:
            cart = await scope.bind(load_cart(cart_id))
            scope.ensure(cart.items, "Cart is empty")
            conn = await scope.use(open_connection())
            return await scope.return_(await pay(conn, cart))
    """

    __slots__ = ("_state", "_error", "_resources")

    def __init__(self, resources: AsyncExitStack) -> None:
        self._state = ScopeState.RUNNING
        self._error: str | None = None
        self._resources = resources

    @property
    def state(self) -> ScopeState:
        return self._state

    @property
    def error(self) -> str | None:
        """Error that short-circuited the workflow, if any."""
        return self._error

    # State transitions

    def _check_running(self) -> None:
        if self._state is ScopeState.SHORT_CIRCUITED:
            raise ShortCircuit(typing.cast(str, self._error))
        if self._state is not ScopeState.RUNNING:
            raise InvalidOperationError(f"Workflow scope is {self._state.value}.")

    def _short_circuit(self, error: str | None) -> typing.NoReturn:
        self._state = ScopeState.SHORT_CIRCUITED
        self._error = error_or_unknown(error)
        raise ShortCircuit(self._error)

    def _unwrap[T](self, result: Result[T]) -> T:
        if result.is_error:
            self._short_circuit(result.error)
        return typing.cast(T, result.value)

    def finish(self, state: ScopeState) -> None:
        """Record the final state of a still-running scope. Called by the workflow boundary."""
        if self._state is ScopeState.RUNNING:
            self._state = state

    # Operations

    async def bind[T](self, task: TaskResult[T]) -> T:
        """Await task; a failure short-circuits with its error."""
        self._check_running()
        return self._unwrap(await task.run())

    async def await_[T](self, task: TaskResult[T] | Awaitable[Result[T]]) -> T:
        """Await a TaskResult or any awaitable Result."""
        self._check_running()
        result = await task.run() if isinstance(task, TaskResult) else await task
        return self._unwrap(result)

    def ensure(self, condition: bool, error: str = "") -> None:
        """Short-circuit when condition is false. A blank error becomes "Unknown error"."""
        self._check_running()
        if not condition:
            self._short_circuit(error)

    async def use[R](self, resource: TaskResult[R]) -> R:
        """
        Acquire a resource that is released when the workflow ends.

        Release happens on success, on short circuit and on faults.
        """
        value = await self.bind(resource)
        return await enter_resource(self._resources, value)

    def for_each[T](
        self,
        source: AsyncIterable[T] | Iterable[T] | TaskResult[AsyncIterable[T]] | TaskResult[Iterable[T]],
    ) -> AsyncIterator[T]:
        """
        Iterate an async or plain iterable, or one produced by a TaskResult.

        The iteration is closed when the workflow ends, so the source is
        finalized even when the loop body short-circuits.
        """
        self._check_running()
        iterator = self._iterate(source)
        self._resources.push_async_callback(iterator.aclose)
        return iterator

    async def _iterate[T](
        self,
        source: AsyncIterable[T] | Iterable[T] | TaskResult[AsyncIterable[T]] | TaskResult[Iterable[T]],
    ) -> AsyncGenerator[T, None]:
        items = await self.bind(source) if isinstance(source, TaskResult) else source
        if isinstance(items, AsyncIterable):
            iterator = aiter(items)
            try:
                async for item in iterator:
                    self._check_running()
                    yield item
            finally:
                aclose = getattr(iterator, "aclose", None)
                if aclose is not None:
                    await aclose()
        else:
            for item in items:
                self._check_running()
                yield item

    async def from_task[T](self, awaitable: Awaitable[T]) -> T:
        """Await a plain awaitable; its exception short-circuits with the exception message."""
        self._check_running()
        try:
            return await awaitable
        except asyncio.CancelledError:
            self._short_circuit(OPERATION_CANCELLED)
        except Exception as exc:
            self._short_circuit(exception_message(exc))

    async def from_result[T](self, result: Result[T]) -> T:
        self._check_running()
        return self._unwrap(result)

    async def return_[T](self, value: T) -> T:
        """Final value of the workflow."""
        self._check_running()
        return value

    def __repr__(self) -> str:
        return f"DoScope(state={self._state.value}, error={self._error!r})"


__all__ = ("DoScope", "ScopeState", "ShortCircuit")
