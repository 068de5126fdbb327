"""
Database interop
================

Транзакции как StateTaskResult[DbTransactionState, T].
Только владелец транзакции коммитит, откатывает и закрывает её.
"""

from __future__ import annotations

import asyncio
import dataclasses
import enum
import logging
import typing
from collections.abc import Awaitable, Callable

from .._errors import DB_CANCELLED, NO_TRANSACTION
from .._helpers import exception_message
from ..core import UNIT, Result, Unit
from ..effect import TaskResult
from ..transform import StateTaskResult

logger = logging.getLogger(__name__)


class IsolationLevel(enum.Enum):
    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


@typing.runtime_checkable
class DbTransaction(typing.Protocol):
    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def aclose(self) -> None: ...


@typing.runtime_checkable
class DbConnection(typing.Protocol):
    @property
    def is_open(self) -> bool: ...

    async def open(self) -> None: ...

    async def begin_transaction(self, isolation_level: IsolationLevel) -> DbTransaction: ...


@dataclasses.dataclass(frozen=True, slots=True)
class DbTransactionState:
    """Current transaction and whether this workflow started (owns) it."""

    transaction: DbTransaction | None = None
    owns_transaction: bool = False

    EMPTY: typing.ClassVar[DbTransactionState]

    @property
    def has_transaction(self) -> bool:
        return self.transaction is not None


DbTransactionState.EMPTY = DbTransactionState()

type DbAction[T] = Callable[[DbConnection, DbTransaction], Awaitable[T]]


async def _discard(state: DbTransactionState) -> None:
    """Roll back and close an owned transaction after a failure. Errors are logged, not raised."""
    transaction = typing.cast(DbTransaction, state.transaction)
    try:
        await transaction.rollback()
    except Exception:
        logger.warning("Rollback after failure raised", exc_info=True)
    try:
        await transaction.aclose()
    except Exception:
        logger.warning("Closing transaction after failure raised", exc_info=True)


def to_state_task_result[T](
    connection: DbConnection,
    action: DbAction[T],
    *,
    begin_if_missing: bool = True,
    isolation_level: IsolationLevel = IsolationLevel.READ_COMMITTED,
) -> StateTaskResult[DbTransactionState, T]:
    """
    Run action inside the state's transaction.

    - The connection is opened when needed.
    - Without a transaction one is started (owned) unless begin_if_missing is False.
    - A failing action on an owned transaction rolls it back and closes it.

    Example:
        insert = to_state_task_result(conn, lambda c, tx: tx.execute(INSERT_USER))
        outcome = await insert.bind(lambda _: commit_transaction()).run(DbTransactionState.EMPTY)
    """

    def run(state: DbTransactionState) -> TaskResult[tuple[T, DbTransactionState]]:
        async def thunk() -> Result[tuple[T, DbTransactionState]]:
            current = state
            try:
                if not connection.is_open:
                    await connection.open()
                if not current.has_transaction:
                    if not begin_if_missing:
                        return Result.fail(NO_TRANSACTION)
                    transaction = await connection.begin_transaction(isolation_level)
                    current = DbTransactionState(transaction, True)
                value = await action(connection, typing.cast(DbTransaction, current.transaction))
            except asyncio.CancelledError:
                logger.debug("Database operation was cancelled")
                if current.owns_transaction:
                    await _discard(current)
                return Result.fail(DB_CANCELLED)
            except Exception as exc:
                logger.debug("Database operation failed: %s", exc)
                if current.owns_transaction:
                    await _discard(current)
                return Result.fail(exception_message(exc))
            return Result.ok((value, current))

        return TaskResult(thunk)

    return StateTaskResult(run)


def _finish_transaction(
    finish: Callable[[DbTransaction], Awaitable[None]],
    dispose: bool,
) -> StateTaskResult[DbTransactionState, Unit]:
    def run(state: DbTransactionState) -> TaskResult[tuple[Unit, DbTransactionState]]:
        async def thunk() -> Result[tuple[Unit, DbTransactionState]]:
            if not state.has_transaction or not state.owns_transaction:
                return Result.ok((UNIT, state))
            transaction = typing.cast(DbTransaction, state.transaction)
            try:
                await finish(transaction)
                if dispose:
                    await transaction.aclose()
            except asyncio.CancelledError:
                return Result.fail(DB_CANCELLED)
            except Exception as exc:
                logger.debug("Finishing transaction failed: %s", exc)
                return Result.fail(exception_message(exc))
            return Result.ok((UNIT, DbTransactionState.EMPTY))

        return TaskResult(thunk)

    return StateTaskResult(run)


def commit_transaction(*, dispose: bool = True) -> StateTaskResult[DbTransactionState, Unit]:
    """
    Commit an owned transaction; the state becomes EMPTY.

    Empty and not-owned states pass through unchanged.
    """
    return _finish_transaction(lambda transaction: transaction.commit(), dispose)


def rollback_transaction(*, dispose: bool = True) -> StateTaskResult[DbTransactionState, Unit]:
    """Roll back an owned transaction; the state becomes EMPTY."""
    return _finish_transaction(lambda transaction: transaction.rollback(), dispose)


__all__ = (
    "IsolationLevel",
    "DbConnection",
    "DbTransaction",
    "DbTransactionState",
    "DbAction",
    "to_state_task_result",
    "commit_transaction",
    "rollback_transaction",
)
