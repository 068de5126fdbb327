"""
Channel interop
===============

Запись в канал (любой объект с try_write / write / complete) как TaskResult.
"""

from __future__ import annotations

import asyncio
import logging
import typing

from .._errors import CHANNEL_COMPLETED, CHANNEL_WRITE_CANCELLED
from .._helpers import exception_message
from ..core import UNIT, Result, Unit
from ..effect import TaskResult
from ..transform import ReaderTaskResult

logger = logging.getLogger(__name__)


@typing.runtime_checkable
class WritableSink[T](typing.Protocol):
    """Write side of a bounded or unbounded channel."""

    def try_write(self, item: T) -> bool:
        """Write without waiting; False when the channel is full."""
        ...

    async def write(self, item: T) -> None:
        """Wait for room, then write."""
        ...

    def complete(self, error: BaseException | None = None) -> bool:
        """Mark the channel finished; False when it already was."""
        ...


def write_result[T](sink: WritableSink[T], item: T) -> TaskResult[Unit]:
    """
    Write item to sink.

    try_write is attempted first; when the channel is full the write waits.
    Cancellation becomes "Channel write was cancelled.", other exceptions
    become failures carrying their message.
    """

    async def run() -> Result[Unit]:
        try:
            if not sink.try_write(item):
                await sink.write(item)
        except asyncio.CancelledError:
            logger.debug("Channel write was cancelled")
            return Result.fail(CHANNEL_WRITE_CANCELLED)
        except Exception as exc:
            logger.debug("Channel write failed: %s", exc)
            return Result.fail(exception_message(exc))
        return Result.ok(UNIT)

    return TaskResult(run)


def complete_result[T](sink: WritableSink[T], error: BaseException | None = None) -> TaskResult[Unit]:
    """Complete sink; completing twice is a failure."""

    async def run() -> Result[Unit]:
        try:
            completed = sink.complete(error)
        except Exception as exc:
            return Result.fail(exception_message(exc))
        if not completed:
            return Result.fail(CHANNEL_COMPLETED)
        return Result.ok(UNIT)

    return TaskResult(run)


def write_reader[T](item: T) -> ReaderTaskResult[WritableSink[T], Unit]:
    """Write of item that receives the sink as its environment."""
    return ReaderTaskResult(lambda sink: write_result(sink, item))


__all__ = (
    "WritableSink",
    "write_result",
    "complete_result",
    "write_reader",
)
