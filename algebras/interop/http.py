"""
HTTP interop
============

Отправка запросов и разбор JSON как TaskResult. Клиент - любой объект с
build_request / send (например httpx.AsyncClient).
"""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Callable

import pydantic_core
from pydantic import TypeAdapter

from .._errors import HTTP_CANCELLED, HTTP_PAYLOAD_EMPTY
from .._helpers import exception_message
from ..core import Result
from ..effect import TaskResult
from ..transform import ReaderTaskResult

logger = logging.getLogger(__name__)

JSON_HEADERS: typing.Final = {"Content-Type": "application/json", "Accept": "application/json"}


@typing.runtime_checkable
class HttpResponse(typing.Protocol):
    @property
    def is_success(self) -> bool: ...

    @property
    def status_code(self) -> int: ...

    async def aread(self) -> bytes: ...


@typing.runtime_checkable
class HttpClient(typing.Protocol):
    def build_request(self, method: str, url: typing.Any, **kwargs: typing.Any) -> typing.Any: ...

    async def send(self, request: typing.Any) -> HttpResponse: ...


def _guarded[T](operation: Callable[[], typing.Awaitable[Result[T]]]) -> TaskResult[T]:
    """Run operation, mapping cancellation and exceptions to failures."""

    async def run() -> Result[T]:
        try:
            return await operation()
        except asyncio.CancelledError:
            logger.debug("HTTP request was cancelled")
            return Result.fail(HTTP_CANCELLED)
        except Exception as exc:
            logger.debug("HTTP request failed: %s", exc)
            return Result.fail(exception_message(exc))

    return TaskResult(run)


async def _send(client: HttpClient, request: typing.Any) -> Result[HttpResponse]:
    response = await client.send(request)
    if response.is_success:
        return Result.ok(response)
    body = (await response.aread()).decode("utf-8", errors="replace")
    return Result.fail(f"HTTP {response.status_code}: {body}")


async def _decode[T](response: HttpResponse, adapter: TypeAdapter[T]) -> Result[T]:
    data = pydantic_core.from_json(await response.aread())
    if data is None:
        return Result.fail(HTTP_PAYLOAD_EMPTY)
    return Result.ok(adapter.validate_python(data))


def send_result(client: HttpClient, request: typing.Any) -> TaskResult[HttpResponse]:
    """
    Send request.

    A non-success status is a failure "HTTP {status}: {body}".
    """
    return _guarded(lambda: _send(client, request))


def get_json_result[T](client: HttpClient, url: str, model: type[T] | typing.Any = typing.Any) -> TaskResult[T]:
    """
    GET url and decode the JSON body into model.

    Example:
        async with httpx.AsyncClient() as client:
            user = await get_json_result(client, "https://api/users/1", User)
    """
    adapter: TypeAdapter[T] = TypeAdapter(model)

    async def operation() -> Result[T]:
        response = await _send(client, client.build_request("GET", url, headers=JSON_HEADERS))
        if response.is_error:
            return Result.fail(response.error)
        return await _decode(typing.cast(HttpResponse, response.value), adapter)

    return _guarded(operation)


def post_json_result[T](
    client: HttpClient,
    url: str,
    payload: typing.Any,
    model: type[T] | typing.Any = typing.Any,
) -> TaskResult[T]:
    """POST payload as JSON and decode the JSON reply into model."""
    adapter: TypeAdapter[T] = TypeAdapter(model)

    async def operation() -> Result[T]:
        request = client.build_request("POST", url, content=pydantic_core.to_json(payload), headers=JSON_HEADERS)
        response = await _send(client, request)
        if response.is_error:
            return Result.fail(response.error)
        return await _decode(typing.cast(HttpResponse, response.value), adapter)

    return _guarded(operation)


def request_reader[C: HttpClient, T](fn: Callable[[C], TaskResult[T]]) -> ReaderTaskResult[C, T]:
    """HTTP operation that receives the client as its environment."""
    return ReaderTaskResult(fn)


__all__ = (
    "HttpClient",
    "HttpResponse",
    "send_result",
    "get_json_result",
    "post_json_result",
    "request_reader",
)
