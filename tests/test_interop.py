# tests/test_interop.py
"""Tests for the kungfu bridge and the channel, HTTP and database adapters."""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest
from kungfu import Error, LazyCoroResult, Ok
from pydantic import BaseModel

from algebras import UNIT, Result, TaskResult, Try
from algebras.interop import (
    DbTransactionState,
    IsolationLevel,
    commit_transaction,
    complete_result,
    from_kungfu,
    from_lazy_coro_result,
    get_json_result,
    post_json_result,
    request_reader,
    rollback_transaction,
    send_result,
    to_kungfu,
    to_lazy_coro_result,
    to_state_task_result,
    try_to_kungfu,
    write_reader,
    write_result,
)


# ============================================================================
# kungfu bridge
# ============================================================================


def _unpack(result: object) -> tuple[str, object]:
    match result:
        case Ok(value):
            return ("ok", value)
        case Error(error):
            return ("error", error)
        case _:
            raise AssertionError(f"not a kungfu result: {result!r}")


class TestKungfuBridge:
    """Conversions between Result and kungfu values."""

    def test_to_kungfu(self) -> None:
        assert _unpack(to_kungfu(Result.ok(1))) == ("ok", 1)
        assert _unpack(to_kungfu(Result.fail("bad"))) == ("error", "bad")

    def test_from_kungfu(self) -> None:
        assert from_kungfu(Ok(1)) == Result.ok(1)
        assert from_kungfu(Error("bad")) == Result.fail("bad")
        assert from_kungfu(Error(ValueError("exploded"))) == Result.fail("exploded")
        assert from_kungfu(Error(None)) == Result.fail("Unknown error")

    def test_try_to_kungfu_keeps_exception(self) -> None:
        exc = KeyError("k")
        assert _unpack(try_to_kungfu(Try.success(2))) == ("ok", 2)
        kind, error = _unpack(try_to_kungfu(Try.failure(exc)))
        assert kind == "error"
        assert error is exc

    @pytest.mark.asyncio
    async def test_lazy_coro_result_round_trip(self) -> None:
        lazy = to_lazy_coro_result(TaskResult.ok(3))
        assert _unpack(await lazy()) == ("ok", 3)

        async def failing() -> Error[str]:
            return Error("remote")

        assert await from_lazy_coro_result(LazyCoroResult(failing)) == Result.fail("remote")


# ============================================================================
# Channel
# ============================================================================


class QueueSink:
    """Bounded asyncio.Queue exposed through the channel protocol."""

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[int] = asyncio.Queue(maxsize)
        self.completed = False
        self.waited = 0

    def try_write(self, item: int) -> bool:
        if self.completed:
            raise RuntimeError("channel closed")
        try:
            self.queue.put_nowait(item)
        except asyncio.QueueFull:
            return False
        return True

    async def write(self, item: int) -> None:
        self.waited += 1
        await self.queue.put(item)

    def complete(self, error: BaseException | None = None) -> bool:
        if self.completed:
            return False
        self.completed = True
        return True


class CancelledSink(QueueSink):
    def try_write(self, item: int) -> bool:
        return False

    async def write(self, item: int) -> None:
        raise asyncio.CancelledError()


class TestChannel:
    """Channel writes and completion as TaskResult."""

    @pytest.mark.asyncio
    async def test_write_and_complete(self) -> None:
        sink = QueueSink()
        assert await write_result(sink, 1) == Result.ok(UNIT)
        assert await sink.queue.get() == 1
        assert await complete_result(sink) == Result.ok(UNIT)
        assert await complete_result(sink) == Result.fail("Channel was already completed.")

    @pytest.mark.asyncio
    async def test_full_channel_waits(self) -> None:
        sink = QueueSink(maxsize=1)
        assert await write_result(sink, 1) == Result.ok(UNIT)
        pending = asyncio.ensure_future(write_result(sink, 2).run())
        await asyncio.sleep(0)
        assert await sink.queue.get() == 1
        assert await pending == Result.ok(UNIT)
        assert sink.waited == 1

    @pytest.mark.asyncio
    async def test_write_to_completed_channel_fails(self) -> None:
        sink = QueueSink()
        sink.complete()
        assert await write_result(sink, 1) == Result.fail("channel closed")

    @pytest.mark.asyncio
    async def test_cancelled_write(self) -> None:
        assert await write_result(CancelledSink(), 1) == Result.fail("Channel write was cancelled.")

    @pytest.mark.asyncio
    async def test_write_reader(self) -> None:
        sink = QueueSink()
        assert await write_reader(7).run(sink) == Result.ok(UNIT)
        assert sink.queue.get_nowait() == 7


# ============================================================================
# HTTP
# ============================================================================


class User(BaseModel):
    id: int
    name: str


def _client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.test")


class TestHttp:
    """HTTP adapters over an httpx client with a mock transport."""

    @pytest.mark.asyncio
    async def test_send_success(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="ok")) as client:
            result = await send_result(client, client.build_request("GET", "/ping"))
        assert result.is_ok
        assert result.value.status_code == 200

    @pytest.mark.asyncio
    async def test_non_success_status(self) -> None:
        async with _client(lambda request: httpx.Response(500, text="failure body")) as client:
            result = await send_result(client, client.build_request("GET", "/"))
        assert result == Result.fail("HTTP 500: failure body")

    @pytest.mark.asyncio
    async def test_get_json_into_model(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.headers["Accept"] == "application/json"
            return httpx.Response(200, json={"id": 1, "name": "Ada"})

        async with _client(handler) as client:
            result = await get_json_result(client, "/users/1", User)
        assert result == Result.ok(User(id=1, name="Ada"))

    @pytest.mark.asyncio
    async def test_get_json_without_model(self) -> None:
        async with _client(lambda request: httpx.Response(200, json=[1, 2])) as client:
            assert await get_json_result(client, "/numbers") == Result.ok([1, 2])

    @pytest.mark.asyncio
    async def test_post_json_sends_payload(self) -> None:
        seen: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(201, json={"id": 2, "name": "Bob"})

        async with _client(handler) as client:
            result = await post_json_result(client, "/users", {"name": "Bob"}, User)
        assert result == Result.ok(User(id=2, name="Bob"))
        assert seen == [b'{"name":"Bob"}']

    @pytest.mark.asyncio
    async def test_empty_payload(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="null")) as client:
            result = await get_json_result(client, "/", User)
        assert result == Result.fail("HTTP payload was empty.")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="{not json")) as client:
            result = await get_json_result(client, "/", User)
        assert result.is_error

    @pytest.mark.asyncio
    async def test_validation_error(self) -> None:
        async with _client(lambda request: httpx.Response(200, json={"id": "x"})) as client:
            result = await get_json_result(client, "/", User)
        assert result.is_error

    @pytest.mark.asyncio
    async def test_cancelled_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise asyncio.CancelledError()

        async with _client(handler) as client:
            result = await send_result(client, client.build_request("GET", "/"))
        assert result == Result.fail("HTTP request was cancelled.")

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        async with _client(handler) as client:
            result = await send_result(client, client.build_request("GET", "/"))
        assert result == Result.fail("connection refused")

    @pytest.mark.asyncio
    async def test_request_reader(self) -> None:
        reader = request_reader(lambda client: get_json_result(client, "/users/3", User))
        async with _client(lambda request: httpx.Response(200, json={"id": 3, "name": "Cy"})) as client:
            assert await reader.run(client) == Result.ok(User(id=3, name="Cy"))


# ============================================================================
# Database
# ============================================================================


class StubTransaction:
    def __init__(self, log: list[str], fail_on: str | None = None) -> None:
        self.log = log
        self.fail_on = fail_on

    async def _record(self, name: str) -> None:
        self.log.append(name)
        if self.fail_on == name:
            raise RuntimeError(f"{name} failed")

    async def commit(self) -> None:
        await self._record("commit")

    async def rollback(self) -> None:
        await self._record("rollback")

    async def aclose(self) -> None:
        await self._record("close")


class StubConnection:
    def __init__(self, fail_on: str | None = None) -> None:
        self.log: list[str] = []
        self.is_open = False
        self.fail_on = fail_on
        self.isolation_levels: list[IsolationLevel] = []

    async def open(self) -> None:
        self.log.append("open")
        self.is_open = True

    async def begin_transaction(self, isolation_level: IsolationLevel) -> StubTransaction:
        self.log.append("begin")
        self.isolation_levels.append(isolation_level)
        return StubTransaction(self.log, self.fail_on)


async def _query(connection: StubConnection, transaction: StubTransaction) -> int:
    connection.log.append("query")
    return 42


async def _failing_query(connection: StubConnection, transaction: StubTransaction) -> int:
    raise ValueError("constraint violated")


class TestDatabase:
    """Transactions threaded as DbTransactionState."""

    @pytest.mark.asyncio
    async def test_begins_owned_transaction_and_commits(self) -> None:
        connection = StubConnection()
        flow = to_state_task_result(connection, _query).bind(
            lambda value: commit_transaction().map(lambda _: value)
        )
        assert await flow.run(DbTransactionState.EMPTY) == Result.ok((42, DbTransactionState.EMPTY))
        assert connection.log == ["open", "begin", "query", "commit", "close"]
        assert connection.isolation_levels == [IsolationLevel.READ_COMMITTED]

    @pytest.mark.asyncio
    async def test_reuses_existing_transaction(self) -> None:
        connection = StubConnection()
        connection.is_open = True
        existing = DbTransactionState(StubTransaction(connection.log), owns_transaction=False)
        result = await to_state_task_result(connection, _query).run(existing)
        assert result == Result.ok((42, existing))
        assert connection.log == ["query"]

    @pytest.mark.asyncio
    async def test_missing_transaction_without_begin(self) -> None:
        connection = StubConnection()
        action = to_state_task_result(connection, _query, begin_if_missing=False)
        result = await action.run(DbTransactionState.EMPTY)
        assert result.is_error
        assert "transaction" in result.error.lower()
        assert "begin" not in connection.log

    @pytest.mark.asyncio
    async def test_failure_rolls_back_owned_transaction(self) -> None:
        connection = StubConnection()
        result = await to_state_task_result(connection, _failing_query).run(DbTransactionState.EMPTY)
        assert result == Result.fail("constraint violated")
        assert connection.log == ["open", "begin", "rollback", "close"]

    @pytest.mark.asyncio
    async def test_failure_keeps_borrowed_transaction(self) -> None:
        connection = StubConnection()
        connection.is_open = True
        borrowed = DbTransactionState(StubTransaction(connection.log), owns_transaction=False)
        result = await to_state_task_result(connection, _failing_query).run(borrowed)
        assert result == Result.fail("constraint violated")
        assert connection.log == []

    @pytest.mark.asyncio
    async def test_rollback_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        connection = StubConnection(fail_on="rollback")
        with caplog.at_level(logging.WARNING, logger="algebras.interop.db"):
            result = await to_state_task_result(connection, _failing_query).run(DbTransactionState.EMPTY)
        assert result == Result.fail("constraint violated")
        assert connection.log == ["open", "begin", "rollback", "close"]
        assert any("Rollback" in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_commit_and_rollback_on_empty_state_are_no_ops(self) -> None:
        empty = DbTransactionState.EMPTY
        assert await commit_transaction().run(empty) == Result.ok((UNIT, empty))
        assert await rollback_transaction().run(empty) == Result.ok((UNIT, empty))

    @pytest.mark.asyncio
    async def test_commit_leaves_borrowed_transaction(self) -> None:
        log: list[str] = []
        borrowed = DbTransactionState(StubTransaction(log), owns_transaction=False)
        assert await commit_transaction().run(borrowed) == Result.ok((UNIT, borrowed))
        assert log == []

    @pytest.mark.asyncio
    async def test_rollback_without_dispose(self) -> None:
        log: list[str] = []
        owned = DbTransactionState(StubTransaction(log), owns_transaction=True)
        assert await rollback_transaction(dispose=False).run(owned) == Result.ok((UNIT, DbTransactionState.EMPTY))
        assert log == ["rollback"]

    @pytest.mark.asyncio
    async def test_commit_failure(self) -> None:
        log: list[str] = []
        owned = DbTransactionState(StubTransaction(log, fail_on="commit"), owns_transaction=True)
        assert await commit_transaction().run(owned) == Result.fail("commit failed")

    def test_state_flags(self) -> None:
        assert not DbTransactionState.EMPTY.has_transaction
        assert DbTransactionState(StubTransaction([]), True).has_transaction
