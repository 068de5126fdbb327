# tests/test_collection_lift.py
"""Tests for traverse / sequence helpers and the lift functions."""

from __future__ import annotations

import pytest

from algebras import (
    IO,
    Option,
    Result,
    TaskResult,
    Validation,
    first_option,
    lift,
    pipe,
    sequence_option,
    sequence_result,
    sequence_task_result,
    sequence_validation,
    traverse_option,
    traverse_result,
    traverse_task_result,
    traverse_validation,
)


class TestTraverse:
    """Sequential traversal stops at the first failure, except for Validation."""

    def test_first_option(self) -> None:
        assert first_option([1, 2, 3]) == Option.some(1)
        assert first_option([1, 2, 3], lambda x: x > 1) == Option.some(2)
        assert first_option([], None) == Option.none()

    def test_option(self) -> None:
        assert traverse_option([1, 2], lambda x: Option.some(x * 2)) == Option.some([2, 4])
        assert sequence_option([Option.some(1), Option.none()]) == Option.none()

    def test_result_stops_on_first_failure(self) -> None:
        visited: list[int] = []

        def check(x: int) -> Result[int]:
            visited.append(x)
            return Result.ok(x) if x < 2 else Result.fail(f"bad {x}")

        assert traverse_result([1, 2, 3], check) == Result.fail("bad 2")
        assert visited == [1, 2]
        assert sequence_result([Result.ok(1), Result.ok(2)]) == Result.ok([1, 2])

    @pytest.mark.asyncio
    async def test_task_result_runs_sequentially(self) -> None:
        order: list[int] = []

        def step(x: int) -> TaskResult[int]:
            async def run() -> Result[int]:
                order.append(x)
                return Result.ok(x * 10)

            return TaskResult(run)

        assert await traverse_task_result([1, 2, 3], step) == Result.ok([10, 20, 30])
        assert order == [1, 2, 3]
        assert await sequence_task_result([TaskResult.ok(1), TaskResult.fail("x")]) == Result.fail("x")

    def test_validation_accumulates_every_error(self) -> None:
        def check(x: int) -> Validation[int]:
            return Validation.success(x) if x > 0 else Validation.failure(f"{x} not positive")

        assert traverse_validation([1, 2], check) == Validation.success([1, 2])
        assert traverse_validation([-1, 1, 0], check).errors == ("-1 not positive", "0 not positive")
        assert not sequence_validation([Validation.success(1), Validation.failure()]).is_valid


class TestLift:
    """Lifting plain values into containers."""

    def test_to_option(self) -> None:
        assert lift.to_option(5) == Option.some(5)
        assert lift.to_option(None) == Option.none()
        assert lift.to_option(5, lambda x: x > 10) == Option.none()

    def test_to_ok_and_to_io(self) -> None:
        assert lift.to_ok(1) == Result.ok(1)
        assert isinstance(lift.to_io(1), IO)
        assert lift.to_io(1).run() == 1

    def test_validate(self) -> None:
        assert lift.validate(20, lambda a: a >= 18, lambda: "Must be adult").is_valid
        assert lift.validate(10, lambda a: a >= 18, lambda: "Must be adult").errors == ("Must be adult",)

    @pytest.mark.asyncio
    async def test_to_task_result(self) -> None:
        assert await lift.to_task_result("v") == Result.ok("v")

    def test_pipe_feeds_sink(self) -> None:
        seen: list[int] = []
        assert pipe(3, seen.append) == 3
        assert seen == [3]
