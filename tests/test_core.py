# tests/test_core.py
"""Tests for Unit, Option, Result and Try."""

from __future__ import annotations

import pytest

from algebras import UNIT, InvalidOperationError, Option, Result, Try, Unit
from algebras._helpers import identity


# ============================================================================
# Unit
# ============================================================================


def test_unit_is_singleton() -> None:
    """Every Unit() is the shared UNIT instance and displays as ()."""
    assert Unit() is UNIT
    assert repr(UNIT) == "()"
    assert UNIT == Unit()


# ============================================================================
# Option
# ============================================================================


class TestOption:
    """Option construction, combinators and conversions."""

    def test_factories(self) -> None:
        assert Option.some(5).is_some
        assert Option.none().is_none
        assert Option.none() is Option.none()
        assert Option.from_nullable(None) == Option.none()
        assert Option.from_nullable(0) == Option.some(0)

    def test_display(self) -> None:
        assert repr(Option.some(5)) == "Some(5)"
        assert repr(Option.none()) == "None_"

    def test_value_or(self) -> None:
        assert Option.some(1).value_or(2) == 1
        assert Option.none().value_or(2) == 2
        assert Option.none().value_or_else(lambda: 3) == 3

    def test_map_and_bind(self) -> None:
        assert Option.some(2).map(lambda x: x * 3) == Option.some(6)
        assert Option.none().map(lambda x: x * 3) == Option.none()
        assert Option.some(2).bind(lambda x: Option.some(x + 1)) == Option.some(3)
        assert Option.some(2).bind(lambda _: Option.none()) == Option.none()

    def test_select_many_with_projector(self) -> None:
        result = Option.some(2).select_many(lambda x: Option.some(x * 10), lambda x, y: x + y)
        assert result == Option.some(22)
        assert Option.some(2).select_many(lambda _: Option.none(), lambda x, y: x + y).is_none

    def test_apply_and_lift_a2(self) -> None:
        assert Option.some(2).apply(Option.some(lambda x: x + 1)) == Option.some(3)
        assert Option.none().apply(Option.some(lambda x: x + 1)).is_none
        assert Option.some(2).apply(Option.none()).is_none
        assert Option.some(2).lift_a2(Option.some(3), lambda a, b: a * b) == Option.some(6)

    def test_filter_tap_join(self) -> None:
        seen: list[int] = []
        assert Option.some(4).filter(lambda x: x > 3) == Option.some(4)
        assert Option.some(1).filter(lambda x: x > 3).is_none
        Option.some(7).tap(seen.append)
        Option.none().tap(seen.append)
        assert seen == [7]
        assert Option.some(Option.some(1)).join() == Option.some(1)

    def test_alternative(self) -> None:
        """First populated option wins."""
        assert (Option.none() | Option.some(5)) == Option.some(5)
        assert (Option.some(1) | Option.some(5)) == Option.some(1)
        assert Option.none().or_else(lambda: Option.some(9)) == Option.some(9)

    def test_or_else_is_lazy(self) -> None:
        calls: list[int] = []

        def fallback() -> Option[int]:
            calls.append(1)
            return Option.some(0)

        Option.some(1).or_else(fallback)
        assert calls == []

    def test_match(self) -> None:
        assert Option.some(2).match(lambda x: x * 2, lambda: 0) == 4
        assert Option.none().match(lambda x: x * 2, lambda: 0) == 0

    def test_conversions(self) -> None:
        assert Option.some(1).to_result("missing") == Result.ok(1)
        assert Option.none().to_result("missing") == Result.fail("missing")
        assert Option.some(1).to_io().run() == 1
        assert Option.some(1).to_try().get_or_raise() == 1

    def test_empty_to_io_raises_default_message(self) -> None:
        with pytest.raises(InvalidOperationError, match="Option had no value."):
            Option.none().to_io().run()

    def test_empty_to_try_uses_factory(self) -> None:
        attempt = Option.none().to_try(lambda: "custom")
        assert attempt.is_failure
        assert str(attempt.exception) == "custom"

    @pytest.mark.asyncio
    async def test_to_task_result(self) -> None:
        assert await Option.some(3).to_task_result("missing") == Result.ok(3)
        assert await Option.none().to_task_result(lambda: "lazy") == Result.fail("lazy")

    def test_monad_laws(self) -> None:
        f = lambda x: Option.some(x + 1)  # noqa: E731
        g = lambda x: Option.some(x * 2)  # noqa: E731
        m = Option.some(3)
        assert m.map(identity) == m
        assert m.bind(Option.some) == m
        assert Option.some(3).bind(f) == f(3)
        assert m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))


# ============================================================================
# Result
# ============================================================================


class TestResult:
    """Result short-circuiting, recovery and conversions."""

    def test_display_and_flags(self) -> None:
        assert repr(Result.ok(5)) == "Ok(5)"
        assert repr(Result.fail("boom")) == "Error(boom)"
        assert Result.ok(1).is_ok
        assert Result.fail("x").is_error

    def test_blank_error_becomes_unknown(self) -> None:
        assert Result.fail(None).error == "Unknown error"
        assert Result.fail("  ").error == "Unknown error"

    def test_failure_short_circuits(self) -> None:
        calls: list[int] = []
        failed: Result[int] = Result.fail("boom")
        assert failed.map(lambda x: calls.append(x)).error == "boom"
        assert failed.bind(lambda x: Result.ok(x)).error == "boom"
        failed.tap(calls.append)
        assert calls == []

    def test_catching(self) -> None:
        assert Result.catching(lambda: 1) == Result.ok(1)
        assert Result.catching(lambda: int("x")).error.startswith("invalid literal")

    def test_catching_empty_message_uses_class_name(self) -> None:
        def boom() -> int:
            raise KeyError()

        assert Result.catching(boom).error == "KeyError"

    def test_apply_reports_function_error_first(self) -> None:
        value: Result[int] = Result.fail("value")
        function: Result = Result.fail("function")
        assert value.apply(function).error == "function"
        assert Result.ok(2).apply(Result.ok(lambda x: x * 5)) == Result.ok(10)

    def test_select_many(self) -> None:
        result = Result.ok(1).select_many(lambda x: Result.ok(x + 1), lambda x, y: (x, y))
        assert result == Result.ok((1, 2))
        assert Result.ok(1).select_many(lambda _: Result.fail("inner"), lambda x, y: x).error == "inner"

    def test_recovery(self) -> None:
        assert Result.fail("e").recover(len) == Result.ok(1)
        assert Result.fail("e").recover_with(lambda e: Result.ok(e * 2)) == Result.ok("ee")
        assert Result.fail("e").or_else(lambda: Result.ok(3)) == Result.ok(3)
        assert (Result.fail("a") | Result.ok(1)) == Result.ok(1)
        assert (Result.ok(2) | Result.ok(1)) == Result.ok(2)
        assert Result.fail("e").value_or_else(lambda e: e.upper()) == "E"

    def test_match(self) -> None:
        assert Result.ok(1).match(lambda v: f"v{v}", lambda e: e) == "v1"
        assert Result.fail("e").match(lambda v: f"v{v}", lambda e: e) == "e"

    def test_conversions(self) -> None:
        assert Result.ok(1).to_option() == Option.some(1)
        assert Result.fail("x").to_option() == Option.none()
        attempt = Result.fail("bad").to_try()
        assert isinstance(attempt.exception, InvalidOperationError)
        assert str(attempt.exception) == "bad"
        with pytest.raises(InvalidOperationError, match="bad"):
            Result.fail("bad").to_io().run()

    def test_monad_laws(self) -> None:
        f = lambda x: Result.ok(x + 1)  # noqa: E731
        g = lambda x: Result.ok(x * 2) if x < 100 else Result.fail("big")  # noqa: E731
        m = Result.ok(5)
        assert m.bind(Result.ok) == m
        assert Result.ok(5).bind(f) == f(5)
        assert m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))


# ============================================================================
# Try
# ============================================================================


class TestTry:
    """Try captures exceptions and converts losslessly."""

    def test_run_captures(self) -> None:
        assert Try.run(lambda: 42) == Try.success(42)
        failure = Try.run(lambda: int("x"))
        assert failure.is_failure
        assert isinstance(failure.exception, ValueError)

    def test_display(self) -> None:
        assert repr(Try.success(5)) == "Success(5)"
        assert repr(Try.failure(ValueError("bad"))) == "Failure(bad)"
        assert repr(Try.failure(None)) == "Failure(<unknown>)"

    def test_get_or_raise_reraises_same_exception(self) -> None:
        error = ValueError("original")
        with pytest.raises(ValueError) as raised:
            Try.failure(error).get_or_raise()
        assert raised.value is error

    def test_get_or_raise_without_exception(self) -> None:
        with pytest.raises(InvalidOperationError, match="Try was not successful."):
            Try.failure(None).get_or_raise()

    def test_map_captures_exceptions(self) -> None:
        assert Try.success(2).map(lambda x: x * 2) == Try.success(4)
        assert Try.success(0).map(lambda x: 1 // x).is_failure

    def test_apply_is_left_biased(self) -> None:
        function_error = RuntimeError("function")
        value_error = RuntimeError("value")
        result = Try.failure(value_error).apply(Try.failure(function_error))
        assert result.exception is function_error

    def test_recover_and_alt(self) -> None:
        assert Try.failure(ValueError("x")).recover(lambda exc: str(exc)) == Try.success("x")
        assert (Try.failure(ValueError("x")) | Try.success(1)) == Try.success(1)

    def test_to_result_uses_message(self) -> None:
        assert Try.failure(ValueError("bad")).to_result() == Result.fail("bad")
        assert Try.failure(None).to_result() == Result.fail("Unknown error")
        assert Try.success(1).to_option() == Option.some(1)

    def test_bind_associativity(self) -> None:
        f = lambda x: Try.success(x + 1)  # noqa: E731
        g = lambda x: Try.success(x * 3)  # noqa: E731
        m = Try.success(1)
        assert m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))
