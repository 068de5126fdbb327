# tests/test_validation.py
"""Tests for Validation, Lens and Validator."""

from __future__ import annotations

import dataclasses
import operator

import pytest

from algebras import UNIT, InvalidOperationError, Lens, Option, Result, Validation, Validator, ensure
from tests.support import Address, Person


def _name_lens(path: str | None = "Name") -> Lens[Person, str]:
    return Lens.create(lambda p: p.name, lambda p, name: dataclasses.replace(p, name=name), path)


def _initial_lens(path: str | None = "Initial") -> Lens[str, str]:
    return Lens.create(lambda s: s[0], lambda s, c: c + s[1:], path)


# ============================================================================
# Validation
# ============================================================================


class TestValidation:
    """Validation accumulates errors in order."""

    def test_factories_and_display(self) -> None:
        assert repr(Validation.success(5)) == "Valid(5)"
        assert repr(Validation.failure("oops")) == "Invalid([oops])"
        assert Validation.of(10).is_valid
        assert Validation.of(10, "missing").errors == ("missing",)

    def test_map_preserves_errors(self) -> None:
        assert Validation.success(5).map(lambda x: x * 2) == Validation.success(10)
        assert Validation.failure("bad").map(lambda x: x * 2).errors == ("bad",)
        assert Validation.success(5).select(lambda x: x) == Validation.success(5)

    def test_apply_accumulates_function_errors_first(self) -> None:
        assert Validation.success(5).apply(Validation.success(lambda x: x + 1)) == Validation.success(6)
        result = Validation.failure("value").apply(Validation.failure("function"))
        assert result.errors == ("function", "value")

    def test_combine_accumulates(self) -> None:
        combined = Validation.failure("a").combine(Validation.failure("b"), operator.add)
        assert repr(combined) == "Invalid([a, b])"
        assert Validation.success(5).combine(Validation.success(2), operator.add) == Validation.success(7)

    def test_combine_of_empty_failures_stays_invalid(self) -> None:
        combined = Validation.failure().combine(Validation.failure(), operator.add)
        assert not combined.is_valid
        assert combined.errors == ()

    def test_ensure_appends_exactly_one_error(self) -> None:
        assert Validation.success(5).ensure(lambda x: x > 0, "positive").is_valid
        failed = Validation.success(5).ensure(lambda _: False, lambda: "neg")
        assert failed.errors == ("neg",)
        stacked = Validation.failure("first").ensure(lambda _: True, "second")
        assert stacked.errors == ("first", "second")

    def test_conversions(self) -> None:
        assert Validation.success(1).to_option() == Option.some(1)
        assert Validation.failure("a").to_option() == Option.none()
        assert Validation.failure("a", "b").to_result() == Result.fail("a, b")
        assert Validation.failure("a", "b").to_result("custom") == Result.fail("custom")

    @pytest.mark.asyncio
    async def test_to_task_result(self) -> None:
        assert await Validation.success(1).to_task_result() == Result.ok(1)
        assert await Validation.failure("oops").to_task_result() == Result.fail("oops")


# ============================================================================
# Lens
# ============================================================================


class TestLens:
    """Lens get / set / over and path composition."""

    def test_round_trip(self, person: Person) -> None:
        lens = _name_lens()
        assert lens.get(person) == "Dana"
        renamed = lens.set(person, "Eve")
        assert renamed.name == "Eve"
        assert renamed.address == person.address
        assert lens.get(lens.set(person, "Zed")) == "Zed"
        assert lens.set(person, lens.get(person)) == person

    def test_over(self, person: Person) -> None:
        assert _name_lens().over(person, str.upper).name == "DANA"

    def test_compose_named(self, person: Person) -> None:
        composed = _name_lens().compose(_initial_lens())
        assert composed.get(person) == "D"
        assert composed.set(person, "X").name == "Xana"
        assert composed.describe() == "Name.Initial"

    def test_compose_path_precedence(self) -> None:
        assert _name_lens(None).compose(_initial_lens()).describe() == "Initial"
        assert _name_lens().compose(_initial_lens(None)).describe() == "Name"
        assert _name_lens(None).compose(_initial_lens(None)).describe() == "$"
        assert Lens.identity().compose(_name_lens()).describe() == "Name"

    def test_identity_and_repr(self) -> None:
        assert repr(Lens.identity()) == "Lens($)"
        assert Lens.identity().get(3) == 3

    def test_attr_lens(self, person: Person) -> None:
        city = Lens.attr("address", "Address").compose(Lens.attr("city", "City"))
        assert city.get(person) == "Paris"
        assert city.set(person, "Rome").address == Address("Rome", "Rue")
        assert city.describe() == "Address.City"
        assert Lens.attr("age").describe() == "age"

    def test_uninitialized_lens(self, person: Person) -> None:
        with pytest.raises(InvalidOperationError):
            Lens().get(person)
        with pytest.raises(ValueError):
            _name_lens().compose(Lens())


# ============================================================================
# Validator
# ============================================================================


def _person_validator() -> Validator[Person]:
    age = Lens.create(lambda p: p.age, lambda p, a: dataclasses.replace(p, age=a), "Age")
    address = Lens.attr("address", "Address")
    address_rules = Validator.empty().ensure(lambda a: len(a.city) > 0, "City")
    return (
        Validator.empty()
        .ensure(lambda p: bool(p.name.strip()), "Name required")
        .ensure_at(age, lambda a: a >= 18, "Must be adult")
        .ensure_nested(address, address_rules)
    )


class TestValidator:
    """Validator runs every rule and prefixes lens paths."""

    def test_collects_all_errors(self, invalid_person: Person) -> None:
        result = _person_validator().validate(invalid_person)
        assert not result.is_valid
        assert result.errors == ("Name required", "Age: Must be adult", "Address: City")
        assert not _person_validator().apply(invalid_person).is_valid

    def test_valid_subject(self) -> None:
        adult = Person("Ada", Address("NYC", "Main"), 30)
        assert _person_validator().validate(adult) == Validation.success(UNIT)
        assert _person_validator()(adult).value is UNIT

    def test_append_identity_returns_same_instance(self) -> None:
        validator = _person_validator()
        assert validator.append(Validator.empty()) is validator
        assert Validator.empty().append(validator) is validator
        assert Validator.empty().is_empty

    def test_append_merges_rules(self) -> None:
        first = Validator.empty().ensure(lambda p: len(p.name) > 0, "Name")
        second = Validator.empty().ensure(lambda p: p.age > 0, "Age")
        result = first.append(second).validate(Person("", Address("", ""), -1))
        assert result.errors == ("Name", "Age")
        assert Validator.empty().validate(Person("", Address("", ""), -1)).is_valid

    def test_nested_paths_stack(self) -> None:
        street = Lens.attr("address", "Address").compose(Lens.attr("street", "Street"))
        rules = Validator.empty().ensure(lambda s: len(s) > 0, "Street missing")
        validator = Validator.empty().ensure_nested(street, rules)
        result = validator.validate(Person("Name", Address("City", ""), 20))
        assert result.errors == ("Address.Street: Street missing",)

    def test_free_ensure_dispatch(self, invalid_person: Person) -> None:
        age = Lens.attr("age", "Age")
        address = Lens.attr("address", "Address")
        city_rules = ensure(Validator.empty(), lambda a: bool(a.city), "City")
        validator = ensure(Validator.empty(), lambda p: bool(p.name), "Name required")
        validator = ensure(validator, age, lambda a: a >= 18, "Must be adult")
        validator = ensure(validator, address, city_rules)
        assert validator.validate(invalid_person).errors == ("Name required", "Age: Must be adult", "Address: City")
