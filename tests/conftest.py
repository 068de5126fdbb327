# tests/conftest.py
"""Shared fixtures for the test-suite."""

from __future__ import annotations

import pytest

from tests.support import Address, Person


@pytest.fixture
def person() -> Person:
    """A valid adult living in Paris."""
    return Person("Dana", Address("Paris", "Rue"), 25)


@pytest.fixture
def invalid_person() -> Person:
    """Blank name, blank city, underage."""
    return Person("", Address("", "Street"), 15)
