# tests/support.py
"""Sample domain records shared by the test modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    city: str
    street: str


@dataclass(frozen=True)
class Person:
    name: str
    address: Address
    age: int
