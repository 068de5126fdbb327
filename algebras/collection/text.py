"""String helpers

Short total functions over str: counts out of range clamp instead of raising."""

from __future__ import annotations

from collections.abc import Callable

def without_whitespace(value: str) -> str:
    return "".join(char for char in value if not char.isspace())

def words(value: str) -> list[str]:
    """Space-separated words; runs of spaces produce no empty entries."""
    return [word for word in value.split(" ") if word]

def is_blank(value: str | None) -> bool:
    """True for None, "" and whitespace-only strings."""
    return value is None or not value.strip()

def trim(value: str) -> str:
    return value.strip()

def repeat(value: str, count: int) -> str:
    """value repeated count times; "" when count <= 0."""
    if count <= 0:
        return ""
    return value * count

def split(value: str, separator: str) -> list[str]:
    """Split on separator, dropping empty entries."""
    return [part for part in value.split(separator) if part]

def replace(value: str, old: str, new: str) -> str:
    return value.replace(old, new)

def remove(value: str, fragment: str) -> str:
    """value with every occurrence of fragment removed."""
    if not fragment:
        return value
    return value.replace(fragment, "")

def first(value: str, length: int) -> str:
    """Leading length characters; the whole string when it is shorter."""
    if length <= 0:
        return ""
    return value[:length]

def last(value: str, length: int) -> str:
    """Trailing length characters; the whole string when it is shorter."""
    if length <= 0:
        return ""
    return value[-length:]

def drop(value: str, length: int) -> str:
    """value without its leading length characters."""
    if length <= 0:
        return value
    return value[length:]

def common_chars(left: str, right: str) -> str:
    """Distinct characters of left that also occur in right, in left order."""
    return "".join(dict.fromkeys(char for char in left if char in right))

def unique_chars(left: str, right: str) -> str:
    """Characters of left missing from right, then characters of right missing from left."""
    return "".join(char for char in left if char not in right) + "".join(
        char for char in right if char not in left
    )

def project[R](value: str, projector: Callable[[str], R]) -> R:
    return projector(value)

__all__ = (
    "without_whitespace",
    "words",
    "is_blank",
    "trim",
    "repeat",
    "split",
    "replace",
    "remove",
    "first",
    "last",
    "drop",
    "common_chars",
    "unique_chars",
    "project",
)
