"""FlexVer version comparison and acceptable-version list handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Iterable, Optional


class VersionListError(ValueError):
    """Raised when an acceptable-version list cannot be changed as asked."""


class _Kind(Enum):
    LEXICAL = "lexical"
    NUMERIC = "numeric"
    PRERELEASE = "prerelease"


@dataclass(frozen=True)
class _Component:
    kind: _Kind
    text: str


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _lexical(a: str, b: str) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


def _make_component(is_number: bool, text: str) -> _Component:
    if is_number:
        return _Component(_Kind.NUMERIC, text)
    if len(text) > 1 and text[0] == "-":
        return _Component(_Kind.PRERELEASE, text)
    return _Component(_Kind.LEXICAL, text)


def _decompose(version: str) -> list[_Component]:
    if not version:
        return []
    components: list[_Component] = []
    last_was_number = version[0].isascii() and version[0].isdigit()
    accum: list[str] = []
    for ch in version:
        if ch == "+":
            break
        is_number = ch.isascii() and ch.isdigit()
        if is_number != last_was_number or (ch == "-" and accum and accum[0] != "-"):
            components.append(_make_component(last_was_number, "".join(accum)))
            accum = []
            last_was_number = is_number
        accum.append(ch)
    components.append(_make_component(last_was_number, "".join(accum)))
    return components


def _compare_component(a: Optional[_Component], b: Optional[_Component]) -> int:
    if a is None and b is None:
        return 0
    if a is None:
        return -_compare_component(b, None)
    if b is None:
        # Prereleases sort before a missing component; everything else after.
        return -1 if a.kind is _Kind.PRERELEASE else 1
    if a.kind is _Kind.NUMERIC and b.kind is _Kind.NUMERIC:
        left = a.text.lstrip("0")
        right = b.text.lstrip("0")
        if len(left) != len(right):
            return _sign(len(left) - len(right))
        return _lexical(left, right)
    return _lexical(a.text, b.text)


def compare(a: str, b: str) -> int:
    """Compare two version strings; return -1, 0 or 1."""
    left = _decompose(a)
    right = _decompose(b)
    for i in range(max(len(left), len(right))):
        ca = left[i] if i < len(left) else None
        cb = right[i] if i < len(right) else None
        result = _compare_component(ca, cb)
        if result != 0:
            return result
    return 0


def less(a: str, b: str) -> bool:
    """Return True if version ``a`` sorts strictly before ``b``."""
    return compare(a, b) < 0


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return the versions sorted from lowest to highest."""
    return sorted(versions, key=cmp_to_key(compare))


def dedupe_versions(versions: Iterable[str]) -> list[str]:
    """Drop repeated versions, keeping the last occurrence of each."""
    items = list(versions)
    return [v for i, v in enumerate(items) if v not in items[i + 1:]]


def is_sorted(versions: Iterable[str]) -> bool:
    """Return True if no version is followed by a lower one."""
    items = list(versions)
    return not any(less(nxt, cur) for cur, nxt in zip(items, items[1:]))


def add_version(versions: Iterable[str], version: str) -> list[str]:
    """Return a sorted copy of the list with ``version`` added."""
    items = list(versions)
    if version in items:
        raise VersionListError(
            f"Version {version} is already in your acceptable versions list!"
        )
    items.append(version)
    return sort_versions(items)


def remove_version(versions: Iterable[str], version: str) -> list[str]:
    """Return a sorted copy of the list with ``version`` removed."""
    items = list(versions)
    if version not in items:
        raise VersionListError(
            f"Version {version} is not in your acceptable versions list!"
        )
    items.remove(version)
    return sort_versions(items)