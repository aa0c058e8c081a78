"""Typed SQL bind values.

`SQLValue` is a closed union of frozen variants. The compiler produces them from the decoded string
values of a `Parameter`; driver adapters (see `src.db.adapter`) map them to native bindings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.query.schema import Similarity

NULL = "null"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Null:
    """SQL `NULL`."""


@dataclass(frozen=True)
class Integer:
    """A 64-bit signed integer."""

    value: int

    def __post_init__(self) -> None:
        if self.value < _INT64_MIN or self.value > _INT64_MAX:
            raise ValueError(f"integer out of 64-bit range: {self.value}")


@dataclass(frozen=True)
class Real:
    """A 64-bit floating point number."""

    value: float


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Blob:
    value: bytes


SQLValue = Null | Integer | Real | Text | Blob

# (prefix, suffix) wildcards wrapped around LIKE values.
_LIKE_WILDCARDS: dict[Similarity, tuple[str, str]] = {
    Similarity.contains: ("%", "%"),
    Similarity.starts_with: ("", "%"),
    Similarity.ends_with: ("%", ""),
}


def infer_value(raw: str) -> SQLValue:
    """Type a raw string: 64-bit integer, then float, then text."""

    if _INTEGER_RE.fullmatch(raw):
        number = int(raw)
        if _INT64_MIN <= number <= _INT64_MAX:
            return Integer(number)

    if raw.isascii() and raw == raw.strip() and "_" not in raw:
        try:
            return Real(float(raw))
        except ValueError:
            pass

    return Text(raw)


def bind_value(similarity: Similarity, raw: str) -> SQLValue:
    """Convert one decoded filter value into the bind value for its placeholder.

    The literal `null` always binds as `Null`. LIKE-based similarities wrap the value in `%`
    wildcards; every other similarity infers a numeric type where possible.
    """

    if raw == NULL:
        return Null()

    wildcards = _LIKE_WILDCARDS.get(similarity)
    if wildcards is not None:
        prefix, suffix = wildcards
        return Text(f"{prefix}{raw}{suffix}")

    return infer_value(raw)
