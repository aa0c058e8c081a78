"""Percent-encoding helpers for individual query-string values.

Values are decoded as single `application/x-www-form-urlencoded` fields, so `+` decodes to a space
when the value carries escapes. `encode` escapes every reserved character, spaces included (as
`%20`), which keeps the comma-joined value grammar unambiguous and makes `decode(encode(s)) == s`.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote, unquote_plus

from src.query.schema import COMMA, PERCENT


def decode(value: str) -> str:
    """Percent-decode a single form value.

    Strings without a `%` are returned unchanged. Malformed escapes are kept literally.
    """

    if PERCENT not in value:
        return value
    return unquote_plus(value)


def encode(value: str) -> str:
    """Percent-encode a single form value."""

    return quote(value, safe="")


def join_csv(values: Iterable[object]) -> str:
    """Join the string form of `values` with commas."""

    return COMMA.join(str(v) for v in values)
