"""SQLite bindings for `SQLValue`."""

from __future__ import annotations

from collections.abc import Iterable

from src.sql.values import Blob, Integer, Null, Real, SQLValue, Text

SQLiteValue = None | int | float | str | bytes


def to_sqlite(value: SQLValue) -> SQLiteValue:
    """Map a bind value to the native type sqlite3 binds to the same storage class."""

    if isinstance(value, Null):
        return None
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, Real):
        return value.value
    if isinstance(value, Text):
        return value.value
    if isinstance(value, Blob):
        return bytes(value.value)
    raise TypeError(f"Unsupported SQL value: {value!r}")


def to_sqlite_params(values: Iterable[SQLValue]) -> tuple[SQLiteValue, ...]:
    return tuple(to_sqlite(v) for v in values)
