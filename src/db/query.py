"""Safe list-query execution helpers.

These helpers never interpolate user values into SQL. Field names, which the compiler emits
verbatim, are checked against a caller-supplied allow-list before any statement is built.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from typing import Any

from src.db.adapter import to_sqlite_params
from src.query.model import Query

logger = logging.getLogger(__name__)


class DisallowedField(ValueError):
    """Raised when a query filters or sorts on a field outside the allow-list."""

    def __init__(self, value: str) -> None:
        super().__init__(f"DisallowedField: {value!r}")
        self.value = value


def ensure_allowed_fields(query: Query, allowed_fields: Iterable[str]) -> None:
    """Reject filters and sort fields whose names are not in `allowed_fields`."""

    allowed = set(allowed_fields)
    for name in [*query.parameters.keys(), *query.sort_fields.keys()]:
        if name not in allowed:
            raise DisallowedField(name)


def fetch_rows(
        conn: sqlite3.Connection,
        table: str,
        query: Query,
        *,
        allowed_fields: Iterable[str],
) -> list[Any]:
    """Run `SELECT * FROM <table>` with the query's filters, sort order and pagination.

    Contract:
        - `table` is a trusted identifier chosen by the caller, never taken from the request.
        - DB errors are not swallowed (caller decides how to handle them).
    """

    ensure_allowed_fields(query, allowed_fields)

    compiled = query.compile()
    sql = f"SELECT * FROM {table} {compiled.sql}"
    logger.debug("fetch_rows sql=%s placeholders=%d", sql, len(compiled.values))

    return conn.execute(sql, to_sqlite_params(compiled.values)).fetchall()


def fetch_count(
        conn: sqlite3.Connection,
        table: str,
        query: Query,
        *,
        allowed_fields: Iterable[str],
) -> int:
    """Count all rows matching the query's filters, ignoring sort order and pagination.

    Returns `0` if the query yields no rows or a NULL count.
    """

    ensure_allowed_fields(query, allowed_fields)

    where = query.where_clause()
    sql = f"SELECT COUNT(*) FROM {table}"
    if where:
        sql += f" WHERE {where}"

    row = conn.execute(sql, to_sqlite_params(query.parameter_values())).fetchone()
    if not row or row[0] is None:
        return 0
    return int(row[0])
