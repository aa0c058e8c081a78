"""Translate a list query string from the command line.

Examples:
    python -m src.cli "name=contains:damian&order=date_created:desc&limit=40"
    python -m src.cli "age=between:20,30" --table people --allow name,age --database people.db
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import closing

from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.db.connection import connect
from src.db.query import DisallowedField, fetch_count, fetch_rows
from src.query.errors import QueryError
from src.query.model import Query
from src.sql.values import SQLValue

logger = logging.getLogger(__name__)


def _format_value(value: SQLValue) -> str:
    inner = getattr(value, "value", None)
    if inner is None:
        return type(value).__name__
    return f"{type(value).__name__}({inner!r})"


def describe(query: Query) -> list[str]:
    """Return the normalized query string, SQL fragment and bind values as printable lines."""

    compiled = query.compile()
    return [
        f"http: {query.to_http()}",
        f"sql: {compiled.sql}",
        "values: " + ", ".join(_format_value(v) for v in compiled.values),
    ]


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""

    parser = argparse.ArgumentParser(description="Translate a list query string to SQL.")
    parser.add_argument("search", help="HTTP query string, with or without a leading '?'.")
    parser.add_argument("--table", help="Run the query against this table.")
    parser.add_argument(
        "--allow",
        default="",
        help="Comma-separated fields the query may filter or sort on (used with --table).",
    )
    parser.add_argument("--database", help="SQLite path (defaults to DATABASE_URL).")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        query = Query.from_http(args.search).clamp(settings.query_max_limit)
        for line in describe(query):
            print(line)

        if args.table:
            allowed = [f.strip() for f in args.allow.split(",") if f.strip()]
            with closing(connect(args.database or settings.database_url)) as conn:
                total = fetch_count(conn, args.table, query, allowed_fields=allowed)
                rows = fetch_rows(conn, args.table, query, allowed_fields=allowed)
            print(f"total: {total}")
            for row in rows:
                print(dict(row))
    except (QueryError, DisallowedField) as exc:
        logger.info("rejected query reason=%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
