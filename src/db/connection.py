"""Shared SQLite connection helpers.

SQLite is the reference driver for the compiled fragments: it binds `?` positional placeholders
natively.
"""

from __future__ import annotations

import os
import sqlite3

from dotenv import load_dotenv


def require_database_url() -> str:
    """Read `DATABASE_URL` from the environment (or `.env`) or raise a clear error."""

    load_dotenv(".env")
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required (set it in .env or environment)")
    return database_url


def connect(database_url: str | None = None) -> sqlite3.Connection:
    """Open a SQLite connection whose rows are addressable by column name.

    `database_url` is a filesystem path or `:memory:`; a `sqlite://` prefix is accepted and stripped.
    """

    if database_url is None:
        database_url = require_database_url()

    path = database_url.removeprefix("sqlite://")
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn
