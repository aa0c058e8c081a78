"""Logging configuration for the query tools."""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    The level comes from `level`, then `LOG_LEVEL`, then defaults to `INFO`. Parser leniencies
    (ignored `order` values, pagination fallbacks) are reported at `DEBUG`.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
