"""The `Query` aggregate and its HTTP query-string round trip.

Query-string grammar (all tokens joined by `&`):

    <field>=<similarity>:<v1>,<v2>,...    similarity-qualified filter
    <field>=<value>                       equals shorthand; repeats append
    order=<field>:<asc|desc>,...          sort fields; last `order=` wins
    limit=<n>&offset=<n>                  pagination

Filter and sort grammar is strict, pagination is lenient: a non-numeric `limit` or `offset` falls
back to its default, and a colon-containing `order` value that fails to parse is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from src.query import codec
from src.query.errors import InvalidSearchParameters, InvalidSortField, QueryError
from src.query.parameters import Parameters, parse_parameter
from src.query.schema import (
    AMPERSAND,
    COLON,
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    EQUAL,
    LIMIT,
    OFFSET,
    ORDER,
    QUESTION,
    Parameter,
    Similarity,
)
from src.query.sort import SortFields
from src.sql.compiler import SQLMixin

logger = logging.getLogger(__name__)

# Pagination binds as a 64-bit signed integer.
_MAX_PAGINATION = 2**63 - 1


def _parse_unsigned(key: str, value: str, default: int) -> int:
    if value.isascii() and value.isdigit() and int(value) <= _MAX_PAGINATION:
        return int(value)
    logger.debug("%s=%r is not an unsigned integer; using %d", key, value, default)
    return default


class Query(BaseModel, SQLMixin):
    """Filters, sort order and pagination of a single list request."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    parameters: Parameters = Field(default_factory=Parameters)
    sort_fields: SortFields = Field(default_factory=SortFields)
    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=_MAX_PAGINATION)
    offset: int = Field(default=DEFAULT_OFFSET, ge=0, le=_MAX_PAGINATION)

    @classmethod
    def init(cls, limit: int, offset: int) -> Query:
        return cls(limit=limit, offset=offset)

    @staticmethod
    def default_http() -> str:
        """Query string of an all-default `Query`."""

        return f"{LIMIT}{EQUAL}{DEFAULT_LIMIT}{AMPERSAND}{OFFSET}{EQUAL}{DEFAULT_OFFSET}"

    @classmethod
    def from_http(cls, search: str) -> Query:
        """Parse an HTTP query string (with or without a leading `?`).

        Raises:
            InvalidSearchParameters: If a token is not exactly one `key=value` pair.
            InvalidSortField: If an `order=` value has no colon.
            InvalidParameter: If a filter value breaks the `similarity:values` grammar.
            InvalidSimilarity: If a filter names an unknown similarity.
        """

        text = search.strip()
        if text.startswith(QUESTION):
            text = text[len(QUESTION):].strip()

        query = cls()
        for token in text.split(AMPERSAND):
            if not token.strip():
                continue

            parts = token.split(EQUAL)
            if len(parts) != 2 or not parts[0].strip():
                raise InvalidSearchParameters(token)

            key, value = parts[0].strip(), parts[1].strip()
            if not value:
                continue

            if key == ORDER:
                query._apply_order(value)
            elif key == LIMIT:
                query.limit = _parse_unsigned(key, value, DEFAULT_LIMIT)
            elif key == OFFSET:
                query.offset = _parse_unsigned(key, value, DEFAULT_OFFSET)
            elif COLON in value:
                parameter = parse_parameter(value)
                if parameter.values:
                    query.parameters.insert(key, parameter)
            else:
                query._apply_bare_value(key, codec.decode(value))

        return query

    def _apply_order(self, value: str) -> None:
        if COLON not in value:
            raise InvalidSortField(value)

        try:
            self.sort_fields = SortFields.parse(value)
        except QueryError as exc:
            # A colon-containing but malformed order keeps the current sort fields.
            logger.debug("ignoring order %r: %s", value, exc)

    def _apply_bare_value(self, key: str, value: str) -> None:
        if not value.strip():
            return

        existing = self.parameters.get(key)
        if existing is None:
            self.parameters.insert(key, Parameter(similarity=Similarity.equals, values=[value]))
        elif existing.similarity == Similarity.equals:
            self.parameters.insert(key, existing.with_value(value))
        else:
            logger.debug(
                "discarding bare %s=%r; already filtered by %s", key, value, existing.similarity
            )

    def to_http(self) -> str:
        """Serialize to a query string: filters, then `order`, then `limit` and `offset`."""

        tokens: list[str] = []

        parameters = self.parameters.to_http()
        if parameters:
            tokens.append(parameters)

        order = self.sort_fields.to_http()
        if order:
            tokens.append(f"{ORDER}{EQUAL}{order}")

        tokens.append(f"{LIMIT}{EQUAL}{self.limit}")
        tokens.append(f"{OFFSET}{EQUAL}{self.offset}")
        return AMPERSAND.join(tokens)

    def keep(self, names: Iterable[str]) -> Query:
        """Return a copy whose filters are restricted to `names`."""

        return Query(
            parameters=self.parameters.keep(names),
            sort_fields=self.sort_fields.copy(),
            limit=self.limit,
            offset=self.offset,
        )

    def remove(self, names: Iterable[str]) -> Query:
        """Return a copy without the filters named in `names`."""

        return Query(
            parameters=self.parameters.remove(names),
            sort_fields=self.sort_fields.copy(),
            limit=self.limit,
            offset=self.offset,
        )

    def clamp(self, max_limit: int) -> Query:
        """Return a copy whose `limit` does not exceed `max_limit`."""

        return Query(
            parameters=self.parameters.copy(),
            sort_fields=self.sort_fields.copy(),
            limit=min(self.limit, max_limit),
            offset=self.offset,
        )
