"""Query grammar constants and enumerations.

These types are the contract between the query-string parser and the SQL compiler. Tokens are the
exact strings accepted on the wire; parsing is case-sensitive and has no synonyms.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.query.errors import InvalidSimilarity, InvalidSortOrder

QUESTION = "?"
AMPERSAND = "&"
EQUAL = "="
COLON = ":"
COMMA = ","
PERCENT = "%"

ORDER = "order"
LIMIT = "limit"
OFFSET = "offset"
RESERVED_KEYS: frozenset[str] = frozenset({ORDER, LIMIT, OFFSET})

DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0


class Similarity(StrEnum):
    """Comparison operator applied to the values of a single field."""

    equals = "equals"
    contains = "contains"
    starts_with = "starts-with"
    ends_with = "ends-with"
    between = "between"
    lesser = "lesser"
    lesser_or_equal = "lesser-or-equal"
    greater = "greater"
    greater_or_equal = "greater-or-equal"

    @classmethod
    def parse(cls, token: str) -> Similarity:
        """Return the variant whose canonical token is exactly `token`."""

        try:
            return cls(token)
        except ValueError as exc:
            raise InvalidSimilarity(token) from exc

    @property
    def token(self) -> str:
        """Canonical wire token; `Similarity.parse(s.token) == s` for every variant."""

        return self.value


class SortOrder(StrEnum):
    """Sort direction of a single ORDER BY field."""

    ascending = "asc"
    descending = "desc"

    @classmethod
    def parse(cls, token: str) -> SortOrder:
        """Return the variant whose canonical token is exactly `token`."""

        try:
            return cls(token)
        except ValueError as exc:
            raise InvalidSortOrder(token) from exc

    @property
    def token(self) -> str:
        return self.value


DEFAULT_SORT_ORDER = SortOrder.ascending


class Parameter(BaseModel):
    """A field filter: one similarity plus the ordered, decoded values it applies to."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    similarity: Similarity
    values: list[str] = Field(default_factory=list)

    @field_validator("values")
    @classmethod
    def drop_blank_values(cls, values: list[str]) -> list[str]:
        """Drop whitespace-only values; they never produce a placeholder or a bind value."""

        return [v for v in values if v.strip()]

    @classmethod
    def init(cls, similarity: Similarity, values: list[str]) -> Parameter:
        return cls(similarity=similarity, values=values)

    def with_value(self, value: str) -> Parameter:
        """Return a copy with `value` appended."""

        return Parameter(similarity=self.similarity, values=[*self.values, value])
