"""Error taxonomy for query-string parsing.

Every parse failure raised by the query layer is a `QueryError`; callers that only need to reject a
request can catch the base class.
"""

from __future__ import annotations


class QueryError(ValueError):
    """Base class for malformed list-query input."""

    def __init__(self, value: str) -> None:
        super().__init__(f"{self.__class__.__name__}: {value!r}")
        self.value = value


class InvalidSortOrder(QueryError):
    """Raised when a sort direction token is neither `asc` nor `desc`."""


class InvalidSortField(QueryError):
    """Raised when an `order=` segment is not `name:direction`."""


class InvalidSimilarity(QueryError):
    """Raised when a similarity token is not one of the known operators."""


class InvalidParameter(QueryError):
    """Raised when a parameter value is not `similarity:v1,v2,...`."""


class InvalidSearchParameters(QueryError):
    """Raised when a query-string token is not a single `key=value` pair."""
