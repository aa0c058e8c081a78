"""Tests for grammar enums and the `Parameter` model."""

from __future__ import annotations

import pytest

from src.query.errors import InvalidSimilarity, InvalidSortOrder, QueryError
from src.query.schema import (
    AMPERSAND,
    COLON,
    COMMA,
    EQUAL,
    PERCENT,
    QUESTION,
    RESERVED_KEYS,
    Parameter,
    Similarity,
    SortOrder,
)


def test_constants() -> None:
    assert (QUESTION, AMPERSAND, EQUAL, COLON, COMMA, PERCENT) == ("?", "&", "=", ":", ",", "%")
    assert RESERVED_KEYS == {"order", "limit", "offset"}


@pytest.mark.parametrize("similarity", list(Similarity))
def test_similarity_round_trip(similarity: Similarity) -> None:
    assert Similarity.parse(similarity.token) is similarity
    assert str(similarity) == similarity.token


def test_similarity_tokens() -> None:
    assert [s.token for s in Similarity] == [
        "equals",
        "contains",
        "starts-with",
        "ends-with",
        "between",
        "lesser",
        "lesser-or-equal",
        "greater",
        "greater-or-equal",
    ]


@pytest.mark.parametrize("token", ["", "Equals", "EQUALS", "starts_with", "eq", " equals"])
def test_similarity_parse_is_exact(token: str) -> None:
    with pytest.raises(InvalidSimilarity) as exc_info:
        Similarity.parse(token)
    assert exc_info.value.value == token


@pytest.mark.parametrize("order", list(SortOrder))
def test_sort_order_round_trip(order: SortOrder) -> None:
    assert SortOrder.parse(order.token) is order


def test_sort_order_tokens() -> None:
    assert SortOrder.parse("asc") == SortOrder.ascending
    assert SortOrder.parse("desc") == SortOrder.descending


@pytest.mark.parametrize("token", ["", "ASC", "ascending", "down"])
def test_sort_order_parse_rejects_unknown(token: str) -> None:
    with pytest.raises(InvalidSortOrder):
        SortOrder.parse(token)


def test_errors_share_base_class() -> None:
    with pytest.raises(QueryError):
        Similarity.parse("nope")
    with pytest.raises(ValueError):
        SortOrder.parse("nope")


def test_parameter_drops_blank_values() -> None:
    parameter = Parameter.init(Similarity.contains, ["john", "", "jane", "   ", "\t"])
    assert parameter.values == ["john", "jane"]


def test_parameter_with_value_appends() -> None:
    parameter = Parameter.init(Similarity.equals, ["ben"])
    assert parameter.with_value("john").values == ["ben", "john"]
    assert parameter.values == ["ben"]
