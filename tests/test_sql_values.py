"""Tests for bind-value typing."""

from __future__ import annotations

import math

import pytest

from src.query.schema import Similarity
from src.sql.values import NULL, Blob, Integer, Null, Real, Text, bind_value, infer_value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25", Integer(25)),
        ("-123", Integer(-123)),
        ("+7", Integer(7)),
        ("9223372036854775807", Integer(9223372036854775807)),
        ("25.5", Real(25.5)),
        ("-0.25", Real(-0.25)),
        ("1e3", Real(1000.0)),
        ("john", Text("john")),
        ("", Text("")),
        (" 25", Text(" 25")),
        ("1_000", Text("1_000")),
        ("2024-01-01", Text("2024-01-01")),
        ("١٢", Text("١٢")),
        ("１.5", Text("１.5")),
    ],
)
def test_infer_value(raw: str, expected: object) -> None:
    assert infer_value(raw) == expected


def test_integer_overflow_falls_back_to_real() -> None:
    value = infer_value("9223372036854775808")
    assert isinstance(value, Real)
    assert math.isclose(value.value, 9.223372036854775808e18)


def test_integer_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        Integer(2**63)


def test_null_literal_binds_null_for_every_similarity() -> None:
    for similarity in Similarity:
        assert bind_value(similarity, NULL) == Null()


def test_like_wildcards() -> None:
    assert bind_value(Similarity.contains, "42") == Text("%42%")
    assert bind_value(Similarity.starts_with, "42") == Text("42%")
    assert bind_value(Similarity.ends_with, "42") == Text("%42")


def test_non_like_similarities_infer_types() -> None:
    assert bind_value(Similarity.between, "20") == Integer(20)
    assert bind_value(Similarity.greater_or_equal, "1.5") == Real(1.5)
    assert bind_value(Similarity.equals, "NULL") == Text("NULL")


def test_variants_are_distinct() -> None:
    assert Integer(1) != Real(1.0)
    assert Text("a") != Blob(b"a")
