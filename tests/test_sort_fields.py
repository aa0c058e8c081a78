"""Tests for sort-field parsing and the ordered `SortFields` mapping."""

from __future__ import annotations

import pytest

from src.query.errors import InvalidSortField, InvalidSortOrder
from src.query.schema import SortOrder
from src.query.sort import SortFields, parse_sort_field


def test_parse_sort_field_desc() -> None:
    assert parse_sort_field("date_created:desc") == ("date_created", SortOrder.descending)


def test_parse_sort_field_trims_whitespace() -> None:
    assert parse_sort_field("  name  :  asc  ") == ("name", SortOrder.ascending)


def test_parse_sort_field_decodes_name() -> None:
    assert parse_sort_field("first%20name:asc") == ("first name", SortOrder.ascending)


@pytest.mark.parametrize(
    "segment",
    ["", "   ", "name", "nameasc", "name:asc:extra", ":asc", "name:", " : "],
)
def test_parse_sort_field_rejects_malformed_segment(segment: str) -> None:
    with pytest.raises(InvalidSortField) as exc_info:
        parse_sort_field(segment)
    assert exc_info.value.value == segment


def test_parse_sort_field_rejects_unknown_direction() -> None:
    with pytest.raises(InvalidSortOrder):
        parse_sort_field("name:invalid")


def test_sort_fields_parse_preserves_order() -> None:
    fields = SortFields.parse("date_created:desc,name:asc")
    assert fields.items() == [
        ("date_created", SortOrder.descending),
        ("name", SortOrder.ascending),
    ]


def test_sort_fields_parse_skips_blank_segments() -> None:
    fields = SortFields.parse(" , name:asc,, ")
    assert fields.items() == [("name", SortOrder.ascending)]


def test_sort_fields_parse_empty_input() -> None:
    assert len(SortFields.parse("")) == 0
    assert len(SortFields.parse(" , ")) == 0


def test_sort_fields_parse_fails_on_any_bad_segment() -> None:
    with pytest.raises(InvalidSortField):
        SortFields.parse("name:asc,broken")


def test_ascending_descending_chain() -> None:
    fields = SortFields().ascending("name").descending("date_created").ascending("email")
    assert fields.keys() == ["name", "date_created", "email"]
    assert fields.get("date_created") == SortOrder.descending


def test_reinsert_overwrites_in_place() -> None:
    fields = SortFields().ascending("name").descending("age").descending("name")
    assert fields.items() == [("name", SortOrder.descending), ("age", SortOrder.descending)]


def test_keep_uses_existing_order() -> None:
    fields = SortFields().ascending("a").descending("b").ascending("c")
    kept = fields.keep(["c", "missing", "a"])
    assert kept.keys() == ["a", "c"]
    assert fields.keys() == ["a", "b", "c"]


def test_remove_returns_copy() -> None:
    fields = SortFields().ascending("a").descending("b")
    removed = fields.remove(["a"])
    assert removed.keys() == ["b"]
    assert "a" in fields


def test_to_http_skips_blank_names() -> None:
    fields = SortFields().descending("date_created").ascending("").ascending("name")
    assert fields.to_http() == "date_created:desc,name:asc"


def test_equality_respects_order() -> None:
    assert SortFields().ascending("a").ascending("b") == SortFields().ascending("a").ascending("b")
    assert SortFields().ascending("a").ascending("b") != SortFields().ascending("b").ascending("a")
