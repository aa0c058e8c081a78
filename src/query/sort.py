"""Ordered sort-field mapping and the `order=` value grammar.

Grammar: `field1:dir1,field2:dir2,...` where each direction is `asc` or `desc`. Insertion order is
ORDER BY precedence; re-inserting a field overwrites its direction in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from src.query import codec
from src.query.errors import InvalidSortField
from src.query.schema import COLON, COMMA, SortOrder


def parse_sort_field(segment: str) -> tuple[str, SortOrder]:
    """Parse a single `name:direction` segment.

    Raises:
        InvalidSortField: If the segment is not exactly two non-empty colon-separated parts.
        InvalidSortOrder: If the direction token is unknown.
    """

    parts = [p.strip() for p in segment.strip().split(COLON)]
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidSortField(segment)

    name, direction = parts
    return codec.decode(name), SortOrder.parse(direction)


class SortFields:
    """Ordered mapping of field name to `SortOrder`."""

    def __init__(self, fields: Iterable[tuple[str, SortOrder]] = ()) -> None:
        self._fields: dict[str, SortOrder] = {}
        for name, order in fields:
            self._fields[name] = order

    @classmethod
    def parse(cls, value: str) -> SortFields:
        """Parse a comma-joined list of `name:direction` segments.

        Blank segments are skipped and an empty input yields an empty mapping. Any malformed
        segment aborts the whole parse.
        """

        return cls(
            parse_sort_field(segment)
            for segment in (s.strip() for s in value.split(COMMA))
            if segment
        )

    def to_http(self) -> str:
        """Serialize back to the `order=` value grammar, skipping blank names."""

        return COMMA.join(
            f"{codec.encode(name)}{COLON}{order.token}"
            for name, order in self._fields.items()
            if name.strip()
        )

    def ascending(self, name: str) -> SortFields:
        self._fields[name] = SortOrder.ascending
        return self

    def descending(self, name: str) -> SortFields:
        self._fields[name] = SortOrder.descending
        return self

    def keep(self, names: Iterable[str]) -> SortFields:
        """Return a copy holding only the existing fields named in `names`, in existing order."""

        wanted = set(names)
        return SortFields((k, v) for k, v in self._fields.items() if k in wanted)

    def remove(self, names: Iterable[str]) -> SortFields:
        """Return a copy without the fields named in `names`."""

        unwanted = set(names)
        return SortFields((k, v) for k, v in self._fields.items() if k not in unwanted)

    def copy(self) -> SortFields:
        return SortFields(self._fields.items())

    def get(self, name: str) -> SortOrder | None:
        return self._fields.get(name)

    def items(self) -> list[tuple[str, SortOrder]]:
        return list(self._fields.items())

    def keys(self) -> list[str]:
        return list(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortFields):
            return NotImplemented
        return list(self._fields.items()) == list(other._fields.items())

    def __repr__(self) -> str:
        return f"SortFields({self.items()!r})"
