"""Ordered field-filter mapping and the `similarity:v1,v2,...` value grammar."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from src.query import codec
from src.query.errors import InvalidParameter
from src.query.schema import (
    AMPERSAND,
    COLON,
    COMMA,
    EQUAL,
    RESERVED_KEYS,
    Parameter,
    Similarity,
)


def parse_parameter(value: str) -> Parameter:
    """Parse a `similarity:v1,v2,...` value.

    Each value is trimmed and percent-decoded; entries that decode to an empty string are dropped.
    An empty value part yields an empty list; callers decide whether that is acceptable.

    Raises:
        InvalidParameter: If the input is blank, is not exactly two colon-separated parts, or has an
            empty similarity part.
        InvalidSimilarity: If the similarity token is unknown.
    """

    text = value.strip()
    if not text:
        raise InvalidParameter(value)

    parts = text.split(COLON)
    if len(parts) != 2:
        raise InvalidParameter(value)

    token, raw_values = parts[0].strip(), parts[1]
    if not token:
        raise InvalidParameter(value)

    decoded = (codec.decode(v.strip()) for v in raw_values.split(COMMA))
    return Parameter(similarity=Similarity.parse(token), values=[v for v in decoded if v])


class Parameters:
    """Ordered mapping of field name to `Parameter`.

    Builder methods upsert in place and return `self` so calls can be chained. Re-inserting a field
    replaces its filter but keeps its original position.
    """

    def __init__(self, parameters: Iterable[tuple[str, Parameter]] = ()) -> None:
        self._parameters: dict[str, Parameter] = {}
        for name, parameter in parameters:
            self.insert(name, parameter)

    def insert(self, name: str, parameter: Parameter) -> Parameters:
        """Insert or replace the filter for `name`."""

        if name in RESERVED_KEYS:
            raise InvalidParameter(name)
        self._parameters[name] = parameter
        return self

    def _upsert(self, name: str, similarity: Similarity, values: Iterable[str]) -> Parameters:
        return self.insert(name, Parameter(similarity=similarity, values=list(values)))

    def equals(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.equals, values)

    def contains(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.contains, values)

    def starts_with(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.starts_with, values)

    def ends_with(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.ends_with, values)

    def between(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.between, values)

    def lesser(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.lesser, values)

    def lesser_or_equal(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.lesser_or_equal, values)

    def greater(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.greater, values)

    def greater_or_equal(self, name: str, values: Iterable[str]) -> Parameters:
        return self._upsert(name, Similarity.greater_or_equal, values)

    def keep(self, names: Iterable[str]) -> Parameters:
        """Return a copy holding only the existing fields named in `names`, in existing order."""

        wanted = set(names)
        return Parameters((k, v) for k, v in self._parameters.items() if k in wanted)

    def remove(self, names: Iterable[str]) -> Parameters:
        """Return a copy without the fields named in `names`."""

        unwanted = set(names)
        return Parameters((k, v) for k, v in self._parameters.items() if k not in unwanted)

    def to_http(self) -> str:
        """Serialize as `field=similarity:v1,v2` pairs joined by `&`, skipping empty filters."""

        return AMPERSAND.join(
            f"{name}{EQUAL}{parameter.similarity.token}{COLON}"
            f"{codec.join_csv(codec.encode(v) for v in parameter.values)}"
            for name, parameter in self._parameters.items()
            if parameter.values
        )

    def copy(self) -> Parameters:
        return Parameters(self._parameters.items())

    def get(self, name: str) -> Parameter | None:
        return self._parameters.get(name)

    def items(self) -> list[tuple[str, Parameter]]:
        return list(self._parameters.items())

    def keys(self) -> list[str]:
        return list(self._parameters)

    def __getitem__(self, name: str) -> Parameter:
        return self._parameters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return list(self._parameters.items()) == list(other._parameters.items())

    def __repr__(self) -> str:
        return f"Parameters({self.items()!r})"
