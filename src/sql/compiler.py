"""Deterministic SQL compiler for list queries.

The compiler converts a `Query` into a `WHERE ... ORDER BY ... LIMIT ? OFFSET ?` fragment and the
ordered bind values for its `?` placeholders. Field names are emitted verbatim; callers must check
them against an allow-list (see `src.db.query.ensure_allowed_fields`) before execution. Only values
become bound parameters.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from src.query.parameters import Parameters
from src.query.schema import Parameter, Similarity, SortOrder
from src.query.sort import SortFields
from src.sql.values import NULL, Integer, SQLValue, bind_value


class SQLCompilerError(ValueError):
    """Raised when a query cannot be converted into deterministic SQL."""


class ListQuery(Protocol):
    """Anything carrying filters, sort fields and pagination."""

    @property
    def parameters(self) -> Parameters: ...

    @property
    def sort_fields(self) -> SortFields: ...

    @property
    def limit(self) -> int: ...

    @property
    def offset(self) -> int: ...


@dataclass(frozen=True)
class CompiledQuery:
    """A parameterized SQL fragment ready for execution."""

    sql: str
    values: tuple[SQLValue, ...]


PAGINATION_SQL = "LIMIT ? OFFSET ?"

_COMPARISON_OPERATORS: dict[Similarity, str] = {
    Similarity.lesser: "<",
    Similarity.lesser_or_equal: "<=",
    Similarity.greater: ">",
    Similarity.greater_or_equal: ">=",
}

_SORT_KEYWORDS: dict[SortOrder, str] = {
    SortOrder.ascending: "ASC",
    SortOrder.descending: "DESC",
}


def _any_of(conditions: list[str]) -> str:
    if len(conditions) > 1:
        return "(" + " OR ".join(conditions) + ")"
    return "".join(conditions)


def _between_pairs(values: list[str]) -> list[str]:
    """Values that form complete `low, high` pairs; an odd trailing value is dropped."""

    return values[: len(values) - len(values) % 2]


def _equals_condition(name: str, parameter: Parameter) -> str:
    values = parameter.values
    if len(values) == 1:
        if values[0] == NULL:
            return f"{name} IS ?"
        return f"{name} = ?"
    placeholders = ", ".join("?" for _ in values)
    return f"{name} IN ({placeholders})"


def _like_condition(name: str, parameter: Parameter) -> str:
    return _any_of([f"{name} LIKE ?" for _ in parameter.values])


def _comparison_condition(name: str, parameter: Parameter) -> str:
    operator = _COMPARISON_OPERATORS[parameter.similarity]
    return _any_of([f"{name} {operator} ?" for _ in parameter.values])


def _between_condition(name: str, parameter: Parameter) -> str:
    pairs = _between_pairs(parameter.values)
    return _any_of([f"{name} BETWEEN ? AND ?" for _ in pairs[::2]])


_CONDITION_BUILDERS: dict[Similarity, Callable[[str, Parameter], str]] = {
    Similarity.equals: _equals_condition,
    Similarity.contains: _like_condition,
    Similarity.starts_with: _like_condition,
    Similarity.ends_with: _like_condition,
    Similarity.between: _between_condition,
    Similarity.lesser: _comparison_condition,
    Similarity.lesser_or_equal: _comparison_condition,
    Similarity.greater: _comparison_condition,
    Similarity.greater_or_equal: _comparison_condition,
}


def _condition(name: str, parameter: Parameter) -> str:
    if not parameter.values:
        return ""

    try:
        builder = _CONDITION_BUILDERS[parameter.similarity]
    except KeyError as exc:
        raise SQLCompilerError(f"Unsupported similarity: {parameter.similarity}") from exc
    return builder(name, parameter)


def _bound_values(parameter: Parameter) -> list[str]:
    if parameter.similarity == Similarity.between:
        return _between_pairs(parameter.values)
    return parameter.values


def where_clause(parameters: Parameters) -> str:
    """Conditions for every filter in insertion order, joined by `AND` (without the keyword)."""

    conditions = (_condition(name, parameter) for name, parameter in parameters.items())
    return " AND ".join(c for c in conditions if c)


def order_clause(sort_fields: SortFields) -> str:
    """`name ASC|DESC` items in mapping order (without the keyword); blank names are skipped."""

    return ", ".join(
        f"{name} {_SORT_KEYWORDS[order]}" for name, order in sort_fields.items() if name.strip()
    )


def to_sql(query: ListQuery) -> str:
    clauses: list[str] = []

    where = where_clause(query.parameters)
    if where:
        clauses.append(f"WHERE {where}")

    order = order_clause(query.sort_fields)
    if order:
        clauses.append(f"ORDER BY {order}")

    clauses.append(PAGINATION_SQL)
    return " ".join(clauses)


def parameter_values(parameters: Parameters) -> list[SQLValue]:
    """Bind values for the `WHERE` placeholders, in placeholder order."""

    return [
        bind_value(parameter.similarity, raw)
        for _, parameter in parameters.items()
        for raw in _bound_values(parameter)
    ]


def pagination_values(limit: int, offset: int) -> list[SQLValue]:
    """Bind values for `LIMIT ? OFFSET ?`."""

    return [Integer(limit), Integer(offset)]


def to_values(query: ListQuery) -> list[SQLValue]:
    """All bind values for `to_sql(query)`: filters first, then limit and offset."""

    return parameter_values(query.parameters) + pagination_values(query.limit, query.offset)


def total_parameter_count(query: ListQuery) -> int:
    """Number of filter values plus the two pagination placeholders."""

    return sum(len(parameter.values) for _, parameter in query.parameters.items()) + 2


def compile_query(query: ListQuery) -> CompiledQuery:
    return CompiledQuery(sql=to_sql(query), values=tuple(to_values(query)))


class SQLMixin:
    """SQL compilation capability for list-query models."""

    def where_clause(self: ListQuery) -> str:
        return where_clause(self.parameters)

    def order_clause(self: ListQuery) -> str:
        return order_clause(self.sort_fields)

    def to_sql(self: ListQuery) -> str:
        return to_sql(self)

    def parameter_values(self: ListQuery) -> list[SQLValue]:
        return parameter_values(self.parameters)

    def pagination_values(self: ListQuery) -> list[SQLValue]:
        return pagination_values(self.limit, self.offset)

    def to_values(self: ListQuery) -> list[SQLValue]:
        return to_values(self)

    def total_parameter_count(self: ListQuery) -> int:
        return total_parameter_count(self)

    def compile(self: ListQuery) -> CompiledQuery:
        return compile_query(self)
