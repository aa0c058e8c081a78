"""List-query model and HTTP query-string parsing.

The query layer converts a raw HTTP query string into a strict `Query` object (filters, sort
order, pagination), which can be serialized back to a query string or compiled into parameterized
SQL by `src.sql.compiler`.
"""
