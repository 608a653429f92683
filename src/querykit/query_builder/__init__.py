"""Query Builder Module.

Immutable, dialect-aware SQL assembly. Builders produce SQL text with ``?``
placeholders plus the ordered list of values to bind; they never execute
anything.

Example:
    >>> from querykit.query_builder import QueryBuilder
    >>> sql, bindings = (
    ...     QueryBuilder("users", driver="pgsql")
    ...     .where("status", "active")
    ...     .where_in("role", ["admin", "user"])
    ...     .order_by("name")
    ...     .limit(10)
    ...     .render()
    ... )
"""

from querykit.query_builder.builder import QueryBuilder
from querykit.query_builder.debug import (
    format_value_for_display,
    highlight_sql,
    interpolate_bindings,
    pretty_sql,
)
from querykit.query_builder.dialects import (
    BaseDialect,
    DialectFactory,
    GenericDialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    SQLServerDialect,
    get_dialect,
)
from querykit.query_builder.factory import QueryBuilderFactory, get_query_builder
from querykit.query_builder.state import JoinClause, LedgerEntry, QueryState, RenderedQuery

__all__ = [
    "QueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
    "QueryState",
    "LedgerEntry",
    "JoinClause",
    "RenderedQuery",
    "BaseDialect",
    "GenericDialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "SQLServerDialect",
    "DialectFactory",
    "get_dialect",
    "format_value_for_display",
    "interpolate_bindings",
    "highlight_sql",
    "pretty_sql",
]
