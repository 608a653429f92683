"""Dialect strategies.

Each supported database family has a strategy that renders pagination and
upserts:

    - mysql:          LIMIT/OFFSET, INSERT ... AS new ON DUPLICATE KEY UPDATE
    - pgsql:          LIMIT/OFFSET, INSERT ... ON CONFLICT ... EXCLUDED
    - sqlite:         LIMIT/OFFSET, INSERT ... ON CONFLICT ... excluded
    - sqlsrv / mssql: OFFSET ... FETCH NEXT, MERGE INTO ... USING (VALUES ...)
"""

from querykit.query_builder.dialects.base import (
    BaseDialect,
    GenericDialect,
    resolve_update_columns,
)
from querykit.query_builder.dialects.factory import DialectFactory, get_dialect
from querykit.query_builder.dialects.mysql import MySQLDialect
from querykit.query_builder.dialects.postgres import PostgresDialect
from querykit.query_builder.dialects.sqlite import SQLiteDialect
from querykit.query_builder.dialects.sqlserver import SQLServerDialect

__all__ = [
    "BaseDialect",
    "GenericDialect",
    "resolve_update_columns",
    "DialectFactory",
    "get_dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "SQLServerDialect",
]
