"""SQLite dialect."""

from querykit.query_builder.dialects.postgres import PostgresDialect


class SQLiteDialect(PostgresDialect):
    """SQLite shares PostgreSQL's ``ON CONFLICT`` upsert syntax.

    The pseudo-table is written in lowercase, as in the SQLite docs.
    """

    drivers = ("sqlite",)
    sqlglot_dialect = "sqlite"
    excluded_alias = "excluded"
