"""PostgreSQL dialect."""

from typing import ClassVar, Sequence

from querykit.query_builder.dialects.base import BaseDialect


class PostgresDialect(BaseDialect):
    """PostgreSQL.

    Upserts use ``ON CONFLICT (...) DO UPDATE SET col = EXCLUDED.col`` or
    ``DO NOTHING`` when there is nothing to update.
    """

    drivers = ("pgsql",)
    sqlglot_dialect = "postgres"
    excluded_alias: ClassVar[str] = "EXCLUDED"

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        sql = self.insert_prefix(table, columns, row_count)
        sql += f" ON CONFLICT ({', '.join(unique_columns)})"

        if update_columns:
            assignments = ", ".join(
                f"{column} = {self.excluded_alias}.{column}" for column in update_columns
            )
            sql += f" DO UPDATE SET {assignments}"
        else:
            sql += " DO NOTHING"

        return sql
