"""MySQL dialect."""

from typing import Sequence

from querykit.query_builder.dialects.base import BaseDialect


class MySQLDialect(BaseDialect):
    """MySQL / MariaDB.

    Upserts use a row alias (``AS new``) with ``ON DUPLICATE KEY UPDATE``,
    the form MySQL 8.0.19+ recommends over the deprecated ``VALUES()``
    function.
    """

    drivers = ("mysql",)
    sqlglot_dialect = "mysql"

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        sql = self.insert_prefix(table, columns, row_count)

        if update_columns:
            assignments = ", ".join(f"{column} = new.{column}" for column in update_columns)
            sql += f" AS new ON DUPLICATE KEY UPDATE {assignments}"

        return sql
