"""Microsoft SQL Server dialect."""

from typing import Sequence

from querykit.query_builder.dialects.base import BaseDialect
from querykit.query_builder.state import QueryState


class SQLServerDialect(BaseDialect):
    """SQL Server (``sqlsrv`` and ``mssql`` drivers).

    Key Differences:
        - Pagination is ``OFFSET k ROWS FETCH NEXT n ROWS ONLY`` and is only
          valid after an ORDER BY
        - Upserts are ``MERGE`` statements against a ``VALUES`` source
    """

    drivers = ("sqlsrv", "mssql")
    sqlglot_dialect = "tsql"

    def apply_pagination(self, sql: str, state: QueryState) -> str:
        """Apply OFFSET...FETCH pagination.

        Synthesizes ``ORDER BY (SELECT NULL)`` when the query has no ORDER BY.
        """
        if not state.is_paginated:
            return sql

        if not state.order_by:
            sql += " ORDER BY (SELECT NULL)"

        offset = state.offset if state.offset is not None else 0
        sql += f" OFFSET {offset} ROWS"

        if state.limit is not None:
            sql += f" FETCH NEXT {state.limit} ROWS ONLY"

        return sql

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        column_list = ", ".join(columns)
        match_condition = " AND ".join(
            f"target.{column} = source.{column}" for column in unique_columns
        )

        sql = f"MERGE INTO {table} AS target "
        sql += f"USING (VALUES {self.values_list(len(columns), row_count)}) AS source ({column_list}) "
        sql += f"ON {match_condition} "

        if update_columns:
            assignments = ", ".join(
                f"target.{column} = source.{column}" for column in update_columns
            )
            sql += f"WHEN MATCHED THEN UPDATE SET {assignments} "

        source_values = ", ".join(f"source.{column}" for column in columns)
        sql += f"WHEN NOT MATCHED THEN INSERT ({column_list}) VALUES ({source_values});"

        return sql
