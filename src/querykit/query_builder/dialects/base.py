"""Base dialect strategy.

A dialect decides the two things that differ between database families:
how pagination is rendered and how an upsert statement is written. Every
other clause is shared and lives in ``querykit.query_builder.statements``.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional, Sequence, Tuple

from querykit.common.exceptions import unsupported_dialect_error
from querykit.query_builder.predicates import placeholders
from querykit.query_builder.state import QueryState


class BaseDialect(ABC):
    """Base interface for dialect strategies.

    Subclasses set ``drivers`` (the driver names they answer to) and
    ``sqlglot_dialect`` (the name sqlglot uses for pretty-printing), and
    implement ``build_upsert``. Pagination defaults to the standard
    ``LIMIT n OFFSET m`` form.
    """

    drivers: ClassVar[Tuple[str, ...]] = ()
    sqlglot_dialect: ClassVar[Optional[str]] = None

    def __init__(self, driver: Optional[str] = None):
        """Initialize the dialect.

        Args:
            driver: Driver name as stored on the builder. Defaults to the
                    first name in ``drivers``.
        """
        self.driver = driver or (self.drivers[0] if self.drivers else "")

    def apply_pagination(self, sql: str, state: QueryState) -> str:
        """Append pagination for ``state`` to ``sql``.

        Args:
            sql: Statement rendered up to and including ORDER BY
            state: Query state holding limit and offset

        Returns:
            The statement with pagination applied
        """
        if not state.is_paginated:
            return sql

        if state.limit is not None:
            sql += f" LIMIT {state.limit}"

        if state.offset is not None:
            sql += f" OFFSET {state.offset}"

        return sql

    @abstractmethod
    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        """Build an insert-or-update statement.

        Args:
            table: Target table
            columns: Insert columns, in row order
            row_count: Number of rows in the VALUES list
            unique_columns: Columns that identify a conflicting row
            update_columns: Columns overwritten on conflict (may be empty)

        Returns:
            Dialect-specific upsert statement
        """
        pass

    def values_list(self, column_count: int, row_count: int) -> str:
        """``(?, ?), (?, ?)`` for ``row_count`` rows."""
        row = f"({placeholders(column_count)})"
        return ", ".join([row] * row_count)

    def insert_prefix(self, table: str, columns: Sequence[str], row_count: int) -> str:
        return f"INSERT INTO {table} ({', '.join(columns)}) VALUES {self.values_list(len(columns), row_count)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(driver={self.driver!r})"


class GenericDialect(BaseDialect):
    """Fallback for drivers querykit does not recognize.

    Paginates with the standard form and refuses to build upserts.
    """

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        raise unsupported_dialect_error(self.driver, "upsert")


def resolve_update_columns(
    columns: Sequence[str],
    unique_columns: Sequence[str],
    update_columns: Optional[Sequence[str]] = None,
) -> List[str]:
    """Columns to overwrite on conflict.

    Defaults to every data column that is not a unique column.
    """
    if isinstance(update_columns, str):
        return [update_columns]
    if update_columns is not None:
        return list(update_columns)
    unique = set(unique_columns)
    return [column for column in columns if column not in unique]
