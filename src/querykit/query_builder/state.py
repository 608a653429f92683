"""Immutable query state.

``QueryState`` is the value a ``QueryBuilder`` carries. Every fluent call
produces a new state with ``model_copy(update=...)``; fields are tuples so a
copy never shares a mutable container with its source.

The condition ledger (``QueryState.ledger``) is the append-only record of
every WHERE predicate. It is the single source for both the WHERE text and
the order of the WHERE bindings.
"""

from typing import Any, List, NamedTuple, Optional, Tuple

from pydantic import ConfigDict, Field, field_validator

from querykit.constants.sql import DEFAULT_DRIVER, Connective, JoinType
from querykit.types.base import QueryKitBaseModel


class LedgerEntry(QueryKitBaseModel):
    """One recorded predicate.

    Attributes:
        connective: AND or OR; decides the composition bucket
        fragment: Rendered SQL with ``?`` placeholders
        bindings: Values for the fragment's placeholders, in order
    """
    model_config = ConfigDict(frozen=True)

    connective: Connective = Connective.AND
    fragment: str
    bindings: Tuple[Any, ...] = ()

    @property
    def is_blank(self) -> bool:
        return self.fragment.strip() == ""


class JoinClause(QueryKitBaseModel):
    """A join in append order. CROSS joins carry an empty condition."""
    model_config = ConfigDict(frozen=True)

    kind: JoinType = JoinType.INNER
    table: str
    condition: str = ""


class QueryState(QueryKitBaseModel):
    """Copy-on-write snapshot of a query under construction.

    Attributes:
        table: Target table; empty until set
        select_columns: Columns for SELECT; never empty
        joins: Join clauses in append order
        ledger: WHERE predicates in append order
        group_by: GROUP BY columns
        order_by: Pre-rendered ``"column DIRECTION"`` items
        having: HAVING fragments, always joined with AND
        having_bindings: Values for HAVING placeholders
        limit: Row limit, or None
        offset: Row offset, or None
        driver: Lower-cased driver name
    """
    model_config = ConfigDict(frozen=True)

    table: str = ""
    select_columns: Tuple[str, ...] = ("*",)
    joins: Tuple[JoinClause, ...] = ()
    ledger: Tuple[LedgerEntry, ...] = ()
    group_by: Tuple[str, ...] = ()
    order_by: Tuple[str, ...] = ()
    having: Tuple[str, ...] = ()
    having_bindings: Tuple[Any, ...] = ()
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)
    driver: str = DEFAULT_DRIVER

    @field_validator("select_columns")
    @classmethod
    def validate_select_columns(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            return ("*",)
        return v

    @field_validator("driver")
    @classmethod
    def validate_driver(cls, v: str) -> str:
        return v.strip().lower() or DEFAULT_DRIVER

    def evolve(self, **changes: Any) -> "QueryState":
        """Return a copy with ``changes`` applied; ``self`` is untouched."""
        return self.model_copy(update=changes)

    def append_condition(self, entry: LedgerEntry) -> "QueryState":
        return self.evolve(ledger=self.ledger + (entry,))

    @property
    def is_paginated(self) -> bool:
        return self.limit is not None or self.offset is not None


class RenderedQuery(NamedTuple):
    """SQL text plus positional bindings for a prepared statement."""

    sql: str
    bindings: List[Any]
