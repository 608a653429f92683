"""Immutable fluent query builder.

``QueryBuilder`` wraps a frozen ``QueryState``. Every fluent method returns a
new builder; the receiver is never modified, so a partially built query can
be branched freely:

    >>> base = QueryBuilder("users").where("status", "active")
    >>> admins = base.where("role", "admin")
    >>> base.to_sql()
    'SELECT * FROM users WHERE status = ?'

Rendering is delegated to the pure helpers in ``predicates``, ``composer``,
``statements`` and ``debug``.
"""

from typing import IO, Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from querykit.common.exceptions import invalid_argument_error
from querykit.constants.sql import (
    DEFAULT_DRIVER,
    PLACEHOLDER,
    Connective,
    Dialect,
    JoinType,
    LikeSide,
    StatementType,
)
from querykit.logging import get_logger
from querykit.query_builder import debug, statements
from querykit.query_builder.composer import compile_bindings, compile_where_bindings, compose_where
from querykit.query_builder.predicates import (
    normalize_operator,
    render_between,
    render_comparison,
    render_in,
    render_like,
    render_not_in,
    render_null,
    render_raw,
)
from querykit.query_builder.state import JoinClause, LedgerEntry, QueryState, RenderedQuery

logger = get_logger(__name__)

Columns = Union[str, Sequence[str]]
Row = Mapping[str, Any]
Callback = Callable[["QueryBuilder"], "QueryBuilder"]


def _split_columns(columns: Columns) -> tuple:
    if isinstance(columns, str):
        return tuple(column.strip() for column in columns.split(","))
    return tuple(columns)


class QueryBuilder:
    """Fluent, copy-on-write SQL builder.

    Args:
        table: Target table
        driver: Driver name (mysql, pgsql, sqlite, sqlsrv, mssql); case-insensitive
        state: Existing state to wrap; overrides ``table`` and ``driver``
    """

    def __init__(
        self,
        table: str = "",
        driver: Optional[str] = None,
        state: Optional[QueryState] = None,
    ):
        if state is None:
            state = QueryState(table=table, driver=driver or DEFAULT_DRIVER)
        self._state = state

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def driver(self) -> str:
        return self._state.driver

    def _evolve(self, **changes: Any) -> "QueryBuilder":
        return self.__class__(state=self._state.evolve(**changes))

    def _append(self, entry: LedgerEntry) -> "QueryBuilder":
        return self.__class__(state=self._state.append_condition(entry))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(table={self._state.table!r}, driver={self._state.driver!r})"

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def table(self, table: str) -> "QueryBuilder":
        return self._evolve(table=table)

    def select(self, columns: Columns = "*") -> "QueryBuilder":
        """Replace the select list.

        A string is split on commas; ``"id, name"`` selects two columns.
        """
        return self._evolve(select_columns=_split_columns(columns) or ("*",))

    def add_select(self, columns: Columns) -> "QueryBuilder":
        return self._evolve(select_columns=self._state.select_columns + _split_columns(columns))

    def select_distinct(self, columns: Columns = "*") -> "QueryBuilder":
        """Select with ``DISTINCT`` prefixed to the first column."""
        selected = _split_columns(columns) or ("*",)
        return self._evolve(select_columns=(f"DISTINCT {selected[0]}",) + selected[1:])

    def set_driver(self, driver: str) -> "QueryBuilder":
        return self._evolve(driver=Dialect.normalize(driver) or DEFAULT_DRIVER)

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def where(self, column: str, value: Any) -> "QueryBuilder":
        """Add ``column = ?``."""
        return self._append(render_comparison(column, "=", value))

    def where_op(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        """Add ``column <operator> ?``; a non-string operator becomes ``=``."""
        return self._append(render_comparison(column, operator, value))

    def or_where(self, column: str, value: Any) -> "QueryBuilder":
        return self._append(render_comparison(column, "=", value, Connective.OR))

    def or_where_op(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        return self._append(render_comparison(column, operator, value, Connective.OR))

    def where_in(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        """Add ``column IN (...)``. An empty ``values`` matches no rows."""
        return self._append(render_in(column, values))

    def where_not_in(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        """Add ``column NOT IN (...)``. An empty ``values`` returns ``self``."""
        entry = render_not_in(column, values)
        if entry is None:
            return self
        return self._append(entry)

    def where_between(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        return self._append(render_between(column, values))

    def where_null(self, column: str) -> "QueryBuilder":
        return self._append(render_null(column))

    def where_not_null(self, column: str) -> "QueryBuilder":
        return self._append(render_null(column, negate=True))

    def like(self, column: str, value: str, side: str = LikeSide.BOTH.value) -> "QueryBuilder":
        """Add ``column LIKE ?`` with ``%`` placed by ``side`` (before, after, both, none)."""
        return self._append(render_like(column, value, side))

    def where_raw(
        self,
        condition: str,
        bindings: Optional[Sequence[Any]] = None,
        operator: str = Connective.AND.value,
    ) -> "QueryBuilder":
        """Add a verbatim condition. ``operator="OR"`` puts it in the OR bucket."""
        return self._append(render_raw(condition, bindings, operator))

    def or_where_raw(self, condition: str, bindings: Optional[Sequence[Any]] = None) -> "QueryBuilder":
        return self._append(render_raw(condition, bindings, Connective.OR.value))

    def having(self, column: str, value: Any) -> "QueryBuilder":
        return self.having_op(column, "=", value)

    def having_op(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        return self._evolve(
            having=self._state.having + (f"{column} {normalize_operator(operator)} {PLACEHOLDER}",),
            having_bindings=self._state.having_bindings + (value,),
        )

    def having_raw(self, condition: str, bindings: Optional[Sequence[Any]] = None) -> "QueryBuilder":
        return self._evolve(
            having=self._state.having + (condition,),
            having_bindings=self._state.having_bindings + tuple(bindings or ()),
        )

    def reset_where(self) -> "QueryBuilder":
        """Drop every WHERE condition and every HAVING condition with its bindings."""
        return self._evolve(ledger=(), having=(), having_bindings=())

    # ------------------------------------------------------------------
    # Groups and subqueries
    # ------------------------------------------------------------------

    def _run_callback(self, callback: Callback) -> "QueryBuilder":
        nested = callback(self.__class__(driver=self._state.driver))
        if not isinstance(nested, QueryBuilder):
            raise invalid_argument_error(
                "Callback must return a QueryBuilder",
                argument="callback",
                value=type(nested).__name__,
            )
        return nested

    def _run_subquery(self, callback: Callback) -> RenderedQuery:
        nested = self._run_callback(callback)
        if not nested.state.table:
            raise invalid_argument_error(
                "Subquery must specify a table using table() method",
                argument="callback",
            )
        return statements.render_select(nested.state)

    def where_group(self, callback: Callback, operator: str = Connective.AND.value) -> "QueryBuilder":
        """Add the callback's WHERE conditions as one parenthesized condition.

        Args:
            callback: Receives a fresh builder on the same driver and returns
                      it with conditions added
            operator: ``"AND"`` or ``"OR"``; how the group joins the parent

        Returns:
            New builder; ``self`` when the callback added no conditions
        """
        nested = self._run_callback(callback)
        nested_sql = compose_where(nested.state.ledger)
        if not nested_sql:
            return self
        return self._append(
            render_raw(f"({nested_sql})", compile_where_bindings(nested.state.ledger), operator)
        )

    def where_nested(self, callback: Callback, operator: str = Connective.AND.value) -> "QueryBuilder":
        return self.where_group(callback, operator)

    def or_where_nested(self, callback: Callback) -> "QueryBuilder":
        return self.where_group(callback, Connective.OR.value)

    def _exists(self, callback: Callback, keyword: str, operator: str) -> "QueryBuilder":
        sql, bindings = self._run_subquery(callback)
        return self._append(render_raw(f"{keyword} ({sql})", bindings, operator))

    def where_exists(self, callback: Callback, operator: str = Connective.AND.value) -> "QueryBuilder":
        """Add ``EXISTS (SELECT ...)``; the callback must set a table.

        Raises:
            InvalidArgumentError: If the subquery has no table
        """
        return self._exists(callback, "EXISTS", operator)

    def where_not_exists(self, callback: Callback, operator: str = Connective.AND.value) -> "QueryBuilder":
        return self._exists(callback, "NOT EXISTS", operator)

    def or_where_exists(self, callback: Callback) -> "QueryBuilder":
        return self._exists(callback, "EXISTS", Connective.OR.value)

    def or_where_not_exists(self, callback: Callback) -> "QueryBuilder":
        return self._exists(callback, "NOT EXISTS", Connective.OR.value)

    def where_sub(self, column: str, operator: str, callback: Callback) -> "QueryBuilder":
        """Add ``column <operator> (SELECT ...)`` from a scalar subquery."""
        sql, bindings = self._run_subquery(callback)
        return self._append(render_raw(f"{column} {normalize_operator(operator)} ({sql})", bindings))

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, table: str, condition: str, type: str = JoinType.INNER.value) -> "QueryBuilder":
        """Add a join.

        Args:
            table: Joined table, optionally aliased
            condition: ON condition, rendered verbatim
            type: INNER, LEFT, RIGHT or CROSS (case-insensitive)

        Raises:
            InvalidArgumentError: For any other join type
        """
        kind = type.strip().upper() if isinstance(type, str) else type
        if kind not in {member.value for member in JoinType}:
            raise invalid_argument_error(
                f"Unsupported join type: {type}",
                argument="type",
                value=type,
            )
        clause = JoinClause(kind=JoinType(kind), table=table, condition=condition)
        return self._evolve(joins=self._state.joins + (clause,))

    def left_join(self, table: str, condition: str) -> "QueryBuilder":
        return self.join(table, condition, JoinType.LEFT.value)

    def right_join(self, table: str, condition: str) -> "QueryBuilder":
        return self.join(table, condition, JoinType.RIGHT.value)

    def inner_join(self, table: str, condition: str) -> "QueryBuilder":
        return self.join(table, condition, JoinType.INNER.value)

    def cross_join(self, table: str) -> "QueryBuilder":
        return self.join(table, "", JoinType.CROSS.value)

    # ------------------------------------------------------------------
    # Grouping, ordering and pagination
    # ------------------------------------------------------------------

    def group_by(self, columns: Columns) -> "QueryBuilder":
        return self._evolve(group_by=self._state.group_by + _split_columns(columns))

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """Append ``column ASC|DESC``; the direction is case-insensitive.

        Raises:
            InvalidArgumentError: For any direction other than ASC or DESC
        """
        normalized = direction.strip().upper() if isinstance(direction, str) else direction
        if normalized not in ("ASC", "DESC"):
            raise invalid_argument_error(
                f"Unsupported order direction: {direction}",
                argument="direction",
                value=direction,
            )
        return self._evolve(order_by=self._state.order_by + (f"{column} {normalized}",))

    def order_by_asc(self, column: str) -> "QueryBuilder":
        return self.order_by(column, "ASC")

    def order_by_desc(self, column: str) -> "QueryBuilder":
        return self.order_by(column, "DESC")

    @staticmethod
    def _check_non_negative(name: str, value: int) -> None:
        if value < 0:
            raise invalid_argument_error(
                f"{name} cannot be negative",
                argument=name,
                value=value,
            )

    def limit(self, limit: int, offset: Optional[int] = None) -> "QueryBuilder":
        """Set the row limit and, when given, the offset.

        Raises:
            InvalidArgumentError: If either value is negative
        """
        self._check_non_negative("limit", limit)
        changes: Dict[str, Any] = {"limit": limit}
        if offset is not None:
            self._check_non_negative("offset", offset)
            changes["offset"] = offset
        return self._evolve(**changes)

    def offset(self, offset: int) -> "QueryBuilder":
        self._check_non_negative("offset", offset)
        return self._evolve(offset=offset)

    def paginate(self, page: int, per_page: int = 15) -> "QueryBuilder":
        """Limit to ``per_page`` rows starting at 1-based ``page``.

        ``paginate(3, 25)`` renders ``LIMIT 25 OFFSET 50`` on standard drivers.
        """
        return self.limit(per_page, (page - 1) * per_page)

    def for_page(self, page: int, per_page: int = 15) -> "QueryBuilder":
        return self.paginate(page, per_page)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _log_rendered(self, statement_type: StatementType, rendered: RenderedQuery) -> RenderedQuery:
        logger.debug(
            "query_builder.statement_rendered",
            extra={
                "statement_type": statement_type.value,
                "driver": self._state.driver,
                "table": self._state.table,
                "bindings_count": len(rendered.bindings),
            },
        )
        return rendered

    def to_sql(self) -> str:
        return self.build_select_query()

    def get_bindings(self) -> List[Any]:
        """Bindings for ``to_sql()``: WHERE values in rendered order, then HAVING values."""
        return compile_bindings(self._state)

    def render(self) -> RenderedQuery:
        """Render the SELECT statement with its bindings.

        Example:
            >>> sql, bindings = QueryBuilder("users").where("id", 1).render()
        """
        return self._log_rendered(StatementType.SELECT, statements.render_select(self._state))

    def build_select_query(self) -> str:
        return statements.build_select(self._state)

    def build_count_query(self, column: str = "*") -> str:
        return statements.build_count(self._state, column)

    def build_aggregate_query(self, function: str, column: str = "*") -> str:
        return statements.build_aggregate(self._state, function, column)

    def build_insert_query(self, data: Row) -> str:
        return statements.build_insert(self._state, data)

    def build_insert_batch_query(self, rows: Sequence[Row]) -> str:
        return statements.build_insert_batch(self._state, rows)

    def build_update_query(self, data: Row) -> str:
        return statements.build_update(self._state, data)

    def build_delete_query(self) -> str:
        return statements.build_delete(self._state)

    def build_upsert_query(
        self,
        data: Union[Row, Sequence[Row]],
        unique_columns: Columns,
        update_columns: Optional[Sequence[str]] = None,
    ) -> str:
        return statements.build_upsert(self._state, data, unique_columns, update_columns)

    def count(self, column: str = "*") -> RenderedQuery:
        rendered = statements.render_aggregate(self._state, "COUNT", column)
        return self._log_rendered(StatementType.COUNT, rendered)

    def aggregate(self, function: str, column: str = "*") -> RenderedQuery:
        rendered = statements.render_aggregate(self._state, function, column)
        return self._log_rendered(StatementType.AGGREGATE, rendered)

    def insert(self, data: Row) -> RenderedQuery:
        return self._log_rendered(StatementType.INSERT, statements.render_insert(self._state, data))

    def insert_batch(self, rows: Sequence[Row]) -> RenderedQuery:
        return self._log_rendered(StatementType.INSERT_BATCH, statements.render_insert_batch(self._state, rows))

    def update(self, data: Row) -> RenderedQuery:
        return self._log_rendered(StatementType.UPDATE, statements.render_update(self._state, data))

    def delete(self) -> RenderedQuery:
        return self._log_rendered(StatementType.DELETE, statements.render_delete(self._state))

    def upsert(
        self,
        data: Union[Row, Sequence[Row]],
        unique_columns: Columns,
        update_columns: Optional[Sequence[str]] = None,
    ) -> RenderedQuery:
        rendered = statements.render_upsert(self._state, data, unique_columns, update_columns)
        return self._log_rendered(StatementType.UPSERT, rendered)

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------

    def to_raw_sql(self) -> str:
        """SELECT with bindings interpolated as literals. For reading only."""
        sql, bindings = statements.render_select(self._state)
        return debug.interpolate_bindings(sql, bindings)

    def pretty_sql(self) -> str:
        return debug.pretty_sql(self.to_sql(), self._state.driver)

    def describe(self) -> Dict[str, Any]:
        return debug.describe(self._state)

    def dump(self, stream: Optional[IO[str]] = None) -> "QueryBuilder":
        """Print the query for inspection and return ``self`` to keep chaining."""
        debug.dump(self._state, stream)
        return self
