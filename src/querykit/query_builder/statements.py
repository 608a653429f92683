"""Statement assemblers.

Pure functions that turn a ``QueryState`` (and, for writes, a data payload)
into SQL text. Each ``build_*`` returns only the SQL string; each
``render_*`` returns a ``RenderedQuery`` whose bindings match the
placeholders left to right.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from querykit.common.exceptions import invalid_argument_error
from querykit.constants.sql import JoinType
from querykit.query_builder.composer import compile_bindings, compile_where_bindings, compose_where
from querykit.query_builder.dialects import get_dialect, resolve_update_columns
from querykit.query_builder.predicates import placeholders
from querykit.query_builder.state import QueryState, RenderedQuery

Row = Mapping[str, Any]


def build_joins(state: QueryState) -> str:
    parts = []
    for join in state.joins:
        if join.kind == JoinType.CROSS:
            parts.append(f" CROSS JOIN {join.table}")
        else:
            parts.append(f" {join.kind} JOIN {join.table} ON {join.condition}")
    return "".join(parts)


def build_where(state: QueryState) -> str:
    where_sql = compose_where(state.ledger)
    return f" WHERE {where_sql}" if where_sql else ""


def _build_filters(state: QueryState) -> str:
    """Joins, WHERE, GROUP BY and HAVING; the part shared by SELECT and COUNT."""
    sql = build_joins(state)
    sql += build_where(state)

    if state.group_by:
        sql += " GROUP BY " + ", ".join(state.group_by)

    if state.having:
        sql += " HAVING " + " AND ".join(state.having)

    return sql


def build_select(state: QueryState) -> str:
    """Build the SELECT statement.

    ORDER BY is rendered before pagination; SQL Server's OFFSET/FETCH
    depends on it.
    """
    sql = "SELECT " + ", ".join(state.select_columns)
    sql += " FROM " + state.table
    sql += _build_filters(state)

    if state.order_by:
        sql += " ORDER BY " + ", ".join(state.order_by)

    return get_dialect(state.driver).apply_pagination(sql, state)


def build_aggregate(state: QueryState, function: str, column: str = "*") -> str:
    """``SELECT FN(column) FROM ...`` without select list, ORDER BY or pagination."""
    return f"SELECT {function.strip().upper()}({column}) FROM {state.table}" + _build_filters(state)


def build_count(state: QueryState, column: str = "*") -> str:
    return build_aggregate(state, "COUNT", column)


def build_insert(state: QueryState, data: Row) -> str:
    if not data:
        raise invalid_argument_error("Data cannot be empty for insert", argument="data")
    columns = ", ".join(data.keys())
    return f"INSERT INTO {state.table} ({columns}) VALUES ({placeholders(len(data))})"


def normalize_rows(rows: Any, operation: str) -> List[Dict[str, Any]]:
    """Validate a batch of records and return them as dicts.

    The first record's keys define column order; every record must have
    exactly the same keys.

    Raises:
        InvalidArgumentError: If the batch is empty, a record is not a
            mapping, or the records do not share one shape
    """
    if isinstance(rows, Mapping) or isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise invalid_argument_error(
            f"Invalid data format for {operation}: expected a sequence of records",
            argument="data",
            value=type(rows).__name__,
        )
    if len(rows) == 0:
        raise invalid_argument_error(f"Data cannot be empty for {operation}", argument="data")

    first = rows[0]
    if not isinstance(first, Mapping) or not first:
        raise invalid_argument_error(
            f"Invalid data format for {operation}: records must be non-empty mappings",
            argument="data",
        )

    columns = list(first.keys())
    expected = set(columns)
    normalized: List[Dict[str, Any]] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise invalid_argument_error(
                f"Invalid data format for {operation}: record {index} is not a mapping",
                argument="data",
                value=type(row).__name__,
            )
        if set(row.keys()) != expected:
            raise invalid_argument_error(
                f"Invalid data format for {operation}: record {index} does not match the columns of record 0",
                argument="data",
                value=", ".join(str(key) for key in row.keys()),
            )
        normalized.append({column: row[column] for column in columns})
    return normalized


def build_insert_batch(state: QueryState, rows: Sequence[Row]) -> str:
    records = normalize_rows(rows, "batch insert")
    columns = list(records[0])
    values = get_dialect(state.driver).values_list(len(columns), len(records))
    return f"INSERT INTO {state.table} ({', '.join(columns)}) VALUES {values}"


def build_update(state: QueryState, data: Row) -> str:
    if not data:
        raise invalid_argument_error("Data cannot be empty for update", argument="data")
    assignments = ", ".join(f"{column} = ?" for column in data.keys())
    return f"UPDATE {state.table} SET {assignments}" + build_where(state)


def build_delete(state: QueryState) -> str:
    return f"DELETE FROM {state.table}" + build_where(state)


def _upsert_rows(data: Union[Row, Sequence[Row]]) -> List[Dict[str, Any]]:
    if not data:
        raise invalid_argument_error("Data cannot be empty for upsert", argument="data")
    if isinstance(data, Mapping):
        data = [data]
    return normalize_rows(data, "upsert")


def _unique_list(unique_columns: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(unique_columns, str):
        unique_columns = [unique_columns] if unique_columns.strip() else []
    unique = list(unique_columns)
    if not unique:
        raise invalid_argument_error(
            "Unique columns must be specified for upsert",
            argument="unique_columns",
        )
    return unique


def build_upsert(
    state: QueryState,
    data: Union[Row, Sequence[Row]],
    unique_columns: Union[str, Sequence[str]],
    update_columns: Optional[Sequence[str]] = None,
) -> str:
    """Build an insert-or-update statement for the state's driver.

    Args:
        state: Query state (table and driver are used)
        data: One record or a sequence of uniform records
        unique_columns: Column or columns that identify a conflict
        update_columns: Columns to overwrite on conflict; defaults to every
                        data column that is not unique

    Raises:
        InvalidArgumentError: For empty data, empty unique columns, malformed
            records, or a driver without upsert support
    """
    records = _upsert_rows(data)
    unique = _unique_list(unique_columns)
    columns = list(records[0])
    return get_dialect(state.driver).build_upsert(
        state.table,
        columns,
        len(records),
        unique,
        resolve_update_columns(columns, unique, update_columns),
    )


def render_select(state: QueryState) -> RenderedQuery:
    return RenderedQuery(build_select(state), compile_bindings(state))


def render_aggregate(state: QueryState, function: str, column: str = "*") -> RenderedQuery:
    return RenderedQuery(build_aggregate(state, function, column), compile_bindings(state))


def render_insert(state: QueryState, data: Row) -> RenderedQuery:
    return RenderedQuery(build_insert(state, data), list(data.values()))


def render_insert_batch(state: QueryState, rows: Sequence[Row]) -> RenderedQuery:
    records = normalize_rows(rows, "batch insert")
    bindings = [value for record in records for value in record.values()]
    return RenderedQuery(build_insert_batch(state, records), bindings)


def render_update(state: QueryState, data: Row) -> RenderedQuery:
    sql = build_update(state, data)
    return RenderedQuery(sql, list(data.values()) + compile_where_bindings(state.ledger))


def render_delete(state: QueryState) -> RenderedQuery:
    return RenderedQuery(build_delete(state), compile_where_bindings(state.ledger))


def render_upsert(
    state: QueryState,
    data: Union[Row, Sequence[Row]],
    unique_columns: Union[str, Sequence[str]],
    update_columns: Optional[Sequence[str]] = None,
) -> RenderedQuery:
    sql = build_upsert(state, data, unique_columns, update_columns)
    records = _upsert_rows(data)
    bindings = [value for record in records for value in record.values()]
    return RenderedQuery(sql, bindings)
