"""Debug rendering helpers.

Everything here is for humans reading SQL: interpolated raw SQL, ANSI
keyword highlighting, sqlglot pretty-printing and a stats summary. None of
the output is safe to execute.
"""

import json
import re
import sys
from typing import IO, Any, Dict, Optional, Sequence

import sqlglot
from sqlglot.errors import ParseError, TokenError

from querykit.constants.sql import PLACEHOLDER
from querykit.logging import get_logger
from querykit.query_builder.composer import partition
from querykit.query_builder.dialects import get_dialect
from querykit.query_builder.state import QueryState
from querykit.query_builder.statements import render_select
from querykit.settings import get_settings

logger = get_logger(__name__)

_PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER))

KEYWORDS = (
    "SELECT", "DISTINCT", "FROM", "WHERE", "AND", "OR", "NOT", "IN", "IS",
    "NULL", "LIKE", "BETWEEN", "EXISTS", "AS", "ON", "USING",
    "INNER JOIN", "LEFT JOIN", "RIGHT JOIN", "CROSS JOIN", "JOIN",
    "GROUP BY", "ORDER BY", "HAVING", "ASC", "DESC",
    "LIMIT", "OFFSET", "ROWS", "FETCH NEXT", "ONLY",
    "INSERT INTO", "VALUES", "UPDATE", "SET", "DELETE FROM",
    "ON DUPLICATE KEY UPDATE", "ON CONFLICT", "DO UPDATE SET", "DO NOTHING",
    "MERGE INTO", "WHEN MATCHED THEN", "WHEN NOT MATCHED THEN", "INSERT",
    "COUNT", "SUM", "AVG", "MIN", "MAX",
)

_KEYWORD_RE = re.compile(
    r"\b(?:"
    + "|".join(re.escape(keyword) for keyword in sorted(KEYWORDS, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)

_ANSI_KEYWORD = "\033[1;36m"
_ANSI_RESET = "\033[0m"


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


def format_value_for_display(value: Any, max_length: Optional[int] = None) -> str:
    """Render one binding as a SQL-looking literal.

    Args:
        value: Binding value
        max_length: Longest string/JSON shown before truncation; defaults to
                    ``settings.debug.value_max_length``

    Returns:
        Display literal: quoted string, ``1``/``0``, ``NULL``, compact JSON
        for collections, or ``str(value)``
    """
    if max_length is None:
        max_length = get_settings().debug.value_max_length

    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return f"'{_truncate(value, max_length)}'"
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        if isinstance(value, (set, frozenset)):
            value = list(value)
        encoded = json.dumps(value, separators=(",", ":"), default=str)
        return _truncate(encoded, max_length)
    return str(value)


def interpolate_bindings(sql: str, bindings: Sequence[Any], max_length: Optional[int] = None) -> str:
    """Replace placeholders with display literals in one left-to-right pass.

    Placeholders beyond the number of bindings are left as ``?``. A ``?``
    inside a substituted value is never substituted again.
    """
    remaining = iter(bindings)
    missing = object()

    def _substitute(match: "re.Match[str]") -> str:
        value = next(remaining, missing)
        if value is missing:
            return match.group(0)
        return format_value_for_display(value, max_length)

    return _PLACEHOLDER_RE.sub(_substitute, sql)


def highlight_sql(sql: str) -> str:
    """Wrap SQL keywords in ANSI colour codes for terminal output."""
    return _KEYWORD_RE.sub(lambda match: f"{_ANSI_KEYWORD}{match.group(0)}{_ANSI_RESET}", sql)


def pretty_sql(sql: str, driver: str) -> str:
    """Pretty-print ``sql`` with sqlglot using the driver's dialect.

    Falls back to the input text when sqlglot cannot parse it.
    """
    read_dialect = get_dialect(driver).sqlglot_dialect
    if read_dialect is None:
        read_dialect = get_settings().debug.pretty_dialect_fallback

    try:
        return sqlglot.transpile(sql, read=read_dialect, write=read_dialect, pretty=True)[0]
    except (ParseError, TokenError) as e:
        logger.warning(
            "query_builder.debug.pretty_failed",
            extra={"driver": driver, "error": str(e)},
        )
        return sql


def describe(state: QueryState) -> Dict[str, Any]:
    """Summarize a query state.

    Returns:
        Dictionary with table, driver, counts and pagination
    """
    and_bucket, or_bucket = partition(state.ledger)
    rendered = render_select(state)
    return {
        "table": state.table,
        "driver": state.driver,
        "columns": list(state.select_columns),
        "conditions_count": len(and_bucket) + len(or_bucket),
        "or_conditions_count": len(or_bucket),
        "joins_count": len(state.joins),
        "having_count": len(state.having),
        "bindings_count": len(rendered.bindings),
        "limit": state.limit,
        "offset": state.offset,
    }


def dump(state: QueryState, stream: Optional[IO[str]] = None) -> None:
    """Write the SELECT, its bindings, raw SQL and stats to ``stream``.

    Args:
        state: Query state to render
        stream: Text stream; defaults to ``sys.stdout``
    """
    stream = stream if stream is not None else sys.stdout
    debug_settings = get_settings().debug

    sql, bindings = render_select(state)
    raw_sql = interpolate_bindings(sql, bindings, debug_settings.value_max_length)
    if debug_settings.highlight:
        sql = highlight_sql(sql)
        raw_sql = highlight_sql(raw_sql)

    stream.write(f"SQL: {sql}\n")
    stream.write(f"Bindings: {json.dumps(list(bindings), default=str)}\n")
    stream.write(f"Raw SQL: {raw_sql}\n")
    for key, value in describe(state).items():
        stream.write(f"  {key}: {value}\n")
    stream.flush()
