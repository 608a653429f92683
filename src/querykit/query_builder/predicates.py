"""Predicate renderers.

Pure functions that turn a column and its values into a ledger entry. They
never touch builder state; ``QueryBuilder`` appends what they return.
"""

from typing import Any, Optional, Sequence, Tuple

from querykit.common.exceptions import invalid_argument_error
from querykit.constants.sql import PLACEHOLDER, Connective, LikeSide
from querykit.query_builder.state import LedgerEntry

ALWAYS_FALSE = "0=1"


def placeholders(count: int) -> str:
    """``count`` placeholders joined with ``", "``."""
    return ", ".join([PLACEHOLDER] * count)


def _value_list(column: str, values: Sequence[Any], operation: str) -> Tuple[Any, ...]:
    """Values as a tuple; a bare string is rejected rather than split into characters."""
    if isinstance(values, (str, bytes)):
        raise invalid_argument_error(
            f"{operation} expects a sequence of values, not a string",
            argument="values",
            value=column,
        )
    return tuple(values)


def normalize_operator(operator: Any) -> str:
    """Comparison operator, or ``=`` when the caller passed a non-string."""
    if not isinstance(operator, str) or not operator.strip():
        return "="
    return operator.strip()


def render_comparison(
    column: str,
    operator: Any,
    value: Any,
    connective: Connective = Connective.AND,
) -> LedgerEntry:
    return LedgerEntry(
        connective=connective,
        fragment=f"{column} {normalize_operator(operator)} {PLACEHOLDER}",
        bindings=(value,),
    )


def render_in(column: str, values: Sequence[Any]) -> LedgerEntry:
    """``column IN (?, ...)``; an empty sequence matches nothing."""
    values = _value_list(column, values, "where_in")
    if not values:
        return LedgerEntry(fragment=ALWAYS_FALSE)
    return LedgerEntry(
        fragment=f"{column} IN ({placeholders(len(values))})",
        bindings=values,
    )


def render_not_in(column: str, values: Sequence[Any]) -> Optional[LedgerEntry]:
    """``column NOT IN (?, ...)``, or None when there is nothing to exclude."""
    values = _value_list(column, values, "where_not_in")
    if not values:
        return None
    return LedgerEntry(
        fragment=f"{column} NOT IN ({placeholders(len(values))})",
        bindings=values,
    )


def render_between(column: str, values: Sequence[Any]) -> LedgerEntry:
    values = _value_list(column, values, "where_between")
    if len(values) != 2:
        raise invalid_argument_error(
            "where_between requires exactly 2 values",
            argument="values",
            value=len(values),
        )
    return LedgerEntry(
        fragment=f"{column} BETWEEN {PLACEHOLDER} AND {PLACEHOLDER}",
        bindings=values,
    )


def render_null(column: str, negate: bool = False) -> LedgerEntry:
    keyword = "IS NOT NULL" if negate else "IS NULL"
    return LedgerEntry(fragment=f"{column} {keyword}")


def wrap_like_value(value: str, side: str) -> str:
    """Place ``%`` wildcards around ``value`` according to ``side``."""
    side = side.value if isinstance(side, LikeSide) else side
    if side == LikeSide.BEFORE.value:
        return f"%{value}"
    if side == LikeSide.AFTER.value:
        return f"{value}%"
    if side == LikeSide.BOTH.value:
        return f"%{value}%"
    return value


def render_like(column: str, value: str, side: str = LikeSide.BOTH.value) -> LedgerEntry:
    return LedgerEntry(
        fragment=f"{column} LIKE {PLACEHOLDER}",
        bindings=(wrap_like_value(value, side),),
    )


def render_raw(
    condition: str,
    bindings: Optional[Sequence[Any]] = None,
    operator: str = Connective.AND.value,
) -> LedgerEntry:
    return LedgerEntry(
        connective=Connective.from_operator(operator),
        fragment=condition,
        bindings=tuple(bindings or ()),
    )
