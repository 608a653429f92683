"""Clause composer and binding compilation.

Turns the condition ledger into one WHERE expression. AND binds tighter than
OR, so the AND bucket is rendered first and every OR entry becomes its own
alternative:

    where(a).where(b).or_where(c)   ->  (a AND b) OR c
    where(a).or_where(b)            ->  a OR b

Anything deeper than this two-level split is built with a nested group,
which arrives here as a single pre-parenthesized raw entry.

Bindings are compiled from the same bucket order the text is rendered in,
so the i-th placeholder always lines up with the i-th binding.
"""

from typing import Any, List, Sequence, Tuple

from querykit.constants.sql import Connective
from querykit.query_builder.state import LedgerEntry, QueryState


def partition(ledger: Sequence[LedgerEntry]) -> Tuple[List[LedgerEntry], List[LedgerEntry]]:
    """Split non-blank entries into (AND bucket, OR bucket), order preserved."""
    and_bucket: List[LedgerEntry] = []
    or_bucket: List[LedgerEntry] = []
    for entry in ledger:
        if entry.is_blank:
            continue
        if entry.connective == Connective.OR:
            or_bucket.append(entry)
        else:
            and_bucket.append(entry)
    return and_bucket, or_bucket


def compose_where(ledger: Sequence[LedgerEntry]) -> str:
    """Render the ledger as a WHERE expression (without the keyword).

    Returns:
        The expression, or an empty string for an empty ledger.
    """
    and_bucket, or_bucket = partition(ledger)

    combined_and = " AND ".join(entry.fragment for entry in and_bucket)
    if not or_bucket:
        return combined_and

    parts: List[str] = []
    if and_bucket:
        # Textual check: a raw or grouped fragment may already hold a conjunction.
        if len(and_bucket) > 1 or " AND " in combined_and:
            parts.append(f"({combined_and})")
        else:
            parts.append(combined_and)

    parts.extend(entry.fragment for entry in or_bucket)
    return " OR ".join(parts)


def compile_where_bindings(ledger: Sequence[LedgerEntry]) -> List[Any]:
    and_bucket, or_bucket = partition(ledger)
    bindings: List[Any] = []
    for entry in and_bucket + or_bucket:
        bindings.extend(entry.bindings)
    return bindings


def compile_bindings(state: QueryState) -> List[Any]:
    """All bindings for a SELECT/COUNT: WHERE values first, HAVING values last."""
    return compile_where_bindings(state.ledger) + list(state.having_bindings)
