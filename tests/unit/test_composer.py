"""Unit tests for AND/OR composition and binding order."""

from querykit.constants.sql import Connective
from querykit.query_builder import QueryBuilder
from querykit.query_builder.composer import compile_where_bindings, compose_where, partition
from querykit.query_builder.state import LedgerEntry


def _entry(fragment, *bindings, connective=Connective.AND):
    return LedgerEntry(connective=connective, fragment=fragment, bindings=bindings)


class TestComposeWhere:
    """Test compose_where() on raw ledgers."""

    def test_empty_ledger(self):
        """Test an empty ledger renders nothing."""
        assert compose_where(()) == ""

    def test_and_only(self):
        """Test AND entries are joined without parentheses."""
        ledger = (_entry("a = ?", 1), _entry("b = ?", 2))

        assert compose_where(ledger) == "a = ? AND b = ?"

    def test_single_and_with_or_stays_bare(self):
        """Test a single simple AND entry is not parenthesized."""
        ledger = (_entry("a = ?", 1), _entry("b = ?", 2, connective=Connective.OR))

        assert compose_where(ledger) == "a = ? OR b = ?"

    def test_multiple_and_with_or_is_parenthesized(self):
        """Test the AND part is grouped when it has several entries."""
        ledger = (
            _entry("a = ?", 1),
            _entry("b = ?", 2),
            _entry("c = ?", 3, connective=Connective.OR),
            _entry("d = ?", 4, connective=Connective.OR),
        )

        assert compose_where(ledger) == "(a = ? AND b = ?) OR c = ? OR d = ?"

    def test_single_and_containing_conjunction_is_parenthesized(self):
        """Test a lone AND entry whose text holds ' AND ' is grouped."""
        ledger = (
            _entry("x BETWEEN ? AND ?", 1, 9),
            _entry("y = ?", 2, connective=Connective.OR),
        )

        assert compose_where(ledger) == "(x BETWEEN ? AND ?) OR y = ?"

    def test_or_only(self):
        """Test OR entries alone are joined with OR."""
        ledger = (
            _entry("a = ?", 1, connective=Connective.OR),
            _entry("b = ?", 2, connective=Connective.OR),
        )

        assert compose_where(ledger) == "a = ? OR b = ?"

    def test_partition_skips_blank_entries(self):
        """Test blank fragments land in neither bucket."""
        and_bucket, or_bucket = partition((_entry(""), _entry(" ", connective=Connective.OR), _entry("a = ?", 1)))

        assert [entry.fragment for entry in and_bucket] == ["a = ?"]
        assert or_bucket == []


class TestBindingOrder:
    """Test bindings line up with rendered placeholders."""

    def test_and_after_or_binds_in_rendered_order(self):
        """Test an AND added after an OR still binds before it."""
        query = QueryBuilder("users").where("a", 1).or_where("b", 2).where("c", 3)

        assert query.to_sql() == "SELECT * FROM users WHERE (a = ? AND c = ?) OR b = ?"
        assert query.get_bindings() == [1, 3, 2]

    def test_compile_where_bindings_uses_bucket_order(self):
        """Test AND bucket bindings precede OR bucket bindings."""
        ledger = (
            _entry("a = ?", "x", connective=Connective.OR),
            _entry("b IN (?, ?)", "y", "z"),
        )

        assert compile_where_bindings(ledger) == ["y", "z", "x"]

    def test_placeholder_count_matches_bindings(self):
        """Test a mixed query has one binding per placeholder."""
        query = (
            QueryBuilder("users")
            .where("status", "active")
            .or_where_op("score", ">", 90)
            .where_in("role", ["admin", "user"])
            .where_between("age", [18, 30])
            .like("name", "jo", "after")
            .group_by("role")
            .having_op("COUNT(*)", ">", 2)
        )
        sql, bindings = query.render()

        assert sql.count("?") == len(bindings)
        assert bindings == ["active", "admin", "user", 18, 30, "jo%", 90, 2]


class TestOrCombinations:
    """Test end-to-end AND/OR rendering."""

    def test_two_ands_then_or(self):
        """Test where(a).where(b).or_where(c) renders (a AND b) OR c."""
        query = QueryBuilder("t").where("a", 1).where("b", 2).or_where("c", 3)

        assert query.to_sql() == "SELECT * FROM t WHERE (a = ? AND b = ?) OR c = ?"
        assert query.get_bindings() == [1, 2, 3]

    def test_one_and_then_or(self):
        """Test where(a).or_where(b) renders a OR b."""
        query = QueryBuilder("t").where("a", 1).or_where("b", 2)

        assert query.to_sql() == "SELECT * FROM t WHERE a = ? OR b = ?"
