"""Unit tests for copy-on-write builder semantics."""

import pytest
from pydantic import ValidationError

from querykit.query_builder import QueryBuilder, QueryState


class TestImmutability:
    """Test that fluent calls never modify their receiver."""

    def test_where_returns_new_builder(self):
        """Test the original builder keeps its SQL."""
        base = QueryBuilder("users")
        filtered = base.where("id", 1)

        assert filtered is not base
        assert base.to_sql() == "SELECT * FROM users"
        assert base.get_bindings() == []

    def test_branches_are_independent(self):
        """Test two branches from one base do not see each other."""
        base = QueryBuilder("users").where("active", 1)
        admins = base.where("role", "admin")
        guests = base.where("role", "guest").limit(5)

        assert admins.to_sql() == "SELECT * FROM users WHERE active = ? AND role = ?"
        assert admins.get_bindings() == [1, "admin"]
        assert guests.to_sql() == "SELECT * FROM users WHERE active = ? AND role = ? LIMIT 5"
        assert guests.get_bindings() == [1, "guest"]
        assert base.get_bindings() == [1]

    @pytest.mark.parametrize(
        "step",
        [
            lambda q: q.table("accounts"),
            lambda q: q.select("id"),
            lambda q: q.add_select("email"),
            lambda q: q.set_driver("pgsql"),
            lambda q: q.join("roles", "roles.id = users.role_id"),
            lambda q: q.group_by("role_id"),
            lambda q: q.having_op("COUNT(*)", ">", 1),
            lambda q: q.order_by("id"),
            lambda q: q.limit(1),
            lambda q: q.offset(1),
            lambda q: q.where_nested(lambda n: n.where("a", 1)),
            lambda q: q.reset_where(),
        ],
    )
    def test_every_step_leaves_receiver_unchanged(self, step):
        """Test each fluent method produces a new state."""
        base = QueryBuilder("users").where("id", 1)
        before = base.state

        result = step(base)

        assert base.state == before
        assert result.state is not before

    def test_state_is_frozen(self):
        """Test QueryState rejects attribute assignment."""
        state = QueryState(table="users")

        with pytest.raises(ValidationError):
            state.table = "other"

    def test_dump_returns_same_builder(self, capsys):
        """Test dump() does not change the builder."""
        base = QueryBuilder("users").where("id", 1)

        assert base.dump() is base
        assert "users" in capsys.readouterr().out

    def test_state_to_dict(self):
        """Test the state serializes to plain JSON-compatible data."""
        state = QueryBuilder("users").where("id", 1).or_where("name", "Ann").state

        data = state.to_dict()

        assert data["table"] == "users"
        assert data["select_columns"] == ["*"]
        assert data["ledger"] == [
            {"connective": "AND", "fragment": "id = ?", "bindings": [1]},
            {"connective": "OR", "fragment": "name = ?", "bindings": ["Ann"]},
        ]
        assert "limit" not in data
