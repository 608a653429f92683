"""Unit tests for dialect-specific upsert statements."""

import pytest

from querykit.common.exceptions import ErrorCode, InvalidArgumentError
from querykit.query_builder import QueryBuilder

ROW = {"id": 1, "email": "ann@example.com", "name": "Ann"}


class TestMySQLUpsert:
    """Test INSERT ... ON DUPLICATE KEY UPDATE."""

    def test_default_update_columns(self):
        """Test every non-unique column is updated from the new row alias."""
        sql, bindings = QueryBuilder("users", driver="mysql").upsert(ROW, "id")

        assert sql == (
            "INSERT INTO users (id, email, name) VALUES (?, ?, ?) AS new "
            "ON DUPLICATE KEY UPDATE email = new.email, name = new.name"
        )
        assert bindings == [1, "ann@example.com", "Ann"]

    def test_no_update_columns_omits_tail(self):
        """Test an empty update list leaves a plain INSERT."""
        sql = QueryBuilder("users", driver="mysql").build_upsert_query(ROW, ["id"], [])

        assert sql == "INSERT INTO users (id, email, name) VALUES (?, ?, ?)"

    def test_multi_row(self):
        """Test several rows share one statement."""
        rows = [ROW, {"id": 2, "email": "bob@example.com", "name": "Bob"}]
        sql, bindings = QueryBuilder("users").upsert(rows, ["id"], ["name"])

        assert sql == (
            "INSERT INTO users (id, email, name) VALUES (?, ?, ?), (?, ?, ?) AS new "
            "ON DUPLICATE KEY UPDATE name = new.name"
        )
        assert bindings == [1, "ann@example.com", "Ann", 2, "bob@example.com", "Bob"]


class TestPostgresAndSQLiteUpsert:
    """Test INSERT ... ON CONFLICT."""

    def test_postgres_do_update(self):
        """Test EXCLUDED references in upper case."""
        sql = QueryBuilder("users", driver="pgsql").build_upsert_query(ROW, ["id"])

        assert sql == (
            "INSERT INTO users (id, email, name) VALUES (?, ?, ?) "
            "ON CONFLICT (id) DO UPDATE SET email = EXCLUDED.email, name = EXCLUDED.name"
        )

    def test_postgres_do_nothing(self):
        """Test DO NOTHING when every column is unique."""
        sql = QueryBuilder("tags", driver="pgsql").build_upsert_query({"name": "x"}, "name")

        assert sql == "INSERT INTO tags (name) VALUES (?) ON CONFLICT (name) DO NOTHING"

    def test_single_update_column_as_string(self):
        """Test a string update column names one column, not its characters."""
        sql, bindings = QueryBuilder("users", driver="pgsql").upsert({"id": 1, "name": "a"}, "id", "name")

        assert sql == (
            "INSERT INTO users (id, name) VALUES (?, ?) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name"
        )
        assert bindings == [1, "a"]

    def test_sqlite_uses_lowercase_excluded(self):
        """Test SQLite writes the pseudo-table in lower case."""
        sql = QueryBuilder("users", driver="sqlite").build_upsert_query(ROW, ["id", "email"])

        assert sql == (
            "INSERT INTO users (id, email, name) VALUES (?, ?, ?) "
            "ON CONFLICT (id, email) DO UPDATE SET name = excluded.name"
        )


class TestSqlServerUpsert:
    """Test MERGE statements."""

    def test_merge(self):
        """Test MERGE with both branches."""
        sql, bindings = QueryBuilder("users", driver="sqlsrv").upsert(ROW, ["id"])

        assert sql == (
            "MERGE INTO users AS target USING (VALUES (?, ?, ?)) AS source (id, email, name) "
            "ON target.id = source.id "
            "WHEN MATCHED THEN UPDATE SET target.email = source.email, target.name = source.name "
            "WHEN NOT MATCHED THEN INSERT (id, email, name) VALUES (source.id, source.email, source.name);"
        )
        assert bindings == [1, "ann@example.com", "Ann"]

    def test_merge_without_matched_branch(self):
        """Test the MATCHED branch is omitted with nothing to update."""
        sql = QueryBuilder("pairs", driver="mssql").build_upsert_query({"a": 1, "b": 2}, ["a", "b"])

        assert sql == (
            "MERGE INTO pairs AS target USING (VALUES (?, ?)) AS source (a, b) "
            "ON target.a = source.a AND target.b = source.b "
            "WHEN NOT MATCHED THEN INSERT (a, b) VALUES (source.a, source.b);"
        )


class TestUpsertErrors:
    """Test upsert validation order."""

    def test_empty_data_raises_first(self):
        """Test empty data is reported before missing unique columns."""
        with pytest.raises(InvalidArgumentError, match="Data cannot be empty for upsert"):
            QueryBuilder("users").upsert({}, [])

    def test_empty_unique_columns_raises(self):
        """Test unique columns are required."""
        with pytest.raises(InvalidArgumentError, match="Unique columns must be specified for upsert"):
            QueryBuilder("users").upsert(ROW, [])

    def test_unsupported_driver_raises(self):
        """Test an unknown driver cannot build upserts."""
        with pytest.raises(InvalidArgumentError, match="Unsupported driver for upsert: oracle") as exc_info:
            QueryBuilder("users", driver="oracle").upsert(ROW, ["id"])

        assert exc_info.value.error_code == ErrorCode.DIALECT_NOT_SUPPORTED
        assert exc_info.value.details == {"driver": "oracle", "operation": "upsert"}

    def test_mismatched_rows_raise(self):
        """Test batch upsert rows must share keys."""
        with pytest.raises(InvalidArgumentError, match="Invalid data format for upsert"):
            QueryBuilder("users").upsert([{"id": 1}, {"id": 2, "name": "x"}], ["id"])
