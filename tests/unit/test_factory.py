"""Unit tests for QueryBuilderFactory and the dialect factory."""

import sqlite3
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine

from querykit.common.exceptions import ErrorCode, InvalidArgumentError
from querykit.query_builder import (
    DialectFactory,
    GenericDialect,
    MySQLDialect,
    PostgresDialect,
    QueryBuilder,
    QueryBuilderFactory,
    SQLiteDialect,
    SQLServerDialect,
    get_query_builder,
)
from querykit.settings import _reload_settings


def _dbapi_connection(module_name):
    """Build a fake DB-API connection whose class lives in ``module_name``."""
    connection_cls = type("Connection", (), {"__module__": module_name})
    return connection_cls()


class TestQueryBuilderFactory:
    """Test driver detection from connections."""

    def test_sqlalchemy_sqlite_engine(self):
        """Test an Engine is detected from its dialect name."""
        engine = create_engine("sqlite://")
        try:
            builder = QueryBuilderFactory.create(engine, "users")
        finally:
            engine.dispose()

        assert isinstance(builder, QueryBuilder)
        assert builder.driver == "sqlite"
        assert builder.to_sql() == "SELECT * FROM users"

    def test_sqlalchemy_connection(self):
        """Test a Connection is detected like its Engine."""
        engine = create_engine("sqlite://")
        try:
            with engine.connect() as connection:
                assert QueryBuilderFactory.detect_driver(connection) == "sqlite"
        finally:
            engine.dispose()

    def test_sqlite3_connection(self):
        """Test a stdlib sqlite3 connection."""
        connection = sqlite3.connect(":memory:")
        try:
            assert QueryBuilderFactory.create(connection).driver == "sqlite"
        finally:
            connection.close()

    @pytest.mark.parametrize(
        "module_name,expected",
        [
            ("psycopg2.extensions", "pgsql"),
            ("psycopg", "pgsql"),
            ("pymysql.connections", "mysql"),
            ("MySQLdb.connections", "mysql"),
            ("mysql.connector.connection_cext", "mysql"),
            ("pyodbc", "sqlsrv"),
            ("pymssql._pymssql", "sqlsrv"),
        ],
    )
    def test_dbapi_modules(self, module_name, expected):
        """Test DB-API connections are detected from their module."""
        assert QueryBuilderFactory.detect_driver(_dbapi_connection(module_name)) == expected

    def test_unknown_connection_raises(self):
        """Test an unrecognized connection is rejected."""
        with pytest.raises(InvalidArgumentError, match="Cannot detect database driver") as exc_info:
            QueryBuilderFactory.create(Mock())

        assert exc_info.value.error_code == ErrorCode.DRIVER_NOT_DETECTED

    def test_create_with_driver(self):
        """Test an explicit driver is normalized."""
        builder = QueryBuilderFactory.create_with_driver("PGSQL", "users")

        assert builder.driver == "pgsql"
        assert builder.state.table == "users"

    def test_create_from_settings_default(self):
        """Test the default driver is mysql."""
        assert QueryBuilderFactory.create_from_settings().driver == "mysql"

    def test_create_from_settings_env(self, monkeypatch):
        """Test QUERYKIT_DEFAULT_DRIVER selects the driver."""
        monkeypatch.setenv("QUERYKIT_DEFAULT_DRIVER", "SQLSRV")
        _reload_settings()

        builder = get_query_builder("users").limit(3)

        assert builder.driver == "sqlsrv"
        assert builder.to_sql() == "SELECT * FROM users ORDER BY (SELECT NULL) OFFSET 0 ROWS FETCH NEXT 3 ROWS ONLY"


class TestDialectFactory:
    """Test driver name to dialect strategy mapping."""

    @pytest.mark.parametrize(
        "driver,dialect_cls",
        [
            ("mysql", MySQLDialect),
            ("pgsql", PostgresDialect),
            ("sqlite", SQLiteDialect),
            ("sqlsrv", SQLServerDialect),
            ("MSSQL", SQLServerDialect),
        ],
    )
    def test_known_drivers(self, driver, dialect_cls):
        """Test each supported driver maps to its strategy."""
        dialect = DialectFactory.create(driver)

        assert isinstance(dialect, dialect_cls)
        assert dialect.driver == driver.lower()

    def test_unknown_driver_is_generic(self):
        """Test unknown drivers fall back to the generic strategy."""
        dialect = DialectFactory.create("oracle")

        assert isinstance(dialect, GenericDialect)
        assert repr(dialect) == "GenericDialect(driver='oracle')"

    def test_supported_drivers(self):
        """Test the registry lists every driver name."""
        assert DialectFactory.supported_drivers() == ["mssql", "mysql", "pgsql", "sqlite", "sqlsrv"]
