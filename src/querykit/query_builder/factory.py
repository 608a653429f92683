"""Query Builder Factory.

This module provides a factory for creating query builders configured for
the right driver, either detected from a live connection object or taken
from environment settings.

Detection never talks to the database: it reads the SQLAlchemy dialect name
of an ``Engine``/``Connection``, or the module a DB-API connection class was
defined in.
"""

from typing import Any, Dict, Optional

from sqlalchemy.engine import Connection, Engine

from querykit.common.exceptions import ErrorCode, InvalidArgumentError
from querykit.constants.sql import Dialect
from querykit.logging import get_logger
from querykit.query_builder.builder import QueryBuilder

logger = get_logger(__name__)

# SQLAlchemy ``dialect.name`` -> driver
SQLALCHEMY_DIALECTS: Dict[str, str] = {
    "mysql": Dialect.MYSQL.value,
    "mariadb": Dialect.MYSQL.value,
    "postgresql": Dialect.PGSQL.value,
    "sqlite": Dialect.SQLITE.value,
    "mssql": Dialect.SQLSRV.value,
}

# Top-level DB-API module -> driver
DBAPI_MODULES: Dict[str, str] = {
    "sqlite3": Dialect.SQLITE.value,
    "psycopg": Dialect.PGSQL.value,
    "psycopg2": Dialect.PGSQL.value,
    "pymysql": Dialect.MYSQL.value,
    "MySQLdb": Dialect.MYSQL.value,
    "mysql": Dialect.MYSQL.value,
    "pyodbc": Dialect.SQLSRV.value,
    "pymssql": Dialect.SQLSRV.value,
}


def _dbapi_module(connection: Any) -> str:
    # mysql.connector classes live in "mysql.connector.connection"; _sqlite3
    # is the C module behind sqlite3.
    module = type(connection).__module__ or ""
    root = module.split(".", 1)[0].lstrip("_")
    return root


class QueryBuilderFactory:
    """Factory for creating driver-aware query builders.

    Example:
        >>> import sqlite3
        >>> builder = QueryBuilderFactory.create(sqlite3.connect(":memory:"), "users")
        >>> builder.driver
        'sqlite'
        >>> QueryBuilderFactory.create_with_driver("SQLSRV").driver
        'sqlsrv'
    """

    @staticmethod
    def detect_driver(connection: Any) -> str:
        """Detect the driver name for a connection object.

        Args:
            connection: SQLAlchemy Engine/Connection or a DB-API connection

        Returns:
            Driver name (mysql, pgsql, sqlite or sqlsrv)

        Raises:
            InvalidArgumentError: If the connection type is not recognized
        """
        if isinstance(connection, (Engine, Connection)):
            dialect_name = connection.dialect.name
            driver = SQLALCHEMY_DIALECTS.get(dialect_name)
            source = f"sqlalchemy:{dialect_name}"
        else:
            module = _dbapi_module(connection)
            driver = DBAPI_MODULES.get(module)
            source = f"dbapi:{module}"

        if driver is None:
            raise InvalidArgumentError(
                f"Cannot detect database driver from connection of type {type(connection).__name__}",
                error_code=ErrorCode.DRIVER_NOT_DETECTED,
                details={"source": source},
            )

        logger.debug(
            "query_builder.factory.driver_detected",
            extra={"driver": driver, "source": source},
        )
        return driver

    @staticmethod
    def create(connection: Any, table: Optional[str] = None) -> QueryBuilder:
        """Create a builder for the database behind ``connection``.

        Args:
            connection: SQLAlchemy Engine/Connection or a DB-API connection
            table: Optional initial table

        Returns:
            QueryBuilder on the detected driver
        """
        driver = QueryBuilderFactory.detect_driver(connection)
        return QueryBuilder(table or "", driver=driver)

    @staticmethod
    def create_with_driver(driver: str, table: Optional[str] = None) -> QueryBuilder:
        return QueryBuilder(table or "", driver=driver)

    @staticmethod
    def create_from_settings(table: Optional[str] = None) -> QueryBuilder:
        """Create a builder on ``settings.default_driver``.

        The driver comes from ``QUERYKIT_DEFAULT_DRIVER`` (default mysql).
        """
        from querykit.settings import get_settings

        settings = get_settings()
        return QueryBuilder(table or "", driver=settings.default_driver)


def get_query_builder(table: Optional[str] = None) -> QueryBuilder:
    """Get a query builder configured from environment settings.

    Example:
        >>> from querykit.query_builder.factory import get_query_builder
        >>> sql, bindings = get_query_builder("users").where("id", 7).render()
    """
    return QueryBuilderFactory.create_from_settings(table)
