"""Dialect Factory.

Maps a driver name to the strategy that renders its pagination and upserts.
Unknown drivers get ``GenericDialect``: standard pagination, no upsert.
"""

from typing import Dict, Type

from querykit.constants.sql import Dialect
from querykit.logging import get_logger
from querykit.query_builder.dialects.base import BaseDialect, GenericDialect
from querykit.query_builder.dialects.mysql import MySQLDialect
from querykit.query_builder.dialects.postgres import PostgresDialect
from querykit.query_builder.dialects.sqlite import SQLiteDialect
from querykit.query_builder.dialects.sqlserver import SQLServerDialect

logger = get_logger(__name__)


class DialectFactory:
    """Factory for creating dialect strategies from driver names.

    Example:
        >>> DialectFactory.create("SQLSRV")
        SQLServerDialect(driver='sqlsrv')
        >>> DialectFactory.create("oracle")
        GenericDialect(driver='oracle')
    """

    _registry: Dict[str, Type[BaseDialect]] = {
        Dialect.MYSQL.value: MySQLDialect,
        Dialect.PGSQL.value: PostgresDialect,
        Dialect.SQLITE.value: SQLiteDialect,
        Dialect.SQLSRV.value: SQLServerDialect,
        Dialect.MSSQL.value: SQLServerDialect,
    }

    @classmethod
    def create(cls, driver: str) -> BaseDialect:
        """Create the dialect strategy for ``driver`` (case-insensitive).

        Args:
            driver: Driver name

        Returns:
            Dialect strategy; GenericDialect when the driver is unknown
        """
        normalized = Dialect.normalize(driver)
        dialect_cls = cls._registry.get(normalized)
        if dialect_cls is None:
            logger.debug(
                "query_builder.dialect.unknown_driver",
                extra={"driver": normalized},
            )
            return GenericDialect(normalized)
        return dialect_cls(normalized)

    @classmethod
    def supported_drivers(cls) -> list:
        return sorted(cls._registry)


def get_dialect(driver: str) -> BaseDialect:
    """Get the dialect strategy for ``driver``."""
    return DialectFactory.create(driver)
