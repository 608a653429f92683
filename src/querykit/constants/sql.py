"""SQL and query-related constants.

This module contains the fundamental enums and constants shared by every
layer of querykit: dialect names, join kinds, logical connectives and the
statement kinds the assemblers produce.

These constants sit at the bottom of the dependency graph and import nothing
from the rest of the package, so any module can use them without creating
circular imports.
"""

from enum import Enum

PLACEHOLDER = "?"
"""Positional placeholder token used by every dialect."""

DEFAULT_DRIVER = "mysql"


class Dialect(str, Enum):
    """Database driver families understood by the builders.

    Values:
        MYSQL: MySQL / MariaDB (``LIMIT``/``OFFSET``, ``ON DUPLICATE KEY UPDATE``)
        PGSQL: PostgreSQL (``LIMIT``/``OFFSET``, ``ON CONFLICT``)
        SQLITE: SQLite (``LIMIT``/``OFFSET``, ``ON CONFLICT`` with ``excluded``)
        SQLSRV: SQL Server (``OFFSET ... FETCH NEXT``, ``MERGE``)
        MSSQL: Alias of SQLSRV used by some drivers
    """

    MYSQL = "mysql"
    PGSQL = "pgsql"
    SQLITE = "sqlite"
    SQLSRV = "sqlsrv"
    MSSQL = "mssql"

    @classmethod
    def normalize(cls, driver: str) -> str:
        """Lower-case and strip a driver name."""
        return driver.strip().lower()


class JoinType(str, Enum):
    """Join kinds rendered by the SELECT assembler."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    CROSS = "CROSS"


class Connective(str, Enum):
    """Logical connective that decides which bucket a predicate joins."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def from_operator(cls, operator: str) -> "Connective":
        """Map a caller-supplied operator string to a connective.

        Only a case-insensitive ``"OR"`` selects OR; anything else is AND.
        """
        if isinstance(operator, str) and operator.strip().upper() == cls.OR.value:
            return cls.OR
        return cls.AND


class LikeSide(str, Enum):
    """Where ``like()`` places the ``%`` wildcard."""

    BEFORE = "before"
    AFTER = "after"
    BOTH = "both"
    NONE = "none"


class StatementType(str, Enum):
    """Statement kinds produced by the assemblers.

    Used to tag render log events.
    """

    SELECT = "SELECT"
    COUNT = "COUNT"
    AGGREGATE = "AGGREGATE"
    INSERT = "INSERT"
    INSERT_BATCH = "INSERT_BATCH"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    UPSERT = "UPSERT"
