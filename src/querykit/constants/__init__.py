"""Constants module for querykit.

This module contains all constant values and enumerations used throughout
querykit. It has no dependencies on other querykit modules.
"""

from querykit.constants.sql import (
    DEFAULT_DRIVER,
    PLACEHOLDER,
    Connective,
    Dialect,
    JoinType,
    LikeSide,
    StatementType,
)

__all__ = [
    "DEFAULT_DRIVER",
    "PLACEHOLDER",
    "Connective",
    "Dialect",
    "JoinType",
    "LikeSide",
    "StatementType",
]
