from querykit.__version__ import __version__

from querykit.query_builder import (
    QueryBuilder,
    QueryBuilderFactory,
    QueryState,
    RenderedQuery,
    get_query_builder,
)

from querykit.constants import Dialect, JoinType

from querykit.common.exceptions import (
    ErrorCode,
    InvalidArgumentError,
    QueryKitError,
)

from querykit.settings import get_settings
from querykit.logging import get_logger, setup_logging


__all__ = [
    "__version__",

    "QueryBuilder",
    "QueryBuilderFactory",
    "QueryState",
    "RenderedQuery",
    "get_query_builder",

    "Dialect",
    "JoinType",

    # Exceptions (public API)
    "QueryKitError",
    "InvalidArgumentError",
    "ErrorCode",

    "get_settings",
    "get_logger",
    "setup_logging",
]
