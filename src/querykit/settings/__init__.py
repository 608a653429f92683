"""Settings module providing configuration management for querykit.

Built on Pydantic Settings. Values come from environment variables with the
``QUERYKIT_`` prefix (and an optional ``.env`` file); nested groups use a
double underscore.

Quick Start:
    >>> from querykit.settings import get_settings
    >>> settings = get_settings()
    >>> settings.default_driver
    'mysql'

Environment Variables:
    - QUERYKIT_DEFAULT_DRIVER: driver for builders created from settings
    - QUERYKIT_LOG_LEVEL: level used by setup_logging()
    - QUERYKIT_DEBUG__VALUE_MAX_LENGTH: truncation length in raw SQL output
    - QUERYKIT_DEBUG__HIGHLIGHT: ANSI keyword highlighting in dump()
"""

from .main import _Settings, get_settings, _reload_settings
from .base import QueryKitBaseSettings
from .debug import DebugSettings

__all__ = [
    "_Settings",
    "get_settings",
    "_reload_settings",
    "QueryKitBaseSettings",
    "DebugSettings",
]
