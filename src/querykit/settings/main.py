import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from querykit.constants import DEFAULT_DRIVER
from .base import QueryKitBaseSettings
from .debug import DebugSettings


class _Settings(QueryKitBaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="QUERYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    default_driver: str = Field(
        default=DEFAULT_DRIVER,
        description="Driver used by builders created from settings (mysql, pgsql, sqlite, sqlsrv, mssql)"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level applied by setup_logging() when called without arguments"
    )
    debug: DebugSettings = Field(
        default_factory=DebugSettings,
        description="Debug output configuration"
    )

    @field_validator("default_driver")
    @classmethod
    def validate_default_driver(cls, v: str) -> str:
        """Normalize the driver name and reject blanks."""
        normalized = v.strip().lower()
        if not normalized:
            raise ValueError("default_driver cannot be empty")
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are read from the environment on first access and cached.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2
        ```
    """
    global _settings
    if _settings is None or force_reload:
        _settings = _Settings()
        logging.getLogger(__name__).debug(
            "settings.loaded",
            extra={"default_driver": _settings.default_driver},
        )
    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh _Settings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
