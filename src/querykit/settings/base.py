from pydantic_settings import BaseSettings, SettingsConfigDict


class QueryKitBaseSettings(BaseSettings):
    """Base class for every querykit settings group.

    Values are read from environment variables (and an optional ``.env``
    file) using the ``QUERYKIT_`` prefix. Nested groups use ``__`` as the
    delimiter, e.g. ``QUERYKIT_DEBUG__VALUE_MAX_LENGTH=200``.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUERYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

