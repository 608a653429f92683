from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import QueryKitBaseSettings


class DebugSettings(QueryKitBaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUERYKIT_DEBUG_",
        case_sensitive=False,
        extra="ignore",
    )

    value_max_length: int = Field(
        default=100,
        ge=4,
        le=10_000,
        description="Maximum displayed length of a string or JSON binding in raw SQL output. "
                    "Longer values are cut and suffixed with '...'."
    )
    highlight: bool = Field(
        default=True,
        description="Colour SQL keywords with ANSI escapes in dump() output."
    )
    pretty_dialect_fallback: Optional[str] = Field(
        default=None,
        description="sqlglot dialect used by pretty_sql() for drivers querykit does not know. "
                    "None uses sqlglot's generic dialect."
    )
