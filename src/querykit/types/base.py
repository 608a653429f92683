"""Base model shared by the query state models."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class QueryKitBaseModel(BaseModel):
    """Base model for querykit value objects.

    Enums are stored as their values, so a state built with
    ``Connective.OR`` compares equal to one built with ``"OR"``.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to JSON-compatible primitives.

        Tuples become lists and ``None`` fields are omitted. Bindings that
        are not JSON-native are passed through unchanged.
        """
        return self.model_dump(mode="json", exclude_none=True, fallback=_passthrough)


def _passthrough(value: Any) -> Any:
    return value
