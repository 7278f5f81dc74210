"""
Base schema for wire payloads.
Attributes are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose JSON field names are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
