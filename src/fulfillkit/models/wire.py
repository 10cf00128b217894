"""Base model for everything that goes over the wire."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fulfillkit.models.enums import SchemaVersion


class WireModel(BaseModel):
    """Model whose field names are the LEGACY (snake_case) wire keys.

    The camelCase alias of every field is the CURRENT wire key, so a single
    model definition renders both schema versions.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def render(self, version: SchemaVersion) -> dict[str, Any]:
        """Serialize for the given schema version, dropping unset fields."""
        return self.model_dump(
            mode="json",
            by_alias=version is SchemaVersion.CURRENT,
            exclude_none=True,
        )
