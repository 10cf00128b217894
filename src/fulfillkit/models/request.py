"""Models describing an inbound turn."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fulfillkit.models.enums import Protocol, SchemaVersion


class WireFormat(BaseModel):
    """Protocol family and schema version of one request."""

    model_config = ConfigDict(frozen=True)

    protocol: Protocol
    schema_version: SchemaVersion

    @property
    def is_current(self) -> bool:
        return self.schema_version is SchemaVersion.CURRENT


class RawInput(BaseModel):
    """What the user actually said, typed or tapped."""

    input_type: str | None = None
    query: str | None = None


class DialogState(BaseModel):
    """Developer state round-tripped through the platform between turns.

    Attributes:
        marker: Handler-visible "current stage" tag, used for state-scoped
            intent routing.
        data: Arbitrary JSON-serializable developer data.
    """

    marker: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class Context(BaseModel):
    """A middleware context entry."""

    name: str
    lifespan: int = 1
    parameters: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "lifespan": self.lifespan}
        if self.parameters:
            payload["parameters"] = self.parameters
        return payload


class TurnResult(BaseModel):
    """Status and body produced for one turn."""

    status: int = 200
    body: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200
