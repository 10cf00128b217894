"""Transport-neutral request and response models."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

JSON_CONTENT_TYPE = "application/json"


class WebhookRequest(BaseModel):
    """One inbound webhook call: headers plus the decoded JSON body."""

    headers: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: str | bytes, headers: dict[str, str] | None = None) -> WebhookRequest:
        """Parse a raw JSON body.

        Raises:
            ValueError: If ``raw`` is not a JSON object.
        """
        body = json.loads(raw)
        if not isinstance(body, dict):
            raise ValueError("Webhook body must be a JSON object")
        return cls(headers=headers or {}, body=body)


class WebhookResponse(BaseModel):
    """Status, headers and JSON body to send back for one turn."""

    status: int = 200
    headers: dict[str, str] = Field(default_factory=lambda: {"Content-Type": JSON_CONTENT_TYPE})
    body: dict[str, Any] = Field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(self.body)
