"""Fulfillment configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_validator

STATE_CONTEXT_NAME = "_actions_on_google_"
STATE_CONTEXT_LIFESPAN = 100


class FulfillmentConfig(BaseModel):
    """Configuration for a :class:`~fulfillkit.core.app.FulfillmentApp`.

    Attributes:
        state_context_name: Reserved middleware context that carries the
            dialog state.
        state_context_lifespan: Lifespan, in turns, of that context. Large so
            it outlives ordinary developer contexts.
        state_secret: When set, low-level conversation tokens are signed with
            HMAC-SHA256 and tokens with a bad signature decode to empty state.
            Unset keeps the platform's plain-token contract.
        log_payloads: Trace inbound and outbound payloads at DEBUG level.
        error_message: Message used in error bodies when a failure carries
            no message of its own.
    """

    state_context_name: str = STATE_CONTEXT_NAME
    state_context_lifespan: int = Field(default=STATE_CONTEXT_LIFESPAN, ge=1)
    state_secret: SecretStr | None = None
    log_payloads: bool = False
    error_message: str = "Sorry, I am unable to process your request."

    @field_validator("state_context_name")
    @classmethod
    def validate_context_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("state_context_name must not be blank")
        return v
