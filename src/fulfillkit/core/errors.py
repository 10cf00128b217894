"""Exception hierarchy."""

from __future__ import annotations


class FulfillKitError(Exception):
    """Base exception for all fulfillkit errors."""


class ValidationError(FulfillKitError):
    """A builder or ask call received a structurally invalid argument."""


class ProtocolError(FulfillKitError):
    """The inbound payload lacks a field the protocol requires."""


class HandlerError(FulfillKitError):
    """A developer turn handler raised."""

    def __init__(self, intent: str | None, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.intent = intent
        self.cause = cause
