"""Abstract base class for webhook transports."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillkit.transport.models import WebhookRequest, WebhookResponse


class WebhookTransport(ABC):
    """Binds one HTTP framework call to :meth:`FulfillmentApp.serve`.

    Implementations read the framework's request in :meth:`receive` and
    write the framework's response in :meth:`respond`. The app never looks
    at the framework objects itself.
    """

    @property
    def name(self) -> str:
        """Transport name used in diagnostics."""
        return self.__class__.__name__

    @abstractmethod
    async def receive(self) -> WebhookRequest:
        """Return the inbound request of this turn."""
        ...

    @abstractmethod
    async def respond(self, response: WebhookResponse) -> None:
        """Send the turn's response back to the caller."""
        ...
