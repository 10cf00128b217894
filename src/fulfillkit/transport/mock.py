"""Mock webhook transport for testing."""

from __future__ import annotations

from typing import Any

from fulfillkit.transport.base import WebhookTransport
from fulfillkit.transport.models import WebhookRequest, WebhookResponse


class MockWebhookTransport(WebhookTransport):
    """Serves a fixed request and records every response.

    Example::

        transport = MockWebhookTransport(body=payload)
        await app.serve(transport)
        assert transport.last_response.status == 200
    """

    def __init__(
        self,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.request = WebhookRequest(headers=headers or {}, body=body or {})
        self.responses: list[WebhookResponse] = []

    async def receive(self) -> WebhookRequest:
        return self.request

    async def respond(self, response: WebhookResponse) -> None:
        self.responses.append(response)

    @property
    def last_response(self) -> WebhookResponse | None:
        return self.responses[-1] if self.responses else None
