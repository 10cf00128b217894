"""Transport interface between an HTTP framework and the fulfillment app."""

from fulfillkit.transport.base import WebhookTransport
from fulfillkit.transport.mock import MockWebhookTransport
from fulfillkit.transport.models import JSON_CONTENT_TYPE, WebhookRequest, WebhookResponse

__all__ = [
    "JSON_CONTENT_TYPE",
    "MockWebhookTransport",
    "WebhookRequest",
    "WebhookResponse",
    "WebhookTransport",
]
