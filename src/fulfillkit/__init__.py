"""fulfillkit - Webhook fulfillment adapter for conversational agents."""

from fulfillkit._version import __version__
from fulfillkit.core.app import FulfillmentApp, IntentHandler, IntentRegistration
from fulfillkit.core.config import FulfillmentConfig
from fulfillkit.core.conversation import Conversation
from fulfillkit.core.errors import (
    FulfillKitError,
    HandlerError,
    ProtocolError,
    ValidationError,
)
from fulfillkit.diagnostics import (
    BuildOutcome,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSink,
    LoggingDiagnosticSink,
    MockDiagnosticSink,
    NoopDiagnosticSink,
)
from fulfillkit.intents import TransactionConfig
from fulfillkit.models.enums import (
    BuiltInArg,
    ConversationType,
    DeliveryAddressDecision,
    ImageDisplay,
    InputType,
    MediaImageType,
    MediaType,
    PaymentTokenizationType,
    Permission,
    Protocol,
    SchemaVersion,
    SignInStatus,
    StandardIntent,
    SurfaceCapability,
    TimeContextFrequency,
    UrlTypeHint,
)
from fulfillkit.models.request import Context, DialogState, RawInput, TurnResult, WireFormat
from fulfillkit.protocol import DialogStateCodec, detect_wire_format, to_camel_case
from fulfillkit.response import (
    BasicCard,
    BrowseCarousel,
    BrowseItem,
    Carousel,
    List,
    MediaObject,
    MediaResponse,
    OptionItem,
    OrderUpdate,
    RichResponse,
    SimpleResponse,
)
from fulfillkit.transport import (
    MockWebhookTransport,
    WebhookRequest,
    WebhookResponse,
    WebhookTransport,
)

__all__ = [
    "__version__",
    # Core
    "Conversation",
    "FulfillmentApp",
    "FulfillmentConfig",
    "IntentHandler",
    "IntentRegistration",
    # Errors
    "FulfillKitError",
    "HandlerError",
    "ProtocolError",
    "ValidationError",
    # Diagnostics
    "BuildOutcome",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "MockDiagnosticSink",
    "NoopDiagnosticSink",
    # Models
    "Context",
    "DialogState",
    "RawInput",
    "TurnResult",
    "WireFormat",
    # Enums
    "BuiltInArg",
    "ConversationType",
    "DeliveryAddressDecision",
    "ImageDisplay",
    "InputType",
    "MediaImageType",
    "MediaType",
    "PaymentTokenizationType",
    "Permission",
    "Protocol",
    "SchemaVersion",
    "SignInStatus",
    "StandardIntent",
    "SurfaceCapability",
    "TimeContextFrequency",
    "UrlTypeHint",
    # Protocol
    "DialogStateCodec",
    "detect_wire_format",
    "to_camel_case",
    # Responses
    "BasicCard",
    "BrowseCarousel",
    "BrowseItem",
    "Carousel",
    "List",
    "MediaObject",
    "MediaResponse",
    "OptionItem",
    "OrderUpdate",
    "RichResponse",
    "SimpleResponse",
    "TransactionConfig",
    # Transport
    "MockWebhookTransport",
    "WebhookRequest",
    "WebhookResponse",
    "WebhookTransport",
]
