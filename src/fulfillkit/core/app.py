"""FulfillmentApp: intent routing and the per-turn pipeline."""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fulfillkit.core.config import FulfillmentConfig
from fulfillkit.core.conversation import Conversation
from fulfillkit.core.emitter import error_body
from fulfillkit.core.errors import HandlerError, ProtocolError
from fulfillkit.diagnostics import DiagnosticSink, default_sink
from fulfillkit.models.request import TurnResult
from fulfillkit.protocol.casing import normalize_payload
from fulfillkit.protocol.detector import (
    ASSISTANT_API_VERSION_HEADER,
    detect_wire_format,
    get_header,
)
from fulfillkit.protocol.state import DialogStateCodec
from fulfillkit.transport.base import WebhookTransport
from fulfillkit.transport.models import JSON_CONTENT_TYPE, WebhookRequest, WebhookResponse

_COMPONENT = "core.app"

IntentHandler = Callable[[Conversation], Any]


@dataclass(frozen=True)
class IntentRegistration:
    """A handler bound to an intent, optionally only in one dialog state."""

    intent: str
    fn: IntentHandler
    state: str | None = None
    name: str = ""


class FulfillmentApp:
    """Routes each turn to the handler registered for its intent.

    Example::

        app = FulfillmentApp()

        @app.intent("actions.intent.MAIN")
        def welcome(conv: Conversation) -> None:
            conv.set_state("ordering")
            conv.ask("What would you like?")

        @app.intent("order.pizza", state="ordering")
        async def order(conv: Conversation) -> None:
            conv.tell("On its way!")

        response = await app.handle(WebhookRequest(headers=headers, body=body))

    Handlers registered with a ``state`` win over plain registrations when
    the decoded dialog state marker matches.
    """

    def __init__(
        self,
        config: FulfillmentConfig | None = None,
        *,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self._config = config or FulfillmentConfig()
        self._diagnostics = diagnostics or default_sink()
        self._intents: dict[tuple[str | None, str], IntentRegistration] = {}
        self._fallback: IntentHandler | None = None
        self._session_started: IntentHandler | None = None

    @property
    def config(self) -> FulfillmentConfig:
        return self._config

    # -- registration ------------------------------------------------------

    def add_intent(self, intent: str, fn: IntentHandler, *, state: str | None = None) -> None:
        """Register ``fn`` for ``intent``, replacing any handler for the same pair."""
        self._intents[(state, intent)] = IntentRegistration(
            intent=intent, fn=fn, state=state, name=getattr(fn, "__name__", "")
        )

    def intent(self, intent: str, *, state: str | None = None) -> Callable[..., Any]:
        """Decorator to register an intent handler.

        Args:
            intent: Intent name (LOW_LEVEL) or action name (MIDDLEWARE).
            state: Only route here when the dialog state marker equals this.
        """

        def decorator(fn: IntentHandler) -> IntentHandler:
            self.add_intent(intent, fn, state=state)
            return fn

        return decorator

    def fallback(self, fn: IntentHandler) -> IntentHandler:
        """Decorator for the handler of intents nothing else matches."""
        self._fallback = fn
        return fn

    def on_session_started(self, fn: IntentHandler) -> IntentHandler:
        """Decorator for a callback run first on the first turn of a conversation.

        When the callback responds, the intent handler is skipped.
        """
        self._session_started = fn
        return fn

    def resolve(self, intent: str | None, marker: str | None) -> IntentHandler | None:
        if intent is not None:
            registration = self._intents.get((marker, intent)) if marker else None
            registration = registration or self._intents.get((None, intent))
            if registration is not None:
                return registration.fn
        return self._fallback

    # -- pipeline ----------------------------------------------------------

    async def serve(self, transport: WebhookTransport) -> WebhookResponse:
        """Run one turn through ``transport``."""
        request = await transport.receive()
        response = await self.handle(request)
        await transport.respond(response)
        return response

    async def handle(self, request: WebhookRequest) -> WebhookResponse:
        result = await self.handle_turn(request.headers, request.body)
        return WebhookResponse(
            status=result.status,
            headers=self._response_headers(request.headers),
            body=result.body,
        )

    async def handle_turn(
        self,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> TurnResult:
        """Detect, normalize, route and emit one turn."""
        if self._config.log_payloads:
            self._diagnostics.trace(_COMPONENT, f"Request {json.dumps(payload)}")
        try:
            wire = detect_wire_format(headers, payload)
        except ProtocolError as exc:
            self._diagnostics.protocol(_COMPONENT, str(exc))
            return TurnResult(status=400, body=error_body(str(exc)))

        conv = Conversation(
            wire,
            normalize_payload(wire, payload),
            config=self._config,
            diagnostics=self._diagnostics,
            codec=DialogStateCodec(self._config, diagnostics=self._diagnostics),
        )
        result = await self._run(conv)
        if self._config.log_payloads:
            self._diagnostics.trace(_COMPONENT, f"Response {result.status} {json.dumps(result.body)}")
        return result

    async def _run(self, conv: Conversation) -> TurnResult:
        intent = conv.intent
        handler = self.resolve(intent, conv.state.marker)
        if handler is None:
            message = f"No handler for intent {intent}"
            self._diagnostics.protocol(_COMPONENT, message, intent=intent)
            return TurnResult(status=400, body=error_body(message))

        try:
            if self._session_started is not None and conv.is_new_conversation:
                await _settle(self._session_started(conv))
            if not conv.responded:
                await _settle(handler(conv))
        except Exception as exc:
            error = HandlerError(intent, exc)
            self._diagnostics.handler(
                _COMPONENT, f"Handler for {intent} failed: {error}", intent=intent
            )
            return TurnResult(status=500, body=error_body(str(error) or self._config.error_message))

        if conv.result is None:
            message = f"No response was produced for intent {intent}"
            self._diagnostics.handler(_COMPONENT, message, intent=intent)
            return TurnResult(status=500, body=error_body(message))
        return conv.result

    def _response_headers(self, request_headers: Mapping[str, str]) -> dict[str, str]:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        api_version = get_header(request_headers, ASSISTANT_API_VERSION_HEADER)
        if api_version is not None:
            headers[ASSISTANT_API_VERSION_HEADER] = api_version
        return headers


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result
