"""Dialog state round-tripping through the platform's state carrier."""

from __future__ import annotations

import hashlib
import hmac
import json
from collections.abc import Mapping, Sequence
from typing import Any

from fulfillkit.core.config import FulfillmentConfig
from fulfillkit.diagnostics import DiagnosticSink, default_sink
from fulfillkit.models.enums import Protocol
from fulfillkit.models.request import Context, DialogState

_COMPONENT = "protocol.state"


class DialogStateCodec:
    """Encodes :class:`DialogState` into a carrier and back.

    LOW_LEVEL carries the whole state as the ``conversationToken`` string
    ``{"state": marker, "data": {...}}``. MIDDLEWARE carries it in a reserved
    context whose parameters are ``{"data": {...}, "state": marker}``.
    Decoding never raises: anything unreadable yields an empty state.
    """

    def __init__(
        self,
        config: FulfillmentConfig | None = None,
        *,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self._config = config or FulfillmentConfig()
        self._diagnostics = diagnostics or default_sink()

    @property
    def context_name(self) -> str:
        return self._config.state_context_name

    # -- LOW_LEVEL ---------------------------------------------------------

    def encode_token(self, state: DialogState) -> str:
        body = json.dumps({"state": state.marker, "data": state.data})
        secret = self._config.state_secret
        if secret is None:
            return body
        return f"{self._sign(secret.get_secret_value(), body)}.{body}"

    def decode_token(self, token: str | None) -> DialogState:
        if not token:
            return DialogState()
        body = token
        secret = self._config.state_secret
        if secret is not None:
            signature, sep, body = token.partition(".")
            expected = self._sign(secret.get_secret_value(), body)
            if not sep or not hmac.compare_digest(signature, expected):
                self._diagnostics.protocol(_COMPONENT, "Rejected conversation token with bad signature")
                return DialogState()
        try:
            parsed = json.loads(body)
        except ValueError:
            self._diagnostics.protocol(_COMPONENT, "Unable to parse conversation token")
            return DialogState()
        if not isinstance(parsed, Mapping):
            self._diagnostics.protocol(_COMPONENT, "Conversation token is not an object")
            return DialogState()
        return self._from_parts(parsed.get("state"), parsed.get("data"))

    @staticmethod
    def _sign(secret: str, body: str) -> str:
        return hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()

    # -- MIDDLEWARE --------------------------------------------------------

    def encode_context(self, state: DialogState) -> Context:
        return Context(
            name=self.context_name,
            lifespan=self._config.state_context_lifespan,
            parameters={"data": state.data, "state": state.marker},
        )

    def decode_contexts(self, contexts: Sequence[Mapping[str, Any]] | None) -> DialogState:
        for context in contexts or []:
            if not isinstance(context, Mapping) or context.get("name") != self.context_name:
                continue
            parameters = context.get("parameters")
            if not isinstance(parameters, Mapping):
                self._diagnostics.protocol(_COMPONENT, "Dialog state context has no parameters object")
                return DialogState()
            return self._from_parts(parameters.get("state"), parameters.get("data"))
        return DialogState()

    # -- dispatch ----------------------------------------------------------

    def encode(self, protocol: Protocol, state: DialogState) -> str | Context:
        if protocol is Protocol.LOW_LEVEL:
            return self.encode_token(state)
        return self.encode_context(state)

    def decode(self, protocol: Protocol, carrier: Any) -> DialogState:
        """Decode ``carrier``: a token string (LOW_LEVEL) or a context list (MIDDLEWARE)."""
        if protocol is Protocol.LOW_LEVEL:
            return self.decode_token(carrier if isinstance(carrier, str) else None)
        if isinstance(carrier, Context):
            carrier = [carrier.model_dump()]
        if isinstance(carrier, str) or not isinstance(carrier, Sequence):
            return self.decode_contexts(None)
        return self.decode_contexts(carrier)

    def _from_parts(self, marker: Any, data: Any) -> DialogState:
        if marker is not None and not isinstance(marker, str):
            self._diagnostics.protocol(_COMPONENT, "Ignoring non-string dialog state marker")
            marker = None
        if not isinstance(data, Mapping):
            data = {}
        return DialogState(marker=marker, data=dict(data))
