"""Shared test fixtures and helpers."""

from __future__ import annotations

import json
from typing import Any

import pytest

from fulfillkit.core.config import FulfillmentConfig
from fulfillkit.core.conversation import Conversation
from fulfillkit.diagnostics import MockDiagnosticSink
from fulfillkit.protocol.casing import normalize_payload
from fulfillkit.protocol.detector import detect_wire_format
from fulfillkit.protocol.state import DialogStateCodec

CURRENT_HEADERS = {"Google-Actions-API-Version": "2"}


@pytest.fixture
def sink() -> MockDiagnosticSink:
    return MockDiagnosticSink()


def state_token(marker: str | None = None, data: dict[str, Any] | None = None) -> str:
    return json.dumps({"state": marker, "data": data or {}})


def make_low_level_request(
    intent: str = "actions.intent.MAIN",
    *,
    query: str = "talk to pizza bot",
    arguments: list[dict[str, Any]] | None = None,
    token: str | None = None,
    conversation_type: str = "ACTIVE",
    user_storage: str | None = None,
    capabilities: list[str] | None = None,
) -> dict[str, Any]:
    """A CURRENT (camelCase) low-level platform request."""
    user: dict[str, Any] = {
        "userId": "user-1",
        "profile": {"displayName": "Ada Lovelace", "givenName": "Ada", "familyName": "Lovelace"},
        "locale": "en-US",
    }
    if user_storage is not None:
        user["userStorage"] = user_storage
    conversation: dict[str, Any] = {"conversationId": "conv-1", "type": conversation_type}
    if token is not None:
        conversation["conversationToken"] = token
    user_input: dict[str, Any] = {
        "intent": intent,
        "rawInputs": [{"inputType": "VOICE", "query": query}],
    }
    if arguments is not None:
        user_input["arguments"] = arguments
    return {
        "user": user,
        "conversation": conversation,
        "inputs": [user_input],
        "surface": {
            "capabilities": [
                {"name": name}
                for name in capabilities or ["actions.capability.AUDIO_OUTPUT"]
            ]
        },
    }


def make_legacy_low_level_request(
    intent: str = "assistant.intent.action.MAIN",
    *,
    query: str = "talk to pizza bot",
    arguments: list[dict[str, Any]] | None = None,
    token: str | None = None,
    conversation_type: str = "ACTIVE",
) -> dict[str, Any]:
    """A LEGACY (snake_case) low-level platform request."""
    conversation: dict[str, Any] = {"conversation_id": "conv-1", "type": conversation_type}
    if token is not None:
        conversation["conversation_token"] = token
    user_input: dict[str, Any] = {
        "intent": intent,
        "raw_inputs": [{"input_type": "VOICE", "query": query}],
    }
    if arguments is not None:
        user_input["arguments"] = arguments
    return {
        "user": {"user_id": "user-1", "profile": {"display_name": "Ada Lovelace"}},
        "conversation": conversation,
        "inputs": [user_input],
    }


def make_middleware_request(
    action: str = "input.welcome",
    *,
    parameters: dict[str, Any] | None = None,
    contexts: list[dict[str, Any]] | None = None,
    resolved_query: str = "hello",
    inputs: list[dict[str, Any]] | None = None,
    conversation_type: str = "ACTIVE",
    legacy: bool = False,
) -> dict[str, Any]:
    """A middleware request wrapping a CURRENT (or, with ``legacy``, LEGACY) platform request."""
    if legacy:
        original = {
            "source": "google",
            "data": {
                "user": {"user_id": "user-1"},
                "conversation": {"conversation_id": "conv-1", "type": conversation_type},
                "inputs": inputs or [{"intent": "assistant.intent.action.TEXT"}],
            },
        }
    else:
        original = {
            "source": "google",
            "version": "2",
            "data": {
                "user": {"userId": "user-1", "locale": "en-US"},
                "conversation": {"conversationId": "conv-1", "type": conversation_type},
                "inputs": inputs or [{"intent": "actions.intent.TEXT"}],
                "surface": {"capabilities": [{"name": "actions.capability.SCREEN_OUTPUT"}]},
            },
        }
    return {
        "id": "req-1",
        "originalRequest": original,
        "result": {
            "source": "agent",
            "resolvedQuery": resolved_query,
            "action": action,
            "parameters": parameters or {},
            "contexts": contexts if contexts is not None else [],
            "metadata": {"intentName": "Default Welcome Intent"},
        },
    }


def make_conversation(
    payload: dict[str, Any],
    headers: dict[str, str] | None = None,
    *,
    diagnostics: MockDiagnosticSink | None = None,
    config: FulfillmentConfig | None = None,
) -> Conversation:
    """Detect, normalize and wrap ``payload`` the way the app does."""
    headers = headers or {}
    config = config or FulfillmentConfig()
    diagnostics = diagnostics or MockDiagnosticSink()
    wire = detect_wire_format(headers, payload)
    return Conversation(
        wire,
        normalize_payload(wire, payload),
        config=config,
        diagnostics=diagnostics,
        codec=DialogStateCodec(config, diagnostics=diagnostics),
    )
