"""Classify an inbound payload into one of the four wire formats."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fulfillkit.core.errors import ProtocolError
from fulfillkit.models.enums import Protocol, SchemaVersion
from fulfillkit.models.request import WireFormat

ACTIONS_API_VERSION_HEADER = "Google-Actions-API-Version"
ASSISTANT_API_VERSION_HEADER = "Google-Assistant-API-Version"

_CURRENT_MIN_VERSION = 2


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _is_current(version: Any) -> bool:
    try:
        return int(version) >= _CURRENT_MIN_VERSION
    except (TypeError, ValueError):
        return False


def detect_protocol(payload: Mapping[str, Any]) -> Protocol:
    """Structural protocol detection.

    Raises:
        ProtocolError: If the payload is not an object, or has neither a
            ``result`` field nor a ``conversation``/``inputs`` field.
    """
    if not isinstance(payload, Mapping):
        raise ProtocolError("Unrecognized request payload: body is not a JSON object")
    if isinstance(payload.get("result"), Mapping):
        return Protocol.MIDDLEWARE
    if "conversation" in payload or "inputs" in payload:
        return Protocol.LOW_LEVEL
    raise ProtocolError("Unrecognized request payload: no result, conversation or inputs field")


def detect_schema_version(headers: Mapping[str, str], payload: Mapping[str, Any]) -> SchemaVersion:
    """Header first, then the embedded platform request's version marker."""
    if _is_current(get_header(headers, ACTIONS_API_VERSION_HEADER)):
        return SchemaVersion.CURRENT
    original = payload.get("originalRequest") if isinstance(payload, Mapping) else None
    if isinstance(original, Mapping) and _is_current(original.get("version")):
        return SchemaVersion.CURRENT
    return SchemaVersion.LEGACY


def detect_wire_format(headers: Mapping[str, str], payload: Mapping[str, Any]) -> WireFormat:
    """Return the ``{protocol, schema_version}`` of a request. Pure, no I/O."""
    return WireFormat(
        protocol=detect_protocol(payload),
        schema_version=detect_schema_version(headers, payload),
    )
