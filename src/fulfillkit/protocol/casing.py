"""Key-case normalization for LEGACY platform payloads."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from fulfillkit.models.enums import Protocol, SchemaVersion
from fulfillkit.models.request import WireFormat

_SNAKE_KEY_RE = re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)+$")


def camelize_key(key: str) -> str:
    """Return the camelCase form of a snake_case key; other keys unchanged.

    Each word after the first gets an upper-case first character, so a word
    starting with a digit keeps the rest lower case: ``user_storage_v2x``
    becomes ``userStorageV2x`` and ``a_1b`` becomes ``a1b``.
    """
    if not _SNAKE_KEY_RE.match(key):
        return key
    head, *words = key.split("_")
    return head + "".join(word[:1].upper() + word[1:] for word in words)


def to_camel_case(obj: Any) -> Any:
    """Recursively rewrite mapping keys from snake_case to camelCase.

    Sequences are walked element by element. Values, and keys that are not
    snake_case (``@type``, ``conversationId``, ``name``), are left as they
    are, so applying this to camelCase input is a no-op.
    """
    if isinstance(obj, Mapping):
        return {
            camelize_key(k) if isinstance(k, str) else k: to_camel_case(v) for k, v in obj.items()
        }
    if isinstance(obj, list | tuple):
        return [to_camel_case(item) for item in obj]
    return obj


def normalize_payload(wire: WireFormat, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``payload`` with its platform request in camelCase.

    CURRENT payloads are returned as a shallow copy. For LEGACY, LOW_LEVEL
    rewrites the whole body and MIDDLEWARE rewrites ``originalRequest`` only,
    leaving developer-owned ``result.parameters`` and contexts untouched.
    """
    body = dict(payload)
    if wire.schema_version is SchemaVersion.CURRENT:
        return body
    if wire.protocol is Protocol.LOW_LEVEL:
        return to_camel_case(body)
    if "originalRequest" in body:
        body["originalRequest"] = to_camel_case(body["originalRequest"])
    return body
