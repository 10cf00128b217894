"""Canonical system intent model and its per-version rendering."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import SerializerFunctionWrapHandler, model_serializer

from fulfillkit.models.enums import Protocol, SchemaVersion
from fulfillkit.models.wire import WireModel

TYPE_PROPERTY = "@type"
_TYPE_PREFIX = "type.googleapis.com/google.actions.v2."


def value_type(name: str) -> str:
    return f"{_TYPE_PREFIX}{name}"


class SystemIntentSpec(WireModel):
    """One "ask the platform to collect X" request.

    Subclasses declare the intent name, the ``@type`` tag used by CURRENT
    envelopes, the ``spec`` sub-key used by LEGACY envelopes and the
    placeholder speech that satisfies the first-item-has-speech rule. The
    fields themselves are declared once and rendered per version.
    """

    intent: ClassVar[str]
    type_tag: ClassVar[str]
    legacy_key: ClassVar[str]
    placeholder: ClassVar[str]

    def render_intent(self, protocol: Protocol, version: SchemaVersion) -> dict[str, Any]:
        """Serialize as a MIDDLEWARE ``systemIntent`` or LOW_LEVEL expected intent."""
        return render_system_intent(self, protocol, version)


class DialogSpecExtension(WireModel):
    """A typed ``dialogSpec.extension``; its ``@type`` tag is emitted in both versions."""

    type_tag: ClassVar[str]

    @model_serializer(mode="wrap")
    def _with_type_tag(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {TYPE_PROPERTY: self.type_tag, **handler(self)}


def render_system_intent(
    spec: SystemIntentSpec,
    protocol: Protocol,
    version: SchemaVersion,
) -> dict[str, Any]:
    fields = spec.render(version)
    if version is SchemaVersion.CURRENT:
        key = "data" if protocol is Protocol.MIDDLEWARE else "inputValueData"
        return {"intent": spec.intent, key: {TYPE_PROPERTY: spec.type_tag, **fields}}
    key = "spec" if protocol is Protocol.MIDDLEWARE else "input_value_spec"
    return {"intent": spec.intent, key: {spec.legacy_key: fields}}
