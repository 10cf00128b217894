"""Simple (spoken) responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import is_speech_ssml

_COMPONENT = "response.simple"


class SimpleResponse(WireModel):
    """Speech in either ``text_to_speech`` or ``ssml``, plus optional display text."""

    text_to_speech: str | None = None
    ssml: str | None = None
    display_text: str | None = None

    @property
    def speech(self) -> str | None:
        return self.ssml if self.ssml is not None else self.text_to_speech

    @property
    def is_ssml(self) -> bool:
        return self.ssml is not None

    @classmethod
    def from_speech(cls, speech: str, display_text: str | None = None) -> SimpleResponse:
        """Put ``speech`` in ``ssml`` or ``text_to_speech`` verbatim, by its shape."""
        if is_speech_ssml(speech):
            return cls(ssml=speech, display_text=display_text)
        return cls(text_to_speech=speech, display_text=display_text)


def build_simple_response(value: Any) -> tuple[SimpleResponse | None, BuildOutcome]:
    """Coerce a string, ``{speech, displayText}`` mapping or model.

    A falsy speech value is rejected.
    """
    if isinstance(value, SimpleResponse):
        if not value.speech:
            return None, BuildOutcome.rejected(_COMPONENT, "SimpleResponse speech cannot be empty")
        return value, BuildOutcome.ok()
    if isinstance(value, str):
        if not value:
            return None, BuildOutcome.rejected(_COMPONENT, "Invalid simple response")
        return SimpleResponse.from_speech(value), BuildOutcome.ok()
    if isinstance(value, Mapping):
        speech = value.get("speech")
        if not speech or not isinstance(speech, str):
            return None, BuildOutcome.rejected(_COMPONENT, "SimpleResponse requires a speech field")
        display_text = value.get("displayText", value.get("display_text"))
        return SimpleResponse.from_speech(speech, display_text or None), BuildOutcome.ok()
    return None, BuildOutcome.rejected(_COMPONENT, "Invalid simple response")
