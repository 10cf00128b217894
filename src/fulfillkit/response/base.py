"""Shared pieces of the response builders: limits, SSML detection, base model."""

from __future__ import annotations

import re
from typing import Any, Self

from pydantic import PrivateAttr

from fulfillkit.diagnostics import BuildOutcome, DiagnosticSink, default_sink
from fulfillkit.models.wire import WireModel


class Limits:
    """Cardinality and length limits imposed by the platform."""

    LIST_ITEM_MAX = 30
    CAROUSEL_ITEM_MAX = 10
    OPTIONS_MIN = 2
    SIMPLE_RESPONSE_MAX = 2
    SUGGESTION_TEXT_MAX = 25
    NO_INPUT_PROMPTS_MAX = 3


_SSML_RE = re.compile(r"<speak\b[^>]*>.*</speak>", re.IGNORECASE | re.DOTALL)
_PADDED_SSML_RE = re.compile(r"\s*<speak\b[^>]*>.*</speak>\s*", re.IGNORECASE | re.DOTALL)


def is_ssml(text: str | None) -> bool:
    """True when ``text`` is exactly one ``<speak>`` wrapper."""
    return bool(text) and _SSML_RE.fullmatch(text) is not None  # type: ignore[arg-type]


def is_padded_ssml(text: str | None) -> bool:
    """True when ``text`` is a ``<speak>`` wrapper with surrounding whitespace."""
    return bool(text) and _PADDED_SSML_RE.fullmatch(text) is not None  # type: ignore[arg-type]


def is_speech_ssml(text: str | None) -> bool:
    """SSML for content purposes: strict or padded."""
    return is_ssml(text) or is_padded_ssml(text)


class ComposerModel(WireModel):
    """Base for fluent response builders.

    Builders fail soft: a mutation that would break an invariant is rejected,
    reported to the injected diagnostic sink, and the receiver is returned
    unchanged so calls can still be chained.
    """

    _diagnostics: DiagnosticSink = PrivateAttr(default_factory=default_sink)

    def __init__(self, /, diagnostics: DiagnosticSink | None = None, **data: Any) -> None:
        super().__init__(**data)
        if diagnostics is not None:
            self._diagnostics = diagnostics

    def with_diagnostics(self, diagnostics: DiagnosticSink) -> Self:
        """Route this builder's diagnostics to ``diagnostics``."""
        self._diagnostics = diagnostics
        return self

    def _apply(self, outcome: BuildOutcome) -> Self:
        self._diagnostics.apply(outcome)
        return self
