"""Rebuild responses authored in the middleware console from ``fulfillment.messages``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fulfillkit.diagnostics import DiagnosticSink, default_sink
from fulfillkit.response.card import BasicCard
from fulfillkit.response.option import Carousel, List
from fulfillkit.response.rich import LinkOutSuggestion, RichItem, RichResponse, Suggestion
from fulfillkit.response.simple import SimpleResponse

_COMPONENT = "response.incoming"

SIMPLE_RESPONSE = "simple_response"
BASIC_CARD = "basic_card"
LIST_CARD = "list_card"
CAROUSEL_CARD = "carousel_card"
SUGGESTION_CHIPS = "suggestion_chips"
LINK_OUT_CHIP = "link_out_chip"

_ENVELOPE_KEYS = frozenset({"type", "platform"})


def _fields(message: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in message.items() if key not in _ENVELOPE_KEYS}


def _typed(messages: Iterable[Any]) -> Iterable[tuple[str, Mapping[str, Any]]]:
    """``(type, message)`` for messages carrying a string ``type``."""
    for message in messages:
        if isinstance(message, Mapping) and isinstance(message.get("type"), str):
            yield message["type"], message


def _validate(
    model: type[BaseModel],
    message: Mapping[str, Any],
    diagnostics: DiagnosticSink,
) -> Any:
    try:
        return model.model_validate(_fields(message))
    except PydanticValidationError as exc:
        diagnostics.protocol(
            _COMPONENT, f"Skipping malformed {message.get('type')} message: {exc.error_count()} errors"
        )
        return None


def rich_response_from_messages(
    messages: Iterable[Any],
    diagnostics: DiagnosticSink | None = None,
) -> RichResponse:
    """Simple responses, basic cards and chips, in message order.

    Messages of other types (and the untyped default text response) are
    skipped. The result is an ordinary builder the handler can extend.
    """
    sink = diagnostics or default_sink()
    response = RichResponse(diagnostics=sink)
    for kind, message in _typed(messages):
        if kind == SIMPLE_RESPONSE:
            simple = _validate(SimpleResponse, message, sink)
            if simple is not None:
                response.items.append(RichItem(simple_response=simple))
        elif kind == BASIC_CARD:
            card = _validate(BasicCard, message, sink)
            if card is not None:
                response.items.append(RichItem(basic_card=card.with_diagnostics(sink)))
        elif kind == SUGGESTION_CHIPS:
            chips = [
                Suggestion(title=chip["title"])
                for chip in message.get("suggestions") or []
                if isinstance(chip, Mapping) and isinstance(chip.get("title"), str)
            ]
            response.suggestions = chips
        elif kind == LINK_OUT_CHIP:
            link = _validate(LinkOutSuggestion, message, sink)
            if link is not None:
                response.link_out_suggestion = link
    return response


def list_from_messages(messages: Iterable[Any], diagnostics: DiagnosticSink | None = None) -> List:
    """The last ``list_card`` message as a :class:`List`, or an empty one."""
    sink = diagnostics or default_sink()
    option_list = List(diagnostics=sink)
    for kind, message in _typed(messages):
        if kind == LIST_CARD:
            parsed = _validate(List, message, sink)
            if parsed is not None:
                option_list = parsed.with_diagnostics(sink)
    return option_list


def carousel_from_messages(
    messages: Iterable[Any],
    diagnostics: DiagnosticSink | None = None,
) -> Carousel:
    """The last ``carousel_card`` message as a :class:`Carousel`, or an empty one."""
    sink = diagnostics or default_sink()
    carousel = Carousel(diagnostics=sink)
    for kind, message in _typed(messages):
        if kind == CAROUSEL_CARD:
            parsed = _validate(Carousel, message, sink)
            if parsed is not None:
                carousel = parsed.with_diagnostics(sink)
    return carousel
