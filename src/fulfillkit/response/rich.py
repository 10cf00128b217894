"""RichResponse: the ordered item list shown and spoken for one turn."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import ComposerModel, Limits
from fulfillkit.response.browse import BrowseCarousel
from fulfillkit.response.card import BasicCard
from fulfillkit.response.media import MediaResponse
from fulfillkit.response.order import OrderUpdate
from fulfillkit.response.simple import SimpleResponse, build_simple_response

_COMPONENT = "response.rich"


class StructuredResponse(WireModel):
    order_update: OrderUpdate


class RichItem(WireModel):
    """Tagged union: exactly one field is set."""

    simple_response: SimpleResponse | None = None
    basic_card: BasicCard | None = None
    carousel_browse: BrowseCarousel | None = None
    media_response: MediaResponse | None = None
    structured_response: StructuredResponse | None = None


class Suggestion(WireModel):
    title: str


class LinkOutSuggestion(WireModel):
    destination_name: str
    url: str


def is_valid_suggestion_text(text: Any) -> bool:
    return isinstance(text, str) and 0 < len(text) <= Limits.SUGGESTION_TEXT_MAX


class RichResponse(ComposerModel):
    """Items, suggestion chips and an optional link-out chip.

    Composition rules, checked on every add:

    - a SimpleResponse, if present, is the first item;
    - at most two SimpleResponses;
    - at most one BasicCard, one MediaResponse and one StructuredResponse.

    Example::

        response = (
            RichResponse()
            .add_simple_response("Here is your order")
            .add_basic_card(BasicCard().set_title("Order #42"))
            .add_suggestions(["Track it", "Cancel"])
        )
    """

    items: list[RichItem] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    link_out_suggestion: LinkOutSuggestion | None = None

    # -- inspection --------------------------------------------------------

    def count(self, kind: str) -> int:
        """Number of items whose ``kind`` field (e.g. ``basic_card``) is set."""
        return sum(1 for item in self.items if getattr(item, kind) is not None)

    @property
    def simple_responses(self) -> list[SimpleResponse]:
        return [item.simple_response for item in self.items if item.simple_response is not None]

    @property
    def starts_with_simple_response(self) -> bool:
        return bool(self.items) and self.items[0].simple_response is not None

    # -- items -------------------------------------------------------------

    def add_simple_response(self, simple_response: Any) -> RichResponse:
        """Add a string, ``{speech, displayText}`` mapping or :class:`SimpleResponse`.

        Goes in front of any leading non-simple item (a BasicCard or
        StructuredResponse, say) so the first item stays a SimpleResponse.
        """
        if self.count("simple_response") >= Limits.SIMPLE_RESPONSE_MAX:
            return self._apply(
                BuildOutcome.rejected(
                    _COMPONENT,
                    f"Cannot include >{Limits.SIMPLE_RESPONSE_MAX} SimpleResponses in RichResponse",
                )
            )
        response, outcome = build_simple_response(simple_response)
        if response is None:
            return self._apply(outcome)
        item = RichItem(simple_response=response)
        if self.items and self.items[0].simple_response is None:
            self.items.insert(0, item)
        else:
            self.items.append(item)
        return self

    def add_basic_card(self, basic_card: BasicCard) -> RichResponse:
        if not isinstance(basic_card, BasicCard):
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid basicCard"))
        if self.count("basic_card"):
            return self._apply(
                BuildOutcome.rejected(_COMPONENT, "Cannot include >1 BasicCard in RichResponse")
            )
        self.items.append(RichItem(basic_card=basic_card))
        return self

    def add_media_response(self, media_response: MediaResponse) -> RichResponse:
        if not isinstance(media_response, MediaResponse):
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid MediaResponse"))
        if self.count("media_response"):
            return self._apply(
                BuildOutcome.rejected(_COMPONENT, "Cannot include >1 MediaResponse in RichResponse")
            )
        self.items.append(RichItem(media_response=media_response))
        return self

    def add_browse_carousel(self, browse_carousel: BrowseCarousel) -> RichResponse:
        if not isinstance(browse_carousel, BrowseCarousel):
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid browse carousel"))
        self.items.append(RichItem(carousel_browse=browse_carousel))
        return self

    def add_order_update(self, order_update: OrderUpdate) -> RichResponse:
        if not isinstance(order_update, OrderUpdate):
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid orderUpdate"))
        if self.count("structured_response"):
            return self._apply(
                BuildOutcome.rejected(
                    _COMPONENT, "Cannot include >1 StructuredResponses in RichResponse"
                )
            )
        self.items.append(RichItem(structured_response=StructuredResponse(order_update=order_update)))
        return self

    # -- chips -------------------------------------------------------------

    def add_suggestions(self, suggestions: str | Iterable[str]) -> RichResponse:
        """Add suggestion chips; invalid entries are dropped, valid ones kept."""
        if not suggestions:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid suggestions"))
        if isinstance(suggestions, str):
            suggestions = [suggestions]
        for text in suggestions:
            if is_valid_suggestion_text(text):
                self.suggestions.append(Suggestion(title=text))
            else:
                self._apply(
                    BuildOutcome.partial(
                        _COMPONENT,
                        f"Suggestion text can't be longer than {Limits.SUGGESTION_TEXT_MAX} "
                        f"characters: {text}. This suggestion won't be added to the list.",
                    )
                )
        return self

    def add_suggestion_link(self, destination_name: str, url: str) -> RichResponse:
        """Set the link-out chip, replacing any previous one."""
        if not destination_name:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "destinationName cannot be empty"))
        if not url:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "suggestionUrl cannot be empty"))
        self.link_out_suggestion = LinkOutSuggestion(destination_name=destination_name, url=url)
        return self
