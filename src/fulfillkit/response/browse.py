"""Browse carousel: a carousel of web pages opened on selection."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.enums import ImageDisplay, UrlTypeHint
from fulfillkit.response.base import ComposerModel, Limits
from fulfillkit.response.card import Image, OpenUrlAction, build_image, check_image_display

_COMPONENT = "response.browse"


def _default_open_url_action() -> OpenUrlAction:
    return OpenUrlAction(url_type_hint=UrlTypeHint.UNSPECIFIED)


class BrowseItem(ComposerModel):
    """One page of a :class:`BrowseCarousel`."""

    title: str = ""
    description: str | None = None
    footer: str | None = None
    image: Image | None = None
    open_url_action: OpenUrlAction = Field(default_factory=_default_open_url_action)

    def set_title(self, title: str) -> BrowseItem:
        if not title:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "title cannot be empty"))
        self.title = title
        return self

    def set_description(self, description: str) -> BrowseItem:
        if not description:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "description cannot be empty"))
        self.description = description
        return self

    def set_footer(self, footer: str) -> BrowseItem:
        if not footer:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "footer cannot be empty"))
        self.footer = footer
        return self

    def set_image(
        self,
        url: str,
        accessibility_text: str,
        width: int | None = None,
        height: int | None = None,
    ) -> BrowseItem:
        image, outcome = build_image(_COMPONENT, url, accessibility_text, width, height)
        if image is not None:
            self.image = image
        return self._apply(outcome)

    def set_open_url_action(self, url: str, url_type_hint: str = UrlTypeHint.UNSPECIFIED) -> BrowseItem:
        if not url:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "url cannot be empty"))
        if url_type_hint not in {h.value for h in UrlTypeHint}:
            return self._apply(
                BuildOutcome.rejected(_COMPONENT, f"URL type hint {url_type_hint} is invalid")
            )
        self.open_url_action = OpenUrlAction(url=url, url_type_hint=UrlTypeHint(url_type_hint))
        return self

    def set_url(self, url: str) -> BrowseItem:
        if not url:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "url cannot be empty"))
        self.open_url_action.url = url
        return self

    def set_url_type_hint(self, url_type_hint: str) -> BrowseItem:
        if url_type_hint not in {h.value for h in UrlTypeHint}:
            return self._apply(
                BuildOutcome.rejected(_COMPONENT, f"URL type hint {url_type_hint} is invalid")
            )
        self.open_url_action.url_type_hint = UrlTypeHint(url_type_hint)
        return self


class BrowseCarousel(ComposerModel):
    """At most 10 :class:`BrowseItem`; extra items are dropped."""

    items: list[BrowseItem] = Field(default_factory=list)
    image_display_options: ImageDisplay | None = None

    def add_items(self, items: BrowseItem | Iterable[BrowseItem]) -> BrowseCarousel:
        if not items:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "items cannot be empty"))
        if isinstance(items, BrowseItem):
            items = [items]
        self.items.extend(items)
        if len(self.items) > Limits.CAROUSEL_ITEM_MAX:
            self.items = self.items[: Limits.CAROUSEL_ITEM_MAX]
            return self._apply(
                BuildOutcome.partial(
                    _COMPONENT,
                    f"Browse carousel can have no more than {Limits.CAROUSEL_ITEM_MAX} items",
                )
            )
        return self

    def set_image_display(self, option: str) -> BrowseCarousel:
        outcome = check_image_display(_COMPONENT, option)
        if outcome.applied:
            self.image_display_options = ImageDisplay(option)
        return self._apply(outcome)
