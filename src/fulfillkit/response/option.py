"""Selectable option items and the List / Carousel containers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Self

from pydantic import Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.enums import ImageDisplay
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import ComposerModel, Limits
from fulfillkit.response.card import Image, build_image, check_image_display

_COMPONENT = "response.option"


class OptionInfo(WireModel):
    key: str = ""
    synonyms: list[str] = Field(default_factory=list)


class OptionItem(ComposerModel):
    """One selectable entry of a List or Carousel."""

    option_info: OptionInfo = Field(default_factory=OptionInfo)
    title: str = ""
    description: str | None = None
    image: Image | None = None

    @property
    def key(self) -> str:
        return self.option_info.key

    def set_key(self, key: str) -> OptionItem:
        if not key:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "key cannot be empty"))
        self.option_info.key = key
        return self

    def add_synonyms(self, synonyms: str | Iterable[str]) -> OptionItem:
        if not synonyms:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "Invalid synonyms"))
        if isinstance(synonyms, str):
            synonyms = [synonyms]
        self.option_info.synonyms.extend(synonyms)
        return self

    def set_title(self, title: str) -> OptionItem:
        if not title:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "title cannot be empty"))
        self.title = title
        return self

    def set_description(self, description: str) -> OptionItem:
        if not description:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "description cannot be empty"))
        self.description = description
        return self

    def set_image(
        self,
        url: str,
        accessibility_text: str,
        width: int | None = None,
        height: int | None = None,
    ) -> OptionItem:
        image, outcome = build_image(_COMPONENT, url, accessibility_text, width, height)
        if image is not None:
            self.image = image
        return self._apply(outcome)


class _OptionContainer(ComposerModel):
    items: list[OptionItem] = Field(default_factory=list)

    _max_items: ClassVar[int] = Limits.LIST_ITEM_MAX
    _label: ClassVar[str] = "List"

    def add_items(self, option_items: OptionItem | Iterable[OptionItem]) -> Self:
        """Append items, keeping only the first ``max`` of the combined list."""
        if not option_items:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "optionItems cannot be empty"))
        if isinstance(option_items, OptionItem):
            option_items = [option_items]
        self.items.extend(option_items)
        if len(self.items) > self._max_items:
            self.items = self.items[: self._max_items]
            return self._apply(
                BuildOutcome.partial(
                    _COMPONENT, f"{self._label} can have no more than {self._max_items} items"
                )
            )
        return self


class List(_OptionContainer):
    """Vertical option list, at most 30 items."""

    title: str | None = None

    def set_title(self, title: str) -> List:
        if not title:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "title cannot be empty"))
        self.title = title
        return self


class Carousel(_OptionContainer):
    """Horizontal option carousel, at most 10 items."""

    image_display_options: ImageDisplay | None = None

    _max_items: ClassVar[int] = Limits.CAROUSEL_ITEM_MAX
    _label: ClassVar[str] = "Carousel"

    def set_image_display(self, option: str) -> Carousel:
        outcome = check_image_display(_COMPONENT, option)
        if outcome.applied:
            self.image_display_options = ImageDisplay(option)
        return self._apply(outcome)
