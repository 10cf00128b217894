"""BasicCard and the image/button/link primitives shared by visual items."""

from __future__ import annotations

from pydantic import Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.enums import ImageDisplay, UrlTypeHint
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import ComposerModel

_COMPONENT = "response.card"


class Image(WireModel):
    url: str
    accessibility_text: str
    width: int | None = None
    height: int | None = None


class AndroidApp(WireModel):
    package_name: str


class OpenUrlAction(WireModel):
    url: str | None = None
    android_app: AndroidApp | None = None
    url_type_hint: UrlTypeHint | None = None


class Button(WireModel):
    title: str
    open_url_action: OpenUrlAction


def build_image(
    component: str,
    url: str,
    accessibility_text: str,
    width: int | None,
    height: int | None,
) -> tuple[Image | None, BuildOutcome]:
    """Validate and build an :class:`Image` for any builder's ``set_image``."""
    if not url:
        return None, BuildOutcome.rejected(component, "url cannot be empty")
    if not accessibility_text:
        return None, BuildOutcome.rejected(component, "accessibilityText cannot be empty")
    return (
        Image(url=url, accessibility_text=accessibility_text, width=width or None, height=height or None),
        BuildOutcome.ok(),
    )


def check_image_display(component: str, option: str) -> BuildOutcome:
    if option not in {d.value for d in ImageDisplay}:
        return BuildOutcome.rejected(component, f"Image display option {option} is invalid")
    return BuildOutcome.ok()


class BasicCard(ComposerModel):
    """A card with optional title, subtitle, body text, image and buttons."""

    title: str | None = None
    subtitle: str | None = None
    formatted_text: str = ""
    image: Image | None = None
    buttons: list[Button] = Field(default_factory=list)
    image_display_options: ImageDisplay | None = None

    def set_title(self, title: str) -> BasicCard:
        if not title:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "title cannot be empty"))
        self.title = title
        return self

    def set_subtitle(self, subtitle: str) -> BasicCard:
        if not subtitle:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "subtitle cannot be empty"))
        self.subtitle = subtitle
        return self

    def set_body_text(self, body_text: str) -> BasicCard:
        if not body_text:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "bodyText cannot be empty"))
        self.formatted_text = body_text
        return self

    def set_image(
        self,
        url: str,
        accessibility_text: str,
        width: int | None = None,
        height: int | None = None,
    ) -> BasicCard:
        image, outcome = build_image(_COMPONENT, url, accessibility_text, width, height)
        if image is not None:
            self.image = image
        return self._apply(outcome)

    def set_image_display(self, option: str) -> BasicCard:
        outcome = check_image_display(_COMPONENT, option)
        if outcome.applied:
            self.image_display_options = ImageDisplay(option)
        return self._apply(outcome)

    def add_button(self, text: str, url: str) -> BasicCard:
        if not text:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "text cannot be empty"))
        if not url:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "url cannot be empty"))
        self.buttons.append(Button(title=text, open_url_action=OpenUrlAction(url=url)))
        return self
