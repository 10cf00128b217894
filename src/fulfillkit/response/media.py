"""Media responses (audio playback)."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.enums import MediaImageType, MediaType
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import ComposerModel

_COMPONENT = "response.media"


class MediaImage(WireModel):
    url: str
    accessibility_text: str | None = None


class MediaObject(ComposerModel):
    """One playable item. Carries either a large image or an icon, never both."""

    name: str
    content_url: str
    description: str | None = None
    large_image: MediaImage | None = None
    icon: MediaImage | None = None

    def set_description(self, description: str) -> MediaObject:
        if not description:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "description cannot be empty"))
        self.description = description
        return self

    def set_image(
        self,
        url: str,
        image_type: str,
        accessibility_text: str | None = None,
    ) -> MediaObject:
        if not url:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "url cannot be empty"))
        image = MediaImage(url=url, accessibility_text=accessibility_text)
        if image_type == MediaImageType.ICON:
            self.icon, self.large_image = image, None
        elif image_type == MediaImageType.LARGE:
            self.large_image, self.icon = image, None
        else:
            return self._apply(BuildOutcome.rejected(_COMPONENT, f"Invalid image type {image_type}"))
        return self


class MediaResponse(ComposerModel):
    media_type: MediaType = MediaType.AUDIO
    media_objects: list[MediaObject] = Field(default_factory=list)

    def add_media_objects(self, media_objects: MediaObject | Iterable[MediaObject]) -> MediaResponse:
        if not media_objects:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "media objects cannot be empty"))
        if isinstance(media_objects, MediaObject):
            media_objects = [media_objects]
        self.media_objects.extend(media_objects)
        return self
