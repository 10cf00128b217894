"""Response builders with the platform's composition rules."""

from fulfillkit.response.base import ComposerModel, Limits, is_padded_ssml, is_speech_ssml, is_ssml
from fulfillkit.response.browse import BrowseCarousel, BrowseItem
from fulfillkit.response.card import AndroidApp, BasicCard, Button, Image, OpenUrlAction
from fulfillkit.response.incoming import (
    carousel_from_messages,
    list_from_messages,
    rich_response_from_messages,
)
from fulfillkit.response.media import MediaImage, MediaObject, MediaResponse
from fulfillkit.response.option import Carousel, List, OptionInfo, OptionItem
from fulfillkit.response.order import OrderUpdate
from fulfillkit.response.rich import (
    LinkOutSuggestion,
    RichItem,
    RichResponse,
    StructuredResponse,
    Suggestion,
)
from fulfillkit.response.simple import SimpleResponse, build_simple_response

__all__ = [
    "AndroidApp",
    "BasicCard",
    "BrowseCarousel",
    "BrowseItem",
    "Button",
    "Carousel",
    "ComposerModel",
    "Image",
    "Limits",
    "LinkOutSuggestion",
    "List",
    "MediaImage",
    "MediaObject",
    "MediaResponse",
    "OpenUrlAction",
    "OptionInfo",
    "OptionItem",
    "OrderUpdate",
    "RichItem",
    "RichResponse",
    "SimpleResponse",
    "StructuredResponse",
    "Suggestion",
    "build_simple_response",
    "carousel_from_messages",
    "is_padded_ssml",
    "is_speech_ssml",
    "is_ssml",
    "list_from_messages",
    "rich_response_from_messages",
]
