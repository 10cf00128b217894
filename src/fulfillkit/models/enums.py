"""All string enums for fulfillkit."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class Protocol(StrEnum):
    LOW_LEVEL = "low_level"
    MIDDLEWARE = "middleware"


@unique
class SchemaVersion(StrEnum):
    LEGACY = "legacy"
    CURRENT = "current"


@unique
class StandardIntent(StrEnum):
    MAIN = "actions.intent.MAIN"
    TEXT = "actions.intent.TEXT"
    PERMISSION = "actions.intent.PERMISSION"
    OPTION = "actions.intent.OPTION"
    TRANSACTION_REQUIREMENTS_CHECK = "actions.intent.TRANSACTION_REQUIREMENTS_CHECK"
    DELIVERY_ADDRESS = "actions.intent.DELIVERY_ADDRESS"
    TRANSACTION_DECISION = "actions.intent.TRANSACTION_DECISION"
    PLACE = "actions.intent.PLACE"
    CONFIRMATION = "actions.intent.CONFIRMATION"
    DATETIME = "actions.intent.DATETIME"
    SIGN_IN = "actions.intent.SIGN_IN"
    NO_INPUT = "actions.intent.NO_INPUT"
    CANCEL = "actions.intent.CANCEL"
    NEW_SURFACE = "actions.intent.NEW_SURFACE"
    REGISTER_UPDATE = "actions.intent.REGISTER_UPDATE"
    CONFIGURE_UPDATES = "actions.intent.CONFIGURE_UPDATES"
    LINK = "actions.intent.LINK"
    MEDIA_STATUS = "actions.intent.MEDIA_STATUS"


@unique
class BuiltInArg(StrEnum):
    PERMISSION_GRANTED = "PERMISSION"
    OPTION = "OPTION"
    TRANSACTION_REQ_CHECK_RESULT = "TRANSACTION_REQUIREMENTS_CHECK_RESULT"
    DELIVERY_ADDRESS_VALUE = "DELIVERY_ADDRESS_VALUE"
    TRANSACTION_DECISION_VALUE = "TRANSACTION_DECISION_VALUE"
    PLACE = "PLACE"
    CONFIRMATION = "CONFIRMATION"
    DATETIME = "DATETIME"
    SIGN_IN = "SIGN_IN"
    REPROMPT_COUNT = "REPROMPT_COUNT"
    IS_FINAL_REPROMPT = "IS_FINAL_REPROMPT"
    NEW_SURFACE = "NEW_SURFACE"
    REGISTER_UPDATE = "REGISTER_UPDATE"
    LINK = "LINK"
    MEDIA_STATUS = "MEDIA_STATUS"


@unique
class Permission(StrEnum):
    NAME = "NAME"
    DEVICE_PRECISE_LOCATION = "DEVICE_PRECISE_LOCATION"
    DEVICE_COARSE_LOCATION = "DEVICE_COARSE_LOCATION"
    UPDATE = "UPDATE"


@unique
class ConversationType(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    NEW = "NEW"
    ACTIVE = "ACTIVE"


@unique
class InputType(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    TOUCH = "TOUCH"
    VOICE = "VOICE"
    KEYBOARD = "KEYBOARD"


@unique
class SignInStatus(StrEnum):
    UNSPECIFIED = "SIGN_IN_STATUS_UNSPECIFIED"
    OK = "OK"
    CANCELLED = "CANCELLED"
    ERROR = "ERROR"


@unique
class SurfaceCapability(StrEnum):
    AUDIO_OUTPUT = "actions.capability.AUDIO_OUTPUT"
    SCREEN_OUTPUT = "actions.capability.SCREEN_OUTPUT"
    MEDIA_RESPONSE_AUDIO = "actions.capability.MEDIA_RESPONSE_AUDIO"
    WEB_BROWSER = "actions.capability.WEB_BROWSER"


@unique
class ImageDisplay(StrEnum):
    DEFAULT = "DEFAULT"
    WHITE = "WHITE"
    CROPPED = "CROPPED"


@unique
class UrlTypeHint(StrEnum):
    UNSPECIFIED = "URL_TYPE_HINT_UNSPECIFIED"
    AMP_CONTENT = "AMP_CONTENT"


@unique
class MediaType(StrEnum):
    UNSPECIFIED = "MEDIA_TYPE_UNSPECIFIED"
    AUDIO = "AUDIO"


@unique
class MediaImageType(StrEnum):
    ICON = "ICON"
    LARGE = "LARGE_IMAGE"


@unique
class DeliveryAddressDecision(StrEnum):
    UNKNOWN = "UNKNOWN_USER_DECISION"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@unique
class PaymentTokenizationType(StrEnum):
    UNSPECIFIED = "UNSPECIFIED_TOKENIZATION_TYPE"
    PAYMENT_GATEWAY = "PAYMENT_GATEWAY"


@unique
class TimeContextFrequency(StrEnum):
    DAILY = "DAILY"
