"""The system intent kinds and the checked constructors for each.

Constructors raise :class:`~fulfillkit.core.errors.ValidationError` on bad
input; the conversation turns that into a 400 and sends nothing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from fulfillkit.core.errors import ValidationError
from fulfillkit.intents.base import DialogSpecExtension, SystemIntentSpec, value_type
from fulfillkit.intents.transaction import (
    OrderOptions,
    PaymentOptions,
    TransactionConfig,
    build_order_options,
    build_payment_options,
)
from fulfillkit.models.enums import Permission, StandardIntent, TimeContextFrequency
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import Limits
from fulfillkit.response.card import AndroidApp, OpenUrlAction
from fulfillkit.response.option import Carousel, List

ASKABLE_PERMISSIONS = frozenset(
    {Permission.NAME, Permission.DEVICE_PRECISE_LOCATION, Permission.DEVICE_COARSE_LOCATION}
)


class UpdatePermissionValueSpec(WireModel):
    intent: str
    arguments: list[dict[str, Any]] | None = None


class PermissionSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.PERMISSION
    type_tag: ClassVar[str] = value_type("PermissionValueSpec")
    legacy_key: ClassVar[str] = "permission_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_PERMISSION"

    opt_context: str | None = None
    permissions: list[Permission]
    update_permission_value_spec: UpdatePermissionValueSpec | None = None


class TransactionRequirementsCheckSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.TRANSACTION_REQUIREMENTS_CHECK
    type_tag: ClassVar[str] = value_type("TransactionRequirementsCheckSpec")
    legacy_key: ClassVar[str] = "transaction_requirements_check_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_TXN_REQUIREMENTS"

    order_options: OrderOptions | None = None
    payment_options: PaymentOptions | None = None


class TransactionDecisionSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.TRANSACTION_DECISION
    type_tag: ClassVar[str] = value_type("TransactionDecisionValueSpec")
    legacy_key: ClassVar[str] = "transaction_decision_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_TXN_DECISION"

    proposed_order: dict[str, Any]
    order_options: OrderOptions | None = None
    payment_options: PaymentOptions | None = None


class AddressOptions(WireModel):
    reason: str


class DeliveryAddressSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.DELIVERY_ADDRESS
    type_tag: ClassVar[str] = value_type("DeliveryAddressValueSpec")
    legacy_key: ClassVar[str] = "delivery_address_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_DELIVERY_ADDRESS"

    address_options: AddressOptions


class ConfirmationDialogSpec(WireModel):
    request_confirmation_text: str


class ConfirmationSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.CONFIRMATION
    type_tag: ClassVar[str] = value_type("ConfirmationValueSpec")
    legacy_key: ClassVar[str] = "confirmation_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_CONFIRMATION"

    dialog_spec: ConfirmationDialogSpec | None = None


class DateTimeDialogSpec(WireModel):
    request_datetime_text: str | None = None
    request_date_text: str | None = None
    request_time_text: str | None = None


class DateTimeSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.DATETIME
    type_tag: ClassVar[str] = value_type("DateTimeValueSpec")
    legacy_key: ClassVar[str] = "date_time_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_DATETIME"

    dialog_spec: DateTimeDialogSpec | None = None


class SignInSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.SIGN_IN
    type_tag: ClassVar[str] = value_type("SignInValueSpec")
    legacy_key: ClassVar[str] = "sign_in_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_SIGN_IN"

    opt_context: str | None = None


class PlaceDialogExtension(DialogSpecExtension):
    type_tag: ClassVar[str] = value_type("PlaceValueSpec.PlaceDialogSpec")

    request_prompt: str
    permission_context: str


class PlaceDialogSpec(WireModel):
    extension: PlaceDialogExtension


class PlaceSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.PLACE
    type_tag: ClassVar[str] = value_type("PlaceValueSpec")
    legacy_key: ClassVar[str] = "place_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_PLACE"

    dialog_spec: PlaceDialogSpec


class NewSurfaceSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.NEW_SURFACE
    type_tag: ClassVar[str] = value_type("NewSurfaceValueSpec")
    legacy_key: ClassVar[str] = "new_surface_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_NEW_SURFACE"

    context: str
    notification_title: str
    capabilities: list[str]


class TimeContext(WireModel):
    frequency: TimeContextFrequency


class TriggerContext(WireModel):
    time_context: TimeContext


class RegisterUpdateSpec(SystemIntentSpec):
    intent: ClassVar[str] = StandardIntent.REGISTER_UPDATE
    type_tag: ClassVar[str] = value_type("RegisterUpdateValueSpec")
    legacy_key: ClassVar[str] = "register_update_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_REGISTER_UPDATE"

    intent_name: str = Field(alias="intent")
    trigger_context: TriggerContext
    arguments: list[dict[str, Any]] | None = None

    @model_serializer(mode="wrap")
    def _intent_key(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if "intent_name" in data:
            data = {"intent": data.pop("intent_name"), **data}
        return data


class LinkDialogExtension(DialogSpecExtension):
    type_tag: ClassVar[str] = value_type("LinkValueSpec.LinkDialogSpec")

    destination_name: str
    request_link_reason: str | None = None


class LinkDialogSpec(WireModel):
    extension: LinkDialogExtension


class LinkSpec(SystemIntentSpec):
    """Android deep link hand-off. The developer's prompt is spoken when given."""

    intent: ClassVar[str] = StandardIntent.LINK
    type_tag: ClassVar[str] = value_type("LinkValueSpec")
    legacy_key: ClassVar[str] = "link_value_spec"
    placeholder: ClassVar[str] = "PLACEHOLDER_FOR_LINK"

    open_url_action: OpenUrlAction
    dialog_spec: LinkDialogSpec


class OptionSpec(SystemIntentSpec):
    """List or carousel selection. The developer's prompt is spoken, not a placeholder."""

    intent: ClassVar[str] = StandardIntent.OPTION
    type_tag: ClassVar[str] = value_type("OptionValueSpec")
    legacy_key: ClassVar[str] = "option_value_spec"
    placeholder: ClassVar[str] = ""

    list_select: List | None = None
    carousel_select: Carousel | None = None


# -- checked constructors ------------------------------------------------------


def permission_spec(context: str, permissions: Sequence[str]) -> PermissionSpec:
    if not context:
        raise ValidationError("Assistant context can NOT be empty.")
    if not permissions:
        raise ValidationError("At least one permission needed.")
    if any(p not in ASKABLE_PERMISSIONS for p in permissions):
        raise ValidationError(
            "Assistant permission must be one of "
            "[NAME, DEVICE_PRECISE_LOCATION, DEVICE_COARSE_LOCATION]"
        )
    return PermissionSpec(opt_context=context, permissions=[Permission(p) for p in permissions])


def update_permission_spec(
    intent: str,
    arguments: Sequence[Mapping[str, Any]] | None = None,
) -> PermissionSpec:
    if not intent:
        raise ValidationError("Name of intent to trigger on update must be specified")
    return PermissionSpec(
        permissions=[Permission.UPDATE],
        update_permission_value_spec=UpdatePermissionValueSpec(
            intent=intent,
            arguments=[dict(a) for a in arguments] if arguments else None,
        ),
    )


def _check_transaction_config(config: TransactionConfig | None) -> None:
    if config is not None and config.is_ambiguous:
        raise ValidationError(
            "Invalid transaction configuration. Must be of type "
            "ActionPaymentTransactionConfig or GooglePaymentTransactionConfig"
        )


def transaction_requirements_spec(
    config: TransactionConfig | None = None,
) -> TransactionRequirementsCheckSpec:
    _check_transaction_config(config)
    return TransactionRequirementsCheckSpec(
        order_options=build_order_options(config),
        payment_options=build_payment_options(config),
    )


def transaction_decision_spec(
    order: Mapping[str, Any] | None,
    config: TransactionConfig | None = None,
) -> TransactionDecisionSpec:
    if not order:
        raise ValidationError("Invalid order")
    _check_transaction_config(config)
    return TransactionDecisionSpec(
        proposed_order=dict(order),
        order_options=build_order_options(config, with_customer_info=True),
        payment_options=build_payment_options(config),
    )


def delivery_address_spec(reason: str) -> DeliveryAddressSpec:
    if not reason:
        raise ValidationError("reason cannot be empty")
    return DeliveryAddressSpec(address_options=AddressOptions(reason=reason))


def confirmation_spec(prompt: str | None = None) -> ConfirmationSpec:
    dialog_spec = ConfirmationDialogSpec(request_confirmation_text=prompt) if prompt else None
    return ConfirmationSpec(dialog_spec=dialog_spec)


def datetime_spec(
    initial_prompt: str | None = None,
    date_prompt: str | None = None,
    time_prompt: str | None = None,
) -> DateTimeSpec:
    dialog_spec = None
    if initial_prompt or date_prompt or time_prompt:
        dialog_spec = DateTimeDialogSpec(
            request_datetime_text=initial_prompt or None,
            request_date_text=date_prompt or None,
            request_time_text=time_prompt or None,
        )
    return DateTimeSpec(dialog_spec=dialog_spec)


def sign_in_spec(context: str | None = None) -> SignInSpec:
    return SignInSpec(opt_context=context or None)


def list_spec(option_list: List | None) -> OptionSpec:
    if not isinstance(option_list, List):
        raise ValidationError("Invalid list")
    if len(option_list.items) < Limits.OPTIONS_MIN:
        raise ValidationError(f"List requires at least {Limits.OPTIONS_MIN} items")
    return OptionSpec(list_select=option_list)


def carousel_spec(carousel: Carousel | None) -> OptionSpec:
    if not isinstance(carousel, Carousel):
        raise ValidationError("Invalid carousel")
    if len(carousel.items) < Limits.OPTIONS_MIN:
        raise ValidationError(f"Carousel requires at least {Limits.OPTIONS_MIN} items")
    return OptionSpec(carousel_select=carousel)


def place_spec(request_prompt: str, permission_context: str) -> PlaceSpec:
    if not request_prompt:
        raise ValidationError("requestPrompt cannot be empty")
    if not permission_context:
        raise ValidationError("permissionContext cannot be empty")
    return PlaceSpec(
        dialog_spec=PlaceDialogSpec(
            extension=PlaceDialogExtension(
                request_prompt=request_prompt, permission_context=permission_context
            )
        )
    )


def new_surface_spec(
    context: str,
    notification_title: str,
    capabilities: str | Sequence[str],
) -> NewSurfaceSpec:
    if not context:
        raise ValidationError("context cannot be empty")
    if not notification_title:
        raise ValidationError("notificationTitle cannot be empty")
    if isinstance(capabilities, str):
        capabilities = [capabilities]
    if not capabilities:
        raise ValidationError("At least one capability needed.")
    return NewSurfaceSpec(
        context=context, notification_title=notification_title, capabilities=list(capabilities)
    )


def register_update_spec(
    intent: str,
    arguments: Sequence[Mapping[str, Any]] | None = None,
) -> RegisterUpdateSpec:
    if not intent:
        raise ValidationError("Name of intent to trigger on update must be specified")
    return RegisterUpdateSpec(
        intent_name=intent,
        trigger_context=TriggerContext(
            time_context=TimeContext(frequency=TimeContextFrequency.DAILY)
        ),
        arguments=[dict(a) for a in arguments] if arguments else None,
    )


def link_spec(
    destination_name: str,
    url: str,
    package_name: str,
    reason: str | None = None,
) -> LinkSpec:
    if not destination_name:
        raise ValidationError("destinationName cannot be empty")
    if not url:
        raise ValidationError("url cannot be empty")
    if not package_name:
        raise ValidationError("packageName cannot be empty")
    return LinkSpec(
        open_url_action=OpenUrlAction(url=url, android_app=AndroidApp(package_name=package_name)),
        dialog_spec=LinkDialogSpec(
            extension=LinkDialogExtension(
                destination_name=destination_name, request_link_reason=reason or None
            )
        ),
    )
