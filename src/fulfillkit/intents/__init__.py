"""System intents: canonical specs rendered per schema version."""

from fulfillkit.intents.base import (
    TYPE_PROPERTY,
    DialogSpecExtension,
    SystemIntentSpec,
    render_system_intent,
    value_type,
)
from fulfillkit.intents.specs import (
    ASKABLE_PERMISSIONS,
    ConfirmationSpec,
    DateTimeSpec,
    DeliveryAddressSpec,
    LinkSpec,
    NewSurfaceSpec,
    OptionSpec,
    PermissionSpec,
    PlaceSpec,
    RegisterUpdateSpec,
    SignInSpec,
    TransactionDecisionSpec,
    TransactionRequirementsCheckSpec,
    carousel_spec,
    confirmation_spec,
    datetime_spec,
    delivery_address_spec,
    link_spec,
    list_spec,
    new_surface_spec,
    permission_spec,
    place_spec,
    register_update_spec,
    sign_in_spec,
    transaction_decision_spec,
    transaction_requirements_spec,
    update_permission_spec,
)
from fulfillkit.intents.transaction import TransactionConfig

__all__ = [
    "ASKABLE_PERMISSIONS",
    "ConfirmationSpec",
    "DateTimeSpec",
    "DeliveryAddressSpec",
    "DialogSpecExtension",
    "LinkSpec",
    "NewSurfaceSpec",
    "OptionSpec",
    "PermissionSpec",
    "PlaceSpec",
    "RegisterUpdateSpec",
    "SignInSpec",
    "SystemIntentSpec",
    "TYPE_PROPERTY",
    "TransactionConfig",
    "TransactionDecisionSpec",
    "TransactionRequirementsCheckSpec",
    "carousel_spec",
    "confirmation_spec",
    "datetime_spec",
    "delivery_address_spec",
    "link_spec",
    "list_spec",
    "new_surface_spec",
    "permission_spec",
    "place_spec",
    "register_update_spec",
    "render_system_intent",
    "sign_in_spec",
    "transaction_decision_spec",
    "transaction_requirements_spec",
    "update_permission_spec",
]
