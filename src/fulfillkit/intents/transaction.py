"""Transaction configuration and the payment/order options derived from it."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from fulfillkit.models.enums import PaymentTokenizationType
from fulfillkit.models.wire import WireModel


class TransactionConfig(BaseModel):
    """Payment and order options of a transaction.

    Set ``type`` (and ``display_name``) for action-provided payment, or
    ``card_networks`` for Google-provided payment; never both.
    """

    delivery_address_required: bool = False
    type: str | None = None
    display_name: str | None = None
    card_networks: list[str] | None = None
    prepaid_card_disallowed: bool | None = None
    tokenization_parameters: dict[str, str] | None = None
    tokenization_type: PaymentTokenizationType | None = None
    customer_info_options: dict[str, Any] | None = None

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.type) and bool(self.card_networks)

    @property
    def has_payment(self) -> bool:
        return bool(self.type) or bool(self.card_networks)


class ActionProvidedOptions(WireModel):
    payment_type: str
    display_name: str | None = None


class TokenizationParameters(WireModel):
    tokenization_type: PaymentTokenizationType
    parameters: dict[str, str]


class GoogleProvidedOptions(WireModel):
    supported_card_networks: list[str] | None = None
    prepaid_card_disallowed: bool | None = None
    tokenization_parameters: TokenizationParameters | None = None


class PaymentOptions(WireModel):
    action_provided_options: ActionProvidedOptions | None = None
    google_provided_options: GoogleProvidedOptions | None = None


class OrderOptions(WireModel):
    request_delivery_address: bool | None = None
    customer_info_options: dict[str, Any] | None = None


def build_payment_options(config: TransactionConfig | None) -> PaymentOptions | None:
    if config is None or not config.has_payment:
        return None
    if config.type:
        return PaymentOptions(
            action_provided_options=ActionProvidedOptions(
                payment_type=config.type, display_name=config.display_name
            )
        )
    tokenization = None
    if config.tokenization_parameters:
        tokenization = TokenizationParameters(
            tokenization_type=config.tokenization_type or PaymentTokenizationType.PAYMENT_GATEWAY,
            parameters=config.tokenization_parameters,
        )
    return PaymentOptions(
        google_provided_options=GoogleProvidedOptions(
            supported_card_networks=config.card_networks,
            prepaid_card_disallowed=config.prepaid_card_disallowed,
            tokenization_parameters=tokenization,
        )
    )


def build_order_options(
    config: TransactionConfig | None,
    *,
    with_customer_info: bool = False,
) -> OrderOptions | None:
    if config is None:
        return None
    options = OrderOptions(
        request_delivery_address=config.delivery_address_required or None,
        customer_info_options=config.customer_info_options if with_customer_info else None,
    )
    if options.request_delivery_address is None and options.customer_info_options is None:
        return None
    return options
