"""Order updates sent as the structured response of a transaction."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from fulfillkit.diagnostics import BuildOutcome
from fulfillkit.models.wire import WireModel
from fulfillkit.response.base import ComposerModel
from fulfillkit.response.card import Button, OpenUrlAction

_COMPONENT = "response.order"


class OrderState(WireModel):
    state: str
    label: str


class Money(WireModel):
    currency_code: str
    units: str
    nanos: int = 0


class Price(WireModel):
    type: str
    amount: Money


class Receipt(WireModel):
    confirmed_action_order_id: str | None = None
    user_visible_order_id: str | None = None


class OrderUpdateAction(WireModel):
    type: str
    button: Button


class UserNotification(WireModel):
    title: str
    text: str


class OrderUpdate(ComposerModel):
    """Update to an order placed through a transaction decision.

    Only the common fields are modelled; any other order update field
    (``lineItemUpdates``, ``cancellationInfo`` ...) is accepted as an extra
    keyword and passed through unchanged.
    """

    model_config = ConfigDict(extra="allow")

    google_order_id: str | None = None
    action_order_id: str | None = None
    order_state: OrderState | None = None
    update_time: str | None = None
    order_management_actions: list[OrderUpdateAction] = Field(default_factory=list)
    receipt: Receipt | None = None
    total_price: Price | None = None
    user_notification: UserNotification | None = None

    def set_order_state(self, state: str, label: str) -> OrderUpdate:
        if not state or not label:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "state and label cannot be empty"))
        self.order_state = OrderState(state=state, label=label)
        return self

    def set_update_time(self, update_time: datetime | str) -> OrderUpdate:
        if not update_time:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "update time cannot be empty"))
        if isinstance(update_time, datetime):
            update_time = update_time.isoformat()
        self.update_time = update_time
        return self

    def add_order_management_action(self, action_type: str, label: str, url: str) -> OrderUpdate:
        if not action_type or not label or not url:
            return self._apply(
                BuildOutcome.rejected(_COMPONENT, "type, label and url cannot be empty")
            )
        self.order_management_actions.append(
            OrderUpdateAction(
                type=action_type,
                button=Button(title=label, open_url_action=OpenUrlAction(url=url)),
            )
        )
        return self

    def set_receipt(self, confirmed_action_order_id: str, user_visible_order_id: str | None = None) -> OrderUpdate:
        if not confirmed_action_order_id:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "order id cannot be empty"))
        self.receipt = Receipt(
            confirmed_action_order_id=confirmed_action_order_id,
            user_visible_order_id=user_visible_order_id,
        )
        return self

    def set_total_price(self, price_type: str, currency_code: str, units: int, nanos: int = 0) -> OrderUpdate:
        if not price_type or not currency_code:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "price type and currency cannot be empty"))
        self.total_price = Price(
            type=price_type,
            amount=Money(currency_code=currency_code, units=str(units), nanos=nanos),
        )
        return self

    def set_user_notification(self, title: str, text: str) -> OrderUpdate:
        if not title or not text:
            return self._apply(BuildOutcome.rejected(_COMPONENT, "title and text cannot be empty"))
        self.user_notification = UserNotification(title=title, text=text)
        return self
