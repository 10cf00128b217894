"""Pizza ordering fulfillment.

Demonstrates a small multi-turn action served through a mock transport.
Shows:
- Intent handlers, including a state-scoped one
- Dialog state carried between turns in the conversation token
- A list selection answered through the OPTION argument

Run with:
    uv run python examples/pizza_order.py
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fulfillkit import Conversation, FulfillmentApp, MockWebhookTransport

logging.basicConfig(level=logging.INFO)

app = FulfillmentApp()

HEADERS = {"Google-Actions-API-Version": "2"}


@app.intent("actions.intent.MAIN")
def welcome(conv: Conversation) -> None:
    conv.set_state("choosing")
    pizzas = conv.build_list("Today's pizzas").add_items(
        [
            conv.build_option_item("margherita", ["plain", "cheese"]).set_title("Margherita"),
            conv.build_option_item("pepperoni", ["spicy"]).set_title("Pepperoni"),
        ]
    )
    conv.ask_with_list("Which pizza would you like?", pizzas)


@app.intent("actions.intent.OPTION", state="choosing")
def choose(conv: Conversation) -> None:
    choice = conv.get_selected_option()
    conv.data["pizza"] = choice
    conv.set_state("confirming")
    conv.ask_for_confirmation(f"One {choice}, is that right?")


@app.intent("actions.intent.CONFIRMATION", state="confirming")
def confirm(conv: Conversation) -> None:
    if conv.get_user_confirmation():
        response = (
            conv.build_rich_response()
            .add_simple_response(f"Your {conv.data['pizza']} is on its way!")
            .add_basic_card(conv.build_basic_card("Estimated delivery: 30 minutes"))
        )
        conv.tell(response)
    else:
        conv.tell("No problem, maybe next time.")


def turn(intent: str, token: str | None, arguments: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    conversation: dict[str, Any] = {"conversationId": "demo", "type": "ACTIVE"}
    if token:
        conversation["conversationToken"] = token
    return {
        "user": {"userId": "demo-user"},
        "conversation": conversation,
        "inputs": [{"intent": intent, "arguments": arguments or []}],
    }


async def main() -> None:
    token = None
    steps = [
        ("actions.intent.MAIN", None),
        ("actions.intent.OPTION", [{"name": "OPTION", "textValue": "pepperoni"}]),
        ("actions.intent.CONFIRMATION", [{"name": "CONFIRMATION", "boolValue": True}]),
    ]
    for intent, arguments in steps:
        transport = MockWebhookTransport(body=turn(intent, token, arguments), headers=HEADERS)
        response = await app.serve(transport)
        print(f"--- {intent} -> {response.status}")
        print(json.dumps(response.body, indent=2))
        token = response.body.get("conversationToken")


if __name__ == "__main__":
    asyncio.run(main())
