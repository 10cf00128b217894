"""Tests for the Conversation request accessors."""

from __future__ import annotations

import json
from typing import Any

from fulfillkit.core.conversation import Conversation, argument_value
from fulfillkit.diagnostics import DiagnosticKind, MockDiagnosticSink
from fulfillkit.models.enums import Protocol, SchemaVersion
from fulfillkit.models.request import Context, DialogState, RawInput
from tests.conftest import (
    CURRENT_HEADERS,
    make_conversation,
    make_legacy_low_level_request,
    make_low_level_request,
    make_middleware_request,
    state_token,
)


class TestArgumentValue:
    def test_single_value_is_scalar(self) -> None:
        assert argument_value({"name": "number", "rawText": "five", "textValue": "5"}) == "5"

    def test_rich_record_is_returned_whole(self) -> None:
        argument = {"name": "place", "textValue": "home", "placeValue": {"name": "Home"}}
        assert argument_value(argument) == argument


class TestRequestAccessors:
    def test_low_level_current(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)

        assert conv.protocol is Protocol.LOW_LEVEL
        assert conv.schema_version is SchemaVersion.CURRENT
        assert conv.intent == "actions.intent.MAIN"
        assert conv.raw_input == "talk to pizza bot"
        assert conv.raw_inputs == [RawInput(input_type="VOICE", query="talk to pizza bot")]
        assert conv.input_type == "VOICE"
        assert conv.user_id == "user-1"
        assert conv.user_name == {"displayName": "Ada Lovelace", "givenName": "Ada", "familyName": "Lovelace"}
        assert conv.user_locale == "en-US"
        assert conv.conversation_id == "conv-1"
        assert not conv.is_new_conversation

    def test_legacy_low_level_is_normalized(self) -> None:
        conv = make_conversation(make_legacy_low_level_request())

        assert conv.schema_version is SchemaVersion.LEGACY
        assert conv.intent == "assistant.intent.action.MAIN"
        assert conv.conversation_id == "conv-1"
        assert conv.user_id == "user-1"
        assert conv.user_name == {"displayName": "Ada Lovelace"}
        assert conv.input_type == "VOICE"

    def test_middleware(self) -> None:
        conv = make_conversation(make_middleware_request("order.pizza", resolved_query="a pizza"))

        assert conv.protocol is Protocol.MIDDLEWARE
        assert conv.intent == "order.pizza"
        assert conv.raw_input == "a pizza"
        assert conv.user_id == "user-1"
        assert conv.conversation_id == "conv-1"

    def test_middleware_intent_falls_back_to_intent_name(self) -> None:
        payload = make_middleware_request()
        payload["result"]["action"] = ""
        assert make_conversation(payload).intent == "Default Welcome Intent"

    def test_missing_intent_reports(self) -> None:
        sink = MockDiagnosticSink()
        conv = make_conversation({"conversation": {}, "inputs": []}, diagnostics=sink)
        assert conv.intent is None
        assert "Missing intent from request body" in sink.messages(DiagnosticKind.PROTOCOL)

    def test_new_conversation(self) -> None:
        conv = make_conversation(make_low_level_request(conversation_type="NEW"), CURRENT_HEADERS)
        assert conv.is_new_conversation
        assert conv.conversation_type == "NEW"

    def test_surface_capabilities(self) -> None:
        payload = make_low_level_request(
            capabilities=["actions.capability.AUDIO_OUTPUT", "actions.capability.SCREEN_OUTPUT"]
        )
        conv = make_conversation(payload, CURRENT_HEADERS)
        assert conv.has_surface_capability("actions.capability.SCREEN_OUTPUT")
        assert not conv.has_surface_capability("actions.capability.WEB_BROWSER")

    def test_missing_surface_reports(self) -> None:
        sink = MockDiagnosticSink()
        payload = make_low_level_request()
        del payload["surface"]
        conv = make_conversation(payload, CURRENT_HEADERS, diagnostics=sink)
        assert conv.surface_capabilities == []
        assert sink.get(DiagnosticKind.PROTOCOL)

    def test_device_location(self) -> None:
        payload = make_low_level_request()
        payload["device"] = {"location": {"formattedAddress": "1 Main St", "zipCode": "12345"}}
        conv = make_conversation(payload, CURRENT_HEADERS)
        assert conv.device_location == {
            "formattedAddress": "1 Main St",
            "zipCode": "12345",
            "address": "1 Main St",
        }


class TestDialogState:
    def test_low_level_token_decoded(self) -> None:
        payload = make_low_level_request(token=state_token("ordering", {"size": "large"}))
        conv = make_conversation(payload, CURRENT_HEADERS)
        assert conv.state == DialogState(marker="ordering", data={"size": "large"})
        assert conv.data == {"size": "large"}

    def test_middleware_context_decoded(self) -> None:
        contexts = [
            {
                "name": "_actions_on_google_",
                "lifespan": 99,
                "parameters": {"state": "checkout", "data": {"total": 12}},
            }
        ]
        conv = make_conversation(make_middleware_request(contexts=contexts))
        assert conv.state.marker == "checkout"
        assert conv.data == {"total": 12}

    def test_missing_state_is_empty(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert conv.state == DialogState()

    def test_set_state(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        conv.set_state("next")
        assert conv.state.marker == "next"


class TestArguments:
    def test_arguments_by_name(self) -> None:
        arguments = [
            {"name": "number", "rawText": "five", "textValue": "5"},
            {"name": "place", "textValue": "home", "placeValue": {"name": "Home"}},
        ]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)

        assert conv.arguments["number"] == "5"
        assert conv.arguments["place"] == arguments[1]
        assert conv.get_argument("number") == "5"
        assert conv.get_argument("number", full=True) == arguments[0]

    def test_legacy_argument_records_are_camel_case(self) -> None:
        arguments = [{"name": "number", "raw_text": "five", "text_value": "5"}]
        conv = make_conversation(make_legacy_low_level_request(arguments=arguments))

        assert conv.get_argument("number") == "5"
        assert conv.get_argument("number", full=True) == {
            "name": "number",
            "rawText": "five",
            "textValue": "5",
        }

    def test_missing_argument(self) -> None:
        sink = MockDiagnosticSink()
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS, diagnostics=sink)
        assert conv.get_argument("nope") is None
        assert sink.get(DiagnosticKind.TRACE)

    def test_middleware_parameters_first(self) -> None:
        inputs = [{"intent": "actions.intent.TEXT", "arguments": [{"name": "size", "textValue": "small"}]}]
        payload = make_middleware_request(parameters={"size": "large"}, inputs=inputs)
        conv = make_conversation(payload)
        assert conv.get_argument("size") == "large"
        assert conv.get_argument("size", full=True) == {"name": "size", "textValue": "small"}

    def test_legacy_middleware_parameters_keep_their_keys(self) -> None:
        payload = make_middleware_request(parameters={"pizza_size": "large"}, legacy=True)
        conv = make_conversation(payload)
        assert conv.get_argument("pizza_size") == "large"

    def test_typed_getters(self) -> None:
        arguments = [
            {"name": "PERMISSION", "textValue": "true"},
            {"name": "CONFIRMATION", "boolValue": True},
            {"name": "DATETIME", "datetimeValue": {"date": {"year": 2024, "month": 5, "day": 1}}},
            {"name": "SIGN_IN", "extension": {"status": "OK"}},
            {"name": "REPROMPT_COUNT", "intValue": "2"},
            {"name": "IS_FINAL_REPROMPT", "boolValue": True},
            {"name": "MEDIA_STATUS", "extension": {"status": "FINISHED"}},
            {"name": "TRANSACTION_REQUIREMENTS_CHECK_RESULT", "extension": {"resultType": "OK"}},
        ]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)

        assert conv.is_permission_granted()
        assert conv.get_user_confirmation() is True
        assert conv.get_date_time() == {"date": {"year": 2024, "month": 5, "day": 1}}
        assert conv.get_sign_in_status() == "OK"
        assert conv.get_reprompt_count() == 2
        assert conv.is_final_reprompt()
        assert conv.get_media_status() == "FINISHED"
        assert conv.get_transaction_requirements_result() == "OK"

    def test_delivery_address(self) -> None:
        location = {"postalAddress": {"regionCode": "US", "postalCode": "94043"}}
        arguments = [
            {
                "name": "DELIVERY_ADDRESS_VALUE",
                "extension": {"userDecision": "ACCEPTED", "location": location},
            }
        ]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)
        assert conv.get_delivery_address() == location

    def test_rejected_delivery_address(self) -> None:
        arguments = [{"name": "DELIVERY_ADDRESS_VALUE", "extension": {"userDecision": "REJECTED"}}]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)
        assert conv.get_delivery_address() is None

    def test_getters_without_arguments(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert not conv.is_permission_granted()
        assert conv.get_user_confirmation() is None
        assert conv.get_reprompt_count() is None
        assert conv.get_transaction_decision() is None


class TestSelectedOption:
    def test_context_wins_over_argument(self) -> None:
        contexts = [{"name": "actions_intent_option", "parameters": {"OPTION": "from-context"}}]
        inputs = [{"intent": "actions.intent.OPTION", "arguments": [{"name": "OPTION", "textValue": "from-arg"}]}]
        conv = make_conversation(make_middleware_request(contexts=contexts, inputs=inputs))
        assert conv.get_selected_option() == "from-context"

    def test_middleware_falls_back_to_argument(self) -> None:
        inputs = [{"intent": "actions.intent.OPTION", "arguments": [{"name": "OPTION", "textValue": "from-arg"}]}]
        conv = make_conversation(make_middleware_request(inputs=inputs))
        assert conv.get_selected_option() == "from-arg"

    def test_low_level_argument(self) -> None:
        arguments = [{"name": "OPTION", "textValue": "k1"}]
        conv = make_conversation(
            make_low_level_request("actions.intent.OPTION", arguments=arguments), CURRENT_HEADERS
        )
        assert conv.get_selected_option() == "k1"

    def test_nothing_selected(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert conv.get_selected_option() is None


class TestContexts:
    def test_state_context_hidden(self) -> None:
        contexts = [
            {"name": "_actions_on_google_", "lifespan": 99, "parameters": {"state": None, "data": {}}},
            {"name": "pizza", "lifespan": 3, "parameters": {"size": "large", "size.original": "big"}},
        ]
        conv = make_conversation(make_middleware_request(contexts=contexts))

        assert conv.contexts == [Context(name="pizza", lifespan=3, parameters={"size": "large", "size.original": "big"})]
        assert conv.get_context_argument("pizza", "size") == {"value": "large", "original": "big"}
        assert conv.get_context_argument("pizza", "missing") is None

    def test_contexts_on_low_level_report(self) -> None:
        sink = MockDiagnosticSink()
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS, diagnostics=sink)
        assert conv.contexts == []
        conv.set_context("pizza")
        assert len(sink.get(DiagnosticKind.PROTOCOL)) == 2


class TestUserStorage:
    def test_decoded(self) -> None:
        payload = make_low_level_request(user_storage=json.dumps({"data": {"visits": 3}}))
        conv = make_conversation(payload, CURRENT_HEADERS)
        assert conv.user_storage == {"visits": 3}

    def test_unparseable_is_empty(self) -> None:
        sink = MockDiagnosticSink()
        payload = make_low_level_request(user_storage="{oops")
        conv = make_conversation(payload, CURRENT_HEADERS, diagnostics=sink)
        assert conv.user_storage == {}
        assert "Unable to parse user storage" in sink.messages(DiagnosticKind.PROTOCOL)


class TestHelperResults:
    def test_place(self) -> None:
        place = {"formattedAddress": "1600 Amphitheatre Pkwy", "name": "Googleplex"}
        arguments = [{"name": "PLACE", "placeValue": place}]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)
        assert conv.get_place() == {**place, "address": "1600 Amphitheatre Pkwy"}

    def test_place_missing(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert conv.get_place() is None

    def test_new_surface_update_and_link(self) -> None:
        arguments = [
            {"name": "NEW_SURFACE", "extension": {"status": "OK"}},
            {"name": "REGISTER_UPDATE", "extension": {"status": "CANCELLED"}},
            {"name": "LINK", "status": {"code": 9, "message": "user declined"}},
        ]
        conv = make_conversation(make_low_level_request(arguments=arguments), CURRENT_HEADERS)

        assert conv.is_new_surface() is True
        assert conv.is_update_registered() is False
        assert conv.get_link_status() == 9

    def test_helper_results_without_arguments(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert conv.is_new_surface() is False
        assert conv.is_update_registered() is False
        assert conv.get_link_status() is None


class TestRequestInfo:
    def test_sandbox_and_entitlements(self) -> None:
        payload = make_low_level_request()
        payload["isInSandbox"] = True
        entitlements = [{"packageName": "com.example.app", "entitlements": [{"sku": "premium"}]}]
        payload["user"]["packageEntitlements"] = entitlements
        conv = make_conversation(payload, CURRENT_HEADERS)

        assert conv.is_in_sandbox is True
        assert conv.package_entitlements == entitlements

    def test_defaults(self) -> None:
        conv = make_conversation(make_low_level_request(), CURRENT_HEADERS)
        assert conv.is_in_sandbox is False
        assert conv.package_entitlements is None

    def test_available_surface_capabilities(self) -> None:
        payload = make_low_level_request()
        payload["availableSurfaces"] = [
            {"capabilities": [{"name": "actions.capability.AUDIO_OUTPUT"}]},
            {
                "capabilities": [
                    {"name": "actions.capability.AUDIO_OUTPUT"},
                    {"name": "actions.capability.SCREEN_OUTPUT"},
                ]
            },
        ]
        conv = make_conversation(payload, CURRENT_HEADERS)

        assert conv.has_available_surface_capabilities("actions.capability.SCREEN_OUTPUT")
        assert conv.has_available_surface_capabilities(
            ["actions.capability.AUDIO_OUTPUT", "actions.capability.SCREEN_OUTPUT"]
        )
        assert not conv.has_available_surface_capabilities("actions.capability.WEB_BROWSER")


class TestIncomingResponses:
    def _conversation(self, messages: list[dict[str, Any]]) -> Conversation:
        payload = make_middleware_request()
        payload["result"]["fulfillment"] = {"speech": "", "messages": messages}
        return make_conversation(payload)

    def test_rich_response(self) -> None:
        conv = self._conversation(
            [
                {"type": "simple_response", "platform": "google", "textToSpeech": "Simple response one"},
                {"type": "basic_card", "platform": "google", "formattedText": "my text", "buttons": []},
                {
                    "type": "suggestion_chips",
                    "platform": "google",
                    "suggestions": [{"title": "suggestion one"}],
                },
                {
                    "type": "link_out_chip",
                    "platform": "google",
                    "destinationName": "google",
                    "url": "google.com",
                },
                {"type": 0, "speech": "Good day!"},
            ]
        )

        response = conv.get_incoming_rich_response()

        assert response.render(SchemaVersion.CURRENT) == {
            "items": [
                {"simpleResponse": {"textToSpeech": "Simple response one"}},
                {"basicCard": {"formattedText": "my text", "buttons": []}},
            ],
            "suggestions": [{"title": "suggestion one"}],
            "linkOutSuggestion": {"destinationName": "google", "url": "google.com"},
        }

    def test_list_and_carousel(self) -> None:
        items = [
            {"optionInfo": {"key": "first_item", "synonyms": []}, "title": "first item"},
            {"optionInfo": {"key": "second_item", "synonyms": []}, "title": "second item"},
        ]
        conv = self._conversation(
            [
                {"type": "list_card", "platform": "google", "title": "list_title", "items": items},
                {"type": "carousel_card", "platform": "google", "items": items},
            ]
        )

        option_list = conv.get_incoming_list()
        carousel = conv.get_incoming_carousel()

        assert option_list.title == "list_title"
        assert [item.key for item in option_list.items] == ["first_item", "second_item"]
        assert [item.title for item in carousel.items] == ["first item", "second item"]

    def test_no_messages_gives_empty_builders(self) -> None:
        conv = make_conversation(make_middleware_request())
        assert conv.get_incoming_rich_response().items == []
        assert conv.get_incoming_list().items == []
        assert conv.get_incoming_carousel().items == []

    def test_malformed_message_is_skipped(self) -> None:
        sink = MockDiagnosticSink()
        payload = make_middleware_request()
        payload["result"]["fulfillment"] = {
            "messages": [{"type": "basic_card", "buttons": "nope"}, "junk"],
        }
        conv = make_conversation(payload, diagnostics=sink)

        assert conv.get_incoming_rich_response().items == []
        assert sink.get(DiagnosticKind.PROTOCOL)


class TestMalformedRequests:
    def test_accessors_tolerate_non_object_parts(self) -> None:
        payload = {
            "user": "nobody",
            "conversation": "abc",
            "device": {"location": "here"},
            "surface": {"capabilities": ["SCREEN", {"name": "actions.capability.AUDIO_OUTPUT"}]},
            "inputs": [
                "str",
                {"intent": "actions.intent.TEXT", "arguments": [3, {"name": "x", "textValue": "y"}]},
            ],
        }
        conv = make_conversation(payload, CURRENT_HEADERS, diagnostics=MockDiagnosticSink())

        assert conv.intent == "actions.intent.TEXT"
        assert conv.user is None
        assert conv.conversation_id is None
        assert conv.device_location is None
        assert conv.surface_capabilities == ["actions.capability.AUDIO_OUTPUT"]
        assert conv.arguments == {"x": "y"}
        assert conv.state == DialogState()

    def test_middleware_with_non_object_original_request(self) -> None:
        conv = make_conversation(
            {"result": {"action": "x", "contexts": "nope"}, "originalRequest": "str"},
            diagnostics=MockDiagnosticSink(),
        )
        assert conv.protocol is Protocol.MIDDLEWARE
        assert conv.intent == "x"
        assert conv.request == {}
        assert conv.contexts == []

    def test_malformed_context_is_skipped(self) -> None:
        sink = MockDiagnosticSink()
        contexts = [{"name": "pizza", "lifespan": "forever"}, {"name": "drinks", "lifespan": 2}]
        conv = make_conversation(make_middleware_request(contexts=contexts), diagnostics=sink)

        assert conv.contexts == [Context(name="drinks", lifespan=2)]
        assert sink.get(DiagnosticKind.PROTOCOL)
