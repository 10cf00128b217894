"""Tests for RichResponse composition and the simple/card/media/order builders."""

from __future__ import annotations

from datetime import UTC, datetime

from fulfillkit.diagnostics import DiagnosticKind, MockDiagnosticSink
from fulfillkit.models.enums import MediaImageType, SchemaVersion
from fulfillkit.response.base import is_padded_ssml, is_speech_ssml, is_ssml
from fulfillkit.response.browse import BrowseCarousel, BrowseItem
from fulfillkit.response.card import BasicCard
from fulfillkit.response.media import MediaObject, MediaResponse
from fulfillkit.response.order import OrderUpdate
from fulfillkit.response.rich import RichResponse, is_valid_suggestion_text
from fulfillkit.response.simple import SimpleResponse, build_simple_response


class TestSsmlDetection:
    def test_strict(self) -> None:
        assert is_ssml("<speak>Hello</speak>")
        assert is_ssml('<speak version="1.0">Hi <break time="1s"/> there</speak>')
        assert not is_ssml(" <speak>Hello</speak>")
        assert not is_ssml("Hello")
        assert not is_ssml(None)

    def test_padded(self) -> None:
        assert is_padded_ssml("  <speak>Hello</speak>\n")
        assert is_speech_ssml("  <speak>Hello</speak>\n")
        assert not is_speech_ssml("say <speak>hi</speak>")


class TestSimpleResponse:
    def test_plain_text(self) -> None:
        response = SimpleResponse.from_speech("Hello")
        assert response.text_to_speech == "Hello"
        assert response.ssml is None
        assert not response.is_ssml

    def test_ssml_goes_to_ssml_field(self) -> None:
        response = SimpleResponse.from_speech("<speak>Hello</speak>")
        assert response.ssml == "<speak>Hello</speak>"
        assert response.text_to_speech is None
        assert response.speech == "<speak>Hello</speak>"

    def test_mapping_with_display_text(self) -> None:
        response, outcome = build_simple_response({"speech": "Hi", "displayText": "Hi!"})
        assert outcome.applied
        assert response == SimpleResponse(text_to_speech="Hi", display_text="Hi!")

    def test_mapping_without_speech_rejected(self) -> None:
        response, outcome = build_simple_response({"displayText": "Hi!"})
        assert response is None
        assert not outcome.applied

    def test_empty_string_rejected(self) -> None:
        response, outcome = build_simple_response("")
        assert response is None
        assert outcome.diagnostic is not None

    def test_render_versions(self) -> None:
        response = SimpleResponse(text_to_speech="Hi", display_text="Hi!")
        assert response.render(SchemaVersion.CURRENT) == {"textToSpeech": "Hi", "displayText": "Hi!"}
        assert response.render(SchemaVersion.LEGACY) == {"text_to_speech": "Hi", "display_text": "Hi!"}


class TestRichResponse:
    def test_third_simple_response_rejected(self) -> None:
        sink = MockDiagnosticSink()
        response = (
            RichResponse(diagnostics=sink)
            .add_simple_response("one")
            .add_simple_response("two")
            .add_simple_response("three")
        )

        assert response.count("simple_response") == 2
        assert [r.speech for r in response.simple_responses] == ["one", "two"]
        assert sink.messages(DiagnosticKind.VALIDATION) == [
            "Cannot include >2 SimpleResponses in RichResponse"
        ]

    def test_simple_response_displaces_leading_card(self) -> None:
        response = RichResponse().add_basic_card(BasicCard().set_body_text("body"))
        response.add_simple_response("hello")

        assert response.items[0].simple_response is not None
        assert response.items[1].basic_card is not None
        assert response.starts_with_simple_response

    def test_simple_response_displaces_leading_order_update(self) -> None:
        response = RichResponse().add_order_update(OrderUpdate(action_order_id="o-1"))
        response.add_simple_response("Your order")

        assert response.items[0].simple_response is not None
        assert response.items[1].structured_response is not None

    def test_second_simple_response_appended(self) -> None:
        response = (
            RichResponse()
            .add_simple_response("first")
            .add_basic_card(BasicCard().set_title("card"))
            .add_simple_response("second")
        )
        assert [item.simple_response is not None for item in response.items] == [True, False, True]

    def test_one_basic_card(self) -> None:
        sink = MockDiagnosticSink()
        response = (
            RichResponse(diagnostics=sink)
            .add_simple_response("hi")
            .add_basic_card(BasicCard().set_title("a"))
            .add_basic_card(BasicCard().set_title("b"))
        )
        assert response.count("basic_card") == 1
        assert response.items[1].basic_card.title == "a"  # type: ignore[union-attr]
        assert sink.get(DiagnosticKind.VALIDATION)

    def test_one_media_response(self) -> None:
        sink = MockDiagnosticSink()
        media = MediaResponse().add_media_objects(MediaObject(name="Song", content_url="https://x/a.mp3"))
        response = RichResponse(diagnostics=sink).add_media_response(media).add_media_response(media)
        assert response.count("media_response") == 1
        assert len(sink.diagnostics) == 1

    def test_one_order_update(self) -> None:
        sink = MockDiagnosticSink()
        response = (
            RichResponse(diagnostics=sink)
            .add_order_update(OrderUpdate(action_order_id="1"))
            .add_order_update(OrderUpdate(action_order_id="2"))
        )
        assert response.count("structured_response") == 1

    def test_wrong_types_rejected(self) -> None:
        sink = MockDiagnosticSink()
        response = RichResponse(diagnostics=sink)
        response.add_basic_card("card")  # type: ignore[arg-type]
        response.add_browse_carousel(None)  # type: ignore[arg-type]
        assert response.items == []
        assert len(sink.get(DiagnosticKind.VALIDATION)) == 2

    def test_browse_carousels_are_not_counted(self) -> None:
        item = BrowseItem().set_title("Page").set_url("https://example.com")
        response = (
            RichResponse()
            .add_browse_carousel(BrowseCarousel().add_items(item))
            .add_browse_carousel(BrowseCarousel().add_items(item))
        )
        assert response.count("carousel_browse") == 2

    def test_long_suggestion_dropped_valid_kept(self) -> None:
        sink = MockDiagnosticSink()
        response = RichResponse(diagnostics=sink).add_suggestions(["Yes", "x" * 26, "No"])

        assert [s.title for s in response.suggestions] == ["Yes", "No"]
        warnings = sink.get(DiagnosticKind.VALIDATION)
        assert len(warnings) == 1
        assert "x" * 26 in warnings[0].message

    def test_single_suggestion_string(self) -> None:
        response = RichResponse().add_suggestions("Menu")
        assert response.render(SchemaVersion.CURRENT)["suggestions"] == [{"title": "Menu"}]

    def test_suggestion_text_length(self) -> None:
        assert is_valid_suggestion_text("x" * 25)
        assert not is_valid_suggestion_text("x" * 26)
        assert not is_valid_suggestion_text("")

    def test_link_out_replaced(self) -> None:
        response = (
            RichResponse()
            .add_suggestion_link("Site", "https://a.example")
            .add_suggestion_link("Other", "https://b.example")
        )
        assert response.link_out_suggestion is not None
        assert response.link_out_suggestion.destination_name == "Other"
        assert response.render(SchemaVersion.CURRENT)["linkOutSuggestion"] == {
            "destinationName": "Other",
            "url": "https://b.example",
        }

    def test_empty_link_out_rejected(self) -> None:
        sink = MockDiagnosticSink()
        response = RichResponse(diagnostics=sink).add_suggestion_link("", "https://a.example")
        assert response.link_out_suggestion is None
        assert sink.messages() == ["destinationName cannot be empty"]

    def test_render_current(self) -> None:
        response = RichResponse().add_simple_response("Hi").add_suggestions("Go")
        assert response.render(SchemaVersion.CURRENT) == {
            "items": [{"simpleResponse": {"textToSpeech": "Hi"}}],
            "suggestions": [{"title": "Go"}],
        }

    def test_render_legacy(self) -> None:
        response = RichResponse().add_simple_response({"speech": "Hi", "displayText": "Hello"})
        assert response.render(SchemaVersion.LEGACY) == {
            "items": [{"simple_response": {"text_to_speech": "Hi", "display_text": "Hello"}}],
            "suggestions": [],
        }


class TestBasicCard:
    def test_builder(self) -> None:
        card = (
            BasicCard()
            .set_title("Title")
            .set_subtitle("Sub")
            .set_body_text("Body")
            .set_image("https://x/img.png", "An image")
            .add_button("Open", "https://example.com")
            .set_image_display("CROPPED")
        )
        assert card.render(SchemaVersion.CURRENT) == {
            "title": "Title",
            "subtitle": "Sub",
            "formattedText": "Body",
            "image": {"url": "https://x/img.png", "accessibilityText": "An image"},
            "buttons": [{"title": "Open", "openUrlAction": {"url": "https://example.com"}}],
            "imageDisplayOptions": "CROPPED",
        }

    def test_invalid_values_rejected(self) -> None:
        sink = MockDiagnosticSink()
        card = BasicCard(diagnostics=sink).set_title("Kept").set_title("").set_image_display("HUGE")
        card.set_image("https://x/img.png", "")
        assert card.title == "Kept"
        assert card.image_display_options is None
        assert card.image is None
        assert len(sink.get(DiagnosticKind.VALIDATION)) == 3

    def test_with_diagnostics(self) -> None:
        sink = MockDiagnosticSink()
        BasicCard().with_diagnostics(sink).add_button("", "https://example.com")
        assert sink.messages() == ["text cannot be empty"]


class TestMedia:
    def test_image_types_are_exclusive(self) -> None:
        media = MediaObject(name="Song", content_url="https://x/a.mp3")
        media.set_image("https://x/icon.png", MediaImageType.ICON)
        media.set_image("https://x/large.png", MediaImageType.LARGE)
        assert media.icon is None
        assert media.large_image is not None
        assert media.large_image.url == "https://x/large.png"

    def test_invalid_image_type(self) -> None:
        sink = MockDiagnosticSink()
        media = MediaObject(name="Song", content_url="https://x/a.mp3", diagnostics=sink)
        media.set_image("https://x/icon.png", "THUMBNAIL")
        assert media.icon is None
        assert media.large_image is None
        assert sink.messages() == ["Invalid image type THUMBNAIL"]

    def test_render(self) -> None:
        media = MediaResponse().add_media_objects(
            [
                MediaObject(name="Song", content_url="https://x/a.mp3").set_description("A song"),
            ]
        )
        assert media.render(SchemaVersion.LEGACY) == {
            "media_type": "AUDIO",
            "media_objects": [
                {"name": "Song", "content_url": "https://x/a.mp3", "description": "A song"}
            ],
        }


class TestOrderUpdate:
    def test_builder(self) -> None:
        update = (
            OrderUpdate(action_order_id="order-1")
            .set_order_state("CONFIRMED", "Order confirmed")
            .set_update_time(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
            .add_order_management_action("MODIFY", "Modify order", "https://example.com/o/1")
            .set_receipt("order-1", "ORD-1")
            .set_total_price("ESTIMATE", "USD", 12, 500000000)
            .set_user_notification("Confirmed", "Your order is on its way")
        )
        rendered = update.render(SchemaVersion.CURRENT)
        assert rendered["actionOrderId"] == "order-1"
        assert rendered["orderState"] == {"state": "CONFIRMED", "label": "Order confirmed"}
        assert rendered["updateTime"] == "2024-01-02T03:04:05+00:00"
        assert rendered["orderManagementActions"][0]["button"]["openUrlAction"] == {
            "url": "https://example.com/o/1"
        }
        assert rendered["totalPrice"] == {
            "type": "ESTIMATE",
            "amount": {"currencyCode": "USD", "units": "12", "nanos": 500000000},
        }

    def test_extra_fields_pass_through(self) -> None:
        update = OrderUpdate(action_order_id="o", lineItemUpdates={"item-1": {"orderState": {}}})
        assert update.render(SchemaVersion.CURRENT)["lineItemUpdates"] == {"item-1": {"orderState": {}}}

    def test_extra_fields_keep_keys_in_legacy(self) -> None:
        update = OrderUpdate(action_order_id="o", lineItemUpdates={"item-1": {"orderState": {}}})
        rendered = update.render(SchemaVersion.LEGACY)
        assert rendered["action_order_id"] == "o"
        assert rendered["lineItemUpdates"] == {"item-1": {"orderState": {}}}
        assert "line_item_updates" not in rendered

    def test_empty_state_rejected(self) -> None:
        sink = MockDiagnosticSink()
        update = OrderUpdate(action_order_id="o", diagnostics=sink).set_order_state("", "label")
        assert update.order_state is None
        assert sink.get(DiagnosticKind.VALIDATION)
