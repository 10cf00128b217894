"""Conversation: the per-turn facade handed to intent handlers."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fulfillkit.core.config import FulfillmentConfig
from fulfillkit.core.emitter import (
    TurnOutput,
    error_body,
    prepare_content,
    prepare_no_input_prompts,
    render_turn,
)
from fulfillkit.core.errors import ValidationError
from fulfillkit.diagnostics import DiagnosticSink, default_sink
from fulfillkit.intents import specs
from fulfillkit.intents.base import SystemIntentSpec
from fulfillkit.intents.transaction import TransactionConfig
from fulfillkit.models.enums import (
    BuiltInArg,
    ConversationType,
    DeliveryAddressDecision,
    Protocol,
    SchemaVersion,
)
from fulfillkit.models.request import Context, DialogState, RawInput, TurnResult, WireFormat
from fulfillkit.protocol.state import DialogStateCodec
from fulfillkit.response import incoming
from fulfillkit.response.browse import BrowseCarousel, BrowseItem
from fulfillkit.response.card import BasicCard
from fulfillkit.response.media import MediaObject, MediaResponse
from fulfillkit.response.option import Carousel, List, OptionItem
from fulfillkit.response.order import OrderUpdate
from fulfillkit.response.rich import RichResponse

_COMPONENT = "core.conversation"

SELECT_EVENT_CONTEXT = "actions_intent_option"
ORIGINAL_SUFFIX = ".original"
_ARGUMENT_META_KEYS = frozenset({"name", "rawText"})


def argument_value(argument: Mapping[str, Any]) -> Any:
    """Scalar value of a raw argument, or the record itself.

    A raw argument whose only descriptive field (besides ``name`` and
    ``rawText``) is, say, ``textValue`` yields that value; anything richer
    yields the whole record.
    """
    fields = [key for key in argument if key not in _ARGUMENT_META_KEYS]
    if len(fields) == 1:
        return argument[fields[0]]
    return dict(argument)


def as_mapping(value: Any) -> Mapping[str, Any]:
    """``value`` when it is a JSON object, else an empty mapping."""
    return value if isinstance(value, Mapping) else {}


def as_records(value: Any) -> list[Mapping[str, Any]]:
    """The object entries of a JSON array; any other value yields ``[]``."""
    if not isinstance(value, list | tuple):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class Conversation:
    """Normalized view of one turn plus its terminal response calls.

    Read accessors never raise: a missing optional field is reported as a
    protocol diagnostic and yields ``None``. The first terminal call
    (``ask``, ``tell`` or any ``ask_for_*``) decides the turn's
    :class:`TurnResult`; later calls are reported and ignored.
    """

    def __init__(
        self,
        wire: WireFormat,
        body: Mapping[str, Any],
        *,
        config: FulfillmentConfig | None = None,
        diagnostics: DiagnosticSink | None = None,
        codec: DialogStateCodec | None = None,
    ) -> None:
        self._wire = wire
        self._body: dict[str, Any] = dict(body)
        self._config = config or FulfillmentConfig()
        self._diagnostics = diagnostics or default_sink()
        self._codec = codec or DialogStateCodec(self._config, diagnostics=self._diagnostics)
        self._contexts_out: dict[str, Context] = {}
        self._result: TurnResult | None = None

        if wire.protocol is Protocol.LOW_LEVEL:
            token = as_mapping(self._body.get("conversation")).get("conversationToken")
            self._state = self._codec.decode(Protocol.LOW_LEVEL, token)
        else:
            self._state = self._codec.decode(Protocol.MIDDLEWARE, self._result_field("contexts"))

        self._user_storage = self._decode_user_storage()
        self._initial_user_storage = copy.deepcopy(self._user_storage)

    # -- wire format -------------------------------------------------------

    @property
    def wire(self) -> WireFormat:
        return self._wire

    @property
    def protocol(self) -> Protocol:
        return self._wire.protocol

    @property
    def schema_version(self) -> SchemaVersion:
        return self._wire.schema_version

    @property
    def body(self) -> dict[str, Any]:
        """The normalized request body (platform request in camelCase)."""
        return self._body

    @property
    def request(self) -> Mapping[str, Any]:
        """The platform request: the body itself, or ``originalRequest.data``."""
        if self.protocol is Protocol.LOW_LEVEL:
            return self._body
        return as_mapping(as_mapping(self._body.get("originalRequest")).get("data"))

    def _result_field(self, name: str) -> Any:
        return as_mapping(self._body.get("result")).get(name)

    # -- intent and input --------------------------------------------------

    @property
    def intent(self) -> str | None:
        if self.protocol is Protocol.MIDDLEWARE:
            intent = self._result_field("action") or as_mapping(self._result_field("metadata")).get(
                "intentName"
            )
        else:
            inputs = as_records(self.request.get("inputs"))
            intent = inputs[0].get("intent") if inputs else None
        if not intent or not isinstance(intent, str):
            self._diagnostics.protocol(_COMPONENT, "Missing intent from request body")
            return None
        return intent

    @property
    def raw_inputs(self) -> list[RawInput]:
        raw_inputs: list[RawInput] = []
        for user_input in as_records(self.request.get("inputs")):
            for raw in as_records(user_input.get("rawInputs")):
                raw_inputs.append(
                    RawInput(input_type=as_text(raw.get("inputType")), query=as_text(raw.get("query")))
                )
        return raw_inputs

    @property
    def raw_input(self) -> str | None:
        """What the user said: ``resolvedQuery`` or the first raw input's query."""
        if self.protocol is Protocol.MIDDLEWARE:
            query = self._result_field("resolvedQuery")
        else:
            query = next((raw.query for raw in self.raw_inputs if raw.query), None)
        if not query:
            self._diagnostics.protocol(_COMPONENT, "No raw input")
            return None
        return query

    @property
    def input_type(self) -> str | None:
        for raw in self.raw_inputs:
            if raw.input_type:
                return raw.input_type
        self._diagnostics.protocol(_COMPONENT, "No input type in incoming request")
        return None

    # -- user, device, surface ---------------------------------------------

    @property
    def user(self) -> dict[str, Any] | None:
        user = as_mapping(self.request.get("user"))
        if not user:
            self._diagnostics.protocol(_COMPONENT, "No user object")
            return None
        return dict(user)

    @property
    def user_id(self) -> str | None:
        return (self.user or {}).get("userId")

    @property
    def user_name(self) -> dict[str, Any] | None:
        return (self.user or {}).get("profile")

    @property
    def user_locale(self) -> str | None:
        return (self.user or {}).get("locale")

    @property
    def last_seen(self) -> str | None:
        return (self.user or {}).get("lastSeen")

    @property
    def package_entitlements(self) -> list[dict[str, Any]] | None:
        """Digital goods the user bought in verified Android apps, if sent."""
        entitlements = as_records((self.user or {}).get("packageEntitlements"))
        return [dict(entry) for entry in entitlements] or None

    @property
    def device_location(self) -> dict[str, Any] | None:
        location = as_mapping(as_mapping(self.request.get("device")).get("location"))
        if not location:
            return None
        return {**location, "address": location.get("formattedAddress")}

    @staticmethod
    def _capability_names(surface: Mapping[str, Any]) -> list[str]:
        return [
            name
            for name in (c.get("name") for c in as_records(surface.get("capabilities")))
            if isinstance(name, str)
        ]

    @property
    def surface_capabilities(self) -> list[str]:
        names = self._capability_names(as_mapping(self.request.get("surface")))
        if not names:
            self._diagnostics.protocol(_COMPONENT, "No surface capabilities in incoming request")
        return names

    def has_surface_capability(self, capability: str) -> bool:
        return capability in self.surface_capabilities

    @property
    def available_surfaces(self) -> list[dict[str, Any]]:
        return [dict(surface) for surface in as_records(self.request.get("availableSurfaces"))]

    def has_available_surface_capabilities(self, capabilities: str | Sequence[str]) -> bool:
        """True when one other surface of the user offers every capability."""
        wanted = [capabilities] if isinstance(capabilities, str) else list(capabilities)
        for surface in self.available_surfaces:
            names = self._capability_names(surface)
            if all(capability in names for capability in wanted):
                return True
        return False

    @property
    def is_in_sandbox(self) -> bool:
        return self.request.get("isInSandbox") is True

    @property
    def conversation_id(self) -> str | None:
        return as_mapping(self.request.get("conversation")).get("conversationId")

    @property
    def conversation_type(self) -> str | None:
        return as_mapping(self.request.get("conversation")).get("type")

    @property
    def is_new_conversation(self) -> bool:
        return self.conversation_type == ConversationType.NEW

    # -- dialog state ------------------------------------------------------

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def data(self) -> dict[str, Any]:
        """Developer data carried to the next turn."""
        return self._state.data

    def set_state(self, marker: str | None) -> None:
        """Set the "current stage" marker used for state-scoped routing."""
        self._state.marker = marker

    # -- user storage ------------------------------------------------------

    def _decode_user_storage(self) -> dict[str, Any]:
        raw = as_mapping(self.request.get("user")).get("userStorage")
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            self._diagnostics.protocol(_COMPONENT, "Unable to parse user storage")
            return {}
        data = parsed.get("data") if isinstance(parsed, Mapping) else None
        return dict(data) if isinstance(data, Mapping) else {}

    @property
    def user_storage(self) -> dict[str, Any]:
        """Data persisted across conversations; sent back only when changed."""
        return self._user_storage

    def _user_storage_out(self) -> str | None:
        if self._user_storage == self._initial_user_storage:
            return None
        return json.dumps({"data": self._user_storage})

    # -- arguments ---------------------------------------------------------

    def _argument_records(self) -> list[Mapping[str, Any]]:
        return [
            argument
            for user_input in as_records(self.request.get("inputs"))
            for argument in as_records(user_input.get("arguments"))
        ]

    def _find_argument(self, *names: str) -> Mapping[str, Any] | None:
        for argument in self._argument_records():
            if argument.get("name") in names:
                return argument
        return None

    def _extension(self, name: str) -> Mapping[str, Any]:
        return as_mapping(as_mapping(self._find_argument(name)).get("extension"))

    @property
    def arguments(self) -> dict[str, Any]:
        """Platform arguments by name, scalars where the argument has one value."""
        values: dict[str, Any] = {}
        for argument in self._argument_records():
            name = argument.get("name")
            if isinstance(name, str) and name and name not in values:
                values[name] = argument_value(argument)
        return values

    def get_argument(self, name: str, *, full: bool = False) -> Any:
        """Value of argument ``name``.

        MIDDLEWARE requests look in ``result.parameters`` first. With
        ``full=True`` the complete platform argument record is returned.
        """
        if not name:
            self._diagnostics.validation(_COMPONENT, "Invalid argument name")
            return None
        if not full and self.protocol is Protocol.MIDDLEWARE:
            parameters = as_mapping(self._result_field("parameters"))
            if parameters.get(name):
                return parameters[name]
        argument = self._find_argument(name)
        if argument is None:
            self._diagnostics.trace(_COMPONENT, f"Failed to get argument value: {name}")
            return None
        return dict(argument) if full else argument_value(argument)

    def get_context_argument(self, context_name: str, name: str) -> dict[str, Any] | None:
        """``{"value": ..., "original": ...}`` of a context parameter (MIDDLEWARE)."""
        if not context_name or not name:
            self._diagnostics.validation(_COMPONENT, "Invalid context or argument name")
            return None
        context = self.get_context(context_name)
        if context is None:
            return None
        parameters = as_mapping(context.get("parameters"))
        if not parameters.get(name):
            return None
        argument = {"value": parameters[name]}
        if parameters.get(name + ORIGINAL_SUFFIX):
            argument["original"] = parameters[name + ORIGINAL_SUFFIX]
        return argument

    def get_selected_option(self) -> Any:
        """Key of the option the user picked from a list or carousel."""
        if self.protocol is Protocol.MIDDLEWARE:
            argument = self.get_context_argument(SELECT_EVENT_CONTEXT, BuiltInArg.OPTION)
            if argument and argument.get("value"):
                return argument["value"]
        option = self.get_argument(BuiltInArg.OPTION)
        if not option:
            self._diagnostics.trace(_COMPONENT, "Failed to get selected option")
            return None
        return option

    def is_permission_granted(self) -> bool:
        argument = as_mapping(self._find_argument(BuiltInArg.PERMISSION_GRANTED))
        return argument.get("textValue") == "true" or argument.get("boolValue") is True

    def get_transaction_requirements_result(self) -> str | None:
        return self._extension(BuiltInArg.TRANSACTION_REQ_CHECK_RESULT).get("resultType")

    def get_delivery_address(self) -> dict[str, Any] | None:
        argument = self._find_argument(
            BuiltInArg.DELIVERY_ADDRESS_VALUE, BuiltInArg.TRANSACTION_DECISION_VALUE
        )
        extension = as_mapping(as_mapping(argument).get("extension"))
        if extension.get("userDecision") != DeliveryAddressDecision.ACCEPTED:
            return None
        location = as_mapping(extension.get("location"))
        return dict(location) if location.get("postalAddress") else None

    def get_transaction_decision(self) -> dict[str, Any] | None:
        extension = self._extension(BuiltInArg.TRANSACTION_DECISION_VALUE)
        return dict(extension) if extension else None

    def get_place(self) -> dict[str, Any] | None:
        """The place picked after :meth:`ask_for_place`, with ``address`` filled in."""
        place = as_mapping(as_mapping(self._find_argument(BuiltInArg.PLACE)).get("placeValue"))
        if not place:
            self._diagnostics.trace(_COMPONENT, "Failed to get place information")
            return None
        return {**place, "address": place.get("formattedAddress")}

    def get_user_confirmation(self) -> bool | None:
        argument = self._find_argument(BuiltInArg.CONFIRMATION)
        return None if argument is None else argument.get("boolValue", False)

    def get_date_time(self) -> dict[str, Any] | None:
        return as_mapping(self._find_argument(BuiltInArg.DATETIME)).get("datetimeValue")

    def get_sign_in_status(self) -> str | None:
        return self._extension(BuiltInArg.SIGN_IN).get("status")

    def is_new_surface(self) -> bool:
        """True when the user moved to the surface requested by :meth:`ask_for_new_surface`."""
        return self._extension(BuiltInArg.NEW_SURFACE).get("status") == "OK"

    def is_update_registered(self) -> bool:
        return self._extension(BuiltInArg.REGISTER_UPDATE).get("status") == "OK"

    def get_link_status(self) -> int | None:
        """Status code of the deep link requested by :meth:`ask_to_deep_link`."""
        status = as_mapping(as_mapping(self._find_argument(BuiltInArg.LINK)).get("status"))
        return status.get("code") or None

    def get_media_status(self) -> str | None:
        return self._extension(BuiltInArg.MEDIA_STATUS).get("status")

    def get_reprompt_count(self) -> int | None:
        value = as_mapping(self._find_argument(BuiltInArg.REPROMPT_COUNT)).get("intValue")
        try:
            return None if value is None else int(value)
        except (TypeError, ValueError):
            self._diagnostics.protocol(_COMPONENT, f"Invalid reprompt count: {value!r}")
            return None

    def is_final_reprompt(self) -> bool:
        return bool(as_mapping(self._find_argument(BuiltInArg.IS_FINAL_REPROMPT)).get("boolValue"))

    # -- contexts (MIDDLEWARE) ---------------------------------------------

    def _incoming_contexts(self) -> list[Mapping[str, Any]] | None:
        if self.protocol is not Protocol.MIDDLEWARE:
            self._diagnostics.protocol(_COMPONENT, "Contexts are only available for middleware requests")
            return None
        contexts = self._result_field("contexts")
        if contexts is None:
            self._diagnostics.protocol(_COMPONENT, "No contexts included in request")
            return None
        return as_records(contexts)

    @property
    def contexts(self) -> list[Context]:
        """Incoming developer contexts, without the reserved state context."""
        contexts: list[Context] = []
        for context in self._incoming_contexts() or []:
            if context.get("name") == self._codec.context_name:
                continue
            try:
                contexts.append(
                    Context(
                        name=context.get("name", ""),
                        lifespan=context.get("lifespan", 1),
                        parameters=as_mapping(context.get("parameters")),
                    )
                )
            except PydanticValidationError:
                self._diagnostics.protocol(_COMPONENT, f"Skipping malformed context: {context.get('name')!r}")
        return contexts

    def get_context(self, name: str) -> dict[str, Any] | None:
        for context in self._incoming_contexts() or []:
            if context.get("name") == name:
                return dict(context)
        self._diagnostics.trace(_COMPONENT, f"Failed to get context: {name}")
        return None

    def set_context(
        self,
        name: str,
        lifespan: int = 1,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        """Send a context with the response; setting a name twice replaces it."""
        if not name:
            self._diagnostics.validation(_COMPONENT, "Invalid context name")
            return
        if self.protocol is not Protocol.MIDDLEWARE:
            self._diagnostics.protocol(_COMPONENT, "Contexts are only available for middleware requests")
            return
        self._contexts_out[name] = Context(
            name=name, lifespan=lifespan, parameters=dict(parameters or {})
        )

    # -- console-authored responses (MIDDLEWARE) ----------------------------

    def _fulfillment_messages(self) -> list[Any]:
        messages = as_mapping(self._result_field("fulfillment")).get("messages")
        return messages if isinstance(messages, list) else []

    def get_incoming_rich_response(self) -> RichResponse:
        """The rich response built in the middleware console; empty if none."""
        return incoming.rich_response_from_messages(self._fulfillment_messages(), self._diagnostics)

    def get_incoming_list(self) -> List:
        return incoming.list_from_messages(self._fulfillment_messages(), self._diagnostics)

    def get_incoming_carousel(self) -> Carousel:
        return incoming.carousel_from_messages(self._fulfillment_messages(), self._diagnostics)

    # -- builder factories ---------------------------------------------------

    def build_rich_response(self) -> RichResponse:
        return RichResponse(diagnostics=self._diagnostics)

    def build_basic_card(self, body_text: str | None = None) -> BasicCard:
        card = BasicCard(diagnostics=self._diagnostics)
        if body_text:
            card.set_body_text(body_text)
        return card

    def build_list(self, title: str | None = None) -> List:
        option_list = List(diagnostics=self._diagnostics)
        if title:
            option_list.set_title(title)
        return option_list

    def build_carousel(self) -> Carousel:
        return Carousel(diagnostics=self._diagnostics)

    def build_option_item(
        self,
        key: str | None = None,
        synonyms: str | Sequence[str] | None = None,
    ) -> OptionItem:
        item = OptionItem(diagnostics=self._diagnostics)
        if key:
            item.set_key(key)
        if synonyms:
            item.add_synonyms(synonyms)
        return item

    def build_browse_carousel(self) -> BrowseCarousel:
        return BrowseCarousel(diagnostics=self._diagnostics)

    def build_browse_item(self, title: str | None = None, url: str | None = None) -> BrowseItem:
        item = BrowseItem(diagnostics=self._diagnostics)
        if title:
            item.set_title(title)
        if url:
            item.set_url(url)
        return item

    def build_media_response(self) -> MediaResponse:
        return MediaResponse(diagnostics=self._diagnostics)

    def build_media_object(self, name: str, url: str) -> MediaObject:
        return MediaObject(name=name, content_url=url, diagnostics=self._diagnostics)

    def build_order_update(self, order_id: str, *, google_provided: bool = False) -> OrderUpdate:
        if google_provided:
            return OrderUpdate(google_order_id=order_id, diagnostics=self._diagnostics)
        return OrderUpdate(action_order_id=order_id, diagnostics=self._diagnostics)

    # -- terminal calls ------------------------------------------------------

    @property
    def result(self) -> TurnResult | None:
        """The recorded response of this turn, ``None`` until a terminal call."""
        return self._result

    @property
    def responded(self) -> bool:
        return self._result is not None

    def ask(self, content: Any, no_input_prompts: Sequence[str] | None = None) -> TurnResult:
        """Respond and keep the microphone open."""
        return self._respond(content, expect_user_response=True, no_input_prompts=no_input_prompts)

    def tell(self, content: Any) -> TurnResult:
        """Respond and end the conversation."""
        return self._respond(content, expect_user_response=False)

    def ask_with_list(self, prompt: Any, option_list: List) -> TurnResult:
        return self._ask_system_intent(lambda: specs.list_spec(option_list), prompt=prompt)

    def ask_with_carousel(self, prompt: Any, carousel: Carousel) -> TurnResult:
        return self._ask_system_intent(lambda: specs.carousel_spec(carousel), prompt=prompt)

    def ask_for_permissions(self, context: str, permissions: Sequence[str]) -> TurnResult:
        return self._ask_system_intent(lambda: specs.permission_spec(context, permissions))

    def ask_for_permission(self, context: str, permission: str) -> TurnResult:
        return self.ask_for_permissions(context, [permission])

    def ask_for_update_permission(
        self,
        intent: str,
        arguments: Sequence[Mapping[str, Any]] | None = None,
    ) -> TurnResult:
        return self._ask_system_intent(lambda: specs.update_permission_spec(intent, arguments))

    def ask_for_transaction_requirements(self, config: TransactionConfig | None = None) -> TurnResult:
        return self._ask_system_intent(lambda: specs.transaction_requirements_spec(config))

    def ask_for_transaction_decision(
        self,
        order: Mapping[str, Any],
        config: TransactionConfig | None = None,
    ) -> TurnResult:
        return self._ask_system_intent(lambda: specs.transaction_decision_spec(order, config))

    def ask_for_delivery_address(self, reason: str) -> TurnResult:
        return self._ask_system_intent(lambda: specs.delivery_address_spec(reason))

    def ask_for_confirmation(self, prompt: str | None = None) -> TurnResult:
        return self._ask_system_intent(lambda: specs.confirmation_spec(prompt))

    def ask_for_date_time(
        self,
        initial_prompt: str | None = None,
        date_prompt: str | None = None,
        time_prompt: str | None = None,
    ) -> TurnResult:
        return self._ask_system_intent(
            lambda: specs.datetime_spec(initial_prompt, date_prompt, time_prompt)
        )

    def ask_for_sign_in(self, context: str | None = None) -> TurnResult:
        return self._ask_system_intent(lambda: specs.sign_in_spec(context))

    def ask_for_place(self, request_prompt: str, permission_context: str) -> TurnResult:
        return self._ask_system_intent(lambda: specs.place_spec(request_prompt, permission_context))

    def ask_for_new_surface(
        self,
        context: str,
        notification_title: str,
        capabilities: str | Sequence[str],
    ) -> TurnResult:
        """Ask to continue on another of the user's surfaces that has ``capabilities``."""
        return self._ask_system_intent(
            lambda: specs.new_surface_spec(context, notification_title, capabilities)
        )

    def ask_to_register_daily_update(
        self,
        intent: str,
        arguments: Sequence[Mapping[str, Any]] | None = None,
    ) -> TurnResult:
        return self._ask_system_intent(lambda: specs.register_update_spec(intent, arguments))

    def ask_to_deep_link(
        self,
        prompt: Any,
        destination_name: str,
        url: str,
        package_name: str,
        reason: str | None = None,
    ) -> TurnResult:
        """Offer to hand the user off to an Android app; ``prompt`` may be ``None``."""
        return self._ask_system_intent(
            lambda: specs.link_spec(destination_name, url, package_name, reason), prompt=prompt
        )

    def _ask_system_intent(
        self,
        build: Callable[[], SystemIntentSpec],
        *,
        prompt: Any = None,
    ) -> TurnResult:
        if self._result is not None:
            return self._already_responded(self._result)
        try:
            spec: SystemIntentSpec = build()
        except ValidationError as exc:
            return self._fail(str(exc))
        return self._respond(
            prompt if prompt is not None else spec.placeholder,
            expect_user_response=True,
            system_intent=spec,
        )

    def _respond(
        self,
        content: Any,
        *,
        expect_user_response: bool,
        no_input_prompts: Sequence[str] | None = None,
        system_intent: SystemIntentSpec | None = None,
    ) -> TurnResult:
        if self._result is not None:
            return self._already_responded(self._result)
        try:
            prompt = prepare_content(content)
            reprompts = prepare_no_input_prompts(no_input_prompts)
        except ValidationError as exc:
            return self._fail(str(exc))
        output = TurnOutput(
            prompt=prompt,
            expect_user_response=expect_user_response,
            state=self._state,
            no_input_prompts=reprompts,
            system_intent=system_intent,
            contexts=list(self._contexts_out.values()),
            user_storage=self._user_storage_out(),
        )
        self._result = TurnResult(status=200, body=render_turn(self._wire, output, self._codec))
        return self._result

    def _fail(self, message: str) -> TurnResult:
        self._diagnostics.validation(_COMPONENT, message)
        self._result = TurnResult(status=400, body=error_body(message))
        return self._result

    def _already_responded(self, result: TurnResult) -> TurnResult:
        self._diagnostics.validation(_COMPONENT, "Response already sent for this turn; ignoring")
        return result
