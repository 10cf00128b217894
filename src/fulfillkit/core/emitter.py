"""Final envelope rendering for the four wire formats.

Each protocol family has one rendering function; the schema version only
decides whether the wire models dump by alias (camelCase) or by field name
(snake_case).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import Field

from fulfillkit.core.errors import ValidationError
from fulfillkit.intents.base import SystemIntentSpec
from fulfillkit.models.enums import Protocol, StandardIntent
from fulfillkit.models.request import Context, DialogState, WireFormat
from fulfillkit.models.wire import WireModel
from fulfillkit.protocol.state import DialogStateCodec
from fulfillkit.response.base import Limits, is_speech_ssml
from fulfillkit.response.rich import RichResponse
from fulfillkit.response.simple import SimpleResponse


# -- content validation --------------------------------------------------------


def prepare_content(content: Any) -> str | RichResponse:
    """Normalize ``ask``/``tell`` content to a speech string or a RichResponse.

    Raises:
        ValidationError: If the content is empty, a mapping without speech,
            or a RichResponse whose first item is not a SimpleResponse.
    """
    if not content:
        raise ValidationError("Invalid text to speech")
    if isinstance(content, str):
        return content
    if isinstance(content, RichResponse):
        if not content.starts_with_simple_response:
            raise ValidationError("Invalid RichResponse. First item must be SimpleResponse")
        return content
    if isinstance(content, SimpleResponse | Mapping):
        speech = content.speech if isinstance(content, SimpleResponse) else content.get("speech")
        if not speech:
            raise ValidationError("SimpleResponse requires a speech parameter.")
        rich = RichResponse().add_simple_response(content)
        if not rich.starts_with_simple_response:
            raise ValidationError("Invalid simple response")
        return rich
    raise ValidationError("Invalid text to speech")


def prepare_no_input_prompts(prompts: Sequence[str] | None) -> list[SimpleResponse]:
    if not prompts:
        return []
    if isinstance(prompts, str):
        prompts = [prompts]
    if len(prompts) > Limits.NO_INPUT_PROMPTS_MAX:
        raise ValidationError("Invalid number of no inputs")
    return [SimpleResponse.from_speech(prompt) for prompt in prompts if prompt]


def speech_of(prompt: str | RichResponse) -> str:
    if isinstance(prompt, str):
        return prompt
    first = prompt.simple_responses[0]
    return first.speech or ""


# -- what a turn emits -------------------------------------------------------


@dataclass
class TurnOutput:
    """Everything a terminal call decided, ready for rendering.

    Attributes:
        prompt: Speech string or a RichResponse starting with a SimpleResponse.
        expect_user_response: ``True`` for ``ask``, ``False`` for ``tell``.
        no_input_prompts: Reprompts used when the user says nothing.
        system_intent: System intent to request instead of free text.
        state: Dialog state to carry into the next turn.
        contexts: Developer contexts (MIDDLEWARE only).
        user_storage: Serialized user storage, when it changed this turn.
    """

    prompt: str | RichResponse
    expect_user_response: bool
    state: DialogState
    no_input_prompts: list[SimpleResponse] = field(default_factory=list)
    system_intent: SystemIntentSpec | None = None
    contexts: list[Context] = field(default_factory=list)
    user_storage: str | None = None


# -- LOW_LEVEL -----------------------------------------------------------------


class InputPrompt(WireModel):
    initial_prompts: list[SimpleResponse] | None = None
    rich_initial_prompt: RichResponse | None = None
    no_input_prompts: list[SimpleResponse] = Field(default_factory=list)


class ExpectedInput(WireModel):
    input_prompt: InputPrompt
    possible_intents: list[dict[str, Any]]


class FinalResponse(WireModel):
    speech_response: SimpleResponse | None = None
    rich_response: RichResponse | None = None


class AppResponse(WireModel):
    conversation_token: str | None = None
    expect_user_response: bool
    expected_inputs: list[ExpectedInput] | None = None
    final_response: FinalResponse | None = None
    user_storage: str | None = None


def render_low_level(
    wire: WireFormat,
    output: TurnOutput,
    codec: DialogStateCodec,
) -> dict[str, Any]:
    prompt = output.prompt
    response = AppResponse(
        conversation_token=codec.encode_token(output.state),
        expect_user_response=output.expect_user_response,
        user_storage=output.user_storage,
    )
    if output.expect_user_response:
        if isinstance(prompt, str):
            input_prompt = InputPrompt(initial_prompts=[SimpleResponse.from_speech(prompt)])
        else:
            input_prompt = InputPrompt(rich_initial_prompt=prompt)
        input_prompt.no_input_prompts = output.no_input_prompts
        if output.system_intent is not None:
            possible_intent = output.system_intent.render_intent(Protocol.LOW_LEVEL, wire.schema_version)
        else:
            possible_intent = {"intent": StandardIntent.TEXT.value}
        response.expected_inputs = [
            ExpectedInput(input_prompt=input_prompt, possible_intents=[possible_intent])
        ]
    elif isinstance(prompt, str):
        response.final_response = FinalResponse(speech_response=SimpleResponse.from_speech(prompt))
    else:
        response.final_response = FinalResponse(rich_response=prompt)
    return response.render(wire.schema_version)


# -- MIDDLEWARE ----------------------------------------------------------------


class GooglePayload(WireModel):
    expect_user_response: bool
    is_ssml: bool | None = None
    no_input_prompts: list[SimpleResponse] | None = None
    rich_response: RichResponse | None = None
    system_intent: dict[str, Any] | None = None
    user_storage: str | None = None


def render_middleware(
    wire: WireFormat,
    output: TurnOutput,
    codec: DialogStateCodec,
) -> dict[str, Any]:
    prompt = output.prompt
    google = GooglePayload(
        expect_user_response=output.expect_user_response,
        user_storage=output.user_storage,
    )
    if isinstance(prompt, str):
        google.is_ssml = is_speech_ssml(prompt)
        google.no_input_prompts = output.no_input_prompts
    else:
        google.rich_response = prompt
        google.no_input_prompts = output.no_input_prompts or None
    if output.system_intent is not None:
        google.system_intent = output.system_intent.render_intent(
            Protocol.MIDDLEWARE, wire.schema_version
        )
    context_out = [codec.encode_context(output.state), *output.contexts]
    return {
        "speech": speech_of(prompt),
        "contextOut": [context.to_wire() for context in context_out],
        "data": {"google": google.render(wire.schema_version)},
    }


# -- dispatch ------------------------------------------------------------------

Renderer = Callable[[WireFormat, TurnOutput, DialogStateCodec], dict[str, Any]]

_RENDERERS: dict[Protocol, Renderer] = {
    Protocol.LOW_LEVEL: render_low_level,
    Protocol.MIDDLEWARE: render_middleware,
}


def render_turn(wire: WireFormat, output: TurnOutput, codec: DialogStateCodec) -> dict[str, Any]:
    """Render the envelope for ``wire``, with the encoded state attached."""
    return _RENDERERS[wire.protocol](wire, output, codec)


def error_body(message: str) -> dict[str, Any]:
    return {"error": message}

