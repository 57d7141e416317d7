import base64

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from app.core.exceptions import ApiKeyMissing, EmptyResponse, MalformedResponse
from app.domain.schemas.assistant import ChatTurn, CropGuideline, Failed, Parsed
from app.infrastructure.gemini_client import (
    PREVIEW,
    STABLE,
    history_messages,
    image_message,
    is_auth_error,
    message_text,
)

SCHEMA = {"type": "object", "properties": {"soil": {"type": "string"}}}

GUIDELINE_JSON = (
    '{"durationDays": 120, "fertilizer": "NPK 10-26-26", "soil": "Black soil",'
    ' "temperature": "21-30 C", "stages": ["Sowing", "Flowering", "Harvest"]}'
)


class ProviderError(Exception):
    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


def test_message_text_joins_text_parts() -> None:
    message = AIMessage(content=[{"type": "text", "text": "Hello "}, "world", {"type": "thinking", "thinking": "x"}])

    assert message_text(message) == "Hello world"


def test_is_auth_error_detects_status_codes_and_wrapped_errors() -> None:
    assert is_auth_error(ProviderError("denied", 403))
    assert is_auth_error(ProviderError("unauthenticated", 401))
    assert not is_auth_error(ProviderError("quota", 429))

    try:
        try:
            raise ProviderError("API key not valid. Please pass a valid API key.", 400)
        except ProviderError as inner:
            raise RuntimeError("langchain wrapper") from inner
    except RuntimeError as wrapped:
        assert is_auth_error(wrapped)


def test_chat_models_are_built_once_per_model_and_schema(gemini, llm_factory) -> None:
    gemini.chat_model(STABLE)
    gemini.chat_model(STABLE)
    gemini.chat_model(PREVIEW, SCHEMA)
    gemini.chat_model(PREVIEW, dict(SCHEMA))

    assert len(llm_factory.created) == 2
    plain, structured = llm_factory.created
    assert plain["model"] == "stable-model"
    assert "response_schema" not in plain
    assert structured["model"] == "preview-model"
    assert structured["response_mime_type"] == "application/json"
    assert structured["response_schema"] == SCHEMA
    assert structured["google_api_key"] == "test-key"


def test_missing_key_raises_before_building_a_model(gemini_without_key, llm_factory) -> None:
    assert not gemini_without_key.configured

    with pytest.raises(ApiKeyMissing):
        gemini_without_key.generate([HumanMessage(content="hi")])

    assert llm_factory.created == []


def test_generate_rejects_blank_reply(gemini, fake_llm) -> None:
    fake_llm.queue("   ")

    with pytest.raises(EmptyResponse):
        gemini.generate([HumanMessage(content="hi")])


def test_generate_json_parses_into_model(gemini, fake_llm) -> None:
    fake_llm.queue(GUIDELINE_JSON)

    result = gemini.generate_json([HumanMessage(content="guide")], CropGuideline, SCHEMA)

    assert isinstance(result, Parsed)
    assert result.value.durationDays == 120
    assert result.value.stages == ["Sowing", "Flowering", "Harvest"]


def test_generate_json_reports_non_json_as_failed(gemini, fake_llm) -> None:
    fake_llm.queue("Sure! Here is your guideline: soil is loamy")

    result = gemini.generate_json([HumanMessage(content="guide")], CropGuideline, SCHEMA)

    assert isinstance(result, Failed)
    assert isinstance(result.error, MalformedResponse)


def test_generate_json_reports_wrong_shape_as_failed(gemini, fake_llm) -> None:
    fake_llm.queue('{"soil": "loam"}')

    result = gemini.generate_json([HumanMessage(content="guide")], CropGuideline, SCHEMA)

    assert isinstance(result, Failed)
    assert isinstance(result.error, MalformedResponse)
    assert result.error.details["errors"]


def test_generate_json_reports_empty_reply_as_failed(gemini, fake_llm) -> None:
    fake_llm.queue("")

    result = gemini.generate_json([HumanMessage(content="guide")], CropGuideline, SCHEMA)

    assert isinstance(result, Failed)
    assert isinstance(result.error, EmptyResponse)


def test_generate_json_lets_provider_errors_through(gemini, fake_llm) -> None:
    fake_llm.queue(ProviderError("boom", 500))

    with pytest.raises(ProviderError):
        gemini.generate_json([HumanMessage(content="guide")], CropGuideline, SCHEMA)


def test_image_message_inlines_base64_data_uri() -> None:
    message = image_message("What is wrong?", b"\x89PNG", "image/png")

    text_part, image_part = message.content
    assert text_part == {"type": "text", "text": "What is wrong?"}
    assert image_part["image_url"] == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()


def test_history_messages_replays_turns_in_order() -> None:
    history = [ChatTurn(role="user", text="When to sow?"), ChatTurn(role="model", text="In June.")]

    messages = history_messages("system", history, "And harvest?")

    assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
    assert messages[-1].content == "And harvest?"
