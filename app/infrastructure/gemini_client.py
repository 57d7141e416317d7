"""Gemini client shared by all assistant functions.

Built once at startup from settings. Chat models are created lazily, one per
(model, response schema) pair, and reused across requests.
"""

import base64
import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

import structlog
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, ValidationError

from app.config import Settings, get_settings
from app.core.exceptions import ApiKeyMissing, EmptyResponse, MalformedResponse
from app.domain.schemas.assistant import ChatTurn, Failed, Parsed, StructuredResult

logger = structlog.get_logger(__name__)

STABLE = "stable"
PREVIEW = "preview"

ChatModelFactory = Callable[..., BaseChatModel]


def default_chat_model_factory(**kwargs) -> BaseChatModel:
    from langchain_google_genai import ChatGoogleGenerativeAI
    return ChatGoogleGenerativeAI(**kwargs)


def message_text(message: BaseMessage) -> str:
    """Flatten message content; newer Gemini models reply with a list of parts."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def is_auth_error(exc: BaseException) -> bool:
    """True for provider 401/403 responses, also when wrapped by langchain."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        for attr in ("code", "status_code"):
            value = getattr(exc, attr, None)
            if not callable(value) and value in (401, 403):
                return True
        text = str(exc)
        if "API_KEY_INVALID" in text or "API key not valid" in text:
            return True
        exc = exc.__cause__ or exc.__context__
    return False


def image_message(prompt: str, image: bytes, mime_type: str) -> HumanMessage:
    encoded = base64.b64encode(image).decode("ascii")
    return HumanMessage(content=[
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": f"data:{mime_type};base64,{encoded}"},
    ])


def history_messages(system_prompt: str, history: Sequence[ChatTurn], message: str) -> List[BaseMessage]:
    messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]
    for turn in history:
        if turn.role == "model":
            messages.append(AIMessage(content=turn.text))
        else:
            messages.append(HumanMessage(content=turn.text))
    messages.append(HumanMessage(content=message))
    return messages


class GeminiClient:
    """Thin wrapper over langchain's Gemini chat model."""

    def __init__(
        self,
        api_key: str,
        stable_model: str,
        preview_model: str,
        temperature: float = 0.4,
        chat_model_factory: ChatModelFactory = default_chat_model_factory,
    ):
        self.api_key = api_key
        self.models = {STABLE: stable_model, PREVIEW: preview_model}
        self.temperature = temperature
        self._factory = chat_model_factory
        self._cache: Dict[Tuple[str, Optional[str]], BaseChatModel] = {}

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "GeminiClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.GEMINI_API_KEY,
            stable_model=settings.GEMINI_STABLE_MODEL,
            preview_model=settings.GEMINI_PREVIEW_MODEL,
            temperature=settings.GEMINI_TEMPERATURE,
            **kwargs,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def chat_model(self, model: str = STABLE, response_schema: Optional[Dict[str, Any]] = None) -> BaseChatModel:
        if not self.configured:
            raise ApiKeyMissing()

        model_name = self.models[model]
        schema_key = json.dumps(response_schema, sort_keys=True) if response_schema else None
        key = (model_name, schema_key)
        if key not in self._cache:
            kwargs: Dict[str, Any] = {
                "model": model_name,
                "google_api_key": self.api_key,
                "temperature": self.temperature,
                "max_retries": 1,
            }
            if response_schema:
                kwargs["response_mime_type"] = "application/json"
                kwargs["response_schema"] = response_schema
            self._cache[key] = self._factory(**kwargs)
        return self._cache[key]

    def generate(
        self,
        messages: Sequence[BaseMessage],
        model: str = STABLE,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send messages and return the reply text. Provider errors propagate."""
        llm = self.chat_model(model, response_schema)
        logger.debug("Calling Gemini", model=self.models[model], structured=bool(response_schema))
        reply = llm.invoke(list(messages))
        text = message_text(reply).strip()
        if not text:
            raise EmptyResponse()
        return text

    def generate_json(
        self,
        messages: Sequence[BaseMessage],
        result_model: Type[BaseModel],
        response_schema: Dict[str, Any],
        model: str = STABLE,
    ) -> StructuredResult:
        """Schema-constrained call.

        Empty or malformed replies come back as ``Failed``; missing key and
        provider errors are raised.
        """
        try:
            text = self.generate(messages, model=model, response_schema=response_schema)
        except EmptyResponse as e:
            return Failed(e)

        try:
            return Parsed(result_model.model_validate(json.loads(text)))
        except json.JSONDecodeError as e:
            logger.warning("Gemini reply is not JSON", model=self.models[model], error=str(e))
            return Failed(MalformedResponse(details={"reason": str(e)}))
        except ValidationError as e:
            logger.warning("Gemini reply does not match schema", model=self.models[model], errors=e.error_count())
            return Failed(MalformedResponse(
                "The AI provider returned JSON of the wrong shape",
                details={"errors": [err["msg"] for err in e.errors()]},
            ))
