"""Assistant service — crop info, tips, diagnosis and chat on top of Gemini.

Each function owns its failure contract; they are deliberately not uniform:

- crop description: no key -> sentinel text, provider failure -> None
- crop guideline: any failure -> None
- farming tips: raises (missing key, invalid key, empty or malformed reply)
- vendor / community tips: missing key raises, anything else -> empty tips
- diagnosis: missing key raises, anything else -> sentinel text
- chat: sentinel text for every failure
"""

from typing import Optional, Sequence, Type

import structlog
from langchain_core.messages import HumanMessage

from app.assistant import prompts
from app.core.exceptions import ApiKeyMissing, InvalidApiKey
from app.domain.schemas.assistant import (
    ChatTurn,
    CommunityTipList,
    CropGuideline,
    Failed,
    FarmerTipList,
    TipList,
    VendorTipList,
)
from app.infrastructure.gemini_client import (
    PREVIEW,
    STABLE,
    GeminiClient,
    history_messages,
    image_message,
    is_auth_error,
)

logger = structlog.get_logger(__name__)

DESCRIPTION_UNAVAILABLE = "AI description unavailable. Configure the Gemini API key to enable it."
DIAGNOSIS_UNAVAILABLE = "Unable to analyse the image right now. Please try again with a clearer photo."
CHAT_UNAVAILABLE = "The assistant is not available right now. Configure the Gemini API key to enable it."
CHAT_ERROR = "Sorry, I could not process your question. Please try again."


def get_crop_description(client: GeminiClient, crop: str, language: str = "en") -> Optional[str]:
    if not client.configured:
        return DESCRIPTION_UNAVAILABLE

    prompt = prompts.CROP_DESCRIPTION_PROMPT.format(crop=crop, language=prompts.language_name(language))
    try:
        return client.generate([HumanMessage(content=prompt)], model=STABLE)
    except Exception as e:
        logger.error("Crop description failed", crop=crop, error=str(e))
        return None


def get_crop_guideline(client: GeminiClient, crop: str, language: str = "en") -> Optional[CropGuideline]:
    if not client.configured:
        return None

    prompt = prompts.CROP_GUIDELINE_PROMPT.format(crop=crop, language=prompts.language_name(language))
    try:
        result = client.generate_json(
            [HumanMessage(content=prompt)],
            CropGuideline,
            prompts.CROP_GUIDELINE_SCHEMA,
            model=STABLE,
        )
    except Exception as e:
        logger.error("Crop guideline failed", crop=crop, error=str(e))
        return None

    if isinstance(result, Failed):
        logger.warning("Crop guideline discarded", crop=crop, error=result.error.message)
        return None
    return result.value


def get_farming_tips(client: GeminiClient, location: str, language: str = "en") -> FarmerTipList:
    if not client.configured:
        raise ApiKeyMissing()

    prompt = prompts.FARMING_TIPS_PROMPT.format(
        place=prompts.describe_location(location),
        language=prompts.language_name(language),
    )
    try:
        result = client.generate_json(
            [HumanMessage(content=prompt)],
            FarmerTipList,
            prompts.FARMER_TIPS_SCHEMA,
            model=PREVIEW,
        )
    except Exception as e:
        if is_auth_error(e):
            raise InvalidApiKey() from e
        raise

    if isinstance(result, Failed):
        raise result.error
    return result.value


def _audience_tips(
    client: GeminiClient,
    audience: str,
    template: str,
    result_model: Type[TipList],
    schema: dict,
    location: str,
    language: str,
) -> TipList:
    if not client.configured:
        raise ApiKeyMissing()

    prompt = template.format(
        place=prompts.describe_location(location),
        language=prompts.language_name(language),
    )
    try:
        result = client.generate_json([HumanMessage(content=prompt)], result_model, schema, model=PREVIEW)
    except Exception as e:
        logger.error("Tip generation failed", audience=audience, error=str(e))
        return result_model(tips=[])

    if isinstance(result, Failed):
        logger.warning("Tips discarded", audience=audience, error=result.error.message)
        return result_model(tips=[])
    return result.value


def get_vendor_tips(client: GeminiClient, location: str, language: str = "en") -> VendorTipList:
    return _audience_tips(
        client, "vendor", prompts.VENDOR_TIPS_PROMPT, VendorTipList,
        prompts.VENDOR_TIPS_SCHEMA, location, language,
    )


def get_community_tips(client: GeminiClient, location: str, language: str = "en") -> CommunityTipList:
    return _audience_tips(
        client, "community", prompts.COMMUNITY_TIPS_PROMPT, CommunityTipList,
        prompts.COMMUNITY_TIPS_SCHEMA, location, language,
    )


def diagnose_crop(client: GeminiClient, image: bytes, mime_type: str = "image/jpeg", language: str = "en") -> str:
    if not client.configured:
        raise ApiKeyMissing()

    prompt = prompts.CROP_DIAGNOSIS_PROMPT.format(language=prompts.language_name(language))
    try:
        return client.generate([image_message(prompt, image, mime_type)], model=STABLE)
    except Exception as e:
        logger.error("Crop diagnosis failed", mime_type=mime_type, size=len(image), error=str(e))
        return DIAGNOSIS_UNAVAILABLE


def chat(
    client: GeminiClient,
    message: str,
    history: Sequence[ChatTurn] = (),
    language: str = "en",
    location: Optional[str] = None,
) -> str:
    if not client.configured:
        return CHAT_UNAVAILABLE

    location_line = ""
    if location and location.strip():
        location_line = prompts.CHAT_LOCATION_LINE.format(place=prompts.describe_location(location))
    system_prompt = prompts.CHAT_SYSTEM_PROMPT.format(
        language=prompts.language_name(language),
        location_line=location_line,
    )
    try:
        return client.generate(history_messages(system_prompt, history, message), model=STABLE)
    except Exception as e:
        logger.error("Chat failed", turns=len(history), error=str(e))
        return CHAT_ERROR


def ask(client: GeminiClient, prompt: str) -> str:
    """Forward a raw prompt; provider errors propagate to the caller."""
    if not client.configured:
        raise ApiKeyMissing()
    return client.generate([HumanMessage(content=prompt)], model=STABLE)
