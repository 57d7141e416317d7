"""AI assistant API routes — crop info, tips, diagnosis and chat."""

from enum import Enum

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.application.services import assistant_service
from app.domain.schemas.assistant import (
    ChatRequest,
    CropDescriptionResponse,
    CropGuidelineResponse,
    CropRequest,
    DiagnosisResponse,
    PromptReply,
    TipList,
    TipsRequest,
)
from app.infrastructure.gemini_client import GeminiClient
from app.interfaces.api.deps import get_gemini_client

router = APIRouter(prefix="/api/ai", tags=["AI"])

MAX_IMAGE_BYTES = 10 * 1024 * 1024


class Audience(str, Enum):
    farmer = "farmer"
    vendor = "vendor"
    community = "community"


TIP_FUNCTIONS = {
    Audience.farmer: assistant_service.get_farming_tips,
    Audience.vendor: assistant_service.get_vendor_tips,
    Audience.community: assistant_service.get_community_tips,
}


@router.post("/crops/description", response_model=CropDescriptionResponse)
def crop_description(body: CropRequest, client: GeminiClient = Depends(get_gemini_client)):
    description = assistant_service.get_crop_description(client, body.crop, body.language)
    return CropDescriptionResponse(description=description)


@router.post("/crops/guideline", response_model=CropGuidelineResponse)
def crop_guideline(body: CropRequest, client: GeminiClient = Depends(get_gemini_client)):
    guideline = assistant_service.get_crop_guideline(client, body.crop, body.language)
    return CropGuidelineResponse(guideline=guideline)


@router.post("/tips/{audience}", response_model=TipList)
def tips(audience: Audience, body: TipsRequest, client: GeminiClient = Depends(get_gemini_client)):
    """Tips for the audience matching the user's role."""
    return TIP_FUNCTIONS[audience](client, body.location, body.language)


@router.post("/diagnose", response_model=DiagnosisResponse)
async def diagnose(
    image: UploadFile = File(...),
    language: str = Form("en"),
    client: GeminiClient = Depends(get_gemini_client),
):
    content_type = image.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Upload must be an image")

    data = await image.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is empty")
    if len(data) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image is too large")

    diagnosis = await run_in_threadpool(assistant_service.diagnose_crop, client, data, content_type, language)
    return DiagnosisResponse(diagnosis=diagnosis)


@router.post("/chat", response_model=PromptReply)
def chat(body: ChatRequest, client: GeminiClient = Depends(get_gemini_client)):
    reply = assistant_service.chat(client, body.message, body.history, body.language, body.location)
    return PromptReply(reply=reply)
