"""Raw Gemini prompt route."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.services import assistant_service
from app.domain.schemas.assistant import PromptReply, PromptRequest
from app.infrastructure.gemini_client import GeminiClient
from app.interfaces.api.deps import get_gemini_client

router = APIRouter(prefix="/api/gemini", tags=["AI"])


@router.post("", response_model=PromptReply)
def prompt(body: PromptRequest, client: GeminiClient = Depends(get_gemini_client)):
    if not body.prompt or not body.prompt.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Prompt is required")
    return PromptReply(reply=assistant_service.ask(client, body.prompt))
