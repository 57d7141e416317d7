"""Pydantic schemas for the AI assistant — structured replies and API bodies."""

from dataclasses import dataclass
from typing import Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

from app.core.exceptions import AppError

T = TypeVar("T")


# Structured provider results

@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failed:
    error: AppError


StructuredResult = Union[Parsed[T], Failed]


# Reply shapes

FarmerCategory = Literal["WEATHER", "CROP", "SOIL", "PEST", "MARKET"]
VendorCategory = Literal["PRICING", "DEMAND", "STORAGE", "LOGISTICS", "SOURCING"]
CommunityCategory = Literal["EVENT", "TRAINING", "SCHEME", "COLLABORATION", "SUSTAINABILITY"]


class CropGuideline(BaseModel):
    durationDays: int
    fertilizer: str
    soil: str
    temperature: str
    stages: List[str]


class Tip(BaseModel):
    title: str
    content: str
    category: str


class FarmerTip(Tip):
    category: FarmerCategory


class VendorTip(Tip):
    category: VendorCategory


class CommunityTip(Tip):
    category: CommunityCategory


class TipList(BaseModel):
    tips: List[Tip] = Field(default_factory=list)


class FarmerTipList(TipList):
    tips: List[FarmerTip] = Field(default_factory=list)


class VendorTipList(TipList):
    tips: List[VendorTip] = Field(default_factory=list)


class CommunityTipList(TipList):
    tips: List[CommunityTip] = Field(default_factory=list)


# API bodies

class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    text: str


class PromptRequest(BaseModel):
    prompt: Optional[str] = None


class PromptReply(BaseModel):
    reply: str


class CropRequest(BaseModel):
    crop: str = Field(min_length=1)
    language: str = "en"

    @field_validator("crop", mode="before")
    @classmethod
    def strip_crop(cls, v):
        return v.strip() if isinstance(v, str) else v


class CropDescriptionResponse(BaseModel):
    description: Optional[str] = None


class CropGuidelineResponse(BaseModel):
    guideline: Optional[CropGuideline] = None


class TipsRequest(BaseModel):
    location: str = Field(min_length=1)
    language: str = "en"

    @field_validator("location", mode="before")
    @classmethod
    def strip_location(cls, v):
        return v.strip() if isinstance(v, str) else v


class DiagnosisResponse(BaseModel):
    diagnosis: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    history: List[ChatTurn] = Field(default_factory=list)
    language: str = "en"
    location: Optional[str] = None
