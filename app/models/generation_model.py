# /app/models/generation_model.py

"""
Data contracts for the generation pipeline: the validated request, the
stage-1 content analysis, the per-platform results of stage 2, and the
API response returned by POST /api/generate.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .platform_output_model import PlatformContent

# --- Core Enumerations ---

class Platform(str, Enum):
    TIKTOK = "tiktok"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    THREADS = "threads"
    EMAIL = "email"


class Tone(str, Enum):
    EDUCATIONAL = "educational"
    CONVERSATIONAL = "conversational"
    OPINIONATED = "opinionated"
    AUTHORITY = "authority"


class ContentType(str, Enum):
    BLOG = "blog"
    PODCAST = "podcast"
    VIDEO = "video"
    ARTICLE = "article"
    NOTES = "notes"


class DetectedTone(str, Enum):
    EDUCATIONAL = "educational"
    CASUAL = "casual"
    PROFESSIONAL = "professional"
    MOTIVATIONAL = "motivational"


class GenerationStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


MIN_CONTENT_LENGTH = 100
MAX_CONTENT_LENGTH = 10000
MAX_PLATFORMS = len(Platform)


# --- Request ---

class GenerationRequest(BaseModel):
    """A generation request as posted by the client. Immutable once validated."""
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., min_length=MIN_CONTENT_LENGTH, max_length=MAX_CONTENT_LENGTH)
    platforms: List[Platform] = Field(..., min_length=1, max_length=MAX_PLATFORMS)
    tone: Tone

    @field_validator("platforms")
    @classmethod
    def platforms_must_be_unique(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("Each platform may only be selected once.")
        return v


# --- Stage 1 Output ---

class ContentAnalysis(BaseModel):
    coreMessage: str = Field(..., min_length=1)
    keyPoints: List[str] = Field(..., min_length=1)
    topic: str
    audience: str
    contentType: ContentType
    tone: DetectedTone

    @field_validator("contentType", "tone", mode="before")
    @classmethod
    def normalize_label(cls, v, info):
        # Labels are informational only; an unrecognised one must not fail the analysis.
        enum_cls, default = (
            (ContentType, ContentType.ARTICLE) if info.field_name == "contentType"
            else (DetectedTone, DetectedTone.PROFESSIONAL)
        )
        label = str(v).strip().lower() if v is not None else ""
        try:
            return enum_cls(label)
        except ValueError:
            return default


# --- Stage 2 Output ---

class PlatformOutput(BaseModel):
    """
    Exactly one per requested platform. `content` and `error` are mutually
    exclusive: a failed platform carries an error message and no content.
    """
    model_config = ConfigDict(frozen=True)

    platform: Platform
    content: Optional[PlatformContent] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def content_payload(self) -> Dict[str, Any]:
        if self.content is None:
            return {}
        return self.content.model_dump(exclude_none=True)


class GenerationResult(BaseModel):
    analysis: ContentAnalysis
    outputs: List[PlatformOutput]
    totalTokens: int
    generationTimeMs: int
    llmProvider: str
    llmModel: str

    @property
    def failed_platforms(self) -> List[Platform]:
        return [o.platform for o in self.outputs if not o.succeeded]


# --- API Contract Models ---

class PlatformOutputPayload(BaseModel):
    platform: Platform
    content: Dict[str, Any]
    error: Optional[str] = None
    copyText: Optional[str] = None


class GenerationMetadata(BaseModel):
    generationTimeMs: int
    tokensUsed: int
    quotaRemaining: int


class GenerateResponse(BaseModel):
    success: bool = True
    generationId: str
    analysis: ContentAnalysis
    outputs: List[PlatformOutputPayload]
    metadata: GenerationMetadata
