# /app/models/history_model.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class GenerationRecord(BaseModel):
    """
    A persisted generation as returned by GET /api/history. Platform outputs
    are keyed by platform name; a failed platform holds {"error": "..."}.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    inputContent: str
    selectedPlatforms: List[str]
    selectedTone: str
    coreMessage: Optional[str] = None
    keyPoints: Optional[List[str]] = None
    detectedTopic: Optional[str] = None
    detectedAudience: Optional[str] = None
    outputs: Dict[str, Any]
    generationTimeMs: Optional[int] = None
    llmProvider: Optional[str] = None
    llmModel: Optional[str] = None
    totalTokensUsed: Optional[int] = None
    errorMessage: Optional[str] = None
    createdAt: datetime
    completedAt: Optional[datetime] = None


class HistoryResponse(BaseModel):
    generations: List[GenerationRecord]
    total: int
