# /app/services/history_service.py

from typing import Any, Dict

from ..core.config import HISTORY_PAGE_SIZE
from ..db.models.generation_models import Generation
from ..models.generation_model import Platform
from ..models.history_model import GenerationRecord, HistoryResponse
from .database_service import DatabaseService


def _to_record(generation: Generation) -> GenerationRecord:
    """Maps the snake_case ORM row onto the camelCase API contract."""
    outputs: Dict[str, Any] = {}
    for platform in Platform:
        value = getattr(generation, f"output_{platform.value}")
        if value is not None:
            outputs[platform.value] = value

    return GenerationRecord(
        id=generation.id,
        status=generation.status,
        inputContent=generation.input_content,
        selectedPlatforms=generation.selected_platforms or [],
        selectedTone=generation.selected_tone,
        coreMessage=generation.core_message,
        keyPoints=generation.key_points,
        detectedTopic=generation.detected_topic,
        detectedAudience=generation.detected_audience,
        outputs=outputs,
        generationTimeMs=generation.generation_time_ms,
        llmProvider=generation.llm_provider,
        llmModel=generation.llm_model,
        totalTokensUsed=generation.total_tokens_used,
        errorMessage=generation.error_message,
        createdAt=generation.created_at,
        completedAt=generation.completed_at,
    )


def get_history(db: DatabaseService, user_id: str, limit: int = HISTORY_PAGE_SIZE) -> HistoryResponse:
    """The user's most recent generations, newest first."""
    generations = db.get_generations_by_user(user_id, limit)
    return HistoryResponse(
        generations=[_to_record(g) for g in generations],
        total=db.count_generations_by_user(user_id),
    )
