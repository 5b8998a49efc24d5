# /app/services/generation_service.py

"""
The generation request flow behind POST /api/generate.

Admission runs strictly before any LLM spend, in this order: rate limit,
request schema, monthly quota, tier/platform access, sanitization. Only then
is a `pending` record written and the orchestrator run. The record is closed
out in a single update with status `completed` or `failed`; per-platform
failures stay in the output columns.
"""

import hashlib
import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..core.exceptions import (
    GenerationFailedError,
    InvalidGenerationRequestError,
    PlatformAccessDeniedError,
    QuotaExceededError,
    RateLimitExceededError,
)
from ..db.models.user_models import User
from ..models.generation_model import (
    GenerateResponse,
    GenerationMetadata,
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
    PlatformOutputPayload,
)
from . import tier_service, usage_service
from .database_service import DatabaseService
from .generation_orchestrator import GenerationOrchestrator
from .input_sanitizer import sanitize_input, validate_input
from .llm_service import LLMService
from .output_formatter import format_for_copy
from .rate_limit_service import RateLimiter

logger = logging.getLogger(__name__)

COST_PER_TOKEN_USD = 0.00002


def hash_content(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def estimate_cost_cents(tokens: int) -> int:
    return math.ceil(tokens * COST_PER_TOKEN_USD * 100)


def parse_generation_request(body: Any) -> GenerationRequest:
    try:
        return GenerationRequest.model_validate(body)
    except ValidationError as e:
        details = json.loads(e.json(include_url=False))
        raise InvalidGenerationRequestError("Invalid request", details=details) from e


def _result_fields(result: GenerationResult, now: datetime) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "core_message": result.analysis.coreMessage,
        "key_points": result.analysis.keyPoints,
        "detected_topic": result.analysis.topic,
        "detected_audience": result.analysis.audience,
        "generation_time_ms": result.generationTimeMs,
        "llm_provider": result.llmProvider,
        "llm_model": result.llmModel,
        "total_tokens_used": result.totalTokens,
        "status": GenerationStatus.COMPLETED.value,
        "completed_at": now,
    }
    for output in result.outputs:
        column = f"output_{output.platform.value}"
        fields[column] = {"error": output.error} if output.error else output.content_payload()
    return fields


async def run_generation(
    body: Any,
    user: User,
    db: DatabaseService,
    llm: LLMService,
    rate_limiter: RateLimiter,
    client_ip: str,
    user_agent: Optional[str] = None,
) -> GenerateResponse:
    # 1. Rate limit
    rate = await rate_limiter.check_rate_limit(user.id, client_ip)
    if not rate.allowed:
        raise RateLimitExceededError(limit=rate.limit, remaining=rate.remaining, reset=rate.reset)

    # 2. Request schema
    request = parse_generation_request(body)
    platforms: List[str] = [p.value for p in request.platforms]

    # 3. Quota (may reset the monthly counter as a side effect)
    quota = usage_service.check_user_quota(user.id, db)
    if not quota.canGenerate:
        raise QuotaExceededError(limit=quota.limit, remaining=quota.remaining, resets_at=quota.resetsAt.isoformat())

    # 4. Tier / platform access
    access = tier_service.validate_platform_access(request.platforms, user.subscription_tier, user.created_at)
    if not access.valid:
        raise PlatformAccessDeniedError(
            message=access.message,
            invalid_platforms=[p.value for p in access.invalidPlatforms],
            tier=user.subscription_tier,
        )

    # 5. Sanitize, then re-check bounds on what will actually reach the prompt
    content = sanitize_input(request.content)
    error = validate_input(content, platforms, request.tone.value)
    if error:
        raise InvalidGenerationRequestError(error)

    # 6. Pending record
    record = db.add_generation_record({
        "user_id": user.id,
        "input_content": content,
        "input_content_hash": hash_content(content),
        "selected_platforms": platforms,
        "selected_tone": request.tone.value,
        "status": GenerationStatus.PENDING.value,
    })
    usage_log = {
        "user_id": user.id,
        "generation_id": record.id,
        "platform_count": len(platforms),
        "platforms": platforms,
        "user_agent": user_agent,
        "ip_address": client_ip,
    }

    # 7. Orchestrate
    orchestrator = GenerationOrchestrator(llm)
    try:
        result = await orchestrator.generate(content, request.platforms, request.tone)
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.error("Generation %s failed: %s", record.id, message)
        db.finalize_generation(record.id, {
            "status": GenerationStatus.FAILED.value,
            "error_message": message,
            "completed_at": datetime.now(timezone.utc),
        })
        db.add_usage_log({**usage_log, "event_type": "generation_failed"})
        raise GenerationFailedError(record.id, message) from e

    # 8. Close out the record, count the generation, log usage
    now = datetime.now(timezone.utc)
    db.finalize_generation(record.id, _result_fields(result, now))
    usage_service.increment_usage(user.id, db, now)
    db.add_usage_log({
        **usage_log,
        "event_type": "generation_completed",
        "tokens_used": result.totalTokens,
        "estimated_cost_cents": estimate_cost_cents(result.totalTokens),
    })

    return GenerateResponse(
        generationId=record.id,
        analysis=result.analysis,
        outputs=[
            PlatformOutputPayload(
                platform=o.platform,
                content=o.content_payload(),
                error=o.error,
                copyText=format_for_copy(o) if o.succeeded else None,
            )
            for o in result.outputs
        ],
        metadata=GenerationMetadata(
            generationTimeMs=result.generationTimeMs,
            tokensUsed=result.totalTokens,
            quotaRemaining=max(0, quota.remaining - 1),
        ),
    )
