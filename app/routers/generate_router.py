# /app/routers/generate_router.py

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from ..core.deps import get_client_ip, get_current_user, get_llm_service, get_rate_limiter
from ..core.exceptions import AdmissionError, GenerationFailedError
from ..db.models.user_models import User
from ..models import generation_model
from ..services import generation_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.llm_service import LLMService
from ..services.rate_limit_service import RateLimiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",  # Maps to /api/generate
    response_model=generation_model.GenerateResponse,
    summary="Repurpose Content for Multiple Platforms",
    description="Analyzes the content once, then generates every selected platform concurrently. "
                "Per-platform failures are reported inline with a 200 response.",
    responses={
        400: {"description": "Invalid request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Platform access denied"},
        404: {"description": "User not found"},
        429: {"description": "Rate limit or monthly quota exceeded"},
        500: {"description": "Generation failed"},
    },
)
async def generate_content(
    request: Request,
    # Raw body: schema validation runs after the rate limit check.
    payload: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
    llm: LLMService = Depends(get_llm_service),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    try:
        return await generation_service.run_generation(
            body=payload,
            user=user,
            db=db,
            llm=llm,
            rate_limiter=rate_limiter,
            client_ip=get_client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    except AdmissionError:
        raise
    except GenerationFailedError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Generation failed", "message": e.message},
        )
    except Exception as e:
        logger.exception("Unexpected error during generation")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": str(e)},
        )
