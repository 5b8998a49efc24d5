# /app/routers/history_router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_user
from ..db.models.user_models import User
from ..models import history_model
from ..services import history_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",  # Maps to /api/history
    response_model=history_model.HistoryResponse,
    summary="Get Generation History",
)
def get_user_history(
    user: User = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    """The caller's most recent generations, newest first."""
    try:
        return history_service.get_history(db=db, user_id=user.id)
    except Exception as e:
        logger.error("Error fetching generation history: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching the generation history.",
        )
