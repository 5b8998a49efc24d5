# /app/routers/account_router.py

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.deps import get_current_user
from ..db.models.user_models import User
from ..models import account_model
from ..services import billing_service, tier_service, usage_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/usage", response_model=account_model.UsageStats, summary="Get Monthly Usage")
def get_usage(
    user: User = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return usage_service.get_user_usage_stats(user.id, db)


@router.get("/tier", response_model=account_model.TierStatus, summary="Get Tier and Trial Status")
def get_tier(user: User = Depends(get_current_user)):
    return tier_service.get_user_tier_status(user)


@router.post(
    "/billing/portal",
    response_model=account_model.PortalSessionResponse,
    summary="Create a Billing Portal Session",
)
def create_portal_session(user: User = Depends(get_current_user)):
    try:
        url = billing_service.create_portal_session(user)
    except billing_service.MissingBillingCustomerError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No subscription found"})
    except Exception as e:
        logger.error("Failed to create billing portal session: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to create portal session"},
        )
    return account_model.PortalSessionResponse(url=url)
