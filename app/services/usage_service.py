# /app/services/usage_service.py

"""
Monthly generation quota.

The counter lives on the user row and resets lazily: the quota check itself
performs the reset once `usage_reset_at` has passed. Both the reset and the
increment are single conditional UPDATEs, never read-modify-write in Python.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..core.config import TIER_GENERATION_LIMITS
from ..core.exceptions import UserNotFoundError
from ..models.account_model import QuotaStatus, UsageStats
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def get_next_reset_date(now: Optional[datetime] = None) -> datetime:
    """First instant of the next calendar month, UTC."""
    now = now or datetime.now(timezone.utc)
    if now.month == 12:
        return datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)
    return datetime(now.year, now.month + 1, 1, tzinfo=timezone.utc)


def get_usage_limit_for_tier(tier: str) -> int:
    return TIER_GENERATION_LIMITS.get(tier, TIER_GENERATION_LIMITS["free"])


def check_user_quota(user_id: str, db: DatabaseService, now: Optional[datetime] = None) -> QuotaStatus:
    now = now or datetime.now(timezone.utc)
    if db.reset_usage_if_due(user_id, now, get_next_reset_date(now)):
        logger.info("Monthly usage reset for user %s", user_id)

    user = db.get_user_by_id(user_id)
    if not user:
        raise UserNotFoundError()

    used = user.generations_count_current_month
    limit = user.generations_limit
    return QuotaStatus(
        canGenerate=used < limit,
        remaining=max(0, limit - used),
        limit=limit,
        resetsAt=user.usage_reset_at or get_next_reset_date(now),
    )


def increment_usage(user_id: str, db: DatabaseService, now: Optional[datetime] = None) -> None:
    db.increment_generation_count(user_id, now or datetime.now(timezone.utc))


def update_user_tier(user_id: str, tier: str, db: DatabaseService, **extra_fields) -> None:
    """Sets the tier and the matching monthly limit together."""
    fields = {
        "subscription_tier": tier,
        "generations_limit": get_usage_limit_for_tier(tier),
        **extra_fields,
    }
    if db.update_user(user_id, fields) is None:
        raise UserNotFoundError()
    logger.info("User %s moved to tier '%s'", user_id, tier)


def get_user_usage_stats(user_id: str, db: DatabaseService) -> UsageStats:
    user = db.get_user_by_id(user_id)
    if not user:
        raise UserNotFoundError()

    used = user.generations_count_current_month
    limit = user.generations_limit
    percentage = round(used / limit * 100) if limit else 0
    return UsageStats(
        used=used,
        limit=limit,
        remaining=max(0, limit - used),
        percentageUsed=percentage,
        tier=user.subscription_tier,
        lastUsedAt=user.last_generation_at,
        resetsAt=user.usage_reset_at,
    )
