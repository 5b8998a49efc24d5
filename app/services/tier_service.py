# /app/services/tier_service.py

"""
Tier and trial rules for platform access.

Everything here is a pure function of (tier, account creation time, now).
`now` is injectable so the trial boundary can be tested exactly.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from ..core.config import FREE_TIER_PLATFORMS, TRIAL_DURATION_DAYS
from ..db.models.user_models import User
from ..models.account_model import PlatformAccessResult, TierStatus
from ..models.generation_model import Platform

PAID_TIERS = frozenset({"pro", "business"})


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def get_trial_end_date(created_at: datetime) -> datetime:
    return created_at + timedelta(days=TRIAL_DURATION_DAYS)


def is_trial_active(created_at: datetime, now: Optional[datetime] = None) -> bool:
    return _now(now) < get_trial_end_date(created_at)


def get_trial_days_remaining(created_at: datetime, now: Optional[datetime] = None) -> int:
    remaining = (get_trial_end_date(created_at) - _now(now)).total_seconds()
    return max(0, math.ceil(remaining / 86400))


def get_trial_hours_remaining(created_at: datetime, now: Optional[datetime] = None) -> int:
    remaining = (get_trial_end_date(created_at) - _now(now)).total_seconds()
    return max(0, math.ceil(remaining / 3600))


def _has_full_access(tier: str, created_at: datetime, now: Optional[datetime]) -> bool:
    return tier in PAID_TIERS or is_trial_active(created_at, now)


def can_access_platform(platform: Platform, tier: str, created_at: datetime, now: Optional[datetime] = None) -> bool:
    if _has_full_access(tier, created_at, now):
        return True
    return Platform(platform).value in FREE_TIER_PLATFORMS


def get_available_platforms(tier: str, created_at: datetime, now: Optional[datetime] = None) -> List[Platform]:
    return [p for p in Platform if can_access_platform(p, tier, created_at, now)]


def get_locked_platforms(tier: str, created_at: datetime, now: Optional[datetime] = None) -> List[Platform]:
    return [p for p in Platform if not can_access_platform(p, tier, created_at, now)]


def validate_platform_access(
    platforms: Sequence[Platform], tier: str, created_at: datetime, now: Optional[datetime] = None
) -> PlatformAccessResult:
    """Checks every requested platform and reports all denials at once."""
    invalid = [Platform(p) for p in platforms if not can_access_platform(p, tier, created_at, now)]
    if not invalid:
        return PlatformAccessResult(valid=True, invalidPlatforms=[])
    names = ", ".join(p.value for p in invalid)
    return PlatformAccessResult(
        valid=False,
        invalidPlatforms=invalid,
        message=f"Your plan doesn't include access to: {names}. Upgrade to Pro to unlock all platforms.",
    )


def get_user_tier_status(user: User, now: Optional[datetime] = None) -> TierStatus:
    tier = user.subscription_tier
    created_at = user.created_at
    is_free = tier not in PAID_TIERS
    trial_active = is_free and is_trial_active(created_at, now)

    return TierStatus(
        tier=tier,
        isFree=is_free,
        trialActive=trial_active,
        trialExpired=is_free and not trial_active,
        trialDaysRemaining=get_trial_days_remaining(created_at, now) if is_free else 0,
        trialHoursRemaining=get_trial_hours_remaining(created_at, now) if is_free else 0,
        trialEndDate=get_trial_end_date(created_at) if is_free else None,
        availablePlatforms=get_available_platforms(tier, created_at, now),
        lockedPlatforms=get_locked_platforms(tier, created_at, now),
    )
