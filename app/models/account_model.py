# /app/models/account_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from .generation_model import Platform


class QuotaStatus(BaseModel):
    canGenerate: bool
    remaining: int
    limit: int
    resetsAt: datetime


class UsageStats(BaseModel):
    used: int
    limit: int
    remaining: int
    percentageUsed: int
    tier: str
    lastUsedAt: Optional[datetime] = None
    resetsAt: Optional[datetime] = None


class TierStatus(BaseModel):
    """Derived at query time from the user's tier and account age; never stored."""
    tier: str
    isFree: bool
    trialActive: bool
    trialExpired: bool
    trialDaysRemaining: int
    trialHoursRemaining: int
    trialEndDate: Optional[datetime] = None
    availablePlatforms: List[Platform]
    lockedPlatforms: List[Platform]


class PlatformAccessResult(BaseModel):
    valid: bool
    invalidPlatforms: List[Platform]
    message: Optional[str] = None


class PortalSessionResponse(BaseModel):
    url: str
