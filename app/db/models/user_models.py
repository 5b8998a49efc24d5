# /app/db/models/user_models.py

"""
SQLAlchemy model for the `User` entity: identity-provider link, subscription
state, and the monthly generation counter the quota check reads and resets.
"""

import uuid

from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from ..base_class import Base
from ..types import UTCDateTime, utcnow


class User(Base):
    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    clerk_user_id = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=True)

    # Subscription
    subscription_tier = Column(String(20), index=True, nullable=False, default="free")
    subscription_status = Column(String(32), nullable=False, default="active")
    stripe_customer_id = Column(String(255), unique=True, index=True, nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)
    subscription_current_period_end = Column(UTCDateTime, nullable=True)

    # Usage tracking
    generations_count_current_month = Column(Integer, nullable=False, default=0)
    generations_limit = Column(Integer, nullable=False, default=10)
    last_generation_at = Column(UTCDateTime, nullable=True)
    usage_reset_at = Column(UTCDateTime, nullable=False, default=utcnow)

    default_tone = Column(String(20), nullable=True, default="conversational")

    created_at = Column(UTCDateTime, index=True, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(UTCDateTime, nullable=True)

    generations = relationship("Generation", back_populates="owner", cascade="all, delete-orphan")
    subscriptions = relationship("Subscription", back_populates="owner", cascade="all, delete-orphan")
