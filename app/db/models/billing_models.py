# /app/db/models/billing_models.py

"""
SQLAlchemy models mirroring the billing provider: one row per subscription,
plus a log of every inbound webhook event used for idempotent processing.
"""

import uuid

from sqlalchemy import Column, String, Integer, Boolean, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base
from ..types import UTCDateTime, utcnow


class Subscription(Base):
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    stripe_subscription_id = Column(String(255), unique=True, index=True, nullable=False)
    stripe_customer_id = Column(String(255), nullable=False)
    stripe_price_id = Column(String(255), nullable=False)

    tier = Column(String(20), nullable=False)
    status = Column(String(32), index=True, nullable=False)

    current_period_start = Column(UTCDateTime, nullable=True)
    current_period_end = Column(UTCDateTime, nullable=True)
    cancel_at_period_end = Column(Boolean, nullable=False, default=False)
    canceled_at = Column(UTCDateTime, nullable=True)

    amount_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="usd")
    interval = Column(String(20), nullable=False, default="month")

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="subscriptions")


class WebhookEvent(Base):
    __tablename__ = "webhook_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    source = Column(String(50), index=True, nullable=False)  # 'stripe' or 'clerk'
    event_type = Column(String(255), nullable=False)
    event_id = Column(String(255), unique=True, index=True, nullable=False)
    payload = Column(JSON, nullable=False)

    processed = Column(Boolean, index=True, nullable=False, default=False)
    processed_at = Column(UTCDateTime, nullable=True)
    error_message = Column(Text, nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)

    created_at = Column(UTCDateTime, index=True, nullable=False, default=utcnow)
