# /app/db/models/generation_models.py

import uuid

from sqlalchemy import Column, String, Integer, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from ..base_class import Base
from ..types import UTCDateTime, utcnow


class Generation(Base):
    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Input
    input_content = Column(Text, nullable=False)
    input_content_hash = Column(String(64), index=True, nullable=False)
    selected_platforms = Column(JSON, nullable=False)
    selected_tone = Column(String(20), nullable=False)

    # Analysis output
    core_message = Column(Text, nullable=True)
    key_points = Column(JSON, nullable=True)
    detected_topic = Column(String(255), nullable=True)
    detected_audience = Column(String(255), nullable=True)

    # Platform outputs: structured content, or {"error": "..."} for a failed platform
    output_tiktok = Column(JSON, nullable=True)
    output_twitter = Column(JSON, nullable=True)
    output_linkedin = Column(JSON, nullable=True)
    output_instagram = Column(JSON, nullable=True)
    output_threads = Column(JSON, nullable=True)
    output_email = Column(JSON, nullable=True)

    # Metadata
    generation_time_ms = Column(Integer, nullable=True)
    llm_provider = Column(String(50), nullable=True)
    llm_model = Column(String(100), nullable=True)
    total_tokens_used = Column(Integer, nullable=True)

    # pending | completed | failed
    status = Column(String(20), index=True, nullable=False, default="pending")
    error_message = Column(Text, nullable=True)

    created_at = Column(UTCDateTime, index=True, nullable=False, default=utcnow)
    completed_at = Column(UTCDateTime, nullable=True)

    owner = relationship("User", back_populates="generations")

    __table_args__ = (
        Index("idx_generations_user_created", "user_id", "created_at"),
    )


class UsageLog(Base):
    __tablename__ = "usage_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    generation_id = Column(String(36), ForeignKey("generations.id", ondelete="SET NULL"), nullable=True)

    event_type = Column(String(50), index=True, nullable=False)
    platform_count = Column(Integer, nullable=False)
    platforms = Column(JSON, nullable=True)

    tokens_used = Column(Integer, nullable=True)
    estimated_cost_cents = Column(Integer, nullable=True)

    user_agent = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(UTCDateTime, index=True, nullable=False, default=utcnow)
