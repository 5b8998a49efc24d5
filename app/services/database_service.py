# /app/services/database_service.py

from datetime import datetime
from typing import Any, Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db
from app.db.models.billing_models import Subscription, WebhookEvent
from app.db.models.generation_models import Generation, UsageLog
from app.db.models.user_models import User

# --- Repository Imports ---
from .database_helpers.billing_repository_sql import BillingRepositorySQL
from .database_helpers.generation_repository_sql import GenerationRepositorySQL
from .database_helpers.user_repository_sql import UserRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """Single entry point to the record store; every repository shares one session."""
        self.user_repo = UserRepositorySQL(db_session)
        self.generation_repo = GenerationRepositorySQL(db_session)
        self.billing_repo = BillingRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str) -> Optional[User]: return self.user_repo.get_user_by_id(user_id)
    def get_user_by_clerk_id(self, clerk_user_id: str, include_deleted: bool = False) -> Optional[User]:
        return self.user_repo.get_user_by_clerk_id(clerk_user_id, include_deleted=include_deleted)
    def get_user_by_stripe_customer_id(self, customer_id: str) -> Optional[User]: return self.user_repo.get_user_by_stripe_customer_id(customer_id)
    def create_user(self, record: Dict) -> User: return self.user_repo.create_user(record)
    def update_user(self, user_id: str, fields: Dict) -> Optional[User]: return self.user_repo.update_user(user_id, fields)

    # --- USAGE COUNTER METHODS (DELEGATED) ---
    def reset_usage_if_due(self, user_id: str, now: datetime, next_reset_at: datetime) -> bool:
        return self.user_repo.reset_usage_if_due(user_id, now, next_reset_at)
    def increment_generation_count(self, user_id: str, now: datetime) -> None: self.user_repo.increment_generation_count(user_id, now)

    # --- GENERATION METHODS (DELEGATED) ---
    def add_generation_record(self, record: Dict) -> Generation: return self.generation_repo.add_generation_record(record)
    def get_generation_by_id(self, generation_id: str) -> Optional[Generation]: return self.generation_repo.get_generation_by_id(generation_id)
    def finalize_generation(self, generation_id: str, fields: Dict) -> bool: return self.generation_repo.finalize_generation(generation_id, fields)
    def get_generations_by_user(self, user_id: str, limit: int) -> List[Generation]: return self.generation_repo.get_generations_by_user(user_id, limit)
    def count_generations_by_user(self, user_id: str) -> int: return self.generation_repo.count_generations_by_user(user_id)
    def add_usage_log(self, record: Dict) -> UsageLog: return self.generation_repo.add_usage_log(record)
    def get_usage_logs_by_user(self, user_id: str) -> List[UsageLog]: return self.generation_repo.get_usage_logs_by_user(user_id)

    # --- BILLING METHODS (DELEGATED) ---
    def get_subscription_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        return self.billing_repo.get_subscription_by_stripe_id(stripe_subscription_id)
    def upsert_subscription(self, stripe_subscription_id: str, fields: Dict[str, Any]) -> Subscription:
        return self.billing_repo.upsert_subscription(stripe_subscription_id, fields)
    def record_webhook_event(self, source: str, event_id: str, event_type: str, payload: Dict) -> Optional[WebhookEvent]:
        return self.billing_repo.record_webhook_event(source, event_id, event_type, payload)
    def mark_webhook_processed(self, event_id: str, processed_at: datetime, error_message: Optional[str] = None) -> None:
        self.billing_repo.mark_webhook_processed(event_id, processed_at, error_message)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
