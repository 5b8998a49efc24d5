# /app/services/database_helpers/billing_repository_sql.py

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.billing_models import Subscription, WebhookEvent


class BillingRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_subscription_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        return (
            self.db.query(Subscription)
            .filter(Subscription.stripe_subscription_id == stripe_subscription_id)
            .first()
        )

    def upsert_subscription(self, stripe_subscription_id: str, fields: Dict[str, Any]) -> Subscription:
        subscription = self.get_subscription_by_stripe_id(stripe_subscription_id)
        if subscription is None:
            subscription = Subscription(stripe_subscription_id=stripe_subscription_id, **fields)
            self.db.add(subscription)
        else:
            for key, value in fields.items():
                setattr(subscription, key, value)
        self.db.commit()
        self.db.refresh(subscription)
        return subscription

    def record_webhook_event(self, source: str, event_id: str, event_type: str, payload: Dict) -> Optional[WebhookEvent]:
        """
        Stores an inbound event. Returns None if this event id was already
        processed; an event whose earlier processing failed is returned again.
        """
        existing = self.db.query(WebhookEvent).filter(WebhookEvent.event_id == event_id).first()
        if existing is not None:
            return None if existing.processed else existing
        event = WebhookEvent(source=source, event_id=event_id, event_type=event_type, payload=payload)
        self.db.add(event)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent delivery of the same event.
            self.db.rollback()
            return None
        self.db.refresh(event)
        return event

    def mark_webhook_processed(self, event_id: str, processed_at: datetime, error_message: Optional[str] = None) -> None:
        event = self.db.query(WebhookEvent).filter(WebhookEvent.event_id == event_id).first()
        if event is None:
            return
        if error_message is None:
            event.processed = True
            event.processed_at = processed_at
            event.error_message = None
        else:
            event.error_message = error_message
            event.retry_count = (event.retry_count or 0) + 1
        self.db.commit()
