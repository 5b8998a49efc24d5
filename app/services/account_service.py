# /app/services/account_service.py

"""
Local user lifecycle driven by the identity provider's webhooks.

The identity provider owns sign-up and profile data. This service mirrors
what the pipeline needs: a user row with tier, quota counters and an
optional Stripe customer. Deletion is a soft delete.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from svix.webhooks import Webhook

from ..core.config import Settings, get_settings
from . import billing_service, usage_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def verify_clerk_webhook(payload: bytes, headers: Mapping[str, str], settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Raises svix.webhooks.WebhookVerificationError on a bad signature."""
    settings = settings or get_settings()
    if not settings.clerk_webhook_secret:
        raise RuntimeError("CLERK_WEBHOOK_SECRET is not configured.")
    Webhook(settings.clerk_webhook_secret).verify(payload, dict(headers))
    return json.loads(payload)


def _primary_email(data: Dict[str, Any]) -> Optional[str]:
    addresses = data.get("email_addresses") or []
    primary_id = data.get("primary_email_address_id")
    for address in addresses:
        if address.get("id") == primary_id:
            return address.get("email_address")
    return addresses[0].get("email_address") if addresses else None


def _full_name(data: Dict[str, Any]) -> Optional[str]:
    name = " ".join(part for part in (data.get("first_name"), data.get("last_name")) if part)
    return name or None


def handle_user_created(data: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    clerk_user_id = data["id"]
    email = _primary_email(data)
    if not email:
        logger.error("No email address on new user %s; skipping", clerk_user_id)
        return
    if db.get_user_by_clerk_id(clerk_user_id, include_deleted=True) is not None:
        logger.info("User %s already exists", clerk_user_id)
        return

    full_name = _full_name(data)
    db.create_user({
        "clerk_user_id": clerk_user_id,
        "email": email,
        "full_name": full_name,
        "stripe_customer_id": billing_service.create_customer(email, full_name, clerk_user_id, settings),
        "subscription_tier": "free",
        "generations_limit": usage_service.get_usage_limit_for_tier("free"),
        "usage_reset_at": usage_service.get_next_reset_date(),
    })
    logger.info("User created: %s", clerk_user_id)


def handle_user_updated(data: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    email = _primary_email(data)
    user = db.get_user_by_clerk_id(data["id"])
    if not email or user is None:
        return
    db.update_user(user.id, {"email": email, "full_name": _full_name(data)})
    logger.info("User updated: %s", data["id"])


def handle_user_deleted(data: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    user = db.get_user_by_clerk_id(data.get("id") or "")
    if user is None:
        return
    db.update_user(user.id, {"deleted_at": datetime.now(timezone.utc)})
    logger.info("User soft-deleted: %s", data["id"])


CLERK_EVENT_HANDLERS: Dict[str, Callable[[Dict[str, Any], DatabaseService, Settings], None]] = {
    "user.created": handle_user_created,
    "user.updated": handle_user_updated,
    "user.deleted": handle_user_deleted,
}


def process_clerk_event(event: Dict[str, Any], event_id: str, db: DatabaseService, settings: Optional[Settings] = None) -> bool:
    """
    `event_id` is the delivery id from the svix-id header; user ids repeat
    across events and cannot be used for de-duplication.
    """
    settings = settings or get_settings()
    event_type = event.get("type", "")

    if db.record_webhook_event("clerk", event_id, event_type, event) is None:
        logger.info("Clerk event %s already processed; skipping", event_id)
        return False

    handler = CLERK_EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.info("Unhandled Clerk event type: %s", event_type)
    else:
        logger.info("Processing Clerk event %s (%s)", event_id, event_type)
        try:
            handler(event.get("data") or {}, db, settings)
        except Exception as e:
            db.mark_webhook_processed(event_id, datetime.now(timezone.utc), error_message=str(e))
            raise

    db.mark_webhook_processed(event_id, datetime.now(timezone.utc))
    return True
