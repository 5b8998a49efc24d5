# /app/services/billing_service.py

"""
Stripe integration: webhook ingestion and the customer billing portal.

Every verified event is recorded in `webhook_events` before dispatch, so a
redelivered event that was already processed is acknowledged and skipped.
Handlers work on plain dicts; the Stripe SDK is only touched for signature
verification and the few API calls the handlers need.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import stripe

from ..core.config import Settings, get_settings
from ..db.models.user_models import User
from . import usage_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


class MissingBillingCustomerError(Exception):
    """The user has no Stripe customer, so there is nothing to manage."""


def _configure_stripe(settings: Settings) -> None:
    if not settings.stripe_secret_key:
        raise RuntimeError("STRIPE_SECRET_KEY is not configured.")
    stripe.api_key = settings.stripe_secret_key


def _plain(obj: Any) -> Dict[str, Any]:
    """Stripe objects to plain dicts, so handlers never depend on SDK types."""
    if isinstance(obj, dict):
        return obj
    to_dict = getattr(obj, "to_dict_recursive", None) or getattr(obj, "to_dict")
    return to_dict()


def _timestamp(value: Optional[int]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def get_tier_from_price_id(price_id: Optional[str], settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    return settings.stripe_price_ids.get(price_id or "", "free")


def construct_stripe_event(payload: bytes, signature: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Verifies the Stripe-Signature header. Raises ValueError on a malformed
    payload and stripe.SignatureVerificationError on a bad signature.
    """
    settings = settings or get_settings()
    if not settings.stripe_webhook_secret:
        raise RuntimeError("STRIPE_WEBHOOK_SECRET is not configured.")
    event = stripe.Webhook.construct_event(payload, signature, settings.stripe_webhook_secret)
    return _plain(event)


# --- Subscription helpers ---

def _first_item(subscription: Dict[str, Any]) -> Dict[str, Any]:
    items = (subscription.get("items") or {}).get("data") or []
    return items[0] if items else {}


def _period(subscription: Dict[str, Any], key: str) -> Optional[datetime]:
    # Newer API versions moved the period bounds onto the subscription item.
    return _timestamp(subscription.get(key) or _first_item(subscription).get(key))


def _subscription_fields(subscription: Dict[str, Any], settings: Settings) -> Dict[str, Any]:
    item = _first_item(subscription)
    price = item.get("price") or {}
    return {
        "stripe_customer_id": subscription.get("customer"),
        "stripe_price_id": price.get("id", ""),
        "tier": get_tier_from_price_id(price.get("id"), settings),
        "status": subscription.get("status", "active"),
        "current_period_start": _period(subscription, "current_period_start"),
        "current_period_end": _period(subscription, "current_period_end"),
        "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
        "canceled_at": _timestamp(subscription.get("canceled_at")),
        "amount_cents": price.get("unit_amount") or 0,
        "currency": subscription.get("currency") or "usd",
        "interval": (price.get("recurring") or {}).get("interval") or "month",
    }


def _user_for_customer(customer_id: Optional[str], db: DatabaseService) -> Optional[User]:
    user = db.get_user_by_stripe_customer_id(customer_id) if customer_id else None
    if user is None:
        logger.error("No user found for Stripe customer %s", customer_id)
    return user


# --- Event Handlers ---

def handle_checkout_completed(session: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    user = _user_for_customer(session.get("customer"), db)
    if user is None or not session.get("subscription"):
        return

    _configure_stripe(settings)
    subscription = _plain(stripe.Subscription.retrieve(session["subscription"]))
    fields = _subscription_fields(subscription, settings)

    db.upsert_subscription(subscription["id"], {"user_id": user.id, **fields})
    usage_service.update_user_tier(
        user.id,
        fields["tier"],
        db,
        stripe_subscription_id=subscription["id"],
        subscription_status=fields["status"],
        subscription_current_period_end=fields["current_period_end"],
    )
    logger.info("Checkout completed for user %s, tier '%s'", user.id, fields["tier"])


def handle_subscription_updated(subscription: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    user = _user_for_customer(subscription.get("customer"), db)
    if user is None:
        return

    fields = _subscription_fields(subscription, settings)
    db.upsert_subscription(subscription["id"], {"user_id": user.id, **fields})
    usage_service.update_user_tier(
        user.id,
        fields["tier"],
        db,
        subscription_status=fields["status"],
        subscription_current_period_end=fields["current_period_end"],
    )
    logger.info("Subscription %s updated for user %s: %s", subscription["id"], user.id, fields["status"])


def handle_subscription_deleted(subscription: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    user = _user_for_customer(subscription.get("customer"), db)
    if user is None:
        return

    existing = db.get_subscription_by_stripe_id(subscription["id"])
    if existing is not None:
        db.upsert_subscription(subscription["id"], {"status": "canceled", "canceled_at": datetime.now(timezone.utc)})

    usage_service.update_user_tier(
        user.id, "free", db, subscription_status="canceled", stripe_subscription_id=None
    )
    logger.info("Subscription %s deleted; user %s downgraded to free", subscription["id"], user.id)


def handle_payment_failed(invoice: Dict[str, Any], db: DatabaseService, settings: Settings) -> None:
    user = _user_for_customer(invoice.get("customer"), db)
    if user is None:
        return
    db.update_user(user.id, {"subscription_status": "past_due"})
    logger.info("Payment failed for user %s", user.id)


STRIPE_EVENT_HANDLERS: Dict[str, Callable[[Dict[str, Any], DatabaseService, Settings], None]] = {
    "checkout.session.completed": handle_checkout_completed,
    "customer.subscription.created": handle_subscription_updated,
    "customer.subscription.updated": handle_subscription_updated,
    "customer.subscription.deleted": handle_subscription_deleted,
    "invoice.payment_failed": handle_payment_failed,
}


def process_stripe_event(event: Dict[str, Any], db: DatabaseService, settings: Optional[Settings] = None) -> bool:
    """
    Records and dispatches one verified event. Returns False when the event
    was already processed. Handler errors are recorded on the event and re-raised.
    """
    settings = settings or get_settings()
    event_id, event_type = event["id"], event["type"]

    if db.record_webhook_event("stripe", event_id, event_type, event) is None:
        logger.info("Stripe event %s already processed; skipping", event_id)
        return False

    handler = STRIPE_EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.info("Unhandled Stripe event type: %s", event_type)
    else:
        logger.info("Processing Stripe event %s (%s)", event_id, event_type)
        try:
            handler(event["data"]["object"], db, settings)
        except Exception as e:
            db.mark_webhook_processed(event_id, datetime.now(timezone.utc), error_message=str(e))
            raise

    db.mark_webhook_processed(event_id, datetime.now(timezone.utc))
    return True


# --- Billing Portal ---

def create_portal_session(user: User, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    if not user.stripe_customer_id:
        raise MissingBillingCustomerError()
    _configure_stripe(settings)
    session = stripe.billing_portal.Session.create(
        customer=user.stripe_customer_id,
        return_url=f"{settings.app_url}/billing",
    )
    return session.url


def create_customer(email: str, full_name: Optional[str], clerk_user_id: str, settings: Optional[Settings] = None) -> Optional[str]:
    """Creates a Stripe customer for a new user; returns None when billing is not configured."""
    settings = settings or get_settings()
    if not settings.stripe_secret_key:
        return None
    _configure_stripe(settings)
    customer = stripe.Customer.create(
        email=email,
        name=full_name or None,
        metadata={"clerkUserId": clerk_user_id},
    )
    return customer.id
