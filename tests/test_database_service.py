# /tests/test_database_service.py

from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
def user(make_user):
    """One persisted free-tier user for the repository tests below."""
    return make_user(clerk_user_id="user_abc", stripe_customer_id="cus_123")


def _generation_record(user_id: str, **overrides):
    record = {
        "user_id": user_id,
        "input_content": "x" * 120,
        "input_content_hash": "0" * 64,
        "selected_platforms": ["linkedin"],
        "selected_tone": "educational",
        "status": "pending",
    }
    record.update(overrides)
    return record


def test_add_and_get_user(db_service, user):
    """A created user can be found by internal, identity-provider and billing ids."""
    assert db_service.get_user_by_id(user.id).email == user.email
    assert db_service.get_user_by_clerk_id("user_abc").id == user.id
    assert db_service.get_user_by_stripe_customer_id("cus_123").id == user.id


def test_get_non_existent_user(db_service):
    assert db_service.get_user_by_id("missing") is None
    assert db_service.get_user_by_clerk_id("user_nobody") is None


def test_soft_deleted_user_is_hidden_by_default(db_service, user):
    db_service.update_user(user.id, {"deleted_at": datetime.now(timezone.utc)})

    assert db_service.get_user_by_clerk_id("user_abc") is None
    assert db_service.get_user_by_clerk_id("user_abc", include_deleted=True).id == user.id


def test_update_unknown_user_returns_none(db_service):
    assert db_service.update_user("missing", {"full_name": "Nobody"}) is None


def test_add_and_finalize_generation(db_service, user):
    # Arrange
    generation = db_service.add_generation_record(_generation_record(user.id))
    assert generation.status == "pending"

    # Act
    updated = db_service.finalize_generation(generation.id, {
        "status": "partial",
        "output_linkedin": {"post": "Hello"},
        "output_threads": {"error": "timeout"},
        "total_tokens_used": 1300,
    })

    # Assert
    assert updated is True
    stored = db_service.get_generation_by_id(generation.id)
    assert stored.status == "partial"
    assert stored.output_linkedin == {"post": "Hello"}
    assert stored.output_threads == {"error": "timeout"}
    assert stored.total_tokens_used == 1300


def test_finalize_unknown_generation(db_service):
    assert db_service.finalize_generation("missing", {"status": "failed"}) is False


def test_generations_are_listed_newest_first(db_service, user, make_user):
    # Arrange
    base = datetime(2026, 3, 1, tzinfo=timezone.utc)
    for i in range(3):
        db_service.add_generation_record(_generation_record(user.id, created_at=base + timedelta(days=i), selected_tone=f"t{i}"))
    other = make_user()
    db_service.add_generation_record(_generation_record(other.id))

    # Act
    generations = db_service.get_generations_by_user(user.id, limit=2)

    # Assert
    assert [g.selected_tone for g in generations] == ["t2", "t1"]
    assert db_service.count_generations_by_user(user.id) == 3


def test_usage_log_round_trip(db_service, user):
    db_service.add_usage_log({
        "user_id": user.id,
        "event_type": "generation_completed",
        "platform_count": 2,
        "platforms": ["linkedin", "threads"],
        "tokens_used": 2200,
        "estimated_cost_cents": 5,
    })

    logs = db_service.get_usage_logs_by_user(user.id)

    assert len(logs) == 1
    assert logs[0].platforms == ["linkedin", "threads"]
    assert logs[0].estimated_cost_cents == 5


def test_upsert_subscription_inserts_then_updates(db_service, user):
    fields = {
        "user_id": user.id,
        "stripe_customer_id": "cus_123",
        "stripe_price_id": "price_pro",
        "tier": "pro",
        "status": "active",
    }
    created = db_service.upsert_subscription("sub_1", fields)
    updated = db_service.upsert_subscription("sub_1", {**fields, "status": "past_due"})

    assert created.id == updated.id
    assert db_service.get_subscription_by_stripe_id("sub_1").status == "past_due"


def test_webhook_event_is_recorded_once(db_service):
    # Arrange
    first = db_service.record_webhook_event("stripe", "evt_1", "invoice.payment_failed", {"id": "evt_1"})
    assert first is not None

    # Act: the first attempt failed, so the event may be retried.
    db_service.mark_webhook_processed("evt_1", datetime.now(timezone.utc), error_message="boom")
    retry = db_service.record_webhook_event("stripe", "evt_1", "invoice.payment_failed", {"id": "evt_1"})
    assert retry is not None
    assert retry.retry_count == 1
    assert retry.error_message == "boom"

    # Once processed, further deliveries are ignored.
    db_service.mark_webhook_processed("evt_1", datetime.now(timezone.utc))
    duplicate = db_service.record_webhook_event("stripe", "evt_1", "invoice.payment_failed", {"id": "evt_1"})

    # Assert
    assert duplicate is None
