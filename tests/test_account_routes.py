# /tests/test_account_routes.py

import json

import pytest
import stripe

from app.core.config import Settings
from app.services import billing_service

from .fakes import CLERK_WEBHOOK_SECRET, sign_svix

CLERK_SETTINGS = Settings(clerk_webhook_secret=CLERK_WEBHOOK_SECRET)


@pytest.fixture
def signed_in(make_user, api_state):
    user = make_user(generations_count_current_month=4, stripe_customer_id="cus_123")
    api_state["clerk_user_id"] = user.clerk_user_id
    return user


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_usage_endpoint(client, signed_in):
    response = client.get("/api/usage")

    assert response.status_code == 200
    payload = response.json()
    assert payload["used"] == 4
    assert payload["remaining"] == 6
    assert payload["percentageUsed"] == 40


def test_tier_endpoint_for_expired_trial(client, signed_in):
    response = client.get("/api/tier")

    assert response.status_code == 200
    payload = response.json()
    assert payload["trialExpired"] is True
    assert sorted(payload["availablePlatforms"]) == ["linkedin", "threads"]


def test_history_endpoint(client, signed_in, db_service):
    db_service.add_generation_record({
        "user_id": signed_in.id,
        "input_content": "z" * 150,
        "input_content_hash": "c" * 64,
        "selected_platforms": ["linkedin"],
        "selected_tone": "authority",
    })

    response = client.get("/api/history")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["generations"][0]["selectedTone"] == "authority"


def test_history_requires_session(client):
    assert client.get("/api/history").status_code == 401


def test_portal_without_customer(client, make_user, api_state):
    user = make_user(stripe_customer_id=None)
    api_state["clerk_user_id"] = user.clerk_user_id

    response = client.post("/api/billing/portal")

    assert response.status_code == 400
    assert response.json() == {"error": "No subscription found"}


def test_portal_returns_url(client, signed_in, mocker):
    mocker.patch.object(billing_service, "create_portal_session", return_value="https://billing.example/s/1")

    response = client.post("/api/billing/portal")

    assert response.status_code == 200
    assert response.json() == {"url": "https://billing.example/s/1"}


# --- Webhooks ---

def test_stripe_webhook_rejects_bad_signature(client, mocker):
    mocker.patch.object(
        billing_service,
        "construct_stripe_event",
        side_effect=stripe.SignatureVerificationError("bad", "t=1,v1=abc"),
    )

    response = client.post("/api/webhooks/stripe", content=b"{}", headers={"stripe-signature": "t=1,v1=abc"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid signature"}


def test_stripe_webhook_processes_event(client, make_user, db_service, mocker):
    user = make_user(stripe_customer_id="cus_999")
    event = {"id": "evt_9", "type": "invoice.payment_failed", "data": {"object": {"customer": "cus_999"}}}
    mocker.patch.object(billing_service, "construct_stripe_event", return_value=event)

    response = client.post("/api/webhooks/stripe", content=json.dumps(event), headers={"stripe-signature": "sig"})

    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert db_service.get_user_by_id(user.id).subscription_status == "past_due"


def test_stripe_webhook_reports_processing_failure(client, mocker):
    event = {"id": "evt_10", "type": "invoice.payment_failed", "data": {"object": {"customer": "cus_1"}}}
    mocker.patch.object(billing_service, "construct_stripe_event", return_value=event)
    mocker.patch.object(billing_service, "process_stripe_event", side_effect=RuntimeError("boom"))

    response = client.post("/api/webhooks/stripe", content=b"{}", headers={"stripe-signature": "sig"})

    assert response.status_code == 500
    assert response.json() == {"error": "Webhook processing failed"}


def test_clerk_webhook_requires_svix_headers(client):
    response = client.post("/api/webhooks/clerk", content=b"{}")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing svix headers"}


def test_clerk_webhook_creates_user(client, db_service, mocker):
    mocker.patch("app.services.account_service.get_settings", return_value=CLERK_SETTINGS)
    payload = json.dumps({
        "type": "user.created",
        "data": {
            "id": "user_hook",
            "primary_email_address_id": "idn_1",
            "email_addresses": [{"id": "idn_1", "email_address": "hook@example.com"}],
        },
    })

    response = client.post("/api/webhooks/clerk", content=payload, headers=sign_svix(payload, msg_id="msg_hook"))

    assert response.status_code == 200
    assert db_service.get_user_by_clerk_id("user_hook").email == "hook@example.com"


def test_clerk_webhook_rejects_bad_signature(client, mocker):
    mocker.patch("app.services.account_service.get_settings", return_value=CLERK_SETTINGS)
    payload = json.dumps({"type": "user.deleted", "data": {"id": "user_x"}})
    headers = sign_svix(payload)
    headers["svix-signature"] = "v1,AAAA"

    response = client.post("/api/webhooks/clerk", content=payload, headers=headers)

    assert response.status_code == 400
