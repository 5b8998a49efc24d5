# /app/routers/webhooks_router.py

"""
Inbound webhooks from the billing and identity providers.

Both endpoints read the raw body, since signature verification is computed
over the exact bytes received.
"""

import logging

import stripe
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from svix.webhooks import WebhookVerificationError

from ..services import account_service, billing_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/stripe", summary="Stripe Webhook")
async def stripe_webhook(request: Request, db: DatabaseService = Depends(get_db_service)):
    payload = await request.body()
    signature = request.headers.get("stripe-signature", "")

    try:
        event = billing_service.construct_stripe_event(payload, signature)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("Stripe signature verification failed: %s", e)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid signature"})

    try:
        billing_service.process_stripe_event(event, db)
    except Exception as e:
        logger.exception("Stripe webhook processing failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Webhook processing failed"},
        )
    return {"received": True}


@router.post("/clerk", summary="Clerk Webhook")
async def clerk_webhook(request: Request, db: DatabaseService = Depends(get_db_service)):
    svix_headers = {
        "svix-id": request.headers.get("svix-id"),
        "svix-timestamp": request.headers.get("svix-timestamp"),
        "svix-signature": request.headers.get("svix-signature"),
    }
    if not all(svix_headers.values()):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Missing svix headers"})

    payload = await request.body()
    try:
        event = account_service.verify_clerk_webhook(payload, svix_headers)
    except WebhookVerificationError as e:
        logger.warning("Clerk webhook verification failed: %s", e)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid signature"})

    try:
        account_service.process_clerk_event(event, svix_headers["svix-id"], db)
    except Exception as e:
        logger.exception("Clerk webhook processing failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Webhook processing failed"},
        )
    return {"received": True}
